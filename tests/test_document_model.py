import pytest

from linebuffer.buffer import Location, LocationRange, OutOfBoundsError, Text
from linebuffer.reveal import DocumentModel, TextElement, partition_by_paragraph

SAMPLE = "First\n\nSecond\n\nThird"


def make_model(source: str = SAMPLE, **kwargs) -> DocumentModel:
    return DocumentModel(source, **kwargs)


def span(start: tuple[int, int], end: tuple[int, int]) -> LocationRange:
    return LocationRange(Location(*start), Location(*end))


def test_model_wraps_string_and_text() -> None:
    from_string = make_model()
    from_text = DocumentModel(Text.from_string(SAMPLE))

    assert from_string.document_range == span((1, 1), (5, 6))
    assert from_text.document_range == from_string.document_range
    assert from_string.current_end_location == Location(1, 1)


def test_step_location_advances_cursor() -> None:
    model = make_model()

    assert model.step_location() == Location(1, 2)
    assert model.current_end_location == Location(1, 2)
    assert model.selection == LocationRange.empty_at(Location(1, 2))
    assert not model.in_transaction


def test_reveal_remaining() -> None:
    model = make_model()
    model.step_location()

    reached = model.reveal_remaining()

    assert len(reached) == 19
    assert reached[-1] == model.document_range.end
    assert model.reveal_remaining() == []


def test_reveal_remaining_limit() -> None:
    model = make_model()

    assert model.reveal_remaining(limit=6)[-1] == Location(2, 1)


def test_text_elements_filters_by_overlap() -> None:
    model = make_model()
    model.reveal_remaining()

    assert len(model.text_elements()) == 5
    assert model.text_elements(span((3, 2), (3, 3))) == [
        TextElement(span((3, 1), (4, 1)), "Second\n")
    ]
    assert [element.content for element in model.text_elements(span((1, 3), (3, 1)))] == [
        "First\n",
        "\n",
    ]
    touching = model.text_elements(LocationRange.empty_at(Location(3, 1)))
    assert [element.content for element in touching] == ["\n", "Second\n"]


def test_text_elements_only_covers_revealed_part() -> None:
    model = make_model(partitioner=partition_by_paragraph)
    model.reveal_remaining(limit=9)

    elements = model.text_elements()

    assert [element.content for element in elements] == ["First\n\n", "Se"]
    assert not elements[-1].complete


def test_enumerate_text_elements_stops_when_block_declines() -> None:
    model = make_model()
    model.reveal_remaining()
    seen = []

    def collect(element: TextElement) -> bool:
        seen.append(element.content)
        return len(seen) < 2

    last_end = model.enumerate_text_elements(Location(2, 1), collect)

    assert seen == ["\n", "Second\n"]
    assert last_end == Location(4, 1)


def test_enumerate_text_elements_without_matches() -> None:
    model = make_model()

    assert model.enumerate_text_elements(Location(1, 1), lambda element: True) is None
    with pytest.raises(OutOfBoundsError):
        model.enumerate_text_elements(Location(9, 1), lambda element: True)


def test_edit_in_transaction_rebases_reveal() -> None:
    model = make_model()
    model.reveal_remaining()

    with model.editing_transaction("drop-last") as transaction:
        assert model.in_transaction
        model.text.remove_line(5)
        assert transaction.changed

    assert model.current_end_location == Location(5, 1)
    assert model.document_range.end == Location(5, 1)
    elements = model.text_elements()
    assert len(elements) == 4
    assert all(element.complete for element in elements)


def test_nested_transactions_rebase_once(monkeypatch: pytest.MonkeyPatch) -> None:
    model = make_model()
    calls = []
    monkeypatch.setattr(model.reveal, "rebase", lambda: calls.append(model.text.version))

    with model.editing_transaction("outer"):
        with model.editing_transaction("inner"):
            model.text.remove_line(1)
        assert calls == []
        model.text.remove_line(1)

    assert calls == [2]


def test_transaction_without_edit_keeps_partition() -> None:
    model = make_model()
    partition = model.reveal.partition

    with model.editing_transaction():
        pass

    assert model.reveal.partition is partition


def test_failed_transaction_still_closes() -> None:
    model = make_model()
    model.reveal_remaining()

    with pytest.raises(RuntimeError):
        with model.editing_transaction("broken"):
            model.text.remove_line(5)
            raise RuntimeError("layout failed")

    assert not model.in_transaction
    assert model.current_end_location == Location(5, 1)


def test_offset_delegates_to_text() -> None:
    model = make_model()

    assert model.offset(Location(1, 1), Location(2, 1)) == 6
    assert model.offset(Location(2, 1), Location(1, 1)) == -6
