import pytest

from linebuffer.buffer import (
    Column,
    ContractError,
    Line,
    LineNumber,
    Location,
    LocationRange,
    OutOfBoundsError,
    Text,
)

SAMPLE = "First\n\nSecond\n\nThird"


def make_text(source: str = SAMPLE) -> Text:
    return Text.from_string(source)


def span(start: tuple[int, int], end: tuple[int, int]) -> LocationRange:
    return LocationRange(Location(*start), Location(*end))


@pytest.mark.parametrize(
    "source",
    [
        "",
        "a",
        "a\n",
        "\n\n",
        SAMPLE,
        "héllo\nwörld\n",
        "crlf\r\nkept\r\n",
        "trailing\n\n",
        "sep\u2028inside",
    ],
)
def test_from_string_round_trips(source: str) -> None:
    assert make_text(source).raw_text == source


def test_sample_layout() -> None:
    text = make_text()

    assert text.line_count == 5
    assert [line.value for line in text] == ["First\n", "\n", "Second\n", "\n", "Third"]
    assert text.full_range.end == Location(5, 6)
    assert text.start_index == LineNumber(1)
    assert text.end_index == LineNumber(6)


def test_trailing_newline_leaves_empty_last_line() -> None:
    text = make_text("ab\n")

    assert text.line_count == 2
    assert text.last_line == Line("")
    assert text.full_range == span((1, 1), (2, 1))


def test_empty_text_holds_one_empty_line() -> None:
    text = make_text("")

    assert text.is_empty
    assert text.line_count == 1
    assert text.full_range.is_empty
    assert text.full_range.start == Location(1, 1)
    assert Text() == text


def test_constructor_checks_terminators() -> None:
    with pytest.raises(ContractError):
        Text(["no newline", "last"])

    assert Text(["a\n", "b"]).raw_text == "a\nb"


def test_line_access_bounds() -> None:
    text = make_text()

    assert text[LineNumber(3)] == Line("Second\n")
    assert text[5] == Line("Third")
    with pytest.raises(OutOfBoundsError):
        text[LineNumber(6)]
    with pytest.raises(OutOfBoundsError):
        text[0]


def test_lines_handed_out_are_copies() -> None:
    text = make_text()

    text[3].pop_last()
    text.first_line.insert(Column(1), "x")
    for line in text:
        line.pop_last()

    assert text.raw_text == SAMPLE


def test_set_line() -> None:
    text = make_text()

    text[2] = "inserted\n"
    text[LineNumber(5)] = Line("Last")

    assert text.raw_text == "First\ninserted\nSecond\n\nLast"
    with pytest.raises(ContractError):
        text[2] = "no newline"
    with pytest.raises(OutOfBoundsError):
        text[6] = "x"


def test_slices() -> None:
    text = make_text()

    assert text[LineNumber(2):LineNumber(4)] == [Line("\n"), Line("Second\n")]
    assert text.slice(LineNumber(4)) == [Line("\n"), Line("Third")]
    assert text.slice(None, LineNumber(2)) == [Line("First\n")]
    assert text.slice(None, LineNumber(2), inclusive=True) == [Line("First\n"), Line("\n")]
    assert text.slice(LineNumber(5), LineNumber(5), inclusive=True) == [Line("Third")]
    assert text.slice(LineNumber(6)) == []

    with pytest.raises(OutOfBoundsError):
        text.slice(LineNumber(9))
    with pytest.raises(OutOfBoundsError):
        text.slice(LineNumber(7), LineNumber(6))
    with pytest.raises(OutOfBoundsError):
        text.slice(LineNumber(1), LineNumber(7))
    with pytest.raises(OutOfBoundsError):
        text.slice(LineNumber(1), LineNumber(6), inclusive=True)
    with pytest.raises(ContractError):
        text.slice(LineNumber(4), LineNumber(2))


def test_char_at_location() -> None:
    text = make_text()

    assert text.char_at(Location(3, 1)) == "S"
    assert text.char_at(Location(2, 1)) == "\n"
    assert text[Location(5, 5)] == "d"
    with pytest.raises(OutOfBoundsError):
        text.char_at(Location(5, 6))
    with pytest.raises(OutOfBoundsError):
        text.char_at(Location(6, 1))


def test_substring_same_and_cross_line() -> None:
    text = make_text()

    assert text.substring(span((3, 1), (3, 7))) == "Second"
    assert text.substring(span((1, 3), (3, 4))) == "rst\n\nSec"
    assert text.substring(span((1, 6), (2, 1))) == "\n"
    assert text[span((4, 1), (5, 6))] == "\nThird"
    assert text.substring(text.full_range) == SAMPLE


def test_substring_bounds() -> None:
    text = make_text()

    with pytest.raises(OutOfBoundsError):
        text.substring(span((1, 1), (5, 7)))
    with pytest.raises(OutOfBoundsError):
        text.substring(span((1, 8), (2, 1)))


def test_push_line() -> None:
    text = make_text("a\n")

    text.push_line("b\n")
    text.push_line(Line("c"))

    assert text.raw_text == "a\nb\nc"
    with pytest.raises(ContractError):
        text.push_line("d")


def test_push_line_into_empty_text() -> None:
    text = Text()

    text.push_line("only")

    assert text.line_count == 1
    assert text.raw_text == "only"


def test_edits_keep_from_string_shape() -> None:
    text = Text()
    text.push_line("x\n")

    assert text == Text.from_string(text.raw_text)
    assert text.full_range.end == Location(2, 1)

    text = make_text()
    text.remove_line(5)

    assert text == Text.from_string("First\n\nSecond\n\n")
    assert text.last_line == Line("")

    text[5] = "Fifth\n"

    assert text.line_count == 6
    assert text == Text.from_string(text.raw_text)
    assert Text(["a\n"]) == Text.from_string("a\n")


def test_insert_line() -> None:
    text = make_text()

    text.insert_line("Zero\n", before=LineNumber(1))
    text.insert_line(Line("Middle\n"), before=4)

    assert text[1] == Line("Zero\n")
    assert text[4] == Line("Middle\n")
    assert text.line_count == 7
    with pytest.raises(ContractError):
        text.insert_line("bare", before=1)
    with pytest.raises(OutOfBoundsError):
        text.insert_line("x\n", before=9)


def test_insert_line_at_end_appends() -> None:
    text = make_text("a\nb\n")

    text.insert_line("c", before=text.end_index)

    assert text.raw_text == "a\nb\nc"


def test_remove_line() -> None:
    text = make_text()

    removed = text.remove_line(LineNumber(1))

    assert removed == Line("First\n")
    assert text.raw_text == "\nSecond\n\nThird"
    with pytest.raises(OutOfBoundsError):
        text.remove_line(5)


def test_remove_only_line_keeps_placeholder() -> None:
    text = make_text("solo")

    text.remove_line(1)

    assert text.is_empty
    assert text.line_count == 1


def test_edit_line_writes_back() -> None:
    text = make_text()

    with text.edit_line(LineNumber(3)) as line:
        line.insert(Column(1), ">")

    assert text[3] == Line(">Second\n")


def test_edit_line_discards_on_error() -> None:
    text = make_text()

    with pytest.raises(RuntimeError):
        with text.edit_line(3) as line:
            line.insert(Column(1), ">")
            raise RuntimeError("abort")

    assert text.raw_text == SAMPLE


def test_version_tracks_edits() -> None:
    text = make_text()
    assert text.version == 0

    with pytest.raises(ContractError):
        text.push_line("!")
    assert text.version == 0

    text[5] = "Third\n"
    text.push_line("Fourth")
    text.remove_line(1)

    assert text.version == 3
