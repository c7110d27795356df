"""Runtime services shared by the buffer and reveal layers."""

from . import telemetry

__all__ = ["telemetry"]
