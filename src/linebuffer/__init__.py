"""Line-oriented text buffer with byte-accurate locations and incremental reveal."""

__all__ = [
    "buffer",
    "reveal",
    "runtime",
]

__version__ = "0.1.0"
