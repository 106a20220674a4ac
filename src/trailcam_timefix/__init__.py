"""Restore trail camera video timestamps from the date/time burned into the first frame."""

__version__ = "0.1.0"


class TimefixError(RuntimeError):
    """Base class for per-file processing errors."""


class FrameExtractionError(TimefixError):
    """The first frame of a video could not be extracted or read back."""


class OcrError(TimefixError):
    """Tesseract could not be run on the cropped frame."""
