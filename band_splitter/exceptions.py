"""
Custom exceptions for PDF Band Splitter.

Input errors are raised while loading a document, configuration errors before an
export is attempted, and :class:`CropBoundsError` signals an internal defect.
"""


class BandSplitterException(Exception):
    """Base exception for all PDF Band Splitter errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown band splitter error occurred."


class InvalidPDFError(BandSplitterException):
    """Raised when PDF data is invalid or corrupted."""

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF file."


class EncryptedPDFError(InvalidPDFError):
    """Raised when PDF is encrypted and cannot be processed."""

    @property
    def default_message(self) -> str:
        return "PDF is encrypted and cannot be processed without a password."


class DocumentNotLoadedError(BandSplitterException):
    """Raised when an operation needs a loaded document and none is present."""

    @property
    def default_message(self) -> str:
        return "No PDF document has been loaded."


class InvalidPositionError(BandSplitterException):
    """Raised when a split position lies outside the open interval (0, 1)."""

    @property
    def default_message(self) -> str:
        return "Split positions must lie strictly between 0 and 1."


class InvalidPresetError(BandSplitterException):
    """Raised when a preset segment count is not a positive integer."""

    @property
    def default_message(self) -> str:
        return "Preset segment count must be a positive integer."


class NoSegmentsError(BandSplitterException):
    """Raised when an export is requested without any segment."""

    @property
    def default_message(self) -> str:
        return "Please create at least one segment."


class DegenerateSegmentError(BandSplitterException):
    """Raised when a segment has no height, e.g. two lines dragged together."""

    @property
    def default_message(self) -> str:
        return "Every segment must have a non-zero height."


class ExportError(BandSplitterException):
    """Raised when the document backend fails while building the output."""

    @property
    def default_message(self) -> str:
        return "Failed to split PDF."


class ExportInProgressError(BandSplitterException):
    """Raised when an export is requested while another one is running."""

    @property
    def default_message(self) -> str:
        return "An export is already in progress."


class CropBoundsError(BandSplitterException, AssertionError):
    """Raised when a planned crop region falls outside the source page."""

    @property
    def default_message(self) -> str:
        return "Crop region lies outside the page bounds."


class SegmentNotFoundError(BandSplitterException):
    """Raised when a segment index does not exist."""

    @property
    def default_message(self) -> str:
        return "No segment with the given index."
