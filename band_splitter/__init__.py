"""
PDF Band Splitter - cut one PDF page into horizontal bands.

Split lines are placed as ratios along the page height (0 = top, 1 = bottom).
The bands between them become the pages of a new PDF, each a full-width copy of
the source page cropped to its band.

Quick Start:
    >>> from band_splitter import EditSession
    >>> session = EditSession()
    >>> session.load_file('poster.pdf')          # three equal bands by default
    >>> session.add_line(0.8)
    >>> result = session.export()
    >>> open(result.filename, 'wb').write(result.data)

Main Classes:
    - EditSession: Editing context for one source document
    - SplitLineRegistry: Ordered split lines with spacing constraints

Functions:
    - derive_segments: Split positions to segments
    - plan_crops: Segments to crop regions
    - export_document: Crop regions to an output PDF

For CLI usage, use the 'band-splitter' command after installation.
"""

__version__ = "1.0.0"

# Core classes
from band_splitter.registry import SplitLineRegistry
from band_splitter.session import EditSession

# Model functions
from band_splitter.coordinates import (
    pixel_y_to_ratio,
    ratio_range_to_native_crop,
    ratio_to_pixel_y,
)
from band_splitter.crops import plan_crops
from band_splitter.exporter import export_document
from band_splitter.segments import SEGMENT_COLORS, derive_segments
from band_splitter.settings import SplitterSettings

# Data types
from band_splitter.types import CropRegion, ExportResult, PageGeometry, Segment, SplitLine

# Exceptions
from band_splitter.exceptions import (
    BandSplitterException,
    CropBoundsError,
    DegenerateSegmentError,
    DocumentNotLoadedError,
    EncryptedPDFError,
    ExportError,
    ExportInProgressError,
    InvalidPDFError,
    InvalidPositionError,
    InvalidPresetError,
    NoSegmentsError,
    SegmentNotFoundError,
)

__author__ = "PDF Band Splitter Contributors"
__license__ = "MIT"

__all__ = [
    # Main classes
    "EditSession",
    "SplitLineRegistry",
    "SplitterSettings",
    # Model functions
    "derive_segments",
    "plan_crops",
    "export_document",
    "ratio_to_pixel_y",
    "pixel_y_to_ratio",
    "ratio_range_to_native_crop",
    "SEGMENT_COLORS",
    # Data types
    "SplitLine",
    "Segment",
    "PageGeometry",
    "CropRegion",
    "ExportResult",
    # Exceptions
    "BandSplitterException",
    "InvalidPDFError",
    "EncryptedPDFError",
    "DocumentNotLoadedError",
    "InvalidPositionError",
    "InvalidPresetError",
    "NoSegmentsError",
    "DegenerateSegmentError",
    "SegmentNotFoundError",
    "ExportError",
    "ExportInProgressError",
    "CropBoundsError",
    # Version info
    "__version__",
]
