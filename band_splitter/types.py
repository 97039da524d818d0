"""
Type definitions and dataclasses for PDF Band Splitter.

This module defines data structures shared by the segmentation model,
the crop planner and the export backends.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

SegmentKey = Tuple[Optional[int], Optional[int]]


@dataclass
class SplitLine:
    """
    A horizontal cut across the page.

    Attributes:
        id: Unique identifier assigned by the registry
        position: Ratio along the vertical axis, 0 = top, 1 = bottom
    """
    id: int
    position: float


@dataclass(frozen=True)
class Segment:
    """
    A contiguous band of the page between two split positions.

    Attributes:
        index: 1-based position of the segment, recomputed on every rebuild
        name: Display name, ``"Part {index}"`` unless overridden
        start_ratio: Top edge as a ratio
        end_ratio: Bottom edge as a ratio
        color: Display colour taken from the segment palette
        key: Ids of the bounding split lines, ``None`` for a page edge
    """
    index: int
    name: str
    start_ratio: float
    end_ratio: float
    color: str
    key: SegmentKey = (None, None)

    @property
    def height_ratio(self) -> float:
        return self.end_ratio - self.start_ratio


@dataclass(frozen=True)
class PageGeometry:
    """
    Size of the source page in native units and in preview pixels.

    Attributes:
        width_native: Page width in PDF points
        height_native: Page height in PDF points
        height_pixels: Height of the rendered preview
        origin_x: Left edge of the media box
        origin_y: Bottom edge of the media box
    """
    width_native: float
    height_native: float
    height_pixels: float
    origin_x: float = 0.0
    origin_y: float = 0.0


@dataclass(frozen=True)
class CropRegion:
    """Rectangle in PDF coordinates (origin at the bottom-left)."""
    left: float
    bottom: float
    width: float
    height: float

    @property
    def top(self) -> float:
        return self.bottom + self.height

    @property
    def right(self) -> float:
        return self.left + self.width

    def as_rectangle(self) -> Tuple[float, float, float, float]:
        """Return ``(left, bottom, right, top)`` as used by PDF box entries."""
        return (self.left, self.bottom, self.right, self.top)


@dataclass
class ExportResult:
    """
    Result of an export.

    Attributes:
        data: Serialized output PDF
        page_count: Number of pages written, one per segment
        filename: Suggested file name, ``{base}-split.pdf``
    """
    data: bytes
    page_count: int
    filename: str

    def __str__(self) -> str:
        return f"ExportResult(filename='{self.filename}', pages={self.page_count})"
