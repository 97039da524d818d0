"""Crop regions for exporting each segment as its own page."""

from __future__ import annotations

import logging
from typing import List, Sequence

from .coordinates import ratio_range_to_native_crop
from .exceptions import CropBoundsError
from .types import CropRegion, PageGeometry, Segment

LOGGER = logging.getLogger("band_splitter.crops")

CROP_TOLERANCE = 1e-6


def plan_crop(segment: Segment, geometry: PageGeometry) -> CropRegion:
    region = ratio_range_to_native_crop(
        segment.start_ratio,
        segment.end_ratio,
        geometry.width_native,
        geometry.height_native,
    )
    if geometry.origin_x or geometry.origin_y:
        region = CropRegion(
            left=region.left + geometry.origin_x,
            bottom=region.bottom + geometry.origin_y,
            width=region.width,
            height=region.height,
        )
    _verify_region(segment, region, geometry)
    return region


def plan_crops(segments: Sequence[Segment], geometry: PageGeometry) -> List[CropRegion]:
    """Compute one crop region per segment, in segment order."""

    regions = [plan_crop(segment, geometry) for segment in segments]
    LOGGER.debug("Planned %d crop region(s) for a %.1fx%.1f page",
                 len(regions), geometry.width_native, geometry.height_native)
    return regions


def _verify_region(segment: Segment, region: CropRegion, geometry: PageGeometry) -> None:
    page_bottom = geometry.origin_y
    page_top = geometry.origin_y + geometry.height_native

    if region.height <= 0:
        raise CropBoundsError(
            f"Segment {segment.index} maps to a crop of height {region.height}."
        )
    if region.bottom < page_bottom - CROP_TOLERANCE or region.top > page_top + CROP_TOLERANCE:
        raise CropBoundsError(
            f"Segment {segment.index} crop [{region.bottom}, {region.top}] lies outside "
            f"the page [{page_bottom}, {page_top}]."
        )


__all__ = ["CROP_TOLERANCE", "plan_crop", "plan_crops"]
