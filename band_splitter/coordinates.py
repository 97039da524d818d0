"""Conversions between page ratios, preview pixels and PDF coordinates.

Ratios run from 0 at the top of the page to 1 at the bottom. PDF coordinates
put the origin at the bottom-left corner, so the vertical axis is inverted.
"""

from __future__ import annotations

from .types import CropRegion


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def ratio_to_pixel_y(ratio: float, height_pixels: float) -> float:
    return ratio * height_pixels


def pixel_y_to_ratio(y: float, height_pixels: float) -> float:
    """Convert a pixel offset in the preview to a ratio. The result is not clamped."""
    return y / height_pixels


def ratio_range_to_native_crop(
    start_ratio: float,
    end_ratio: float,
    width_native: float,
    height_native: float,
) -> CropRegion:
    """Map the band ``[start_ratio, end_ratio]`` to a full-width crop rectangle.

    The bottom edge of the band is ``end_ratio`` measured from the top, which
    is ``height_native * (1 - end_ratio)`` measured from the bottom.
    """

    return CropRegion(
        left=0.0,
        bottom=height_native * (1 - end_ratio),
        width=width_native,
        height=height_native * (end_ratio - start_ratio),
    )


__all__ = ["clamp", "ratio_to_pixel_y", "pixel_y_to_ratio", "ratio_range_to_native_crop"]
