"""Derive page segments from a set of split positions."""

from __future__ import annotations

from typing import List, Mapping, Optional, Sequence

from .exceptions import InvalidPositionError
from .types import Segment, SegmentKey

SEGMENT_COLORS = (
    "rgba(90, 200, 250, 0.2)",
    "rgba(0, 122, 255, 0.2)",
    "rgba(52, 199, 89, 0.2)",
    "rgba(255, 149, 0, 0.2)",
    "rgba(175, 82, 222, 0.2)",
    "rgba(255, 59, 48, 0.2)",
)


def default_segment_name(index: int) -> str:
    return f"Part {index}"


def derive_segments(
    positions: Sequence[float],
    *,
    line_ids: Optional[Sequence[int]] = None,
    names: Optional[Mapping[SegmentKey, str]] = None,
    palette: Sequence[str] = SEGMENT_COLORS,
) -> List[Segment]:
    """Build the segments that tile ``[0, 1]`` for the given split positions.

    Args:
        positions: Split positions, in any order, each strictly inside ``(0, 1)``.
        line_ids: Ids of the lines at ``positions``, used to key each segment by
            its bounding lines. Without ids every key is ``(None, None)``.
        names: Name overrides keyed by segment key.
        palette: Colours cycled by segment index.

    Returns:
        ``len(positions) + 1`` segments ordered from the top of the page.
    """

    for position in positions:
        if not 0.0 < position < 1.0:
            raise InvalidPositionError(
                f"Split position {position!r} must lie strictly between 0 and 1."
            )
    if line_ids is not None and len(line_ids) != len(positions):
        raise ValueError("line_ids must have the same length as positions")

    ids: List[Optional[int]] = list(line_ids) if line_ids is not None else [None] * len(positions)
    ordered = sorted(zip(positions, ids), key=lambda item: item[0])

    bounds = [0.0] + [position for position, _ in ordered] + [1.0]
    bound_ids: List[Optional[int]] = [None] + [line_id for _, line_id in ordered] + [None]

    segments: List[Segment] = []
    for offset in range(len(bounds) - 1):
        index = offset + 1
        key: SegmentKey = (bound_ids[offset], bound_ids[offset + 1])
        name = default_segment_name(index)
        if names and line_ids is not None and key in names:
            name = names[key]
        segments.append(
            Segment(
                index=index,
                name=name,
                start_ratio=bounds[offset],
                end_ratio=bounds[offset + 1],
                color=palette[(index - 1) % len(palette)],
                key=key,
            )
        )
    return segments


def segment_height_percent(segment: Segment) -> float:
    """Height of ``segment`` as a percentage of the page, rounded to one decimal."""
    return round(segment.height_ratio * 100, 1)


__all__ = ["SEGMENT_COLORS", "default_segment_name", "derive_segments", "segment_height_percent"]
