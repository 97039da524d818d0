"""Ordered collection of split lines with spacing and range constraints."""

from __future__ import annotations

import logging
from typing import Callable, Iterator, List, Optional, Tuple

from .coordinates import clamp, pixel_y_to_ratio
from .exceptions import InvalidPresetError
from .settings import DEFAULT_SETTINGS, SplitterSettings
from .types import SplitLine

LOGGER = logging.getLogger("band_splitter.registry")

ChangeListener = Callable[["SplitLineRegistry"], None]


class SplitLineRegistry:
    """Own the split lines of one page and keep them sorted by position.

    Every mutation ends by calling ``on_change`` so that the owner can rebuild
    its segments. Lines moved with :meth:`move_line` keep their slot in the
    sequence until :meth:`end_drag` re-sorts them.
    """

    def __init__(
        self,
        *,
        settings: Optional[SplitterSettings] = None,
        on_change: Optional[ChangeListener] = None,
    ) -> None:
        self.settings = settings or DEFAULT_SETTINGS
        self.on_change = on_change
        self._lines: List[SplitLine] = []
        self._id_counter = 0

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def lines(self) -> Tuple[SplitLine, ...]:
        return tuple(SplitLine(line.id, line.position) for line in self._lines)

    @property
    def positions(self) -> List[float]:
        return [line.position for line in self._lines]

    @property
    def line_ids(self) -> List[int]:
        return [line.id for line in self._lines]

    def get(self, line_id: int) -> Optional[SplitLine]:
        for line in self._lines:
            if line.id == line_id:
                return SplitLine(line.id, line.position)
        return None

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[SplitLine]:
        return iter(self.lines)

    def __contains__(self, line_id: object) -> bool:
        return any(line.id == line_id for line in self._lines)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add_line(self, raw_position: float) -> SplitLine:
        """Insert a line near ``raw_position``.

        The position is clamped into the insert bounds. A line closer than the
        minimum spacing to an existing one is pushed ``nudge`` below it, or
        ``nudge`` above it when that would leave the insert bounds. Conflicts are
        resolved in a single pass, so crowded pages may still end up with lines
        closer than the minimum spacing.
        """

        line = self._insert(raw_position)
        self._notify()
        return SplitLine(line.id, line.position)

    def move_line(self, line_id: int, raw_position: float) -> Optional[SplitLine]:
        """Move a line during a drag without re-sorting the sequence."""

        line = self._find(line_id)
        if line is None:
            LOGGER.debug("Ignoring move of unknown split line %s", line_id)
            return None

        lower, upper = self.settings.drag_bounds
        line.position = clamp(raw_position, lower, upper)
        self._notify()
        return SplitLine(line.id, line.position)

    def move_line_to_pixel(
        self, line_id: int, y: float, height_pixels: float
    ) -> Optional[SplitLine]:
        """Move a line to the pixel offset ``y`` of a preview ``height_pixels`` tall."""

        return self.move_line(line_id, pixel_y_to_ratio(y, height_pixels))

    def end_drag(self) -> None:
        """Finish a drag: pull lines back into the insert bounds and re-sort."""

        lower, upper = self.settings.insert_bounds
        for line in self._lines:
            line.position = clamp(line.position, lower, upper)
        self._sort()
        self._notify()

    def delete_line(self, line_id: int) -> bool:
        line = self._find(line_id)
        if line is not None:
            self._lines.remove(line)
            LOGGER.debug("Deleted split line %s", line_id)
        self._notify()
        return line is not None

    def apply_preset(self, parts: int) -> None:
        """Replace all lines with ``parts - 1`` evenly spaced ones."""

        if isinstance(parts, bool) or not isinstance(parts, int) or parts < 1:
            raise InvalidPresetError(
                f"Preset segment count must be a positive integer, got {parts!r}"
            )

        self._lines = []
        for index in range(1, parts):
            self._insert(index / parts)
        LOGGER.debug("Applied %d-part preset", parts)
        self._notify()

    def clear(self) -> None:
        self._lines = []
        self._id_counter = 0
        self._notify()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _insert(self, raw_position: float) -> SplitLine:
        settings = self.settings
        lower, upper = settings.insert_bounds
        position = clamp(raw_position, lower, upper)

        for existing in self._lines:
            if abs(existing.position - position) < settings.min_spacing:
                position = existing.position + settings.nudge
                if position > upper:
                    position = existing.position - settings.nudge

        self._id_counter += 1
        line = SplitLine(id=self._id_counter, position=position)
        self._lines.append(line)
        self._sort()
        LOGGER.debug("Added split line %s at %.4f", line.id, position)
        return line

    def _find(self, line_id: int) -> Optional[SplitLine]:
        for line in self._lines:
            if line.id == line_id:
                return line
        return None

    def _sort(self) -> None:
        self._lines.sort(key=lambda line: line.position)

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)


__all__ = ["SplitLineRegistry", "ChangeListener"]
