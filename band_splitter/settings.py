"""Runtime settings for PDF Band Splitter."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Tuple

LOGGER = logging.getLogger("band_splitter.settings")

_PREVIEW_SCALE_ENV = "BAND_SPLITTER_PREVIEW_SCALE"
_DEFAULT_PARTS_ENV = "BAND_SPLITTER_DEFAULT_PARTS"
_OUTPUT_SUFFIX_ENV = "BAND_SPLITTER_OUTPUT_SUFFIX"


@dataclass(frozen=True)
class SplitterSettings:
    """Constraints and defaults used by the registry, the session and the CLI."""

    min_spacing: float = 0.05
    insert_bounds: Tuple[float, float] = (0.05, 0.95)
    drag_bounds: Tuple[float, float] = (0.02, 0.98)
    nudge: float = 0.10
    preview_scale: float = 1.5
    default_parts: int = 3
    output_suffix: str = "-split"

    @classmethod
    def from_env(cls) -> "SplitterSettings":
        settings = cls()

        scale = os.getenv(_PREVIEW_SCALE_ENV)
        if scale is not None:
            try:
                value = float(scale)
            except ValueError:
                LOGGER.warning("Ignoring invalid %s=%r", _PREVIEW_SCALE_ENV, scale)
            else:
                if value > 0:
                    settings = replace(settings, preview_scale=value)
                else:
                    LOGGER.warning("Ignoring non-positive %s=%r", _PREVIEW_SCALE_ENV, scale)

        parts = os.getenv(_DEFAULT_PARTS_ENV)
        if parts is not None:
            if parts.strip().isdigit() and int(parts) >= 1:
                settings = replace(settings, default_parts=int(parts))
            else:
                LOGGER.warning("Ignoring invalid %s=%r", _DEFAULT_PARTS_ENV, parts)

        suffix = os.getenv(_OUTPUT_SUFFIX_ENV)
        if suffix is not None:
            settings = replace(settings, output_suffix=suffix)

        return settings


DEFAULT_SETTINGS = SplitterSettings()

__all__ = ["SplitterSettings", "DEFAULT_SETTINGS"]
