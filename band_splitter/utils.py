"""Helper functions shared by the CLI and the public API."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List

from .exceptions import InvalidPositionError


def parse_positions(spec: str) -> List[float]:
    """
    Parse a comma-separated list of split positions.

    Each token is either a ratio (``0.25``) or a percentage (``25%``).

    Args:
        spec: Position list, e.g. ``"0.25, 50%, 0.8"``

    Returns:
        Positions as ratios, in the given order
    """
    if not spec or not spec.strip():
        raise InvalidPositionError("Position list cannot be empty")

    positions: List[float] = []
    for token in spec.split(","):
        token = token.strip()
        match = re.match(r"^(\d+(?:\.\d*)?|\.\d+)(%?)$", token)
        if not match:
            raise InvalidPositionError(
                f"Invalid split position: '{token}'. Expected a ratio like 0.25 or a percentage like 25%."
            )
        value = float(match.group(1))
        if match.group(2):
            value /= 100.0
        if not 0.0 < value < 1.0:
            raise InvalidPositionError(
                f"Split position '{token}' must lie strictly inside the page."
            )
        positions.append(value)

    return positions


def parse_segment_names(entries: Iterable[str]) -> Dict[int, str]:
    """Parse ``INDEX=NAME`` entries into a mapping of 1-based segment index to name."""

    names: Dict[int, str] = {}
    for entry in entries:
        index, sep, name = entry.partition("=")
        if not sep or not index.strip().isdigit() or int(index) < 1:
            raise ValueError(f"Invalid segment name '{entry}'. Expected INDEX=NAME, e.g. 1=Header.")
        names[int(index)] = name.strip()
    return names


def format_percent(ratio: float) -> str:
    return f"{round(ratio * 100)}%"


def format_file_size(size_bytes: float) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB", "500 KB")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"
