"""Backend protocols for PDF mutation and preview rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Tuple

from ..types import CropRegion


@dataclass
class BackendDocument:
    """Represents a loaded or newly created PDF document."""

    num_pages: int
    file_size: int


class DocumentBackend(Protocol):
    """Protocol for the operations an export needs from a PDF library."""

    def load(self, data: bytes, password: str | None = None) -> BackendDocument:
        """Parse ``data`` and return a document wrapper."""

    def create_empty(self) -> BackendDocument:
        """Return a new document without pages."""

    def page_box(self, document: BackendDocument, index: int) -> CropRegion:
        """Return the media box of page ``index``."""

    def copy_page(self, source: BackendDocument, target: BackendDocument, index: int) -> object:
        """Return a fresh copy of page ``index`` of ``source`` owned by ``target``."""

    def set_crop_region(self, page: object, region: CropRegion) -> None:
        """Restrict every page box of ``page`` to ``region``."""

    def append_page(self, target: BackendDocument, page: object) -> None:
        """Append ``page`` as the last page of ``target``."""

    def copy_metadata(
        self, source: BackendDocument, target: BackendDocument, *, title_suffix: str = ""
    ) -> None:
        """Copy the document information of ``source`` into ``target``."""

    def add_bookmark(self, target: BackendDocument, title: str, page_index: int) -> None:
        """Add a top-level outline item pointing at ``page_index``."""

    def serialize(self, document: BackendDocument) -> bytes:
        """Return ``document`` as PDF bytes."""


class RenderBackend(Protocol):
    """Protocol for the rendering engine that produces the page preview."""

    def decode(self, data: bytes) -> object:
        """Parse ``data`` and return a document handle."""

    def get_page(self, handle: object, index: int) -> object:
        """Return page ``index`` of ``handle``."""

    def get_size(self, page: object, scale: float) -> Tuple[float, float]:
        """Return ``(width, height)`` of ``page`` rendered at ``scale``."""

    def render(self, page: object, scale: float) -> bytes:
        """Render ``page`` at ``scale`` and return PNG bytes."""

    def close(self, handle: object) -> None:
        """Release the resources held by ``handle``."""
