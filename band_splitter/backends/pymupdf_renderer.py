"""PyMuPDF rendering backend used for page sizes and PNG previews."""

from __future__ import annotations

import logging
from typing import Tuple

import fitz

from ..exceptions import InvalidPDFError
from .base import RenderBackend

LOGGER = logging.getLogger("band_splitter.backends.pymupdf")


class PyMuPDFRenderer(RenderBackend):
    """Render pages with PyMuPDF (``fitz``)."""

    def decode(self, data: bytes) -> fitz.Document:
        try:
            document = fitz.open(stream=data, filetype="pdf")
        except Exception as exc:
            raise InvalidPDFError(f"Unable to render PDF. Error: {exc}") from exc
        if document.page_count == 0:
            document.close()
            raise InvalidPDFError("PDF has no pages.")
        return document

    def get_page(self, handle: fitz.Document, index: int) -> fitz.Page:
        return handle.load_page(index)

    def get_size(self, page: fitz.Page, scale: float) -> Tuple[float, float]:
        rect = page.rect
        return rect.width * scale, rect.height * scale

    def render(self, page: fitz.Page, scale: float) -> bytes:
        pixmap = page.get_pixmap(matrix=fitz.Matrix(scale, scale))
        LOGGER.debug("Rendered page %s at %sx%s", page.number, pixmap.width, pixmap.height)
        return pixmap.tobytes("png")

    def close(self, handle: fitz.Document) -> None:
        handle.close()
