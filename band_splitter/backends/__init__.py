"""Backend abstractions for PDF Band Splitter."""

from .base import BackendDocument, DocumentBackend, RenderBackend
from .pymupdf_renderer import PyMuPDFRenderer
from .pypdf_backend import PypdfBackend

__all__ = [
    "BackendDocument",
    "DocumentBackend",
    "RenderBackend",
    "PypdfBackend",
    "PyMuPDFRenderer",
]
