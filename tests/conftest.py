from __future__ import annotations

import io
from pathlib import Path
from typing import Callable
import sys

import pytest
from pypdf import PdfWriter
from pypdf.generic import RectangleObject

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from band_splitter.session import EditSession  # noqa: E402
from band_splitter.settings import SplitterSettings  # noqa: E402

LETTER_WIDTH = 612
LETTER_HEIGHT = 792


def build_pdf(
    *,
    width: float = LETTER_WIDTH,
    height: float = LETTER_HEIGHT,
    pages: int = 1,
    title: str | None = "Sample",
    origin: tuple[float, float] | None = None,
    password: str | None = None,
) -> bytes:
    writer = PdfWriter()
    for _ in range(pages):
        page = writer.add_blank_page(width=width, height=height)
        if origin is not None:
            x, y = origin
            page.mediabox = RectangleObject((x, y, x + width, y + height))
    if title is not None:
        writer.add_metadata({"/Producer": "band-splitter-tests", "/Title": title})
    if password is not None:
        writer.encrypt(password)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture()
def pdf_bytes() -> bytes:
    return build_pdf()


@pytest.fixture()
def pdf_factory() -> Callable[..., bytes]:
    return build_pdf


@pytest.fixture()
def sample_pdf(tmp_path: Path, pdf_bytes: bytes) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    pdf_path.write_bytes(pdf_bytes)
    return pdf_path


@pytest.fixture()
def settings() -> SplitterSettings:
    return SplitterSettings()


@pytest.fixture()
def session(pdf_bytes: bytes, settings: SplitterSettings) -> EditSession:
    edit_session = EditSession(settings=settings)
    edit_session.load(pdf_bytes, filename="sample.pdf")
    return edit_session
