"""pypdf backend implementation for PDF Band Splitter."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import List

from pypdf import PageObject, PdfReader, PdfWriter
from pypdf.errors import PdfReadError
from pypdf.generic import RectangleObject

from ..exceptions import EncryptedPDFError, InvalidPDFError
from ..types import CropRegion
from .base import BackendDocument, DocumentBackend

LOGGER = logging.getLogger("band_splitter.backends.pypdf")

PRODUCER = "PDF Band Splitter"


@dataclass
class PypdfDocument(BackendDocument):
    reader: PdfReader


@dataclass
class PypdfOutputDocument(BackendDocument):
    writer: PdfWriter = field(default_factory=PdfWriter)


@dataclass
class PendingPage:
    """A page copied from a source document, materialised when appended."""

    source: PageObject
    boxes: List[CropRegion] = field(default_factory=list)


class PypdfBackend(DocumentBackend):
    """Backend implementation that uses `pypdf` under the hood."""

    def load(self, data: bytes, password: str | None = None) -> PypdfDocument:
        try:
            reader = PdfReader(io.BytesIO(data))
        except PdfReadError as exc:
            raise InvalidPDFError(f"Corrupted or invalid PDF data. Error: {exc}") from exc
        except Exception as exc:
            raise InvalidPDFError(f"Unexpected error reading PDF. Error: {exc}") from exc

        if reader.is_encrypted:
            if password:
                if reader.decrypt(password) == 0:
                    raise EncryptedPDFError("Failed to decrypt PDF with supplied password.")
            else:
                raise EncryptedPDFError("PDF is encrypted. Supply a password to process this file.")

        try:
            num_pages = len(reader.pages)
        except Exception as exc:
            raise InvalidPDFError(f"Unable to read the page tree. Error: {exc}") from exc
        if num_pages == 0:
            raise InvalidPDFError("PDF has no pages.")

        return PypdfDocument(num_pages=num_pages, file_size=len(data), reader=reader)

    def create_empty(self) -> PypdfOutputDocument:
        return PypdfOutputDocument(num_pages=0, file_size=0)

    def page_box(self, document: PypdfDocument, index: int) -> CropRegion:
        box = document.reader.pages[index].mediabox
        return CropRegion(
            left=float(box.left),
            bottom=float(box.bottom),
            width=float(box.width),
            height=float(box.height),
        )

    def copy_page(self, source: PypdfDocument, target: PypdfOutputDocument, index: int) -> PendingPage:
        return PendingPage(source=source.reader.pages[index])

    def set_crop_region(self, page: PendingPage, region: CropRegion) -> None:
        page.boxes = [region]

    def append_page(self, target: PypdfOutputDocument, page: PendingPage) -> None:
        # add_page clones the source page, so each call yields an independent page dictionary
        added = target.writer.add_page(page.source)
        for region in page.boxes:
            rectangle = RectangleObject(region.as_rectangle())
            added.mediabox = rectangle
            added.cropbox = rectangle
            added.bleedbox = rectangle
            added.trimbox = rectangle
            added.artbox = rectangle
        target.num_pages = len(target.writer.pages)
        LOGGER.debug("Appended page %d", target.num_pages)

    def copy_metadata(
        self, source: PypdfDocument, target: PypdfOutputDocument, *, title_suffix: str = ""
    ) -> None:
        metadata_dict = {}
        metadata = source.reader.metadata

        if metadata and metadata.title:
            title = metadata.title
            if title_suffix:
                title = f"{title}{title_suffix}"
            metadata_dict['/Title'] = title
        if metadata and metadata.author:
            metadata_dict['/Author'] = metadata.author
        if metadata and metadata.subject:
            metadata_dict['/Subject'] = metadata.subject
        if metadata and metadata.creator:
            metadata_dict['/Creator'] = metadata.creator

        metadata_dict['/Producer'] = PRODUCER
        target.writer.add_metadata(metadata_dict)

    def add_bookmark(self, target: PypdfOutputDocument, title: str, page_index: int) -> None:
        target.writer.add_outline_item(title, page_index)

    def serialize(self, document: PypdfOutputDocument) -> bytes:
        buffer = io.BytesIO()
        document.writer.write(buffer)
        data = buffer.getvalue()
        document.file_size = len(data)
        return data
