"""Assemble the output PDF, one cropped copy of the source page per segment."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .backends.base import DocumentBackend
from .backends.pypdf_backend import PypdfBackend
from .exceptions import BandSplitterException, ExportError, NoSegmentsError
from .types import CropRegion, Segment

LOGGER = logging.getLogger("band_splitter.export")

SOURCE_PAGE_INDEX = 0
TITLE_SUFFIX = " - Split"


def export_document(
    source_bytes: bytes,
    segments: Sequence[Segment],
    crop_plan: Sequence[CropRegion],
    *,
    backend: Optional[DocumentBackend] = None,
    password: Optional[str] = None,
    metadata: bool = True,
    bookmarks: bool = True,
) -> bytes:
    """Build a PDF whose pages are the segments of the first source page.

    Args:
        source_bytes: The source PDF. It is read, never modified.
        segments: Segments to export; output page order follows ``segment.index``.
        crop_plan: One crop region per segment, in the same order as ``segments``.
        backend: Document backend, :class:`PypdfBackend` by default.
        password: Password for encrypted sources.
        metadata: Copy the source document information to the output.
        bookmarks: Add one outline item per page titled with the segment name.

    Returns:
        The serialized output PDF.

    Raises:
        NoSegmentsError: ``segments`` is empty.
        InvalidPDFError: ``source_bytes`` cannot be parsed.
        ExportError: The backend failed while building or writing the output.
    """

    if not segments:
        raise NoSegmentsError()
    if len(crop_plan) != len(segments):
        raise ExportError(
            f"Crop plan has {len(crop_plan)} region(s) for {len(segments)} segment(s)."
        )

    backend = backend or PypdfBackend()
    source = backend.load(source_bytes, password=password)

    ordered = sorted(zip(segments, crop_plan), key=lambda item: item[0].index)

    try:
        output = backend.create_empty()
        for segment, region in ordered:
            LOGGER.debug(
                "Cropping segment %s (%s) to bottom=%.2f height=%.2f",
                segment.index, segment.name, region.bottom, region.height,
            )
            page = backend.copy_page(source, output, SOURCE_PAGE_INDEX)
            backend.set_crop_region(page, region)
            backend.append_page(output, page)

        if metadata:
            try:
                backend.copy_metadata(source, output, title_suffix=TITLE_SUFFIX)
            except Exception as exc:
                LOGGER.warning("Failed to copy document metadata: %s", exc)

        if bookmarks:
            for page_index, (segment, _) in enumerate(ordered):
                try:
                    backend.add_bookmark(output, segment.name, page_index)
                except Exception as exc:
                    LOGGER.warning("Failed to add bookmark '%s': %s", segment.name, exc)

        data = backend.serialize(output)
    except BandSplitterException:
        raise
    except Exception as exc:
        LOGGER.error("Failed to split PDF: %s", exc)
        raise ExportError(f"Failed to split PDF: {exc}") from exc

    LOGGER.info("Exported %d segment(s) into %d bytes", len(ordered), len(data))
    return data


__all__ = ["export_document", "SOURCE_PAGE_INDEX"]
