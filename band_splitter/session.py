"""Per-document editing state tying the registry, segments and export together."""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .backends.base import DocumentBackend, RenderBackend
from .backends.pypdf_backend import PypdfBackend
from .crops import plan_crops
from .exceptions import (
    BandSplitterException,
    DegenerateSegmentError,
    DocumentNotLoadedError,
    ExportInProgressError,
    NoSegmentsError,
    SegmentNotFoundError,
)
from .exporter import SOURCE_PAGE_INDEX, export_document
from .registry import SplitLineRegistry
from .segments import derive_segments
from .settings import SplitterSettings
from .types import ExportResult, PageGeometry, Segment, SegmentKey, SplitLine

LOGGER = logging.getLogger("band_splitter.session")

_PDF_EXTENSION = re.compile(r"\.pdf$", re.IGNORECASE)


class EditSession:
    """Editing context for one source document.

    The session owns the split-line registry and re-derives :attr:`segments`
    whenever the registry changes. Segment names set with
    :meth:`rename_segment` are keyed by the ids of the lines bounding the
    segment, so they follow the segment while its lines are dragged and are
    dropped once one of those lines is deleted.
    """

    def __init__(
        self,
        *,
        backend: Optional[DocumentBackend] = None,
        renderer: Optional[RenderBackend] = None,
        settings: Optional[SplitterSettings] = None,
        password: Optional[str] = None,
    ) -> None:
        self.backend: DocumentBackend = backend or PypdfBackend()
        self.renderer = renderer
        self.settings = settings or SplitterSettings.from_env()
        self.password = password

        self.source_bytes: Optional[bytes] = None
        self.base_name = ""
        self.geometry: Optional[PageGeometry] = None
        self.num_pages = 0

        self._names: Dict[SegmentKey, str] = {}
        self._segments: List[Segment] = derive_segments([])
        self._export_in_flight = False
        self.registry = SplitLineRegistry(settings=self.settings, on_change=self._rebuild)

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------
    @property
    def is_loaded(self) -> bool:
        return self.source_bytes is not None

    def load(self, data: bytes, filename: str = "document.pdf") -> PageGeometry:
        """Load ``data`` as the source document and apply the default preset.

        The current document, lines and names are kept if ``data`` cannot be
        parsed.
        """

        document = self.backend.load(data, password=self.password)
        box = self.backend.page_box(document, SOURCE_PAGE_INDEX)
        height_pixels = box.height * self.settings.preview_scale
        if self.renderer is not None:
            handle = self.renderer.decode(data)
            try:
                page = self.renderer.get_page(handle, SOURCE_PAGE_INDEX)
                _, height_pixels = self.renderer.get_size(page, self.settings.preview_scale)
            finally:
                self.renderer.close(handle)

        if document.num_pages > 1:
            LOGGER.warning(
                "%s has %d pages; only the first page is split", filename, document.num_pages
            )

        self.source_bytes = bytes(data)
        self.base_name = _PDF_EXTENSION.sub("", Path(filename).name)
        self.num_pages = document.num_pages
        self.geometry = PageGeometry(
            width_native=box.width,
            height_native=box.height,
            height_pixels=height_pixels,
            origin_x=box.left,
            origin_y=box.bottom,
        )
        self.clear_lines()
        self.registry.apply_preset(self.settings.default_parts)

        LOGGER.info(
            "Loaded %s (%.1fx%.1f pt, %d page(s))",
            filename, box.width, box.height, document.num_pages,
        )
        return self.geometry

    def load_file(self, path: str | Path) -> PageGeometry:
        path = Path(path)
        return self.load(path.read_bytes(), filename=path.name)

    def render_preview(self) -> bytes:
        """Render the source page at the preview scale and return PNG bytes."""

        if self.renderer is None:
            raise BandSplitterException("No renderer configured for previews.")
        if not self.is_loaded:
            raise DocumentNotLoadedError()

        handle = self.renderer.decode(self.source_bytes)
        try:
            page = self.renderer.get_page(handle, SOURCE_PAGE_INDEX)
            return self.renderer.render(page, self.settings.preview_scale)
        finally:
            self.renderer.close(handle)

    def reset(self) -> None:
        self.source_bytes = None
        self.base_name = ""
        self.geometry = None
        self.num_pages = 0
        self.clear_lines()

    @property
    def output_filename(self) -> str:
        return f"{self.base_name or 'document'}{self.settings.output_suffix}.pdf"

    # ------------------------------------------------------------------
    # Split lines
    # ------------------------------------------------------------------
    @property
    def lines(self) -> Tuple[SplitLine, ...]:
        return self.registry.lines

    def add_line(self, position: float = 0.5) -> SplitLine:
        return self.registry.add_line(position)

    def move_line(self, line_id: int, position: float) -> Optional[SplitLine]:
        return self.registry.move_line(line_id, position)

    def move_line_to_pixel(self, line_id: int, y: float) -> Optional[SplitLine]:
        geometry = self._require_geometry()
        return self.registry.move_line_to_pixel(line_id, y, geometry.height_pixels)

    def end_drag(self) -> None:
        self.registry.end_drag()

    def delete_line(self, line_id: int) -> bool:
        return self.registry.delete_line(line_id)

    def apply_preset(self, parts: int) -> None:
        self.registry.apply_preset(parts)

    def clear_lines(self) -> None:
        """Remove every split line and forget all segment names."""

        self._names = {}
        self.registry.clear()

    # ------------------------------------------------------------------
    # Segments
    # ------------------------------------------------------------------
    @property
    def segments(self) -> List[Segment]:
        return list(self._segments)

    def rename_segment(self, index: int, name: str) -> Segment:
        """Rename the segment at 1-based ``index``. A blank name restores the default."""

        if not 1 <= index <= len(self._segments):
            raise SegmentNotFoundError(f"No segment with index {index}.")
        segment = self._segments[index - 1]

        name = name.strip()
        if name:
            self._names[segment.key] = name
        else:
            self._names.pop(segment.key, None)
        self._rebuild(self.registry)
        return self._segments[index - 1]

    def _rebuild(self, registry: SplitLineRegistry) -> None:
        self._segments = derive_segments(
            registry.positions, line_ids=registry.line_ids, names=self._names
        )
        # a name lives only as long as the segment it was given to
        current = {segment.key for segment in self._segments}
        self._names = {key: value for key, value in self._names.items() if key in current}

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    @property
    def export_in_flight(self) -> bool:
        return self._export_in_flight

    def export(self) -> ExportResult:
        """Export every segment as one page of a new PDF.

        Raises:
            DocumentNotLoadedError: No document has been loaded.
            ExportInProgressError: Another export of this session is running.
            NoSegmentsError: There is nothing to export.
            DegenerateSegmentError: A segment has no height.
            ExportError: The document backend failed.
        """

        self._begin_export()
        try:
            return self._run_export()
        finally:
            self._export_in_flight = False

    async def export_async(self) -> ExportResult:
        """Run :meth:`export` in a worker thread; concurrent calls are rejected."""

        self._begin_export()
        try:
            return await asyncio.to_thread(self._run_export)
        finally:
            self._export_in_flight = False

    def _begin_export(self) -> None:
        if self._export_in_flight:
            raise ExportInProgressError()
        if not self.is_loaded:
            raise DocumentNotLoadedError()
        self._export_in_flight = True

    def _run_export(self) -> ExportResult:
        geometry = self._require_geometry()
        segments = self.segments
        if not segments:
            raise NoSegmentsError()
        for segment in segments:
            if segment.end_ratio <= segment.start_ratio:
                raise DegenerateSegmentError(
                    f"{segment.name} has no height; move its split lines apart."
                )

        plan = plan_crops(segments, geometry)
        data = export_document(
            self.source_bytes or b"",
            segments,
            plan,
            backend=self.backend,
            password=self.password,
        )
        return ExportResult(data=data, page_count=len(segments), filename=self.output_filename)

    def _require_geometry(self) -> PageGeometry:
        if self.geometry is None:
            raise DocumentNotLoadedError()
        return self.geometry


__all__ = ["EditSession"]
