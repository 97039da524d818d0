from __future__ import annotations

import asyncio
import io

import pytest
from pypdf import PdfReader

from band_splitter.backends.pypdf_backend import PypdfBackend
from band_splitter.exceptions import (
    DegenerateSegmentError,
    DocumentNotLoadedError,
    ExportError,
    ExportInProgressError,
    InvalidPDFError,
    SegmentNotFoundError,
)
from band_splitter.session import EditSession
from band_splitter.settings import SplitterSettings


class FailingBackend(PypdfBackend):
    def serialize(self, document):
        raise RuntimeError("writer crashed")


class ReentrantBackend(PypdfBackend):
    """Tries to start a second export while the first one is serializing."""

    def __init__(self) -> None:
        self.session = None
        self.nested_error = None

    def serialize(self, document):
        try:
            self.session.export()
        except ExportInProgressError as exc:
            self.nested_error = exc
        return super().serialize(document)


def test_load_applies_default_preset(session: EditSession) -> None:
    assert session.is_loaded
    assert len(session.segments) == 3
    assert [line.position for line in session.lines] == pytest.approx([1 / 3, 2 / 3])
    assert session.geometry.width_native == pytest.approx(612)
    assert session.geometry.height_native == pytest.approx(792)
    assert session.geometry.height_pixels == pytest.approx(792 * 1.5)


def test_default_preset_comes_from_settings(pdf_bytes: bytes) -> None:
    session = EditSession(settings=SplitterSettings(default_parts=1))
    session.load(pdf_bytes)
    assert len(session.segments) == 1


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("poster.pdf", "poster-split.pdf"),
        ("Poster.PDF", "Poster-split.pdf"),
        ("scan.v2.pdf", "scan.v2-split.pdf"),
        ("/tmp/notes", "notes-split.pdf"),
    ],
)
def test_output_filename(pdf_bytes: bytes, filename: str, expected: str) -> None:
    session = EditSession(settings=SplitterSettings())
    session.load(pdf_bytes, filename=filename)
    assert session.output_filename == expected


def test_invalid_load_keeps_previous_state(session: EditSession) -> None:
    session.add_line(0.9)
    lines_before = session.lines

    with pytest.raises(InvalidPDFError):
        session.load(b"%PDF-garbage", filename="broken.pdf")

    assert session.lines == lines_before
    assert session.base_name == "sample"


def test_operations_rebuild_segments(session: EditSession) -> None:
    line = session.add_line(0.9)
    assert len(session.segments) == 4

    session.delete_line(line.id)
    assert len(session.segments) == 3

    session.delete_line(12345)
    assert len(session.segments) == 3

    session.apply_preset(5)
    assert len(session.segments) == 5
    widths = [s.end_ratio - s.start_ratio for s in session.segments]
    assert widths == pytest.approx([0.2] * 5)


def test_drag_updates_segments_live(session: EditSession) -> None:
    first, second = session.lines

    session.move_line(first.id, 0.8)
    # segments stay ordered even while the registry is mid-drag
    assert [s.end_ratio for s in session.segments] == pytest.approx([2 / 3, 0.8, 1.0])
    assert [line.id for line in session.lines] == [first.id, second.id]

    session.end_drag()
    assert [line.id for line in session.lines] == [second.id, first.id]


def test_move_line_to_pixel(session: EditSession) -> None:
    first, _ = session.lines
    session.move_line_to_pixel(first.id, 594)
    assert session.segments[0].end_ratio == pytest.approx(0.5)


def test_rename_survives_drag(session: EditSession) -> None:
    session.rename_segment(2, "Body")
    first, _ = session.lines

    session.move_line(first.id, 0.2)
    session.end_drag()

    assert [s.name for s in session.segments] == ["Part 1", "Body", "Part 3"]


def test_rename_follows_segment_when_line_added_elsewhere(session: EditSession) -> None:
    session.rename_segment(1, "Header")
    session.add_line(0.9)

    assert session.segments[0].name == "Header"
    assert [s.name for s in session.segments[1:]] == ["Part 2", "Part 3", "Part 4"]


def test_rename_is_dropped_when_bounding_line_is_deleted(session: EditSession) -> None:
    session.rename_segment(1, "Header")
    first, _ = session.lines
    session.delete_line(first.id)

    assert [s.name for s in session.segments] == ["Part 1", "Part 2"]
    session.add_line(1 / 3)
    assert session.segments[0].name == "Part 1"


def test_blank_rename_restores_default(session: EditSession) -> None:
    session.rename_segment(3, "Footer")
    assert session.segments[2].name == "Footer"

    session.rename_segment(3, "   ")
    assert session.segments[2].name == "Part 3"


def test_rename_is_dropped_when_insertion_splits_segment(session: EditSession) -> None:
    session.rename_segment(1, "Header")
    line = session.add_line(0.1)
    assert [s.name for s in session.segments[:2]] == ["Part 1", "Part 2"]

    session.delete_line(line.id)
    assert session.segments[0].name == "Part 1"


def test_rename_of_whole_page_is_dropped_after_split(pdf_bytes: bytes) -> None:
    session = EditSession(settings=SplitterSettings(default_parts=1))
    session.load(pdf_bytes)
    session.rename_segment(1, "Whole")

    line = session.add_line(0.5)
    session.delete_line(line.id)

    assert len(session.segments) == 1
    assert session.segments[0].name == "Part 1"


def test_clear_lines_forgets_names(session: EditSession) -> None:
    session.rename_segment(1, "Header")
    session.clear_lines()

    assert len(session.lines) == 0
    assert [s.name for s in session.segments] == ["Part 1"]

    session.add_line(0.5)
    session.add_line(0.8)
    assert [s.name for s in session.segments] == ["Part 1", "Part 2", "Part 3"]


@pytest.mark.parametrize("index", [0, 4, -1])
def test_rename_unknown_segment(session: EditSession, index: int) -> None:
    with pytest.raises(SegmentNotFoundError):
        session.rename_segment(index, "Nope")


def test_export(session: EditSession) -> None:
    session.rename_segment(1, "Header")
    result = session.export()

    assert result.filename == "sample-split.pdf"
    assert result.page_count == 3
    reader = PdfReader(io.BytesIO(result.data))
    assert len(reader.pages) == 3
    assert reader.outline[0].title == "Header"
    assert not session.export_in_flight


def test_export_requires_loaded_document() -> None:
    with pytest.raises(DocumentNotLoadedError):
        EditSession(settings=SplitterSettings()).export()


def test_export_rejects_degenerate_segment(session: EditSession) -> None:
    first, second = session.lines
    session.move_line(second.id, first.position)

    with pytest.raises(DegenerateSegmentError):
        session.export()
    assert not session.export_in_flight


def test_export_failure_keeps_state_and_allows_retry(session: EditSession) -> None:
    session.backend = FailingBackend()
    lines_before = session.lines
    segments_before = session.segments

    with pytest.raises(ExportError) as excinfo:
        session.export()
    assert "writer crashed" in str(excinfo.value)
    assert session.lines == lines_before
    assert session.segments == segments_before
    assert not session.export_in_flight

    session.backend = PypdfBackend()
    assert session.export().page_count == 3


def test_second_export_is_rejected_while_running(session: EditSession) -> None:
    backend = ReentrantBackend()
    backend.session = session
    session.backend = backend

    result = session.export()

    assert isinstance(backend.nested_error, ExportInProgressError)
    assert result.page_count == 3


def test_export_async(session: EditSession) -> None:
    result = asyncio.run(session.export_async())

    assert result.page_count == 3
    assert not session.export_in_flight


def test_concurrent_async_export_is_rejected(session: EditSession) -> None:
    async def run_two():
        return await asyncio.gather(
            session.export_async(), session.export_async(), return_exceptions=True
        )

    first, second = asyncio.run(run_two())

    assert first.page_count == 3
    assert isinstance(second, ExportInProgressError)
    assert not session.export_in_flight


def test_multi_page_source_uses_first_page(pdf_factory) -> None:
    session = EditSession(settings=SplitterSettings())
    session.load(pdf_factory(pages=4), filename="book.pdf")

    assert session.num_pages == 4
    assert session.export().page_count == 3


def test_offset_media_box(pdf_factory) -> None:
    session = EditSession(settings=SplitterSettings())
    session.load(pdf_factory(width=400, height=600, origin=(50, 100)))
    session.apply_preset(2)

    reader = PdfReader(io.BytesIO(session.export().data))
    top, bottom = reader.pages
    assert float(top.mediabox.bottom) == pytest.approx(400, abs=1e-3)
    assert float(top.mediabox.top) == pytest.approx(700, abs=1e-3)
    assert float(bottom.mediabox.bottom) == pytest.approx(100, abs=1e-3)
    assert float(bottom.mediabox.left) == pytest.approx(50, abs=1e-3)


def test_reset(session: EditSession) -> None:
    session.reset()

    assert not session.is_loaded
    assert session.geometry is None
    assert len(session.lines) == 0
    assert len(session.segments) == 1
    with pytest.raises(DocumentNotLoadedError):
        session.move_line_to_pixel(1, 10)
