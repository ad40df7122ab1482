from unittest.mock import MagicMock, patch

import pytest

from medcommittee.documents.models import RawDocument
from medcommittee.extraction.exceptions import PdfExtractionError
from medcommittee.extraction.pymupdf_adapter import MUPDF_LOCK, PyMuPdfAdapter
from medcommittee.extraction.rasterizer import PageRasterizer


def _fake_doc(lock_states: list[bool], page_count: int = 2) -> MagicMock:
    def render(**_kwargs: object) -> MagicMock:
        lock_states.append(MUPDF_LOCK.locked())
        pixmap = MagicMock()
        pixmap.tobytes.return_value = b"png"
        return pixmap

    page = MagicMock()
    page.get_pixmap.side_effect = render
    doc = MagicMock()
    doc.page_count = page_count
    doc.__getitem__.return_value = page
    return doc


class TestMupdfLock:
    def test_rasterizer_renders_under_lock_and_releases_between_pages(self) -> None:
        lock_states: list[bool] = []
        doc = _fake_doc(lock_states)
        document = RawDocument(file_name="a.pdf", content=b"%PDF")

        with patch("medcommittee.extraction.rasterizer.pymupdf.open", return_value=doc):
            pages = PageRasterizer(scale=1.0).render(document, max_pages=5)
            first = next(pages)
            assert not MUPDF_LOCK.locked()
            rest = list(pages)

        assert [first, *rest] == [b"png", b"png"]
        assert lock_states == [True, True]
        doc.close.assert_called_once()
        assert not MUPDF_LOCK.locked()

    def test_rasterizer_closes_document_when_abandoned(self) -> None:
        doc = _fake_doc([])
        document = RawDocument(file_name="a.pdf", content=b"%PDF")

        with patch("medcommittee.extraction.rasterizer.pymupdf.open", return_value=doc):
            pages = PageRasterizer(scale=1.0).render(document, max_pages=5)
            next(pages)
            pages.close()

        doc.close.assert_called_once()
        assert not MUPDF_LOCK.locked()

    def test_adapter_extracts_under_lock(self) -> None:
        lock_states: list[bool] = []

        def open_pdf(**_kwargs: object) -> MagicMock:
            lock_states.append(MUPDF_LOCK.locked())
            raise RuntimeError("broken xref")

        with (
            patch("medcommittee.extraction.pymupdf_adapter.pymupdf.open", side_effect=open_pdf),
            pytest.raises(PdfExtractionError, match="broken xref"),
        ):
            PyMuPdfAdapter().extract(b"%PDF")

        assert lock_states == [True]
        assert not MUPDF_LOCK.locked()
