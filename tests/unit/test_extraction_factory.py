from unittest.mock import MagicMock, patch

import pytest

from medcommittee.config.settings import Settings
from medcommittee.extraction.factory import CascadeFactory, PdfExtractorFactory
from medcommittee.extraction.pdfplumber_adapter import PdfPlumberAdapter
from medcommittee.extraction.pymupdf_adapter import PyMuPdfAdapter


def _make_settings(pdf_engine: str):  # type: ignore[no-untyped-def]
    """Create a minimal Settings-like object with only pdf_engine."""
    with patch("medcommittee.config.settings.Settings") as mock_cls:
        settings = mock_cls.return_value
        settings.pdf_engine = pdf_engine
        return settings


class TestPdfExtractorFactory:
    def test_creates_pdfplumber_adapter(self) -> None:
        adapter = PdfExtractorFactory.create(_make_settings("pdfplumber"))
        assert isinstance(adapter, PdfPlumberAdapter)

    def test_creates_pymupdf_adapter(self) -> None:
        adapter = PdfExtractorFactory.create(_make_settings("pymupdf"))
        assert isinstance(adapter, PyMuPdfAdapter)

    def test_is_case_insensitive(self) -> None:
        adapter = PdfExtractorFactory.create(_make_settings("PdfPlumber"))
        assert isinstance(adapter, PdfPlumberAdapter)

    def test_raises_for_unknown_engine(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            PdfExtractorFactory.create(_make_settings("unknown"))


class TestCascadeFactory:
    def test_orders_native_ocr_byte_pattern(self) -> None:
        cascade = CascadeFactory.create(Settings(), ocr_client=MagicMock())
        assert cascade.strategy_names == ["native_text", "ocr", "byte_pattern"]

    def test_skips_ocr_without_client(self) -> None:
        cascade = CascadeFactory.create(Settings(), ocr_client=None)
        assert cascade.strategy_names == ["native_text", "byte_pattern"]

    def test_applies_thresholds_from_settings(self) -> None:
        settings = Settings(native_min_chars=70, ocr_min_chars=20, byte_pattern_min_chars=150)
        cascade = CascadeFactory.create(settings, ocr_client=MagicMock())
        assert [s.min_length for s in cascade._strategies] == [70, 20, 150]
