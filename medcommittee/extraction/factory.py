from medcommittee.config.settings import Settings
from medcommittee.extraction.base import BasePdfExtractor, BaseTextStrategy
from medcommittee.extraction.byte_pattern import BytePatternStrategy
from medcommittee.extraction.cascade import TextExtractionCascade
from medcommittee.extraction.native_text import NativeTextStrategy
from medcommittee.extraction.ocr_strategy import OcrTextStrategy
from medcommittee.extraction.pdfplumber_adapter import PdfPlumberAdapter
from medcommittee.extraction.pymupdf_adapter import PyMuPdfAdapter
from medcommittee.extraction.rasterizer import PageRasterizer
from medcommittee.ocr.client_base import BaseOcrClient


class PdfExtractorFactory:
    """Creates the correct PDF text-layer extractor based on settings."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()


class CascadeFactory:
    """Builds the native text -> OCR -> byte pattern cascade."""

    @classmethod
    def create(
        cls,
        settings: Settings,
        ocr_client: BaseOcrClient | None,
        rasterizer: PageRasterizer | None = None,
    ) -> TextExtractionCascade:
        strategies: list[BaseTextStrategy] = [
            NativeTextStrategy(
                PdfExtractorFactory.create(settings),
                min_length=settings.native_min_chars,
                max_pages=settings.native_max_pages,
            )
        ]
        if ocr_client is not None:
            strategies.append(
                OcrTextStrategy(
                    ocr_client,
                    rasterizer or PageRasterizer(settings.ocr_render_scale),
                    min_length=settings.ocr_min_chars,
                    max_pages=settings.ocr_max_pages,
                    page_min_chars=settings.ocr_page_min_chars,
                    language_hints=settings.ocr_language_hints,
                )
            )
        strategies.append(
            BytePatternStrategy(
                min_length=settings.byte_pattern_min_chars,
                max_fragments=settings.byte_pattern_max_fragments,
            )
        )
        return TextExtractionCascade(strategies)
