from medcommittee.documents.models import RawDocument
from medcommittee.extraction.base import BasePdfExtractor, BaseTextStrategy
from medcommittee.extraction.exceptions import ExtractionError


class NativeTextStrategy(BaseTextStrategy):
    """Reads the embedded text layer of a digital PDF."""

    name = "native_text"

    def __init__(self, pdf_extractor: BasePdfExtractor, min_length: int, max_pages: int) -> None:
        super().__init__(min_length)
        self._pdf_extractor = pdf_extractor
        self._max_pages = max_pages

    def extract(self, document: RawDocument) -> str:
        if not document.is_pdf:
            raise ExtractionError(f"{document.file_name} has no PDF text layer")
        return self._pdf_extractor.extract(document.content, max_pages=self._max_pages)
