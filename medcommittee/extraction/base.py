from abc import ABC, abstractmethod

from medcommittee.documents.models import RawDocument


class BaseTextStrategy(ABC):
    """Contract for one stage of the text extraction cascade."""

    name: str = "base"

    def __init__(self, min_length: int) -> None:
        self.min_length = min_length

    @abstractmethod
    def extract(self, document: RawDocument) -> str:
        """Extract text from a raw document.

        Args:
            document: The uploaded document.

        Returns:
            Extracted text. Length is checked by the cascade, not here.

        Raises:
            ExtractionError: if the stage cannot run on this document.
        """


class BasePdfExtractor(ABC):
    """Contract for all PDF text-layer extraction adapters."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes, max_pages: int | None = None) -> str:
        """Extract plain text from PDF bytes, page by page.

        Args:
            pdf_bytes: Raw PDF file content.
            max_pages: Read at most this many leading pages; None reads all.

        Returns:
            Extracted text as a single normalized string.

        Raises:
            PdfExtractionError: if extraction fails for any reason.
        """
