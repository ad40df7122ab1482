import io

import pdfplumber

from medcommittee.extraction.base import BasePdfExtractor
from medcommittee.extraction.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts the text layer from PDF using pdfplumber."""

    def extract(self, pdf_bytes: bytes, max_pages: int | None = None) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = pdf.pages if max_pages is None else pdf.pages[:max_pages]
                texts = [page.extract_text() or "" for page in pages]
            return "\n".join(texts).strip()
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc
