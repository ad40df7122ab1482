import itertools
import threading

import pymupdf

from medcommittee.extraction.base import BasePdfExtractor
from medcommittee.extraction.exceptions import PdfExtractionError

# MuPDF is not thread-safe; every pymupdf call in the process goes through this lock.
MUPDF_LOCK = threading.Lock()


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts the text layer from PDF using PyMuPDF."""

    def extract(self, pdf_bytes: bytes, max_pages: int | None = None) -> str:
        try:
            with MUPDF_LOCK, pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = itertools.islice(doc, max_pages)
                texts = [page.get_text() for page in pages]
            return "\n".join(texts).strip()
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc
