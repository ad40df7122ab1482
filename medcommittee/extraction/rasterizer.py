from collections.abc import Iterator

import pymupdf

from medcommittee.documents.models import RawDocument
from medcommittee.extraction.exceptions import ExtractionError
from medcommittee.extraction.pymupdf_adapter import MUPDF_LOCK
from medcommittee.logging.logger import Log


class PageRasterizer:
    """Renders leading document pages to PNG images for OCR and vision requests."""

    def __init__(self, scale: float = 2.0) -> None:
        self._scale = scale

    def render(self, document: RawDocument, max_pages: int) -> Iterator[bytes]:
        """Yield one PNG per page, at most max_pages.

        Image documents are yielded as-is as a single page. Each page
        pixmap is dropped before the next one is rendered. The MuPDF lock
        is held per page, never across a yield.

        Raises:
            ExtractionError: if the document cannot be opened for rendering.
        """
        if document.is_image:
            yield document.content
            return
        try:
            with MUPDF_LOCK:
                doc = pymupdf.open(stream=document.content, filetype="pdf")  # type: ignore[no-untyped-call]
                page_count = min(doc.page_count, max_pages)
        except Exception as exc:
            raise ExtractionError(f"Cannot open {document.file_name} for rendering: {exc}") from exc

        matrix = pymupdf.Matrix(self._scale, self._scale)
        try:
            for index in range(page_count):
                try:
                    with MUPDF_LOCK:
                        pixmap = doc[index].get_pixmap(matrix=matrix)
                        png = pixmap.tobytes("png")
                        del pixmap
                except Exception as exc:
                    Log.warning(f"Failed to render page {index + 1} of {document.file_name}: {exc}")
                    continue
                yield png
        finally:
            with MUPDF_LOCK:
                doc.close()
