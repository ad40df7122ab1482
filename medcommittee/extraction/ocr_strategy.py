from medcommittee.documents.models import RawDocument
from medcommittee.extraction.base import BaseTextStrategy
from medcommittee.extraction.rasterizer import PageRasterizer
from medcommittee.extraction.rtl import fix_rtl_text
from medcommittee.logging.logger import Log
from medcommittee.ocr.client_base import BaseOcrClient
from medcommittee.ocr.exceptions import OcrError


class OcrTextStrategy(BaseTextStrategy):
    """Rasterizes leading pages and reads each one through the OCR oracle.

    A page whose OCR call fails contributes no text; it never fails the stage.
    """

    name = "ocr"

    def __init__(
        self,
        ocr_client: BaseOcrClient,
        rasterizer: PageRasterizer,
        *,
        min_length: int,
        max_pages: int,
        page_min_chars: int,
        language_hints: list[str],
    ) -> None:
        super().__init__(min_length)
        self._ocr_client = ocr_client
        self._rasterizer = rasterizer
        self._max_pages = max_pages
        self._page_min_chars = page_min_chars
        self._language_hints = language_hints

    def extract(self, document: RawDocument) -> str:
        page_texts: list[str] = []
        for page_number, image in enumerate(
            self._rasterizer.render(document, self._max_pages), start=1
        ):
            try:
                text = self._ocr_client.recognize(image, self._language_hints)
            except OcrError as exc:
                Log.warning(f"OCR failed for page {page_number} of {document.file_name}: {exc}")
                continue
            text = text.strip()
            if len(text) > self._page_min_chars:
                page_texts.append(text)
                Log.debug(f"OCR page {page_number} of {document.file_name}: {len(text)} chars")
        return fix_rtl_text("\n\n".join(page_texts))
