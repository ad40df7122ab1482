"""Local OCR backend built on the Tesseract engine.

``LocalOcrService`` loads the engine once per process and language set.
Loading checks the binary and its installed language packs, which is slow enough
that concurrent documents must share one initialization.
"""

import io
import threading
from typing import ClassVar

import pytesseract
from PIL import Image

from medcommittee.logging.logger import Log
from medcommittee.ocr.client_base import BaseOcrClient
from medcommittee.ocr.exceptions import OcrError, OcrUnavailableError


class LocalOcrService:
    """Process-wide, lazily initialized Tesseract engine, one per language set."""

    _instances: ClassVar[dict[str, "LocalOcrService"]] = {}
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, languages: str) -> None:
        self._languages = languages
        self._init_lock = threading.Lock()
        self._ready = False
        self._version = ""

    @classmethod
    def get(cls, languages: str) -> "LocalOcrService":
        with cls._instance_lock:
            if languages not in cls._instances:
                cls._instances[languages] = cls(languages)
            return cls._instances[languages]

    @classmethod
    def reset(cls) -> None:
        with cls._instance_lock:
            for instance in cls._instances.values():
                instance.close()
            cls._instances.clear()

    @property
    def is_ready(self) -> bool:
        return self._ready

    def initialize(self) -> None:
        """Verify the engine and language packs; concurrent callers wait for one load."""
        with self._init_lock:
            if self._ready:
                return
            try:
                self._version = str(pytesseract.get_tesseract_version())
                available = set(pytesseract.get_languages(config=""))
            except (pytesseract.TesseractNotFoundError, OSError) as exc:
                raise OcrUnavailableError(f"Tesseract is not available: {exc}") from exc
            missing = [lang for lang in self._languages.split("+") if lang not in available]
            if missing:
                raise OcrUnavailableError(f"Tesseract language packs missing: {missing}")
            self._ready = True
            Log.info(f"Local OCR engine ready (tesseract {self._version}, {self._languages})")

    def close(self) -> None:
        with self._init_lock:
            self._ready = False

    def image_to_text(self, image_png: bytes) -> str:
        if not self._ready:
            self.initialize()
        try:
            with Image.open(io.BytesIO(image_png)) as image:
                return str(pytesseract.image_to_string(image, lang=self._languages))
        except (pytesseract.TesseractError, OSError) as exc:
            raise OcrError(f"Tesseract failed: {exc}") from exc


class TesseractOcrAdapter(BaseOcrClient):
    """OCR client that runs the shared local Tesseract engine."""

    def __init__(self, languages: str = "heb+eng") -> None:
        self._service = LocalOcrService.get(languages)

    def recognize(self, image_png: bytes, language_hints: list[str]) -> str:
        _ = language_hints  # languages are fixed when the engine is loaded
        return self._service.image_to_text(image_png)
