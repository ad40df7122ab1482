from medcommittee.config.settings import Settings
from medcommittee.ocr.client_base import BaseOcrClient
from medcommittee.ocr.google_vision_adapter import GoogleVisionOcrAdapter
from medcommittee.ocr.tesseract_adapter import TesseractOcrAdapter


class OcrClientFactory:
    """Creates the configured OCR oracle client, or None when OCR is disabled."""

    PROVIDERS = ("google_vision", "tesseract", "none")

    @classmethod
    def create(cls, settings: Settings) -> BaseOcrClient | None:
        provider = settings.ocr_provider.lower()
        if provider == "none":
            return None
        if provider == "tesseract":
            return TesseractOcrAdapter(languages=settings.tesseract_languages)
        if provider == "google_vision":
            api_key = settings.google_vision_api_key.get_secret_value()
            if not api_key:
                raise ValueError("google_vision_api_key is required for ocr_provider=google_vision")
            return GoogleVisionOcrAdapter(
                api_key=api_key,
                endpoint=settings.google_vision_endpoint,
                timeout_seconds=settings.google_vision_timeout_seconds,
            )
        raise ValueError(f"Unknown OCR provider '{provider}'. Choose from: {list(cls.PROVIDERS)}")
