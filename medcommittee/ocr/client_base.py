from abc import ABC, abstractmethod


class BaseOcrClient(ABC):
    """Contract for OCR oracles that read text from a single page image."""

    @abstractmethod
    def recognize(self, image_png: bytes, language_hints: list[str]) -> str:
        """Return the text found on one page image.

        Raises:
            OcrUnavailableError: on transport failure or non-success status.
            OcrError: when the oracle answers with an error payload.
        """

    def close(self) -> None:
        """Release transport resources held by the client."""
