import base64
from typing import Any

import httpx

from medcommittee.ocr.client_base import BaseOcrClient
from medcommittee.ocr.exceptions import OcrError, OcrUnavailableError


class GoogleVisionOcrAdapter(BaseOcrClient):
    """OCR client for the Google Cloud Vision images:annotate REST endpoint."""

    FEATURE_TYPE = "DOCUMENT_TEXT_DETECTION"

    def __init__(
        self,
        *,
        api_key: str,
        endpoint: str,
        timeout_seconds: int,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._endpoint = endpoint
        self._client = http_client or httpx.Client(timeout=timeout_seconds)

    def recognize(self, image_png: bytes, language_hints: list[str]) -> str:
        body = {
            "requests": [
                {
                    "image": {"content": base64.b64encode(image_png).decode("ascii")},
                    "features": [{"type": self.FEATURE_TYPE, "maxResults": 1}],
                    "imageContext": {"languageHints": language_hints},
                }
            ]
        }
        try:
            response = self._client.post(
                self._endpoint,
                params={"key": self._api_key},
                json=body,
            )
        except httpx.HTTPError as exc:
            raise OcrUnavailableError(
                f"Vision API network error: {type(exc).__name__}"
            ) from exc

        if response.status_code != 200:
            raise OcrUnavailableError(
                f"Vision API error: {response.status_code} - {self._error_message(response)}"
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise OcrError("Vision API returned a non-JSON body") from exc
        try:
            return self._text_from_payload(payload)
        except (AttributeError, IndexError, KeyError, TypeError) as exc:
            raise OcrError(f"Vision API returned an unexpected payload: {exc}") from exc

    def close(self) -> None:
        self._client.close()

    @staticmethod
    def _text_from_payload(payload: Any) -> str:
        responses = payload.get("responses") or []
        if not responses:
            return ""
        first = responses[0]
        if "error" in first:
            error = first["error"]
            message = error.get("message", "unknown") if isinstance(error, dict) else error
            raise OcrError(f"Vision API page error: {message}")
        full_text = first.get("fullTextAnnotation") or {}
        if full_text.get("text"):
            return str(full_text["text"])
        annotations = first.get("textAnnotations") or []
        if annotations:
            return str(annotations[0].get("description", ""))
        return ""

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            return str(response.json().get("error", {}).get("message", "Unknown error"))
        except (ValueError, AttributeError):
            return "Unknown error"
