import io
import threading
from collections.abc import Generator
from unittest.mock import patch

import pytesseract
import pytest
from PIL import Image

from medcommittee.ocr.exceptions import OcrError, OcrUnavailableError
from medcommittee.ocr.tesseract_adapter import LocalOcrService, TesseractOcrAdapter

MODULE = "medcommittee.ocr.tesseract_adapter.pytesseract"


@pytest.fixture(autouse=True)
def _reset_singleton() -> Generator[None, None, None]:
    LocalOcrService.reset()
    yield
    LocalOcrService.reset()


def _png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (20, 20), "white").save(buf, format="PNG")
    return buf.getvalue()


class TestLocalOcrServiceSingleton:
    def test_get_returns_same_instance(self) -> None:
        assert LocalOcrService.get("heb+eng") is LocalOcrService.get("heb+eng")

    def test_each_language_set_gets_its_own_engine(self) -> None:
        hebrew = LocalOcrService.get("heb")
        english = LocalOcrService.get("eng")
        assert hebrew is not english
        assert hebrew._languages == "heb"
        assert english._languages == "eng"

    def test_reset_drops_instance(self) -> None:
        first = LocalOcrService.get("heb+eng")
        LocalOcrService.reset()
        assert LocalOcrService.get("heb+eng") is not first

    def test_not_ready_until_initialized(self) -> None:
        assert LocalOcrService.get("heb+eng").is_ready is False


class TestLocalOcrServiceInitialize:
    def test_concurrent_callers_share_one_initialization(self) -> None:
        service = LocalOcrService.get("heb+eng")
        with (
            patch(f"{MODULE}.get_tesseract_version", return_value="5.3.0") as version,
            patch(f"{MODULE}.get_languages", return_value=["eng", "heb", "osd"]),
        ):
            threads = [threading.Thread(target=service.initialize) for _ in range(8)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

        assert service.is_ready
        version.assert_called_once()

    def test_missing_language_pack_raises(self) -> None:
        service = LocalOcrService.get("heb+eng")
        with (
            patch(f"{MODULE}.get_tesseract_version", return_value="5.3.0"),
            patch(f"{MODULE}.get_languages", return_value=["eng"]),
        ):
            with pytest.raises(OcrUnavailableError, match="heb"):
                service.initialize()
        assert not service.is_ready

    def test_missing_binary_raises(self) -> None:
        service = LocalOcrService.get("heb+eng")
        with patch(
            f"{MODULE}.get_tesseract_version",
            side_effect=pytesseract.TesseractNotFoundError(),
        ):
            with pytest.raises(OcrUnavailableError, match="not available"):
                service.initialize()

    def test_close_requires_new_initialization(self) -> None:
        service = LocalOcrService.get("heb+eng")
        with (
            patch(f"{MODULE}.get_tesseract_version", return_value="5.3.0"),
            patch(f"{MODULE}.get_languages", return_value=["eng", "heb"]),
        ):
            service.initialize()
        service.close()
        assert not service.is_ready


class TestTesseractOcrAdapter:
    def test_recognize_runs_engine_with_configured_languages(self) -> None:
        with (
            patch(f"{MODULE}.get_tesseract_version", return_value="5.3.0"),
            patch(f"{MODULE}.get_languages", return_value=["eng", "heb"]),
            patch(f"{MODULE}.image_to_string", return_value="ועדה רפואית") as to_string,
        ):
            adapter = TesseractOcrAdapter("heb+eng")
            result = adapter.recognize(_png_bytes(), ["he", "en"])

        assert result == "ועדה רפואית"
        assert to_string.call_args.kwargs["lang"] == "heb+eng"

    def test_engine_failure_raises_ocr_error(self) -> None:
        with (
            patch(f"{MODULE}.get_tesseract_version", return_value="5.3.0"),
            patch(f"{MODULE}.get_languages", return_value=["eng", "heb"]),
            patch(
                f"{MODULE}.image_to_string",
                side_effect=pytesseract.TesseractError(1, "bad image"),
            ),
        ):
            with pytest.raises(OcrError, match="Tesseract failed"):
                TesseractOcrAdapter("heb+eng").recognize(_png_bytes(), ["he"])

    def test_unreadable_image_raises_ocr_error(self) -> None:
        with (
            patch(f"{MODULE}.get_tesseract_version", return_value="5.3.0"),
            patch(f"{MODULE}.get_languages", return_value=["eng", "heb"]),
        ):
            with pytest.raises(OcrError):
                TesseractOcrAdapter("heb+eng").recognize(b"not an image", ["he"])

    def test_adapters_share_the_engine(self) -> None:
        first = TesseractOcrAdapter("heb+eng")
        second = TesseractOcrAdapter("heb+eng")
        assert first._service is second._service

    def test_adapter_uses_its_own_languages(self) -> None:
        with (
            patch(f"{MODULE}.get_tesseract_version", return_value="5.3.0"),
            patch(f"{MODULE}.get_languages", return_value=["eng", "heb"]),
            patch(f"{MODULE}.image_to_string", return_value="text") as to_string,
        ):
            TesseractOcrAdapter("heb+eng").recognize(_png_bytes(), ["he"])
            TesseractOcrAdapter("eng").recognize(_png_bytes(), ["en"])

        assert [c.kwargs["lang"] for c in to_string.call_args_list] == ["heb+eng", "eng"]
