import mimetypes
from pathlib import Path

from medcommittee.documents.models import RawDocument
from medcommittee.exceptions import PipelineError


class UnsupportedDocumentTypeError(PipelineError):
    """Raised when a file is neither a PDF nor an image."""


class FileLoader:
    """Reads document files from disk into RawDocument values."""

    SUPPORTED_MIME_TYPES = frozenset(
        {"application/pdf", "image/png", "image/jpeg", "image/tiff"}
    )

    def load(self, path: Path) -> RawDocument:
        """Read a file and detect its MIME type from the extension.

        Raises:
            FileNotFoundError: if the file does not exist.
            UnsupportedDocumentTypeError: if the extension is not a PDF or image.
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        mime_type = self._detect_mime_type(path)
        return RawDocument(file_name=path.name, content=path.read_bytes(), mime_type=mime_type)

    def load_many(self, paths: list[Path]) -> list[RawDocument]:
        return [self.load(path) for path in paths]

    def _detect_mime_type(self, path: Path) -> str:
        mime_type, _ = mimetypes.guess_type(path.name)
        if mime_type is None or mime_type not in self.SUPPORTED_MIME_TYPES:
            raise UnsupportedDocumentTypeError(
                f"{path.name}: unsupported file type '{mime_type or path.suffix}'"
            )
        return mime_type
