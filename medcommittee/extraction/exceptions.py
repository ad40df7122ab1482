from medcommittee.documents.models import ExtractionAttempt
from medcommittee.exceptions import PipelineError


class ExtractionError(PipelineError):
    """Raised when a text extraction stage cannot run on the given document."""


class PdfExtractionError(ExtractionError):
    """Raised when a PDF library fails to open or read a document."""


class ExtractionInsufficientError(ExtractionError):
    """Raised when a stage produced text shorter than its acceptance threshold."""

    def __init__(self, strategy: str, length: int, min_length: int) -> None:
        super().__init__(
            f"{strategy} produced {length} chars, below the {min_length} char minimum"
        )
        self.strategy = strategy
        self.length = length
        self.min_length = min_length


class ExtractionExhaustedError(ExtractionError):
    """Raised when every cascade stage failed for a document."""

    def __init__(self, file_name: str, attempts: list[ExtractionAttempt]) -> None:
        tried = ", ".join(f"{a.strategy}={a.outcome}" for a in attempts) or "none"
        super().__init__(f"No extractable text in {file_name} (tried: {tried})")
        self.file_name = file_name
        self.attempts = attempts
