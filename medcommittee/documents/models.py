from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from medcommittee.exceptions import PipelineError


class InvalidStatusTransitionError(PipelineError):
    """Raised when a record is moved between processing states out of order."""


class ProcessingStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True)
class RawDocument:
    """Uploaded file content as handed over by the caller."""

    file_name: str
    content: bytes = field(repr=False)
    mime_type: str = "application/pdf"

    @property
    def is_pdf(self) -> bool:
        return self.mime_type == "application/pdf" or self.file_name.lower().endswith(".pdf")

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")


@dataclass(frozen=True)
class ExtractionAttempt:
    """Outcome of one cascade stage, kept for diagnostics only."""

    strategy: str
    outcome: str  # "success", "insufficient" or "failure"
    length: int = 0
    reason: str = ""


@dataclass(frozen=True)
class ExtractedText:
    """Text accepted by the cascade, tagged with the strategy that produced it."""

    text: str
    strategy: str

    def __len__(self) -> int:
        return len(self.text)


@dataclass
class StructuredRecord:
    """Per-document result: schema fields plus processing state.

    Status moves pending -> processing -> completed | error and never back.
    """

    file_name: str
    fields: dict[str, str] = field(default_factory=dict)
    decisions: list[dict[str, str]] = field(default_factory=list)
    processing_status: ProcessingStatus = ProcessingStatus.PENDING
    error_message: str | None = None
    extraction_strategy: str | None = None

    _TRANSITIONS: ClassVar[dict[ProcessingStatus, frozenset[ProcessingStatus]]] = {
        ProcessingStatus.PENDING: frozenset({ProcessingStatus.PROCESSING}),
        ProcessingStatus.PROCESSING: frozenset(
            {ProcessingStatus.COMPLETED, ProcessingStatus.ERROR}
        ),
        ProcessingStatus.COMPLETED: frozenset(),
        ProcessingStatus.ERROR: frozenset(),
    }

    @property
    def is_terminal(self) -> bool:
        return self.processing_status in (ProcessingStatus.COMPLETED, ProcessingStatus.ERROR)

    def mark_processing(self) -> None:
        self._move_to(ProcessingStatus.PROCESSING)

    def mark_completed(
        self,
        fields: dict[str, str],
        decisions: list[dict[str, str]] | None = None,
    ) -> None:
        self._move_to(ProcessingStatus.COMPLETED)
        self.fields = dict(fields)
        self.decisions = list(decisions or [])

    def mark_error(self, message: str) -> None:
        self._move_to(ProcessingStatus.ERROR)
        self.error_message = message

    def get(self, name: str) -> str:
        return self.fields.get(name, "")

    def to_dict(self) -> dict[str, object]:
        """Flat JSON-ready view used by render collaborators."""
        data: dict[str, object] = {"fileName": self.file_name}
        data.update(self.fields)
        data["decisions"] = [dict(row) for row in self.decisions]
        data["processingStatus"] = self.processing_status.value
        if self.error_message is not None:
            data["errorMessage"] = self.error_message
        return data

    def _move_to(self, target: ProcessingStatus) -> None:
        if target not in self._TRANSITIONS[self.processing_status]:
            raise InvalidStatusTransitionError(
                f"{self.file_name}: cannot move from "
                f"'{self.processing_status.value}' to '{target.value}'"
            )
        self.processing_status = target
