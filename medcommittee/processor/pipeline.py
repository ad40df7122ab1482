from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field

from medcommittee.documents.models import ExtractedText, RawDocument, StructuredRecord
from medcommittee.llm.response_normalizer import NormalizedResponse

StatusListener = Callable[[StructuredRecord], None]


@dataclass(slots=True)
class PipelineContext:
    document: RawDocument
    record: StructuredRecord
    extracted: ExtractedText | None = None
    cleaned_text: str = ""
    readability_score: float = 0.0
    prompt: str = ""
    page_images: list[bytes] = field(default_factory=list)
    raw_response: str = ""
    normalized: NormalizedResponse | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
