from medcommittee.llm.extraction_client import LlmExtractionClient
from medcommittee.llm.factory import LlmClientFactory
from medcommittee.llm.prompt_builder import PromptBuilder
from medcommittee.llm.response_normalizer import NormalizedResponse, ResponseNormalizer
from medcommittee.llm.schema import COMMITTEE_SCHEMA, ExtractionSchema

__all__ = [
    "COMMITTEE_SCHEMA",
    "ExtractionSchema",
    "LlmClientFactory",
    "LlmExtractionClient",
    "NormalizedResponse",
    "PromptBuilder",
    "ResponseNormalizer",
]
