from medcommittee.exceptions import OracleUnavailableError, PipelineError


class LlmError(PipelineError):
    """Raised when the LLM extraction step fails."""


class LlmUnavailableError(LlmError, OracleUnavailableError):
    """Raised when the LLM backend is unreachable, rejects the call or answers empty."""


class PromptTemplateError(LlmError):
    """Raised when a bundled prompt template cannot be loaded."""


class MalformedResponseError(LlmError):
    """Raised inside the normalizer when a response cannot be parsed as a JSON object."""
