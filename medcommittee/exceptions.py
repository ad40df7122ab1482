class PipelineError(Exception):
    """Base exception for all document pipeline errors."""


class OracleUnavailableError(PipelineError):
    """Raised when an external oracle (OCR or LLM) cannot be reached or fails to answer."""
