from medcommittee.exceptions import OracleUnavailableError, PipelineError


class OcrError(PipelineError):
    """Raised when an OCR oracle returns an unusable answer for a page."""


class OcrUnavailableError(OcrError, OracleUnavailableError):
    """Raised when the OCR oracle call fails due to network/infrastructure issues."""
