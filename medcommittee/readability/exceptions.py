from medcommittee.exceptions import PipelineError


class UnreadableTextError(PipelineError):
    """Raised when extracted text scores below the readability gate."""

    def __init__(self, score: float, threshold: float) -> None:
        super().__init__(
            f"Extracted text is not readable enough (score {score:.1f} < {threshold:.1f}); "
            "the file may be encrypted, protected or contain only images"
        )
        self.score = score
        self.threshold = threshold
