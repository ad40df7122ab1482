from medcommittee.documents.models import ExtractedText, ExtractionAttempt, RawDocument
from medcommittee.extraction.base import BaseTextStrategy
from medcommittee.extraction.exceptions import (
    ExtractionError,
    ExtractionExhaustedError,
    ExtractionInsufficientError,
)
from medcommittee.logging.logger import Log


class TextExtractionCascade:
    """Tries extraction strategies in priority order; the first long enough result wins."""

    def __init__(self, strategies: list[BaseTextStrategy]) -> None:
        if not strategies:
            raise ValueError("TextExtractionCascade needs at least one strategy")
        self._strategies = strategies

    @property
    def strategy_names(self) -> list[str]:
        return [s.name for s in self._strategies]

    def extract(self, document: RawDocument) -> ExtractedText:
        """Return text from the first strategy meeting its own threshold.

        Raises:
            ExtractionExhaustedError: when no strategy succeeded.
        """
        attempts: list[ExtractionAttempt] = []
        for strategy in self._strategies:
            try:
                text = self._run(strategy, document)
            except ExtractionInsufficientError as exc:
                attempts.append(
                    ExtractionAttempt(strategy.name, "insufficient", exc.length, str(exc))
                )
                Log.info(f"{document.file_name}: {exc}")
                continue
            except ExtractionError as exc:
                attempts.append(ExtractionAttempt(strategy.name, "failure", 0, str(exc)))
                Log.info(f"{document.file_name}: {strategy.name} failed: {exc}")
                continue
            attempts.append(ExtractionAttempt(strategy.name, "success", len(text)))
            Log.info(f"{document.file_name}: {strategy.name} extracted {len(text)} chars")
            return ExtractedText(text=text, strategy=strategy.name)
        raise ExtractionExhaustedError(document.file_name, attempts)

    @staticmethod
    def _run(strategy: BaseTextStrategy, document: RawDocument) -> str:
        text = strategy.extract(document).strip()
        if len(text) < strategy.min_length:
            raise ExtractionInsufficientError(strategy.name, len(text), strategy.min_length)
        return text
