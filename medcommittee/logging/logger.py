import logging
import re
import sys


class _RedactSecretsFilter(logging.Filter):
    """Masks credentials that may leak into messages through exception text."""

    _PATTERNS = (
        re.compile(r"(key=)[^&\s'\"]+", re.IGNORECASE),
        re.compile(r"(api-key[\"']?\s*[:=]\s*[\"']?)[^\s'\",}]+", re.IGNORECASE),
        re.compile(r"(Bearer\s+)[A-Za-z0-9._\-]+"),
    )

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        for pattern in self._PATTERNS:
            message = pattern.sub(r"\1***", message)
        record.msg = message
        record.args = None
        return True


class Log:
    """Centralized logging with structured format."""

    _logger: logging.Logger = logging.getLogger("medcommittee")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and a redacting stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            handler.addFilter(_RedactSecretsFilter())
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)
