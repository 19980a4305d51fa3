import logging
import sys
from typing import TextIO

# Third-party loggers that flood DEBUG output with per-page and per-request noise.
_NOISY_LOGGERS = ("pdfminer", "httpx", "httpcore", "openai")


class Log:
    """Centralized logging for the parse service and CLI."""

    _logger: logging.Logger = logging.getLogger("arhiv")

    @classmethod
    def configure(cls, log_level: str, stream: TextIO | None = None) -> None:
        """Set the level and attach a single handler writing to ``stream``.

        The CLI passes stderr so that records exported to stdout stay clean.
        """
        level = log_level.upper()
        cls._logger.setLevel(level)
        cls._logger.propagate = False
        if not cls._logger.handlers:
            handler = logging.StreamHandler(stream or sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            )
            cls._logger.addHandler(handler)
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

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
        """Streaming progress and raw model output; off unless LOG_LEVEL=DEBUG."""
        cls._logger.debug(message, extra=kwargs)
