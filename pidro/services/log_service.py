"""Logging configuration and structured logging service."""

import logging
import sys

from pidro.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for scripts and hosting applications.

    Args:
        level: Log level name, defaults to ``settings.log_level``

    """
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )
    logging.getLogger("pidro").setLevel(level_name)


class LogService:
    """Structured ``key=value`` logging for engine activity."""

    def __init__(self, name: str = "pidro.engine") -> None:
        self._logger = logging.getLogger(name)

    @staticmethod
    def _format(data: dict[str, object]) -> str:
        return " | ".join(f"{k}={v}" for k, v in data.items())

    def info(self, data: dict[str, object]) -> None:
        self._logger.info(self._format(data))

    def warning(self, data: dict[str, object]) -> None:
        self._logger.warning(self._format(data))

    def debug(self, data: dict[str, object]) -> None:
        """Log debug message, skipping the formatting when debug is off.

        Args:
            data: Log data as key-value pairs

        """
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(self._format(data))
