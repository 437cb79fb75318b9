import logging
import sys
from typing import Any


class _FieldsFormatter(logging.Formatter):
    """Appends the record's keyword fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields: dict[str, Any] = getattr(record, "fields", {})
        if not fields:
            return line
        rendered = " ".join(f"{key}={value!r}" for key, value in fields.items())
        first, newline, rest = line.partition("\n")
        return f"{first} {rendered}{newline}{rest}"


class Log:
    """Process-wide logger for the service and the upload client.

    Keyword arguments become structured fields on the record and are rendered
    after the message.
    """

    _logger: logging.Logger = logging.getLogger("postlink")

    @classmethod
    def configure(cls, log_level: str) -> None:
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                _FieldsFormatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            )
            cls._logger.addHandler(handler)
            cls._logger.propagate = False

    @classmethod
    def info(cls, message: str, **fields: object) -> None:
        cls._logger.info(message, extra={"fields": fields})

    @classmethod
    def error(cls, message: str, **fields: object) -> None:
        cls._logger.error(message, extra={"fields": fields})

    @classmethod
    def warning(cls, message: str, **fields: object) -> None:
        cls._logger.warning(message, extra={"fields": fields})

    @classmethod
    def debug(cls, message: str, **fields: object) -> None:
        cls._logger.debug(message, extra={"fields": fields})

    @classmethod
    def exception(cls, message: str, **fields: object) -> None:
        """Log at error level with the active exception's traceback."""
        cls._logger.exception(message, extra={"fields": fields})
