import logging
import sys
from typing import Any

from .context import current_request_id

LOG_EXTRA_FIELDS = (
    "request_id",
    "method",
    "path",
    "status",
    "duration_ms",
    "tool",
    "toolset",
    "attempt",
    "bytes",
    "error",
)


class RequestContextFilter(logging.Filter):
    """Stamp records with the request id of the current context when missing."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = current_request_id()
        return True


class LogfmtFormatter(logging.Formatter):
    """logfmt line per record: level, logger, event, then known extras."""

    def format(self, record: logging.LogRecord) -> str:
        pairs = [("level", record.levelname.lower()), ("logger", record.name)]
        event = record.getMessage()
        if event:
            pairs.append(("event", event))
        pairs.extend(
            (key, getattr(record, key))
            for key in LOG_EXTRA_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info and record.exc_info[0] is not None:
            pairs.append(("exc_type", record.exc_info[0].__name__))
        return " ".join(f"{key}={self._quote(value)}" for key, value in pairs)

    @staticmethod
    def _quote(value: Any) -> str:
        if isinstance(value, (int, float, bool)):
            return str(value)
        text = str(value)
        if any(c in text for c in ' ="'):
            text = '"' + text.replace('"', '\\"') + '"'
        return text


def setup_logging(level: str = "INFO") -> None:
    """
    Route every record through one stderr handler in logfmt.
    stdout is reserved for the stdio transport. Calling it again replaces the
    handler instead of stacking a second one.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(LogfmtFormatter())
    handler.addFilter(RequestContextFilter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


__all__ = [
    "setup_logging",
    "LogfmtFormatter",
    "RequestContextFilter",
    "LOG_EXTRA_FIELDS",
]
