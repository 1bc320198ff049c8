from __future__ import annotations

import logging
from typing import Any, Dict

# attributes every LogRecord already carries; extras must not overwrite them
RESERVED_LOG_KEYS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}

DEFAULT_LOGGER = "teamwork_mcp.observability"


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in RESERVED_LOG_KEYS}


def log_event(
    event: str,
    logger: logging.Logger | None = None,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """
    Emit ``event`` as the log message with ``fields`` as record extras.
    Events: tool_registered, toolsets_enabled, tool_call, http_request,
    startup_failed.
    """
    log = logger or logging.getLogger(DEFAULT_LOGGER)
    log.log(level, event, extra=_clean_fields(fields))


__all__ = ["log_event", "RESERVED_LOG_KEYS", "DEFAULT_LOGGER"]
