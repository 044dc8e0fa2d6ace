from __future__ import annotations

import logging
from typing import Any

# Attributes every LogRecord already owns; passing them as extras raises KeyError.
RESERVED_LOG_KEYS = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

DEFAULT_LOGGER_NAME = "orchestrator_client.observability"


def log_event(
    event: str,
    logger: logging.Logger | None = None,
    *,
    level: int = logging.DEBUG,
    **fields: Any,
) -> None:
    """Emit `event` with `fields` as record extras, at DEBUG unless told otherwise."""
    log = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
    if not log.isEnabledFor(level):
        return
    extra = {k: v for k, v in fields.items() if k not in RESERVED_LOG_KEYS}
    extra["event"] = event
    log.log(level, event, extra=extra)


__all__ = ["log_event", "RESERVED_LOG_KEYS", "DEFAULT_LOGGER_NAME"]
