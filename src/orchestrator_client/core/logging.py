import logging
import sys
from typing import IO, Any, Iterable, Optional

# Extras emitted by the client and the leader resolver, in output order.
LOG_EXTRA_FIELDS = (
    "op",
    "method",
    "path",
    "endpoint",
    "leader",
    "status",
    "duration_ms",
    "error_type",
)

_NEEDS_QUOTES = (" ", "=", '"', "\t")


class LogfmtFormatter(logging.Formatter):
    """Render records as `key=value` pairs; unset extras are left out."""

    def __init__(self, fields: Iterable[str] = LOG_EXTRA_FIELDS):
        super().__init__()
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        pairs = [("level", record.levelname.lower()), ("logger", record.name)]
        event = record.getMessage()
        if event:
            pairs.append(("event", event))
        pairs.extend(
            (name, getattr(record, name))
            for name in self.fields
            if getattr(record, name, None) is not None
        )
        if record.exc_info and record.exc_info[0] is not None:
            pairs.append(("exc_type", record.exc_info[0].__name__))
        return " ".join(f"{k}={_render(v)}" for k, v in pairs)


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    text = str(value)
    if not text or any(c in text for c in _NEEDS_QUOTES):
        return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'
    return text


def setup_logging(
    level: str = "INFO",
    *,
    logger_name: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Opt-in logfmt output for scripts and applications.

    Replaces the handlers of `logger_name` (the root logger by default) with a
    single stream handler. The library itself never calls this.
    """
    target = logging.getLogger(logger_name)
    for h in list(target.handlers):
        target.removeHandler(h)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(LogfmtFormatter())
    target.addHandler(handler)
    target.setLevel(getattr(logging, level.upper(), logging.INFO))
    return target


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS"]
