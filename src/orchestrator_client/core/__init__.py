"""Ambient plumbing shared by the client: call context and logging."""

from .context import (
    CallContext,
    apply_call_context,
    call_context,
    current_call_context,
    reset_call_context,
)
from .logging import LogfmtFormatter, setup_logging
from .observability import log_event

__all__ = [
    # Context
    "CallContext",
    "call_context",
    "current_call_context",
    "apply_call_context",
    "reset_call_context",
    # Logging
    "LogfmtFormatter",
    "setup_logging",
    "log_event",
]
