"""Per-call deadline and cancellation scope using ContextVars."""

from __future__ import annotations

import asyncio
import time
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from typing import Iterator, Optional

from ..errors import OrchestratorCancelledError

_call_context_var: ContextVar[Optional["CallContext"]] = ContextVar(
    "orchestrator_call_context", default=None
)


@dataclass
class CallContext:
    """
    Deadline/cancellation token honoured by the transport before and during
    every request. `deadline` is a time.monotonic() timestamp.
    """

    deadline: Optional[float] = None
    cancelled: bool = field(default=False)
    reason: Optional[str] = None
    _cancel_event: asyncio.Event = field(
        default_factory=asyncio.Event, init=False, repr=False, compare=False
    )

    @classmethod
    def with_timeout(cls, timeout: Optional[float]) -> "CallContext":
        if timeout is None:
            return cls()
        return cls(deadline=time.monotonic() + timeout)

    def cancel(self, reason: Optional[str] = None) -> None:
        self.cancelled = True
        self.reason = reason
        self._cancel_event.set()

    async def wait_cancelled(self) -> None:
        """Block until cancel() is called."""
        if self.cancelled:
            return
        await self._cancel_event.wait()

    def remaining(self) -> Optional[float]:
        if self.deadline is None:
            return None
        return self.deadline - time.monotonic()

    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def check(self) -> None:
        if self.cancelled:
            raise OrchestratorCancelledError(
                f"call cancelled: {self.reason}" if self.reason else "call cancelled"
            )
        if self.expired():
            raise OrchestratorCancelledError("call deadline exceeded")


def current_call_context() -> Optional[CallContext]:
    return _call_context_var.get()


def apply_call_context(ctx: CallContext) -> Token:
    """Install `ctx` for the current task; returns a token for reset()."""
    return _call_context_var.set(ctx)


def reset_call_context(token: Token) -> None:
    _call_context_var.reset(token)


@contextmanager
def call_context(
    timeout: Optional[float] = None, *, ctx: Optional[CallContext] = None
) -> Iterator[CallContext]:
    """
    Scope every client call in the block to a deadline and/or a cancel flag.

        with call_context(timeout=5) as ctx:
            await get_instance(client, key)
    """
    ctx = ctx or CallContext.with_timeout(timeout)
    token = apply_call_context(ctx)
    try:
        yield ctx
    finally:
        reset_call_context(token)


__all__ = [
    "CallContext",
    "call_context",
    "current_call_context",
    "apply_call_context",
    "reset_call_context",
]
