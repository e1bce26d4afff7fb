"""
chert_sdk.context
=================

Cancellation / deadline signal threaded through every RPC call and through the
confirmation polling loop.

    ctx = Context.background().with_timeout(10.0)
    client.wallet.get_balance(addr, ctx=ctx)

    # From another thread:
    ctx.cancel()

A context is cancelled when `cancel()` is called on it or on any ancestor, or
once its deadline (the earliest deadline along the ancestor chain) passes.
`sleep()` is interruptible: a cancel from another thread wakes it immediately.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, List, Optional

from .errors import CancelledError

__all__ = ["Context", "ensure_context"]

Clock = Callable[[], float]


class Context:
    __slots__ = ("_event", "_deadline", "_reason", "_children", "_parent", "_lock", "_clock")

    def __init__(
        self,
        *,
        deadline: Optional[float] = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self._event = threading.Event()
        self._deadline = deadline
        self._reason: Optional[str] = None
        self._children: List["Context"] = []
        self._parent: Optional["Context"] = None
        self._lock = threading.Lock()
        self._clock = clock

    @classmethod
    def background(cls) -> "Context":
        """A context that is never cancelled unless `cancel()` is called on it."""
        return cls()

    # --- derivation ------------------------------------------------------

    def with_cancel(self) -> "Context":
        return self._child(self._deadline)

    def with_timeout(self, seconds: float) -> "Context":
        deadline = self._clock() + float(seconds)
        if self._deadline is not None:
            deadline = min(deadline, self._deadline)
        return self._child(deadline)

    def _child(self, deadline: Optional[float]) -> "Context":
        child = Context(deadline=deadline, clock=self._clock)
        child._parent = self
        with self._lock:
            # Expired children are never cancelled explicitly; drop them here.
            self._children = [c for c in self._children if c.err() is None]
            self._children.append(child)
            reason = self._reason
        if reason is not None:
            child.cancel(reason)
        return child

    def _release(self, child: "Context") -> None:
        with self._lock:
            try:
                self._children.remove(child)
            except ValueError:
                pass

    # --- state -----------------------------------------------------------

    def cancel(self, reason: str = "context cancelled") -> None:
        """Cancel this context and its children, and detach it from its parent."""
        with self._lock:
            if self._reason is not None:
                return
            self._reason = reason
            children, self._children = self._children, []
            parent, self._parent = self._parent, None
        self._event.set()
        for child in children:
            child.cancel(reason)
        if parent is not None:
            parent._release(self)

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    def remaining(self) -> Optional[float]:
        """Seconds until the deadline (may be negative), or None if unbounded."""
        if self._deadline is None:
            return None
        return self._deadline - self._clock()

    def err(self) -> Optional[CancelledError]:
        if self._event.is_set():
            return CancelledError(self._reason or "context cancelled")
        rem = self.remaining()
        if rem is not None and rem <= 0:
            return CancelledError("context deadline exceeded")
        return None

    @property
    def cancelled(self) -> bool:
        return self.err() is not None

    def check(self) -> None:
        """Raise CancelledError if the context is done."""
        e = self.err()
        if e is not None:
            raise e

    def sleep(self, seconds: float) -> None:
        """
        Block for up to `seconds`, waking early on cancel. Raises CancelledError
        if the context is done when the wait ends.
        """
        self.check()
        wait = max(float(seconds), 0.0)
        rem = self.remaining()
        if rem is not None:
            wait = min(wait, max(rem, 0.0))
        self._event.wait(wait)
        self.check()

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        state = "cancelled" if self.cancelled else "active"
        return f"Context({state}, remaining={self.remaining()})"


def ensure_context(ctx: Optional[Context]) -> Context:
    return ctx if ctx is not None else Context.background()
