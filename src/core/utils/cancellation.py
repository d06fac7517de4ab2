"""Caller-supplied cancellation for long running service operations."""

import threading
import time
from collections.abc import Callable
from typing import Any

from core.models.errors import OperationCancelledError


class CancellationToken:
    """Cancellation signal checked by the service between its I/O steps.

    A token is cancelled either explicitly through `cancel()` or implicitly once
    its optional deadline (a `timer()` reading) has passed.
    """

    def __init__(
        self,
        *,
        deadline: float | None = None,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._event = threading.Event()
        self._deadline = deadline
        self._timer = timer

    @classmethod
    def with_timeout(
        cls,
        seconds: float,
        *,
        timer: Callable[[], float] = time.monotonic,
    ) -> "CancellationToken":
        """Create a token that expires `seconds` from now."""
        return cls(deadline=timer() + seconds, timer=timer)

    @classmethod
    def from_lambda_context(cls, context: Any, *, safety_margin_ms: int) -> "CancellationToken":
        """Create a token that expires shortly before the Lambda invocation times out.

        Contexts without `get_remaining_time_in_millis` yield a token without deadline.
        """
        get_remaining = getattr(context, "get_remaining_time_in_millis", None)
        if not callable(get_remaining):
            return cls()

        remaining_ms = get_remaining() - safety_margin_ms
        return cls.with_timeout(max(remaining_ms, 0) / 1000)

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True

        return self._deadline is not None and self._timer() >= self._deadline

    def raise_if_cancelled(self, *, operation: str, **details: Any) -> None:
        """Raise OperationCancelledError if the token is cancelled."""
        if self.cancelled:
            raise OperationCancelledError(
                message=f"Operation '{operation}' was cancelled",
                details={"operation": operation, **details},
            )
