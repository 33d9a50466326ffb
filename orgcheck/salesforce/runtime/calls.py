"""Watchdog-guarded execution of single transport calls."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeVar

from ..io.transport import SalesforceTransport
from .watchdog import QuotaWatchdog

T = TypeVar("T")


class GuardedCaller:
    """Runs one transport call between the watchdog gate and the usage update.

    Usage is recorded whether the call succeeded or failed, but only when the
    call reported a new figure: a response without the usage header leaves
    the last observation (and its timestamp) untouched. If the recorded usage
    trips the watchdog, QuotaExceededError replaces the call's own
    error (which stays chained as ``__context__``).
    """

    def __init__(self, transport: SalesforceTransport, watchdog: QuotaWatchdog) -> None:
        self.transport = transport
        self.watchdog = watchdog

    async def __call__(self, call: Callable[[], Awaitable[T]]) -> T:
        self.watchdog.guard_before_call()
        previous = self.transport.api_usage
        try:
            return await call()
        finally:
            usage = self.transport.api_usage
            if usage is not previous:
                self.watchdog.record_usage(usage)
