"""Daily API request quota watchdog.

The platform reports its daily API usage on every response. The watchdog
keeps the latest ratio and when it was observed, refuses to start a call while
a fresh snapshot is above the fatal threshold, and re-checks right after every
call so that the call crossing the threshold stops the ones behind it, even in
the middle of a batch.

Architecture:
    One watchdog per connection, shared by every engine. All engines run on
    the same event loop and the state is read before and written after each
    call from that loop, so no lock is needed.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from ..config import QuotaPolicy
from ..core.enums import QuotaZone
from ..core.exceptions import QuotaExceededError
from ..models import ApiUsage, QuotaSnapshot
from .telemetry import log_quota_zone_changed


def _percentage(ratio: float, decimals: int = 3) -> float:
    return round(ratio * 100, decimals)


class QuotaWatchdog:
    """Gate outgoing calls on the last observed daily API usage."""

    def __init__(
        self,
        policy: QuotaPolicy | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the watchdog.

        Args:
            policy: Thresholds and freshness window (defaults from config)
            clock: Time source in seconds, injectable for tests
        """
        self.policy = policy or QuotaPolicy()
        self._clock = clock
        self._last_ratio = 0.0
        self._last_observed_at: float | None = None

    @property
    def last_ratio(self) -> float:
        return self._last_ratio

    @property
    def last_observed_at(self) -> float | None:
        return self._last_observed_at

    @property
    def zone(self) -> QuotaZone:
        return QuotaZone.classify(
            self._last_ratio, self.policy.warning_threshold, self.policy.fatal_threshold
        )

    def _is_fresh(self) -> bool:
        if self._last_observed_at is None:
            return False
        return self._clock() - self._last_observed_at <= self.policy.freshness_seconds

    def guard_before_call(self) -> None:
        """Raise QuotaExceededError if a fresh snapshot is above the fatal threshold."""
        if self._is_fresh() and self._last_ratio > self.policy.fatal_threshold:
            raise QuotaExceededError(
                f"WATCH DOG: Daily API Request limit is {_percentage(self._last_ratio)}%, "
                f"and our internal threshold is {_percentage(self.policy.fatal_threshold)}%. "
                "We stop there to keep your org safe.",
                ratio=self._last_ratio,
                threshold=self.policy.fatal_threshold,
            )

    def record_after_call(self, used: int | None, limit: int | None) -> None:
        """Store the usage reported by a call, then re-check the gate.

        Calls that report no usage figures (or a zero limit) leave the state
        untouched.
        """
        if used is None or limit is None or limit <= 0:
            return
        previous = self.zone
        self._last_ratio = used / limit
        self._last_observed_at = self._clock()
        current = self.zone
        if current != previous:
            log_quota_zone_changed(previous=previous, current=current, ratio=self._last_ratio)
        self.guard_before_call()

    def record_usage(self, usage: ApiUsage | None) -> None:
        """Record the usage of a transport response, if it reported any."""
        if usage is not None:
            self.record_after_call(usage.used, usage.limit)

    def snapshot(self) -> QuotaSnapshot:
        """Read-only view of the current state."""
        return QuotaSnapshot(
            ratio=self._last_ratio,
            percentage=_percentage(self._last_ratio),
            zone=self.zone,
            warning_threshold=self.policy.warning_threshold,
            fatal_threshold=self.policy.fatal_threshold,
            observed_at=self._last_observed_at,
        )
