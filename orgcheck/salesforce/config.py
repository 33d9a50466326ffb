"""Shared Salesforce orchestration constants.

This module centralizes thresholds, batch ceilings and the API version
calendar so the runtime engines can stay small and focused.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

# Daily API request quota thresholds (ratio of used / limit)
DAILY_API_REQUEST_WARNING_THRESHOLD = 0.70
DAILY_API_REQUEST_FATAL_THRESHOLD = 0.90

# A usage snapshot older than this no longer blocks outgoing calls
QUOTA_FRESHNESS_SECONDS = 60.0

# Platform batch ceilings
COMPOSITE_BATCH_SIZE = 25
METADATA_READ_BATCH_SIZE = 10
DEPENDENCY_BATCH_SIZE = 50

WILDCARD_MEMBER = "*"

DEFAULT_TIMEOUT = 120.0

# An API version is "old" once it is this many years behind the current one
OLD_API_VERSION_YEARS = 3

# Salesforce ships three releases a year; v53 was the first release of 2022
_BASE_API_VERSION = 53
_BASE_API_YEAR = 2022
_RELEASES_PER_YEAR = 3


@dataclass(frozen=True)
class QuotaPolicy:
    """Thresholds used by the quota watchdog.

    Attributes:
        warning_threshold: Ratio above which usage is reported in the yellow zone
        fatal_threshold: Ratio above which outgoing calls are refused
        freshness_seconds: How long a usage snapshot stays authoritative
    """

    warning_threshold: float = DAILY_API_REQUEST_WARNING_THRESHOLD
    fatal_threshold: float = DAILY_API_REQUEST_FATAL_THRESHOLD
    freshness_seconds: float = QUOTA_FRESHNESS_SECONDS

    def __post_init__(self) -> None:
        if not 0.0 <= self.warning_threshold <= self.fatal_threshold <= 1.0:
            raise ValueError(
                "QuotaPolicy requires 0 <= warning_threshold <= fatal_threshold <= 1"
            )
        if self.freshness_seconds < 0:
            raise ValueError("QuotaPolicy freshness_seconds cannot be negative")


def compute_api_version(today: date | None = None) -> int:
    """Compute the latest API version number available on a given date.

    Args:
        today: Reference date (defaults to the current date)

    Returns:
        Major API version number

    Examples:
        >>> compute_api_version(date(2022, 1, 15))
        53
        >>> compute_api_version(date(2024, 7, 1))
        61
    """
    today = today or date.today()
    if today.month <= 2:
        release = 0
    elif today.month <= 6:
        release = 1
    elif today.month <= 10:
        release = 2
    else:
        release = 3
    return _RELEASES_PER_YEAR * (today.year - _BASE_API_YEAR) + _BASE_API_VERSION + release
