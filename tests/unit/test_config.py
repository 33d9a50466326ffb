"""Unit tests for configuration constants and policies."""

from __future__ import annotations

from datetime import date

import pytest

from orgcheck.salesforce.config import (
    COMPOSITE_BATCH_SIZE,
    DEPENDENCY_BATCH_SIZE,
    METADATA_READ_BATCH_SIZE,
    QuotaPolicy,
    compute_api_version,
)


def test_batch_ceilings():
    assert COMPOSITE_BATCH_SIZE == 25
    assert METADATA_READ_BATCH_SIZE == 10
    assert DEPENDENCY_BATCH_SIZE == 50


def test_quota_policy_defaults():
    policy = QuotaPolicy()
    assert policy.warning_threshold == 0.70
    assert policy.fatal_threshold == 0.90
    assert policy.freshness_seconds == 60.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"warning_threshold": 0.95, "fatal_threshold": 0.90},
        {"fatal_threshold": 1.5},
        {"freshness_seconds": -1},
    ],
)
def test_quota_policy_rejects_inconsistent_values(kwargs):
    with pytest.raises(ValueError):
        QuotaPolicy(**kwargs)


@pytest.mark.parametrize(
    "today,version",
    [
        (date(2022, 1, 15), 53),
        (date(2022, 2, 28), 53),
        (date(2022, 3, 1), 54),
        (date(2022, 7, 1), 55),
        (date(2022, 11, 1), 56),
        (date(2024, 7, 1), 61),
        (date(2025, 10, 31), 64),
    ],
)
def test_compute_api_version(today, version):
    assert compute_api_version(today) == version
