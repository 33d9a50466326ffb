"""Precise unit tests for exception hierarchy.

Tests focus on meaningful behavior, not just field access.
"""

from orgcheck.salesforce.core import (
    EnrichmentError,
    ErrorContext,
    QuotaExceededError,
    RemoteCallError,
    SalesforceError,
)


def test_remote_call_error_with_context_returns_same_error():
    error = RemoteCallError("bad", error_code="INVALID_TYPE", status_code=400)
    returned = error.with_context("While running a SOQL query.", query_string="SELECT Id")
    assert returned is error
    assert error.context == ErrorContext(
        when="While running a SOQL query.", what={"query_string": "SELECT Id"}
    )
    assert isinstance(error, SalesforceError)


def test_remote_call_error_bypass_matches_exact_code():
    error = RemoteCallError("bad", error_code="INVALID_TYPE")
    assert error.is_bypassed(frozenset({"INVALID_TYPE"}))
    assert not error.is_bypassed(frozenset({"INVALID"}))
    assert not RemoteCallError("bad").is_bypassed(frozenset({"INVALID_TYPE"}))


def test_quota_exceeded_error_carries_ratio():
    error = QuotaExceededError("stop", ratio=0.95, threshold=0.9)
    assert error.ratio == 0.95
    assert error.threshold == 0.9
    assert error.context is None
    assert isinstance(error, SalesforceError)


def test_enrichment_error_is_library_error():
    assert isinstance(EnrichmentError("dapi"), SalesforceError)
