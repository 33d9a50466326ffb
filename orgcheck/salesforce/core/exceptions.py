"""Custom exception hierarchy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ErrorContext:
    """Diagnostic context attached to errors surfaced by the orchestration layer.

    Attributes:
        when: Human description of the phase that failed
        what: Relevant identifiers, types, request and response bodies
    """

    when: str
    what: dict[str, Any] = field(default_factory=dict)


class SalesforceError(Exception):
    """Base exception for all library errors."""

    def __init__(self, message: str, context: ErrorContext | None = None) -> None:
        super().__init__(message)
        self.context = context

    def with_context(self, when: str, **what: Any) -> SalesforceError:
        """Attach diagnostic context and return the same error for re-raising."""
        self.context = ErrorContext(when=when, what=what)
        return self


class QuotaExceededError(SalesforceError):
    """Daily API request usage is above the fatal threshold.

    Raised before a call is attempted (or right after the call that pushed
    usage over the threshold). Never retried by this library.
    """

    def __init__(self, message: str, ratio: float, threshold: float) -> None:
        super().__init__(message)
        self.ratio = ratio
        self.threshold = threshold


class RemoteCallError(SalesforceError):
    """Error returned by a Salesforce API call."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        status_code: int | None = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.status_code = status_code
        self.payload = payload

    def is_bypassed(self, bypass_error_codes: frozenset[str] | set[str]) -> bool:
        """Whether the caller declared this error code as "no result"."""
        return self.error_code is not None and self.error_code in bypass_error_codes


class EnrichmentError(SalesforceError):
    """Best-effort dependency lookup failed.

    Carried on the query result instead of being raised.
    """

    pass
