"""Core components."""

from .enums import ObjectType, QuotaZone, get_object_type
from .exceptions import (
    EnrichmentError,
    ErrorContext,
    QuotaExceededError,
    RemoteCallError,
    SalesforceError,
)
from .ids import case_safe_id, chunk, chunk_quoted
from .setup_urls import resolve_setup_url

__all__ = [
    "ObjectType",
    "QuotaZone",
    "get_object_type",
    "SalesforceError",
    "QuotaExceededError",
    "RemoteCallError",
    "EnrichmentError",
    "ErrorContext",
    "case_safe_id",
    "chunk",
    "chunk_quoted",
    "resolve_setup_url",
]
