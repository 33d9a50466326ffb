"""Data models for Salesforce requests and responses.

Architecture:
    This module exports the Pydantic v2 models used throughout the library.
    Request descriptions are immutable (frozen=True) once submitted, except
    MetadataRequest whose member list is normalized in place while reading.

Model Categories:
    - Queries: QuerySpec, QueryPage, QueryResult, DependencyEdge
    - Metadata: MetadataRequest
    - Composite: CompositeBatch, CompositeSubRequest, CompositeSubResponse
    - Quota: ApiUsage, QuotaSnapshot
"""

from .composite import CompositeBatch, CompositeSubRequest, CompositeSubResponse
from .metadata import MetadataRequest
from .query import DependencyEdge, QueryPage, QueryResult, QuerySpec
from .quota import ApiUsage, QuotaSnapshot

__all__ = [
    "QuerySpec",
    "QueryPage",
    "QueryResult",
    "DependencyEdge",
    "MetadataRequest",
    "CompositeBatch",
    "CompositeSubRequest",
    "CompositeSubResponse",
    "ApiUsage",
    "QuotaSnapshot",
]
