"""Org Check Salesforce - quota-aware request orchestration for Salesforce APIs."""

from .api import SalesforceManager
from .config import (
    COMPOSITE_BATCH_SIZE,
    DAILY_API_REQUEST_FATAL_THRESHOLD,
    DAILY_API_REQUEST_WARNING_THRESHOLD,
    DEPENDENCY_BATCH_SIZE,
    METADATA_READ_BATCH_SIZE,
    WILDCARD_MEMBER,
    QuotaPolicy,
    compute_api_version,
)
from .core import (
    EnrichmentError,
    ErrorContext,
    ObjectType,
    QuotaExceededError,
    QuotaZone,
    RemoteCallError,
    SalesforceError,
    case_safe_id,
    chunk,
    chunk_quoted,
    get_object_type,
    resolve_setup_url,
)
from .io import HTTPClient, SalesforceRESTTransport, SalesforceTransport
from .models import (
    ApiUsage,
    CompositeBatch,
    CompositeSubRequest,
    CompositeSubResponse,
    DependencyEdge,
    MetadataRequest,
    QueryPage,
    QueryResult,
    QuerySpec,
    QuotaSnapshot,
)
from .runtime import (
    CompositeFetcher,
    DependencyEnricher,
    GuardedCaller,
    MetadataReader,
    QueryEngine,
    QuotaWatchdog,
)

__all__ = [
    # Facade
    "SalesforceManager",
    # Config
    "QuotaPolicy",
    "compute_api_version",
    "DAILY_API_REQUEST_WARNING_THRESHOLD",
    "DAILY_API_REQUEST_FATAL_THRESHOLD",
    "COMPOSITE_BATCH_SIZE",
    "METADATA_READ_BATCH_SIZE",
    "DEPENDENCY_BATCH_SIZE",
    "WILDCARD_MEMBER",
    # Core
    "ObjectType",
    "QuotaZone",
    "get_object_type",
    "case_safe_id",
    "chunk",
    "chunk_quoted",
    "resolve_setup_url",
    # Exceptions
    "SalesforceError",
    "QuotaExceededError",
    "RemoteCallError",
    "EnrichmentError",
    "ErrorContext",
    # Transport
    "HTTPClient",
    "SalesforceTransport",
    "SalesforceRESTTransport",
    # Models
    "ApiUsage",
    "QuotaSnapshot",
    "QuerySpec",
    "QueryPage",
    "QueryResult",
    "DependencyEdge",
    "MetadataRequest",
    "CompositeBatch",
    "CompositeSubRequest",
    "CompositeSubResponse",
    # Runtime
    "QuotaWatchdog",
    "GuardedCaller",
    "QueryEngine",
    "DependencyEnricher",
    "MetadataReader",
    "CompositeFetcher",
]
