"""SalesforceManager facade over the orchestration engines.

Architecture:
    This module implements the Facade pattern to give consumers a single
    object per org connection. The manager owns:
    - The transport (one remote call per method)
    - The quota watchdog shared by every engine
    - The query engine, metadata reader and composite fetcher

Design Decisions:
    - Transport injection allows testing with scripted fakes
    - One watchdog per manager: every call made through the manager is gated
      on, and updates, the same usage snapshot
    - Context manager pattern ensures the transport is closed

See Also:
    - QueryEngine, MetadataReader, CompositeFetcher: the engines
    - QuotaWatchdog: the daily API usage gate
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from typing import Any, TypeVar

from ..config import OLD_API_VERSION_YEARS, QuotaPolicy
from ..core.enums import ObjectType, get_object_type
from ..core.ids import case_safe_id, chunk
from ..core.setup_urls import resolve_setup_url
from ..io.rest import SalesforceRESTTransport
from ..io.transport import SalesforceTransport
from ..models import MetadataRequest, QueryResult, QuerySpec, QuotaSnapshot
from ..runtime.calls import GuardedCaller
from ..runtime.composite import CompositeFetcher
from ..runtime.metadata import MetadataReader
from ..runtime.queries import QueryEngine
from ..runtime.watchdog import QuotaWatchdog

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SalesforceManager:
    """Quota-aware access to one Salesforce org.

    Example:
        >>> async with SalesforceManager.connect(
        ...     instance_url="https://acme.my.salesforce.com", access_token=token
        ... ) as manager:
        ...     results = await manager.run_queries(
        ...         [QuerySpec(text="SELECT Id FROM ApexClass", tooling=True)]
        ...     )
        ...     print(manager.get_quota_snapshot().zone)
    """

    def __init__(
        self,
        transport: SalesforceTransport,
        *,
        watchdog: QuotaWatchdog | None = None,
        quota_policy: QuotaPolicy | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            transport: Transport performing the remote calls
            watchdog: Optional watchdog (created from ``quota_policy`` if omitted)
            quota_policy: Thresholds used when creating the watchdog
        """
        self._transport = transport
        self._watchdog = watchdog or QuotaWatchdog(policy=quota_policy)
        self._call = GuardedCaller(transport, self._watchdog)
        self._queries = QueryEngine(self._call)
        self._metadata = MetadataReader(self._call)
        self._composite = CompositeFetcher(self._call)

    @classmethod
    def connect(
        cls,
        *,
        instance_url: str,
        access_token: str,
        api_version: str | None = None,
        quota_policy: QuotaPolicy | None = None,
    ) -> SalesforceManager:
        """Create a manager backed by the aiohttp REST transport."""
        transport = SalesforceRESTTransport(
            instance_url=instance_url,
            access_token=access_token,
            api_version=api_version,
        )
        return cls(transport, quota_policy=quota_policy)

    @property
    def transport(self) -> SalesforceTransport:
        return self._transport

    @property
    def watchdog(self) -> QuotaWatchdog:
        return self._watchdog

    @property
    def api_version(self) -> int:
        """Major API version used by the transport."""
        return int(float(self._transport.api_version))

    # ------------------------------------------------------------------
    # Core operations
    # ------------------------------------------------------------------

    async def run_queries(self, specs: Sequence[QuerySpec]) -> list[QueryResult]:
        """Run SOQL queries concurrently, following pagination cursors.

        See QueryEngine.run for the bypass and fail-fast rules.
        """
        logger.debug("Running queries", extra={"count": len(specs)})
        return await self._queries.run(specs)

    async def describe_metadata(
        self, requests: Sequence[MetadataRequest]
    ) -> dict[str, list[dict[str, Any]]]:
        """Read metadata grouped by type.

        Mutates ``requests``: wildcards are resolved in place and member lists
        are drained while reading.
        """
        logger.debug("Reading metadata", extra={"types": [r.type for r in requests]})
        return await self._metadata.read(requests)

    async def fetch_at_scale(
        self,
        metadata_type: str,
        ids: Sequence[str],
        bypass_error_codes: frozenset[str] | set[str] = frozenset(),
    ) -> list[Any]:
        """Fetch Tooling records by id through 25-id composite batches."""
        logger.debug(
            "Fetching records at scale",
            extra={"metadata_type": metadata_type, "count": len(ids)},
        )
        return await self._composite.fetch(metadata_type, ids, bypass_error_codes)

    def get_quota_snapshot(self) -> QuotaSnapshot:
        """Latest daily API usage and its zone."""
        return self._watchdog.snapshot()

    # ------------------------------------------------------------------
    # Describe and limits
    # ------------------------------------------------------------------

    async def describe_global(self) -> list[dict[str, Any]]:
        """List every sObject of the org."""
        return await self._call(lambda: self._transport.describe_global())

    async def describe(self, sobject_name: str) -> dict[str, Any]:
        """Describe one sObject (not cached)."""
        return await self._call(lambda: self._transport.describe_sobject(sobject_name))

    async def record_count(self, sobject_name: str) -> int:
        """Record count of one sObject, recycle bin included."""
        return await self._call(lambda: self._transport.record_count(sobject_name))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def is_version_old(self, version: int, definition_of_old: int = OLD_API_VERSION_YEARS) -> bool:
        """Whether an API version is at least ``definition_of_old`` years behind ours."""
        age = (self.api_version - version) / 3
        return age >= definition_of_old

    @staticmethod
    def case_safe_id(record_id: str | None) -> str | None:
        return case_safe_id(record_id)

    @staticmethod
    def chunk(items: Sequence[T], size: int) -> Iterator[list[T]]:
        return chunk(items, size)

    @staticmethod
    def resolve_setup_url(
        kind: str | None,
        durable_id: str | None,
        object_durable_id: str | None = None,
        object_type: ObjectType | str | None = None,
    ) -> str:
        return resolve_setup_url(kind, durable_id, object_durable_id, object_type)

    @staticmethod
    def get_object_type(api_name: str, is_custom_setting: bool = False) -> ObjectType:
        return get_object_type(api_name, is_custom_setting)

    async def close(self) -> None:
        """Close the transport."""
        await self._transport.close()

    async def __aenter__(self) -> SalesforceManager:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
