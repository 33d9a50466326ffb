"""Best-effort dependency enrichment of query results.

Looks up the MetadataComponentDependency Tooling table for every id found in
a given field of the records, 50 ids per lookup, and turns the rows into
DependencyEdge objects. Failures never abort the primary query: they come
back as an EnrichmentError next to the records. Quota errors still propagate.
"""

from __future__ import annotations

import asyncio
from typing import Any

from ..config import DEPENDENCY_BATCH_SIZE
from ..core.exceptions import EnrichmentError, QuotaExceededError, RemoteCallError
from ..core.ids import case_safe_id, chunk_quoted
from ..core.setup_urls import resolve_setup_url
from ..models import DependencyEdge
from .calls import GuardedCaller
from .telemetry import log_enrichment_failed

DEPENDENCY_QUERY = (
    "SELECT MetadataComponentId, MetadataComponentName, MetadataComponentType, "
    "RefMetadataComponentId, RefMetadataComponentName, RefMetadataComponentType "
    "FROM MetadataComponentDependency "
    "WHERE (RefMetadataComponentId IN ({ids}) OR MetadataComponentId IN ({ids}))"
)


def dependency_query(quoted_ids: str) -> str:
    """SOQL lookup for the dependencies of (and on) a quoted, comma-joined id list."""
    return DEPENDENCY_QUERY.format(ids=quoted_ids)


def edge_from_row(row: dict[str, Any]) -> DependencyEdge:
    component_id = row.get("MetadataComponentId")
    component_type = row.get("MetadataComponentType")
    ref_id = row.get("RefMetadataComponentId")
    ref_type = row.get("RefMetadataComponentType")
    return DependencyEdge(
        id=case_safe_id(component_id),
        name=row.get("MetadataComponentName"),
        type=component_type,
        url=resolve_setup_url(component_type, component_id),
        ref_id=case_safe_id(ref_id),
        ref_name=row.get("RefMetadataComponentName"),
        ref_type=ref_type,
        ref_url=resolve_setup_url(ref_type, ref_id),
    )


class DependencyEnricher:
    """Fetches dependency edges for the ids held by a record field."""

    def __init__(self, call: GuardedCaller, batch_size: int = DEPENDENCY_BATCH_SIZE) -> None:
        self._call = call
        self._batch_size = batch_size

    async def _lookup(self, quoted_ids: str, all_ids: list[str]) -> list[DependencyEdge]:
        transport = self._call.transport
        query = dependency_query(quoted_ids)
        try:
            page = await self._call(lambda: transport.execute_query(query, tooling=True))
            rows = list(page.records)
            while page.has_more:
                cursor = page.next_records_url
                page = await self._call(lambda: transport.fetch_more(cursor))
                rows.extend(page.records)
        except RemoteCallError as e:
            raise EnrichmentError(str(e)).with_context(
                "While getting the dependencies from the Dependency API.",
                all_ids=all_ids,
                concerned_ids=quoted_ids,
            ) from e
        return [edge_from_row(row) for row in rows]

    async def enrich(
        self, records: list[dict[str, Any]], field: str
    ) -> tuple[list[DependencyEdge] | None, EnrichmentError | None]:
        """Collect the dependency edges of every id found in ``field``.

        Returns:
            ``(edges, None)`` on success, ``(None, error)`` when anything in the
            enrichment path failed

        Raises:
            QuotaExceededError: The daily API usage is above the fatal threshold
        """
        ids: list[str] = []
        try:
            ids = [
                case_safe_id(record[field]) for record in records if record.get(field) is not None
            ]
            batches = await asyncio.gather(
                *(self._lookup(quoted, ids) for quoted in chunk_quoted(ids, self._batch_size))
            )
        except QuotaExceededError:
            raise
        except Exception as e:
            if isinstance(e, EnrichmentError):
                error = e
            else:
                error = EnrichmentError(str(e) or type(e).__name__).with_context(
                    "While getting the dependencies from the Dependency API.",
                    all_ids=ids,
                    field=field,
                )
                error.__cause__ = e
            log_enrichment_failed(
                field=field,
                ids_count=len(ids),
                error_type=type(error.__cause__ or error).__name__,
                error_message=str(error),
            )
            return None, error
        return [edge for batch in batches for edge in batch], None
