"""Batched, paginated SOQL query engine.

Runs every query of a batch concurrently. Each query follows its pagination
cursors in order until the platform reports it is done. A query failing with
one of its own bypass error codes resolves as skipped; any other failure
fails the whole batch as soon as it is seen (calls already in flight are left
to complete and their results are discarded).
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from ..core.exceptions import RemoteCallError
from ..models import QueryResult, QuerySpec
from .calls import GuardedCaller
from .dependencies import DependencyEnricher
from .telemetry import log_query_bypassed, log_query_completed


class QueryEngine:
    """Executes batches of QuerySpec."""

    def __init__(self, call: GuardedCaller, enricher: DependencyEnricher | None = None) -> None:
        self._call = call
        self._enricher = enricher or DependencyEnricher(call)

    async def run(self, specs: Sequence[QuerySpec]) -> list[QueryResult]:
        """Run all queries concurrently.

        Args:
            specs: Queries to run

        Returns:
            One QueryResult per spec, in the order of ``specs``

        Raises:
            RemoteCallError: A query failed with an error code it does not bypass
            QuotaExceededError: The daily API usage is above the fatal threshold
        """
        return list(await asyncio.gather(*(self._run_one(spec) for spec in specs)))

    async def _run_one(self, spec: QuerySpec) -> QueryResult:
        try:
            records = await self._fetch_all(spec)
        except RemoteCallError as e:
            if e.is_bypassed(spec.bypass_error_codes):
                log_query_bypassed(query=spec.text, tooling=spec.tooling, error_code=e.error_code)
                return QueryResult()
            raise e.with_context(
                "While running a SOQL query.",
                query_more=spec.query_more,
                query_string=spec.text,
                query_use_tooling=spec.tooling,
            )

        if spec.dependency_field is None:
            return QueryResult(records=records)

        dependencies, error = await self._enricher.enrich(records, spec.dependency_field)
        return QueryResult(records=records, dependencies=dependencies, enrichment_error=error)

    async def _fetch_all(self, spec: QuerySpec) -> list[dict]:
        transport = self._call.transport
        page = await self._call(lambda: transport.execute_query(spec.text, tooling=spec.tooling))
        records = list(page.records)
        pages = 1
        while page.has_more:
            cursor = page.next_records_url
            page = await self._call(lambda: transport.fetch_more(cursor))
            records.extend(page.records)
            pages += 1
        log_query_completed(query=spec.text, tooling=spec.tooling, pages=pages, records=len(records))
        return records
