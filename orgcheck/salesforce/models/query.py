"""SOQL query data models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..core.exceptions import EnrichmentError


class QuerySpec(BaseModel):
    """One logical SOQL query in a batch.

    Attributes:
        text: SOQL query string
        tooling: Run against the Tooling API instead of the REST API
        bypass_error_codes: Error codes that resolve the query as skipped
        query_more: Follow pagination cursors (always on, kept for diagnostics)
        dependency_field: Record field holding the id to enrich with dependencies
    """

    text: str = Field(..., min_length=1)
    tooling: bool = False
    bypass_error_codes: frozenset[str] = frozenset()
    query_more: bool = True
    dependency_field: str | None = None

    model_config = ConfigDict(frozen=True)


class QueryPage(BaseModel):
    """One page of query results as returned by the transport."""

    records: list[dict[str, Any]] = Field(default_factory=list)
    done: bool = True
    next_records_url: str | None = None
    total_size: int | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def has_more(self) -> bool:
        return not self.done and bool(self.next_records_url)


class DependencyEdge(BaseModel):
    """Directed reference between two metadata components."""

    id: str | None
    name: str | None = None
    type: str | None = None
    url: str | None = None
    ref_id: str | None = None
    ref_name: str | None = None
    ref_type: str | None = None
    ref_url: str | None = None

    model_config = ConfigDict(frozen=True)


class QueryResult(BaseModel):
    """Outcome of one QuerySpec.

    ``records`` is None when the query failed with a bypassed error code
    (skipped, not failed). ``dependencies`` is None when no enrichment was
    requested or when enrichment failed, in which case ``enrichment_error``
    says why.
    """

    records: list[dict[str, Any]] | None = None
    dependencies: list[DependencyEdge] | None = None
    enrichment_error: EnrichmentError | None = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def skipped(self) -> bool:
        return self.records is None
