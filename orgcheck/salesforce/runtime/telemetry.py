"""Structured logging for orchestration operations.

This module provides telemetry hooks for the engines, emitting structured
logs for observability.
"""

from __future__ import annotations

import logging

from ..core.enums import QuotaZone

logger = logging.getLogger(__name__)


def log_quota_zone_changed(
    *,
    previous: QuotaZone,
    current: QuotaZone,
    ratio: float,
) -> None:
    """Log a transition between quota zones.

    Entering red is an error, entering yellow a warning, going back to green
    is informational.
    """
    extra = {
        "previous_zone": previous.value,
        "zone": current.value,
        "ratio": ratio,
    }
    if current == QuotaZone.RED:
        logger.error("quota_zone_changed", extra=extra)
    elif current == QuotaZone.YELLOW:
        logger.warning("quota_zone_changed", extra=extra)
    else:
        logger.info("quota_zone_changed", extra=extra)


def log_query_completed(
    *,
    query: str,
    tooling: bool,
    pages: int,
    records: int,
) -> None:
    logger.debug(
        "query_completed",
        extra={"query": query, "tooling": tooling, "pages": pages, "records": records},
    )


def log_query_bypassed(*, query: str, tooling: bool, error_code: str | None) -> None:
    logger.info(
        "query_bypassed",
        extra={"query": query, "tooling": tooling, "error_code": error_code},
    )


def log_enrichment_failed(
    *,
    field: str,
    ids_count: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a best-effort dependency lookup that was abandoned."""
    logger.error(
        "dependency_enrichment_failed",
        extra={
            "field": field,
            "ids_count": ids_count,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_metadata_read_complete(*, types: list[str], chunks: int, members: int) -> None:
    logger.info(
        "metadata_read_complete",
        extra={"types": types, "chunks": chunks, "members": members},
    )


def log_composite_fetch_complete(
    *,
    metadata_type: str,
    batches: int,
    records: int,
    dropped: int,
) -> None:
    logger.info(
        "composite_fetch_complete",
        extra={
            "metadata_type": metadata_type,
            "batches": batches,
            "records": records,
            "dropped": dropped,
        },
    )
