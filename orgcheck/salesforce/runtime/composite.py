"""Composite-batched per-id record fetcher.

Groups ids into Tooling composite calls of at most 25 "get one record"
sub-requests, sends all groups concurrently with ``allOrNone`` off, then
demultiplexes the individually statused sub-responses.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

from ..config import COMPOSITE_BATCH_SIZE
from ..core.exceptions import RemoteCallError
from ..core.ids import chunk
from ..models import CompositeBatch, CompositeSubRequest, CompositeSubResponse
from .calls import GuardedCaller
from .telemetry import log_composite_fetch_complete


def build_composite_batches(
    metadata_type: str,
    ids: Sequence[str],
    api_version: str,
    batch_size: int = COMPOSITE_BATCH_SIZE,
) -> list[CompositeBatch]:
    """Build one composite batch per group of ``batch_size`` ids.

    Every sub-request reads one Tooling record and uses the record id as its
    reference id.
    """
    return [
        CompositeBatch(
            sub_requests=[
                CompositeSubRequest(
                    url=(
                        f"/services/data/v{api_version}/tooling/sobjects/"
                        f"{metadata_type}/{record_id}"
                    ),
                    method="GET",
                    reference_id=record_id,
                )
                for record_id in group
            ],
            all_or_none=False,
        )
        for group in chunk(ids, batch_size)
    ]


class CompositeFetcher:
    """Fetches Tooling records of one type by id, at scale."""

    def __init__(self, call: GuardedCaller, batch_size: int = COMPOSITE_BATCH_SIZE) -> None:
        self._call = call
        self._batch_size = batch_size

    async def fetch(
        self,
        metadata_type: str,
        ids: Sequence[str],
        bypass_error_codes: frozenset[str] | set[str] = frozenset(),
    ) -> list[Any]:
        """Fetch the records of ``ids``.

        Args:
            metadata_type: Tooling sObject type (e.g. "CustomField")
            ids: Record ids
            bypass_error_codes: Sub-request error codes to drop silently

        Returns:
            Bodies of the successful sub-responses

        Raises:
            RemoteCallError: A composite call failed, or a sub-request failed
                with an error code that is not bypassed
            QuotaExceededError: The daily API usage is above the fatal threshold
        """
        ids = list(ids)
        batches = build_composite_batches(
            metadata_type, ids, self._call.transport.api_version, self._batch_size
        )
        responses = await asyncio.gather(
            *(self._invoke(batch, metadata_type, ids) for batch in batches)
        )

        records: list[Any] = []
        dropped = 0
        for sub_responses in responses:
            for sub_response in sub_responses:
                if sub_response.ok:
                    records.append(sub_response.body)
                elif sub_response.error_code in bypass_error_codes:
                    dropped += 1
                else:
                    raise RemoteCallError(
                        f"Composite sub-request for {sub_response.reference_id} failed "
                        f"with HTTP {sub_response.http_status_code}",
                        error_code=sub_response.error_code,
                        status_code=sub_response.http_status_code,
                        payload=sub_response.body,
                    ).with_context(
                        "After receiving a response with bad HTTP status code.",
                        type=metadata_type,
                        ids=ids,
                        body=sub_response.body,
                    )

        log_composite_fetch_complete(
            metadata_type=metadata_type,
            batches=len(batches),
            records=len(records),
            dropped=dropped,
        )
        return records

    async def _invoke(
        self, batch: CompositeBatch, metadata_type: str, ids: list[str]
    ) -> list[CompositeSubResponse]:
        transport = self._call.transport
        try:
            return await self._call(
                lambda: transport.invoke_composite(
                    batch.sub_requests, all_or_none=batch.all_or_none
                )
            )
        except RemoteCallError as e:
            raise e.with_context(
                "While calling the Tooling Composite API.",
                type=metadata_type,
                ids=ids,
                body=batch.to_payload(),
            )
