"""Wildcard-aware Metadata API reader.

Phase 1 lists every type requested with the wildcard member and replaces the
wildcard with the listed names. Phase 2 drains each member list ten at a time
into read calls. Phase 3 groups what came back by type.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

from ..config import METADATA_READ_BATCH_SIZE, WILDCARD_MEMBER
from ..core.exceptions import RemoteCallError
from ..models import MetadataRequest
from .calls import GuardedCaller
from .telemetry import log_metadata_read_complete


class MetadataReader:
    """Reads metadata for a set of (type, members) requests."""

    def __init__(self, call: GuardedCaller, batch_size: int = METADATA_READ_BATCH_SIZE) -> None:
        self._call = call
        self._batch_size = batch_size

    async def read(self, requests: Sequence[MetadataRequest]) -> dict[str, list[dict[str, Any]]]:
        """Read the metadata of every request, grouped by type.

        The requests are normalized in place: wildcards are replaced by the
        listed member names, and member lists are empty once this returns.

        Raises:
            RemoteCallError: A list or read call failed (fail fast)
            QuotaExceededError: The daily API usage is above the fatal threshold
        """
        await asyncio.gather(
            *(self._resolve_wildcard(request) for request in requests if request.has_wildcard)
        )

        reads = []
        members_count = 0
        for request in requests:
            while request.members:
                members = request.members[: self._batch_size]
                del request.members[: self._batch_size]
                members_count += len(members)
                reads.append(self._read_chunk(request.type, members))
        results = await asyncio.gather(*reads)

        response: dict[str, list[dict[str, Any]]] = {}
        for metadata_type, items in results:
            response.setdefault(metadata_type, []).extend(items)

        log_metadata_read_complete(
            types=sorted(response), chunks=len(results), members=members_count
        )
        return response

    async def _resolve_wildcard(self, request: MetadataRequest) -> None:
        transport = self._call.transport
        try:
            listed = await self._call(lambda: transport.list_metadata(request.type))
        except RemoteCallError as e:
            raise e.with_context("While calling a metadata api list.", type=request.type)
        request.members = [member for member in request.members if member != WILDCARD_MEMBER]
        request.members.extend(item["fullName"] for item in listed if item.get("fullName"))

    async def _read_chunk(
        self, metadata_type: str, members: list[str]
    ) -> tuple[str, list[dict[str, Any]]]:
        transport = self._call.transport
        try:
            items = await self._call(lambda: transport.read_metadata(metadata_type, members))
        except RemoteCallError as e:
            raise e.with_context(
                "While calling a metadata api read.", type=metadata_type, members=members
            )
        return metadata_type, list(items)
