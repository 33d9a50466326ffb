"""Shared fixtures for unit tests: a scripted in-memory transport."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from orgcheck.salesforce.core import RemoteCallError
from orgcheck.salesforce.models import (
    ApiUsage,
    CompositeSubRequest,
    CompositeSubResponse,
    QueryPage,
)
from orgcheck.salesforce.runtime import GuardedCaller, QuotaWatchdog


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTransport:
    """Transport returning scripted responses and recording every call.

    Scripted values that are exceptions are raised instead of returned.
    ``usage_per_call`` is consumed one entry per call to simulate the
    ``Sforce-Limit-Info`` header.
    """

    def __init__(self, api_version: str = "61.0") -> None:
        self.api_version = api_version
        self.api_usage: ApiUsage | None = None
        self.usage_per_call: list[ApiUsage | None] = []
        self.calls: list[tuple[Any, ...]] = []

        self.queries: dict[str, QueryPage | Exception] = {}
        self.query_handler: Callable[[str, bool], QueryPage] | None = None
        self.more_pages: dict[str, QueryPage | Exception] = {}
        self.listings: dict[str, list[dict[str, Any]] | Exception] = {}
        self.read_handler: Callable[[str, list[str]], list[dict[str, Any]]] = (
            lambda metadata_type, members: [
                {"fullName": member, "type": metadata_type} for member in members
            ]
        )
        self.composite_handler: Callable[
            [list[CompositeSubRequest]], list[CompositeSubResponse]
        ] = lambda sub_requests: [
            CompositeSubResponse(
                http_status_code=200,
                body={"Id": sub_request.reference_id},
                reference_id=sub_request.reference_id,
            )
            for sub_request in sub_requests
        ]
        self.sobjects: list[dict[str, Any]] = []
        self.counts: dict[str, int] = {}
        self.closed = False

    async def _record(self, *call: Any) -> None:
        self.calls.append(call)
        await asyncio.sleep(0)
        if self.usage_per_call:
            self.api_usage = self.usage_per_call.pop(0)

    def calls_named(self, name: str) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == name]

    @staticmethod
    def _resolve(value: Any) -> Any:
        if isinstance(value, Exception):
            raise value
        return value

    async def execute_query(self, text: str, *, tooling: bool = False) -> QueryPage:
        await self._record("execute_query", text, tooling)
        if text in self.queries:
            return self._resolve(self.queries[text])
        if self.query_handler is not None:
            return self.query_handler(text, tooling)
        return QueryPage(records=[], done=True)

    async def fetch_more(self, cursor: str) -> QueryPage:
        await self._record("fetch_more", cursor)
        return self._resolve(self.more_pages[cursor])

    async def list_metadata(self, metadata_type: str) -> list[dict[str, Any]]:
        await self._record("list_metadata", metadata_type)
        return self._resolve(self.listings.get(metadata_type, []))

    async def read_metadata(self, metadata_type: str, members: list[str]) -> list[dict[str, Any]]:
        await self._record("read_metadata", metadata_type, list(members))
        return self.read_handler(metadata_type, members)

    async def invoke_composite(
        self,
        sub_requests: list[CompositeSubRequest],
        *,
        all_or_none: bool = False,
    ) -> list[CompositeSubResponse]:
        await self._record("invoke_composite", list(sub_requests), all_or_none)
        return self.composite_handler(sub_requests)

    async def describe_global(self) -> list[dict[str, Any]]:
        await self._record("describe_global")
        return self.sobjects

    async def describe_sobject(self, name: str) -> dict[str, Any]:
        await self._record("describe_sobject", name)
        return {"name": name, "fields": []}

    async def record_count(self, name: str) -> int:
        await self._record("record_count", name)
        return self.counts.get(name, 0)

    async def close(self) -> None:
        self.closed = True


def remote_error(error_code: str, message: str = "boom", status_code: int = 400) -> RemoteCallError:
    return RemoteCallError(message, error_code=error_code, status_code=status_code)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def watchdog(clock: FakeClock) -> QuotaWatchdog:
    return QuotaWatchdog(clock=clock)


@pytest.fixture
def guarded_call(transport: FakeTransport, watchdog: QuotaWatchdog) -> GuardedCaller:
    return GuardedCaller(transport, watchdog)


@pytest.fixture
def make_error() -> Callable[..., RemoteCallError]:
    return remote_error
