"""Transport protocol consumed by the orchestration engines.

Architecture:
    A transport performs exactly one remote call per method and reports the
    platform's daily API usage seen on its most recent response. The engines
    never talk HTTP themselves; they decide how many calls to make, in which
    groupings, and hand each call to the transport.

Design Decision:
    Protocol chosen so tests (and alternative clients) can provide any object
    with these methods, without inheriting from SalesforceRESTTransport.
"""

from __future__ import annotations

from typing import Any, Protocol

from ..models import ApiUsage, CompositeSubRequest, CompositeSubResponse, QueryPage


class SalesforceTransport(Protocol):
    """Single-call access to the Salesforce APIs.

    Every method raises RemoteCallError when the platform reports a failure.
    """

    @property
    def api_version(self) -> str:
        """API version used by the transport (e.g. ``"61.0"``)."""
        ...

    @property
    def api_usage(self) -> ApiUsage | None:
        """Daily API usage reported by the most recent response, if any."""
        ...

    async def execute_query(self, text: str, *, tooling: bool = False) -> QueryPage:
        """Run a SOQL query and return its first page."""
        ...

    async def fetch_more(self, cursor: str) -> QueryPage:
        """Fetch the page designated by a ``nextRecordsUrl`` cursor."""
        ...

    async def list_metadata(self, metadata_type: str) -> list[dict[str, Any]]:
        """List every member of a metadata type (each entry has ``fullName``)."""
        ...

    async def read_metadata(self, metadata_type: str, members: list[str]) -> list[dict[str, Any]]:
        """Read up to ten members of a metadata type."""
        ...

    async def invoke_composite(
        self,
        sub_requests: list[CompositeSubRequest],
        *,
        all_or_none: bool = False,
    ) -> list[CompositeSubResponse]:
        """Send up to 25 sub-requests in one Tooling composite call."""
        ...

    async def describe_global(self) -> list[dict[str, Any]]:
        """List every sObject of the org."""
        ...

    async def describe_sobject(self, name: str) -> dict[str, Any]:
        """Describe one sObject."""
        ...

    async def record_count(self, name: str) -> int:
        """Record count of one sObject (recycle bin included)."""
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...
