"""aiohttp-based Salesforce transport.

Talks to the REST and Tooling endpoints (``/services/data/vXX.X``) and to
the Metadata SOAP endpoint (``/services/Soap/m/XX.X``), and keeps the daily
API usage reported in the ``Sforce-Limit-Info`` response header.
"""

from __future__ import annotations

import re
from typing import Any

import aiohttp
from pydantic import ValidationError

from ..config import DEFAULT_TIMEOUT, compute_api_version
from ..core.exceptions import RemoteCallError
from ..models import ApiUsage, CompositeBatch, CompositeSubRequest, CompositeSubResponse, QueryPage
from . import soap
from .http import HTTPClient

LIMIT_INFO_HEADER = "Sforce-Limit-Info"
_API_USAGE_PATTERN = re.compile(r"(?<![\w-])api-usage=(\d+)/(\d+)")


def parse_limit_info(header: str | None) -> ApiUsage | None:
    """Parse ``api-usage=used/limit`` out of a ``Sforce-Limit-Info`` header.

    Examples:
        >>> parse_limit_info("api-usage=25/15000")
        ApiUsage(used=25, limit=15000)
    """
    if not header:
        return None
    match = _API_USAGE_PATTERN.search(header)
    if match is None:
        return None
    return ApiUsage(used=int(match.group(1)), limit=int(match.group(2)))


class SalesforceRESTTransport:
    """Transport for one org, authenticated with an access token."""

    def __init__(
        self,
        *,
        instance_url: str,
        access_token: str,
        api_version: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the transport.

        Args:
            instance_url: Org base URL (e.g. https://acme.my.salesforce.com)
            access_token: OAuth access token / session id
            api_version: API version such as "61.0" (defaults to the current release)
            timeout: Total timeout of a single call, in seconds
        """
        self._api_version = api_version or f"{compute_api_version()}.0"
        self._access_token = access_token
        self._api_usage: ApiUsage | None = None
        self._http = HTTPClient(
            base_url=instance_url,
            timeout=timeout,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        self._http.add_response_hook(self._capture_limit_info)

    @property
    def api_version(self) -> str:
        return self._api_version

    @property
    def api_usage(self) -> ApiUsage | None:
        return self._api_usage

    @property
    def _data_path(self) -> str:
        return f"/services/data/v{self._api_version}"

    def _capture_limit_info(self, response: aiohttp.ClientResponse) -> None:
        usage = parse_limit_info(response.headers.get(LIMIT_INFO_HEADER))
        if usage is not None:
            self._api_usage = usage

    @staticmethod
    def _page(payload: Any) -> QueryPage:
        if not isinstance(payload, dict):
            raise RemoteCallError("Query response is not an object", payload=payload)
        try:
            return QueryPage(
                records=payload.get("records") or [],
                done=payload.get("done", True),
                next_records_url=payload.get("nextRecordsUrl"),
                total_size=payload.get("totalSize"),
            )
        except ValidationError as e:
            raise RemoteCallError(f"Malformed query response: {e}", payload=payload) from e

    async def execute_query(self, text: str, *, tooling: bool = False) -> QueryPage:
        path = f"{self._data_path}/tooling/query" if tooling else f"{self._data_path}/query"
        payload = await self._http.get(path, params={"q": text})
        return self._page(payload)

    async def fetch_more(self, cursor: str) -> QueryPage:
        payload = await self._http.get(cursor)
        return self._page(payload)

    async def _soap(self, envelope: str) -> str:
        try:
            return await self._http.post_text(
                f"/services/Soap/m/{self._api_version}",
                data=envelope,
                headers={"Content-Type": "text/xml; charset=utf-8", "SOAPAction": '""'},
            )
        except RemoteCallError as e:
            if isinstance(e.payload, str):
                fault = soap.parse_fault(e.payload, status_code=e.status_code)
                if fault is not None:
                    raise fault from e
            raise

    async def list_metadata(self, metadata_type: str) -> list[dict[str, Any]]:
        document = await self._soap(
            soap.list_metadata_envelope(self._access_token, metadata_type, self._api_version)
        )
        return [result for result in soap.parse_results(document) if isinstance(result, dict)]

    async def read_metadata(self, metadata_type: str, members: list[str]) -> list[dict[str, Any]]:
        document = await self._soap(
            soap.read_metadata_envelope(self._access_token, metadata_type, members)
        )
        return soap.parse_read_records(document)

    async def invoke_composite(
        self,
        sub_requests: list[CompositeSubRequest],
        *,
        all_or_none: bool = False,
    ) -> list[CompositeSubResponse]:
        payload = await self._http.post(
            f"{self._data_path}/tooling/composite",
            json=CompositeBatch(sub_requests=sub_requests, all_or_none=all_or_none).to_payload(),
        )
        responses = (payload or {}).get("compositeResponse")
        if not isinstance(responses, list):
            raise RemoteCallError(
                "Composite response has no compositeResponse array", payload=payload
            )
        try:
            return [CompositeSubResponse.model_validate(response) for response in responses]
        except ValidationError as e:
            raise RemoteCallError(f"Malformed composite sub-response: {e}", payload=payload) from e

    async def describe_global(self) -> list[dict[str, Any]]:
        payload = await self._http.get(f"{self._data_path}/sobjects")
        return payload.get("sobjects") or []

    async def describe_sobject(self, name: str) -> dict[str, Any]:
        return await self._http.get(f"{self._data_path}/sobjects/{name}/describe")

    async def record_count(self, name: str) -> int:
        payload = await self._http.get(
            f"{self._data_path}/limits/recordCount", params={"sObjects": name}
        )
        sobjects = (payload or {}).get("sObjects")
        if isinstance(sobjects, list) and len(sobjects) == 1:
            return int(sobjects[0].get("count", 0))
        return 0

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> SalesforceRESTTransport:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
