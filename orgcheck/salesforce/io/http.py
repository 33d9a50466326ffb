"""HTTP client helper."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any

import aiohttp

from ..config import DEFAULT_TIMEOUT
from ..core.exceptions import RemoteCallError

logger = logging.getLogger(__name__)

ResponseHook = Callable[[aiohttp.ClientResponse], Any]


def error_from_payload(status: int, payload: Any) -> RemoteCallError:
    """Build a RemoteCallError from a Salesforce REST error payload.

    Salesforce reports failures as ``[{"errorCode": ..., "message": ...}]``.
    """
    error_code = None
    message = f"HTTP {status}"
    if isinstance(payload, list) and payload and isinstance(payload[0], dict):
        error_code = payload[0].get("errorCode")
        message = payload[0].get("message") or message
    elif isinstance(payload, dict):
        error_code = payload.get("errorCode") or payload.get("error")
        message = payload.get("message") or payload.get("error_description") or message
    return RemoteCallError(message, error_code=error_code, status_code=status, payload=payload)


class HTTPClient:
    """Async HTTP client wrapper."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = dict(headers or {})
        self._session: aiohttp.ClientSession | None = None
        self._response_hooks: list[ResponseHook] = []

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout, headers=self.headers)
        return self._session

    def add_response_hook(self, hook: ResponseHook) -> None:
        """Register a hook called with every response (sync or async)."""
        self._response_hooks.append(hook)

    def _url(self, url: str) -> str:
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url}{url}"
        return url

    async def _run_hooks(self, response: aiohttp.ClientResponse) -> None:
        for hook in self._response_hooks:
            try:
                result = hook(response)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.warning(
                    "response_hook_failed",
                    extra={
                        "hook": getattr(hook, "__name__", repr(hook)),
                        "error_type": type(e).__name__,
                        "error_message": str(e),
                    },
                    exc_info=True,
                )

    async def _read_payload(self, response: aiohttp.ClientResponse) -> Any:
        if "json" in (response.content_type or ""):
            return await response.json()
        return await response.text()

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        data: str | None = None,
        headers: dict[str, str] | None = None,
        raw_text: bool = False,
    ) -> Any:
        url = self._url(url)
        try:
            async with self.session.request(
                method, url, params=params, json=json, data=data, headers=headers
            ) as response:
                await self._run_hooks(response)
                if response.status >= 400:
                    payload = await self._read_payload(response)
                    raise error_from_payload(response.status, payload)
                if raw_text:
                    return await response.text()
                if response.status == 204:
                    return None
                return await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RemoteCallError(
                f"{method} {url} failed: {str(e) or type(e).__name__}",
                error_code=type(e).__name__,
            ) from e

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET request returning the decoded JSON body."""
        return await self._request("GET", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """POST a JSON body and return the decoded JSON body."""
        return await self._request("POST", url, json=json, headers=headers)

    async def post_text(
        self,
        url: str,
        data: str,
        headers: dict[str, str] | None = None,
    ) -> str:
        """POST a raw body (e.g. a SOAP envelope) and return the raw response text."""
        return await self._request("POST", url, data=data, headers=headers, raw_text=True)

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
