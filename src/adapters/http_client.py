"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts, headers and logging for both controller APIs.
- Maps HTTP failures onto the domain error taxonomy in one place.
- Eases testing: an `httpx.MockTransport` can be injected.

No retries, no pooling: every call opens and closes its own client.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from core.config import AppSettings
from core.domain.errors import InvalidCredentials, NotFound, TransportFailure, ZtApiError

logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with safe defaults.

    Why a builder:
    - Centralizes timeouts/headers so both backends behave the same.
    - `transport` lets tests route requests to a fake controller.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def _error_for_response(response: httpx.Response, message: str) -> ZtApiError:
    status = response.status_code
    cause = httpx.HTTPStatusError(
        f"HTTP {status} for {response.request.method} {response.request.url}",
        request=response.request,
        response=response,
    )
    if status == 401:
        return InvalidCredentials("Invalid API Key", cause=cause, status_code=status)
    if status == 404:
        return NotFound("Endpoint Not Found", cause=cause, status_code=status)
    return TransportFailure(message, cause=cause, status_code=status)


def _decode(response: httpx.Response, url: str) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise TransportFailure(
            f"Invalid JSON received from {url}",
            cause=exc,
            status_code=response.status_code,
        ) from exc


class ApiTransport:
    """GET/POST/DELETE against a resolved address/header pair."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    def _client(self, headers: dict[str, str]) -> httpx.AsyncClient:
        return build_async_client(self._settings, extra_headers=headers, transport=self._transport)

    async def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        *,
        body: Any = None,
        failure_message: str,
    ) -> httpx.Response:
        logger.debug("%s %s", method, url)
        try:
            async with self._client(headers) as client:
                if body is None:
                    response = await client.request(method, url)
                else:
                    response = await client.request(method, url, json=body)
        except httpx.HTTPError as exc:
            raise TransportFailure(failure_message, cause=exc) from exc

        if not response.is_success:
            error = _error_for_response(response, failure_message)
            raise error from error.cause
        return response

    async def get(self, url: str, headers: dict[str, str]) -> Any:
        response = await self._send(
            "GET",
            url,
            headers,
            failure_message=f"An error occurred fetching data from {url}",
        )
        return _decode(response, url)

    async def post(self, url: str, headers: dict[str, str], body: Any) -> Any:
        response = await self._send(
            "POST",
            url,
            headers,
            body=body,
            failure_message=f"An error occurred while posting data to {url}",
        )
        return _decode(response, url)

    async def delete(self, url: str, headers: dict[str, str]) -> int:
        response = await self._send(
            "DELETE",
            url,
            headers,
            failure_message=f"An error occurred while deleting {url}",
        )
        return response.status_code
