"""Shared plumbing for both controller variants.

Each operation resolves credentials, performs one or more transport calls
and, on failure, re-raises the same error class with an operation-specific
message (prefixed for Central) so logs show which API and call failed.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from adapters.credentials import CredentialResolver
from adapters.http_client import ApiTransport
from core.domain.backend import Backend
from core.domain.errors import ZtApiError


class BaseController:
    backend: Backend = Backend.LOCAL

    def __init__(self, resolver: CredentialResolver, transport: ApiTransport) -> None:
        self._resolver = resolver
        self._transport = transport

    def error_message(self, operation: str) -> str:
        return f"{self.backend.error_prefix()}An error occurred while getting {operation}"

    @contextmanager
    def operation(self, name: str) -> Iterator[None]:
        """Re-wrap any domain error raised inside the block."""

        try:
            yield
        except ZtApiError as exc:
            raise exc.rewrap(self.error_message(name)) from exc

    async def _get(self, path: str) -> Any:
        endpoint = await self._resolver.resolve(self.backend)
        return await self._transport.get(endpoint.url(path), endpoint.headers)

    async def _post(self, path: str, body: Any) -> Any:
        endpoint = await self._resolver.resolve(self.backend)
        return await self._transport.post(endpoint.url(path), endpoint.headers, body)

    async def _delete(self, path: str) -> int:
        endpoint = await self._resolver.resolve(self.backend)
        return await self._transport.delete(endpoint.url(path), endpoint.headers)

    async def get_status(self) -> dict[str, Any]:
        with self.operation("get_controller_status"):
            return await self._get("/status")
