"""
Pytest configuration and shared fixtures.

Provides:
- fake_api: an in-memory controller behind `httpx.MockTransport`
- settings: `AppSettings` pointing both backends at fake hosts
- gateway: a fully wired `ControllerGateway` using the fake transport
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx
import pytest

from core.config import AppSettings
from core.domain.models import CentralCredentials
from core.services.gateway import build_gateway

LOCAL = "http://controller.test:9993"
CENTRAL = "https://central.test/api/v1"
CIDR_OPTIONS = ["10.121.15.0/24", "10.121.16.0/24"]


class FakeApi:
    """Routes keyed by (method, full url). Unknown routes answer 404."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []
        self.delay = 0.0
        self.in_flight = 0
        self.max_in_flight = 0

    def add(self, method: str, url: str, payload: Any = None, status: int = 200) -> None:
        self.routes[(method, url)] = (status, payload)

    def urls(self, method: str | None = None) -> list[str]:
        return [str(r.url) for r in self.requests if method is None or r.method == method]

    def body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            route = self.routes.get((request.method, str(request.url)))
            if route is None:
                return httpx.Response(404, json={"error": "not found"})
            status, payload = route
            if isinstance(payload, Exception):
                raise payload
            if payload is None:
                return httpx.Response(status)
            return httpx.Response(status, json=payload)
        finally:
            self.in_flight -= 1

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class StaticCentralStore:
    def __init__(self, api_key: str | None = "central-key", api_url: str | None = CENTRAL) -> None:
        self.creds = CentralCredentials(api_key=api_key, api_url=api_url)
        self.calls = 0

    async def load(self) -> CentralCredentials:
        self.calls += 1
        return self.creds


class BrokenCentralStore:
    async def load(self) -> CentralCredentials:
        raise RuntimeError("database unavailable")


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    return AppSettings(
        _env_file=None,
        zt_addr=LOCAL,
        zt_secret="local-secret",
        zt_secret_file=tmp_path / "missing.secret",
        central_default_url="https://default-central.test/api/v1",
        cidr_options=CIDR_OPTIONS,
    )


@pytest.fixture
def central_store() -> StaticCentralStore:
    return StaticCentralStore()


@pytest.fixture
def gateway(settings, central_store, fake_api):
    return build_gateway(settings, central_store=central_store, transport=fake_api.transport)


def run(coro):
    return asyncio.run(coro)
