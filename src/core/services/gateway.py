"""Wiring of resolver, transport, controllers and services.

Entry-points (CLI, tests, an embedding web app) build one gateway from an
explicit `AppSettings` instead of reading process state on every call.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from adapters.controllers import CentralController, LocalController
from adapters.credentials import CredentialResolver
from adapters.http_client import ApiTransport
from adapters.settings_store import SettingsCentralStore
from core.config import AppSettings
from core.domain.backend import Backend
from core.domain.models import ControllerStats, NetworkDetail
from core.interfaces.controller import AddressPoolProvider, CentralSettingsStore
from core.services.facades import MemberFacade, NetworkFacade
from core.services.network_detail import DetailAggregator, controller_stats


def settings_address_pool(settings: AppSettings) -> AddressPoolProvider:
    """Address-pool provider returning the configured CIDR candidates."""

    def _candidates() -> list[str]:
        return list(settings.cidr_options)

    return _candidates


@dataclass
class ControllerGateway:
    """Everything a caller needs to talk to both backends."""

    settings: AppSettings
    local: LocalController
    central: CentralController
    networks: NetworkFacade = field(init=False)
    members: MemberFacade = field(init=False)
    details: DetailAggregator = field(init=False)
    address_pool: AddressPoolProvider | None = None

    def __post_init__(self) -> None:
        controllers = {Backend.LOCAL: self.local, Backend.CENTRAL: self.central}
        self.networks = NetworkFacade(controllers)
        self.members = MemberFacade(controllers)
        self.details = DetailAggregator(controllers, address_pool=self.address_pool)

    async def network_detail(self, nwid: str, *, backend: Backend = Backend.LOCAL) -> NetworkDetail:
        return await self.details.fetch(nwid, backend=backend)

    async def stats(self) -> ControllerStats:
        return await controller_stats(self.local)


def build_gateway(
    settings: AppSettings | None = None,
    *,
    central_store: CentralSettingsStore | None = None,
    address_pool: AddressPoolProvider | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ControllerGateway:
    settings = settings or AppSettings()
    resolver = CredentialResolver(settings, central_store or SettingsCentralStore(settings))
    api = ApiTransport(settings, transport=transport)
    return ControllerGateway(
        settings=settings,
        local=LocalController(resolver, api),
        central=CentralController(resolver, api),
        address_pool=address_pool or settings_address_pool(settings),
    )
