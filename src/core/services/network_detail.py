"""Network detail aggregation.

Builds the "network with all its members" view out of several controller
calls. The fetch strategy depends on the backend and the two are kept
separate on purpose:

- Local: the controller sits behind a single local socket, so member
  details are fetched one at a time, in the order the controller lists them.
- Central: the cloud API scales, so every member detail is requested at
  once and joined with `asyncio.gather`.

Either way the result is all-or-nothing: any failed sub-fetch raises
`AggregationFailure` and no partial `NetworkDetail` is ever returned.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Protocol

from adapters.controllers.central import CentralController
from adapters.flatten import flatten_members, merge_network_config
from core.domain.backend import Backend
from core.domain.errors import AggregationFailure, ConfigurationError, TransportFailure, ZtApiError
from core.domain.models import ControllerStats, MemberRecord, NetworkDetail
from core.interfaces.controller import AddressPoolProvider, ControllerBackend

logger = logging.getLogger(__name__)


def member_ids(members: Any) -> list[str]:
    """Ids from a local member listing (`{id: revision}` or a plain list)."""

    if not members:
        return []
    if isinstance(members, Mapping):
        return [str(member_id) for member_id in members.keys()]
    return [str(member_id) for member_id in members]


def require_record(value: Any, what: str) -> dict[str, Any]:
    """Reject empty or non-object bodies from a sub-fetch."""

    if not isinstance(value, Mapping):
        raise TransportFailure(f"{what} returned no data")
    return dict(value)


class DetailStrategy(Protocol):
    async def fetch(self, controller: Any, nwid: str) -> NetworkDetail: ...


class SequentialDetailStrategy:
    """One member-detail request at a time, in listing order."""

    async def fetch(self, controller: ControllerBackend, nwid: str) -> NetworkDetail:
        members = await controller.list_members(nwid)

        details: list[MemberRecord] = []
        for member_id in member_ids(members):
            member = await controller.get_member(nwid, member_id)
            details.append(require_record(member, f"member {member_id}"))

        network = require_record(await controller.get_network(nwid), f"network {nwid}")
        return NetworkDetail(network=network, members=details)


class ConcurrentDetailStrategy:
    """All member-detail requests fanned out and joined as a unit."""

    def __init__(self, address_pool: AddressPoolProvider | None = None) -> None:
        self._address_pool = address_pool

    async def fetch(self, controller: CentralController, nwid: str) -> NetworkDetail:
        members = await controller.list_members(nwid)
        raw_network = require_record(await controller.get_network_raw(nwid), f"network {nwid}")

        node_ids = []
        for member in members or []:
            node_id = member.get("nodeId") if isinstance(member, Mapping) else None
            if not node_id:
                raise TransportFailure(f"member listing of {nwid} has an entry without nodeId")
            node_ids.append(node_id)

        async def _detail(node_id: str) -> dict[str, Any]:
            return require_record(await controller.get_member(nwid, node_id), f"member {node_id}")

        # First failure propagates; nothing partial escapes.
        details = await asyncio.gather(*(_detail(node_id) for node_id in node_ids))

        network = merge_network_config(raw_network)
        network["cidr"] = list(self._address_pool()) if self._address_pool else []
        return NetworkDetail(network=network, members=flatten_members(details))


class DetailAggregator:
    """Selects the fetch strategy by backend and wraps failures."""

    def __init__(
        self,
        controllers: Mapping[Backend, ControllerBackend],
        *,
        address_pool: AddressPoolProvider | None = None,
        strategies: Mapping[Backend, DetailStrategy] | None = None,
    ) -> None:
        self._controllers = dict(controllers)
        self._strategies: dict[Backend, DetailStrategy] = {
            Backend.LOCAL: SequentialDetailStrategy(),
            Backend.CENTRAL: ConcurrentDetailStrategy(address_pool),
        }
        if strategies:
            self._strategies.update(strategies)

    async def fetch(self, nwid: str, *, backend: Backend = Backend.LOCAL) -> NetworkDetail:
        controller = self._controllers.get(backend)
        if controller is None:
            raise ConfigurationError(f"No controller configured for backend '{backend.value}'")

        try:
            return await self._strategies[backend].fetch(controller, nwid)
        except ZtApiError as exc:
            source = "[ZT CENTRAL] " if backend.is_central else ""
            message = f"{source}An error occurred while getting data from network_details function"
            logger.debug("%s (nwid=%s): %s", message, nwid, exc)
            raise AggregationFailure(message, cause=exc, status_code=exc.status_code) from exc


async def controller_stats(controller: ControllerBackend) -> ControllerStats:
    """Network count, total members and node status of a local controller.

    Member listings are fetched sequentially, like local detail aggregation.
    """

    try:
        networks = await controller.list_networks()
        total_members = 0
        for nwid in networks:
            total_members += len(member_ids(await controller.list_members(str(nwid))))
        status = await controller.get_status()
    except ZtApiError as exc:
        raise AggregationFailure(
            "An error occurred while getting controller stats",
            cause=exc,
            status_code=exc.status_code,
        ) from exc

    return ControllerStats(
        network_count=len(networks),
        total_members=total_members,
        controller_status=status or {},
    )
