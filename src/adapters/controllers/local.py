"""Self-hosted controller (`X-ZT1-Auth`, already-flat JSON).

Endpoints: `/status`, `/controller`, `/controller/network[/{nwid}]`,
`/controller/network/{nwid}/member[/{memberId}]`, `/peer[/{address}]`.
"""

from __future__ import annotations

import logging
from typing import Any

from adapters.controllers.base import BaseController
from core.domain.backend import Backend
from core.domain.errors import TransportFailure, ZtApiError
from core.domain.models import MemberRecord, NetworkRecord

logger = logging.getLogger(__name__)

# The controller fills in the trailing 24 bits of the network id.
NETWORK_ID_FILLER = "______"


class LocalController(BaseController):
    backend = Backend.LOCAL

    async def get_version(self) -> dict[str, Any]:
        with self.operation("get_controller_version"):
            return await self._get("/controller")

    async def list_networks(self) -> list[str]:
        with self.operation("get_controller_networks"):
            return await self._get("/controller/network") or []

    async def create_network(self, name: str, address_config: dict[str, Any] | None = None) -> NetworkRecord:
        payload = {"name": name, "private": True, **(address_config or {})}
        with self.operation("network_create"):
            status = await self.get_status()
            address = (status or {}).get("address")
            if not address:
                raise TransportFailure("Controller status did not report a node address")
            return await self._post(f"/controller/network/{address}{NETWORK_ID_FILLER}", payload)

    async def get_network(self, nwid: str) -> NetworkRecord:
        with self.operation("network_detail"):
            return await self._get(f"/controller/network/{nwid}")

    async def update_network(self, nwid: str, fields: dict[str, Any]) -> dict[str, Any]:
        with self.operation("network_update"):
            return await self._post(f"/controller/network/{nwid}", fields)

    async def delete_network(self, nwid: str) -> int:
        with self.operation("network_delete"):
            return await self._delete(f"/controller/network/{nwid}")

    async def list_members(self, nwid: str) -> dict[str, int]:
        """Member ids mapped to their revision counter."""

        with self.operation("network_members"):
            return await self._get(f"/controller/network/{nwid}/member") or {}

    async def get_member(self, nwid: str, member_id: str) -> MemberRecord:
        with self.operation("member_details"):
            return await self._get(f"/controller/network/{nwid}/member/{member_id}")

    async def update_member(self, nwid: str, member_id: str, fields: dict[str, Any]) -> MemberRecord:
        with self.operation("member_update"):
            return await self._post(f"/controller/network/{nwid}/member/{member_id}", fields)

    async def delete_member(self, nwid: str, member_id: str) -> int:
        with self.operation("member_delete"):
            return await self._delete(f"/controller/network/{nwid}/member/{member_id}")

    async def peers(self) -> list[dict[str, Any]]:
        with self.operation("peers"):
            return await self._get("/peer") or []

    async def peer(self, address: str) -> dict[str, Any]:
        """Best-effort peer lookup.

        Unlike every other operation this one does not raise: a failure is
        logged and an empty result returned, so a member view can render
        without peer data when the node is offline or unknown.
        """

        try:
            return await self._get(f"/peer/{address}") or {}
        except ZtApiError as exc:
            logger.error("peer lookup for %s failed: %s", address, exc)
            return {}
