"""ZeroTier Central (`Authorization: token <key>`, nested `{id, config}` JSON).

Endpoints: `/status`, `/network[/{nwid}]`, `/network/{nwid}/member[/{memberId}]`.
"""

from __future__ import annotations

from typing import Any

from adapters.controllers.base import BaseController
from adapters.flatten import flatten_network, flatten_networks
from core.domain.backend import Backend
from core.domain.models import MemberRecord, NetworkRecord

CREATED_BY_DESCRIPTION = "created with ztnet"


class CentralController(BaseController):
    backend = Backend.CENTRAL

    async def ping(self) -> list[dict[str, Any]]:
        """Raw network list; used to check that the stored API key works."""

        with self.operation("ping_api"):
            return await self._get("/network") or []

    async def list_networks(self) -> list[NetworkRecord]:
        with self.operation("get_controller_networks"):
            return flatten_networks(await self._get("/network"))

    async def create_network(self, name: str, address_config: dict[str, Any] | None = None) -> NetworkRecord:
        payload = {"name": name, "private": True, **(address_config or {})}
        with self.operation("network_create"):
            created = await self._post(
                "/network",
                {"config": payload, "description": CREATED_BY_DESCRIPTION},
            )
        return flatten_network(created)

    async def get_network_raw(self, nwid: str) -> dict[str, Any]:
        with self.operation("network_detail"):
            return await self._get(f"/network/{nwid}")

    async def get_network(self, nwid: str) -> NetworkRecord:
        return flatten_network(await self.get_network_raw(nwid))

    async def update_network(self, nwid: str, fields: dict[str, Any]) -> dict[str, Any]:
        with self.operation("network_update"):
            return await self._post(f"/network/{nwid}", fields)

    async def delete_network(self, nwid: str) -> int:
        with self.operation("network_delete"):
            return await self._delete(f"/network/{nwid}")

    async def list_members(self, nwid: str) -> list[dict[str, Any]]:
        with self.operation("network_members"):
            return await self._get(f"/network/{nwid}/member") or []

    async def get_member(self, nwid: str, member_id: str) -> MemberRecord:
        with self.operation("member_details"):
            return await self._get(f"/network/{nwid}/member/{member_id}")

    async def update_member(self, nwid: str, member_id: str, fields: dict[str, Any]) -> MemberRecord:
        with self.operation("member_update"):
            return await self._post(f"/network/{nwid}/member/{member_id}", fields)

    async def delete_member(self, nwid: str, member_id: str) -> int:
        with self.operation("member_delete"):
            return await self._delete(f"/network/{nwid}/member/{member_id}")
