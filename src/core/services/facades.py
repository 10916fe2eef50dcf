"""Backend-aware network and member facades.

Callers pass a `Backend` and the facade dispatches to the matching
`ControllerBackend`; no operation branches on a boolean.

Shape reminders:
- `NetworkFacade.list` returns ids on `Local` and flattened records on
  `Central`; callers branch on the backend to know which one they got.
- `NetworkFacade.update` and every `MemberFacade` call return the
  backend's native shape.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.domain.backend import Backend
from core.domain.errors import ConfigurationError
from core.domain.models import MemberRecord, NetworkRecord
from core.interfaces.controller import ControllerBackend


class _BackendDispatch:
    def __init__(self, controllers: Mapping[Backend, ControllerBackend]) -> None:
        self._controllers = dict(controllers)

    def controller(self, backend: Backend) -> ControllerBackend:
        try:
            return self._controllers[backend]
        except KeyError:
            raise ConfigurationError(f"No controller configured for backend '{backend.value}'") from None


class NetworkFacade(_BackendDispatch):
    async def list(self, backend: Backend = Backend.LOCAL) -> list[str] | list[NetworkRecord]:
        return await self.controller(backend).list_networks()

    async def create(
        self,
        name: str,
        address_config: dict[str, Any] | None = None,
        *,
        backend: Backend = Backend.LOCAL,
    ) -> NetworkRecord:
        return await self.controller(backend).create_network(name, address_config)

    async def read(self, nwid: str, *, backend: Backend = Backend.LOCAL) -> NetworkRecord:
        return await self.controller(backend).get_network(nwid)

    async def update(
        self,
        nwid: str,
        fields: dict[str, Any],
        *,
        backend: Backend = Backend.LOCAL,
    ) -> dict[str, Any]:
        return await self.controller(backend).update_network(nwid, fields)

    async def delete(self, nwid: str, *, backend: Backend = Backend.LOCAL) -> int:
        return await self.controller(backend).delete_network(nwid)


class MemberFacade(_BackendDispatch):
    async def list(self, nwid: str, *, backend: Backend = Backend.LOCAL) -> Any:
        return await self.controller(backend).list_members(nwid)

    async def read(self, nwid: str, member_id: str, *, backend: Backend = Backend.LOCAL) -> MemberRecord:
        return await self.controller(backend).get_member(nwid, member_id)

    async def update(
        self,
        nwid: str,
        member_id: str,
        fields: dict[str, Any],
        *,
        backend: Backend = Backend.LOCAL,
    ) -> MemberRecord:
        """Update (or implicitly create) a member with partial fields."""

        return await self.controller(backend).update_member(nwid, member_id, fields)

    async def delete(self, nwid: str, member_id: str, *, backend: Backend = Backend.LOCAL) -> int:
        return await self.controller(backend).delete_member(nwid, member_id)
