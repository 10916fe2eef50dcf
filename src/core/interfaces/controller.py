"""Controller contracts.

Why Protocol:
- Both backends (local controller, Central) implement the same structural
  contract, so facades and aggregation strategies never branch on a flag.
- Tests can swap in fakes without inheriting from adapter classes.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from core.domain.backend import Backend
from core.domain.models import CentralCredentials, MemberRecord, NetworkRecord


@runtime_checkable
class ControllerBackend(Protocol):
    """Network/member CRUD against one backend.

    Shapes:
    - `list_networks` returns ids on `Local` and flattened records on `Central`.
    - `create_network`/`get_network` return flattened records.
    - `update_network` and all member operations return the backend's native shape.
    """

    backend: Backend

    async def get_status(self) -> dict[str, Any]: ...

    async def list_networks(self) -> list[str] | list[NetworkRecord]: ...

    async def create_network(self, name: str, address_config: dict[str, Any] | None = None) -> NetworkRecord: ...

    async def get_network(self, nwid: str) -> NetworkRecord: ...

    async def update_network(self, nwid: str, fields: dict[str, Any]) -> dict[str, Any]: ...

    async def delete_network(self, nwid: str) -> int: ...

    async def list_members(self, nwid: str) -> Any: ...

    async def get_member(self, nwid: str, member_id: str) -> MemberRecord: ...

    async def update_member(self, nwid: str, member_id: str, fields: dict[str, Any]) -> MemberRecord: ...

    async def delete_member(self, nwid: str, member_id: str) -> int: ...


@runtime_checkable
class CentralSettingsStore(Protocol):
    """External collaborator holding the persisted Central API key/URL."""

    async def load(self) -> CentralCredentials:
        """Return the stored credentials; raise on lookup failure."""

        ...


@runtime_checkable
class AddressPoolProvider(Protocol):
    """External helper returning candidate CIDR ranges for a network."""

    def __call__(self) -> list[str]: ...
