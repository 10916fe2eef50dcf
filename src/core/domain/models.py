"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling
  the core to I/O libraries.
- Network and member records stay plain dicts: both backends ship open,
  evolving schemas and the normalized view must not drop unknown keys.

Note:
- These models describe *what* the data is, not *how* it is fetched.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

# Normalized records (identifier keys: `nwid` / `nodeId`).
NetworkRecord = dict[str, Any]
MemberRecord = dict[str, Any]


class ResolvedEndpoint(BaseModel):
    """Base URL and headers to use for one call against one backend."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(
        ...,
        min_length=1,
        description="Backend base URL without trailing slash.",
    )
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Auth and content-type headers.",
    )

    def url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


class CentralCredentials(BaseModel):
    """Persisted Central settings as returned by the settings collaborator."""

    api_key: str | None = Field(
        default=None,
        description="Central API key.",
    )
    api_url: str | None = Field(
        default=None,
        description="Custom Central base URL (falls back to the default endpoint).",
    )


class NetworkDetail(BaseModel):
    """Aggregate: a network together with the full detail of every member.

    Only built once every sub-fetch succeeded; never partially populated.
    """

    network: NetworkRecord = Field(
        ...,
        description="Normalized network record.",
    )
    members: list[MemberRecord] = Field(
        default_factory=list,
        description="Normalized member records.",
    )


class ControllerStats(BaseModel):
    """Admin overview of the local controller."""

    network_count: int = Field(
        default=0,
        ge=0,
        description="Number of networks hosted by the controller.",
    )
    total_members: int = Field(
        default=0,
        ge=0,
        description="Sum of members across all networks.",
    )
    controller_status: dict[str, Any] = Field(
        default_factory=dict,
        description="Raw `/status` payload of the controller node.",
    )
