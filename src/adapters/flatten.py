"""Central payload normalization ("flattening").

Central wraps configuration in a nested object:

    {"id": "...", "config": {...}, ...other}

The normalized form renames `id` to the canonical identifier (`nwid` for
networks, `nodeId` for members) and spreads `config` into the top level:

    {"nwid": "...", **config, **other}

Local payloads are already flat and never go through here. Apply once per
wire record: re-flattening a flat record loses the identifier rename.
"""

from __future__ import annotations

from typing import Any, Iterable

from core.domain.models import MemberRecord, NetworkRecord


def flatten_record(raw: dict[str, Any], id_field: str) -> dict[str, Any]:
    rest = dict(raw)
    identifier = rest.pop("id", None)
    config = rest.pop("config", None) or {}
    return {id_field: identifier, **config, **rest}


def flatten_network(network: dict[str, Any]) -> NetworkRecord:
    return flatten_record(network, "nwid")


def flatten_member(member: dict[str, Any]) -> MemberRecord:
    return flatten_record(member, "nodeId")


def merge_network_config(network: dict[str, Any]) -> NetworkRecord:
    """Detail-view merge: like `flatten_network`, but `config` wins on collisions."""

    rest = dict(network)
    nwid = rest.pop("id", None)
    config = rest.pop("config", None) or {}
    return {"nwid": nwid, **rest, **config}


def flatten_networks(networks: Iterable[dict[str, Any]] | None) -> list[NetworkRecord]:
    if not networks:
        return []
    return [flatten_network(network) for network in networks]


def flatten_members(members: Iterable[dict[str, Any]] | None) -> list[MemberRecord]:
    """Flatten a member sequence; `None` yields an empty list."""

    if not members:
        return []
    return [flatten_member(member) for member in members]
