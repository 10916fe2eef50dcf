"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Tables/panels are reused by several commands.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from core.domain.backend import Backend
from core.domain.models import ControllerStats, NetworkDetail


def print_json(console: Console, payload: Any) -> None:
    text = json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True, default=str)
    console.print(Syntax(text, "json", word_wrap=True))


def _ip_list(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return "" if value is None else str(value)


def build_networks_table(networks: Iterable[Any], backend: Backend) -> Table:
    """Local lists plain ids; Central lists flattened records."""

    table = Table(title=f"Networks ({backend.label()})")
    table.add_column("Network ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Private", style="green")

    for network in networks:
        if isinstance(network, dict):
            table.add_row(
                str(network.get("nwid", "")),
                str(network.get("name") or ""),
                str(network.get("private", "")),
            )
        else:
            table.add_row(str(network), "", "")
    return table


def build_members_table(members: Iterable[dict[str, Any]]) -> Table:
    table = Table(title="Members")
    table.add_column("Node ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Authorized", style="green")
    table.add_column("IP assignments", style="magenta")

    for member in members:
        node_id = member.get("nodeId") or member.get("address") or member.get("id") or ""
        table.add_row(
            str(node_id),
            str(member.get("name") or ""),
            str(bool(member.get("authorized"))),
            _ip_list(member.get("ipAssignments")),
        )
    return table


def build_detail_panel(detail: NetworkDetail) -> Panel:
    network = detail.network
    body = Text()
    body.append(f"{network.get('name') or '(unnamed)'}\n", style="bold")
    body.append(f"Private: {network.get('private')}\n")
    pools = network.get("ipAssignmentPools") or []
    if pools:
        body.append("Pools:\n", style="bold")
        for pool in pools:
            body.append(f"- {pool.get('ipRangeStart')} -> {pool.get('ipRangeEnd')}\n")
    routes = network.get("routes") or []
    if routes:
        body.append("Routes:\n", style="bold")
        for route in routes:
            body.append(f"- {route.get('target')} via {route.get('via') or 'LAN'}\n")
    cidr = network.get("cidr") or []
    if cidr:
        body.append(f"CIDR options: {len(cidr)}", style="dim")

    title = Text(f"Network {network.get('nwid', '')}", style="bold cyan")
    return Panel(body, title=title, border_style="cyan")


def build_stats_table(stats: ControllerStats) -> Table:
    table = Table(title="Controller")
    table.add_column("Metric", style="bright_green", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("Networks", str(stats.network_count))
    table.add_row("Members", str(stats.total_members))
    table.add_row("Address", str(stats.controller_status.get("address", "")))
    table.add_row("Version", str(stats.controller_status.get("version", "")))
    table.add_row("Online", str(stats.controller_status.get("online", "")))
    return table
