"""ztnet CLI (Typer + Rich).

Thin layer: builds a `ControllerGateway`, runs one coroutine per command
and renders the result. All aggregation lives in `core.services`.
"""

from __future__ import annotations

import asyncio
import ipaddress
import json
from typing import Any, Awaitable, Optional, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from cli import doctor
from cli.ui_components import (
    build_detail_panel,
    build_members_table,
    build_networks_table,
    build_stats_table,
    print_json,
)
from core.config import AppSettings
from core.domain.backend import Backend
from core.domain.errors import ZtApiError
from core.logging_config import setup_logging
from core.services.gateway import ControllerGateway, build_gateway

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Manage ZeroTier networks on a local controller or ZeroTier Central.")
network_app = typer.Typer(no_args_is_help=True, help="Network operations.")
member_app = typer.Typer(no_args_is_help=True, help="Member operations.")
controller_app = typer.Typer(no_args_is_help=True, help="Local controller information.")

app.add_typer(network_app, name="network")
app.add_typer(member_app, name="member")
app.add_typer(controller_app, name="controller")
app.add_typer(doctor.app, name="doctor")

_console = Console()

CentralOption = typer.Option(False, "--central", help="Target ZeroTier Central instead of the local controller.")
JsonOption = typer.Option(False, "--json", help="Print raw JSON.")


def _gateway() -> ControllerGateway:
    return build_gateway(AppSettings())


def _run(awaitable: Awaitable[T]) -> T:
    try:
        return asyncio.run(awaitable)
    except ZtApiError as exc:
        _console.print(f"[red]Error ({exc.error_code}):[/red] {escape(str(exc))}")
        if exc.cause is not None:
            # Composite calls wrap the classified failure; show which one it was.
            cause_code = getattr(exc.cause, "error_code", type(exc.cause).__name__)
            _console.print(f"[dim]cause ({cause_code}): {escape(str(exc.cause))}[/dim]")
        raise typer.Exit(code=1) from exc


def _parse_assignments(values: list[str]) -> dict[str, Any]:
    """`key=value` pairs; values are JSON when they parse, else strings."""

    fields: dict[str, Any] = {}
    for item in values:
        if "=" not in item:
            raise typer.BadParameter(f"expected key=value, got '{item}'")
        key, raw = item.split("=", 1)
        try:
            fields[key.strip()] = json.loads(raw)
        except ValueError:
            fields[key.strip()] = raw
    return fields


def address_config_for(cidr: str) -> dict[str, Any]:
    """IPv4 assignment settings covering every host of `cidr`."""

    try:
        net = ipaddress.ip_network(cidr, strict=False)
    except ValueError as exc:
        raise typer.BadParameter(f"invalid CIDR '{cidr}': {exc}", param_hint="--cidr") from exc
    hosts = list(net.hosts()) if net.num_addresses > 2 else list(net)
    return {
        "ipAssignmentPools": [{"ipRangeStart": str(hosts[0]), "ipRangeEnd": str(hosts[-1])}],
        "routes": [{"target": str(net), "via": None}],
        "v4AssignMode": {"zt": True},
    }


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR."),
) -> None:
    setup_logging(log_level or AppSettings().log_level)


# ---------------------------------------------------------------- networks


@network_app.command("list")
def network_list(central: bool = CentralOption, as_json: bool = JsonOption) -> None:
    """List networks (ids on the local controller, full records on Central)."""

    backend = Backend.from_bool(central)
    networks = _run(_gateway().networks.list(backend))
    if as_json:
        print_json(_console, networks)
        return
    _console.print(build_networks_table(networks, backend))


@network_app.command("create")
def network_create(
    name: str = typer.Argument(..., help="Network name."),
    cidr: Optional[str] = typer.Option(None, "--cidr", help="IPv4 range to assign, e.g. 10.121.15.0/24."),
    central: bool = CentralOption,
) -> None:
    """Create a private network."""

    address_config = address_config_for(cidr) if cidr else {}
    created = _run(_gateway().networks.create(name, address_config, backend=Backend.from_bool(central)))
    print_json(_console, created)


@network_app.command("show")
def network_show(
    nwid: str = typer.Argument(..., help="Network id."),
    central: bool = CentralOption,
    as_json: bool = JsonOption,
) -> None:
    """Show a network together with every member's detail."""

    detail = _run(_gateway().network_detail(nwid, backend=Backend.from_bool(central)))
    if as_json:
        print_json(_console, detail.model_dump(mode="json"))
        return
    _console.print(build_detail_panel(detail))
    _console.print(build_members_table(detail.members))


@network_app.command("update")
def network_update(
    nwid: str = typer.Argument(..., help="Network id."),
    assignments: list[str] = typer.Option(..., "--set", help="key=value (JSON values accepted)."),
    central: bool = CentralOption,
) -> None:
    """Update network fields."""

    fields = _parse_assignments(assignments)
    updated = _run(_gateway().networks.update(nwid, fields, backend=Backend.from_bool(central)))
    print_json(_console, updated)


@network_app.command("delete")
def network_delete(
    nwid: str = typer.Argument(..., help="Network id."),
    central: bool = CentralOption,
) -> None:
    """Delete a network."""

    status = _run(_gateway().networks.delete(nwid, backend=Backend.from_bool(central)))
    _console.print(f"[green]Deleted[/green] {nwid} (HTTP {status})")


# ----------------------------------------------------------------- members


@member_app.command("list")
def member_list(
    nwid: str = typer.Argument(..., help="Network id."),
    central: bool = CentralOption,
) -> None:
    """List members in the backend's native shape."""

    print_json(_console, _run(_gateway().members.list(nwid, backend=Backend.from_bool(central))))


@member_app.command("show")
def member_show(
    nwid: str = typer.Argument(..., help="Network id."),
    member_id: str = typer.Argument(..., help="Member node id."),
    central: bool = CentralOption,
) -> None:
    """Show one member."""

    print_json(_console, _run(_gateway().members.read(nwid, member_id, backend=Backend.from_bool(central))))


@member_app.command("authorize")
def member_authorize(
    nwid: str = typer.Argument(..., help="Network id."),
    member_id: str = typer.Argument(..., help="Member node id."),
    revoke: bool = typer.Option(False, "--revoke", help="Deauthorize instead."),
    central: bool = CentralOption,
) -> None:
    """Authorize (or deauthorize) a member."""

    backend = Backend.from_bool(central)
    authorized = not revoke
    # Central expects member settings inside `config`.
    fields: dict[str, Any] = {"config": {"authorized": authorized}} if backend.is_central else {"authorized": authorized}
    print_json(_console, _run(_gateway().members.update(nwid, member_id, fields, backend=backend)))


@member_app.command("update")
def member_update(
    nwid: str = typer.Argument(..., help="Network id."),
    member_id: str = typer.Argument(..., help="Member node id."),
    assignments: list[str] = typer.Option(..., "--set", help="key=value (JSON values accepted)."),
    central: bool = CentralOption,
) -> None:
    """Update (or create) a member with partial fields."""

    fields = _parse_assignments(assignments)
    print_json(
        _console,
        _run(_gateway().members.update(nwid, member_id, fields, backend=Backend.from_bool(central))),
    )


@member_app.command("delete")
def member_delete(
    nwid: str = typer.Argument(..., help="Network id."),
    member_id: str = typer.Argument(..., help="Member node id."),
    central: bool = CentralOption,
) -> None:
    """Delete a member."""

    status = _run(_gateway().members.delete(nwid, member_id, backend=Backend.from_bool(central)))
    _console.print(f"[green]Deleted[/green] {member_id} from {nwid} (HTTP {status})")


# -------------------------------------------------------------- controller


@controller_app.command("status")
def controller_status(central: bool = CentralOption) -> None:
    """Node status of the controller (or Central account status)."""

    gateway = _gateway()
    controller = gateway.central if central else gateway.local
    print_json(_console, _run(controller.get_status()))


@controller_app.command("version")
def controller_version() -> None:
    """Controller API version."""

    print_json(_console, _run(_gateway().local.get_version()))


@controller_app.command("stats")
def controller_stats() -> None:
    """Network and member counts."""

    _console.print(build_stats_table(_run(_gateway().stats())))


@controller_app.command("peers")
def controller_peers() -> None:
    """All peers known to the local node."""

    print_json(_console, _run(_gateway().local.peers()))


@controller_app.command("peer")
def controller_peer(address: str = typer.Argument(..., help="Peer node address.")) -> None:
    """One peer; prints `{}` when the lookup fails."""

    print_json(_console, _run(_gateway().local.peer(address)))


def run() -> None:
    app()
