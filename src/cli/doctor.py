"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.settings_store import EnvFileCentralStore
from core.config import AppSettings
from core.domain.errors import ZtApiError
from core.services.gateway import ControllerGateway, build_gateway

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_local(gateway: ControllerGateway) -> tuple[bool, str]:
    try:
        status = await gateway.local.get_status()
        return True, f"node {status.get('address', '?')} v{status.get('version', '?')}"
    except ZtApiError as exc:
        return False, str(exc)


async def _check_central(gateway: ControllerGateway) -> tuple[bool, str]:
    try:
        networks = await gateway.central.ping()
        return True, f"{len(networks)} network(s) visible"
    except ZtApiError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    gateway = build_gateway(settings)

    table = Table(title="ztnet-bridge Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if settings.zt_secret:
        table.add_row("Controller token", "OK", "explicit ZTNET_ZT_SECRET")
    elif settings.zt_secret_file.exists():
        table.add_row("Controller token", "OK", str(settings.zt_secret_file))
    else:
        table.add_row("Controller token", "MISSING", f"{settings.zt_secret_file} not found")
    table.add_row("Controller address", "OK", settings.zt_addr)

    if settings.central_api_key:
        table.add_row("Central API key", "OK", settings.central_api_url or settings.central_default_url)
    else:
        table.add_row("Central API key", "OPTIONAL", "No key set -> Central commands unavailable")

    # Connectivity (best-effort)
    ok_local, detail_local = asyncio.run(_check_local(gateway))
    table.add_row("Local controller", "OK" if ok_local else "FAIL", detail_local)

    if settings.central_api_key:
        ok_central, detail_central = asyncio.run(_check_central(gateway))
        table.add_row("ZeroTier Central", "OK" if ok_central else "FAIL", detail_central)

    _console.print(table)


@app.command(name="setup-central")
def setup_central() -> None:
    """Interactive Central setup (stores the key in the user config .env)."""

    api_key = typer.prompt("Central API key", hide_input=True, confirmation_prompt=False).strip()
    api_url = typer.prompt(
        "Central API URL (empty for default)",
        default="",
        show_default=False,
    ).strip()

    if not api_key:
        raise typer.BadParameter("api key is required")

    env_path = EnvFileCentralStore().save(api_key=api_key, api_url=api_url or None)
    _console.print(f"[green]Saved Central config to:[/green] {env_path}")
