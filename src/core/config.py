"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking into the CLI.
- Lets adapters (resolver, transport) read configuration consistently.
- Replaces module-level token state: the resolver receives an explicit settings object.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_LOCAL_ADDR = "http://127.0.0.1:9993"
DEFAULT_CENTRAL_URL = "https://api.zerotier.com/api/v1"
DEFAULT_SECRET_FILE = Path("/var/lib/zerotier-one/authtoken.secret")


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "ztnet-bridge"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "ztnet-bridge"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "ztnet-bridge"
    return Path.home() / ".config" / "ztnet-bridge"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Write/update variables in the user's global .env file."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# ztnet-bridge user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application configuration.

    Why pydantic-settings:
    - Typed + validated at the edge (env vars) without polluting the core.
    - A single configuration contract shared by CLI and adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="ZTNET_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    # Local controller
    zt_addr: str = Field(
        default=DEFAULT_LOCAL_ADDR,
        min_length=8,
        description="Base address of the self-hosted controller.",
    )
    zt_secret: str | None = Field(
        default=None,
        description="Explicit controller auth token (overrides the secret file).",
    )
    zt_secret_file: Path = Field(
        default=DEFAULT_SECRET_FILE,
        description="File holding the controller auth token.",
    )
    test_context: bool = Field(
        default=False,
        description="Non-production test context: use a placeholder token when none is configured.",
    )

    # Central service
    central_default_url: str = Field(
        default=DEFAULT_CENTRAL_URL,
        min_length=8,
        description="Cloud endpoint used when no custom Central URL is stored.",
    )
    central_api_key: str | None = Field(
        default=None,
        description="Central API key (persisted by `ztnet doctor setup-central`).",
    )
    central_api_url: str | None = Field(
        default=None,
        description="Optional custom Central base URL.",
    )

    # HTTP
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    user_agent: str = Field(
        default="ztnet-bridge/0.1",
        min_length=1,
        description="User-Agent sent to both backends.",
    )

    cidr_options: list[str] = Field(
        default_factory=lambda: [f"10.121.{n}.0/24" for n in range(15, 31)],
        description="Address-pool candidates offered for Central networks.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Root log level for the CLI.",
    )
