"""Central settings store backed by `AppSettings` / the user `.env`.

The hosting application normally persists the Central API key and URL in
its own database; this adapter is the stand-alone stand-in used by the
CLI. Anything implementing `CentralSettingsStore` can replace it.
"""

from __future__ import annotations

from pathlib import Path

from core.config import AppSettings, get_user_env_file, parse_env_lines, write_user_env_vars
from core.domain.models import CentralCredentials

API_KEY_VAR = "ZTNET_CENTRAL_API_KEY"
API_URL_VAR = "ZTNET_CENTRAL_API_URL"


class SettingsCentralStore:
    """Reads Central credentials from the loaded settings."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    async def load(self) -> CentralCredentials:
        return CentralCredentials(
            api_key=self._settings.central_api_key,
            api_url=self._settings.central_api_url,
        )


class EnvFileCentralStore:
    """Reads Central credentials straight from a `.env` file on every lookup.

    Lets a long-running process pick up a key saved with `setup-central`
    without restarting.
    """

    def __init__(self, env_path: Path | None = None) -> None:
        self._env_path = env_path or get_user_env_file()

    async def load(self) -> CentralCredentials:
        values = parse_env_lines(self._env_path.read_text(encoding="utf-8"))
        return CentralCredentials(
            api_key=values.get(API_KEY_VAR) or None,
            api_url=values.get(API_URL_VAR) or None,
        )

    def save(self, *, api_key: str, api_url: str | None = None) -> Path:
        values = {API_KEY_VAR: api_key}
        if api_url:
            values[API_URL_VAR] = api_url
        return write_user_env_vars(values, self._env_path)
