"""Credential resolution per backend.

Local:
- Token priority: explicit `zt_secret` > contents of `zt_secret_file` >
  placeholder (test context only).
- A missing token is not an error here: the controller answers 401 and the
  transport surfaces `InvalidCredentials`.

Central:
- API key and optional custom URL come from an external settings store;
  a failed lookup becomes `ConfigurationError`.
"""

from __future__ import annotations

import logging

from core.config import AppSettings
from core.domain.backend import Backend
from core.domain.errors import ConfigurationError
from core.domain.models import ResolvedEndpoint
from core.interfaces.controller import CentralSettingsStore

logger = logging.getLogger(__name__)

TEST_CONTEXT_SECRET = "dummy_text_to_skip_gh"
LOCAL_AUTH_HEADER = "X-ZT1-Auth"
CENTRAL_AUTH_SCHEME = "token"


def load_local_secret(settings: AppSettings) -> str | None:
    """Read the local controller token following the priority order."""

    if settings.zt_secret:
        return settings.zt_secret

    try:
        secret = settings.zt_secret_file.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as exc:
        if settings.test_context:
            return TEST_CONTEXT_SECRET
        logger.error("could not read controller secret from %s: %s", settings.zt_secret_file, exc)
        return None

    if not secret and settings.test_context:
        return TEST_CONTEXT_SECRET
    return secret or None


class CredentialResolver:
    """Returns the base URL and headers for a backend.

    The local token is read once, at construction; Central settings are
    looked up on every call so a rotated key is picked up immediately.
    """

    def __init__(
        self,
        settings: AppSettings,
        central_store: CentralSettingsStore | None = None,
    ) -> None:
        self._settings = settings
        self._central_store = central_store
        self._local_secret = load_local_secret(settings)

    async def resolve(self, backend: Backend) -> ResolvedEndpoint:
        if backend is Backend.CENTRAL:
            return await self._resolve_central()
        return self._resolve_local()

    def _resolve_local(self) -> ResolvedEndpoint:
        headers = {"Content-Type": "application/json"}
        if self._local_secret:
            headers[LOCAL_AUTH_HEADER] = self._local_secret
        return ResolvedEndpoint(base_url=self._settings.zt_addr.rstrip("/"), headers=headers)

    async def _resolve_central(self) -> ResolvedEndpoint:
        if self._central_store is None:
            raise ConfigurationError("[CENTRAL] No settings store configured for ZeroTier Central")
        try:
            creds = await self._central_store.load()
        except Exception as exc:
            raise ConfigurationError(
                "[CENTRAL] Could not load ZeroTier Central settings",
                cause=exc,
            ) from exc

        base_url = (creds.api_url or "").strip() or self._settings.central_default_url
        return ResolvedEndpoint(
            base_url=base_url.rstrip("/"),
            headers={
                "Authorization": f"{CENTRAL_AUTH_SCHEME} {creds.api_key or ''}".rstrip(),
                "Content-Type": "application/json",
            },
        )
