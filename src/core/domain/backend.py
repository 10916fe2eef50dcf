"""Backend selector.

This module centralizes the two controller flavours the application talks
to. Keeping it in the domain layer lets services and adapters share a
single source of truth without circular imports.
"""

from __future__ import annotations

from enum import Enum


class Backend(str, Enum):
    """Which controller API an operation targets."""

    LOCAL = "local"
    CENTRAL = "central"

    @classmethod
    def from_bool(cls, central: bool) -> "Backend":
        """Derive a backend from the legacy `central` boolean flag."""

        return cls.CENTRAL if central else cls.LOCAL

    @property
    def is_central(self) -> bool:
        return self is Backend.CENTRAL

    def error_prefix(self) -> str:
        """Tag prepended to error messages so logs show which API failed."""

        return "[CENTRAL] " if self is Backend.CENTRAL else ""

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return "ZeroTier Central" if self is Backend.CENTRAL else "Local controller"
