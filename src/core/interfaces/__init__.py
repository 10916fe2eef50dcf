"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) implemented by concrete adapters.
- Inverts dependencies: the core depends on abstractions.
"""

from core.interfaces.controller import AddressPoolProvider, CentralSettingsStore, ControllerBackend

__all__ = [
	"AddressPoolProvider",
	"CentralSettingsStore",
	"ControllerBackend",
]
