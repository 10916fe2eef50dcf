"""Controller backends (concrete `ControllerBackend` implementations).

Why a package:
- One module per backend flavour (self-hosted controller, Central).
- Shared request/error plumbing lives in `base`.
"""

from adapters.controllers.central import CentralController
from adapters.controllers.local import LocalController

__all__ = [
	"CentralController",
	"LocalController",
]
