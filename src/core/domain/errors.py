"""Error taxonomy shared by adapters and services.

Every error keeps the original failure in `cause` (and chains it with
`raise ... from`) plus the HTTP status when one is known.
"""

from __future__ import annotations


class ZtApiError(Exception):
    """Base error for everything raised by the controller layer."""

    error_code = "zt_api_error"

    def __init__(
        self,
        message: str,
        *,
        cause: BaseException | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.status_code = status_code

    def rewrap(self, message: str) -> "ZtApiError":
        """Same error class, operation-specific message, this error as cause."""

        return type(self)(message, cause=self, status_code=self.status_code)


class InvalidCredentials(ZtApiError):
    """HTTP 401 from either backend."""

    error_code = "invalid_credentials"


class NotFound(ZtApiError):
    """HTTP 404 from either backend."""

    error_code = "not_found"


class TransportFailure(ZtApiError):
    """Any other non-2xx response or a network-level failure."""

    error_code = "transport_failure"


class AggregationFailure(ZtApiError):
    """A sub-fetch of a composite operation failed; `cause` is the first failure."""

    error_code = "aggregation_failure"


class ConfigurationError(ZtApiError):
    """Credentials or settings for a backend could not be resolved."""

    error_code = "configuration_error"
