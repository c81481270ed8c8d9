"""Provider-agnostic exceptions raised by compute provider implementations."""

from __future__ import annotations


class ProviderError(Exception):
    """Base class for errors raised by a cloud provider backend."""


class ProviderCredentialsError(ProviderError):
    """Raised when provider credentials are missing or incomplete."""


class ProviderAPIError(ProviderError):
    """Raised when the provider API rejects a request.

    Parameters
    ----------
    message : str
        Human-readable error message
    error_code : str | None
        Provider error code (e.g. ``UnauthorizedOperation``)
    """

    def __init__(self, message: str, error_code: str | None = None) -> None:
        super().__init__(message)
        self.error_code = error_code


class ProviderConnectionError(ProviderError):
    """Raised when the provider endpoint cannot be reached."""
