"""Custom exceptions for the provider adapters."""
from typing import Optional

from omni_console.const import (
    ERROR_KIND_CREDENTIAL,
    ERROR_KIND_PROVIDER,
    ERROR_KIND_REQUEST,
    ERROR_KIND_TRANSPORT,
)


class ProviderError(Exception):
    """Base exception for every provider adapter failure."""
    pass


class MissingCredentialError(ProviderError):
    """Exception raised before any network call when the API key is empty."""
    pass


class RequestError(ProviderError):
    """Exception raised when a provider answers with a non-success HTTP status."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


class TransportError(ProviderError):
    """Exception raised when the request never got an HTTP answer (network, CORS, timeout)."""
    pass


class EmptyBodyError(ProviderError):
    """Exception raised when a response carries no readable stream."""
    pass


class InvalidResponseFormatError(ProviderError):
    """Exception raised when response format is invalid."""
    pass


class DiscoveryUnsupportedError(ProviderError):
    """Exception raised when a provider endpoint does not support model listing."""
    pass


def error_kind(exc: BaseException) -> str:
    """Classify a failure for presentation; transport failures get the proxy remediation."""
    if isinstance(exc, TransportError):
        return ERROR_KIND_TRANSPORT
    if isinstance(exc, MissingCredentialError):
        return ERROR_KIND_CREDENTIAL
    if isinstance(exc, RequestError):
        return ERROR_KIND_REQUEST
    return ERROR_KIND_PROVIDER
