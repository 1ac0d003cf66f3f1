"""Mapping of domain errors onto HTTP errors for the slices."""
from fastapi import HTTPException

from omni_console.const import HTTP_BAD_GATEWAY, HTTP_BAD_REQUEST
from omni_console.providers.exceptions import (
    DiscoveryUnsupportedError,
    MissingCredentialError,
    ProviderError,
    error_kind,
)


def provider_http_error(exc: ProviderError) -> HTTPException:
    """Client-side problems become 400, upstream and network failures 502."""
    status = HTTP_BAD_REQUEST if isinstance(exc, (MissingCredentialError, DiscoveryUnsupportedError)) else HTTP_BAD_GATEWAY
    return HTTPException(status_code=status, detail={"message": str(exc), "kind": error_kind(exc)})
