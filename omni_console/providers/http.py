"""HTTP plumbing shared by the provider adapters.

Every adapter funnels its calls through these helpers so that credential checks,
error bodies and transport failures are reported the same way for all providers.
"""
import json
import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Dict, Optional

import httpx

from omni_console.const import ERROR_BODY_PREVIEW_CHARS
from .base import GenerationResult
from .exceptions import EmptyBodyError, MissingCredentialError, RequestError, TransportError
from .streaming import Extractor, StreamTimer, accumulate


logger = logging.getLogger(__name__)

TRANSPORT_ERROR_PREFIX = "CORS/Network Error"


def join_url(base_url: str, path: str) -> str:
    return base_url.rstrip("/") + path


def require_api_key(api_key: Optional[str], provider_name: str) -> str:
    """Return the stripped key or fail before any network call."""
    key = (api_key or "").strip()
    if not key:
        raise MissingCredentialError(f"{provider_name} API Key is missing.")
    return key


def classify_transport_error(exc: httpx.TransportError, provider_name: str) -> TransportError:
    """Normalize any connection level failure into one remediation message."""
    return TransportError(
        f"{TRANSPORT_ERROR_PREFIX}: The {provider_name} endpoint could not be reached or rejected "
        f"this request ({type(exc).__name__}). Use a CORS-compatible proxy URL (e.g., a Cloudflare "
        f"Worker) as the CORS proxy or Base URL, or add the model ID manually."
    )


def is_transport_error(exc: BaseException) -> bool:
    return isinstance(exc, TransportError) or str(exc).startswith(TRANSPORT_ERROR_PREFIX)


def describe_error_body(status: int, body: str, reason: str = "") -> str:
    """Pull ``error.message`` out of a provider error body, else status plus a preview."""
    try:
        payload = json.loads(body) if body else None
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error

    preview = body.strip()[:ERROR_BODY_PREVIEW_CHARS] if body else reason
    return f"HTTP {status}: {preview}"


async def raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    await response.aread()
    message = describe_error_body(response.status_code, response.text, response.reason_phrase)
    raise RequestError(message, status=response.status_code)


@asynccontextmanager
async def open_client(client: Optional[httpx.AsyncClient], timeout: float) -> AsyncIterator[httpx.AsyncClient]:
    """Use the injected client as is, or own a fresh one for the duration of a call."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as owned:
        yield owned


async def stream_generation(
    *,
    client: Optional[httpx.AsyncClient],
    timeout: float,
    provider_name: str,
    url: str,
    headers: Dict[str, str],
    body: Dict[str, Any],
    extract: Extractor,
    clock: Callable[[], float] = time.perf_counter,
) -> GenerationResult:
    """
    POST a streaming request and fold the SSE response into a GenerationResult.

    Raises:
        RequestError: On a non-success HTTP status.
        EmptyBodyError: When the response declares no body.
        TransportError: On any connection level failure.
    """
    async with open_client(client, timeout) as http:
        timer = StreamTimer(clock)
        try:
            async with http.stream("POST", url, headers=headers, json=body) as response:
                await raise_for_status(response)
                if response.status_code == 204 or response.headers.get("content-length") == "0":
                    raise EmptyBodyError(f"{provider_name} returned no response body")
                result = await accumulate(response.aiter_bytes(), extract, timer)
        except httpx.TransportError as exc:
            logger.warning(f"{provider_name} transport failure: {exc!r}")
            raise classify_transport_error(exc, provider_name) from exc

    logger.debug(f"{provider_name} stream done: latency={result.latency_ms}ms ttft={result.ttft_ms}ms")
    return result


async def fetch_json(
    *,
    client: Optional[httpx.AsyncClient],
    timeout: float,
    provider_name: str,
    url: str,
    headers: Optional[Dict[str, str]] = None,
) -> Any:
    """GET a JSON document, applying the same error classification as generation."""
    async with open_client(client, timeout) as http:
        try:
            response = await http.get(url, headers=headers or {})
        except httpx.TransportError as exc:
            logger.warning(f"{provider_name} transport failure: {exc!r}")
            raise classify_transport_error(exc, provider_name) from exc

    await raise_for_status(response)
    try:
        return response.json()
    except ValueError:
        return None
