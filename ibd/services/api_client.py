"""
IBD API Client

Pre-configured httpx clients for the IBD backend API:
- Fixed base URL and timeout from settings
- Credential hook: reads the stored user token before every request and
  sends it as "Authorization: Bearer <token>"
- A failing credential lookup rejects the request before anything is sent
- No-cache headers and X-Request-ID propagation
- Optional 401 handling that clears the stored token
- One structured log line per response with its duration

The token is read fresh for each request. There is no caching, refresh or
expiry handling, and no retry.
"""

import time
from typing import Callable, Optional

import httpx

from ..config import settings
from ..utils.logging_config import get_logger, request_id_var
from .token_store import TokenStore

logger = get_logger(__name__)

TokenProvider = Callable[[], Optional[str]]

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}

# Request extension holding the monotonic send time
STARTED_AT = "ibd_started_at"


class CredentialHookError(Exception):
    """Credential lookup failed, so the request was not sent"""


def store_token_provider(store: Optional[TokenStore] = None, key: Optional[str] = None) -> TokenProvider:
    """Token provider reading `key` from the local token store on every call"""
    store = store or TokenStore()
    key = key or settings.token_storage_key

    def provider() -> Optional[str]:
        return store.get(key)

    return provider


def apply_credentials(request: httpx.Request, token_provider: TokenProvider) -> None:
    """
    Attach the current credential to an outgoing request.

    Headers are left alone when no token is stored. Any error from the
    provider is raised as CredentialHookError.
    """
    try:
        token = token_provider()
    except Exception as e:
        logger.error(f"Credential lookup failed for {request.method} {request.url}: {e}")
        raise CredentialHookError(f"Credential lookup failed: {e}") from e

    if token:
        request.headers["Authorization"] = f"Bearer {token}"

    request_id = request_id_var.get()
    if request_id:
        request.headers["X-Request-ID"] = request_id


def handle_unauthorized(response: httpx.Response, store: TokenStore) -> None:
    """Drop the stored token when the API rejects it"""
    if response.status_code == 401:
        logger.warning(
            f"{response.request.method} {response.request.url} returned 401, clearing stored token"
        )
        store.remove_token()


def log_response(response: httpx.Response) -> None:
    """Log method, path, status and time since the request hook ran"""
    request = response.request
    started = request.extensions.get(STARTED_AT)
    duration_ms = (time.monotonic() - started) * 1000 if started is not None else 0.0
    logger.api_request(request.method, request.url.path, response.status_code, round(duration_ms, 2))


def _client_options(base_url, timeout, headers) -> dict:
    merged_headers = dict(NO_CACHE_HEADERS)
    if headers:
        merged_headers.update(headers)
    return {
        "base_url": base_url or settings.api_base_url,
        "timeout": timeout if timeout is not None else settings.api_timeout_seconds,
        "headers": merged_headers,
    }


def create_api_client(
    base_url: Optional[str] = None,
    token_provider: Optional[TokenProvider] = None,
    *,
    store: Optional[TokenStore] = None,
    timeout: Optional[float] = None,
    headers: Optional[dict] = None,
    clear_token_on_unauthorized: bool = False,
    **kwargs
) -> httpx.Client:
    """
    Build an httpx.Client for the IBD API with the credential hook installed.

    Args:
        base_url: API base URL (default: API_BASE_URL)
        token_provider: Callable returning the current token or None
            (default: read from the local token store)
        store: Token store used by the default provider and 401 handling
        timeout: Request timeout in seconds (default: API_TIMEOUT_SECONDS)
        headers: Extra default headers
        clear_token_on_unauthorized: Remove the stored token on a 401 response
        **kwargs: Passed through to httpx.Client (e.g. transport)
    """
    if store is None and (token_provider is None or clear_token_on_unauthorized):
        store = TokenStore()
    if token_provider is None:
        token_provider = store_token_provider(store)

    def on_request(request: httpx.Request) -> None:
        apply_credentials(request, token_provider)
        request.extensions[STARTED_AT] = time.monotonic()

    def on_response(response: httpx.Response) -> None:
        log_response(response)
        if clear_token_on_unauthorized:
            handle_unauthorized(response, store)

    event_hooks = {"request": [on_request], "response": [on_response]}

    return httpx.Client(
        event_hooks=event_hooks,
        **_client_options(base_url, timeout, headers),
        **kwargs
    )


def create_async_api_client(
    base_url: Optional[str] = None,
    token_provider: Optional[TokenProvider] = None,
    *,
    store: Optional[TokenStore] = None,
    timeout: Optional[float] = None,
    headers: Optional[dict] = None,
    clear_token_on_unauthorized: bool = False,
    **kwargs
) -> httpx.AsyncClient:
    """Async counterpart of create_api_client with the same hook behaviour"""
    if store is None and (token_provider is None or clear_token_on_unauthorized):
        store = TokenStore()
    if token_provider is None:
        token_provider = store_token_provider(store)

    async def on_request(request: httpx.Request) -> None:
        apply_credentials(request, token_provider)
        request.extensions[STARTED_AT] = time.monotonic()

    async def on_response(response: httpx.Response) -> None:
        log_response(response)
        if clear_token_on_unauthorized:
            handle_unauthorized(response, store)

    event_hooks = {"request": [on_request], "response": [on_response]}

    return httpx.AsyncClient(
        event_hooks=event_hooks,
        **_client_options(base_url, timeout, headers),
        **kwargs
    )
