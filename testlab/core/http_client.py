from typing import Optional

import httpx

from .config import get_config

_client: Optional[httpx.AsyncClient] = None


def get_client(timeout: Optional[float] = None) -> httpx.AsyncClient:
    """Return the AsyncClient shared by all backend calls, created on first use."""
    global _client
    if _client is None or _client.is_closed:
        if timeout is None:
            timeout = get_config().http_timeout_seconds
        _client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={"Accept": "application/json"},
        )
    return _client


async def startup(timeout: Optional[float] = None) -> None:
    """Open the shared client during application startup."""
    get_client(timeout)


async def shutdown() -> None:
    """Close the shared client during application shutdown."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
