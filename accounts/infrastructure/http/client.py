"""Process-wide httpx client shared by the outbound adapters (mail gateway)."""

from __future__ import annotations

import logging

import httpx

from accounts.settings import get_settings

logger = logging.getLogger(__name__)

USER_AGENT = "accounts-registration/0.1"

_client: httpx.AsyncClient | None = None


async def open_http_client(timeout: float | None = None) -> httpx.AsyncClient:
    """Open the shared client once; later calls return the same instance."""
    global _client
    if _client is None:
        if timeout is None:
            timeout = get_settings().smtp_timeout_seconds
        _client = httpx.AsyncClient(timeout=timeout, headers={"User-Agent": USER_AGENT})
        logger.info("http client opened", extra={"timeout": timeout})
    return _client


def get_http_client() -> httpx.AsyncClient:
    if _client is None:
        raise RuntimeError("shared HTTP client is not open; the app lifespan opens it")
    return _client


async def close_http_client() -> None:
    global _client
    if _client is None:
        return
    client, _client = _client, None
    await client.aclose()
