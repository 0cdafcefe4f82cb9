"""
services/fetch_service.py – Async retrieval of the game list.

Uses httpx.AsyncClient.  Each attempt is bounded by REQUEST_TIMEOUT; timeouts
and non-success statuses are retried a fixed number of times with a constant
delay.  Local setups (site served from a loopback host) have no proxy
deployed, so requests go through a public relay instead.
"""

from __future__ import annotations

import asyncio
import ipaddress
import logging
import os
from typing import Any, Awaitable, Callable, Optional
from urllib.parse import quote, urlencode, urlparse

import httpx

from models.game_record import ALL
from services.exceptions import (
    CatalogNetworkError,
    CatalogParseError,
    FetchTimeoutError,
    HTTPStatusFailure,
)

logger = logging.getLogger(__name__)

# ── Configuration ────────────────────────────────────────────────────────────

# Origin the app is deployed under; loopback hosts select the public relay.
SITE_URL: str = os.environ.get("GAMERSTORE_SITE_URL", "http://localhost:5502")

# Same-origin proxy path, relative to SITE_URL.
PROXY_PATH: str = "/api/games"

# Upstream listing API and public CORS relay.
UPSTREAM_URL: str = "https://www.freetogame.com/api/games"
RELAY_URL: str = "https://api.allorigins.win/raw"

# Per-attempt deadline (seconds).
REQUEST_TIMEOUT: float = 12.0

# Extra attempts after the first one, and the pause between attempts.
MAX_RETRIES: int = 2
RETRY_DELAY: float = 1.0

Sleep = Callable[[float], Awaitable[None]]

# ── Public API ───────────────────────────────────────────────────────────────


async def fetch_games(
    platform: str = "pc",
    category: str = "",
    sort_by: str = "popularity",
    *,
    retries: int = MAX_RETRIES,
    client: Optional[httpx.AsyncClient] = None,
    site_url: str = SITE_URL,
    timeout: float = REQUEST_TIMEOUT,
    retry_delay: float = RETRY_DELAY,
    sleep: Sleep = asyncio.sleep,
) -> Any:
    """
    Fetch the game list and return the parsed JSON body.

    Parameters
    ----------
    platform, category, sort_by : Listing API filters; "all"/"" are omitted.
    retries     : How many times a timed-out or non-2xx attempt is repeated.
    client      : Shared client; a private one is opened when omitted.
    site_url    : Origin used to choose between the proxy and the relay.
    timeout     : Per-attempt deadline in seconds.
    retry_delay : Pause before each retry in seconds.
    sleep       : Awaitable used for the pause.

    Returns
    -------
    The decoded JSON body, normally a list of game objects.  The caller is
    responsible for treating an empty or malformed list as no data.

    Raises
    ------
    FetchTimeoutError, HTTPStatusFailure
        When every attempt failed; the last error is re-raised unchanged.
    CatalogParseError
        On a malformed body (never retried).
    CatalogNetworkError
        On other transport failures (never retried).
    """
    url = build_request_url(platform, category, sort_by, site_url=site_url)

    if client is None:
        async with httpx.AsyncClient(
            follow_redirects=True, timeout=httpx.Timeout(timeout)
        ) as own_client:
            return await _fetch_with_retries(
                own_client, url, retries, timeout, retry_delay, sleep
            )
    return await _fetch_with_retries(client, url, retries, timeout, retry_delay, sleep)


def build_request_url(
    platform: str = "pc",
    category: str = "",
    sort_by: str = "popularity",
    *,
    site_url: str = SITE_URL,
) -> str:
    """Return the proxy URL, or the relay URL when running on a loopback host."""
    query = _query_string(platform, category, sort_by)

    if is_loopback_host(urlparse(site_url).hostname):
        target = f"{UPSTREAM_URL}?{query}" if query else UPSTREAM_URL
        return f"{RELAY_URL}?url={quote(target, safe='')}"

    base = site_url.rstrip("/") + PROXY_PATH
    return f"{base}?{query}" if query else base


def is_loopback_host(host: Optional[str]) -> bool:
    if not host:
        return False
    if host.lower() == "localhost":
        return True
    try:
        return ipaddress.ip_address(host).is_loopback
    except ValueError:
        return False


# ── Private helpers ───────────────────────────────────────────────────────────


async def _fetch_with_retries(
    client: httpx.AsyncClient,
    url: str,
    retries: int,
    timeout: float,
    retry_delay: float,
    sleep: Sleep,
) -> Any:
    remaining = retries
    attempt = 1
    while True:
        try:
            return await _attempt_fetch(client, url, timeout)
        except (FetchTimeoutError, HTTPStatusFailure) as exc:
            if remaining <= 0:
                logger.error("Giving up on %s after %d attempts: %s", url, attempt, exc)
                raise
            logger.warning(
                "Attempt %d for %s failed (%s); retrying in %.1fs",
                attempt, url, exc, retry_delay,
            )
            remaining -= 1
            attempt += 1
            await sleep(retry_delay)


async def _attempt_fetch(client: httpx.AsyncClient, url: str, timeout: float) -> Any:
    logger.debug("GET %s", url)
    try:
        response = await asyncio.wait_for(client.get(url, timeout=timeout), timeout)
    except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
        raise FetchTimeoutError(f"No response within {timeout:g}s from {url}") from exc
    except httpx.RequestError as exc:
        raise CatalogNetworkError(f"Network error while fetching games: {exc}") from exc

    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise HTTPStatusFailure(exc.response.status_code, url) from exc

    try:
        return response.json()
    except ValueError as exc:
        raise CatalogParseError(f"Malformed JSON in response from {url}") from exc


def _query_string(platform: str, category: str, sort_by: str) -> str:
    params = {}
    if platform and platform != ALL:
        params["platform"] = platform
    if category and category != ALL:
        params["category"] = category
    if sort_by and sort_by != ALL:
        params["sort-by"] = sort_by
    return urlencode(params)
