"""
services/thumbnail_service.py – Download of card thumbnails.

Thumbnails are cosmetic: a failed image is logged and skipped, never
surfaced to the user.  Uses a synchronous httpx.Client because it always
runs on a worker thread.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional

import httpx

from models.game_record import GameRecord
from services.exceptions import ThumbnailError

logger = logging.getLogger(__name__)

# ── Configuration ────────────────────────────────────────────────────────────

HTTP_TIMEOUT: float = 15.0

OnLoaded = Callable[[str, bytes], None]

# ── Public API ───────────────────────────────────────────────────────────────


def thumbnail_urls(records: Iterable[GameRecord]) -> List[str]:
    """Distinct, non-empty thumbnail URLs in first-seen order."""
    seen = set()
    urls: List[str] = []
    for record in records:
        url = record.thumbnail_url
        if url and url not in seen:
            seen.add(url)
            urls.append(url)
    return urls


def fetch_thumbnail(url: str, client: httpx.Client) -> bytes:
    """
    Return the raw image bytes at *url*.

    Raises
    ------
    ThumbnailError on any network failure or non-2xx status.
    """
    try:
        response = client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise ThumbnailError(
            f"Thumbnail {url} returned HTTP {exc.response.status_code}"
        ) from exc
    except httpx.RequestError as exc:
        raise ThumbnailError(f"Network error while fetching {url}: {exc}") from exc
    return response.content


def fetch_thumbnails(
    urls: Iterable[str],
    on_loaded: OnLoaded,
    *,
    client: Optional[httpx.Client] = None,
    should_stop: Callable[[], bool] = lambda: False,
) -> int:
    """
    Download each URL in turn and pass its bytes to *on_loaded*.

    Failures are logged and skipped.  *should_stop* is checked before each
    download so a worker can be interrupted.  Returns the number delivered.
    """
    if client is None:
        with httpx.Client(follow_redirects=True, timeout=HTTP_TIMEOUT) as own_client:
            return _fetch_all(urls, on_loaded, own_client, should_stop)
    return _fetch_all(urls, on_loaded, client, should_stop)


# ── Private helpers ───────────────────────────────────────────────────────────


def _fetch_all(
    urls: Iterable[str],
    on_loaded: OnLoaded,
    client: httpx.Client,
    should_stop: Callable[[], bool],
) -> int:
    delivered = 0
    for url in urls:
        if should_stop():
            logger.debug("Thumbnail download interrupted after %d images", delivered)
            break
        try:
            data = fetch_thumbnail(url, client)
        except ThumbnailError as exc:
            logger.warning("Skipping thumbnail: %s", exc)
            continue
        on_loaded(url, data)
        delivered += 1
    return delivered
