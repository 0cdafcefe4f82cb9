"""
services/catalog_feed.py – One shared catalog load for every page.

The Home carousels and the Games list read the same collection, so the
window owns a single CatalogFeed.  The first request() starts the fetch;
later requests, from either page, wait on that same fetch.  The payload is
handed back through deliver() on the GUI thread, which is the only place the
store is populated.

Listener contract
-----------------
  catalog_ready(store)    : Store has just been populated (EMPTY or LOADED)
  catalog_failed(exc)     : The fetch ended with *exc*; the store is untouched
  catalog_settled()       : Fetch is over either way; always follows the above
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol

from services.catalog_store import CatalogStore

logger = logging.getLogger(__name__)


class FeedState(Enum):
    IDLE = "idle"
    IN_FLIGHT = "in-flight"
    READY = "ready"
    FAILED = "failed"


class CatalogListener(Protocol):
    def catalog_ready(self, store: CatalogStore) -> None: ...

    def catalog_failed(self, exc: BaseException) -> None: ...

    def catalog_settled(self) -> None: ...


class CatalogFeed:
    """
    Parameters
    ----------
    store       : Session store shared by all listeners.
    start_fetch : Starts the background fetch; called at most once.
    """

    def __init__(self, store: CatalogStore, start_fetch: Callable[[], None]) -> None:
        self.store = store
        self.state = FeedState.IDLE
        self._start_fetch = start_fetch
        self._listeners: List[CatalogListener] = []
        self._error: Optional[BaseException] = None

    @property
    def settled(self) -> bool:
        return self.state in (FeedState.READY, FeedState.FAILED)

    def subscribe(self, listener: CatalogListener) -> None:
        """Register *listener*; a late subscriber is told the outcome at once."""
        self._listeners.append(listener)
        if self.state is FeedState.READY:
            self._notify(listener, "catalog_ready", self.store)
        elif self.state is FeedState.FAILED:
            self._notify(listener, "catalog_failed", self._error)
        if self.settled:
            self._notify(listener, "catalog_settled")

    def request(self) -> bool:
        """Start the fetch unless one already ran or is running.  True if started."""
        if self.state is not FeedState.IDLE:
            return False
        self.state = FeedState.IN_FLIGHT
        logger.debug("Starting the shared catalog fetch")
        self._start_fetch()
        return True

    def deliver(self, payload: Any) -> None:
        """Populate the store from *payload* and notify listeners."""
        self.store.populate(payload)
        self.state = FeedState.READY
        self._broadcast("catalog_ready", self.store)

    def fail(self, exc: BaseException) -> None:
        self.state = FeedState.FAILED
        self._error = exc
        self._broadcast("catalog_failed", exc)

    def settle(self) -> None:
        """Tell listeners the fetch is over; called after deliver() or fail()."""
        self._broadcast("catalog_settled")

    # ── Private helpers ───────────────────────────────────────────────────────

    def _broadcast(self, method: str, *args: Any) -> None:
        for listener in list(self._listeners):
            self._notify(listener, method, *args)

    @staticmethod
    def _notify(listener: CatalogListener, method: str, *args: Any) -> None:
        # One failing page must not keep the others from hearing about the load.
        try:
            getattr(listener, method)(*args)
        except Exception:  # noqa: BLE001
            logger.exception("Catalog listener %r failed in %s", listener, method)
