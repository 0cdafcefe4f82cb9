"""
services/catalog_store.py – Session-wide owner of the loaded game collection.

The collection is filled exactly once per session; afterwards it is treated
as read-only and shared by the filter engine and the renderer.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable, List, Tuple

from models.game_record import GameRecord, SortKey, records_from_payload
from services import fetch_service
from services.exceptions import CatalogStateError

logger = logging.getLogger(__name__)

Fetch = Callable[..., Awaitable[Any]]


class LoadState(Enum):
    NOT_LOADED = "not-loaded"
    EMPTY = "empty"
    LOADED = "loaded"


class CatalogStore:
    """
    Holds the full collection and the facet values derived from it.

    Attributes
    ----------
    state     : NOT_LOADED until populated, then EMPTY or LOADED.
    records   : Records in upstream (popularity) order.
    genres    : Distinct genres, sorted.
    platforms : Distinct platforms, sorted.
    """

    def __init__(self) -> None:
        self.state = LoadState.NOT_LOADED
        self.records: Tuple[GameRecord, ...] = ()
        self.genres: List[str] = []
        self.platforms: List[str] = []

    @property
    def is_loaded(self) -> bool:
        return self.state is not LoadState.NOT_LOADED

    async def load(self, fetch: Fetch = fetch_service.fetch_games) -> LoadState:
        """Fetch the collection sorted by popularity and populate the store."""
        payload = await fetch(sort_by=SortKey.POPULARITY.value)
        return self.populate(payload)

    def populate(self, payload: Any) -> LoadState:
        """
        Store the records carried by *payload* and derive facets.

        Raises
        ------
        CatalogStateError if the store has already been populated.
        """
        if self.is_loaded:
            raise CatalogStateError("Catalog has already been loaded for this session.")

        self.records = tuple(records_from_payload(payload))
        self.genres, self.platforms = derive_facets(self.records)
        self.state = LoadState.LOADED if self.records else LoadState.EMPTY
        logger.info(
            "Catalog %s: %d records, %d genres, %d platforms",
            self.state.value, len(self.records), len(self.genres), len(self.platforms),
        )
        return self.state


def derive_facets(records: Iterable[GameRecord]) -> Tuple[List[str], List[str]]:
    """Distinct genre and platform values, each lexicographically sorted."""
    genres = set()
    platforms = set()
    for record in records:
        genres.add(record.genre)
        platforms.add(record.platform)
    return sorted(genres), sorted(platforms)
