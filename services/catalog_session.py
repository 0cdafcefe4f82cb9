"""
services/catalog_session.py – Load orchestration and the filter-and-render
pass of the Games page.

This is the only place where a failed load becomes a user-visible message.
The steps are exposed separately so the shared catalog feed can drive them;
load() chains them for callers already inside an event loop.
"""

from __future__ import annotations

import logging
from typing import Callable, List

from models.game_record import FilterCriteria, GameRecord
from services import fetch_service, filter_service
from services.catalog_store import CatalogStore, Fetch, LoadState
from services.renderer import CatalogRenderer

logger = logging.getLogger(__name__)


class CatalogSession:
    """
    Parameters
    ----------
    store         : Session store, filled once.
    renderer      : Renderer bound to the page's regions.
    read_criteria : Returns the current UI selections; called on every pass.
    """

    def __init__(
        self,
        store: CatalogStore,
        renderer: CatalogRenderer,
        read_criteria: Callable[[], FilterCriteria],
    ) -> None:
        self.store = store
        self.renderer = renderer
        self._read_criteria = read_criteria

    async def load(self, fetch: Fetch = fetch_service.fetch_games) -> None:
        self.begin_load()
        try:
            await self.store.load(fetch)
        except Exception as exc:  # noqa: BLE001
            self.fail_load(exc)
        else:
            self.complete_load()
        finally:
            self.end_load()

    def begin_load(self) -> None:
        self.renderer.show_loading(True)

    def complete_load(self) -> None:
        if self.store.state is LoadState.EMPTY:
            self.renderer.show_unavailable()
            return
        self.renderer.populate_facets(self.store.genres, self.store.platforms)
        self.apply_filters()

    def fail_load(self, exc: BaseException) -> None:
        logger.error("Could not load the game catalog: %s", exc, exc_info=exc)
        self.renderer.show_error()

    def end_load(self) -> None:
        self.renderer.show_loading(False)

    def apply_filters(self) -> List[GameRecord]:
        """Filter, sort and render using the selections present right now."""
        if self.store.state is not LoadState.LOADED:
            return []
        result = filter_service.apply(self.store.records, self._read_criteria())
        self.renderer.render(result)
        return result
