"""
services/renderer.py – Projects catalog results onto display regions.

Regions are handed in at construction.  A page that lacks a region simply
passes None for it and the matching operations do nothing, so the same
renderer runs unchanged on pages that only carry part of the UI.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from models.game_record import ALL, GameRecord

# ── Messages ─────────────────────────────────────────────────────────────────

LOADING_MESSAGE = "Cargando juegos..."
NO_RESULTS_MESSAGE = "No se encontraron juegos con los filtros seleccionados."
UNAVAILABLE_MESSAGE = "No se encontraron juegos. La API puede estar fuera de servicio."
ERROR_MESSAGE = "Error al cargar juegos. Intentá recargar la página."
ALL_GENRES_LABEL = "Todos los géneros"
ALL_PLATFORMS_LABEL = "Todas las plataformas"


# ── Region contracts ─────────────────────────────────────────────────────────


class GridRegion(Protocol):
    def show_records(self, records: Sequence[GameRecord]) -> None: ...

    def show_message(self, text: str) -> None: ...


class TextRegion(Protocol):
    def set_text(self, text: str) -> None: ...

    def set_visible(self, visible: bool) -> None: ...


class ChoiceRegion(Protocol):
    def set_choices(self, all_label: str, all_value: str, values: Sequence[str]) -> None: ...


def count_label(n: int) -> str:
    return f"{n} {'juego' if n == 1 else 'juegos'}"


class CatalogRenderer:
    """Writes results, counters and status messages into the given regions."""

    def __init__(
        self,
        grid: Optional[GridRegion] = None,
        counter: Optional[TextRegion] = None,
        loading: Optional[TextRegion] = None,
        genre_filter: Optional[ChoiceRegion] = None,
        platform_filter: Optional[ChoiceRegion] = None,
    ) -> None:
        self._grid = grid
        self._counter = counter
        self._loading = loading
        self._genre_filter = genre_filter
        self._platform_filter = platform_filter
        if self._loading is not None:
            self._loading.set_text(LOADING_MESSAGE)

    def render(self, records: Sequence[GameRecord]) -> None:
        if self._grid is None:
            return
        if records:
            self._grid.show_records(records)
        else:
            self._grid.show_message(NO_RESULTS_MESSAGE)
        self.update_count(len(records))

    def update_count(self, n: int) -> None:
        if self._counter is None:
            return
        self._counter.set_text(count_label(n))

    def show_loading(self, loading: bool) -> None:
        if self._loading is None:
            return
        self._loading.set_visible(loading)

    def show_error(self) -> None:
        if self._grid is None:
            return
        self._grid.show_message(ERROR_MESSAGE)

    def show_unavailable(self) -> None:
        if self._grid is None:
            return
        self._grid.show_message(UNAVAILABLE_MESSAGE)

    def populate_facets(self, genres: Sequence[str], platforms: Sequence[str]) -> None:
        if self._genre_filter is not None:
            self._genre_filter.set_choices(ALL_GENRES_LABEL, ALL, genres)
        if self._platform_filter is not None:
            self._platform_filter.set_choices(ALL_PLATFORMS_LABEL, ALL, platforms)
