"""
services/carousel.py – Paging logic for the Home page carousels.

Toolkit agnostic: the controller only knows the item list, its index and a
callable that reports the current viewport width.  Widgets read
offset_percent / prev_enabled / next_enabled after every call.
"""

from __future__ import annotations

from typing import Callable, List, Sequence, Tuple, Union

from models.game_record import GameRecord, SeeMoreEntry, SortKey
from services import filter_service

# ── Configuration ────────────────────────────────────────────────────────────

# Records shown per carousel, before the trailing "see more" card.
MAX_RECORDS: int = 10

# Viewport breakpoints (pixels): width <= key shows the given item count.
BREAKPOINTS: Tuple[Tuple[int, int], ...] = ((600, 1), (900, 2))
WIDE_ITEMS_VISIBLE: int = 3

CarouselItem = Union[GameRecord, SeeMoreEntry]
ViewportWidth = Callable[[], int]


def items_visible_for_width(width: int) -> int:
    for limit, count in BREAKPOINTS:
        if width <= limit:
            return count
    return WIDE_ITEMS_VISIBLE


def popular_slice(records: Sequence[GameRecord]) -> List[GameRecord]:
    """Leading records in upstream (popularity) order."""
    return list(records[:MAX_RECORDS])


def recent_slice(records: Sequence[GameRecord]) -> List[GameRecord]:
    """Most recent records by release date."""
    return filter_service.sort_records(records, SortKey.RELEASE_DATE)[:MAX_RECORDS]


class CarouselController:
    """
    Index and visibility state of one carousel.

    Parameters
    ----------
    records        : Records to show; only the first MAX_RECORDS are kept.
    see_more       : Trailing entry appended after the records.
    viewport_width : Returns the current viewport width in pixels.

    The index always satisfies 0 <= current_index <= max_index; every
    mutation is clamped rather than rejected.
    """

    def __init__(
        self,
        records: Sequence[GameRecord],
        see_more: SeeMoreEntry,
        viewport_width: ViewportWidth,
    ) -> None:
        self.items: Tuple[CarouselItem, ...] = tuple(records[:MAX_RECORDS]) + (see_more,)
        self._viewport_width = viewport_width
        self.current_index = 0
        self.items_visible = items_visible_for_width(viewport_width())

    # ── Derived state ────────────────────────────────────────────────────────

    @property
    def total_items(self) -> int:
        return len(self.items)

    @property
    def max_index(self) -> int:
        return max(0, self.total_items - self.items_visible)

    @property
    def offset_percent(self) -> float:
        """Track offset as a percentage of the viewport width."""
        return -self.current_index * (100 / self.items_visible)

    @property
    def prev_enabled(self) -> bool:
        return self.current_index != 0

    @property
    def next_enabled(self) -> bool:
        return self.current_index < self.max_index

    @property
    def visible_items(self) -> Tuple[CarouselItem, ...]:
        return self.items[self.current_index:self.current_index + self.items_visible]

    # ── Transitions ──────────────────────────────────────────────────────────

    def next(self) -> int:
        self._recompute_visible()
        self.current_index = min(self.max_index, self.current_index + self.items_visible)
        self._clamp()
        return self.current_index

    def previous(self) -> int:
        self._recompute_visible()
        self.current_index = max(0, self.current_index - self.items_visible)
        self._clamp()
        return self.current_index

    def resize(self) -> int:
        """Re-read the viewport width after a layout change."""
        self._recompute_visible()
        self._clamp()
        return self.current_index

    def _recompute_visible(self) -> None:
        self.items_visible = items_visible_for_width(self._viewport_width())

    def _clamp(self) -> None:
        self.current_index = min(max(0, self.current_index), self.max_index)
