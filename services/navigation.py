"""
services/navigation.py – In-app locations such as "games?sort=release-date".

The same format is used by the carousels' "see more" card and by the start
location accepted on the command line.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, urlsplit

from models.game_record import SeeMoreEntry, SortKey

HOME = "home"
GAMES = "games"

_PAGE_ALIASES = {
    "": HOME,
    "home": HOME,
    "index": HOME,
    "index.html": HOME,
    "games": GAMES,
    "games.html": GAMES,
}


@dataclass(frozen=True)
class Location:
    page: str = HOME
    sort_key: SortKey = SortKey.POPULARITY


def sort_key_from_query(query: Optional[str]) -> SortKey:
    """Read the "sort" parameter; missing or unknown values mean POPULARITY."""
    values = parse_qs((query or "").lstrip("?")).get("sort")
    return SortKey.parse(values[0] if values else None)


def parse_location(location: Optional[str]) -> Location:
    parts = urlsplit((location or "").strip())
    name = parts.path.strip("/").rsplit("/", 1)[-1].lower()
    page = _PAGE_ALIASES.get(name, HOME)
    return Location(page=page, sort_key=sort_key_from_query(parts.query))


def catalog_link(sort_key: SortKey) -> str:
    return SeeMoreEntry(sort_key).link
