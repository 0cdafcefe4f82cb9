"""
models/game_record.py – Immutable data model for catalog records and the
criteria used to filter them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

# Sentinel value for "no genre / platform restriction".
ALL: str = "all"


@dataclass(frozen=True)
class GameRecord:
    """
    Represents one game in the catalog as returned by the listing API.

    Attributes
    ----------
    title         : Human-readable game title.
    genre         : Genre label (e.g. "Shooter").
    platform      : Platform label (e.g. "PC (Windows)").
    release_date  : Date string as sent upstream; may be unparsable.
    thumbnail_url : Absolute URL to the card thumbnail.
    detail_url    : Absolute URL to the game's page.
    """

    title: str
    genre: str
    platform: str
    release_date: str
    thumbnail_url: str
    detail_url: str

    @classmethod
    def from_api(cls, obj: dict) -> "GameRecord":
        return cls(
            title=str(obj.get("title") or ""),
            genre=str(obj.get("genre") or ""),
            platform=str(obj.get("platform") or ""),
            release_date=str(obj.get("release_date") or ""),
            thumbnail_url=str(obj.get("thumbnail") or ""),
            detail_url=str(obj.get("game_url") or ""),
        )

    def __str__(self) -> str:
        return f"{self.title}  [{self.genre}]"


def records_from_payload(payload: Any) -> List[GameRecord]:
    """Convert a parsed JSON body into records; anything but a list is no data."""
    if not isinstance(payload, list):
        return []
    return [GameRecord.from_api(obj) for obj in payload if isinstance(obj, dict)]


class SortKey(Enum):
    """Sort criteria understood by the catalog."""

    POPULARITY = "popularity"
    RELEASE_DATE = "release-date"
    ALPHABETICAL = "alphabetical"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortKey":
        """Map a raw value to a key; unrecognised values fall back to POPULARITY."""
        for key in cls:
            if key.value == value:
                return key
        return cls.POPULARITY


@dataclass(frozen=True)
class FilterCriteria:
    """Snapshot of the active filter selections."""

    genre: str = ALL
    platform: str = ALL
    search_term: str = ""
    sort_key: SortKey = SortKey.POPULARITY


@dataclass(frozen=True)
class SeeMoreEntry:
    """
    Synthetic trailing carousel item that opens the full catalog.

    Attributes
    ----------
    sort_key : Sort the catalog should be opened with.
    """

    sort_key: SortKey = SortKey.POPULARITY

    @property
    def link(self) -> str:
        return f"games?sort={self.sort_key.value}"

    def __str__(self) -> str:
        return "Ver más  →  Explorar catálogo completo"
