"""
services/filter_service.py – In-memory filtering and sorting of the catalog.

Every function here is pure: the input sequence is never reordered or
mutated, results are always new lists.
"""

from __future__ import annotations

import math
import unicodedata
from datetime import datetime, timezone
from functools import cmp_to_key
from typing import List, Optional, Sequence, Tuple

from models.game_record import ALL, FilterCriteria, GameRecord, SortKey

# Marks that stay significant at the primary level in Spanish collation.
_TILDE = "\u0303"

# Date-time shapes older fromisoformat() rejects, plus common non-ISO dates.
_FALLBACK_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M%z",
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y/%m/%d",
    "%B %d, %Y",
    "%b %d, %Y",
)

# ── Public API ───────────────────────────────────────────────────────────────


def apply(records: Sequence[GameRecord], criteria: FilterCriteria) -> List[GameRecord]:
    """
    Narrow *records* by genre, platform and title, then sort.

    Each filter stage is skipped when its criterion is "all" / blank.  Empty
    input simply yields an empty list.
    """
    result = list(records)

    if criteria.genre != ALL:
        result = [r for r in result if r.genre == criteria.genre]

    if criteria.platform != ALL:
        result = [r for r in result if r.platform == criteria.platform]

    result = search(result, criteria.search_term)

    return sort_records(result, criteria.sort_key)


def search(records: Sequence[GameRecord], query: str) -> List[GameRecord]:
    """
    Case-insensitive title filter.

    Returns a copy of all records when query is empty/whitespace.
    """
    q = (query or "").strip().lower()
    if not q:
        return list(records)
    return [r for r in records if q in r.title.lower()]


def sort_records(records: Sequence[GameRecord], sort_key: SortKey) -> List[GameRecord]:
    """Return a sorted copy of *records*; POPULARITY keeps the upstream order."""
    copy = list(records)

    if sort_key is SortKey.RELEASE_DATE:
        # Unparsable dates compare as "equal" to everything, so their position
        # relative to dated records is not well defined.
        copy.sort(key=cmp_to_key(_newest_first))
        return copy

    if sort_key is SortKey.ALPHABETICAL:
        copy.sort(key=lambda r: collation_key(r.title))
        return copy

    # SortKey.POPULARITY, and anything the enum may grow without a branch here.
    return copy


def parse_release_date(value: str) -> float:
    """POSIX timestamp for a date or date-time string, NaN when unparsable."""
    text = (value or "").strip()
    parsed = _parse_datetime(text)
    if parsed is None:
        return math.nan
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def collation_key(text: str) -> Tuple[str, str, str]:
    """
    Sort key approximating Spanish collation.

    Primary level ignores accents and case but keeps "ñ" as its own letter
    after "n"; accents break ties next, then case (lowercase first).
    """
    decomposed = unicodedata.normalize("NFD", text)
    primary: List[str] = []
    prev = ""
    for ch in decomposed:
        if unicodedata.category(ch) == "Mn":
            if ch == _TILDE and prev.lower() == "n":
                primary.append("\uffff")
            continue
        primary.append(ch.casefold())
        prev = ch
    secondary = decomposed.casefold()
    tertiary = decomposed.swapcase()
    return "".join(primary), secondary, tertiary


# ── Private helpers ───────────────────────────────────────────────────────────


def _newest_first(a: GameRecord, b: GameRecord) -> float:
    return parse_release_date(b.release_date) - parse_release_date(a.release_date)


def _parse_datetime(text: str) -> Optional[datetime]:
    if not text:
        return None
    # fromisoformat only learned the "Z" suffix in Python 3.11.
    iso = text[:-1] + "+00:00" if text[-1] in "zZ" else text
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass
    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None
