#!/usr/bin/env python3
"""
Tests for services/filter_service.py and the SortKey / FilterCriteria models.

Run with:
    python -m pytest tests/test_filter_service.py
"""
import itertools
import math
import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models.game_record import FilterCriteria, GameRecord, SortKey
from services import filter_service


def _game(title, genre="Shooter", platform="PC (Windows)", release_date="2020-01-01"):
    return GameRecord(
        title=title,
        genre=genre,
        platform=platform,
        release_date=release_date,
        thumbnail_url=f"https://t/{title}.jpg",
        detail_url=f"https://g/{title}",
    )


CATALOG = [
    _game("Warframe", "Shooter", "PC (Windows)", "2013-03-25"),
    _game("Path of Exile", "ARPG", "PC (Windows)", "2013-10-23"),
    _game("Krunker", "Shooter", "Web Browser", "2018-08-01"),
    _game("War Thunder", "Shooter", "PC (Windows)", "2013-08-15"),
    _game("RuneScape", "MMORPG", "PC (Windows), Web Browser", "2001-01-04"),
    _game("Forge of Empires", "Strategy", "Web Browser", "2012-04-17"),
]


# ===========================================================================
# Filter stages
# ===========================================================================

class TestApplyFilters(unittest.TestCase):

    def test_default_criteria_keeps_everything_in_order(self):
        self.assertEqual(filter_service.apply(CATALOG, FilterCriteria()), CATALOG)

    def test_genre_filter(self):
        result = filter_service.apply(CATALOG, FilterCriteria(genre="Shooter"))
        self.assertEqual([g.title for g in result], ["Warframe", "Krunker", "War Thunder"])

    def test_platform_filter_is_exact_match(self):
        result = filter_service.apply(CATALOG, FilterCriteria(platform="Web Browser"))
        self.assertEqual([g.title for g in result], ["Krunker", "Forge of Empires"])

    def test_search_is_case_insensitive_and_trimmed(self):
        result = filter_service.apply(CATALOG, FilterCriteria(search_term="  WAR "))
        self.assertEqual([g.title for g in result], ["Warframe", "War Thunder"])

    def test_blank_search_is_skipped(self):
        result = filter_service.apply(CATALOG, FilterCriteria(search_term="   "))
        self.assertEqual(result, CATALOG)

    def test_combined_filters(self):
        criteria = FilterCriteria(genre="Shooter", platform="PC (Windows)", search_term="thun")
        result = filter_service.apply(CATALOG, criteria)
        self.assertEqual([g.title for g in result], ["War Thunder"])

    def test_no_match_is_an_empty_list(self):
        self.assertEqual(filter_service.apply(CATALOG, FilterCriteria(genre="Racing")), [])

    def test_empty_input_never_raises(self):
        for key in SortKey:
            self.assertEqual(filter_service.apply([], FilterCriteria(sort_key=key)), [])

    def test_source_is_never_mutated(self):
        source = list(CATALOG)
        for key in SortKey:
            filter_service.apply(source, FilterCriteria(sort_key=key))
        self.assertEqual(source, CATALOG)

    def test_result_is_a_copy(self):
        result = filter_service.apply(CATALOG, FilterCriteria())
        self.assertIsNot(result, CATALOG)

    def test_filtering_is_idempotent(self):
        for key in SortKey:
            criteria = FilterCriteria(genre="Shooter", search_term="war", sort_key=key)
            once = filter_service.apply(CATALOG, criteria)
            self.assertEqual(filter_service.apply(once, criteria), once)

    def test_filter_stages_commute(self):
        stages = [
            lambda rs: [r for r in rs if r.genre == "Shooter"],
            lambda rs: [r for r in rs if r.platform == "PC (Windows)"],
            lambda rs: filter_service.search(rs, "war"),
        ]
        expected = filter_service.apply(
            CATALOG, FilterCriteria(genre="Shooter", platform="PC (Windows)", search_term="war")
        )
        for order in itertools.permutations(stages):
            result = CATALOG
            for stage in order:
                result = stage(result)
            self.assertEqual(result, expected)


# ===========================================================================
# Sorting
# ===========================================================================

class TestSortRecords(unittest.TestCase):

    def test_release_date_descending(self):
        games = [_game(d, release_date=d) for d in ["2020-01-01", "2023-06-15", "2019-12-31"]]
        result = filter_service.sort_records(games, SortKey.RELEASE_DATE)
        self.assertEqual(
            [g.release_date for g in result], ["2023-06-15", "2020-01-01", "2019-12-31"]
        )

    def test_release_date_tolerates_unparsable_values(self):
        dates = ["2020-01-01", "not a date", "2023-06-15", ""]
        games = [_game(str(i), release_date=d) for i, d in enumerate(dates)]
        result = filter_service.sort_records(games, SortKey.RELEASE_DATE)
        self.assertEqual(sorted(g.title for g in result), sorted(g.title for g in games))

    def test_alphabetical_uses_spanish_collation(self):
        games = [_game(t) for t in ["Zeta", "ábaco", "Norte"]]
        result = filter_service.sort_records(games, SortKey.ALPHABETICAL)
        self.assertEqual([g.title for g in result], ["ábaco", "Norte", "Zeta"])

    def test_enye_sorts_after_n(self):
        games = [_game(t) for t in ["Oso", "Ñu", "Nube", "nz"]]
        result = filter_service.sort_records(games, SortKey.ALPHABETICAL)
        self.assertEqual([g.title for g in result], ["Nube", "nz", "Ñu", "Oso"])

    def test_unaccented_before_accented_on_tie(self):
        games = [_game(t) for t in ["árbol", "arbol"]]
        result = filter_service.sort_records(games, SortKey.ALPHABETICAL)
        self.assertEqual([g.title for g in result], ["arbol", "árbol"])

    def test_popularity_keeps_upstream_order(self):
        result = filter_service.sort_records(CATALOG, SortKey.POPULARITY)
        self.assertEqual(result, CATALOG)
        self.assertIsNot(result, CATALOG)


class TestParseReleaseDate(unittest.TestCase):

    def test_valid_date(self):
        self.assertEqual(filter_service.parse_release_date("1970-01-02"), 86400.0)

    def test_invalid_date_is_nan(self):
        self.assertTrue(math.isnan(filter_service.parse_release_date("soon")))
        self.assertTrue(math.isnan(filter_service.parse_release_date("")))

    def test_utc_suffix_and_datetime_forms(self):
        day = filter_service.parse_release_date("2023-06-15")
        self.assertEqual(filter_service.parse_release_date("2023-06-15T00:00:00Z"), day)
        self.assertEqual(filter_service.parse_release_date("2023-06-15T00:00:00.5Z"), day + 0.5)
        self.assertEqual(filter_service.parse_release_date("2023-06-15 10:00:00"), day + 36000)
        self.assertEqual(filter_service.parse_release_date("2023/06/15"), day)

    def test_utc_suffix_sorts_with_plain_dates(self):
        records = [
            _game("A", release_date="2020-01-01"),
            _game("B", release_date="2023-06-15T08:30:00Z"),
            _game("C", release_date="2021-05-05"),
        ]
        result = filter_service.sort_records(records, SortKey.RELEASE_DATE)
        self.assertEqual([g.title for g in result], ["B", "C", "A"])


class TestSortKey(unittest.TestCase):

    def test_parse_known_values(self):
        self.assertIs(SortKey.parse("release-date"), SortKey.RELEASE_DATE)
        self.assertIs(SortKey.parse("alphabetical"), SortKey.ALPHABETICAL)
        self.assertIs(SortKey.parse("popularity"), SortKey.POPULARITY)

    def test_unknown_values_fall_back_to_popularity(self):
        for raw in (None, "", "relevance", "RELEASE-DATE"):
            self.assertIs(SortKey.parse(raw), SortKey.POPULARITY)


if __name__ == "__main__":
    unittest.main()
