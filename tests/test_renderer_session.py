#!/usr/bin/env python3
"""
Tests for services/renderer.py and services/catalog_session.py using
in-memory regions.

Run with:
    python -m pytest tests/test_renderer_session.py
"""
import asyncio
import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models.game_record import FilterCriteria, SortKey
from services import renderer as r
from services.catalog_session import CatalogSession
from services.catalog_store import CatalogStore, LoadState
from services.exceptions import FetchTimeoutError

PAYLOAD = [
    {"title": "Warframe", "genre": "Shooter", "platform": "PC (Windows)",
     "release_date": "2013-03-25", "thumbnail": "t1", "game_url": "g1"},
    {"title": "Krunker", "genre": "Shooter", "platform": "Web Browser",
     "release_date": "2018-08-01", "thumbnail": "t2", "game_url": "g2"},
    {"title": "Albion Online", "genre": "MMORPG", "platform": "PC (Windows)",
     "release_date": "2017-07-17", "thumbnail": "t3", "game_url": "g3"},
]


# ===========================================================================
# Fake regions
# ===========================================================================

class FakeGrid:
    def __init__(self):
        self.records = None
        self.message = None

    def show_records(self, records):
        self.records = list(records)
        self.message = None

    def show_message(self, text):
        self.records = None
        self.message = text


class FakeText:
    def __init__(self):
        self.text = None
        self.visible = None
        self.history = []

    def set_text(self, text):
        self.text = text

    def set_visible(self, visible):
        self.visible = visible
        self.history.append(visible)


class FakeChoices:
    def __init__(self):
        self.choices = None

    def set_choices(self, all_label, all_value, values):
        self.choices = [(all_label, all_value)] + [(v, v) for v in values]


def _renderer():
    regions = dict(
        grid=FakeGrid(),
        counter=FakeText(),
        loading=FakeText(),
        genre_filter=FakeChoices(),
        platform_filter=FakeChoices(),
    )
    return r.CatalogRenderer(**regions), regions


# ===========================================================================
# Renderer
# ===========================================================================

class TestCatalogRenderer(unittest.TestCase):

    def test_render_records_and_count(self):
        renderer, regions = _renderer()
        renderer.render(["a", "b"])
        self.assertEqual(regions["grid"].records, ["a", "b"])
        self.assertEqual(regions["counter"].text, "2 juegos")

    def test_count_is_singular_for_one(self):
        renderer, regions = _renderer()
        renderer.update_count(1)
        self.assertEqual(regions["counter"].text, "1 juego")
        renderer.update_count(0)
        self.assertEqual(regions["counter"].text, "0 juegos")

    def test_empty_result_shows_no_results_message(self):
        renderer, regions = _renderer()
        renderer.render([])
        self.assertEqual(regions["grid"].message, r.NO_RESULTS_MESSAGE)
        self.assertEqual(regions["counter"].text, "0 juegos")

    def test_messages_are_distinct(self):
        messages = {
            r.LOADING_MESSAGE, r.NO_RESULTS_MESSAGE, r.UNAVAILABLE_MESSAGE, r.ERROR_MESSAGE,
        }
        self.assertEqual(len(messages), 4)

    def test_loading_region_gets_loading_text(self):
        _, regions = _renderer()
        self.assertEqual(regions["loading"].text, r.LOADING_MESSAGE)

    def test_populate_facets_adds_all_entry(self):
        renderer, regions = _renderer()
        renderer.populate_facets(["ARPG", "Shooter"], ["PC (Windows)"])
        self.assertEqual(
            regions["genre_filter"].choices,
            [(r.ALL_GENRES_LABEL, "all"), ("ARPG", "ARPG"), ("Shooter", "Shooter")],
        )
        self.assertEqual(regions["platform_filter"].choices[0], (r.ALL_PLATFORMS_LABEL, "all"))

    def test_missing_regions_are_noops(self):
        renderer = r.CatalogRenderer()
        renderer.render(["a"])
        renderer.render([])
        renderer.update_count(3)
        renderer.show_loading(True)
        renderer.show_error()
        renderer.show_unavailable()
        renderer.populate_facets(["x"], ["y"])

    def test_missing_grid_leaves_other_regions_alone(self):
        counter = FakeText()
        renderer = r.CatalogRenderer(counter=counter)
        renderer.render(["a", "b"])
        self.assertIsNone(counter.text)
        renderer.update_count(2)
        self.assertEqual(counter.text, "2 juegos")


# ===========================================================================
# Session
# ===========================================================================

class TestCatalogSession(unittest.TestCase):

    def setUp(self):
        self.criteria = FilterCriteria()
        self.renderer, self.regions = _renderer()
        self.store = CatalogStore()
        self.session = CatalogSession(self.store, self.renderer, lambda: self.criteria)

    def _load(self, fetch):
        asyncio.run(self.session.load(fetch))

    def test_successful_load_renders_and_clears_loading(self):
        async def fetch(**kwargs):
            return PAYLOAD

        self._load(fetch)
        self.assertEqual(self.regions["loading"].history, [True, False])
        self.assertEqual([g.title for g in self.regions["grid"].records],
                         ["Warframe", "Krunker", "Albion Online"])
        self.assertEqual(self.regions["counter"].text, "3 juegos")
        self.assertEqual(self.regions["genre_filter"].choices[1:],
                         [("MMORPG", "MMORPG"), ("Shooter", "Shooter")])

    def test_failed_load_shows_reload_message_and_clears_loading(self):
        async def fetch(**kwargs):
            raise FetchTimeoutError("slow")

        with self.assertLogs("services.catalog_session", level="ERROR"):
            self._load(fetch)
        self.assertEqual(self.regions["grid"].message, r.ERROR_MESSAGE)
        self.assertEqual(self.regions["loading"].history, [True, False])
        self.assertIs(self.store.state, LoadState.NOT_LOADED)

    def test_empty_load_shows_unavailable_message(self):
        async def fetch(**kwargs):
            return []

        self._load(fetch)
        self.assertEqual(self.regions["grid"].message, r.UNAVAILABLE_MESSAGE)
        self.assertEqual(self.regions["loading"].history, [True, False])
        self.assertEqual(self.session.apply_filters(), [])

    def test_apply_filters_reads_criteria_fresh(self):
        self.store.populate(PAYLOAD)
        self.criteria = FilterCriteria(genre="Shooter")
        self.assertEqual(len(self.session.apply_filters()), 2)
        self.criteria = FilterCriteria(sort_key=SortKey.ALPHABETICAL)
        result = self.session.apply_filters()
        self.assertEqual([g.title for g in result], ["Albion Online", "Krunker", "Warframe"])
        self.assertEqual([g.title for g in self.regions["grid"].records],
                         ["Albion Online", "Krunker", "Warframe"])

    def test_apply_filters_before_load_is_noop(self):
        self.assertEqual(self.session.apply_filters(), [])
        self.assertIsNone(self.regions["grid"].records)
        self.assertIsNone(self.regions["grid"].message)

    def test_filters_never_touch_store_records(self):
        self.store.populate(PAYLOAD)
        before = self.store.records
        self.criteria = FilterCriteria(sort_key=SortKey.RELEASE_DATE)
        self.session.apply_filters()
        self.assertEqual(self.store.records, before)


if __name__ == "__main__":
    unittest.main()
