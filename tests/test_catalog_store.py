#!/usr/bin/env python3
"""
Tests for services/catalog_store.py and models/game_record.py payload mapping.

Run with:
    python -m pytest tests/test_catalog_store.py
"""
import asyncio
import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models.game_record import GameRecord, records_from_payload
from services.catalog_store import CatalogStore, LoadState, derive_facets
from services.exceptions import CatalogStateError, HTTPStatusFailure

PAYLOAD = [
    {"id": 1, "title": "Warframe", "genre": "Shooter", "platform": "PC (Windows)",
     "release_date": "2013-03-25", "thumbnail": "https://t/1.jpg", "game_url": "https://g/1"},
    {"id": 2, "title": "Krunker", "genre": "Shooter", "platform": "Web Browser",
     "release_date": "2018-08-01", "thumbnail": "https://t/2.jpg", "game_url": "https://g/2"},
    {"id": 3, "title": "Path of Exile", "genre": "ARPG", "platform": "PC (Windows)",
     "release_date": "2013-10-23", "thumbnail": "https://t/3.jpg", "game_url": "https://g/3"},
]


class TestRecordsFromPayload(unittest.TestCase):

    def test_maps_upstream_fields(self):
        record = records_from_payload(PAYLOAD)[0]
        self.assertEqual(
            record,
            GameRecord(
                title="Warframe",
                genre="Shooter",
                platform="PC (Windows)",
                release_date="2013-03-25",
                thumbnail_url="https://t/1.jpg",
                detail_url="https://g/1",
            ),
        )

    def test_non_list_payload_is_no_data(self):
        self.assertEqual(records_from_payload({"error": "x", "status": 502}), [])
        self.assertEqual(records_from_payload(None), [])

    def test_non_object_entries_are_skipped(self):
        self.assertEqual(len(records_from_payload([PAYLOAD[0], "junk", 3])), 1)

    def test_missing_fields_become_empty(self):
        record = records_from_payload([{"title": "Solo"}])[0]
        self.assertEqual(record.genre, "")
        self.assertEqual(record.detail_url, "")


class TestCatalogStore(unittest.TestCase):

    def test_starts_not_loaded(self):
        store = CatalogStore()
        self.assertIs(store.state, LoadState.NOT_LOADED)
        self.assertFalse(store.is_loaded)
        self.assertEqual(store.records, ())

    def test_populate_sets_records_and_facets(self):
        store = CatalogStore()
        self.assertIs(store.populate(PAYLOAD), LoadState.LOADED)
        self.assertEqual([r.title for r in store.records], ["Warframe", "Krunker", "Path of Exile"])
        self.assertEqual(store.genres, ["ARPG", "Shooter"])
        self.assertEqual(store.platforms, ["PC (Windows)", "Web Browser"])

    def test_empty_payload_is_distinct_from_not_loaded(self):
        store = CatalogStore()
        self.assertIs(store.populate([]), LoadState.EMPTY)
        self.assertTrue(store.is_loaded)

    def test_populating_twice_raises(self):
        store = CatalogStore()
        store.populate(PAYLOAD)
        with self.assertRaises(CatalogStateError):
            store.populate(PAYLOAD)

    def test_load_requests_popularity_order(self):
        calls = []

        async def fake_fetch(**kwargs):
            calls.append(kwargs)
            return PAYLOAD

        store = CatalogStore()
        state = asyncio.run(store.load(fake_fetch))
        self.assertIs(state, LoadState.LOADED)
        self.assertEqual(calls, [{"sort_by": "popularity"}])

    def test_load_propagates_fetch_errors(self):
        async def failing_fetch(**kwargs):
            raise HTTPStatusFailure(503)

        store = CatalogStore()
        with self.assertRaises(HTTPStatusFailure):
            asyncio.run(store.load(failing_fetch))
        self.assertIs(store.state, LoadState.NOT_LOADED)

    def test_derive_facets_is_sorted_and_distinct(self):
        records = records_from_payload(PAYLOAD * 2)
        genres, platforms = derive_facets(records)
        self.assertEqual(genres, ["ARPG", "Shooter"])
        self.assertEqual(platforms, ["PC (Windows)", "Web Browser"])


if __name__ == "__main__":
    unittest.main()
