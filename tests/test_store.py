# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""Record store tests — memory and file stores, corruption handling, helpers."""

import json

from engine.store import (
    Collections, JsonFileStore, MemoryStore, append, find_one, get_store,
    load_validated_list, save_validated_list, upsert,
)

NOW = "2024-01-01T09:00:00"


def _checkin(cid, date="2024-01-01", dream_id="d1"):
    return {"id": cid, "dream_id": dream_id, "date": date, "created_at": NOW}


# ============================================================================
# MemoryStore
# ============================================================================

class TestMemoryStore:

    def test_missing_collection_is_empty(self, store):
        assert store.load_all(Collections.DREAMS) == []

    def test_save_then_load(self, store):
        store.save_all(Collections.BADGES, [{"a": 1}])
        assert store.load_all(Collections.BADGES) == [{"a": 1}]

    def test_corrupt_json_loads_empty(self, store):
        store.put_raw(Collections.CHECKINS, "{not json")
        assert store.load_all(Collections.CHECKINS) == []

    def test_non_list_loads_empty(self, store):
        store.put_raw(Collections.CHECKINS, '{"id": "c1"}')
        assert store.load_all(Collections.CHECKINS) == []


# ============================================================================
# JsonFileStore
# ============================================================================

class TestJsonFileStore:

    def test_one_file_per_collection(self, tmp_path):
        fs = JsonFileStore(tmp_path)
        fs.save_all(Collections.GRACE_DAYS, [{"x": 1}])
        path = tmp_path / "dreamblock-grace_days.json"
        assert json.loads(path.read_text()) == [{"x": 1}]
        assert not (tmp_path / "dreamblock-grace_days.json.tmp").exists()

    def test_corrupt_file_loads_empty(self, tmp_path):
        (tmp_path / "dreamblock-dreams.json").write_text("[{broken")
        assert JsonFileStore(tmp_path).load_all(Collections.DREAMS) == []

    def test_get_store_uses_configured_dir(self, isolated_paths):
        fs = get_store()
        assert fs.path_for(Collections.XP).parent == isolated_paths.data_dir

    def test_creates_missing_data_dir(self, tmp_path):
        fs = JsonFileStore(tmp_path / "nested" / "dir")
        fs.save_all(Collections.TEAMS, [])
        assert (tmp_path / "nested" / "dir" / "dreamblock-teams.json").exists()


# ============================================================================
# Validated helpers
# ============================================================================

class TestValidatedHelpers:

    def test_invalid_record_empties_collection(self, store):
        store.save_all(Collections.CHECKINS, [_checkin("c1"), {"id": "c2"}])
        assert load_validated_list(store, Collections.CHECKINS) == []

    def test_load_fills_defaults(self, store):
        store.save_all(Collections.CHECKINS, [_checkin("c1")])
        loaded = load_validated_list(store, Collections.CHECKINS)
        assert loaded[0]["mood"] == 3
        assert loaded[0]["tiny_action"] == ""

    def test_save_validates(self, store):
        save_validated_list(store, Collections.CHECKINS, [_checkin("c1")])
        assert store.load_all(Collections.CHECKINS)[0]["did_something"] is False

    def test_upsert_replaces_by_id(self, store):
        upsert(store, Collections.CHECKINS, _checkin("c1"))
        upsert(store, Collections.CHECKINS, {**_checkin("c1"), "tiny_action": "wrote"})
        upsert(store, Collections.CHECKINS, _checkin("c2", "2024-01-02"))
        items = load_validated_list(store, Collections.CHECKINS)
        assert [c["id"] for c in items] == ["c1", "c2"]
        assert items[0]["tiny_action"] == "wrote"

    def test_append_and_find_one(self, store):
        append(store, Collections.CHECKINS, _checkin("c1", dream_id="a"))
        append(store, Collections.CHECKINS, _checkin("c2", dream_id="b"))
        assert find_one(store, Collections.CHECKINS, dream_id="b")["id"] == "c2"
        assert find_one(store, Collections.CHECKINS, dream_id="zzz") is None

    def test_memory_and_file_store_agree(self, tmp_path):
        for s in (MemoryStore(), JsonFileStore(tmp_path)):
            append(s, Collections.CHECKINS, _checkin("c1"))
            assert load_validated_list(s, Collections.CHECKINS)[0]["id"] == "c1"
