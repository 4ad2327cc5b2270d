# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""Check-in record tests, daily and legacy."""

import pytest

from engine.checkins import (
    get_checkin_by_date, get_checkin_dates, get_legacy_checkins, save_legacy_checkin,
)
from engine.schemas import DreamblockValidationError
from engine.store import Collections


class TestDailyCheckins:

    def test_dates_distinct_and_sorted(self, store, add_checkin):
        add_checkin("d1", "2024-01-03")
        add_checkin("d1", "2024-01-01")
        add_checkin("d2", "2024-01-02")
        assert get_checkin_dates(store, "d1") == ["2024-01-01", "2024-01-03"]

    def test_by_date(self, store, add_checkin):
        add_checkin("d1", "2024-01-01")
        assert get_checkin_by_date(store, "d1", "2024-01-01")["did_something"] is True
        assert get_checkin_by_date(store, "d1", "2024-01-02") is None


# ============================================================================
# Legacy check-ins
# ============================================================================

class TestLegacyCheckins:

    def test_round_trip(self, store):
        saved = save_legacy_checkin(store, {
            "id": "l1", "dream_id": "d1", "avoided": "the gym", "created_at": "2023-05-01T08:00:00",
        })
        assert saved["emotion"] == ""
        assert get_legacy_checkins(store) == [saved]
        assert store.load_all(Collections.LEGACY_CHECKINS)[0]["avoided"] == "the gym"

    def test_filter_by_dream(self, store):
        save_legacy_checkin(store, {"id": "l1", "dream_id": "d1", "created_at": "2023-05-01T08:00:00"})
        save_legacy_checkin(store, {"id": "l2", "dream_id": "d2", "created_at": "2023-05-02T08:00:00"})
        save_legacy_checkin(store, {"id": "l3", "created_at": "2023-05-03T08:00:00"})
        assert [c["id"] for c in get_legacy_checkins(store, "d2")] == ["l2"]
        assert len(get_legacy_checkins(store)) == 3

    def test_missing_created_at(self, store):
        with pytest.raises(DreamblockValidationError, match="created_at"):
            save_legacy_checkin(store, {"id": "x", "dream_id": "d1"})
        assert get_legacy_checkins(store) == []
