# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""Daily coach tests — check-in submission rewards and the session snapshot."""

from datetime import date

import pytest

from engine.badges import get_badges
from engine.checkins import get_daily_checkins
from engine.coach import start_session, submit_checkin
from engine.events import Events, get_event_log
from engine.insight import QUOTES
from engine.schemas import DreamblockNotFoundError, DreamblockValidationError
from engine.xp import get_dream_xp


def day(n):
    return date(2024, 1, n)


def types(badges):
    return [b["type"] for b in badges]


@pytest.fixture
def dream_id(make_dream):
    return make_dream()["id"]


# ============================================================================
# submit_checkin
# ============================================================================

class TestFirstCheckin:

    def test_rewards(self, store, dream_id):
        result = submit_checkin(store, dream_id, True, tiny_action="wrote a verse", now=day(1))
        assert result["updated"] is False
        assert result["is_restart"] is False
        assert [e["reason"] for e in result["xp"]] == ["checkin", "tiny_action"]
        assert types(result["badges"]) == ["first_checkin", "first_step", "clarity_seeker", "personal_best"]
        assert result["streak"] == 1
        assert result["personal_best"] is True
        # 40 from the assessment
        assert get_dream_xp(store, dream_id)["total"] == 65

    def test_short_action_earns_no_action_xp(self, store, dream_id):
        result = submit_checkin(store, dream_id, True, tiny_action="hum", now=day(1))
        assert [e["reason"] for e in result["xp"]] == ["checkin"]

    def test_reflection_xp(self, store, dream_id):
        result = submit_checkin(store, dream_id, False, step_statement="I am someone who ships", now=day(1))
        assert [e["reason"] for e in result["xp"]] == ["checkin", "reflection"]

    def test_stored_record(self, store, dream_id):
        submit_checkin(store, dream_id, True, tiny_action="mixed a track", daily_mode="do", mood=4, now=day(1))
        [checkin] = get_daily_checkins(store, dream_id)
        assert checkin["date"] == "2024-01-01"
        assert checkin["tiny_win"] == "mixed a track"
        assert checkin["mood"] == 4
        assert len(get_event_log(store, Events.CHECKIN_COMPLETED, dream_id=dream_id)) == 1

    def test_event_log_uses_checkin_day(self, store, dream_id):
        before = len(get_event_log(store, dream_id=dream_id))
        submit_checkin(store, dream_id, True, tiny_action="mixed a track", now=day(3))
        entries = get_event_log(store, dream_id=dream_id)[before:]
        assert {e["event_type"] for e in entries} >= {Events.CHECKIN_COMPLETED, Events.XP_EARNED, Events.PERSONAL_BEST_SET}
        assert all(e["created_at"].startswith("2024-01-03") for e in entries)


class TestSameDay:

    def test_resubmission_updates_in_place(self, store, dream_id):
        first = submit_checkin(store, dream_id, False, now=day(1))
        second = submit_checkin(store, dream_id, True, tiny_action="finally did it", now=day(1))
        assert second["updated"] is True
        assert second["xp"] == []
        assert second["badges"] == []
        [checkin] = get_daily_checkins(store, dream_id)
        assert checkin["id"] == first["checkin"]["id"]
        assert checkin["did_something"] is True
        assert checkin["created_at"] == first["checkin"]["created_at"]


class TestRestart:

    def test_comeback_after_gap(self, store, dream_id):
        submit_checkin(store, dream_id, True, now=day(1))
        result = submit_checkin(store, dream_id, True, now=day(4))
        assert result["is_restart"] is True
        assert "restart" in [e["reason"] for e in result["xp"]]
        assert types(result["badges"]) == ["comeback"]

    def test_returner_after_a_week(self, store, dream_id):
        submit_checkin(store, dream_id, True, now=day(1))
        result = submit_checkin(store, dream_id, True, now=day(9))
        assert types(result["badges"]) == ["comeback", "returner"]

    def test_consecutive_day_is_not_restart(self, store, dream_id):
        submit_checkin(store, dream_id, True, now=day(1))
        assert submit_checkin(store, dream_id, True, now=day(2))["is_restart"] is False


class TestHardDays:

    def test_honest_moment_and_fail_fast(self, store, dream_id):
        submit_checkin(store, dream_id, True, now=day(1))
        result = submit_checkin(store, dream_id, False, hard_reason="fear", now=day(2))
        assert "honest_moment" in types(result["badges"])
        assert "fail_fast" in types(result["badges"])

    def test_no_reason_no_honest_moment(self, store, dream_id):
        result = submit_checkin(store, dream_id, False, now=day(1))
        assert "honest_moment" not in types(result["badges"])
        assert "fail_fast" not in types(result["badges"])


class TestStreakRewards:

    def test_three_day_badge(self, store, dream_id):
        for n in (1, 2):
            submit_checkin(store, dream_id, True, now=day(n))
        result = submit_checkin(store, dream_id, True, now=day(3))
        assert result["streak"] == 3
        assert "three_day_streak" in types(result["badges"])
        assert types(get_badges(store, dream_id)).count("personal_best") == 1


class TestValidation:

    def test_unknown_dream(self, store):
        with pytest.raises(DreamblockNotFoundError):
            submit_checkin(store, "missing", True, now=day(1))

    def test_mood_out_of_range(self, store, dream_id):
        with pytest.raises(DreamblockValidationError):
            submit_checkin(store, dream_id, True, mood=9, now=day(1))
        assert get_daily_checkins(store, dream_id) == []


# ============================================================================
# start_session
# ============================================================================

class TestStartSession:

    def test_fresh_dream(self, store, dream_id):
        session = start_session(store, dream_id, now=day(1))
        assert session["grace_applied"] is None
        assert session["today_checkin"] is None
        assert session["streak"] == 0
        assert session["personal_best"] == 0
        assert session["days_since_last_checkin"] == -1
        assert session["grace_remaining"] == 3
        assert session["xp_total"] == 40
        assert session["weekly_due"] is None
        assert session["quote"] in QUOTES["restart"]

    def test_grace_applied_on_return(self, store, dream_id):
        submit_checkin(store, dream_id, True, now=day(1))
        submit_checkin(store, dream_id, True, now=day(3))
        session = start_session(store, dream_id, now=day(3))
        assert session["grace_applied"] == "2024-01-02"
        assert session["streak"] == 3
        assert session["longest_streak"] == 1
        assert session["grace_used"] == 1
        assert session["grace_remaining"] == 2
        assert session["today_checkin"]["date"] == "2024-01-03"

    def test_grace_applied_once(self, store, dream_id):
        submit_checkin(store, dream_id, True, now=day(1))
        submit_checkin(store, dream_id, True, now=day(3))
        start_session(store, dream_id, now=day(3))
        assert start_session(store, dream_id, now=day(3))["grace_applied"] is None
