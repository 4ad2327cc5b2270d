# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""Insight tests — SEEN/HELD/MOVED selection, philosophy hash, weekly pattern, quotes."""

from datetime import date

import pytest

from engine.archetypes import FEAR_OF_VISIBILITY, OVERWHELM_FOG, SHAME_LOOP
from engine.insight import (
    MOVED_BY_STUCK, MOVED_DEFAULT, MOVED_OVERRIDES, PHILOSOPHY, QUOTES, SEEN_BY_ARCHETYPE, SEEN_FALLBACK,
    generate_insight, generate_weekly_pattern, get_contextual_quote, pick_philosophy,
    quote_context_for_streak, string_hash, top_hard_reason,
)


class TestPhilosophyHash:

    def test_known_values(self):
        assert string_hash("") == 0
        assert string_hash("a") == 97
        assert string_hash("abc") == 96354

    def test_wraps_to_signed_32_bits(self):
        h = string_hash("a-much-longer-dream-identifier-0123456789")
        assert -2**31 <= h < 2**31

    def test_pick_is_stable(self):
        assert pick_philosophy("abc") == PHILOSOPHY[4]
        assert pick_philosophy("a") == PHILOSOPHY[2]
        assert pick_philosophy("") == PHILOSOPHY[0]
        assert pick_philosophy("same-id") == pick_philosophy("same-id")


class TestSeenAndHeld:

    def test_seen_by_archetype(self):
        insight = generate_insight({"id": "x", "archetype": SHAME_LOOP})
        assert insight["seen"] == SEEN_BY_ARCHETYPE[SHAME_LOOP]

    def test_seen_fallback(self):
        assert generate_insight({"id": "x"})["seen"] == SEEN_FALLBACK

    def test_held_hesitate_first(self):
        held = generate_insight({"id": "x", "guaranteed_hesitate": "yes", "willing_to_commit": False,
                                 "years_delayed": "15+ years"})["held"]
        assert held.startswith("You've carried this for 15+ years. That is not laziness.")

    def test_held_unwilling(self):
        held = generate_insight({"id": "x", "willing_to_commit": False, "time_realistic": "none"})["held"]
        assert "the timeline feels too long" in held

    def test_held_time_pressure(self):
        held = generate_insight({"id": "x", "willing_to_commit": True, "time_realistic": "little"})["held"]
        assert "The time issue is real." in held

    def test_held_generic_with_delay_text(self):
        held = generate_insight({"id": "x", "willing_to_commit": True, "years_delayed": "< 1 year"})["held"]
        assert held.startswith("You've carried this for less than a year. That's not failure.")

    def test_held_blank_delay(self):
        held = generate_insight({"id": "x", "willing_to_commit": True})["held"]
        assert "for a while." in held


class TestMoved:

    def test_override_beats_stuck_table(self):
        insight = generate_insight({"id": "x", "archetype": FEAR_OF_VISIBILITY, "stuck_point": "publishing"})
        assert insight["moved"] == MOVED_OVERRIDES[(FEAR_OF_VISIBILITY, "publishing")]["action"]
        assert insight["moved_mode"] == "do"

    def test_stuck_table(self):
        insight = generate_insight({"id": "x", "archetype": SHAME_LOOP, "stuck_point": "publishing"})
        assert insight["moved"] == MOVED_BY_STUCK["publishing"]["action"]
        assert insight["moved_doorway"] == MOVED_BY_STUCK["publishing"]["doorway"]
        assert insight["moved_mode"] == "ask"

    def test_default(self):
        insight = generate_insight({"id": "x", "archetype": OVERWHELM_FOG})
        assert insight["moved"] == MOVED_DEFAULT["action"]
        assert insight["moved_mode"] == "do"

    def test_philosophy_from_id(self):
        assert generate_insight({"id": "abc"})["philosophy_line"] == PHILOSOPHY[4]


class TestWeeklyPattern:

    def test_no_checkins(self):
        assert generate_weekly_pattern(0, 0, []).startswith("No check-ins this week.")

    def test_zero_did_days_pluralised(self):
        assert "checked in 1 time this week" in generate_weekly_pattern(1, 0, [])
        assert "checked in 4 times this week" in generate_weekly_pattern(4, 0, ["fear"])

    def test_strong_week(self):
        text = generate_weekly_pattern(6, 5, ["time", "fear", "time"])
        assert text.startswith("Strong week. You showed up 5 out of 7 days.")
        assert "Time was tight this week." in text

    def test_solid_week(self):
        assert generate_weekly_pattern(4, 3, []).startswith("Solid week: 3 days of forward motion.")

    def test_low_week(self):
        assert generate_weekly_pattern(3, 1, []).startswith("1 day of movement this week.")
        assert generate_weekly_pattern(3, 2, []).startswith("2 days of movement this week.")

    def test_tie_goes_to_first_seen(self):
        assert top_hard_reason(["energy", "fear", "fear", "energy"]) == "energy"
        assert top_hard_reason([]) is None


class TestQuotes:

    @pytest.mark.parametrize("streak,context", [
        (0, "restart"), (1, "struggling"), (2, "struggling"), (3, "general"), (6, "general"), (7, "consistent"),
    ])
    def test_context_for_streak(self, streak, context):
        assert quote_context_for_streak(streak) == context

    def test_rotates_with_day_of_month(self, store, add_checkin):
        add_checkin("d1", "2024-01-01")
        # 1 check-in + day 2 = 3 → index 3 of 4
        assert get_contextual_quote(store, "d1", "general", date(2024, 1, 2)) == QUOTES["general"][3]
        # 1 + 3 = 4 → wraps to 0
        assert get_contextual_quote(store, "d1", "general", date(2024, 1, 3)) == QUOTES["general"][0]

    def test_unknown_context_uses_general(self, store):
        assert get_contextual_quote(store, "d1", "nope", date(2024, 1, 4)) == QUOTES["general"][0]
