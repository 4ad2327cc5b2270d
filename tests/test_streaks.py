# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""Streak & grace tests — current/longest streaks, grace quota, personal best."""

from datetime import date, datetime

from engine.events import Events, get_event_log
from engine.streaks import (
    apply_grace_day, get_days_since_last_checkin, get_grace_days, get_longest_streak,
    get_personal_best, get_rolling_grace_days_remaining, get_rolling_grace_days_used,
    get_streak, get_streak_with_grace, try_apply_grace_day, update_personal_best,
)

DREAM = "d1"


def _days(add_checkin, *dates):
    for d in dates:
        add_checkin(DREAM, d)


# ============================================================================
# Plain streak
# ============================================================================

class TestStreak:

    def test_no_checkins(self, store):
        assert get_streak(store, DREAM, date(2024, 1, 5)) == 0

    def test_five_consecutive_days(self, store, add_checkin):
        _days(add_checkin, "2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04", "2024-01-05")
        assert get_streak(store, DREAM, date(2024, 1, 5)) == 5

    def test_broken_after_two_missed_days(self, store, add_checkin):
        _days(add_checkin, "2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04", "2024-01-05")
        assert get_streak(store, DREAM, date(2024, 1, 7)) == 0

    def test_counts_from_yesterday_when_today_open(self, store, add_checkin):
        _days(add_checkin, "2024-01-03", "2024-01-04")
        assert get_streak(store, DREAM, date(2024, 1, 5)) == 2

    def test_duplicate_dates_count_once(self, store, add_checkin):
        _days(add_checkin, "2024-01-04", "2024-01-04", "2024-01-05")
        assert get_streak(store, DREAM, date(2024, 1, 5)) == 2

    def test_other_dreams_ignored(self, store, add_checkin):
        add_checkin("other", "2024-01-05")
        assert get_streak(store, DREAM, date(2024, 1, 5)) == 0

    def test_crosses_month_boundary(self, store, add_checkin):
        _days(add_checkin, "2024-02-28", "2024-02-29", "2024-03-01")
        assert get_streak(store, DREAM, datetime(2024, 3, 1, 23, 59)) == 3


class TestLongestAndGap:

    def test_longest_run(self, store, add_checkin):
        _days(add_checkin, "2024-01-01", "2024-01-02", "2024-01-03", "2024-01-10", "2024-01-11")
        assert get_longest_streak(store, DREAM) == 3

    def test_longest_single_day(self, store, add_checkin):
        _days(add_checkin, "2024-01-01")
        assert get_longest_streak(store, DREAM) == 1

    def test_longest_empty(self, store):
        assert get_longest_streak(store, DREAM) == 0

    def test_days_since_last(self, store, add_checkin):
        assert get_days_since_last_checkin(store, DREAM, date(2024, 1, 5)) == -1
        _days(add_checkin, "2024-01-01", "2024-01-02")
        assert get_days_since_last_checkin(store, DREAM, date(2024, 1, 5)) == 3


# ============================================================================
# Grace days
# ============================================================================

class TestGraceStreak:

    def test_grace_patches_one_day_gap(self, store, add_checkin):
        _days(add_checkin, "2024-01-01", "2024-01-03")
        apply_grace_day(store, DREAM, "2024-01-02", datetime(2024, 1, 3, 8))
        assert get_streak_with_grace(store, DREAM, date(2024, 1, 3)) == 3
        assert get_streak(store, DREAM, date(2024, 1, 3)) == 1

    def test_grace_without_checkins_is_zero(self, store):
        apply_grace_day(store, DREAM, "2024-01-04", datetime(2024, 1, 5, 8))
        assert get_streak_with_grace(store, DREAM, date(2024, 1, 5)) == 0

    def test_longest_ignores_grace(self, store, add_checkin):
        _days(add_checkin, "2024-01-01", "2024-01-03")
        apply_grace_day(store, DREAM, "2024-01-02", datetime(2024, 1, 3, 8))
        assert get_longest_streak(store, DREAM) == 1


class TestTryApplyGrace:

    def test_applies_for_yesterday(self, store, add_checkin):
        _days(add_checkin, "2024-01-01", "2024-01-03")
        assert try_apply_grace_day(store, DREAM, datetime(2024, 1, 3, 9)) == "2024-01-02"
        assert [g["used_for_date"] for g in get_grace_days(store, DREAM)] == ["2024-01-02"]
        assert len(get_event_log(store, Events.GRACE_DAY_APPLIED)) == 1

    def test_at_most_once_per_date(self, store, add_checkin):
        _days(add_checkin, "2024-01-01", "2024-01-03")
        now = datetime(2024, 1, 3, 9)
        assert try_apply_grace_day(store, DREAM, now) == "2024-01-02"
        assert try_apply_grace_day(store, DREAM, now) is None
        assert len(get_grace_days(store, DREAM)) == 1

    def test_requires_checkin_today(self, store, add_checkin):
        _days(add_checkin, "2024-01-01")
        assert try_apply_grace_day(store, DREAM, datetime(2024, 1, 3, 9)) is None

    def test_never_covers_a_real_checkin(self, store, add_checkin):
        _days(add_checkin, "2024-01-02", "2024-01-03")
        assert try_apply_grace_day(store, DREAM, datetime(2024, 1, 3, 9)) is None

    def test_fourth_in_thirty_days_rejected(self, store, add_checkin):
        # three earlier grace days created inside the window
        for day in (5, 10, 15):
            apply_grace_day(store, DREAM, f"2024-01-{day:02d}", datetime(2024, 1, day + 1, 9))
        _days(add_checkin, "2024-01-18", "2024-01-20")
        now = datetime(2024, 1, 20, 9)
        assert get_rolling_grace_days_used(store, DREAM, now) == 3
        assert get_rolling_grace_days_remaining(store, DREAM, now) == 0
        assert try_apply_grace_day(store, DREAM, now) is None

    def test_quota_rolls_by_creation_time(self, store):
        apply_grace_day(store, DREAM, "2024-01-01", datetime(2024, 1, 2, 9))
        apply_grace_day(store, DREAM, "2024-01-10", datetime(2024, 1, 11, 9))
        assert get_rolling_grace_days_used(store, DREAM, datetime(2024, 1, 20)) == 2
        assert get_rolling_grace_days_used(store, DREAM, datetime(2024, 2, 5)) == 1
        assert get_rolling_grace_days_remaining(store, DREAM, datetime(2024, 3, 1)) == 3

    def test_apply_is_idempotent_per_date(self, store):
        first = apply_grace_day(store, DREAM, "2024-01-02", datetime(2024, 1, 3))
        second = apply_grace_day(store, DREAM, "2024-01-02", datetime(2024, 1, 3))
        assert first["id"] == second["id"]


# ============================================================================
# Personal best
# ============================================================================

class TestPersonalBest:

    def test_first_call_with_streak_seeds_and_reports(self, store, add_checkin):
        _days(add_checkin, "2024-01-01")
        assert update_personal_best(store, DREAM, date(2024, 1, 1)) is True
        assert get_personal_best(store, DREAM)["best_streak"] == 1

    def test_first_call_with_zero_seeds_silently(self, store):
        assert update_personal_best(store, DREAM, date(2024, 1, 1)) is False
        assert get_personal_best(store, DREAM)["best_streak"] == 0

    def test_only_strictly_greater_overwrites(self, store, add_checkin):
        _days(add_checkin, "2024-01-01", "2024-01-02")
        assert update_personal_best(store, DREAM, date(2024, 1, 2)) is True
        assert update_personal_best(store, DREAM, date(2024, 1, 2)) is False
        _days(add_checkin, "2024-01-03")
        assert update_personal_best(store, DREAM, date(2024, 1, 3)) is True
        assert get_personal_best(store, DREAM)["best_streak"] == 3

    def test_never_decreases(self, store, add_checkin):
        _days(add_checkin, "2024-01-01", "2024-01-02", "2024-01-03")
        update_personal_best(store, DREAM, date(2024, 1, 3))
        _days(add_checkin, "2024-01-10")
        assert update_personal_best(store, DREAM, date(2024, 1, 10)) is False
        assert get_personal_best(store, DREAM)["best_streak"] == 3

    def test_uses_grace_aware_streak(self, store, add_checkin):
        _days(add_checkin, "2024-01-01", "2024-01-03")
        apply_grace_day(store, DREAM, "2024-01-02", datetime(2024, 1, 3, 8))
        update_personal_best(store, DREAM, date(2024, 1, 3))
        assert get_personal_best(store, DREAM)["best_streak"] == 3
