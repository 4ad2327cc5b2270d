# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""
Streak & Grace Engine.

A streak is the run of consecutive covered days ending today, or ending
yesterday when today isn't covered yet. "Covered" means a real check-in;
the grace-aware variant also counts grace-day dates.

Grace days forgive yesterday once the user is back today:
    try_apply_grace_day() → covers yesterday if
      - no grace day already covers yesterday
      - yesterday has no real check-in
      - today has a check-in
      - fewer than 3 grace days created in the last 30 days

Everything is recomputed from stored history on each call.
"""

import logging
import uuid
from datetime import timedelta
from typing import Dict, Iterable, List, Optional

from engine.checkins import get_checkin_by_date, get_checkin_dates
from engine.dates import When, day_str, days_between, resolve_now, today_str, yesterday_str
from engine.events import Events, log_event
from engine.store import (
    Collections, RecordStore, append, find_one, load_validated_list, save_validated_list,
)

logger = logging.getLogger("dreamblock.streaks")

GRACE_QUOTA = 3
GRACE_WINDOW_DAYS = 30


def _run_length(covered: Iterable[str], now: When = None) -> int:
    dates = set(covered)
    today = resolve_now(now).date()
    cur = today
    if day_str(today) not in dates:
        cur = today - timedelta(days=1)
        if day_str(cur) not in dates:
            return 0

    streak = 0
    while day_str(cur) in dates:
        streak += 1
        cur -= timedelta(days=1)
    return streak


def get_streak(store: RecordStore, dream_id: str, now: When = None) -> int:
    return _run_length(get_checkin_dates(store, dream_id), now)


def get_streak_with_grace(store: RecordStore, dream_id: str, now: When = None) -> int:
    dates = get_checkin_dates(store, dream_id)
    if not dates:
        return 0
    grace = [g["used_for_date"] for g in get_grace_days(store, dream_id)]
    return _run_length(dates + grace, now)


def get_longest_streak(store: RecordStore, dream_id: str) -> int:
    """Longest run of consecutive check-in dates ever. Grace days don't count."""
    dates = get_checkin_dates(store, dream_id)
    if not dates:
        return 0
    best = cur = 1
    for prev, this in zip(dates, dates[1:]):
        if days_between(prev, this) == 1:
            cur += 1
            best = max(best, cur)
        else:
            cur = 1
    return best


def get_days_since_last_checkin(store: RecordStore, dream_id: str, now: When = None) -> int:
    """Calendar days since the latest check-in; -1 when there are none."""
    dates = get_checkin_dates(store, dream_id)
    if not dates:
        return -1
    return days_between(dates[-1], today_str(now))


# ============================================================================
# Grace days
# ============================================================================

def get_grace_days(store: RecordStore, dream_id: str) -> List[Dict]:
    return [g for g in load_validated_list(store, Collections.GRACE_DAYS) if g["dream_id"] == dream_id]


def get_rolling_grace_days_used(store: RecordStore, dream_id: str, now: When = None) -> int:
    """Grace days *created* in the last 30 days, whatever dates they cover."""
    cutoff = (resolve_now(now) - timedelta(days=GRACE_WINDOW_DAYS)).isoformat()
    return sum(1 for g in get_grace_days(store, dream_id) if g["created_at"] >= cutoff)


def get_rolling_grace_days_remaining(store: RecordStore, dream_id: str, now: When = None) -> int:
    return max(0, GRACE_QUOTA - get_rolling_grace_days_used(store, dream_id, now))


def apply_grace_day(store: RecordStore, dream_id: str, for_date: str, now: When = None) -> Dict:
    """Record a grace day covering for_date. One per (dream, date)."""
    existing = find_one(store, Collections.GRACE_DAYS, dream_id=dream_id, used_for_date=for_date)
    if existing:
        return existing

    grace = {
        "id": str(uuid.uuid4()),
        "dream_id": dream_id,
        "used_for_date": for_date,
        "created_at": resolve_now(now).isoformat(),
    }
    append(store, Collections.GRACE_DAYS, grace)
    logger.info("Grace day applied for %s on %s", dream_id, for_date)
    log_event(store, Events.GRACE_DAY_APPLIED, dream_id, {"used_for_date": for_date}, now=now)
    return grace


def try_apply_grace_day(store: RecordStore, dream_id: str, now: When = None) -> Optional[str]:
    """Cover yesterday if the user came back today. Returns the covered date or None."""
    yesterday = yesterday_str(now)
    today = today_str(now)

    if any(g["used_for_date"] == yesterday for g in get_grace_days(store, dream_id)):
        return None
    if get_checkin_by_date(store, dream_id, yesterday):
        return None
    if not get_checkin_by_date(store, dream_id, today):
        return None
    if get_rolling_grace_days_remaining(store, dream_id, now) <= 0:
        logger.debug("Grace quota exhausted for %s", dream_id)
        return None
    return apply_grace_day(store, dream_id, yesterday, now)["used_for_date"]


# ============================================================================
# Personal best
# ============================================================================

def get_personal_best(store: RecordStore, dream_id: str) -> Optional[Dict]:
    return find_one(store, Collections.PERSONAL_BESTS, dream_id=dream_id)


def update_personal_best(store: RecordStore, dream_id: str, now: When = None) -> bool:
    """Compare-and-set against the grace-aware streak.

    Returns True when the stored best was raised, or when the first-ever
    record was seeded with a streak above zero.
    """
    current = get_streak_with_grace(store, dream_id, now)
    achieved_at = resolve_now(now).isoformat()
    bests = load_validated_list(store, Collections.PERSONAL_BESTS)

    for i, pb in enumerate(bests):
        if pb["dream_id"] != dream_id:
            continue
        if current > pb["best_streak"]:
            bests[i] = {"dream_id": dream_id, "best_streak": current, "achieved_at": achieved_at}
            save_validated_list(store, Collections.PERSONAL_BESTS, bests)
            logger.info("New personal best for %s: %d", dream_id, current)
            return True
        return False

    bests.append({"dream_id": dream_id, "best_streak": current, "achieved_at": achieved_at})
    save_validated_list(store, Collections.PERSONAL_BESTS, bests)
    return current > 0
