# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""
Badges — unique per (dream_id, type), awarded at most once.

award_badge() is read-check-then-write: a second call for a held badge
returns None and stores nothing.
"""

import logging
import uuid
from typing import Dict, List, Optional

from engine.dates import When, parse_timestamp, resolve_now
from engine.events import Events, log_event
from engine.store import Collections, RecordStore, append, find_one, load_validated_list
from engine.streaks import get_streak_with_grace

logger = logging.getLogger("dreamblock.badges")

BADGE_META: Dict[str, Dict[str, str]] = {
    "first_step": {"label": "First Step", "description": "Completed your first daily check-in.", "emoji": "◆"},
    "three_day_streak": {"label": "3-Day Streak", "description": "Showed up 3 days in a row.", "emoji": "▲"},
    "seven_day_streak": {"label": "7-Day Streak", "description": "Showed up 7 days in a row.", "emoji": "★"},
    "fourteen_day_streak": {"label": "14-Day Streak", "description": "Two weeks of consistency.", "emoji": "◉"},
    "thirty_day_streak": {"label": "30-Day Streak", "description": "A full month of showing up.", "emoji": "⬡"},
    "first_checkin": {"label": "First Check-In", "description": "Completed your first check-in.", "emoji": "✦"},
    "honest_moment": {"label": "Honest Moment", "description": "Named a hard day honestly.", "emoji": "◌"},
    "comeback": {"label": "Comeback", "description": "Returned after a break.", "emoji": "↩"},
    "one_month": {"label": "One Month", "description": "One month since you started.", "emoji": "○"},
    "six_months": {"label": "Six Months", "description": "Six months of dreaming forward.", "emoji": "◑"},
    "one_year": {"label": "One Year", "description": "A full year. You stayed.", "emoji": "◈"},
    "weekly_token": {"label": "Weekly Token", "description": "Earned your first weekly token.", "emoji": "⬟"},
    "dream_released": {"label": "Dream Released", "description": "Released a dream with intention.", "emoji": "✧"},
    "personal_best": {"label": "Personal Best", "description": "Beat your longest streak ever.", "emoji": "⚑"},
    "fail_fast": {"label": "Fail Fast", "description": "Named a hard day and came back.", "emoji": "⟳"},
    "clarity_seeker": {"label": "Clarity Seeker", "description": "Completed a full assessment.", "emoji": "⊙"},
    "returner": {"label": "The Returner", "description": "Returned after 7+ days away.", "emoji": "↺"},
}

STREAK_THRESHOLDS = [
    (3, "three_day_streak"),
    (7, "seven_day_streak"),
    (14, "fourteen_day_streak"),
    (30, "thirty_day_streak"),
]

AGE_THRESHOLDS = [
    (30, "one_month"),
    (180, "six_months"),
    (365, "one_year"),
]


def get_badges(store: RecordStore, dream_id: str) -> List[Dict]:
    return [b for b in load_validated_list(store, Collections.BADGES) if b["dream_id"] == dream_id]


def has_badge(store: RecordStore, dream_id: str, badge_type: str) -> bool:
    return any(b["type"] == badge_type for b in get_badges(store, dream_id))


def award_badge(store: RecordStore, dream_id: str, badge_type: str, now: When = None) -> Optional[Dict]:
    if has_badge(store, dream_id, badge_type):
        return None
    meta = BADGE_META[badge_type]
    badge = {
        "id": str(uuid.uuid4()),
        "dream_id": dream_id,
        "type": badge_type,
        "earned_at": resolve_now(now).isoformat(),
        **meta,
    }
    append(store, Collections.BADGES, badge)
    logger.info("Badge awarded: %s → %s", badge_type, dream_id)
    log_event(store, Events.MILESTONE_AWARDED, dream_id, {"type": badge_type}, now=now)
    return badge


def _award_all(store: RecordStore, dream_id: str, badge_types: List[str], now: When) -> List[Dict]:
    awarded = []
    for badge_type in badge_types:
        badge = award_badge(store, dream_id, badge_type, now)
        if badge:
            awarded.append(badge)
    return awarded


def check_and_award_streak_badges(store: RecordStore, dream_id: str, now: When = None) -> List[Dict]:
    """Every threshold at or below the grace-aware streak, not just the highest."""
    streak = get_streak_with_grace(store, dream_id, now)
    due = [badge_type for n, badge_type in STREAK_THRESHOLDS if streak >= n]
    return _award_all(store, dream_id, due, now)


def check_and_award_long_term_badges(store: RecordStore, dream_id: str, now: When = None) -> List[Dict]:
    dream = find_one(store, Collections.DREAMS, id=dream_id)
    if not dream:
        return []
    age = resolve_now(now).replace(tzinfo=None) - parse_timestamp(dream["created_at"])
    age_days = age.total_seconds() / 86400
    due = [badge_type for n, badge_type in AGE_THRESHOLDS if age_days >= n]
    return _award_all(store, dream_id, due, now)
