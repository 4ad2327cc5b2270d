# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""
Daily coach — the check-in submission flow and the session dashboard.

submit_checkin() order:
    1. save the day's check-in (a same-day resubmission updates it)
    2. checkin_completed event
    3. XP: checkin, tiny_action, restart, reflection (first submission of the day only)
    4. badges: first check-in, honest moment, comeback/returner, streak
       thresholds, dream age, personal best, fail fast

start_session() is what a client calls when the user opens a dream: it
forgives yesterday if possible and returns everything the dashboard shows.
"""

import logging
import uuid
from typing import Dict, List, Optional

from pydantic import ValidationError

from engine.badges import (
    award_badge, check_and_award_long_term_badges, check_and_award_streak_badges, get_badges,
)
from engine.checkins import get_checkin_by_date, get_daily_checkins, save_daily_checkin
from engine.dates import When, days_between, resolve_now, today_str, yesterday_str
from engine.dreams import require_dream
from engine.events import Events, log_event
from engine.insight import get_contextual_quote, quote_context_for_streak
from engine.schemas import DailyCheckIn, DreamblockValidationError
from engine.store import RecordStore
from engine.streaks import (
    get_days_since_last_checkin, get_longest_streak, get_personal_best,
    get_rolling_grace_days_remaining, get_rolling_grace_days_used, get_streak_with_grace,
    try_apply_grace_day, update_personal_best,
)
from engine.weekly import get_due_weekly_summary
from engine.xp import add_xp, get_dream_xp

logger = logging.getLogger("dreamblock.coach")

RESTART_GAP_DAYS = 2
RETURNER_GAP_DAYS = 7
TINY_ACTION_MIN_CHARS = 5
REFLECTION_MIN_CHARS = 10


def _earn(awarded: List[Dict], badge: Optional[Dict]):
    if badge:
        awarded.append(badge)


def submit_checkin(
    store: RecordStore,
    dream_id: str,
    did_something: bool,
    tiny_action: str = "",
    hard_reason: str = "",
    easy_version: str = "",
    daily_mode: str = "",
    step_statement: str = "",
    mood: int = 3,
    resistance_note: str = "",
    now: When = None,
) -> Dict:
    require_dream(store, dream_id)
    moment = resolve_now(now)
    today = today_str(moment)

    previous = [c for c in get_daily_checkins(store, dream_id) if c["date"] < today]
    existing = get_checkin_by_date(store, dream_id, today)
    first_today = existing is None

    gap = days_between(previous[-1]["date"], today) if previous else 0
    is_restart = first_today and gap >= RESTART_GAP_DAYS

    try:
        checkin = DailyCheckIn(
            id=existing["id"] if existing else str(uuid.uuid4()),
            dream_id=dream_id,
            date=today,
            did_something=did_something,
            tiny_action=tiny_action,
            hard_reason=hard_reason,
            easy_version=easy_version,
            daily_mode=daily_mode,
            step_statement=step_statement,
            mood=mood,
            resistance_note=resistance_note,
            tiny_win=tiny_action,
            shared_with_team=existing["shared_with_team"] if existing else False,
            created_at=existing["created_at"] if existing else moment.isoformat(),
        ).model_dump()
    except ValidationError as e:
        raise DreamblockValidationError(f"Invalid check-in: {e}") from e

    save_daily_checkin(store, checkin)
    log_event(store, Events.CHECKIN_COMPLETED, dream_id, {"date": today, "did_something": did_something}, now=moment)
    logger.info("Check-in %s for %s on %s", "saved" if first_today else "updated", dream_id, today)

    xp_events = []
    if first_today:
        xp_events.append(add_xp(store, dream_id, "checkin", now=moment))
        if did_something and len(tiny_action) > TINY_ACTION_MIN_CHARS:
            xp_events.append(add_xp(store, dream_id, "tiny_action", now=moment))
        if is_restart:
            xp_events.append(add_xp(store, dream_id, "restart", now=moment))
        if len(step_statement) > REFLECTION_MIN_CHARS:
            xp_events.append(add_xp(store, dream_id, "reflection", now=moment))

    earned: List[Dict] = []
    if not previous and first_today:
        for badge_type in ("first_checkin", "first_step", "clarity_seeker"):
            _earn(earned, award_badge(store, dream_id, badge_type, moment))
    if not did_something and hard_reason:
        _earn(earned, award_badge(store, dream_id, "honest_moment", moment))
    if is_restart:
        _earn(earned, award_badge(store, dream_id, "comeback", moment))
        if gap >= RETURNER_GAP_DAYS:
            _earn(earned, award_badge(store, dream_id, "returner", moment))
    earned.extend(check_and_award_streak_badges(store, dream_id, moment))
    earned.extend(check_and_award_long_term_badges(store, dream_id, moment))

    personal_best = update_personal_best(store, dream_id, moment)
    if personal_best:
        log_event(store, Events.PERSONAL_BEST_SET, dream_id, now=moment)
        _earn(earned, award_badge(store, dream_id, "personal_best", moment))

    if not did_something and get_checkin_by_date(store, dream_id, yesterday_str(moment)):
        _earn(earned, award_badge(store, dream_id, "fail_fast", moment))

    return {
        "checkin": checkin,
        "updated": not first_today,
        "is_restart": is_restart,
        "badges": earned,
        "xp": xp_events,
        "streak": get_streak_with_grace(store, dream_id, moment),
        "personal_best": personal_best,
    }


def start_session(store: RecordStore, dream_id: str, now: When = None) -> Dict:
    """Apply yesterday's grace day if earned, then snapshot the dashboard."""
    dream = require_dream(store, dream_id)
    moment = resolve_now(now)

    grace_applied = try_apply_grace_day(store, dream_id, moment)
    streak = get_streak_with_grace(store, dream_id, moment)
    best = get_personal_best(store, dream_id)
    due = get_due_weekly_summary(store, dream_id, moment)

    return {
        "dream": dream,
        "grace_applied": grace_applied,
        "today_checkin": get_checkin_by_date(store, dream_id, today_str(moment)),
        "streak": streak,
        "longest_streak": get_longest_streak(store, dream_id),
        "personal_best": best["best_streak"] if best else 0,
        "days_since_last_checkin": get_days_since_last_checkin(store, dream_id, moment),
        "grace_used": get_rolling_grace_days_used(store, dream_id, moment),
        "grace_remaining": get_rolling_grace_days_remaining(store, dream_id, moment),
        "xp_total": get_dream_xp(store, dream_id)["total"],
        "badges": get_badges(store, dream_id),
        "weekly_due": due,
        "quote": get_contextual_quote(store, dream_id, quote_context_for_streak(streak), moment),
    }
