# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""
Weekly summaries — 7-day buckets counted from the dream's creation.

A summary is due when:
- the dream has at least 7 check-ins overall
- the current week has no summary yet
- at least 3 check-ins fall inside the current week

Creating one grants the weekly token (XP + badge).
"""

import logging
import uuid
from datetime import timedelta
from typing import Dict, List, Optional

from engine.badges import award_badge
from engine.checkins import get_daily_checkins
from engine.dates import When, day_str, parse_timestamp, resolve_now
from engine.dreams import get_dream, require_dream
from engine.events import Events, log_event
from engine.insight import generate_weekly_pattern
from engine.schemas import DreamblockValidationError
from engine.store import Collections, RecordStore, append, load_validated_list
from engine.xp import add_xp

logger = logging.getLogger("dreamblock.weekly")

MIN_TOTAL_CHECKINS = 7
MIN_WEEK_CHECKINS = 3


def get_weekly_summaries(store: RecordStore, dream_id: str) -> List[Dict]:
    return [w for w in load_validated_list(store, Collections.WEEKLY_SUMMARIES) if w["dream_id"] == dream_id]


def current_week(created_at: str, now: When = None) -> int:
    elapsed = resolve_now(now).replace(tzinfo=None) - parse_timestamp(created_at)
    return int(elapsed.total_seconds() // 86400) // 7 + 1


def get_due_weekly_summary(store: RecordStore, dream_id: str, now: When = None) -> Optional[Dict]:
    """{week_number, week_start, week_end, checkins} if a summary is due, else None."""
    checkins = get_daily_checkins(store, dream_id)
    if len(checkins) < MIN_TOTAL_CHECKINS:
        return None
    dream = get_dream(store, dream_id)
    if not dream:
        return None

    week_number = current_week(dream["created_at"], now)
    if any(s["week_number"] == week_number for s in get_weekly_summaries(store, dream_id)):
        return None

    start = parse_timestamp(dream["created_at"]).date() + timedelta(days=(week_number - 1) * 7)
    week_start = day_str(start)
    week_end = day_str(start + timedelta(days=6))
    week_checkins = [c for c in checkins if week_start <= c["date"] <= week_end]
    if len(week_checkins) < MIN_WEEK_CHECKINS:
        return None

    return {
        "week_number": week_number,
        "week_start": week_start,
        "week_end": week_end,
        "checkins": week_checkins,
    }


def create_weekly_summary(
    store: RecordStore,
    dream_id: str,
    focus_next_week: str = "",
    now: When = None,
) -> Dict:
    dream = require_dream(store, dream_id)
    due = get_due_weekly_summary(store, dream_id, now)
    if due is None:
        raise DreamblockValidationError(f"No weekly summary is due for dream '{dream_id}'")

    week_checkins = due["checkins"]
    did_days = sum(1 for c in week_checkins if c["did_something"])
    wins = [w for w in (c["tiny_win"] or c["tiny_action"] for c in week_checkins) if w]
    hard_reasons = [c["hard_reason"] for c in week_checkins if c["hard_reason"]]
    insight = dream.get("insight_summary") or {}

    summary = {
        "id": str(uuid.uuid4()),
        "dream_id": dream_id,
        "week_number": due["week_number"],
        "week_start": due["week_start"],
        "week_end": due["week_end"],
        "checkin_count": len(week_checkins),
        "did_days": did_days,
        "tiny_wins": wins,
        "friction_reducers": [],
        "patterns": generate_weekly_pattern(len(week_checkins), did_days, hard_reasons),
        "focus_next_week": focus_next_week,
        "token_awarded": True,
        "philosophy_line": insight.get("philosophy_line", ""),
        "created_at": resolve_now(now).isoformat(),
    }
    append(store, Collections.WEEKLY_SUMMARIES, summary)
    logger.info("Weekly summary %d saved for %s", summary["week_number"], dream_id)

    add_xp(store, dream_id, "weekly_token", now=now)
    award_badge(store, dream_id, "weekly_token", now)
    log_event(store, Events.WEEKLY_SUMMARY_VIEWED, dream_id, {"week_number": summary["week_number"]}, now=now)
    return summary
