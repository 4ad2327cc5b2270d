# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""
Momentum Projector — one 0..10 score per check-in date.

Score breakdown:
    base                                  2
    did_something                        +3
    tiny_action longer than 5 chars      +1
    step_statement longer than 5 chars   +1
    daily_mode "do"                      +1   (plan/learn: +0.5)
    gap of 2+ days since previous date   +2   (point flagged is_restart)
    date covered by a grace day          -1   (floor 0)

Rounded to one decimal, capped at 10. Pure function of stored history.
"""

import math
from typing import Dict, List, Optional

from engine.checkins import get_daily_checkins
from engine.dates import days_between
from engine.schemas import MomentumPoint
from engine.store import RecordStore
from engine.streaks import get_grace_days

MAX_SCORE = 10
LAYERS = ("all", "actions", "resistance", "weekly")


def _round1(value: float) -> float:
    # half-up, so 6.25 → 6.3 rather than banker's rounding
    return math.floor(value * 10 + 0.5) / 10


def score_checkin(checkin: Dict, is_restart: bool, grace_day_used: bool) -> float:
    score = 2.0
    if checkin.get("did_something"):
        score += 3
    if len(checkin.get("tiny_action") or "") > 5:
        score += 1
    if len(checkin.get("step_statement") or "") > 5:
        score += 1
    mode = checkin.get("daily_mode")
    if mode == "do":
        score += 1
    elif mode in ("plan", "learn"):
        score += 0.5
    if is_restart:
        score += 2
    if grace_day_used:
        score = max(score - 1, 0)
    return min(_round1(score), MAX_SCORE)


def get_momentum_data(store: RecordStore, dream_id: str) -> List[Dict]:
    checkins = get_daily_checkins(store, dream_id)
    if not checkins:
        return []
    grace_dates = {g["used_for_date"] for g in get_grace_days(store, dream_id)}

    first_by_date: Dict[str, Dict] = {}
    for c in checkins:
        first_by_date.setdefault(c["date"], c)
    dates = sorted(first_by_date)

    points = []
    for i, date in enumerate(dates):
        c = first_by_date[date]
        is_restart = i > 0 and days_between(dates[i - 1], date) >= 2
        grace_day_used = date in grace_dates
        points.append(MomentumPoint(
            date=date,
            score=score_checkin(c, is_restart, grace_day_used),
            checkin_done=True,
            tiny_action_done=bool(c.get("did_something")),
            is_restart=is_restart,
            grace_day_used=grace_day_used,
            note=c.get("tiny_win") or c.get("tiny_action") or "",
            hard_reason=c.get("hard_reason") or "",
            daily_mode=c.get("daily_mode") or "",
        ).model_dump())
    return points


# ============================================================================
# Views over the point list
# ============================================================================

def filter_momentum(points: List[Dict], layer: str = "all") -> List[Dict]:
    """actions: days moved; resistance: days with a hard reason; else everything."""
    if layer == "actions":
        return [p for p in points if p["tiny_action_done"]]
    if layer == "resistance":
        return [p for p in points if p["hard_reason"]]
    return list(points)


def average_momentum(points: List[Dict]) -> Optional[float]:
    if not points:
        return None
    return _round1(sum(p["score"] for p in points) / len(points))


def resilient_dates(points: List[Dict]) -> List[str]:
    """Dates where the user came back after 2+ days and still scored 5 or more."""
    return [
        cur["date"]
        for prev, cur in zip(points, points[1:])
        if days_between(prev["date"], cur["date"]) >= 2 and cur["score"] >= 5
    ]
