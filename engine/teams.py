# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""
Dream teams — small accountability groups joined by a 6-character code.

Storage: dreamblock-teams.json, dreamblock-team_signals.json
Signals are an append-only log. Nothing stops a member from signalling
twice on one day, so readers resolve a day with signals_for_day(), where
the latest signal per member wins.
"""

import logging
import random
import uuid
from typing import Dict, List, Optional

from engine.dates import When, resolve_now, today_str
from engine.events import Events, log_event
from engine.schemas import DreamblockNotFoundError, DreamblockValidationError
from engine.store import (
    Collections, RecordStore, append, find_one, load_validated_list, save_validated_list, upsert,
)
from engine.streaks import get_streak_with_grace

logger = logging.getLogger("dreamblock.teams")

CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
CODE_LENGTH = 6
SHARING_LEVELS = ("private", "streak_only", "tiny_action", "weekly_summary")
MEMBER_EMOJIS = ["🌱", "🔥", "⚡", "🌙", "🌊", "🦋", "🪐", "🌿", "💡", "🎯", "🌄", "✦"]


def generate_team_code(rng: Optional[random.Random] = None) -> str:
    rng = rng or random
    return "".join(rng.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


def _unique_code(store: RecordStore) -> str:
    taken = {t["code"] for t in get_teams(store)}
    code = generate_team_code()
    while code in taken:
        code = generate_team_code()
    return code


def _check_sharing(sharing_level: str):
    if sharing_level not in SHARING_LEVELS:
        raise DreamblockValidationError(
            f"Invalid sharing level '{sharing_level}'. Valid: {', '.join(SHARING_LEVELS)}"
        )


def _member(name: str, dream_title: str, sharing_level: str, joined_at: str) -> Dict:
    return {
        "id": str(uuid.uuid4()),
        "name": name,
        "emoji": random.choice(MEMBER_EMOJIS),
        "dream_title": dream_title or "My dream",
        "is_me": True,
        "sharing_level": sharing_level,
        "joined_at": joined_at,
    }


# ============================================================================
# Team records
# ============================================================================

def get_teams(store: RecordStore) -> List[Dict]:
    return load_validated_list(store, Collections.TEAMS)


def get_team(store: RecordStore, team_id: str) -> Optional[Dict]:
    return find_one(store, Collections.TEAMS, id=team_id)


def get_team_by_code(store: RecordStore, code: str) -> Optional[Dict]:
    return find_one(store, Collections.TEAMS, code=code.strip().upper())


def save_team(store: RecordStore, team: Dict) -> None:
    upsert(store, Collections.TEAMS, team)


def leave_team(store: RecordStore, team_id: str) -> bool:
    """Drop the local team record. Returns False if it wasn't there."""
    teams = get_teams(store)
    kept = [t for t in teams if t["id"] != team_id]
    if len(kept) == len(teams):
        return False
    save_validated_list(store, Collections.TEAMS, kept)
    logger.info("Left team %s", team_id)
    return True


def create_team(
    store: RecordStore,
    name: str = "",
    my_dream_id: str = "",
    my_name: str = "",
    dream_title: str = "",
    sharing_level: str = "streak_only",
    now: When = None,
) -> Dict:
    _check_sharing(sharing_level)
    timestamp = resolve_now(now).isoformat()
    me = _member(my_name or "You", dream_title, sharing_level, timestamp)
    team = {
        "id": str(uuid.uuid4()),
        "code": _unique_code(store),
        "name": name or "Dream Team",
        "my_dream_id": my_dream_id,
        "my_member_id": me["id"],
        "sharing_level": sharing_level,
        "privacy_locked": False,
        "members": [me],
        "created_at": timestamp,
    }
    save_team(store, team)
    logger.info("Team created: %s (%s)", team["name"], team["code"])
    log_event(store, Events.DREAM_TEAM_INVITED, my_dream_id or None, {"code": team["code"]}, team_id=team["id"], now=now)
    return team


def join_team(
    store: RecordStore,
    code: str,
    my_name: str = "",
    dream_title: str = "",
    sharing_level: str = "streak_only",
    my_dream_id: str = "",
    now: When = None,
) -> Dict:
    _check_sharing(sharing_level)
    team = get_team_by_code(store, code)
    if team is None:
        logger.warning("No team with code %s", code)
        raise DreamblockNotFoundError(f"No team found with code '{code.strip().upper()}'")

    me = _member(my_name or "A dreamer", dream_title, sharing_level, resolve_now(now).isoformat())
    team = {
        **team,
        "my_member_id": me["id"],
        "sharing_level": sharing_level,
        "members": team["members"] + [me],
    }
    if my_dream_id:
        team["my_dream_id"] = my_dream_id
    save_team(store, team)
    log_event(store, Events.DREAM_TEAM_JOINED, team["my_dream_id"] or None, {"code": team["code"]}, team_id=team["id"], now=now)
    return team


# ============================================================================
# Signals
# ============================================================================

def send_signal(
    store: RecordStore,
    team_id: str,
    did_something: bool,
    action_shared: Optional[str] = None,
    now: When = None,
) -> Dict:
    """Broadcast today's did-something for the local member."""
    team = get_team(store, team_id)
    if team is None:
        raise DreamblockNotFoundError(f"Team '{team_id}' not found")

    sharing = team["sharing_level"]
    streak = None
    if sharing != "private" and team["my_dream_id"]:
        streak = get_streak_with_grace(store, team["my_dream_id"], now)

    signal = {
        "id": str(uuid.uuid4()),
        "team_id": team_id,
        "member_id": team["my_member_id"],
        "date": today_str(now),
        "did_something": did_something,
        "action_shared": action_shared if sharing in ("tiny_action", "weekly_summary") else None,
        "streak": streak,
        "is_restart": False,
        "created_at": resolve_now(now).isoformat(),
    }
    append(store, Collections.TEAM_SIGNALS, signal)
    log_event(store, Events.DREAM_TEAM_PING_SENT, team["my_dream_id"] or None,
              {"did_something": did_something}, team_id=team_id, now=now)
    return signal


def get_team_signals(store: RecordStore, team_id: str, date: Optional[str] = None) -> List[Dict]:
    signals = [s for s in load_validated_list(store, Collections.TEAM_SIGNALS) if s["team_id"] == team_id]
    if date:
        signals = [s for s in signals if s["date"] == date]
    return signals


def signals_for_day(store: RecordStore, team_id: str, date: str) -> Dict[str, Dict]:
    """member_id → that member's latest signal for the date."""
    latest: Dict[str, Dict] = {}
    # stable sort keeps log order for equal timestamps
    for signal in sorted(get_team_signals(store, team_id, date), key=lambda s: s["created_at"]):
        latest[signal["member_id"]] = signal
    return latest
