# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""
XP ledger — one DreamXP record per dream, stored in dreamblock-xp.json.

The event is appended and the total incremented in the same save, so
total == sum(history[].amount) holds after every call.
"""

import logging
import uuid
from typing import Dict, Optional

from engine.dates import When, resolve_now
from engine.events import Events, log_event
from engine.schemas import DreamblockValidationError
from engine.store import Collections, RecordStore, find_one, load_validated_list, save_validated_list

logger = logging.getLogger("dreamblock.xp")

XP_AMOUNTS: Dict[str, int] = {
    "checkin": 10,
    "tiny_action": 15,
    "restart": 25,
    "reflection": 5,
    "team_support": 10,
    "grace_day_converted": 20,
    "streak_milestone": 50,
    "weekly_token": 30,
    "assessment": 40,
}

XP_LABELS: Dict[str, str] = {
    "checkin": "Daily check-in",
    "tiny_action": "Tiny action taken",
    "restart": "Restarted after a break",
    "reflection": "Reflection written",
    "team_support": "Supported a teammate",
    "grace_day_converted": "Grace day converted",
    "streak_milestone": "Streak milestone",
    "weekly_token": "Weekly token",
    "assessment": "Assessment completed",
}


def get_dream_xp(store: RecordStore, dream_id: str) -> Dict:
    return find_one(store, Collections.XP, dream_id=dream_id) or {
        "dream_id": dream_id, "total": 0, "history": [],
    }


def add_xp(
    store: RecordStore,
    dream_id: str,
    reason: str,
    amount: Optional[int] = None,
    now: When = None,
) -> Dict:
    """Grant XP for a known reason. amount overrides the table value."""
    if reason not in XP_AMOUNTS:
        raise DreamblockValidationError(
            f"Unknown XP reason '{reason}'. Valid: {', '.join(XP_AMOUNTS)}"
        )
    amount = XP_AMOUNTS[reason] if amount is None else amount
    event = {
        "id": str(uuid.uuid4()),
        "dream_id": dream_id,
        "reason": reason,
        "amount": amount,
        "label": XP_LABELS[reason],
        "created_at": resolve_now(now).isoformat(),
    }

    ledgers = load_validated_list(store, Collections.XP)
    for ledger in ledgers:
        if ledger["dream_id"] == dream_id:
            ledger["total"] += amount
            ledger["history"].append(event)
            break
    else:
        ledgers.append({"dream_id": dream_id, "total": amount, "history": [event]})
    save_validated_list(store, Collections.XP, ledgers)

    logger.debug("XP +%d (%s) for %s", amount, reason, dream_id)
    log_event(store, Events.XP_EARNED, dream_id, {"reason": reason, "amount": amount}, now=now)
    return event
