# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""
Check-in records — daily check-ins plus the older free-form shape.

Storage: dreamblock-checkins.json, dreamblock-legacy_checkins.json
Natural key for a daily check-in is (dream_id, date); saves upsert by id.
"""

import logging
from typing import Dict, List, Optional

from pydantic import ValidationError

from engine.schemas import DreamblockValidationError, LegacyCheckIn
from engine.store import Collections, RecordStore, append, find_one, load_validated_list, upsert

logger = logging.getLogger("dreamblock.checkins")


def get_daily_checkins(store: RecordStore, dream_id: str) -> List[Dict]:
    """All check-ins for a dream, oldest date first (stable for same-day rows)."""
    checkins = [
        c for c in load_validated_list(store, Collections.CHECKINS)
        if c["dream_id"] == dream_id
    ]
    return sorted(checkins, key=lambda c: c["date"])


def get_checkin_by_date(store: RecordStore, dream_id: str, date: str) -> Optional[Dict]:
    return find_one(store, Collections.CHECKINS, dream_id=dream_id, date=date)


def get_checkin_dates(store: RecordStore, dream_id: str) -> List[str]:
    """Distinct check-in dates, ascending."""
    return sorted({c["date"] for c in get_daily_checkins(store, dream_id)})


def save_daily_checkin(store: RecordStore, checkin: Dict) -> None:
    logger.debug("Saving check-in %s for %s on %s", checkin["id"], checkin["dream_id"], checkin["date"])
    upsert(store, Collections.CHECKINS, checkin)


# ============================================================================
# Legacy check-ins
# ============================================================================

def get_legacy_checkins(store: RecordStore, dream_id: Optional[str] = None) -> List[Dict]:
    items = load_validated_list(store, Collections.LEGACY_CHECKINS)
    if dream_id:
        items = [c for c in items if c.get("dream_id") == dream_id]
    return items


def save_legacy_checkin(store: RecordStore, checkin: Dict) -> Dict:
    try:
        record = LegacyCheckIn(**checkin).model_dump()
    except ValidationError as e:
        raise DreamblockValidationError(f"Invalid legacy check-in: {e}") from e
    append(store, Collections.LEGACY_CHECKINS, record)
    return record
