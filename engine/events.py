# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""
Dreamblock Event Log + Event Bus.

Two sinks for the same notification:
- log_event() appends to the event_log collection (append-only, never read
  back for decisions)
- bus.emit() dispatches to in-process listeners (server log, tests)

Usage:
    from engine.events import log_event, bus, Events

    bus.on(Events.MILESTONE_AWARDED, my_handler)
    log_event(store, Events.MILESTONE_AWARDED, dream_id, {"type": "comeback"})
"""

import logging
import threading
import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Deque, Dict, List, Optional

from engine.dates import When, resolve_now
from engine.store import Collections, RecordStore, append, load_validated_list

logger = logging.getLogger("dreamblock.events")

# A handler that emits the event it is handling stops here
MAX_NESTING = 3


class Events:
    """Every event type the engine writes. Use these, not raw strings."""

    ASSESSMENT_COMPLETED = "assessment_completed"
    CHECKIN_COMPLETED = "checkin_completed"
    WEEKLY_SUMMARY_VIEWED = "weekly_summary_viewed"
    MILESTONE_AWARDED = "milestone_awarded"
    DREAM_TEAM_INVITED = "dream_team_invited"
    DREAM_TEAM_JOINED = "dream_team_joined"
    DREAM_TEAM_PING_SENT = "dream_team_ping_sent"
    DREAM_RELEASED = "dream_released"
    GRACE_DAY_APPLIED = "grace_day_applied"
    PERSONAL_BEST_SET = "personal_best_set"
    XP_EARNED = "xp_earned"


@dataclass
class Event:
    type: str
    data: Dict[str, Any]
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
    source: Optional[str] = None


@dataclass
class Listener:
    callback: Callable[[Event], None]
    priority: int = 0
    once: bool = False
    name: str = ""


# ============================================================================
# In-process bus
# ============================================================================

class EventBus:
    """
    Synchronous dispatch. Listeners run in priority order (higher first,
    registration order on ties); a failing listener is logged and skipped.
    The last history_size events are kept for inspection.
    """

    def __init__(self, history_size: int = 100):
        self._listeners: Dict[str, List[Listener]] = {}
        self._recent: Deque[Event] = deque(maxlen=history_size)
        self._guard = threading.Lock()
        self._nesting = 0

    def on(self, event_type: str, callback: Callable, priority: int = 0,
           name: str = "", once: bool = False) -> None:
        listener = Listener(callback, priority, once, name or getattr(callback, "__name__", "?"))
        with self._guard:
            bucket = self._listeners.setdefault(event_type, [])
            # insert after every listener of equal or higher priority
            pos = next((i for i, sub in enumerate(bucket) if sub.priority < priority), len(bucket))
            bucket.insert(pos, listener)

    def once(self, event_type: str, callback: Callable, priority: int = 0) -> None:
        self.on(event_type, callback, priority=priority, once=True)

    def off(self, event_type: str, callback: Callable) -> bool:
        """True if the callback was registered for event_type."""
        with self._guard:
            bucket = self._listeners.get(event_type, [])
            before = len(bucket)
            bucket[:] = [sub for sub in bucket if sub.callback is not callback]
            return len(bucket) != before

    def emit(self, event_type: str, data: Optional[Dict[str, Any]] = None,
             source: Optional[str] = None) -> Event:
        event = Event(type=event_type, data=data or {}, source=source)
        if self._nesting >= MAX_NESTING:
            logger.warning("Nested emit of %s dropped at depth %d", event_type, self._nesting + 1)
            return event

        with self._guard:
            self._recent.append(event)
            bucket = list(self._listeners.get(event_type, []))

        self._nesting += 1
        try:
            for listener in bucket:
                if listener.once:
                    self.off(event_type, listener.callback)
                try:
                    listener.callback(event)
                except Exception as e:
                    logger.error("Listener %s failed on %s: %s", listener.name, event_type, e)
        finally:
            self._nesting -= 1
        return event

    def history(self, event_type: Optional[str] = None, limit: int = 20) -> List[Dict[str, Any]]:
        with self._guard:
            events = [e for e in self._recent if not event_type or e.type == event_type]
        return [
            {"type": e.type, "data": e.data, "timestamp": e.timestamp, "source": e.source}
            for e in events[-limit:]
        ]

    def reset(self) -> None:
        with self._guard:
            self._listeners.clear()
            self._recent.clear()
            self._nesting = 0


bus = EventBus()


# ============================================================================
# Persisted log
# ============================================================================

def log_event(
    store: RecordStore,
    event_type: str,
    dream_id: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
    team_id: Optional[str] = None,
    now: When = None,
) -> Dict:
    """Append an entry to the event log and notify bus listeners."""
    entry = {
        "id": str(uuid.uuid4()),
        "event_type": event_type,
        "dream_id": dream_id,
        "team_id": team_id,
        "payload": payload,
        "created_at": resolve_now(now).isoformat(),
    }
    append(store, Collections.EVENT_LOG, entry)
    bus.emit(event_type, {"dream_id": dream_id, "team_id": team_id, **(payload or {})}, source="event_log")
    return entry


def get_event_log(
    store: RecordStore,
    event_type: Optional[str] = None,
    dream_id: Optional[str] = None,
) -> List[Dict]:
    entries = load_validated_list(store, Collections.EVENT_LOG)
    if event_type:
        entries = [e for e in entries if e["event_type"] == event_type]
    if dream_id:
        entries = [e for e in entries if e.get("dream_id") == dream_id]
    return entries
