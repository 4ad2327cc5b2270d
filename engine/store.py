# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""
Dreamblock Record Store — load-all / save-all over named collections.

Every collection is a JSON array. No business rules live here.

    store = JsonFileStore(get_paths().data_dir)
    dreams = load_validated_list(store, Collections.DREAMS)
    save_validated_list(store, Collections.DREAMS, dreams)

Stores are injected into every engine function, so tests run against
MemoryStore and the tool layer against JsonFileStore. A collection that
can't be read or validated loads as empty.
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Type

from core.paths import DreamblockPaths, get_paths
from engine.schemas import (
    DreamblockModel, Dream, DailyCheckIn, WeeklySummary, Badge, PersonalBest,
    GraceDay, DreamXP, DreamTeam, TeamSignal, EventLogEntry, LegacyCheckIn,
)

logger = logging.getLogger("dreamblock.store")


class Collections:
    """Registry of every collection name. Use these constants, not raw strings."""
    DREAMS = "dreams"
    CHECKINS = "checkins"
    WEEKLY_SUMMARIES = "weekly_summaries"
    BADGES = "badges"
    PERSONAL_BESTS = "personal_bests"
    GRACE_DAYS = "grace_days"
    XP = "xp"
    TEAMS = "teams"
    TEAM_SIGNALS = "team_signals"
    EVENT_LOG = "event_log"
    LEGACY_CHECKINS = "legacy_checkins"


COLLECTION_SCHEMAS: Dict[str, Type[DreamblockModel]] = {
    Collections.DREAMS: Dream,
    Collections.CHECKINS: DailyCheckIn,
    Collections.WEEKLY_SUMMARIES: WeeklySummary,
    Collections.BADGES: Badge,
    Collections.PERSONAL_BESTS: PersonalBest,
    Collections.GRACE_DAYS: GraceDay,
    Collections.XP: DreamXP,
    Collections.TEAMS: DreamTeam,
    Collections.TEAM_SIGNALS: TeamSignal,
    Collections.EVENT_LOG: EventLogEntry,
    Collections.LEGACY_CHECKINS: LegacyCheckIn,
}


# ============================================================================
# Store contract
# ============================================================================

class RecordStore:
    """Opaque persistence boundary: one JSON-serializable list per collection."""

    def load_all(self, collection: str) -> List[Dict]:
        raise NotImplementedError

    def save_all(self, collection: str, items: List[Dict]) -> None:
        raise NotImplementedError


class MemoryStore(RecordStore):
    """In-process store for tests. Round-trips through JSON like the real one."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def load_all(self, collection: str) -> List[Dict]:
        raw = self._data.get(collection)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Unreadable collection %s (%s), treating as empty", collection, e)
            return []
        return data if isinstance(data, list) else []

    def save_all(self, collection: str, items: List[Dict]) -> None:
        self._data[collection] = json.dumps(items)

    def put_raw(self, collection: str, raw: str) -> None:
        """Write raw text into a collection. For corruption tests."""
        self._data[collection] = raw


def _atomic_rename(tmp: Path, dest: Path):
    """Flush, fsync, then rename — crash-safe atomic write."""
    fd = os.open(str(tmp), os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)
    os.rename(str(tmp), str(dest))


class JsonFileStore(RecordStore):
    """One dreamblock-<collection>.json file per collection under data_dir."""

    def __init__(self, data_dir: Optional[Path] = None):
        self._paths = get_paths() if data_dir is None else DreamblockPaths(data_dir)

    def path_for(self, collection: str) -> Path:
        return self._paths.collection_file(collection)

    def load_all(self, collection: str) -> List[Dict]:
        path = self.path_for(collection)
        if not path.exists():
            return []
        try:
            data = json.loads(path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Unreadable collection %s (%s), treating as empty", collection, e)
            return []
        if not isinstance(data, list):
            logger.warning("Collection %s is not a list, treating as empty", collection)
            return []
        return data

    def save_all(self, collection: str, items: List[Dict]) -> None:
        path = self.path_for(collection)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        tmp.write_text(json.dumps(items, indent=2))
        _atomic_rename(tmp, path)


def get_store() -> RecordStore:
    """File store rooted at the currently configured data dir."""
    return JsonFileStore(get_paths().data_dir)


# ============================================================================
# Validated load/save helpers
# ============================================================================

def load_validated_list(store: RecordStore, collection: str) -> List[Dict]:
    """Load a collection and validate each item against its schema.

    Any invalid item empties the whole collection, same as unparseable JSON.
    """
    schema = COLLECTION_SCHEMAS[collection]
    try:
        items = store.load_all(collection)
        return [schema.model_validate(item).model_dump() for item in items]
    except Exception as e:
        logger.warning("Invalid records in %s (%s), treating as empty", collection, e)
        return []


def save_validated_list(store: RecordStore, collection: str, items: List[Dict]) -> None:
    """Validate every item, then save the whole collection."""
    schema = COLLECTION_SCHEMAS[collection]
    logger.debug("Saving %d records to %s", len(items), collection)
    models = [schema.model_validate(item) for item in items]
    store.save_all(collection, [m.model_dump() for m in models])


def upsert(store: RecordStore, collection: str, record: Dict, key: str = "id") -> None:
    """Replace the record with the same key, or append it."""
    items = load_validated_list(store, collection)
    for i, existing in enumerate(items):
        if existing.get(key) == record.get(key):
            items[i] = record
            break
    else:
        items.append(record)
    save_validated_list(store, collection, items)


def append(store: RecordStore, collection: str, record: Dict) -> None:
    items = load_validated_list(store, collection)
    items.append(record)
    save_validated_list(store, collection, items)


def find_one(store: RecordStore, collection: str, **match) -> Optional[Dict]:
    """First record whose fields equal every keyword given, else None."""
    for item in load_validated_list(store, collection):
        if all(item.get(k) == v for k, v in match.items()):
            return item
    return None
