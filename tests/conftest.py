# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""Test configuration — paths isolation, a fresh store, a clean event bus."""

import uuid
from datetime import datetime

import pytest

from core.paths import configure, reset
from engine.checkins import save_daily_checkin
from engine.dreams import create_dream
from engine.events import bus
from engine.store import MemoryStore

CREATED = datetime(2024, 1, 1, 9, 0)


@pytest.fixture(autouse=True)
def isolated_paths(tmp_path):
    """Route all Dreamblock data to a temp directory for test isolation."""
    paths = configure(tmp_path)
    paths.ensure_dirs()
    yield paths
    reset()


@pytest.fixture(autouse=True)
def clean_bus():
    bus.reset()
    yield
    bus.reset()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def make_dream(store):
    """Create a dream through the real assessment flow."""
    def _make(title="Record an album", created=CREATED, intake=None, resistance=None, reality=None):
        return create_dream(
            store,
            intake={"title": title, "category": "Music", "years_delayed": "3–7 years",
                    "importance": 8, "pain": 7, "fear": 6, **(intake or {})},
            resistance=resistance or {"emotion": "fear", "first_thought": "judgment",
                                      "stuck_point": "publishing", "protecting": "control"},
            reality=reality or {"physical_constraint": "none", "time_realistic": "some",
                                "willing_to_commit": True, "without_reward": True},
            now=created,
        )
    return _make


@pytest.fixture
def add_checkin(store):
    """Write a check-in record directly, bypassing the submission flow."""
    def _add(dream_id, date, **fields):
        checkin = {
            "id": str(uuid.uuid4()),
            "dream_id": dream_id,
            "date": date,
            "did_something": True,
            "created_at": f"{date}T20:00:00",
            **fields,
        }
        save_daily_checkin(store, checkin)
        return checkin
    return _add
