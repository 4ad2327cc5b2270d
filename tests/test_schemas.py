# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""Schema tests — defaults, range checks, forward-compatible extra fields."""

import pytest
from pydantic import ValidationError

from engine.schemas import (
    DailyCheckIn, Dream, DreamIntake, DreamXP, RealityAnswers, ResistanceAnswers, XPEvent,
)

NOW = "2024-01-01T09:00:00"


class TestAnswers:

    def test_reality_tri_state_defaults_to_skipped(self):
        r = RealityAnswers()
        assert r.willing_to_commit is None
        assert r.without_reward is None
        assert r.responsibility_conflict is None
        assert r.sacrifice == []

    def test_resistance_defaults_are_empty(self):
        a = ResistanceAnswers()
        assert (a.emotion, a.first_thought, a.stuck_point, a.protecting) == ("", "", "", "")

    @pytest.mark.parametrize("field", ["importance", "pain", "fear"])
    def test_intake_scores_bounded(self, field):
        with pytest.raises(ValidationError):
            DreamIntake(title="x", **{field: 11})
        with pytest.raises(ValidationError):
            DreamIntake(title="x", **{field: 0})


class TestRecords:

    def test_checkin_mood_bounded(self):
        with pytest.raises(ValidationError):
            DailyCheckIn(id="c", dream_id="d", date="2024-01-01", mood=6, created_at=NOW)

    def test_checkin_defaults(self):
        c = DailyCheckIn(id="c", dream_id="d", date="2024-01-01", created_at=NOW)
        assert c.mood == 3
        assert c.did_something is False
        assert c.hard_reason == ""

    def test_dream_keeps_unknown_fields(self):
        raw = {"id": "d", "title": "t", "created_at": NOW, "updated_at": NOW, "future_field": 7}
        dumped = Dream.model_validate(raw).model_dump()
        assert dumped["future_field"] == 7
        assert dumped["status"] == "active"
        assert dumped["insight_summary"] is None

    def test_dream_requires_timestamps(self):
        with pytest.raises(ValidationError):
            Dream(id="d", title="t")

    def test_xp_history_nested(self):
        event = XPEvent(id="e", dream_id="d", reason="checkin", amount=10, label="Daily check-in", created_at=NOW)
        ledger = DreamXP(dream_id="d", total=10, history=[event])
        assert ledger.model_dump()["history"][0]["amount"] == 10
