# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""
Dreamblock Schema Registry — Pydantic models for every stored collection.

Single source of truth for every JSON record the engine reads/writes.
Catches field drift, type mismatches, and missing fields at load time.

Usage:
    from engine.schemas import Dream, DailyCheckIn

    # Validate on load
    dream = Dream.model_validate(raw)

    # Serialize on save
    raw = dream.model_dump()

All models use extra="allow" so existing data with unknown fields
won't break — we just won't validate those extra fields.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ============================================================================
# Base config — all models inherit this
# ============================================================================

class DreamblockModel(BaseModel):
    """Base for all Dreamblock schemas. Allows extra fields for forward compat."""
    model_config = {"extra": "allow"}


# ============================================================================
# Custom exceptions, raised at orchestration and tool boundaries only
# ============================================================================

class DreamblockNotFoundError(Exception):
    """Raised when a referenced dream or team doesn't exist."""

class DreamblockValidationError(Exception):
    """Raised when input fails validation (bad status, unknown XP reason, etc.)."""


# ============================================================================
# ASSESSMENT ANSWERS
# ============================================================================

class DreamIntake(DreamblockModel):
    """Step 1 of the assessment: what the dream is and how much it weighs."""
    title: str = ""
    category: str = ""  # Music, Podcast, Art, Business, Athletic, Writing, Lifestyle, Other
    category_other: Optional[str] = None
    years_delayed: str = ""  # "< 1 year", "1–3 years", "3–7 years", "7–15 years", "15+ years"
    importance: int = Field(default=5, ge=1, le=10)
    pain: int = Field(default=5, ge=1, le=10)
    fear: int = Field(default=5, ge=1, le=10)


class ResistanceAnswers(DreamblockModel):
    """Step 2: the resistance interview. Empty string means unanswered."""
    emotion: str = ""  # fear, shame, overwhelm, boredom, excite_crash, numbness, other, not_sure
    emotion_other: Optional[str] = None
    first_thought: str = ""  # not_enough, judgment, no_start, too_late, wont_matter
    first_thought_other: Optional[str] = None
    stuck_point: str = ""  # starting, consistency, finishing, publishing, promoting, committing
    stuck_point_other: Optional[str] = None
    protecting: str = ""  # comfort, identity, relationships, control, certainty
    protecting_other: Optional[str] = None
    guaranteed_hesitate: str = ""  # yes, no


class RealityAnswers(DreamblockModel):
    """Step 3: the reality check. None means the question was skipped."""
    physical_constraint: str = ""  # none, minor, significant, impossible
    time_realistic: str = ""  # yes, some, little, none
    sacrifice: List[str] = Field(default_factory=list)
    responsibility_conflict: Optional[bool] = None
    realistic_years: str = ""
    willing_to_commit: Optional[bool] = None
    true_want: str = ""  # status, identity, process, meaning, output, other
    true_want_other: Optional[str] = None
    without_reward: Optional[bool] = None


# ============================================================================
# DREAMS
# ============================================================================

class InsightSummary(DreamblockModel):
    """SEEN / HELD / MOVED narrative attached to a dream at creation."""
    seen: str
    held: str
    moved: str
    moved_doorway: str
    moved_mode: str = "do"
    philosophy_line: str


class ReleaseReflection(DreamblockModel):
    taught_me: str = ""
    no_longer_carry: str = ""
    energy_goes_to: str = ""


class Dream(DreamblockModel):
    """Single dream: stored in dreamblock-dreams.json (list)."""
    id: str
    title: str
    category: str = "Other"
    category_other: Optional[str] = None
    years_delayed: str = ""
    importance: int = 5
    pain: int = 5
    fear: int = 5
    # Resistance answers
    emotion: str = ""
    emotion_other: Optional[str] = None
    first_thought: str = ""
    first_thought_other: Optional[str] = None
    stuck_point: str = ""
    stuck_point_other: Optional[str] = None
    protecting: str = ""
    protecting_other: Optional[str] = None
    guaranteed_hesitate: str = ""
    # Reality answers
    physical_constraint: str = ""
    time_realistic: str = ""
    sacrifice: List[str] = Field(default_factory=list)
    responsibility_conflict: bool = False
    realistic_years: str = ""
    willing_to_commit: bool = False
    true_want: str = ""
    true_want_other: Optional[str] = None
    without_reward: bool = False
    # Derived once at creation, never recomputed
    archetype: str = ""
    stuck_phase: str = ""
    classification: str = ""
    micro_steps: List[str] = Field(default_factory=list)
    insight_summary: Optional[InsightSummary] = None
    # Lifecycle
    status: str = "active"  # active, paused, completed, archived, released
    user_intention: Optional[str] = None
    released_at: Optional[str] = None
    release_reflection: Optional[ReleaseReflection] = None
    created_at: str
    updated_at: str


# ============================================================================
# CHECK-INS
# ============================================================================

class DailyCheckIn(DreamblockModel):
    """One check-in per (dream_id, date): dreamblock-checkins.json (list)."""
    id: str
    dream_id: str
    date: str  # YYYY-MM-DD, local device date
    did_something: bool = False
    tiny_action: str = ""
    hard_reason: str = ""  # fear, perfectionism, unclear, energy, time, distraction, other
    easy_version: str = ""
    daily_mode: str = ""  # do, plan, ask, learn, reduce_friction, rest
    step_statement: str = ""
    mood: int = Field(default=3, ge=1, le=5)
    resistance_note: str = ""
    tiny_win: str = ""
    shared_with_team: bool = False
    created_at: str


class LegacyCheckIn(DreamblockModel):
    """Older free-form check-in shape: dreamblock-legacy_checkins.json (list)."""
    id: str
    dream_id: Optional[str] = None
    avoided: str = ""
    resistance_showed: str = ""
    emotion: str = ""
    stuck_point: str = ""
    tiny_step: str = ""
    created_at: str


class WeeklySummary(DreamblockModel):
    """Weekly reflection: dreamblock-weekly_summaries.json (list)."""
    id: str
    dream_id: str
    week_number: int
    week_start: str
    week_end: str
    checkin_count: int = 0
    did_days: int = 0
    tiny_wins: List[str] = Field(default_factory=list)
    friction_reducers: List[str] = Field(default_factory=list)
    patterns: str = ""
    focus_next_week: str = ""
    token_awarded: bool = False
    philosophy_line: str = ""
    created_at: str
    viewed_at: Optional[str] = None


# ============================================================================
# STREAKS, GRACE, BADGES, XP
# ============================================================================

class PersonalBest(DreamblockModel):
    dream_id: str
    best_streak: int = 0
    achieved_at: str


class GraceDay(DreamblockModel):
    """A consumed streak-protection token covering one missed date."""
    id: str
    dream_id: str
    used_for_date: str
    created_at: str


class Badge(DreamblockModel):
    id: str
    dream_id: str
    type: str
    earned_at: str
    label: str
    description: str
    emoji: str


class XPEvent(DreamblockModel):
    id: str
    dream_id: str
    reason: str
    amount: int
    label: str
    created_at: str


class DreamXP(DreamblockModel):
    """Running XP ledger. total always equals sum(history[].amount)."""
    dream_id: str
    total: int = 0
    history: List[XPEvent] = Field(default_factory=list)


class MomentumPoint(DreamblockModel):
    """One plotted day. Derived, never stored."""
    date: str
    score: float
    checkin_done: bool = True
    tiny_action_done: bool = False
    is_restart: bool = False
    grace_day_used: bool = False
    note: str = ""
    hard_reason: str = ""
    daily_mode: str = ""


# ============================================================================
# TEAMS
# ============================================================================

class TeamMember(DreamblockModel):
    id: str
    name: str
    emoji: str = ""
    dream_title: str = ""
    is_me: bool = False
    sharing_level: str = "streak_only"  # private, streak_only, tiny_action, weekly_summary
    joined_at: str


class DreamTeam(DreamblockModel):
    """Dream team: dreamblock-teams.json (list). Signals live in team_signals."""
    id: str
    code: str
    name: str = "Dream Team"
    my_dream_id: str = ""
    my_member_id: str
    sharing_level: str = "streak_only"
    privacy_locked: bool = False
    members: List[TeamMember] = Field(default_factory=list)
    created_at: str


class TeamSignal(DreamblockModel):
    """Daily did-something broadcast. Not deduplicated on write."""
    id: str
    team_id: str
    member_id: str
    date: str
    did_something: bool
    action_shared: Optional[str] = None
    streak: Optional[int] = None
    is_restart: bool = False
    created_at: str


# ============================================================================
# EVENT LOG
# ============================================================================

class EventLogEntry(DreamblockModel):
    id: str
    event_type: str
    dream_id: Optional[str] = None
    team_id: Optional[str] = None
    payload: Optional[Dict[str, Any]] = None
    created_at: str
