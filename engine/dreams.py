# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""
Dream lifecycle — create from assessment answers, edit, pause, release.

Storage: dreamblock-dreams.json
Derived fields (archetype, stuck_phase, classification, micro_steps,
insight_summary) are computed once in create_dream() and pinned. Dreams
are never deleted; released/archived is a status.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from engine.archetypes import determine_archetype, determine_stuck_phase
from engine.badges import award_badge
from engine.classification import classify_dream
from engine.dates import When, resolve_now
from engine.events import Events, log_event
from engine.insight import generate_insight
from engine.microsteps import get_micro_steps
from engine.schemas import (
    DreamblockNotFoundError, DreamblockValidationError,
    DreamIntake, RealityAnswers, ReleaseReflection, ResistanceAnswers,
)
from engine.store import (
    Collections, RecordStore, find_one, load_validated_list, save_validated_list, upsert,
)
from engine.xp import add_xp

logger = logging.getLogger("dreamblock.dreams")

STATUSES = ("active", "paused", "completed", "archived", "released")
SETTABLE_STATUSES = ("active", "paused", "completed", "archived")

# Fields that update_dream() must never touch
PINNED_FIELDS = (
    "id", "archetype", "stuck_phase", "classification", "micro_steps",
    "insight_summary", "created_at",
)

Answers = Union[Dict[str, Any], DreamIntake, ResistanceAnswers, RealityAnswers]


def _validate(model, value):
    try:
        return model.model_validate(value or {})
    except ValidationError as e:
        raise DreamblockValidationError(f"Invalid {model.__name__}: {e}") from e


def create_dream(
    store: RecordStore,
    intake: Answers,
    resistance: Answers,
    reality: Answers,
    user_intention: Optional[str] = None,
    now: When = None,
) -> Dict:
    """Run the assessment rules over the answers and persist the dream."""
    intake = _validate(DreamIntake, intake)
    resistance = _validate(ResistanceAnswers, resistance)
    reality = _validate(RealityAnswers, reality)
    if not intake.title.strip():
        raise DreamblockValidationError("Dream title is required")

    archetype = determine_archetype(resistance)
    timestamp = resolve_now(now).isoformat()

    dream = {
        "id": str(uuid.uuid4()),
        "title": intake.title,
        "category": intake.category or "Other",
        "category_other": intake.category_other,
        "years_delayed": intake.years_delayed,
        "importance": intake.importance,
        "pain": intake.pain,
        "fear": intake.fear,
        **resistance.model_dump(),
        "physical_constraint": reality.physical_constraint,
        "time_realistic": reality.time_realistic,
        "sacrifice": list(reality.sacrifice),
        # skipped answers are stored as False
        "responsibility_conflict": bool(reality.responsibility_conflict),
        "realistic_years": reality.realistic_years,
        "willing_to_commit": bool(reality.willing_to_commit),
        "true_want": reality.true_want,
        "true_want_other": reality.true_want_other,
        "without_reward": bool(reality.without_reward),
        "archetype": archetype,
        "stuck_phase": determine_stuck_phase(resistance.stuck_point),
        "classification": classify_dream(intake, resistance, reality),
        "micro_steps": get_micro_steps(archetype, intake.title, intake.category),
        "status": "active",
        "user_intention": user_intention,
        "created_at": timestamp,
        "updated_at": timestamp,
    }
    dream["insight_summary"] = generate_insight(dream)

    upsert(store, Collections.DREAMS, dream)
    logger.info("Dream created: %s (%s / %s)", dream["title"], archetype, dream["classification"])
    log_event(store, Events.ASSESSMENT_COMPLETED, dream["id"], {
        "archetype": archetype,
        "classification": dream["classification"],
    }, now=now)
    add_xp(store, dream["id"], "assessment", now=now)
    return get_dream(store, dream["id"])


def get_dream(store: RecordStore, dream_id: str) -> Optional[Dict]:
    return find_one(store, Collections.DREAMS, id=dream_id)


def require_dream(store: RecordStore, dream_id: str) -> Dict:
    dream = get_dream(store, dream_id)
    if dream is None:
        logger.warning("Dream not found: %s", dream_id)
        raise DreamblockNotFoundError(f"Dream '{dream_id}' not found")
    return dream


def list_dreams(store: RecordStore, status: Optional[str] = None) -> List[Dict]:
    dreams = load_validated_list(store, Collections.DREAMS)
    if status:
        dreams = [d for d in dreams if d["status"] == status]
    return dreams


def update_dream(store: RecordStore, dream_id: str, patch: Dict[str, Any], now: When = None) -> Dict:
    """Shallow-merge patch into the dream. Derived fields stay as they were."""
    dreams = load_validated_list(store, Collections.DREAMS)
    for i, dream in enumerate(dreams):
        if dream["id"] != dream_id:
            continue
        changes = {k: v for k, v in patch.items() if k not in PINNED_FIELDS}
        if "status" in changes and changes["status"] not in STATUSES:
            raise DreamblockValidationError(
                f"Invalid status '{changes['status']}'. Valid: {', '.join(STATUSES)}"
            )
        dreams[i] = {**dream, **changes, "updated_at": resolve_now(now).isoformat()}
        try:
            save_validated_list(store, Collections.DREAMS, dreams)
        except ValidationError as e:
            raise DreamblockValidationError(f"Invalid dream update: {e}") from e
        return dreams[i]
    raise DreamblockNotFoundError(f"Dream '{dream_id}' not found")


def set_dream_status(store: RecordStore, dream_id: str, status: str, now: When = None) -> Dict:
    """Pause, resume, complete or archive. Releasing goes through release_dream()."""
    if status not in SETTABLE_STATUSES:
        raise DreamblockValidationError(
            f"Invalid status '{status}'. Valid: {', '.join(SETTABLE_STATUSES)}"
        )
    logger.info("Dream %s → %s", dream_id, status)
    return update_dream(store, dream_id, {"status": status}, now=now)


def release_dream(
    store: RecordStore,
    dream_id: str,
    reflection: Optional[Union[Dict[str, str], ReleaseReflection]] = None,
    now: When = None,
) -> Dict:
    require_dream(store, dream_id)
    reflection = _validate(ReleaseReflection, reflection)
    dream = update_dream(store, dream_id, {
        "status": "released",
        "released_at": resolve_now(now).isoformat(),
        "release_reflection": reflection.model_dump(),
    }, now=now)
    award_badge(store, dream_id, "dream_released", now)
    log_event(store, Events.DREAM_RELEASED, dream_id, now=now)
    logger.info("Dream released: %s", dream["title"])
    return dream
