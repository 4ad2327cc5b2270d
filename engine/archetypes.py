# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""
Resistance archetypes — what kind of resistance is keeping the dream parked.

determine_archetype() walks an ordered rule list and returns the first
match. Order is the behavior: several predicates overlap on purpose
(e.g. shame + comfort + hesitate hits "Shame Loop" before "Fear of
Success"), so never reorder ARCHETYPE_RULES.
"""

from typing import Callable, Dict, List, Tuple

from engine.schemas import ResistanceAnswers

FEAR_OF_VISIBILITY = "Fear of Visibility"
PERFECTIONIST_FREEZE = "Perfectionist Freeze"
OVERWHELM_FOG = "Overwhelm Fog"
IDENTITY_CONFLICT = "Identity Conflict"
FEAR_OF_SUCCESS = "Fear of Success"
SHAME_LOOP = "Shame Loop"
CONSISTENCY_COLLAPSE = "Consistency Collapse"
MISALIGNMENT = "Misalignment"

ARCHETYPES = (
    FEAR_OF_VISIBILITY, PERFECTIONIST_FREEZE, OVERWHELM_FOG, IDENTITY_CONFLICT,
    FEAR_OF_SUCCESS, SHAME_LOOP, CONSISTENCY_COLLAPSE, MISALIGNMENT,
)

ARCHETYPE_INFO: Dict[str, Dict[str, str]] = {
    FEAR_OF_VISIBILITY: {
        "icon": "◉",
        "tagline": "You can create. You can't be seen.",
        "description": "Your work exists, but sharing it triggers something primal. Visibility feels like exposure, not expression.",
    },
    PERFECTIONIST_FREEZE: {
        "icon": "◌",
        "tagline": "Nothing is ever ready enough.",
        "description": "You raise the bar every time you get close. Perfection isn't a standard. It's a delay mechanism.",
    },
    OVERWHELM_FOG: {
        "icon": "≋",
        "tagline": "The scope swallows you before you begin.",
        "description": "You see the whole mountain, not the next step. The gap between where you are and where you want to be feels uncrossable.",
    },
    IDENTITY_CONFLICT: {
        "icon": "⟁",
        "tagline": "Who am I to do this?",
        "description": "This dream doesn't fit the self-concept you currently inhabit. Pursuing it means becoming someone different, and that's terrifying.",
    },
    FEAR_OF_SUCCESS: {
        "icon": "◈",
        "tagline": "What changes if this actually works?",
        "description": "Failure is familiar. Success would reorganize your life, relationships, and identity in ways you haven't fully faced.",
    },
    SHAME_LOOP: {
        "icon": "⊙",
        "tagline": "Past attempts haunt this one.",
        "description": "You've tried before and it didn't work. Now shame sits at the entrance. The past is preventing the present.",
    },
    CONSISTENCY_COLLAPSE: {
        "icon": "⊿",
        "tagline": "You start strong. You can't sustain.",
        "description": "Initial energy is real, but something breaks at the 2-week mark. This is about systems, not willpower.",
    },
    MISALIGNMENT: {
        "icon": "⊗",
        "tagline": "This may not actually be your dream.",
        "description": "Something about this draws you, but you're not sure it's really yours. It might be borrowed desire, or a symbol of something else entirely.",
    },
}

STUCK_PHASE_MAP: Dict[str, str] = {
    "starting": "First-Step Resistance",
    "committing": "Preparation",
    "consistency": "Momentum",
    "finishing": "Pre-Publish Panic",
    "publishing": "Pre-Publish Panic",
    "promoting": "Pre-Publish Panic",
}

DEFAULT_STUCK_PHASE = "Dormancy"

Rule = Tuple[Callable[[ResistanceAnswers], bool], str]

# First match wins.
ARCHETYPE_RULES: List[Rule] = [
    (lambda a: a.protecting == "identity", IDENTITY_CONFLICT),
    (lambda a: a.emotion == "shame", SHAME_LOOP),
    (lambda a: a.emotion in ("boredom", "numbness"), MISALIGNMENT),
    (lambda a: a.stuck_point in ("publishing", "promoting")
        and (a.emotion == "fear" or a.first_thought == "judgment"), FEAR_OF_VISIBILITY),
    (lambda a: a.first_thought == "not_enough" or a.stuck_point == "finishing", PERFECTIONIST_FREEZE),
    (lambda a: a.first_thought == "judgment", FEAR_OF_VISIBILITY),
    (lambda a: a.emotion == "overwhelm" or a.first_thought == "no_start"
        or a.stuck_point == "starting", OVERWHELM_FOG),
    (lambda a: a.guaranteed_hesitate == "yes" and a.protecting == "comfort", FEAR_OF_SUCCESS),
    (lambda a: a.stuck_point == "consistency", CONSISTENCY_COLLAPSE),
    (lambda a: a.first_thought == "too_late", SHAME_LOOP),
    (lambda a: a.first_thought == "wont_matter", MISALIGNMENT),
]

DEFAULT_ARCHETYPE = PERFECTIONIST_FREEZE


def determine_archetype(answers: ResistanceAnswers) -> str:
    for predicate, archetype in ARCHETYPE_RULES:
        if predicate(answers):
            return archetype
    return DEFAULT_ARCHETYPE


def determine_stuck_phase(stuck_point: str) -> str:
    return STUCK_PHASE_MAP.get(stuck_point or "", DEFAULT_STUCK_PHASE)
