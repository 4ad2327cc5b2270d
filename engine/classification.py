# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""
Dream feasibility classification.

Hard gates (physical/time impossibility) come first, then the
reshape checks, then the defer checks, then the default. A gate list,
not a score: importance=10 and pain=10 can't outvote "impossible".

willing_to_commit / without_reward / responsibility_conflict are
tri-state (None = skipped), and a skipped answer matches neither
"is True" nor "is False".
"""

from typing import Callable, Dict, List, Tuple

from engine.archetypes import MISALIGNMENT, determine_archetype
from engine.schemas import DreamIntake, RealityAnswers, ResistanceAnswers

VIABLE_ALIGNED = "Viable & Aligned"
VIABLE_MISALIGNED = "Viable but Misaligned"
SYMBOLIC = "Symbolic / Transformable"
UNREALISTIC = "Unrealistic in Current Form"

CLASSIFICATIONS = (VIABLE_ALIGNED, VIABLE_MISALIGNED, SYMBOLIC, UNREALISTIC)

CLASSIFICATION_INFO: Dict[str, Dict[str, str]] = {
    VIABLE_ALIGNED: {
        "subtitle": "The path is clear. The block is internal.",
        "action": "pursue",
        "icon": "◆",
        "description": "Your dream is real, it matters deeply, and the primary obstacle is psychological, not circumstantial. The work now is to move despite resistance, not to wait until it disappears.",
    },
    VIABLE_MISALIGNED: {
        "subtitle": "Right dream, wrong season.",
        "action": "defer",
        "icon": "◇",
        "description": "This is real and achievable, but your current life doesn't have the structural conditions to support it. Deferring consciously is a form of respect for both the dream and your reality.",
    },
    SYMBOLIC: {
        "subtitle": "The dream points to something real. The form needs reshaping.",
        "action": "reshape",
        "icon": "○",
        "description": "What you're chasing isn't the thing itself. It's what it represents: meaning, expression, identity, freedom. Those things are achievable. The specific version you're imagining may not be.",
    },
    UNREALISTIC: {
        "subtitle": "Honesty is freedom. Releasing isn't failure.",
        "action": "release",
        "icon": "×",
        "description": "The version of this dream you're holding cannot be reconciled with your actual life. Naming that clearly is not defeat. It's the beginning of redirecting your energy somewhere it can go.",
    },
}

Gate = Tuple[Callable[[DreamIntake, RealityAnswers, str], bool], str]

# First match wins. Arguments: intake, reality, archetype.
CLASSIFICATION_GATES: List[Gate] = [
    (lambda i, r, a: r.physical_constraint == "impossible", UNREALISTIC),
    (lambda i, r, a: r.physical_constraint == "significant" and r.time_realistic == "none"
        and r.willing_to_commit is False, UNREALISTIC),
    (lambda i, r, a: r.time_realistic == "none" and r.willing_to_commit is False, UNREALISTIC),
    (lambda i, r, a: a == MISALIGNMENT, SYMBOLIC),
    (lambda i, r, a: r.without_reward is False, SYMBOLIC),
    (lambda i, r, a: i.importance <= 4 and i.pain <= 4, SYMBOLIC),
    (lambda i, r, a: r.time_realistic == "none" and r.willing_to_commit is True, VIABLE_MISALIGNED),
    (lambda i, r, a: r.time_realistic == "little" and i.importance < 7, VIABLE_MISALIGNED),
    (lambda i, r, a: r.responsibility_conflict is True and i.importance < 7, VIABLE_MISALIGNED),
]


def classify_dream(
    intake: DreamIntake,
    resistance: ResistanceAnswers,
    reality: RealityAnswers,
) -> str:
    archetype = determine_archetype(resistance)
    for gate, classification in CLASSIFICATION_GATES:
        if gate(intake, reality, archetype):
            return classification
    return VIABLE_ALIGNED


def classification_action(classification: str) -> str:
    """pursue / defer / reshape / release. Unknown labels read as pursue."""
    return CLASSIFICATION_INFO.get(classification, CLASSIFICATION_INFO[VIABLE_ALIGNED])["action"]
