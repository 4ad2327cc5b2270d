# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""Per-archetype micro-step templates. Deterministic, no randomness."""

from typing import Dict, List

from engine.archetypes import (
    CONSISTENCY_COLLAPSE, FEAR_OF_SUCCESS, FEAR_OF_VISIBILITY, IDENTITY_CONFLICT,
    MISALIGNMENT, OVERWHELM_FOG, PERFECTIONIST_FREEZE, SHAME_LOOP,
)

# {d} = dream title, {c} = category
MICRO_STEP_TEMPLATES: Dict[str, List[str]] = {
    FEAR_OF_VISIBILITY: [
        "Write about {d} in a private document. No audience, no stakes, no performance",
        "Share one small piece of work with exactly one person you trust completely, with no expectation of feedback",
        "Make something deliberately imperfect. Finish it. Don't show it yet, just prove you can complete",
        "Write down the specific fear: what exactly do you imagine happening when people see this?",
    ],
    PERFECTIONIST_FREEZE: [
        "Set a 25-minute timer. Work on {d}. Stop when it rings, complete or not",
        'Define "good enough to proceed" in one sentence before your next session',
        "Create a rough, unpolished version of one part. Call it your ugly draft. That's the goal",
        "List every standard you're trying to meet. Circle the ones that actually matter to the work",
    ],
    OVERWHELM_FOG: [
        "Write only the very next physical action. Not the project, not the phase, just 15 minutes of work",
        "Spend 20 minutes listing everything you think you'd need to do, then circle only the first three",
        "Find one person who has started something similar and read or watch how they began",
        "Break {d} into exactly three phases. What is phase one, at its smallest?",
    ],
    IDENTITY_CONFLICT: [
        'Write: "A person who does {c} for real would..." and complete the sentence without filtering',
        "Do one private act related to {d} that no one will see, judge, or know about",
        "Write about why this matters to you. Not to prove it to anyone, just to understand it yourself",
        "Explore who you'd have to stop being (or pretending to be) if you pursued this",
    ],
    FEAR_OF_SUCCESS: [
        "Write the most realistic version of your life if {d} works, including what changes and what gets harder",
        "Identify one specific thing you'd have to give up or renegotiate if this succeeded. Sit with it",
        "Take the smallest possible forward action: reversible, low-stakes, and private",
        'Write: "If this succeeds, the thing I\'m most afraid of is..." Be specific',
    ],
    SHAME_LOOP: [
        "Write a short letter to yourself about the last time you tried this and stopped, without judgment",
        "Name the specific story you carry about why you failed before. Write what was actually true",
        "Do one small thing that reclaims forward motion. Not a big step, just proof you can move",
        "Separate what happened from what it means about you. Write both columns honestly",
    ],
    CONSISTENCY_COLLAPSE: [
        "Commit to 15 minutes on {d} at the same time for the next 7 days. Nothing more",
        "Identify the exact moment you usually quit. Write down what you'll do instead at that moment",
        "Reduce friction: prepare everything you need the night before so starting costs you nothing",
        'Define what "showing up" means on a hard day: the minimum viable version',
    ],
    MISALIGNMENT: [
        'Write: "What I actually want from {d} is..." and answer without using the dream itself',
        "Separate what you want (status, feeling, identity, output) from the specific form you've attached to it",
        "Explore one adjacent thing that gives you the same feeling, without the weight of this dream",
        "Write honestly: if no one ever knew you pursued this, would you still want to?",
    ],
}


def get_micro_steps(archetype: str, title: str, category: str) -> List[str]:
    d = title or "your project"
    templates = MICRO_STEP_TEMPLATES.get(archetype, MICRO_STEP_TEMPLATES[OVERWHELM_FOG])
    # str.replace, not str.format: titles may contain braces
    return [t.replace("{d}", d).replace("{c}", category or "") for t in templates]
