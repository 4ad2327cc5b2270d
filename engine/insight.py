# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""
Insight Generator — SEEN / HELD / MOVED, plus the weekly pattern line.

SEEN:  what the resistance is doing (by archetype)
HELD:  normalization, picked from the reality answers
MOVED: one action under 10 minutes, most-specific rule wins:
       (archetype, stuck_point) override → stuck_point table → default

The philosophy line is chosen by a 32-bit string hash of the dream id
so the same dream always gets the same line.
"""

from typing import Dict, List, Mapping, Optional

from engine.archetypes import (
    CONSISTENCY_COLLAPSE, FEAR_OF_SUCCESS, FEAR_OF_VISIBILITY, IDENTITY_CONFLICT,
    MISALIGNMENT, OVERWHELM_FOG, PERFECTIONIST_FREEZE, SHAME_LOOP,
)
from engine.dates import When, resolve_now
from engine.schemas import InsightSummary
from engine.store import Collections, RecordStore, load_validated_list

PHILOSOPHY: List[str] = [
    "The reward for a good deed is the opportunity to do another good deed.",
    "Fail fast. Failure is fuel.",
    "One step at a time.",
    "Walk to the end of the road. Look left, right, or straight. If it's a dead end, turn around — then plan your next step.",
    "Faith is taking the next step before you can see the whole map.",
]


def string_hash(seed: str) -> int:
    """h = h*31 + code_unit over UTF-16 code units, wrapped to signed 32 bits."""
    h = 0
    data = seed.encode("utf-16-le")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + unit) & 0xFFFFFFFF
        if h >= 0x80000000:
            h -= 0x100000000
    return h


def pick_philosophy(seed: str) -> str:
    return PHILOSOPHY[abs(string_hash(seed)) % len(PHILOSOPHY)]


# ============================================================================
# SEEN
# ============================================================================

SEEN_BY_ARCHETYPE: Dict[str, str] = {
    FEAR_OF_VISIBILITY:
        "You've been building this in your mind. What scares you isn't failing. It's being seen in the act of trying. "
        "Visibility feels like exposure, not expression. So you protect yourself by not starting. The work stays safe "
        "in the imagined version, where no one can judge it, and neither can you.",
    PERFECTIONIST_FREEZE:
        "The standard keeps moving. Every time you get close, the bar rises. That's not ambition. It's a delay "
        "mechanism wearing ambition's clothes. Perfectionism isn't about quality; it's about never having to find out. "
        "The bar can't be met because the bar isn't real.",
    OVERWHELM_FOG:
        "You're trying to solve a three-year problem in a single mental session. The whole mountain is visible from "
        "the bottom, and it's paralyzing. The scope isn't the problem; trying to hold all of it at once is. You don't "
        "need the full map. You need the next ten meters.",
    IDENTITY_CONFLICT:
        "Part of you doesn't believe you're the kind of person who actually does this. You're waiting to become "
        "someone else before you start, but the identity comes after the action, not before. No one wakes up as a "
        "musician. They wake up and practice.",
    FEAR_OF_SUCCESS:
        "Even with success guaranteed, you'd still hesitate. That's not fear of failing. That's fear of what would "
        "change if this worked. Who you'd have to become. What you'd have to give up. What people would expect. "
        "Failing is safe because it changes nothing.",
    SHAME_LOOP:
        "Something happened before, a past attempt or early criticism or a comparison that stuck, and it became "
        "evidence. You've been treating one painful moment as a permanent verdict. It isn't. One data point is not "
        "a pattern. One chapter is not the book.",
    CONSISTENCY_COLLAPSE:
        "You can start. That's not your problem. The problem is the system around starting, or the absence of one. "
        "Motivation gets you to the door. It doesn't keep you walking. You've been treating consistency as a "
        "character trait when it's actually a design problem.",
    MISALIGNMENT:
        "Part of what you want isn't the dream itself. It's what the dream would say about you. That's not a flaw; "
        "most desires have this layer. But when the identity payoff is the main driver, the daily work feels hollow. "
        "Worth asking: what do you actually want to be doing on a Tuesday afternoon?",
}

SEEN_FALLBACK = (
    "You've been carrying this longer than you needed to. The resistance makes sense given everything it's "
    "protecting you from. Understanding what it's protecting is the first real step."
)


def get_seen(dream: Mapping) -> str:
    return SEEN_BY_ARCHETYPE.get(dream.get("archetype", ""), SEEN_FALLBACK)


# ============================================================================
# HELD
# ============================================================================

def _delayed_text(years_delayed: str) -> str:
    years = years_delayed or "a while"
    return "less than a year" if years == "< 1 year" else years


def get_held(dream: Mapping) -> str:
    delayed = _delayed_text(dream.get("years_delayed", ""))

    if dream.get("guaranteed_hesitate") == "yes":
        return (
            f"You've carried this for {delayed}. That is not laziness. That is the weight of something that "
            "genuinely matters to you. And the fact that you'd still hesitate even if success were guaranteed? "
            "That honesty matters. It means the work itself, not just the outcome, is part of what you're working "
            "through. Most people never even get this honest about what's actually in the way."
        )
    if dream.get("willing_to_commit") is False:
        return (
            f"You've carried this for {delayed}, and you've been honest: the timeline feels too long to commit to "
            "right now. That's not giving up. That's clarity. Deferring consciously, knowing why, is completely "
            "different from avoiding unconsciously. You're here, which means you haven't let go of it either."
        )
    if dream.get("time_realistic") in ("none", "little"):
        return (
            f"You've carried this for {delayed} and you're living a full life with real obligations. The time issue "
            "is real. The dream is also real. You don't have to choose one to honor the other right now. You just "
            "have to be honest about which one you're choosing, one day at a time."
        )
    return (
        f"You've carried this for {delayed}. That's not failure. That's the weight of something that still matters "
        "enough to be here. The fact that you're doing this assessment means some part of you hasn't let go, and "
        "that part deserves a fair hearing. Today isn't a verdict. It's just information."
    )


# ============================================================================
# MOVED
# ============================================================================

MOVED_OVERRIDES: Dict[tuple, Dict[str, str]] = {
    (FEAR_OF_VISIBILITY, "publishing"): {
        "action": "Write an honest caption for your work as if you were talking to one friend who already gets it, "
                  "not the public. Don't post it. Just write it. 5 minutes.",
        "doorway": "Name the specific fear underneath not posting. Write it in one sentence. Private. No action required.",
        "mode": "do",
    },
    (PERFECTIONIST_FREEZE, "finishing"): {
        "action": "Set a timer for 10 minutes. Work on your piece with the intention of making it 5% worse on "
                  "purpose. Ship the imperfect version of one small part.",
        "doorway": "Write down three things that are already good about it. Three. Not what's missing, what's there.",
        "mode": "do",
    },
    (OVERWHELM_FOG, "starting"): {
        "action": "Write the single smallest action that would count as 'touching' this dream today. The "
                  "embarrassingly small one. Now do just that one thing.",
        "doorway": "Open a note and type: 'The next physical action on my dream is:' Fill in the blank with a verb + "
                   "object. ('Write opening line.' 'Send email to X.' 'Tune the guitar.')",
        "mode": "do",
    },
}

MOVED_BY_STUCK: Dict[str, Dict[str, str]] = {
    "starting": {
        "action": "Open a blank document (or notebook page). Write the title of your dream at the top. Nothing else. "
                  "Close it. That's the session. 3 minutes maximum.",
        "doorway": "Physically touch the object most associated with your dream (instrument, notebook, sketchbook, "
                   "running shoes). Just touch it. That's it.",
        "mode": "do",
    },
    "consistency": {
        "action": "Identify the one specific time slot this week, not every day, just one, when you will do 10 "
                  "minutes on this. Write it down as an appointment. Don't plan the work yet. Just schedule it.",
        "doorway": "Set a recurring alarm on your phone labeled with your dream title. Just the alarm. Don't decide "
                   "what to do with it yet.",
        "mode": "plan",
    },
    "finishing": {
        "action": "Open whatever you last worked on. Read it, look at it, listen to it. Don't edit. Just observe "
                  "where you actually are. Set a timer for 10 minutes. When it goes off, stop.",
        "doorway": "List the three things that would need to happen for this to be 'done.' Just the list. No action required.",
        "mode": "do",
    },
    "publishing": {
        "action": "Send your work to one trusted person and ask only: 'Does this make sense?' That's the whole brief. "
                  "One person. One question.",
        "doorway": "Write the title or subject line of the post/upload/send you're avoiding. Just the title. Nowhere "
                   "to post it yet.",
        "mode": "ask",
    },
    "promoting": {
        "action": "Find one person who has done something adjacent to your dream and read about how they started "
                  "sharing. Just research. No action on your own work yet.",
        "doorway": "Write one sentence about what you made and why it exists. Just the sentence. For your eyes only.",
        "mode": "learn",
    },
    "committing": {
        "action": "Write this down: 'If I do this for 30 days and it goes nowhere, I will have learned ____.' Fill in "
                  "the blank. That's the commitment framing: not 'will it succeed' but 'what will I learn.'",
        "doorway": "Write the answer to: 'What would trying look like if I wasn't trying to succeed, just trying to "
                   "find out?' One sentence.",
        "mode": "plan",
    },
}

MOVED_DEFAULT: Dict[str, str] = {
    "action": "Take 10 minutes and do the first thing that comes to mind when you think about this dream. Not the "
              "right thing, just something. Fail fast.",
    "doorway": "Write the name of the dream on a piece of paper. Put it somewhere you'll see it tomorrow morning.",
    "mode": "do",
}


def get_moved(dream: Mapping) -> Dict[str, str]:
    stuck = dream.get("stuck_point", "")
    override = MOVED_OVERRIDES.get((dream.get("archetype", ""), stuck))
    if override:
        return override
    return MOVED_BY_STUCK.get(stuck, MOVED_DEFAULT)


def generate_insight(dream: Mapping) -> Dict:
    """Build the InsightSummary dict for a (freshly classified) dream."""
    moved = get_moved(dream)
    return InsightSummary(
        seen=get_seen(dream),
        held=get_held(dream),
        moved=moved["action"],
        moved_doorway=moved["doorway"],
        moved_mode=moved["mode"],
        philosophy_line=pick_philosophy(dream.get("id", "")),
    ).model_dump()


# ============================================================================
# WEEKLY PATTERN
# ============================================================================

REASON_PHRASES: Dict[str, str] = {
    "fear": "Fear was the main friction this week.",
    "perfectionism": "Perfectionism was blocking you more than anything.",
    "unclear": "Lack of clarity was the biggest obstacle.",
    "energy": "Energy was the limiting factor this week.",
    "time": "Time was tight this week.",
    "distraction": "Distraction was the main friction.",
    "other": "Something specific kept getting in the way.",
}


def top_hard_reason(hard_reasons: List[str]) -> Optional[str]:
    """Most frequent reason; ties go to whichever appears first."""
    best, best_count = None, 0
    for reason in hard_reasons:
        count = hard_reasons.count(reason)
        if count > best_count:
            best, best_count = reason, count
    return best


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def generate_weekly_pattern(checkin_count: int, did_days: int, hard_reasons: List[str]) -> str:
    if checkin_count == 0:
        return "No check-ins this week. No penalty. Come back today. Restarting is the skill."
    if did_days == 0:
        return (
            f"You checked in {_plural(checkin_count, 'time')} this week and were honest every time. "
            "That honesty is data, not failure."
        )

    rate = did_days / 7
    top = top_hard_reason(hard_reasons)
    reason_phrase = REASON_PHRASES.get(top, "") if top else ""

    if rate >= 0.7:
        parts = [f"Strong week. You showed up {did_days} out of 7 days.", reason_phrase,
                 "The compounding is working."]
    elif rate >= 0.4:
        parts = [f"Solid week: {did_days} days of forward motion.", reason_phrase,
                 "Consistency isn't perfection. This counts."]
    else:
        parts = [f"{_plural(did_days, 'day')} of movement this week.", reason_phrase,
                 "Coming back every week matters more than any single week's number."]
    return " ".join(p for p in parts if p)


# ============================================================================
# CONTEXTUAL QUOTES
# ============================================================================

QUOTES: Dict[str, List[str]] = {
    "restart": [
        "The return is the practice. Every artist, athlete, and creator knows this.",
        "You didn't fail. You paused. Now you're here again. That's the whole game.",
        "Restarting is not starting over. It's continuing from where you actually are.",
        "Consistency isn't a straight line. It's a series of returns.",
    ],
    "milestone": [
        "Streaks don't lie. You've built something real here.",
        "The person who shows up 30 times is different from the one who showed up once.",
        "This is what commitment looks like: not a grand gesture, just this, repeated.",
        "Momentum compounds. What you've built doesn't disappear when you rest.",
    ],
    "weekly": [
        "A week of showing up is worth more than a year of planning.",
        "The work is quiet. So is the growth. Both are real.",
        "Most people stop before the results are visible. You didn't stop.",
    ],
    "struggling": [
        "Hard days count. Showing up on a hard day counts double.",
        "The resistance is loudest when the work matters most.",
        "One percent forward is still forward.",
    ],
    "consistent": [
        "This is who you're becoming. It's already working.",
        "The habit is forming. The identity is shifting. Stay.",
        "What you're doing daily is becoming what you are. Keep going.",
    ],
    "general": [
        "Every day you show up is a day the dream stays alive.",
        "The work is the path. There is no other path.",
        "Clarity doesn't come before the work. It comes from the work.",
        "The dream doesn't need you to be perfect. It needs you to be present.",
    ],
}


def quote_context_for_streak(streak: int) -> str:
    if streak == 0:
        return "restart"
    if streak >= 7:
        return "consistent"
    if streak >= 3:
        return "general"
    return "struggling"


def get_contextual_quote(
    store: RecordStore,
    dream_id: str,
    context: str = "general",
    now: When = None,
) -> str:
    """Rotates with the check-in count and the day of the month."""
    pool = QUOTES.get(context, QUOTES["general"])
    checkin_count = sum(
        1 for c in load_validated_list(store, Collections.CHECKINS) if c["dream_id"] == dream_id
    )
    seed = checkin_count + resolve_now(now).day
    return pool[seed % len(pool)]
