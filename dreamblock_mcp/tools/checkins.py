# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""Daily loop tools — check-in, momentum, weekly summary."""

from dreamblock_mcp._app import tool
from engine.coach import submit_checkin
from engine.dreams import require_dream
from engine.momentum import (
    LAYERS, average_momentum, filter_momentum, get_momentum_data, resilient_dates,
)
from engine.schemas import DreamblockNotFoundError, DreamblockValidationError
from engine.store import get_store
from engine.weekly import create_weekly_summary, get_due_weekly_summary


@tool()
def dream_checkin(
    dream_id: str,
    did_something: bool,
    tiny_action: str = "",
    hard_reason: str = "",
    easy_version: str = "",
    daily_mode: str = "",
    step_statement: str = "",
    mood: int = 3,
) -> str:
    """
    Record today's check-in. A second check-in today updates the first.

    Args:
        dream_id: Dream ID
        did_something: Did you move on the dream today
        tiny_action: What you did (or the tiny version you could do)
        hard_reason: If not, what got in the way: fear, perfectionism, unclear, energy, time, distraction, other
        easy_version: The easiest version of tomorrow's step
        daily_mode: do, plan, ask, learn, reduce_friction, rest
        step_statement: Next step, in one sentence
        mood: 1-5

    Returns:
        Streak, XP earned, and any new badges
    """
    try:
        result = submit_checkin(
            get_store(), dream_id,
            did_something=did_something,
            tiny_action=tiny_action,
            hard_reason=hard_reason,
            easy_version=easy_version,
            daily_mode=daily_mode,
            step_statement=step_statement,
            mood=mood,
        )
    except (DreamblockNotFoundError, DreamblockValidationError) as e:
        return f"Error: {e}"

    verb = "updated" if result["updated"] else "saved"
    lines = [f"Check-in {verb} for {result['checkin']['date']}. Streak: {result['streak']}"]
    if result["is_restart"]:
        lines.append("Welcome back. Restarting is the skill.")
    xp = sum(e["amount"] for e in result["xp"])
    if xp:
        lines.append(f"+{xp} XP ({', '.join(e['label'] for e in result['xp'])})")
    if result["personal_best"]:
        lines.append("New personal best.")
    for badge in result["badges"]:
        lines.append(f"  {badge['emoji']} {badge['label']}: {badge['description']}")
    return "\n".join(lines)


@tool()
def dream_momentum(dream_id: str, layer: str = "all") -> str:
    """
    Per-day momentum scores (0-10) for a dream.

    Args:
        dream_id: Dream ID
        layer: "all", "actions" (days moved), "resistance" (days with a hard reason), or "weekly"

    Returns:
        One line per day plus the average
    """
    if layer not in LAYERS:
        return f"Error: unknown layer '{layer}'. Use {', '.join(LAYERS)}."
    store = get_store()
    try:
        require_dream(store, dream_id)
    except DreamblockNotFoundError as e:
        return f"Error: {e}"

    points = get_momentum_data(store, dream_id)
    shown = filter_momentum(points, layer)
    if not shown:
        return "No data for this filter yet."

    resilient = set(resilient_dates(shown))
    lines = []
    for p in shown:
        flags = []
        if p["is_restart"]:
            flags.append("restart")
        if p["grace_day_used"]:
            flags.append("grace")
        if p["date"] in resilient:
            flags.append("resilient")
        flag_text = f" [{', '.join(flags)}]" if flags else ""
        note = f"  {p['note']}" if p["note"] else ""
        lines.append(f"  {p['date']}  {p['score']:>4}{flag_text}{note}")

    lines.append(
        f"Avg momentum: {average_momentum(points)} | "
        f"Returns: {sum(1 for p in points if p['is_restart'])} | "
        f"Days moved: {sum(1 for p in points if p['tiny_action_done'])}"
    )
    return "\n".join(lines)


@tool()
def dream_weekly(dream_id: str, action: str = "check", focus_next_week: str = "") -> str:
    """
    Weekly summary — check whether one is due, or save it.

    Args:
        dream_id: Dream ID
        action: "check" or "create"
        focus_next_week: One focus for next week (for create)

    Returns:
        The week's numbers and pattern, or why nothing is due
    """
    store = get_store()
    try:
        require_dream(store, dream_id)
        if action == "create":
            summary = create_weekly_summary(store, dream_id, focus_next_week)
            return (
                f"Week {summary['week_number']} saved ({summary['week_start']} → {summary['week_end']}). "
                f"Weekly token earned.\n{summary['patterns']}"
            )
    except (DreamblockNotFoundError, DreamblockValidationError) as e:
        return f"Error: {e}"

    due = get_due_weekly_summary(store, dream_id)
    if due is None:
        return "No weekly summary due."
    did_days = sum(1 for c in due["checkins"] if c["did_something"])
    return (
        f"Week {due['week_number']} is ready ({due['week_start']} → {due['week_end']}): "
        f"{len(due['checkins'])} check-ins, {did_days} days moved."
    )
