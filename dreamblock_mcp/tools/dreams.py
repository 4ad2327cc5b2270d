# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""Dream tools — assess, list, status/dashboard, release."""

from typing import List, Optional

from dreamblock_mcp._app import tool
from engine.classification import CLASSIFICATION_INFO, classification_action
from engine.coach import start_session
from engine.dreams import create_dream, list_dreams, release_dream, set_dream_status
from engine.schemas import DreamblockNotFoundError, DreamblockValidationError
from engine.store import get_store

STATUS_ACTIONS = {
    "pause": "paused",
    "resume": "active",
    "complete": "completed",
    "archive": "archived",
}


@tool()
def dream_assess(
    title: str,
    category: str = "",
    years_delayed: str = "",
    importance: int = 5,
    pain: int = 5,
    fear: int = 5,
    emotion: str = "",
    first_thought: str = "",
    stuck_point: str = "",
    protecting: str = "",
    guaranteed_hesitate: str = "",
    physical_constraint: str = "",
    time_realistic: str = "",
    sacrifice: Optional[List[str]] = None,
    responsibility_conflict: Optional[bool] = None,
    realistic_years: str = "",
    willing_to_commit: Optional[bool] = None,
    true_want: str = "",
    without_reward: Optional[bool] = None,
) -> str:
    """
    Run the dream assessment and save the dream.

    Args:
        title: What the dream is
        category: Music, Podcast, Art, Business, Athletic, Writing, Lifestyle, Other
        years_delayed: "< 1 year", "1–3 years", "3–7 years", "7–15 years", "15+ years"
        importance: 1-10, how much it matters
        pain: 1-10, how much not doing it hurts
        fear: 1-10, how scary it feels
        emotion: fear, shame, overwhelm, boredom, excite_crash, numbness, other, not_sure
        first_thought: not_enough, judgment, no_start, too_late, wont_matter
        stuck_point: starting, consistency, finishing, publishing, promoting, committing
        protecting: comfort, identity, relationships, control, certainty
        guaranteed_hesitate: "yes" or "no", would you hesitate even if success were guaranteed
        physical_constraint: none, minor, significant, impossible
        time_realistic: yes, some, little, none
        sacrifice: What you'd give up
        responsibility_conflict: Does it clash with responsibilities
        realistic_years: How long it would realistically take
        willing_to_commit: Willing to commit that long
        true_want: status, identity, process, meaning, output, other
        without_reward: Would you still do it with no reward

    Returns:
        Archetype, classification, micro-steps and the SEEN/HELD/MOVED insight
    """
    try:
        dream = create_dream(
            get_store(),
            intake={
                "title": title, "category": category, "years_delayed": years_delayed,
                "importance": importance, "pain": pain, "fear": fear,
            },
            resistance={
                "emotion": emotion, "first_thought": first_thought, "stuck_point": stuck_point,
                "protecting": protecting, "guaranteed_hesitate": guaranteed_hesitate,
            },
            reality={
                "physical_constraint": physical_constraint, "time_realistic": time_realistic,
                "sacrifice": sacrifice or [], "responsibility_conflict": responsibility_conflict,
                "realistic_years": realistic_years, "willing_to_commit": willing_to_commit,
                "true_want": true_want, "without_reward": without_reward,
            },
        )
    except DreamblockValidationError as e:
        return f"Error: {e}"

    icon = CLASSIFICATION_INFO[dream["classification"]]["icon"]
    action = classification_action(dream["classification"])
    insight = dream["insight_summary"]
    lines = [
        f"Dream saved: {dream['title']} ({dream['id']})",
        f"Archetype: {dream['archetype']} | Phase: {dream['stuck_phase']}",
        f"Classification: {icon} {dream['classification']} ({action})",
        "",
        "Micro-steps:",
    ]
    lines.extend(f"  {i}. {step}" for i, step in enumerate(dream["micro_steps"], 1))
    lines += [
        "",
        f"SEEN: {insight['seen']}",
        f"HELD: {insight['held']}",
        f"MOVED ({insight['moved_mode']}): {insight['moved']}",
        f"  Smaller doorway: {insight['moved_doorway']}",
        "",
        f'"{insight["philosophy_line"]}"',
    ]
    return "\n".join(lines)


@tool()
def dream_list(status: Optional[str] = None) -> str:
    """
    List saved dreams.

    Args:
        status: Filter by "active", "paused", "completed", "archived", "released"

    Returns:
        One line per dream
    """
    dreams = list_dreams(get_store(), status=status)
    if not dreams:
        return "No dreams found."
    return "\n".join(
        f"  {d['id']}  {d['title']} [{d['status']}] {d['archetype']} · {d['classification']}"
        for d in dreams
    )


@tool()
def dream_status(dream_id: str, action: str = "show") -> str:
    """
    Show a dream's dashboard, or change its status.

    Opening the dashboard ("show") also applies yesterday's grace day when
    the user checked in today after missing yesterday.

    Args:
        dream_id: Dream ID
        action: "show", "pause", "resume", "complete", or "archive"

    Returns:
        Dashboard text or the new status
    """
    store = get_store()
    try:
        if action != "show":
            if action not in STATUS_ACTIONS:
                return f"Error: unknown action '{action}'. Use show, {', '.join(STATUS_ACTIONS)}."
            dream = set_dream_status(store, dream_id, STATUS_ACTIONS[action])
            return f"{dream['title']} → {dream['status']}"
        snap = start_session(store, dream_id)
    except (DreamblockNotFoundError, DreamblockValidationError) as e:
        return f"Error: {e}"

    dream = snap["dream"]
    lines = [f"[{dream['title']}] {dream['archetype']} · {dream['classification']} ({dream['status']})"]
    if snap["grace_applied"]:
        lines.append(f"Grace day used for {snap['grace_applied']}. Your streak continues.")
    lines += [
        f"Streak: {snap['streak']} | Personal best: {snap['personal_best']} | Longest: {snap['longest_streak']}",
        f"Grace days: {snap['grace_used']} used, {snap['grace_remaining']} left (rolling 30 days)",
        f"XP: {snap['xp_total']} | Badges: {len(snap['badges'])}",
        f"Checked in today: {'yes' if snap['today_checkin'] else 'no'}",
    ]
    if snap["weekly_due"]:
        due = snap["weekly_due"]
        lines.append(f"Weekly summary due: week {due['week_number']} ({due['week_start']} → {due['week_end']})")
    lines.append(f'"{snap["quote"]}"')
    return "\n".join(lines)


@tool()
def dream_release(
    dream_id: str,
    taught_me: str = "",
    no_longer_carry: str = "",
    energy_goes_to: str = "",
) -> str:
    """
    Release a dream with intention. It stays on record with status "released".

    Args:
        dream_id: Dream ID
        taught_me: What this dream taught you
        no_longer_carry: What you no longer have to carry
        energy_goes_to: Where the energy goes now

    Returns:
        Confirmation
    """
    try:
        dream = release_dream(get_store(), dream_id, {
            "taught_me": taught_me,
            "no_longer_carry": no_longer_carry,
            "energy_goes_to": energy_goes_to,
        })
    except (DreamblockNotFoundError, DreamblockValidationError) as e:
        return f"Error: {e}"
    return f"Released: {dream['title']}. Honesty is freedom."
