# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""Dream team tool — create, join, signal, list, leave."""

from typing import Optional

from dreamblock_mcp._app import tool
from engine.dates import today_str
from engine.dreams import get_dream
from engine.schemas import DreamblockNotFoundError, DreamblockValidationError
from engine.store import get_store
from engine.teams import (
    create_team, get_team, get_teams, join_team, leave_team, send_signal, signals_for_day,
)


@tool()
def dream_team(
    action: str = "list",
    team_id: Optional[str] = None,
    code: Optional[str] = None,
    name: str = "",
    my_name: str = "",
    dream_id: str = "",
    dream_title: str = "",
    sharing_level: str = "streak_only",
    did_something: Optional[bool] = None,
    action_shared: Optional[str] = None,
) -> str:
    """
    Manage dream teams.

    Args:
        action: "list", "create", "join", "signal", "today", or "leave"
        team_id: Team ID (signal, today, leave)
        code: 6-character join code (join)
        name: Team name (create)
        my_name: Your display name (create, join)
        dream_id: Your dream to link (create, join)
        dream_title: Dream title shown to teammates (defaults to the linked dream's title)
        sharing_level: private, streak_only, tiny_action, weekly_summary
        did_something: Today's signal (signal)
        action_shared: What you did, shared if your sharing level allows (signal)

    Returns:
        Team info or confirmation
    """
    store = get_store()
    if dream_id and not dream_title:
        dream = get_dream(store, dream_id)
        dream_title = dream["title"] if dream else ""

    try:
        if action == "create":
            team = create_team(store, name=name, my_dream_id=dream_id, my_name=my_name,
                               dream_title=dream_title, sharing_level=sharing_level)
            return f"Team '{team['name']}' created. Share this code: {team['code']}"

        if action == "join":
            if not code:
                return "Error: code is required to join a team."
            team = join_team(store, code, my_name=my_name, dream_title=dream_title,
                             sharing_level=sharing_level, my_dream_id=dream_id)
            return f"Joined '{team['name']}' ({len(team['members'])} members)."

        if action in ("signal", "today", "leave") and not team_id:
            return f"Error: team_id is required for {action}."

        if action == "signal":
            if did_something is None:
                return "Error: did_something is required for signal."
            send_signal(store, team_id, did_something, action_shared)
            return "Signal sent." if did_something else "Signal sent. Showing up honest counts."

        if action == "today":
            team = get_team(store, team_id)
            if team is None:
                raise DreamblockNotFoundError(f"Team '{team_id}' not found")
            latest = signals_for_day(store, team_id, today_str())
            lines = [f"[{team['name']}] {today_str()}"]
            for m in team["members"]:
                signal = latest.get(m["id"])
                mark = "—" if signal is None else ("✓" if signal["did_something"] else "·")
                you = " (you)" if m["id"] == team["my_member_id"] else ""
                lines.append(f"  {mark} {m['emoji']} {m['name']}{you}: {m['dream_title']}")
            return "\n".join(lines)

        if action == "leave":
            return "Left team." if leave_team(store, team_id) else f"Error: team '{team_id}' not found."
    except (DreamblockNotFoundError, DreamblockValidationError) as e:
        return f"Error: {e}"

    teams = get_teams(store)
    if not teams:
        return "No teams yet."
    return "\n".join(
        f"  {t['id']}  {t['name']} [{t['code']}] {len(t['members'])} members"
        for t in teams
    )
