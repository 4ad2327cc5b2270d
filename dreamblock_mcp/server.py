#!/usr/bin/env python3
# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""
Dreamblock MCP Server

Tools are organized into domain modules under dreamblock_mcp/tools/.
Importing each module registers its tools via the @tool() decorator.

8 tools across 3 modules:
- dreams:   dream_assess, dream_list, dream_status, dream_release (4)
- checkins: dream_checkin, dream_momentum, dream_weekly (3)
- teams:    dream_team (1)
"""

import atexit
import importlib
import logging

from dreamblock_mcp._app import _TOOL_REGISTRY, mcp, shutdown_executor
from engine.events import Events, bus

logger = logging.getLogger("dreamblock.server")

_MODULE_IMPORTS = {
    "dreams":   "dreamblock_mcp.tools.dreams",
    "checkins": "dreamblock_mcp.tools.checkins",
    "teams":    "dreamblock_mcp.tools.teams",
}

for _import_path in _MODULE_IMPORTS.values():
    importlib.import_module(_import_path)

logger.info("%d tools registered: %s", len(_TOOL_REGISTRY), ", ".join(sorted(_TOOL_REGISTRY)))



def _log_milestone(event) -> None:
    logger.info("Badge %s earned on dream %s", event.data.get("type"), event.data.get("dream_id"))


bus.on(Events.MILESTONE_AWARDED, _log_milestone, name="server-log")

atexit.register(shutdown_executor)


if __name__ == "__main__":
    from dreamblock_mcp._app import configure_logging
    configure_logging()
    mcp.run()
