# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""Shared FastMCP application instance and tool registration.

All sync tool handlers are wrapped in async def + run_in_executor so
concurrent MCP calls don't block each other. The raw sync function is
kept in _TOOL_REGISTRY and returned from @tool(), so tests and the CLI
call tools directly.
"""

import asyncio
import functools
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

from mcp.server.fastmcp import FastMCP

from core.paths import get_paths

mcp = FastMCP("dreamblock")

# Single worker: the record store assumes one writer
_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="dreamblock-tool")

logger = logging.getLogger("dreamblock.app")

# name -> raw sync function
_TOOL_REGISTRY: dict = {}


def configure_logging(log_path: Optional[Path] = None) -> Path:
    """Route all dreamblock.* loggers to a file in the data dir."""
    log_path = log_path or get_paths().log_file
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.FileHandler(str(log_path)),
        ],
    )
    return log_path


def tool():
    """Decorator replacing @mcp.tool().

    - Stores the raw sync function in _TOOL_REGISTRY.
    - Registers an async wrapper (run_in_executor) with MCP.
    - Returns the raw function unchanged.
    """
    def decorator(fn):
        _TOOL_REGISTRY[fn.__name__] = fn

        if asyncio.iscoroutinefunction(fn):
            mcp.tool()(fn)
            return fn

        @functools.wraps(fn)
        async def async_wrapper(**kwargs):
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(_executor, lambda: fn(**kwargs))

        mcp.tool()(async_wrapper)
        return fn

    return decorator


def shutdown_executor() -> None:
    """Graceful shutdown of the tool executor pool."""
    _executor.shutdown(wait=False)
    logger.info("Tool executor pool shut down")
