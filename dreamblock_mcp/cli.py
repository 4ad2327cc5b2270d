# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""
Dreamblock CLI — run the MCP server, or print a dream's dashboard.

    dreamblock serve                  MCP server over stdio
    dreamblock status                 one line per dream
    dreamblock status --dream ID      dashboard for one dream

--data-dir works before or after the subcommand; without it the data dir
comes from $DREAMBLOCK_DATA_DIR or ~/.dreamblock/.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from core.paths import configure


def _serve() -> None:
    from dreamblock_mcp._app import configure_logging
    from core.paths import get_paths

    paths = get_paths()
    paths.ensure_dirs()
    configure_logging(paths.log_file)

    from dreamblock_mcp.server import mcp
    mcp.run()


def _status(dream_id: Optional[str] = None) -> int:
    from dreamblock_mcp.tools.dreams import dream_list, dream_status

    out = dream_status(dream_id) if dream_id else dream_list()
    print(out)
    return 1 if out.startswith("Error:") else 0


def _build_parser() -> argparse.ArgumentParser:
    data_dir = argparse.ArgumentParser(add_help=False)
    data_dir.add_argument("--data-dir", type=Path, default=argparse.SUPPRESS,
                          help="Data directory (default: $DREAMBLOCK_DATA_DIR or ~/.dreamblock/)")

    parser = argparse.ArgumentParser(
        prog="dreamblock",
        description="Dreamblock: dream assessment and daily check-in coach",
        parents=[data_dir],
    )
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("serve", parents=[data_dir], help="Start MCP server (stdio)")
    status = sub.add_parser("status", parents=[data_dir], help="Show dreams, or one dream's dashboard")
    status.add_argument("--dream", default=None, dest="dream_id", help="Dream ID")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    raw = getattr(args, "data_dir", None)
    configure(raw.expanduser().resolve() if raw else None)

    if args.command == "serve":
        _serve()
    elif args.command == "status":
        sys.exit(_status(args.dream_id))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
