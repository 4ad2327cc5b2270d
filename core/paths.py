# Copyright (c) 2026 Nenad Vasic. All rights reserved.
# Licensed under the Business Source License 1.1 (BSL-1.1)
# See LICENSE file in the project root for full license text.

"""
Dreamblock Paths — where every collection file and the log live.

The data directory is picked once per DreamblockPaths instance:
  1. data_dir passed in (CLI --data-dir, tests)
  2. $DREAMBLOCK_DATA_DIR
  3. ~/.dreamblock/

    from core.paths import get_paths
    get_paths().collection_file("dreams")   # <data_dir>/dreamblock-dreams.json

Tests and the CLI swap the process-wide instance with configure(path)
and drop it again with reset().
"""

import os
from pathlib import Path
from typing import Optional

ENV_VAR = "DREAMBLOCK_DATA_DIR"
DEFAULT_DIR = Path.home() / ".dreamblock"


def _pick_root(data_dir: Optional[Path]) -> Path:
    if data_dir is not None:
        return Path(data_dir).expanduser()
    env = os.environ.get(ENV_VAR)
    return Path(env).expanduser() if env else DEFAULT_DIR


class DreamblockPaths:

    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = _pick_root(data_dir)

    def collection_file(self, collection: str) -> Path:
        """One JSON array per named collection."""
        return self.data_dir / f"dreamblock-{collection}.json"

    @property
    def log_file(self) -> Path:
        return self.data_dir / "dreamblock.log"

    def ensure_dirs(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def __repr__(self) -> str:
        return f"DreamblockPaths({str(self.data_dir)!r})"


_current: Optional[DreamblockPaths] = None


def get_paths() -> DreamblockPaths:
    global _current
    if _current is None:
        _current = DreamblockPaths()
    return _current


def configure(data_dir: Optional[Path]) -> DreamblockPaths:
    """Replace the process-wide paths. None falls back to env/default."""
    global _current
    _current = DreamblockPaths(data_dir)
    return _current


def reset() -> None:
    global _current
    _current = None
