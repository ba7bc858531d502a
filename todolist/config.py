from __future__ import annotations

import logging
import os
from pathlib import Path


def default_store_path() -> Path:
    """
    Where the JSON task file lives when --file is not given.

    TODOLIST_FILE wins if set; otherwise ~/.todolist/todos.json. Either way
    "~" is expanded and the result made absolute, so error messages and
    `backup` always name the real file. The directory is created on first save.
    """
    env = os.getenv("TODOLIST_FILE")
    if env:
        return Path(env).expanduser().resolve()

    return (Path.home() / ".todolist" / "todos.json").resolve()


def log_level_from_env(default: int = logging.WARNING) -> int:
    raw = os.getenv("TODOLIST_LOG_LEVEL")
    if raw is None or raw.strip() == "":
        return default
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default
