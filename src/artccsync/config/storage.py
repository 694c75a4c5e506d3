"""Where the roster database and the HTTP cache live on disk."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

DATABASE_FILENAME: Final[str] = "artccsync.db"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"


def get_data_dir() -> Path:
    """``ARTCCSYNC_DATA_DIR``, else ``$XDG_DATA_HOME/artccsync``; created on demand."""
    override = os.getenv("ARTCCSYNC_DATA_DIR")
    if override:
        data_dir = Path(override)
    else:
        xdg = os.getenv("XDG_DATA_HOME")
        data_dir = (Path(xdg) if xdg else Path.home() / ".local" / "share") / "artccsync"
    data_dir = data_dir.expanduser().resolve()
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_database_uri() -> str:
    if uri := os.getenv("DATABASE_URI"):
        return uri
    return f"sqlite+pysqlite:///{get_data_dir() / DATABASE_FILENAME}"


def get_http_cache_path() -> Path:
    return get_data_dir() / HTTP_CACHE_FILENAME
