from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

SAVE_FILE_NAME = "tasks.json"
APP_DIR_NAME = "BasketPad"

__all__ = ["SAVE_FILE_NAME", "default_data_dir", "resolve_save_path"]


def default_data_dir() -> Path:
    """
    Per-user local application-data directory, without touching wx.

    The GUI prefers wx.StandardPaths (see app.py); this is the fallback used
    when no wx.App exists yet and by tools/tests.
    """
    if sys.platform == "win32":
        base = os.environ.get("LOCALAPPDATA") or os.path.expanduser("~\\AppData\\Local")
        return Path(base) / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME
    base = os.environ.get("XDG_DATA_HOME") or os.path.expanduser("~/.local/share")
    return Path(base) / APP_DIR_NAME.lower()


def resolve_save_path(data_file: Optional[str] = None, data_dir: Optional[str] = None) -> Path:
    """
    Work out where the list lives.

    An explicit data_file wins; otherwise SAVE_FILE_NAME inside data_dir
    (or default_data_dir()). The parent directory is created if missing.
    """
    if data_file:
        p = Path(data_file).expanduser().resolve()
    else:
        base = Path(data_dir).expanduser() if data_dir else default_data_dir()
        p = (base / SAVE_FILE_NAME).resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    return p
