# Rev 0.1.0

"""Paths and XDG helpers (Rev 0.1.0)
- Logs/config live under XDG dirs
- The task database lives in ./tasksdb beside the working directory
"""
from __future__ import annotations
import os
from pathlib import Path


APP_NAME = "taskdesk"
DB_DIR_NAME = "tasksdb"
DB_FILE_NAME = "tasks.sqlite3"


XDG_STATE_HOME = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
XDG_CONFIG_HOME = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


STATE_DIR = XDG_STATE_HOME / APP_NAME
LOGS_DIR = STATE_DIR / "logs"
CONFIG_DIR = XDG_CONFIG_HOME / APP_NAME


def db_dir() -> Path:
    # Resolved on call so a chdir before startup is honoured
    return Path.cwd() / DB_DIR_NAME


def db_path() -> Path:
    return db_dir() / DB_FILE_NAME
