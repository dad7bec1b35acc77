# src/taskdesk/utils/config.py
import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from . import paths

log = logging.getLogger(__name__)

SETTINGS_FILE = paths.CONFIG_DIR / "settings.json"

_DEFAULTS: Dict[str, Any] = {
    "database": {
        "path": None,           # None -> ./tasksdb/tasks.sqlite3
    },
    "model": {
        "workers": 4,
        "callbacks": "ui",      # "ui" or "worker"
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    path = Path(path) if path is not None else SETTINGS_FILE
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            log.warning("Ignoring unreadable settings file %s: %s", path, e)
            return copy.deepcopy(_DEFAULTS)
        if isinstance(data, dict):
            return _merge(_DEFAULTS, data)
        log.warning("Ignoring settings file %s: top level is not an object", path)
    return copy.deepcopy(_DEFAULTS)


def save_settings(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    path = Path(path) if path is not None else SETTINGS_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def resolve_db_path(settings: Optional[Dict[str, Any]] = None) -> Path:
    """TASKDESK_DB env wins, then settings, then ./tasksdb/tasks.sqlite3."""
    env = os.environ.get("TASKDESK_DB")
    if env:
        return Path(env)
    configured = ((settings or {}).get("database") or {}).get("path")
    if configured:
        return Path(configured)
    return paths.db_path()
