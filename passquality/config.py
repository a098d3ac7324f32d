# passquality/config.py
"""
Simple settings persistence for PassQuality.
Settings saved as JSON in %APPDATA%/PassQuality/config.json (Windows) or ~/.passquality/config.json (fallback).
PASSQUALITY_HOME overrides the directory.
"""

import os
import json
from typing import Dict, Any

DEFAULTS: Dict[str, Any] = {
    "toplist_db_path": None,  # if None, default_toplist_path() is used
    "acceptable_threshold": 5,
}

def _appdata_dir() -> str:
    home = os.getenv("PASSQUALITY_HOME")
    appdata = os.getenv("APPDATA")
    if home:
        d = home
    elif appdata:
        d = os.path.join(appdata, "PassQuality")
    else:
        d = os.path.join(os.path.expanduser("~"), ".passquality")
    os.makedirs(d, exist_ok=True)
    return d

def config_path() -> str:
    return os.path.join(_appdata_dir(), "config.json")

def default_toplist_path() -> str:
    return os.path.join(_appdata_dir(), "toplists.sqlite")

def load_config() -> Dict[str, Any]:
    p = config_path()
    if not os.path.exists(p):
        return DEFAULTS.copy()
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return DEFAULTS.copy()
    # merge defaults
    out = DEFAULTS.copy()
    if isinstance(data, dict):
        out.update(data)
    return out

def save_config(cfg: Dict[str, Any]) -> None:
    p = config_path()
    with open(p, "w", encoding="utf-8") as f:
        json.dump(cfg, f, ensure_ascii=False, indent=2)

def toplist_db_path(cfg: Dict[str, Any]) -> str:
    return cfg.get("toplist_db_path") or default_toplist_path()

def acceptable_threshold(cfg: Dict[str, Any]) -> int:
    """Configured threshold, or the default when the stored value is not a number."""
    value = cfg.get("acceptable_threshold")
    if isinstance(value, bool):
        return DEFAULTS["acceptable_threshold"]
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULTS["acceptable_threshold"]
