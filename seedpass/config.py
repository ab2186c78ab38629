# seedpass/config.py
"""
Simple settings persistence for SeedPass.
Settings saved as JSON in $SEEDPASS_CONFIG, %APPDATA%/SeedPass/config.json (Windows)
or ~/.seedpass/config.json (fallback)
"""

import os
import json
import logging
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "range_url": "https://api.pwnedpasswords.com/range",
    "user_agent": "SeedPass-Password-Checker",
    "request_timeout_seconds": 10,
    "add_padding": False,
    "max_attempts": 8,
    "default_length": 16,
    "max_length": 128,
    "hash_name": "sha1",
}

def _appdata_dir() -> str:
    appdata = os.getenv("APPDATA")
    if appdata:
        return os.path.join(appdata, "SeedPass")
    return os.path.join(os.path.expanduser("~"), ".seedpass")

def config_path() -> str:
    return os.getenv("SEEDPASS_CONFIG") or os.path.join(_appdata_dir(), "config.json")

def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    p = path or config_path()
    if not os.path.exists(p):
        return DEFAULTS.copy()
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", p, e)
        return DEFAULTS.copy()
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a JSON object", p)
        return DEFAULTS.copy()
    # merge defaults
    out = DEFAULTS.copy()
    out.update(data)
    return out

def save_config(cfg: Dict[str, Any], path: Optional[str] = None) -> str:
    p = path or config_path()
    d = os.path.dirname(p)
    if d:
        os.makedirs(d, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(cfg, f, ensure_ascii=False, indent=2)
    return p
