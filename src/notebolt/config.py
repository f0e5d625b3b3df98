"""
Lightweight config loading for notebolt.
Reads a JSON file, falling back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


DEFAULT_CATEGORIES = ("Work", "Personal", "Reading", "Ideas", "Travel", "Health")

DEFAULT_CONFIG_PATH = Path.home() / ".notebolt" / "config.json"

DEFAULT_CONFIG = {
    "categories": list(DEFAULT_CATEGORIES),
    "load_samples": True,
    "log_level": "WARNING",
}


def _defaults() -> Dict[str, Any]:
    cfg = dict(DEFAULT_CONFIG)
    cfg["categories"] = list(DEFAULT_CONFIG["categories"])
    return cfg


def _valid_value(key: str, value: Any) -> bool:
    if key == "categories":
        return isinstance(value, list) and all(isinstance(v, str) for v in value)
    if key == "load_samples":
        return isinstance(value, bool)
    if key == "log_level":
        return isinstance(value, str)
    return True


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not path.exists():
        return _defaults()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read config %s (%s); using defaults", path, exc)
        return _defaults()
    if not isinstance(data, dict):
        logger.warning("Config %s is not a JSON object; using defaults", path)
        return _defaults()

    # Merge shallowly with defaults, keeping the default for ill-typed keys
    cfg = _defaults()
    for key, value in data.items():
        if not _valid_value(key, value):
            logger.warning("Ignoring invalid %r in config %s; using default", key, path)
            continue
        cfg[key] = list(value) if key == "categories" else value
    return cfg
