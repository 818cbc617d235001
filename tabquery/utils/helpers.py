"""
Helper utilities for tabquery.

Provides common functions used across the engine and services:
- Settings loading (TOML merged over defaults)
- Numeric tab id extraction from prefixed ids ("live-tab-42")
- Item lookup in a live tab/group collection
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import toml
from loguru import logger

# Browser tab ids are 32-bit signed integers greater than zero
MAX_TAB_ID = 2147483647

_DIGITS = re.compile(r"[0-9]{1,10}")

DEFAULT_SETTINGS_PATH = Path.home() / ".config" / "tabquery" / "settings.toml"


def settings_path() -> Path:
    """Settings file location: $TABQUERY_SETTINGS, else the XDG default."""
    override = os.environ.get("TABQUERY_SETTINGS")
    return Path(override) if override else DEFAULT_SETTINGS_PATH


def default_settings() -> Dict[str, Any]:
    return {
        "search": {
            "default_scope": "current",
            "local_patterns": [],
            "duplicate_mode": "loose",
        },
        "browser": {
            "extension_id": "",
        },
        "suggestions": {
            "limit": 6,
        },
    }


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from a TOML file.

    Args:
        path: Settings file; defaults to settings_path()

    Returns:
        Dictionary containing settings with defaults applied. Missing or
        unreadable files yield the defaults.

    Example settings.toml:
        [search]
        default_scope = "all"
        local_patterns = ["staging\\\\.internal"]
    """
    defaults = default_settings()
    path = Path(path) if path is not None else settings_path()

    if not path.exists():
        logger.debug(f"Settings file not found at {path}, using defaults")
        return defaults

    try:
        loaded = toml.load(path)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning(f"Could not load settings from {path}: {e}")
        return defaults

    return _deep_merge(defaults, loaded)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary with defaults
        override: Dictionary with overrides

    Returns:
        Merged dictionary (override takes precedence)
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def parse_numeric_id(tab_id) -> Optional[int]:
    """
    Extract the browser's numeric id from a tab id.

    Accepts plain integers and prefixed strings ("live-tab-42"). The first
    dash-separated all-digit segment wins, unless a preceding empty segment
    marks it as negative ("live--1").

    Returns:
        The id if it lies in 1..2^31-1, else None.
    """
    if tab_id is None or isinstance(tab_id, bool):
        return None

    segments = str(tab_id).split("-")
    for i, segment in enumerate(segments):
        if not _DIGITS.fullmatch(segment):
            continue
        if i > 0 and segments[i - 1] == "":
            continue
        number = int(segment)
        if 0 < number <= MAX_TAB_ID:
            return number

    if str(tab_id).startswith("live-"):
        logger.error(f"Failed to parse numeric id from live item: {tab_id}")
    else:
        logger.debug(f"No numeric id found in: {tab_id}")
    return None


def find_item_in_list(items: list, item_id) -> Optional[Any]:
    """
    Find a tab or group by id in a live collection.

    Checks top-level entries first, then the `tabs` of each group.

    Returns:
        The matching item, or None.
    """
    wanted = str(item_id)

    for entry in items:
        if entry is not None and str(getattr(entry, "id", None)) == wanted:
            return entry

    for entry in items:
        for tab in getattr(entry, "tabs", None) or []:
            if str(tab.id) == wanted:
                return tab

    return None
