# Tabquery Utilities Package
"""
Shared utility functions: URL classification and settings loading.
"""

from .helpers import find_item_in_list, load_settings, parse_numeric_id
from .urls import build_duplicate_map, is_browser_url, is_local_url, normalize_url

__all__ = [
    "load_settings",
    "parse_numeric_id",
    "find_item_in_list",
    "build_duplicate_map",
    "normalize_url",
    "is_local_url",
    "is_browser_url",
]
