"""
URL helpers for tab filters.

- normalize_url / build_duplicate_map: duplicate detection (loose ignores
  query and fragment, strict keeps them)
- is_local_url / is_ip_address / is_browser_url: URL classifiers
- matches_text: case-insensitive substring match on title and/or URL

Classifiers never raise; unparsable input is simply "not a match".
"""

from __future__ import annotations

import ipaddress
import re
from typing import TYPE_CHECKING, Literal, Optional
from urllib.parse import urlsplit

if TYPE_CHECKING:
    from tabquery.search.types import Tab

DuplicateMode = Literal["strict", "loose"]

PRIVATE_IP_RANGES = [
    re.compile(r"^10\."),
    re.compile(r"^172\.(1[6-9]|2[0-9]|3[0-1])\."),
    re.compile(r"^192\.168\."),
    re.compile(r"^127\."),
    re.compile(r"^169\.254\."),
    re.compile(r"^::1$"),
    re.compile(r"^fc00:", re.IGNORECASE),
    re.compile(r"^fe80:", re.IGNORECASE),
]

LOCAL_PATTERNS = [
    re.compile(r"^localhost", re.IGNORECASE),
    re.compile(r".*\.local$", re.IGNORECASE),
    re.compile(r"^127\."),
    re.compile(r"^0\.0\.0\.0$"),
    re.compile(r"^::1$"),
]

BROWSER_PATTERNS = [
    re.compile(r"^chrome://", re.IGNORECASE),
    re.compile(r"^chrome-extension://", re.IGNORECASE),
    re.compile(r"^about:", re.IGNORECASE),
    re.compile(r"^edge://", re.IGNORECASE),
    re.compile(r"^opera://", re.IGNORECASE),
    re.compile(r"^brave://", re.IGNORECASE),
    re.compile(r"^vivaldi://", re.IGNORECASE),
    re.compile(r"^firefox://", re.IGNORECASE),
    re.compile(r"^moz-extension://", re.IGNORECASE),
]

_SCHEME = re.compile(r"^[a-z][a-z0-9+.-]*$", re.IGNORECASE)


def _split(url: str):
    """urlsplit() that only accepts absolute URLs; None otherwise."""
    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return None
    if not parts.scheme or not _SCHEME.match(parts.scheme):
        return None
    return parts


def _hostname(url: str) -> Optional[str]:
    parts = _split(url)
    if parts is None:
        return None
    try:
        return (parts.hostname or "").lower()
    except ValueError:
        return None


def is_local_url(url: str, additional_patterns: Optional[list[str]] = None) -> bool:
    """
    Check if a URL points at the local machine or a private network.

    Args:
        url: Full tab URL
        additional_patterns: Extra regexes (or plain substrings, if they
            don't compile) checked against the URL and hostname

    Returns:
        True for file://, localhost, *.local, loopback and private ranges,
        or any additional pattern match.
    """
    if url.lower().startswith("file://"):
        return True

    hostname = _hostname(url)
    if hostname is None:
        return False

    for pattern in LOCAL_PATTERNS:
        if pattern.search(hostname):
            return True

    for pattern in PRIVATE_IP_RANGES:
        if pattern.search(hostname):
            return True

    for raw in additional_patterns or []:
        try:
            regex = re.compile(raw, re.IGNORECASE)
        except re.error:
            if raw.lower() in hostname:
                return True
            continue
        if regex.search(url) or regex.search(hostname):
            return True

    return False


def is_ip_address(hostname: str) -> bool:
    """True if hostname is a literal IPv4 or IPv6 address (brackets allowed)."""
    if not hostname:
        return False
    candidate = hostname
    if candidate.startswith("[") and candidate.endswith("]"):
        candidate = candidate[1:-1]
    try:
        ipaddress.ip_address(candidate)
    except ValueError:
        return False
    return True


def url_is_ip(url: str) -> bool:
    hostname = _hostname(url)
    return bool(hostname) and is_ip_address(hostname)


def is_browser_url(url: str) -> bool:
    """True for browser-internal pages (chrome://, about:, extension pages...)."""
    return any(pattern.search(url) for pattern in BROWSER_PATTERNS)


def normalize_url(url: str, mode: DuplicateMode = "loose") -> str:
    """
    Normalize a URL for duplicate comparison.

    Host and path are lowercased and trailing slashes dropped. Loose mode
    also discards the query string and fragment.
    """
    parts = _split(url)
    if parts is None:
        if mode == "strict":
            return url.strip().rstrip("/").lower()
        return url.split("#")[0].split("?")[0].strip().rstrip("/").lower()

    host = parts.netloc.rpartition("@")[2].lower()
    path = parts.path.rstrip("/").lower()
    base = f"{parts.scheme.lower()}://{host}{path}"

    if mode == "strict":
        query = f"?{parts.query}" if parts.query else ""
        fragment = f"#{parts.fragment}" if parts.fragment else ""
        return f"{base}{query}{fragment}"

    return base


def build_duplicate_map(tabs: list[Tab], mode: DuplicateMode = "loose") -> dict[str, list[Tab]]:
    """Group tabs by normalized URL. Tabs without a URL are skipped."""
    duplicates: dict[str, list[Tab]] = {}
    for tab in tabs:
        if not tab.url:
            continue
        duplicates.setdefault(normalize_url(tab.url, mode), []).append(tab)
    return duplicates


def find_duplicates(tab: Tab, duplicate_map: dict[str, list[Tab]], mode: DuplicateMode = "loose") -> bool:
    """True if the tab's normalized URL is shared with at least one other tab."""
    if not tab.url:
        return False
    return len(duplicate_map.get(normalize_url(tab.url, mode), [])) > 1


def get_group_id(tab: Tab) -> Optional[int]:
    """The tab's group id, or None when ungrouped (-1 / missing)."""
    if tab.group_id is None or tab.group_id == -1:
        return None
    return tab.group_id


def _contains(haystack: Optional[str], needle: str) -> bool:
    return haystack is not None and needle in haystack.lower()


def matches_text(tab: Tab, term: str, scope: Optional[Literal["title", "url"]] = None) -> bool:
    """Case-insensitive substring match against title, URL, or either."""
    needle = term.lower()

    if scope == "title":
        return _contains(tab.title, needle)
    if scope == "url":
        return _contains(tab.url, needle)

    return _contains(tab.title, needle) or _contains(tab.url, needle)
