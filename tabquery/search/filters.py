"""
Filter Evaluator - Decides whether a tab satisfies a bang filter.

Each bang type maps to a predicate over (tab, context, value). Unknown
bang types pass: a filter the engine does not understand never hides tabs.
"""

from typing import Iterable, Optional

from tabquery.utils.urls import (
    find_duplicates,
    get_group_id,
    is_browser_url,
    is_local_url,
    matches_text,
    url_is_ip,
)

from .types import BangFilter, Group, SearchContext, Tab


def _in_vault(tab: Tab, context: SearchContext) -> bool:
    for item in context.vault_items:
        if item.original_id is not None and item.original_id == tab.id:
            return True
        if item.url is not None and item.url == tab.url:
            return True
    return False


def _group_of(tab: Tab, context: SearchContext) -> Optional[Group]:
    group_id = get_group_id(tab)
    if group_id is None:
        return None
    return context.groups.get(group_id)


def _group_name_contains(tab: Tab, context: SearchContext, value: str) -> bool:
    group = _group_of(tab, context)
    if group is None:
        return False
    return value.lower() in (group.title or "").lower()


def _group_color_is(tab: Tab, context: SearchContext, value: str) -> bool:
    group = _group_of(tab, context)
    if group is None:
        return False
    return (group.color or "").lower() == value.lower()


def evaluate(tab: Tab, bang_type: str, context: SearchContext, value: Optional[str] = None) -> bool:
    """Run the predicate for one bang type, ignoring negation."""
    match bang_type:
        case "title" | "url":
            if not value:
                return True
            return matches_text(tab, value, bang_type)
        case "frozen":
            return tab.discarded is True
        case "audio":
            return tab.audible is True
        case "pin":
            return tab.pinned is True
        case "vault":
            return _in_vault(tab, context)
        case "grouped":
            return get_group_id(tab) is not None
        case "solo":
            return get_group_id(tab) is None
        case "duplicate":
            return find_duplicates(tab, context.duplicate_map, context.duplicate_mode)
        case "local":
            return bool(tab.url) and is_local_url(tab.url, context.local_patterns)
        case "ip":
            return bool(tab.url) and url_is_ip(tab.url)
        case "browser":
            return bool(tab.url) and is_browser_url(tab.url)
        case "groupname":
            if value is None:
                return True
            return _group_name_contains(tab, context, str(value))
        case "groupcolor":
            if value is None:
                return True
            return _group_color_is(tab, context, str(value))
        case _:
            # Unknown filters pass
            return True


def apply_filter(
    tab: Tab,
    bang_type: str,
    context: SearchContext,
    value: Optional[str] = None,
    negated: bool = False,
) -> bool:
    """
    Apply one bang filter to a tab.

    Args:
        tab: Tab under test
        bang_type: Canonical bang name (e.g. "frozen")
        context: Search context for vault, group and duplicate lookups
        value: Bang value, for text-scope and value bangs
        negated: Invert the result (`-!name`)
    """
    result = evaluate(tab, bang_type, context, value)
    return not result if negated else result


def apply_all_filters(tab: Tab, bangs: Iterable[BangFilter], context: SearchContext) -> bool:
    """AND across all bangs, stopping at the first that rejects the tab."""
    for bang in bangs:
        if not apply_filter(tab, bang.type, context, bang.value, bang.negated):
            return False
    return True


def apply_text_search(
    tab: Tab,
    terms: Iterable[str],
    title_scope: bool = False,
    url_scope: bool = False,
) -> bool:
    """
    Match free-text terms against a tab.

    Every term must match (AND). Title scope wins over URL scope when both
    are set; with neither, a term may match the title or the URL.
    """
    scope = "title" if title_scope else "url" if url_scope else None
    for term in terms:
        if not matches_text(tab, term, scope):
            return False
    return True
