"""
Bang/Command Registry - Static catalog of filters, commands and sort keys.

Bangs (`!name`) select filters, commands (`/name`) request bulk actions.
Each entry has a canonical name and an optional short alias:

  !title  !t    text-scope   !groupname   !gn   value
  !url    !u    text-scope   !groupcolor  !gc   value
  !frozen !f    boolean      ...

  /delete /d    /save /s    /freeze /f    /group /g    /ungroup /ug

Alias lookup is case-insensitive and built once at import time.
"""

import re
from types import MappingProxyType
from typing import Optional

from .types import (
    BangDefinition,
    BangType,
    CommandDefinition,
    CommandType,
    SortOption,
    SortType,
    Suggestion,
)

BANG_REGISTRY = MappingProxyType({
    "title": BangDefinition("title", "Search in tab title only", "text-scope", short="t"),
    "url": BangDefinition("url", "Search in tab URL only", "text-scope", short="u"),
    "frozen": BangDefinition("frozen", "Frozen/suspended tabs", "boolean", short="f"),
    "audio": BangDefinition("audio", "Tabs playing audio", "boolean", short="a"),
    "pin": BangDefinition("pin", "Pinned tabs", "boolean", short="p"),
    "vault": BangDefinition("vault", "Tabs in vault", "boolean", short="v"),
    "grouped": BangDefinition("grouped", "Tabs in a group", "boolean", short="g"),
    "solo": BangDefinition("solo", "Tabs not in any group", "boolean", short="s"),
    "duplicate": BangDefinition("duplicate", "Duplicate tabs (same URL)", "boolean", short="d"),
    "local": BangDefinition("local", "Local URLs (localhost, file://, etc.)", "boolean", short="l"),
    "ip": BangDefinition("ip", "IP address URLs (not domain names)", "boolean", short="i"),
    "browser": BangDefinition("browser", "Browser internal pages (chrome://, about:, etc.)", "boolean", short="b"),
    "groupname": BangDefinition("groupname", "Group name contains text", "value", short="gn"),
    "groupcolor": BangDefinition("groupcolor", "Group color (grey, blue, red, etc.)", "value", short="gc"),
})

COMMAND_REGISTRY = MappingProxyType({
    "delete": CommandDefinition("delete", "Close all matching tabs", destructive=True, short="d"),
    "save": CommandDefinition("save", "Save all matching tabs to vault", short="s"),
    "freeze": CommandDefinition("freeze", "Freeze/suspend all matching tabs", short="f"),
    "group": CommandDefinition("group", "Group all matching tabs", short="g"),
    "ungroup": CommandDefinition("ungroup", "Ungroup all matching tabs", short="ug"),
})

SORT_OPTIONS = MappingProxyType({
    "index": SortOption("index", "Browser order (default)"),
    "title": SortOption("title", "Alphabetical by title"),
    "url": SortOption("url", "Alphabetical by URL"),
})

GROUP_COLORS = (
    "grey",
    "blue",
    "red",
    "yellow",
    "green",
    "pink",
    "purple",
    "cyan",
    "orange",
)


def _build_alias_map(registry) -> MappingProxyType:
    aliases = {}
    for key, definition in registry.items():
        aliases[key.lower()] = key
        if definition.short:
            aliases[definition.short.lower()] = key
    return MappingProxyType(aliases)


_BANG_ALIASES = _build_alias_map(BANG_REGISTRY)
_COMMAND_ALIASES = _build_alias_map(COMMAND_REGISTRY)

_TRAILING_BANG = re.compile(r"!([a-zA-Z]*)$")
_TRAILING_COMMAND = re.compile(r"/([a-zA-Z]*)$")


def resolve_bang(name: str) -> Optional[BangType]:
    """Resolve a bang name or short alias to its canonical type."""
    return _BANG_ALIASES.get(name.lower())


def resolve_command(name: str) -> Optional[CommandType]:
    """Resolve a command name or short alias to its canonical type."""
    return _COMMAND_ALIASES.get(name.lower())


def resolve_sort(name: str) -> Optional[SortType]:
    normalized = name.lower()
    return normalized if normalized in SORT_OPTIONS else None


def _names_with_aliases(registry) -> list[str]:
    names = []
    for key, definition in registry.items():
        for name in (key, definition.short):
            if name and name not in names:
                names.append(name)
    return names


def get_all_bang_names() -> list[str]:
    """Canonical bang names and short aliases, in catalog order."""
    return _names_with_aliases(BANG_REGISTRY)


def get_all_command_names() -> list[str]:
    """Canonical command names and short aliases, in catalog order."""
    return _names_with_aliases(COMMAND_REGISTRY)


def build_suggestions(text: str, cursor: Optional[int] = None, limit: int = 6) -> list[Suggestion]:
    """
    Autocomplete entries for a bang or command being typed at the cursor.

    Args:
        text: Full query text
        cursor: Caret offset (defaults to end of text)
        limit: Maximum number of suggestions

    Returns:
        Suggestions whose name or alias starts with the partial name
        directly before the cursor. Empty when the cursor is not inside
        a `!name` or `/name` token.
    """
    before = text if cursor is None else text[:cursor]
    suggestions: list[Suggestion] = []

    bang_match = _TRAILING_BANG.search(before)
    if bang_match:
        partial = bang_match.group(1).lower()
        for name in get_all_bang_names():
            if name.lower().startswith(partial):
                definition = BANG_REGISTRY[resolve_bang(name)]
                suggestions.append(Suggestion(
                    kind="bang",
                    value=name,
                    display=f"!{name}",
                    description=definition.description,
                    short=definition.short,
                ))

    command_match = _TRAILING_COMMAND.search(before)
    if command_match:
        partial = command_match.group(1).lower()
        for name in get_all_command_names():
            if name.lower().startswith(partial):
                definition = COMMAND_REGISTRY[resolve_command(name)]
                suggestions.append(Suggestion(
                    kind="command",
                    value=name,
                    display=f"/{name}",
                    description=definition.description,
                    short=definition.short,
                ))

    return suggestions[:limit]
