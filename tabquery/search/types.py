"""
Search types - Records shared by the tokenizer, parser, filters and engine.

Parsed queries are frozen: they are built fresh for every query string and
never mutated afterwards. Search contexts are rebuilt on every search call.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Literal, Optional, Union

TokenKind = Literal["text", "bang", "exclude", "command"]

BangType = Literal[
    "title",
    "url",
    "frozen",
    "audio",
    "pin",
    "vault",
    "grouped",
    "solo",
    "duplicate",
    "local",
    "ip",
    "browser",
    "groupname",
    "groupcolor",
]

BangKind = Literal["text-scope", "boolean", "value"]

CommandType = Literal["delete", "save", "freeze", "group", "ungroup"]

SortType = Literal["index", "title", "url"]

Scope = Literal["current", "all"]

TabId = Union[int, str]


@dataclass(frozen=True)
class Position:
    """Half-open [start, end) span in the original query string."""
    start: int
    end: int


@dataclass(frozen=True)
class SearchToken:
    """A single lexical unit of a query."""
    kind: TokenKind
    raw: str
    value: str
    position: Position


@dataclass(frozen=True)
class BangFilter:
    """A resolved `!name` filter, optionally negated and carrying a value."""
    type: BangType
    value: Optional[str] = None
    negated: bool = False
    raw: str = ""
    position: Position = Position(0, 0)


@dataclass(frozen=True)
class ParseError:
    message: str
    position: Position
    raw: str
    severity: Literal["error", "warning"] = "error"


@dataclass(frozen=True)
class ParsedQuery:
    """Structured form of a query string."""
    text_terms: tuple[str, ...] = ()
    bangs: tuple[BangFilter, ...] = ()
    commands: tuple[CommandType, ...] = ()
    sort: SortType = "index"
    errors: tuple[ParseError, ...] = ()
    raw: str = ""


@dataclass(frozen=True)
class BangDefinition:
    name: BangType
    description: str
    kind: BangKind
    short: Optional[str] = None


@dataclass(frozen=True)
class CommandDefinition:
    name: CommandType
    description: str
    destructive: bool = False
    short: Optional[str] = None


@dataclass(frozen=True)
class SortOption:
    name: SortType
    description: str


@dataclass(frozen=True)
class Suggestion:
    """Autocomplete entry for a partially typed bang or command."""
    kind: Literal["bang", "command"]
    value: str
    display: str
    description: str
    short: Optional[str] = None


@dataclass
class Tab:
    """A live browser tab, reduced to the fields the engine reads."""
    id: TabId
    title: str = "Untitled"
    url: str = ""
    favicon: str = ""
    active: bool = False
    discarded: bool = False
    window_id: int = -1
    index: int = 0
    group_id: Optional[int] = -1
    muted: bool = False
    pinned: bool = False
    audible: bool = False


@dataclass
class Group:
    """A tab group ("island"). Only title and color matter to filters."""
    id: TabId
    title: str = ""
    color: str = "grey"
    collapsed: bool = False
    tabs: list[Tab] = field(default_factory=list)


@dataclass
class VaultItem:
    """A tab or group persisted outside the live session."""
    id: TabId
    title: str = ""
    url: Optional[str] = None
    original_id: Optional[TabId] = None
    saved_at: int = 0


@dataclass
class SearchContext:
    """Everything a filter may look at besides the tab itself."""
    all_tabs: list[Tab] = field(default_factory=list)
    vault_items: list[VaultItem] = field(default_factory=list)
    groups: dict[int, Group] = field(default_factory=dict)
    scope: Scope = "current"
    duplicate_map: dict[str, list[Tab]] = field(default_factory=dict)
    local_patterns: list[str] = field(default_factory=list)
    duplicate_mode: Literal["strict", "loose"] = "loose"


@dataclass
class SearchResult:
    tab: Tab
    match_score: int = 1


@dataclass
class CommandResult:
    """Outcome of one command over a tab set."""
    success: bool
    affected_count: int = 0
    error: Optional[str] = None
    undo: Optional[Callable[[], Awaitable[Any]]] = None


@dataclass
class SearchOutcome:
    results: list[SearchResult]
    parsed_query: ParsedQuery
    command_results: Optional[list[CommandResult]] = None
