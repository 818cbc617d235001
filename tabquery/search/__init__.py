"""
Search package - Query language, filters and command execution.

A query like `youtube, music !audio -!pin sort:title /freeze` is
tokenized, parsed against the bang/command registry, evaluated against a
fresh tab snapshot, and its commands handed to the executor.
"""

from .commands import CommandExecutor, CommandHandler
from .engine import (
    SearchEngine,
    build_search_context,
    get_result_count,
    has_commands,
    is_search_active,
    sort_results,
)
from .filters import apply_all_filters, apply_filter, apply_text_search
from .parser import has_destructive_commands, parse_query, to_query_string
from .registry import (
    BANG_REGISTRY,
    COMMAND_REGISTRY,
    SORT_OPTIONS,
    build_suggestions,
    get_all_bang_names,
    get_all_command_names,
    resolve_bang,
    resolve_command,
    resolve_sort,
)
from .tokenizer import tokenize
from .types import (
    BangFilter,
    CommandResult,
    Group,
    ParsedQuery,
    SearchContext,
    SearchOutcome,
    SearchResult,
    SearchToken,
    Tab,
    VaultItem,
)

__all__ = [
    "SearchEngine",
    "CommandExecutor",
    "CommandHandler",
    "tokenize",
    "parse_query",
    "to_query_string",
    "has_commands",
    "has_destructive_commands",
    "is_search_active",
    "get_result_count",
    "build_search_context",
    "sort_results",
    "apply_filter",
    "apply_all_filters",
    "apply_text_search",
    "BANG_REGISTRY",
    "COMMAND_REGISTRY",
    "SORT_OPTIONS",
    "resolve_bang",
    "resolve_command",
    "resolve_sort",
    "get_all_bang_names",
    "get_all_command_names",
    "build_suggestions",
    "BangFilter",
    "CommandResult",
    "Group",
    "ParsedQuery",
    "SearchContext",
    "SearchOutcome",
    "SearchResult",
    "SearchToken",
    "Tab",
    "VaultItem",
]
