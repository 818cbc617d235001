"""
Search Engine - Runs parsed queries against a live tab snapshot.

Every search fetches a fresh snapshot of tabs and groups and rebuilds its
context from scratch; nothing is cached between calls. Matching is:

  text terms (AND, optionally narrowed to title or URL by !title / !url)
  AND every remaining bang filter

Each match scores 1; results are ordered by the query's sort key.
"""

import asyncio
import unicodedata
from typing import TYPE_CHECKING, Any, Dict, Optional

from loguru import logger

from tabquery.utils.helpers import default_settings
from tabquery.utils.urls import DuplicateMode, build_duplicate_map

from .filters import apply_all_filters, apply_text_search
from .parser import parse_query
from .registry import build_suggestions
from .types import (
    Group,
    ParsedQuery,
    Scope,
    SearchContext,
    SearchOutcome,
    SearchResult,
    SortType,
    Suggestion,
    Tab,
    VaultItem,
)

if TYPE_CHECKING:
    from tabquery.services.browser import TabService

    from .commands import CommandExecutor


def build_search_context(
    tabs: list[Tab],
    vault_items: Optional[list[VaultItem]] = None,
    groups: Optional[dict[int, Group]] = None,
    scope: Scope = "current",
    local_patterns: Optional[list[str]] = None,
    duplicate_mode: DuplicateMode = "loose",
) -> SearchContext:
    """Assemble the per-search context, including the duplicate URL index."""
    return SearchContext(
        all_tabs=tabs,
        vault_items=list(vault_items or []),
        groups=groups if groups is not None else {},
        scope=scope,
        duplicate_map=build_duplicate_map(tabs, duplicate_mode),
        local_patterns=list(local_patterns or []),
        duplicate_mode=duplicate_mode,
    )


def _collation_key(text: Optional[str]) -> tuple[str, str]:
    text = text or ""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text


def sort_results(results: list[SearchResult], sort: SortType) -> list[SearchResult]:
    """
    Order results by title, URL or browser index.

    Titles and URLs compare case- and accent-insensitively, with exact
    text breaking ties; index is numeric ascending.
    Always returns a new list.
    """
    if sort == "title":
        return sorted(results, key=lambda r: _collation_key(r.tab.title))
    if sort == "url":
        return sorted(results, key=lambda r: _collation_key(r.tab.url))
    return sorted(results, key=lambda r: r.tab.index or 0)


def is_search_active(parsed: Optional[ParsedQuery]) -> bool:
    """True if the query has any text, bang or command."""
    if parsed is None:
        return False
    return bool(parsed.text_terms or parsed.bangs or parsed.commands)


def has_commands(parsed: Optional[ParsedQuery]) -> bool:
    return parsed is not None and bool(parsed.commands)


def get_result_count(results: list[SearchResult]) -> int:
    return len(results)


class SearchEngine:
    """
    Query orchestrator.

    Args:
        tab_service: Snapshot source (TabService or compatible)
        executor: CommandExecutor for /commands; None disables execution
        settings: Settings dict as returned by load_settings()

    Example:
        engine = SearchEngine(TabService(api), CommandExecutor.default(service))
        outcome = await engine.search_and_execute("youtube -!pin /freeze")
    """

    def __init__(
        self,
        tab_service: "TabService",
        executor: Optional["CommandExecutor"] = None,
        settings: Optional[Dict[str, Any]] = None,
    ):
        self.tab_service = tab_service
        self.executor = executor
        self.settings = settings if settings is not None else default_settings()

    @property
    def _search_settings(self) -> Dict[str, Any]:
        return self.settings.get("search", {})

    def _resolve_scope(self, scope: Optional[Scope]) -> Scope:
        return scope or self._search_settings.get("default_scope", "current")

    def _resolve_patterns(self, local_patterns: Optional[list[str]]) -> list[str]:
        if local_patterns is not None:
            return local_patterns
        return list(self._search_settings.get("local_patterns", []))

    def suggest(self, text: str, cursor: Optional[int] = None) -> list[Suggestion]:
        """Autocomplete entries for the bang or command at the cursor."""
        limit = self.settings.get("suggestions", {}).get("limit", 6)
        return build_suggestions(text, cursor, limit)

    async def _build_context(
        self,
        scope: Scope,
        vault_items: Optional[list[VaultItem]],
        local_patterns: list[str],
    ) -> SearchContext:
        tabs, groups = await asyncio.gather(
            self.tab_service.get_all_tabs(scope),
            self.tab_service.get_groups(scope),
        )
        return build_search_context(
            tabs,
            vault_items,
            groups,
            scope,
            local_patterns,
            self._search_settings.get("duplicate_mode", "loose"),
        )

    async def search(
        self,
        query: str,
        scope: Optional[Scope] = None,
        vault_items: Optional[list[VaultItem]] = None,
        local_patterns: Optional[list[str]] = None,
    ) -> SearchOutcome:
        """
        Filter and sort the current tabs by a query.

        Args:
            query: Raw query string
            scope: "current" or "all" windows (settings default if None)
            vault_items: Vault contents for the !vault filter
            local_patterns: Extra patterns for the !local filter

        Returns:
            SearchOutcome with results and the parsed query. An empty
            query returns no results without fetching any tabs.
        """
        parsed = parse_query(query)

        if not is_search_active(parsed):
            return SearchOutcome(results=[], parsed_query=parsed)

        scope = self._resolve_scope(scope)
        context = await self._build_context(scope, vault_items, self._resolve_patterns(local_patterns))

        title_bang = next((b for b in parsed.bangs if b.type == "title"), None)
        url_bang = next((b for b in parsed.bangs if b.type == "url"), None)
        title_scope = title_bang is not None and not title_bang.negated
        url_scope = url_bang is not None and not url_bang.negated
        other_bangs = [b for b in parsed.bangs if b.type not in ("title", "url")]

        results = []
        for tab in context.all_tabs:
            if not apply_text_search(tab, parsed.text_terms, title_scope, url_scope):
                continue
            if not apply_all_filters(tab, other_bangs, context):
                continue
            results.append(SearchResult(tab=tab, match_score=1))

        logger.debug(f"'{parsed.raw}' matched {len(results)}/{len(context.all_tabs)} tabs")
        return SearchOutcome(results=sort_results(results, parsed.sort), parsed_query=parsed)

    async def search_and_execute(
        self,
        query: str,
        scope: Optional[Scope] = None,
        vault_items: Optional[list[VaultItem]] = None,
        local_patterns: Optional[list[str]] = None,
    ) -> SearchOutcome:
        """
        Search, then run the query's commands on the matches.

        Commands run against a freshly fetched context. When the query has
        commands but matched nothing, they run against every visible tab
        and those tabs are reported as the results.
        """
        outcome = await self.search(query, scope, vault_items, local_patterns)
        parsed = outcome.parsed_query

        if not parsed.commands:
            return outcome

        if self.executor is None:
            logger.warning(f"Ignoring commands {list(parsed.commands)}: no executor configured")
            return outcome

        scope = self._resolve_scope(scope)
        context = await self._build_context(scope, vault_items, self._resolve_patterns(local_patterns))

        if outcome.results:
            targets = [result.tab for result in outcome.results]
            results = outcome.results
        else:
            logger.info(f"No matches for '{parsed.raw}', running commands on all {len(context.all_tabs)} tabs")
            targets = context.all_tabs
            results = [SearchResult(tab=tab, match_score=1) for tab in targets]

        command_results = await self.executor.execute_commands_sequentially(parsed.commands, targets, context)
        return SearchOutcome(results=results, parsed_query=parsed, command_results=command_results)
