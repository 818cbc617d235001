"""
Command Handler base - Shared contract for bulk tab actions.

Each handler names the command it implements and turns one call over a tab
set into a CommandResult. External failures are reported in the result,
never raised.
"""

from abc import ABC, abstractmethod

from tabquery.utils.helpers import parse_numeric_id

from ..types import CommandResult, SearchContext, Tab

NO_VALID_IDS = "No valid tab IDs found"


def numeric_tab_ids(tabs: list[Tab]) -> list[int]:
    """Browser ids for the given tabs; tabs without one are skipped."""
    ids = []
    for tab in tabs:
        tab_id = parse_numeric_id(tab.id)
        if tab_id is not None:
            ids.append(tab_id)
    return ids


def error_message(error: BaseException) -> str:
    return str(error) or type(error).__name__


class CommandHandler(ABC):
    """Base class for all command handlers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Canonical command name (e.g. "delete")."""
        ...

    @abstractmethod
    async def execute(self, tabs: list[Tab], context: SearchContext) -> CommandResult:
        """Apply the command to every tab in `tabs`."""
        ...
