"""
Group / Ungroup Commands - Gather matched tabs into a new group, or
pull them out of their groups.

Usage: `docs, readme /group`, `!grouped !gn old /ungroup`
"""

from loguru import logger

from ..types import CommandResult, SearchContext, Tab
from .base import NO_VALID_IDS, CommandHandler, error_message, numeric_tab_ids


class GroupCommand(CommandHandler):
    """Put all matching tabs into one new group."""

    name = "group"

    def __init__(self, browser):
        self.browser = browser

    async def execute(self, tabs: list[Tab], context: SearchContext) -> CommandResult:
        if not tabs:
            return CommandResult(success=True, affected_count=0)

        tab_ids = numeric_tab_ids(tabs)
        if len(tab_ids) < 2:
            return CommandResult(success=False, affected_count=0, error="Need at least 2 tabs to group")

        try:
            group_id = await self.browser.group_tabs(tab_ids)
        except Exception as e:
            return CommandResult(success=False, affected_count=0, error=error_message(e))

        logger.info(f"Grouped {len(tab_ids)} tabs into group {group_id}")
        return CommandResult(success=True, affected_count=len(tab_ids))


class UngroupCommand(CommandHandler):
    """Remove matching tabs from whatever group they are in."""

    name = "ungroup"

    def __init__(self, browser):
        self.browser = browser

    async def execute(self, tabs: list[Tab], context: SearchContext) -> CommandResult:
        if not tabs:
            return CommandResult(success=True, affected_count=0)

        tab_ids = numeric_tab_ids(tabs)
        if not tab_ids:
            return CommandResult(success=False, affected_count=0, error=NO_VALID_IDS)

        try:
            await self.browser.ungroup_tabs(tab_ids)
        except Exception as e:
            return CommandResult(success=False, affected_count=0, error=error_message(e))

        return CommandResult(success=True, affected_count=len(tab_ids))
