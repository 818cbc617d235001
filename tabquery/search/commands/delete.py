"""
Delete Command - Close every matched tab in one bulk call.

All-or-nothing: if the browser rejects the call, nothing counts as closed.

Usage: `youtube !audio /delete`, `/d`
"""

from loguru import logger

from ..types import CommandResult, SearchContext, Tab
from .base import NO_VALID_IDS, CommandHandler, error_message, numeric_tab_ids


class DeleteCommand(CommandHandler):
    """Close matching tabs via the browser's bulk remove."""

    name = "delete"

    def __init__(self, browser):
        self.browser = browser

    async def execute(self, tabs: list[Tab], context: SearchContext) -> CommandResult:
        if not tabs:
            return CommandResult(success=True, affected_count=0)

        tab_ids = numeric_tab_ids(tabs)
        if not tab_ids:
            return CommandResult(success=False, affected_count=0, error=NO_VALID_IDS)

        try:
            await self.browser.remove_tabs(tab_ids)
        except Exception as e:
            logger.warning(f"/delete failed for {len(tab_ids)} tabs: {e}")
            return CommandResult(success=False, affected_count=0, error=error_message(e))

        logger.info(f"Closed {len(tab_ids)} tabs")
        return CommandResult(success=True, affected_count=len(tab_ids))
