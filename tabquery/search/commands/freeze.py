"""
Freeze Command - Discard matched tabs to free their memory.

Best effort: one discard per tab, issued concurrently. The command succeeds
if at least one tab was discarded; failures are collected into the error
message without cancelling the rest.

Usage: `!audio -!pin /freeze`, `/f`
"""

import asyncio

from loguru import logger

from ..types import CommandResult, SearchContext, Tab
from .base import NO_VALID_IDS, CommandHandler, error_message, numeric_tab_ids


class FreezeCommand(CommandHandler):
    """Discard (suspend) matching tabs."""

    name = "freeze"

    def __init__(self, browser):
        self.browser = browser

    async def execute(self, tabs: list[Tab], context: SearchContext) -> CommandResult:
        if not tabs:
            return CommandResult(success=True, affected_count=0)

        tab_ids = numeric_tab_ids(tabs)
        if not tab_ids:
            return CommandResult(success=False, affected_count=0, error=NO_VALID_IDS)

        outcomes = await asyncio.gather(
            *(self.browser.discard_tab(tab_id) for tab_id in tab_ids),
            return_exceptions=True,
        )

        errors = [error_message(o) for o in outcomes if isinstance(o, BaseException)]
        affected = len(outcomes) - len(errors)

        if errors:
            logger.warning(f"/freeze discarded {affected}/{len(tab_ids)} tabs")

        return CommandResult(
            success=affected > 0,
            affected_count=affected,
            error="; ".join(errors) if errors else None,
        )
