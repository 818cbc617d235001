"""
Save Command - Copy matched tabs into the vault.

Each tab is looked up in the live collection through the injected vault
writer; tabs it does not know are skipped. The first write error aborts
the command.

Usage: `!grouped /save`, `/s`
"""

from loguru import logger

from ..types import CommandResult, SearchContext, Tab
from .base import CommandHandler, error_message


class SaveCommand(CommandHandler):
    """Persist matching tabs through a VaultWriter."""

    name = "save"

    def __init__(self, vault_writer):
        self.vault_writer = vault_writer

    async def execute(self, tabs: list[Tab], context: SearchContext) -> CommandResult:
        if not tabs:
            return CommandResult(success=True, affected_count=0)

        saved = 0
        try:
            for tab in tabs:
                item = self.vault_writer.find_live_item(tab.id)
                if item is None:
                    logger.debug(f"/save skipped {tab.id}: not in live collection")
                    continue
                await self.vault_writer.save_to_vault(item)
                saved += 1
        except Exception as e:
            logger.exception(f"/save aborted after {saved} tabs")
            return CommandResult(success=False, affected_count=0, error=error_message(e))

        return CommandResult(success=True, affected_count=saved)
