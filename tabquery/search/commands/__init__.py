"""
Command Executor - Dispatches resolved commands to their handlers.

Handlers register under their command name. Commands in one query run
strictly one after another against the same tab set; the first failure
stops the queue. Commands that already ran are not rolled back, so a
partially applied query is a normal outcome, not an error.
"""

from typing import Iterable, Optional

from loguru import logger

from ..types import CommandResult, SearchContext, Tab
from .base import CommandHandler, numeric_tab_ids
from .delete import DeleteCommand
from .freeze import FreezeCommand
from .grouping import GroupCommand, UngroupCommand
from .save import SaveCommand


class CommandExecutor:
    """Routes commands to registered handlers."""

    def __init__(self, handlers: Optional[Iterable[CommandHandler]] = None):
        self._handlers: dict[str, CommandHandler] = {}
        for handler in handlers or []:
            self.register(handler)

    @classmethod
    def default(cls, browser, vault_writer=None) -> "CommandExecutor":
        """
        Build an executor with the standard handlers.

        Args:
            browser: Bulk action sink (TabService or compatible)
            vault_writer: Optional VaultWriter; without it /save is not
                available and reports an unknown command
        """
        handlers: list[CommandHandler] = [
            DeleteCommand(browser),
            FreezeCommand(browser),
            GroupCommand(browser),
            UngroupCommand(browser),
        ]
        if vault_writer is not None:
            handlers.append(SaveCommand(vault_writer))
        return cls(handlers)

    def register(self, handler: CommandHandler) -> None:
        """Register a handler, replacing any previous one with the same name."""
        self._handlers[handler.name] = handler

    @property
    def commands(self) -> list[str]:
        return list(self._handlers)

    async def execute_command(self, command: str, tabs: list[Tab], context: SearchContext) -> CommandResult:
        """
        Run a single command.

        Returns:
            The handler's result, or a failed result for commands with no
            registered handler.
        """
        handler = self._handlers.get(command)
        if handler is None:
            logger.warning(f"No handler for command: {command}")
            return CommandResult(success=False, affected_count=0, error=f"Unknown command: {command}")

        return await handler.execute(tabs, context)

    async def execute_commands_sequentially(
        self,
        commands: Iterable[str],
        tabs: list[Tab],
        context: SearchContext,
    ) -> list[CommandResult]:
        """
        Run commands in order, stopping after the first failure.

        Returns:
            One result per command that ran; shorter than `commands` when
            one of them failed.
        """
        results: list[CommandResult] = []

        for command in commands:
            result = await self.execute_command(command, tabs, context)
            results.append(result)

            if not result.success:
                logger.warning(f"Stopping after /{command} failed: {result.error}")
                break

        return results


__all__ = [
    "CommandExecutor",
    "CommandHandler",
    "DeleteCommand",
    "FreezeCommand",
    "SaveCommand",
    "GroupCommand",
    "UngroupCommand",
    "numeric_tab_ids",
]
