"""
Tabquery - Engine wiring

Creates the tab service, command executor and search engine from a
browser API and the user's settings file.

Usage:
  from tabquery.config import create_engine
  engine = create_engine(api, vault_writer=vault)
  outcome = await engine.search_and_execute("!duplicate /delete")
"""

from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from tabquery.search.commands import CommandExecutor
from tabquery.search.engine import SearchEngine
from tabquery.services.browser import BrowserAPI, TabService
from tabquery.services.vault import VaultWriter
from tabquery.utils.helpers import load_settings


def create_engine(
    api: BrowserAPI,
    vault_writer: Optional[VaultWriter] = None,
    settings: Optional[Dict[str, Any]] = None,
    settings_file: Optional[Path] = None,
) -> SearchEngine:
    """
    Build a SearchEngine with the standard command set.

    Args:
        api: Browser bridge implementing BrowserAPI
        vault_writer: Enables /save when given
        settings: Already-loaded settings; read from settings_file otherwise
        settings_file: Settings path override
    """
    if settings is None:
        settings = load_settings(settings_file)

    tab_service = TabService(api, extension_id=settings.get("browser", {}).get("extension_id"))
    executor = CommandExecutor.default(tab_service, vault_writer)

    logger.debug(f"Search engine ready with commands: {', '.join(executor.commands)}")
    return SearchEngine(tab_service, executor, settings)
