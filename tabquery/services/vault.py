"""
Vault Writer - The narrow capability the /save command needs.

/save resolves each matched tab against the live collection and writes
what it finds to the vault. Storage (compression, quota, sync) lives
elsewhere; anything with these two methods can be plugged in.
"""

import time
from typing import Any, Optional, Protocol

from loguru import logger

from tabquery.search.types import Group, Tab, VaultItem
from tabquery.utils.helpers import find_item_in_list


class VaultWriter(Protocol):
    def find_live_item(self, item_id) -> Optional[Any]:
        """Return the live tab or group with this id, or None."""
        ...

    async def save_to_vault(self, item: Any) -> None:
        ...


class InMemoryVault:
    """
    Vault writer backed by plain lists.

    Args:
        live_items: Live collection (tabs and groups with nested tabs)
        items: Existing vault contents
    """

    def __init__(self, live_items: Optional[list] = None, items: Optional[list[VaultItem]] = None):
        self.live_items = live_items if live_items is not None else []
        self.items = items if items is not None else []

    def find_live_item(self, item_id) -> Optional[Any]:
        return find_item_in_list(self.live_items, item_id)

    async def save_to_vault(self, item: Any) -> None:
        saved_at = int(time.time() * 1000)
        if isinstance(item, Tab):
            entry = VaultItem(
                id=f"vault-{item.id}-{saved_at}",
                title=item.title,
                url=item.url,
                original_id=item.id,
                saved_at=saved_at,
            )
        elif isinstance(item, Group):
            entry = VaultItem(
                id=f"vault-{item.id}-{saved_at}",
                title=item.title,
                original_id=item.id,
                saved_at=saved_at,
            )
        else:
            raise TypeError(f"Cannot save {type(item).__name__} to vault")

        self.items.append(entry)
        logger.debug(f"Saved {item.id} to vault")
