"""
Tab Service - Snapshot and bulk-action access to the browser.

The engine never talks to a browser directly. It goes through TabService,
which wraps any object implementing the BrowserAPI protocol (an extension
bridge, a CDP client, or a test double) and maps its raw tab/group
records into Tab and Group objects.

Raw tab record (as returned by query_tabs):
    {"id": 12, "title": "Docs", "url": "https://...", "favIconUrl": "...",
     "active": False, "discarded": False, "windowId": 1, "index": 3,
     "groupId": -1, "mutedInfo": {"muted": False}, "pinned": False,
     "audible": False}
"""

from typing import Any, Optional, Protocol

from loguru import logger

from tabquery.search.types import Group, Scope, Tab


class BrowserAPI(Protocol):
    """Async browser capabilities consumed by tabquery."""

    async def query_tabs(self, current_window: bool) -> list[dict[str, Any]]:
        ...

    async def query_groups(self, current_window: bool) -> list[dict[str, Any]]:
        ...

    async def remove_tabs(self, tab_ids: list[int]) -> None:
        ...

    async def discard_tab(self, tab_id: int) -> Any:
        ...

    async def group_tabs(self, tab_ids: list[int]) -> int:
        ...

    async def ungroup_tabs(self, tab_ids: list[int]) -> None:
        ...


class TabService:
    """
    Service for reading tab/group snapshots and applying bulk actions.

    Methods:
        get_all_tabs(scope): Tabs visible in the scope, extension pages excluded
        get_groups(scope): Tab groups keyed by browser group id
        remove_tabs / discard_tab / group_tabs / ungroup_tabs: bulk actions
    """

    def __init__(self, api: BrowserAPI, extension_id: Optional[str] = None):
        self.api = api
        self.extension_id = extension_id or None

    @property
    def extension_prefix(self) -> Optional[str]:
        if not self.extension_id:
            return None
        return f"chrome-extension://{self.extension_id}/"

    async def get_all_tabs(self, scope: Scope = "current") -> list[Tab]:
        """
        Fetch a fresh tab snapshot.

        Args:
            scope: "current" for the focused window, "all" for every window

        Returns:
            Tabs with `live-tab-<id>` ids. Records without an id and the
            extension's own pages are dropped.
        """
        records = await self.api.query_tabs(current_window=scope != "all")
        prefix = self.extension_prefix

        tabs = []
        for record in records:
            if record.get("id") is None:
                continue
            url = record.get("url") or ""
            if prefix and url.startswith(prefix):
                continue
            tabs.append(self._to_tab(record))

        logger.debug(f"Fetched {len(tabs)} tabs (scope={scope})")
        return tabs

    async def get_groups(self, scope: Scope = "current") -> dict[int, Group]:
        """Fetch tab groups, mapped to empty Group stubs keyed by group id."""
        records = await self.api.query_groups(current_window=scope != "all")
        return {
            record["id"]: Group(
                id=f"live-group-{record['id']}",
                title=record.get("title") or "",
                color=record.get("color") or "grey",
                collapsed=bool(record.get("collapsed", False)),
            )
            for record in records
            if record.get("id") is not None
        }

    def _to_tab(self, record: dict[str, Any]) -> Tab:
        muted_info = record.get("mutedInfo") or {}
        return Tab(
            id=f"live-tab-{record['id']}",
            title=record.get("title") or "Untitled",
            url=record.get("url") or "",
            favicon=record.get("favIconUrl") or "",
            active=bool(record.get("active", False)),
            discarded=bool(record.get("discarded", False)),
            window_id=record.get("windowId", -1),
            index=record.get("index", 0),
            group_id=record.get("groupId", -1),
            muted=bool(muted_info.get("muted", False)),
            pinned=bool(record.get("pinned", False)),
            audible=bool(record.get("audible", False)),
        )

    async def remove_tabs(self, tab_ids: list[int]) -> None:
        try:
            await self.api.remove_tabs(tab_ids)
        except Exception:
            logger.exception(f"Failed to remove tabs {tab_ids}")
            raise

    async def discard_tab(self, tab_id: int) -> Any:
        try:
            return await self.api.discard_tab(tab_id)
        except Exception as e:
            logger.warning(f"Failed to discard tab {tab_id}: {e}")
            raise

    async def group_tabs(self, tab_ids: list[int]) -> int:
        try:
            return await self.api.group_tabs(tab_ids)
        except Exception:
            logger.exception(f"Failed to group tabs {tab_ids}")
            raise

    async def ungroup_tabs(self, tab_ids: list[int]) -> None:
        try:
            await self.api.ungroup_tabs(tab_ids)
        except Exception:
            logger.exception(f"Failed to ungroup tabs {tab_ids}")
            raise
