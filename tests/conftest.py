"""
Shared test fixtures for the tabquery test suite.

Provides tab/context/group builders, a browser API double built on AsyncMock,
and a real settings TOML file (no mocking of the filesystem).
"""

from unittest.mock import AsyncMock

import pytest
import toml

from tabquery.search.types import Group, SearchContext, Tab


def make_tab(**overrides) -> Tab:
    """Create a live tab with sensible defaults."""
    fields = {
        "id": "live-tab-1",
        "title": "Test Tab",
        "url": "https://example.com",
        "window_id": 1,
        "index": 0,
        "group_id": -1,
    }
    fields.update(overrides)
    return Tab(**fields)


def make_context(**overrides) -> SearchContext:
    return SearchContext(**overrides)


def make_group(**overrides) -> Group:
    fields = {"id": "live-group-1", "title": "Test Group", "color": "blue"}
    fields.update(overrides)
    return Group(**fields)


@pytest.fixture
def browser_api():
    """Browser API double: empty snapshots, every action succeeds."""
    api = AsyncMock()
    api.query_tabs.return_value = []
    api.query_groups.return_value = []
    api.remove_tabs.return_value = None
    api.discard_tab.return_value = {}
    api.group_tabs.return_value = 99
    api.ungroup_tabs.return_value = None
    return api


@pytest.fixture
def tmp_settings(tmp_path):
    """Create a real settings TOML file with all sections."""
    settings_path = tmp_path / "settings.toml"
    data = {
        "search": {
            "default_scope": "all",
            "local_patterns": ["mydevserver"],
            "duplicate_mode": "strict",
        },
        "browser": {"extension_id": "abcdefghijklmnop"},
        "suggestions": {"limit": 3},
    }
    settings_path.write_text(toml.dumps(data))
    return settings_path
