"""
Tests for bang filter evaluation and free-text matching.
"""

import pytest
from conftest import make_context, make_group, make_tab

from tabquery.search.engine import build_search_context
from tabquery.search.filters import apply_all_filters, apply_filter, apply_text_search
from tabquery.search.types import BangFilter, VaultItem
from tabquery.utils.urls import build_duplicate_map


class TestBooleanFilters:
    @pytest.mark.parametrize("bang,field", [
        ("frozen", "discarded"),
        ("audio", "audible"),
        ("pin", "pinned"),
    ])
    def test_flag_filters(self, bang, field):
        context = make_context()
        assert apply_filter(make_tab(**{field: True}), bang, context) is True
        assert apply_filter(make_tab(**{field: False}), bang, context) is False

    def test_negation_inverts(self):
        context = make_context()
        frozen = make_tab(discarded=True)
        assert apply_filter(frozen, "frozen", context, negated=True) is False
        assert apply_filter(make_tab(), "frozen", context, negated=True) is True

    def test_grouped_and_solo(self):
        context = make_context()
        grouped = make_tab(group_id=4)
        solo = make_tab(group_id=-1)
        assert apply_filter(grouped, "grouped", context) is True
        assert apply_filter(solo, "grouped", context) is False
        assert apply_filter(solo, "solo", context) is True
        assert apply_filter(grouped, "solo", context) is False

    def test_duplicate(self):
        first = make_tab(id="live-tab-1", url="https://a.com/x?1")
        second = make_tab(id="live-tab-2", url="https://a.com/x?2")
        other = make_tab(id="live-tab-3", url="https://b.com")
        context = make_context(duplicate_map=build_duplicate_map([first, second, other]))
        assert apply_filter(first, "duplicate", context) is True
        assert apply_filter(other, "duplicate", context) is False

    def test_duplicate_in_strict_mode(self):
        tabs = [
            make_tab(id="live-tab-1", url="https://a.com/watch?v=1"),
            make_tab(id="live-tab-2", url="https://a.com/watch?v=1"),
            make_tab(id="live-tab-3", url="https://a.com/watch?v=2"),
        ]
        context = build_search_context(tabs, duplicate_mode="strict")
        assert [apply_filter(t, "duplicate", context) for t in tabs] == [True, True, False]

    def test_local_uses_context_patterns(self):
        tab = make_tab(url="https://mydevserver.example.com")
        assert apply_filter(tab, "local", make_context()) is False
        assert apply_filter(tab, "local", make_context(local_patterns=["mydevserver"])) is True

    def test_ip(self):
        context = make_context()
        assert apply_filter(make_tab(url="http://10.1.2.3"), "ip", context) is True
        assert apply_filter(make_tab(url="https://example.com"), "ip", context) is False

    def test_browser(self):
        context = make_context()
        assert apply_filter(make_tab(url="about:blank"), "browser", context) is True
        assert apply_filter(make_tab(url="https://example.com"), "browser", context) is False

    def test_url_filters_reject_empty_url(self):
        tab = make_tab(url="")
        context = make_context()
        for bang in ("local", "ip", "browser"):
            assert apply_filter(tab, bang, context) is False

    def test_unknown_filter_passes(self):
        assert apply_filter(make_tab(), "sparkly", make_context()) is True


class TestVaultFilter:
    def test_matches_original_id(self):
        context = make_context(vault_items=[VaultItem(id="vault-1", original_id="live-tab-1")])
        assert apply_filter(make_tab(id="live-tab-1"), "vault", context) is True
        assert apply_filter(make_tab(id="live-tab-2", url="https://x.com"), "vault", context) is False

    def test_matches_url(self):
        context = make_context(vault_items=[VaultItem(id="vault-1", url="https://example.com")])
        assert apply_filter(make_tab(id="live-tab-9"), "vault", context) is True

    def test_empty_vault(self):
        assert apply_filter(make_tab(), "vault", make_context()) is False


class TestGroupFilters:
    def setup_method(self):
        self.context = make_context(groups={
            1: make_group(id="live-group-1", title="Work Projects", color="blue"),
            2: make_group(id="live-group-2", title="Fun", color="red"),
        })

    def test_groupname_substring(self):
        tab = make_tab(group_id=1)
        assert apply_filter(tab, "groupname", self.context, "work") is True
        assert apply_filter(tab, "groupname", self.context, "PROJ") is True
        assert apply_filter(tab, "groupname", self.context, "fun") is False

    def test_groupcolor_exact(self):
        tab = make_tab(group_id=2)
        assert apply_filter(tab, "groupcolor", self.context, "RED") is True
        assert apply_filter(tab, "groupcolor", self.context, "re") is False

    def test_ungrouped_tab_never_matches(self):
        tab = make_tab(group_id=-1)
        assert apply_filter(tab, "groupname", self.context, "work") is False
        assert apply_filter(tab, "groupcolor", self.context, "blue") is False

    def test_unknown_group_never_matches(self):
        tab = make_tab(group_id=42)
        assert apply_filter(tab, "groupname", self.context, "work") is False

    def test_missing_value_passes(self):
        tab = make_tab(group_id=-1)
        assert apply_filter(tab, "groupname", self.context) is True
        assert apply_filter(tab, "groupcolor", self.context) is True

    def test_negated_groupcolor(self):
        tab = make_tab(group_id=1)
        assert apply_filter(tab, "groupcolor", self.context, "blue", negated=True) is False
        assert apply_filter(tab, "groupcolor", self.context, "red", negated=True) is True


class TestTextScopeFilters:
    def test_title_value(self):
        tab = make_tab(title="Python docs", url="https://docs.example.com")
        context = make_context()
        assert apply_filter(tab, "title", context, "python") is True
        assert apply_filter(tab, "title", context, "example") is False

    def test_url_value(self):
        tab = make_tab(title="Python docs", url="https://docs.example.com")
        assert apply_filter(tab, "url", make_context(), "example") is True

    def test_no_value_passes(self):
        assert apply_filter(make_tab(), "title", make_context()) is True


class TestApplyAllFilters:
    def test_all_must_pass(self):
        tab = make_tab(audible=True, pinned=False)
        context = make_context()
        bangs = [BangFilter(type="audio"), BangFilter(type="pin", negated=True)]
        assert apply_all_filters(tab, bangs, context) is True
        assert apply_all_filters(tab, [BangFilter(type="audio"), BangFilter(type="pin")], context) is False

    def test_no_bangs(self):
        assert apply_all_filters(make_tab(), [], make_context()) is True


class TestTextSearch:
    def test_terms_are_anded(self):
        tab = make_tab(title="YouTube Music", url="https://music.youtube.com")
        assert apply_text_search(tab, ["youtube", "music"]) is True
        assert apply_text_search(tab, ["youtube", "spotify"]) is False

    def test_no_terms_match_everything(self):
        assert apply_text_search(make_tab(), []) is True

    def test_title_scope(self):
        tab = make_tab(title="Notes", url="https://github.com")
        assert apply_text_search(tab, ["github"], title_scope=True) is False
        assert apply_text_search(tab, ["github"], url_scope=True) is True

    def test_title_scope_wins(self):
        tab = make_tab(title="Notes", url="https://github.com")
        assert apply_text_search(tab, ["github"], title_scope=True, url_scope=True) is False
