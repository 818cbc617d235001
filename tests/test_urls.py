"""
Tests for URL normalization, duplicate detection and URL classifiers.
"""

import pytest
from conftest import make_tab

from tabquery.utils.urls import (
    build_duplicate_map,
    find_duplicates,
    get_group_id,
    is_browser_url,
    is_ip_address,
    is_local_url,
    matches_text,
    normalize_url,
    url_is_ip,
)


class TestNormalizeUrl:
    def test_loose_drops_query_and_fragment(self):
        assert normalize_url("https://Example.com/Path/?q=1#top") == "https://example.com/path"

    def test_strict_keeps_query_and_fragment(self):
        normalized = normalize_url("https://Example.com/path/?q=1#top", "strict")
        assert normalized == "https://example.com/path?q=1#top"

    def test_trailing_slashes_removed(self):
        assert normalize_url("https://example.com///") == "https://example.com"

    def test_userinfo_dropped(self):
        assert normalize_url("https://user:pw@example.com/a") == "https://example.com/a"

    def test_unparsable_falls_back_to_string_cleanup(self):
        assert normalize_url("Not A URL/?x=1") == "not a url"
        assert normalize_url("Not A URL/?x=1", "strict") == "not a url/?x=1"


class TestDuplicateMap:
    def test_three_tabs_share_one_entry(self):
        tabs = [
            make_tab(id="live-tab-1", url="https://example.com/page"),
            make_tab(id="live-tab-2", url="https://example.com/page?x=1"),
            make_tab(id="live-tab-3", url="https://EXAMPLE.com/page/#frag"),
        ]
        duplicates = build_duplicate_map(tabs)
        assert list(duplicates) == ["https://example.com/page"]
        assert [t.id for t in duplicates["https://example.com/page"]] == [
            "live-tab-1", "live-tab-2", "live-tab-3",
        ]

    def test_slash_and_case_variants_collapse(self):
        tabs = [
            make_tab(id="live-tab-1", url="https://example.com/page"),
            make_tab(id="live-tab-2", url="https://example.com/page/"),
            make_tab(id="live-tab-3", url="https://Example.com/Page"),
        ]
        duplicates = build_duplicate_map(tabs)
        assert len(duplicates) == 1
        assert len(duplicates["https://example.com/page"]) == 3

    def test_strict_mode_separates_queries(self):
        tabs = [
            make_tab(id="live-tab-1", url="https://example.com/page"),
            make_tab(id="live-tab-2", url="https://example.com/page?x=1"),
        ]
        assert len(build_duplicate_map(tabs, "strict")) == 2

    def test_tabs_without_url_skipped(self):
        duplicate_map = build_duplicate_map([make_tab(url=""), make_tab(url="")])
        assert duplicate_map == {}

    def test_find_duplicates(self):
        first = make_tab(id="live-tab-1", url="https://a.com/")
        second = make_tab(id="live-tab-2", url="https://a.com")
        lonely = make_tab(id="live-tab-3", url="https://b.com")
        duplicate_map = build_duplicate_map([first, second, lonely])
        assert find_duplicates(first, duplicate_map) is True
        assert find_duplicates(lonely, duplicate_map) is False
        assert find_duplicates(make_tab(url=""), duplicate_map) is False


class TestIsLocalUrl:
    @pytest.mark.parametrize("url", [
        "http://localhost:3000",
        "http://LOCALHOST/app",
        "http://printer.local/status",
        "http://127.0.0.1:8080",
        "http://0.0.0.0:5000",
        "http://10.0.0.5",
        "http://172.16.4.1",
        "http://192.168.1.1",
        "http://169.254.1.1",
        "http://[::1]:8000/",
        "file:///home/user/notes.txt",
    ])
    def test_local(self, url):
        assert is_local_url(url) is True

    @pytest.mark.parametrize("url", [
        "https://example.com",
        "http://172.32.0.1",
        "https://8.8.8.8",
        "not a url",
        "",
    ])
    def test_not_local(self, url):
        assert is_local_url(url) is False

    def test_additional_regex_pattern(self):
        assert is_local_url("https://dev.corp.example.com", [r"\.corp\."]) is True

    def test_additional_pattern_matches_full_url(self):
        assert is_local_url("https://example.com/staging/app", ["staging"]) is True

    def test_invalid_regex_falls_back_to_substring(self):
        assert is_local_url("https://my(devbox.example.com", ["my(dev"]) is True
        assert is_local_url("https://example.com", ["[bad"]) is False


class TestIpAndBrowser:
    @pytest.mark.parametrize("hostname,expected", [
        ("192.168.1.1", True),
        ("8.8.8.8", True),
        ("::1", True),
        ("[2001:db8::1]", True),
        ("example.com", False),
        ("999.1.1.1", False),
        ("", False),
    ])
    def test_is_ip_address(self, hostname, expected):
        assert is_ip_address(hostname) is expected

    def test_url_is_ip(self):
        assert url_is_ip("http://8.8.8.8/dns") is True
        assert url_is_ip("http://[2001:db8::1]:8080/") is True
        assert url_is_ip("https://example.com") is False
        assert url_is_ip("garbage") is False

    @pytest.mark.parametrize("url,expected", [
        ("chrome://settings", True),
        ("chrome-extension://abc/popup.html", True),
        ("about:blank", True),
        ("edge://flags", True),
        ("moz-extension://uuid/page.html", True),
        ("https://chrome.google.com", False),
    ])
    def test_is_browser_url(self, url, expected):
        assert is_browser_url(url) is expected


class TestMatchesText:
    def test_matches_title_or_url(self):
        tab = make_tab(title="YouTube - Music", url="https://youtube.com/watch")
        assert matches_text(tab, "music") is True
        assert matches_text(tab, "watch") is True
        assert matches_text(tab, "spotify") is False

    def test_scoped(self):
        tab = make_tab(title="Docs", url="https://github.com/docs")
        assert matches_text(tab, "github", "title") is False
        assert matches_text(tab, "github", "url") is True

    def test_missing_title_never_matches(self):
        tab = make_tab(title=None, url="https://a.com")
        assert matches_text(tab, "a", "title") is False


class TestGetGroupId:
    def test_ungrouped(self):
        assert get_group_id(make_tab(group_id=-1)) is None
        assert get_group_id(make_tab(group_id=None)) is None

    def test_grouped(self):
        assert get_group_id(make_tab(group_id=7)) == 7
