"""
Tests for settings loading and deep merge logic.

Uses real TOML files on disk (no mocking).
"""

import toml

from tabquery.utils.helpers import _deep_merge, default_settings, load_settings, settings_path


class TestDeepMerge:
    """Test the _deep_merge function directly."""

    def test_override_replaces_flat_key(self):
        result = _deep_merge({"a": 1, "b": 2}, {"b": 99})
        assert result == {"a": 1, "b": 99}

    def test_override_adds_new_key(self):
        result = _deep_merge({"a": 1}, {"b": 2})
        assert result == {"a": 1, "b": 2}

    def test_nested_dicts_are_merged(self):
        base = {"section": {"a": 1, "b": 2}}
        override = {"section": {"b": 99, "c": 3}}
        assert _deep_merge(base, override) == {"section": {"a": 1, "b": 99, "c": 3}}

    def test_base_is_not_mutated(self):
        base = {"a": {"x": 1}}
        _deep_merge(base, {"a": {"x": 2}})
        assert base["a"]["x"] == 1

    def test_scalar_replaces_section(self):
        assert _deep_merge({"a": {"x": 1}}, {"a": 5}) == {"a": 5}


class TestLoadSettings:
    """Test load_settings with real TOML files."""

    def test_returns_defaults_when_file_missing(self, tmp_path):
        settings = load_settings(tmp_path / "nonexistent.toml")
        assert settings == default_settings()
        assert settings["search"]["default_scope"] == "current"
        assert settings["suggestions"]["limit"] == 6

    def test_loaded_values_override_defaults(self, tmp_settings):
        settings = load_settings(tmp_settings)

        assert settings["search"]["default_scope"] == "all"
        assert settings["search"]["local_patterns"] == ["mydevserver"]
        assert settings["search"]["duplicate_mode"] == "strict"
        assert settings["browser"]["extension_id"] == "abcdefghijklmnop"
        assert settings["suggestions"]["limit"] == 3

    def test_partial_file_keeps_other_defaults(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text(toml.dumps({"search": {"default_scope": "all"}}))

        settings = load_settings(path)

        assert settings["search"]["default_scope"] == "all"
        assert settings["search"]["duplicate_mode"] == "loose"
        assert settings["suggestions"]["limit"] == 6

    def test_malformed_toml_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text("[search\ndefault_scope = ")

        assert load_settings(path) == default_settings()

    def test_env_override(self, tmp_settings, monkeypatch):
        monkeypatch.setenv("TABQUERY_SETTINGS", str(tmp_settings))

        assert settings_path() == tmp_settings
        assert load_settings()["search"]["default_scope"] == "all"

    def test_default_path(self, monkeypatch):
        monkeypatch.delenv("TABQUERY_SETTINGS", raising=False)
        assert settings_path().parts[-3:] == (".config", "tabquery", "settings.toml")
