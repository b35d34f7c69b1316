"""Tests for gopherdeps.core.config: project configuration management."""

import json

import pytest

from gopherdeps.core.config import (
    CONFIG_SCHEMA,
    add_exclude_pattern,
    config_path,
    default_config,
    load_config,
    save_config,
    set_config_value,
    unset_config_value,
)
from gopherdeps.core.runtime_state import make_runtime_context, runtime_scope


# ===========================================================================
# default_config
# ===========================================================================

class TestDefaultConfig:
    def test_returns_all_keys(self):
        cfg = default_config()
        for key in CONFIG_SCHEMA:
            assert key in cfg

    def test_default_values(self):
        cfg = default_config()
        assert cfg["build_tags"] == []
        assert cfg["goos"] == "linux"
        assert cfg["goarch"] == "amd64"
        assert cfg["go_version"] == "1.22"
        assert cfg["cgo_enabled"] is True
        assert cfg["include_tests"] is False
        assert cfg["exclude"] == []
        assert cfg["module_path"] == ""
        assert cfg["dependencies"] == {}
        assert cfg["scan_workers"] == 8

    def test_defaults_are_independent_copies(self):
        first = default_config()
        first["build_tags"].append("x")
        assert default_config()["build_tags"] == []


# ===========================================================================
# load_config / save_config round-trip
# ===========================================================================

class TestLoadSaveConfig:
    def test_no_file_returns_defaults(self, tmp_path):
        cfg = load_config(tmp_path / "config.json")
        assert cfg == default_config()
        assert not (tmp_path / "config.json").exists()

    def test_round_trip(self, tmp_path):
        p = tmp_path / "config.json"
        cfg = default_config()
        cfg["goos"] = "darwin"
        cfg["build_tags"] = ["appengine"]
        save_config(cfg, p)
        loaded = load_config(p)
        assert loaded["goos"] == "darwin"
        assert loaded["build_tags"] == ["appengine"]

    def test_fills_missing_keys_and_persists(self, tmp_path):
        p = tmp_path / "config.json"
        p.write_text(json.dumps({"goarch": "arm64"}))
        cfg = load_config(p)
        assert cfg["goarch"] == "arm64"
        assert cfg["goos"] == "linux"
        on_disk = json.loads(p.read_text())
        assert set(CONFIG_SCHEMA) <= set(on_disk)

    def test_mistyped_value_reset_to_default(self, tmp_path):
        p = tmp_path / "config.json"
        p.write_text(json.dumps({"scan_workers": "many", "cgo_enabled": "yes"}))
        cfg = load_config(p)
        assert cfg["scan_workers"] == 8
        assert cfg["cgo_enabled"] is True

    def test_bool_is_not_accepted_as_int(self, tmp_path):
        p = tmp_path / "config.json"
        p.write_text(json.dumps({"scan_workers": True}))
        assert load_config(p)["scan_workers"] == 8

    def test_unknown_keys_survive(self, tmp_path):
        p = tmp_path / "config.json"
        p.write_text(json.dumps({"future_key": 1}))
        assert load_config(p)["future_key"] == 1

    def test_corrupted_file_returns_defaults(self, tmp_path):
        p = tmp_path / "config.json"
        p.write_text("not valid json{{{")
        cfg = load_config(p)
        assert cfg == default_config()

    def test_non_object_root_returns_defaults(self, tmp_path):
        p = tmp_path / "config.json"
        p.write_text("[1, 2]")
        assert load_config(p) == default_config()

    def test_config_path_uses_project_root(self, tmp_path):
        with runtime_scope(make_runtime_context(project_root=tmp_path)):
            assert config_path() == tmp_path / ".gopherdeps" / "config.json"
            save_config(default_config())
        assert (tmp_path / ".gopherdeps" / "config.json").exists()


# ===========================================================================
# set_config_value
# ===========================================================================

class TestSetConfigValue:
    def test_set_int(self):
        cfg = default_config()
        set_config_value(cfg, "scan_workers", "4")
        assert cfg["scan_workers"] == 4

    def test_int_out_of_range_raises(self):
        cfg = default_config()
        with pytest.raises(ValueError):
            set_config_value(cfg, "scan_workers", "0")
        with pytest.raises(ValueError):
            set_config_value(cfg, "scan_workers", "1000")

    def test_set_bool_true(self):
        cfg = default_config()
        set_config_value(cfg, "include_tests", "true")
        assert cfg["include_tests"] is True

    def test_set_bool_off(self):
        cfg = default_config()
        set_config_value(cfg, "cgo_enabled", "off")
        assert cfg["cgo_enabled"] is False

    def test_invalid_bool_raises(self):
        cfg = default_config()
        with pytest.raises(ValueError):
            set_config_value(cfg, "cgo_enabled", "maybe")

    def test_set_string(self):
        cfg = default_config()
        set_config_value(cfg, "goos", " windows ")
        assert cfg["goos"] == "windows"

    def test_go_version_is_validated(self):
        cfg = default_config()
        set_config_value(cfg, "go_version", "go1.21.3")
        assert cfg["go_version"] == "go1.21.3"
        with pytest.raises(ValueError):
            set_config_value(cfg, "go_version", "latest")

    def test_empty_goos_raises(self):
        with pytest.raises(ValueError):
            set_config_value(default_config(), "goos", "  ")

    def test_build_tags_split_and_deduplicated(self):
        cfg = default_config()
        set_config_value(cfg, "build_tags", "a,b c")
        set_config_value(cfg, "build_tags", "b")
        assert cfg["build_tags"] == ["a", "b", "c"]

    def test_set_list_appends(self):
        cfg = default_config()
        set_config_value(cfg, "exclude", "gen")
        set_config_value(cfg, "exclude", "third_party")
        assert cfg["exclude"] == ["gen", "third_party"]

    def test_unknown_key_raises(self):
        with pytest.raises(KeyError):
            set_config_value(default_config(), "nope", "1")

    def test_dict_key_raises(self):
        with pytest.raises(ValueError):
            set_config_value(default_config(), "dependencies", "{}")


# ===========================================================================
# unset_config_value / add_exclude_pattern
# ===========================================================================

class TestUnsetConfigValue:
    def test_resets_to_default(self):
        cfg = default_config()
        cfg["goarch"] = "arm"
        unset_config_value(cfg, "goarch")
        assert cfg["goarch"] == "amd64"

    def test_unknown_key_raises(self):
        with pytest.raises(KeyError):
            unset_config_value(default_config(), "nope")


class TestAddExcludePattern:
    def test_adds_pattern(self):
        cfg = default_config()
        add_exclude_pattern(cfg, "gen")
        assert cfg["exclude"] == ["gen"]

    def test_deduplicates(self):
        cfg = default_config()
        add_exclude_pattern(cfg, "gen")
        add_exclude_pattern(cfg, "gen")
        assert cfg["exclude"] == ["gen"]
