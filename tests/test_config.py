"""
Tests for traceviz.config module.
"""

import pytest

from traceviz.config.defaults import DEFAULT_CONFIG
from traceviz.config.loader import (
    find_config_file,
    get_config,
    load_config,
    merge_configs,
    parse_toml_document,
)
from traceviz.config.settings import DiagramConfig
from traceviz.errors import ConfigError


class TestConfigLoader:
    """Tests for configuration loading."""

    def test_load_config_with_defaults(self, tmp_path):
        """Test loading minimal config merges with defaults."""
        config_file = tmp_path / ".traceviz.toml"
        config_file.write_text('[layers]\norder = ["Req", "Impl"]\n')

        config = load_config(config_file)

        assert config["layers"]["order"] == ["Req", "Impl"]
        assert config["layout"]["bars"]["bar_spacing"] == 15
        assert "colors" in config

    def test_nested_override(self, tmp_path):
        config_file = tmp_path / ".traceviz.toml"
        config_file.write_text("[layout.flow]\nwidth = 800\nreorder = false\n")

        config = load_config(config_file)

        assert config["layout"]["flow"]["width"] == 800
        assert config["layout"]["flow"]["reorder"] is False
        assert config["layout"]["flow"]["node_height"] == 24

    def test_invalid_toml(self, tmp_path):
        config_file = tmp_path / ".traceviz.toml"
        config_file.write_text("[layers\norder = ")

        with pytest.raises(ConfigError):
            load_config(config_file)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_path / "absent.toml")

    def test_parse_returns_plain_containers(self):
        data = parse_toml_document('[colors]\nscheme = ["#000"]\n')
        assert type(data) is dict
        assert type(data["colors"]["scheme"]) is list


class TestFindConfigFile:
    """Tests for config file discovery."""

    def test_find_config_file(self, tmp_path):
        (tmp_path / ".traceviz.toml").write_text("")
        assert find_config_file(tmp_path) == (tmp_path / ".traceviz.toml").resolve()

    def test_find_config_in_parent(self, tmp_path):
        """Test finding config file in parent directory."""
        (tmp_path / ".traceviz.toml").write_text("")
        sub = tmp_path / "data" / "nested"
        sub.mkdir(parents=True)

        config_path = find_config_file(sub)
        assert config_path is not None
        assert config_path.parent == tmp_path.resolve()

    def test_stops_at_repository_root(self, tmp_path):
        (tmp_path / ".traceviz.toml").write_text("")
        repo = tmp_path / "repo"
        (repo / ".git").mkdir(parents=True)

        assert find_config_file(repo) is None

    def test_get_config_defaults(self, tmp_path):
        (tmp_path / ".git").mkdir()
        config = get_config(start_path=tmp_path)
        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG


class TestConfigMerge:
    """Tests for configuration merging."""

    def test_merge_configs_override(self):
        """Test that user config overrides defaults."""
        defaults = {"layers": {"order": ["A"]}, "summary": {"skip_files": ["x"]}}
        user = {"layers": {"order": ["B", "C"]}}

        merged = merge_configs(defaults, user)

        assert merged["layers"]["order"] == ["B", "C"]
        assert merged["summary"]["skip_files"] == ["x"]

    def test_merge_does_not_mutate(self):
        defaults = {"a": {"b": [1]}}
        merged = merge_configs(defaults, {"a": {"c": 2}})
        merged["a"]["b"].append(2)
        assert defaults == {"a": {"b": [1]}}


class TestDiagramConfig:
    """Tests for DiagramConfig.from_dict()."""

    def test_defaults(self):
        config = DiagramConfig.from_dict(DEFAULT_CONFIG)
        assert config.layer_order == []
        assert config.bars.min_bar_height == 30
        assert config.flow.width == 1200
        assert config.colors.unknown == "#7f8c8d"
        assert config.skip_files == ["config.md"]

    def test_unknown_keys_ignored(self):
        config = DiagramConfig.from_dict({"layout": {"bars": {"bar_spacing": 5, "bogus": 1}}})
        assert config.bars.bar_spacing == 5

    def test_empty_scheme_falls_back(self):
        config = DiagramConfig.from_dict({"colors": {"scheme": []}})
        assert config.colors.scheme == DEFAULT_CONFIG["colors"]["scheme"]

    def test_empty_dict(self):
        config = DiagramConfig.from_dict({})
        assert config.layer_order == []
        assert config.skip_files == ["config.md"]
