"""
Tests for Config - layered settings

These tests validate:
- Defaults and section validation
- Config hierarchy (env > project > user > defaults)
- set/get round trip through the project YAML file
- Malformed files contribute nothing

All tests use tmp_path. The real home directory is never touched.
"""

import pytest
import yaml

from docmodel.config import (
    Config, MarkdownConfig, SerializationConfig, LoggingConfig, ConfigManager, get_config,
)


@pytest.fixture
def manager(tmp_path, monkeypatch):
    """ConfigManager isolated from the real user config and environment."""
    monkeypatch.delenv("DOCMODEL_LOG_LEVEL", raising=False)
    monkeypatch.delenv("DOCMODEL_USE_HTML", raising=False)
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_FILE", tmp_path / "home" / "config.yaml")
    return ConfigManager(tmp_path / "project")


def write_yaml(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.dump(data))


class TestSections:
    """Defaults and validation."""

    def test_defaults(self):
        config = Config()
        assert config.markdown.use_html is False
        assert config.serialization.pretty is False
        assert config.logging.level == "info"
        assert config.validate() is None

    def test_unknown_log_level(self):
        error = LoggingConfig(level="loud").validate()
        assert "loud" in error

    def test_non_bool_flag(self):
        assert MarkdownConfig(use_html="yes").validate() is not None
        assert SerializationConfig(sort_keys=1).validate() is not None

    def test_round_trip_dict(self):
        config = Config(logging=LoggingConfig(level="warn", treat_warnings_as_errors=True))
        assert Config.from_dict(config.to_dict()) == config

    def test_from_dict_parses_strings(self):
        config = Config.from_dict({"markdown": {"use_html": "yes"}, "logging": {"level": "WARN"}})
        assert config.markdown.use_html is True
        assert config.logging.level == "warn"


class TestHierarchy:
    """Layer priority."""

    def test_defaults_without_files(self, manager):
        assert manager.load() == Config()

    def test_project_overrides_user(self, manager):
        write_yaml(manager.user_config_path, {"logging": {"level": "error"}, "markdown": {"use_html": True}})
        write_yaml(manager.project_config_path, {"logging": {"level": "verbose"}})

        config = manager.load()

        assert config.logging.level == "verbose"
        assert config.markdown.use_html is True

    def test_environment_overrides_files(self, manager, monkeypatch):
        write_yaml(manager.project_config_path, {"logging": {"level": "verbose"}})
        monkeypatch.setenv("DOCMODEL_LOG_LEVEL", "error")
        monkeypatch.setenv("DOCMODEL_USE_HTML", "1")

        config = manager.load()

        assert config.logging.level == "error"
        assert config.markdown.use_html is True

    def test_malformed_yaml_is_ignored(self, manager):
        manager.project_config_path.parent.mkdir(parents=True)
        manager.project_config_path.write_text("logging: [unclosed")

        assert manager.load() == Config()

    def test_non_mapping_yaml_is_ignored(self, manager):
        manager.project_config_path.parent.mkdir(parents=True)
        manager.project_config_path.write_text("- just\n- a list\n")

        assert manager.load() == Config()

    def test_get_config(self, manager):
        write_yaml(manager.project_config_path, {"serialization": {"pretty": True}})
        assert get_config(manager.project_dir).serialization.pretty is True


class TestSetGet:
    """ConfigManager.set / get"""

    def test_set_writes_project_file(self, manager):
        assert manager.set("logging.level", "WARN") is None

        saved = yaml.safe_load(manager.project_config_path.read_text())
        assert saved["logging"]["level"] == "warn"
        assert manager.get("logging.level") == "warn"

    def test_set_user_scope(self, manager):
        assert manager.set("markdown.use_html", "true", scope="user") is None
        assert manager.user_config_path.exists()
        assert not manager.project_config_path.exists()

    def test_bool_values_are_lowercase(self, manager):
        manager.set("serialization.sort_keys", "yes")
        assert manager.get("serialization.sort_keys") == "true"

    def test_invalid_value_is_reverted(self, manager):
        error = manager.set("logging.level", "loud")

        assert "loud" in error
        assert manager.get("logging.level") == "info"
        assert not manager.project_config_path.exists()

    @pytest.mark.parametrize("key", ["logging", "theme.color", "logging.colour"])
    def test_invalid_keys(self, manager, key):
        assert manager.set(key, "x") is not None
        assert manager.get(key) is None

    def test_display(self, manager):
        text = manager.display()
        assert "Level: info" in text
        assert str(manager.project_config_path) in text
