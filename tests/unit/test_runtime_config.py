"""
Runtime Configuration Tests
Tests for chunktree/config/runtime.py
"""
import pytest

from chunktree.config import (
    LoggingConfig,
    RuntimeConfig,
    TrailingBytesPolicy,
    TreeConfig,
    get_default_config,
    get_default_config_template,
    set_default_config,
)
from chunktree.schemas.errors import ConfigurationException


class TestTrailingBytesPolicy:

    @pytest.mark.parametrize("value", ["drop", "DROP", " drop ", TrailingBytesPolicy.DROP])
    def test_parse(self, value):
        assert TrailingBytesPolicy.parse(value) is TrailingBytesPolicy.DROP

    def test_parse_unknown(self):
        with pytest.raises(ConfigurationException, match="pad"):
            TrailingBytesPolicy.parse("pad")


class TestDefaults:

    def test_default_values(self):
        config = RuntimeConfig()

        assert config.tree.trailing_bytes is TrailingBytesPolicy.ERROR
        assert config.logging.level == "INFO"
        assert config.logging.file is None

    def test_tree_config_parses_string(self):
        assert TreeConfig(trailing_bytes="extend").trailing_bytes is TrailingBytesPolicy.EXTEND

    def test_logging_level_normalized(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_logging_level_rejected(self):
        with pytest.raises(ConfigurationException):
            LoggingConfig(level="LOUD")


class TestFromEnv:

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("CHUNKTREE_TRAILING_BYTES", "drop")
        monkeypatch.setenv("CHUNKTREE_LOG_LEVEL", "warning")
        monkeypatch.setenv("CHUNKTREE_LOG_FILE", "/tmp/chunktree.log")

        config = RuntimeConfig.from_env()

        assert config.tree.trailing_bytes is TrailingBytesPolicy.DROP
        assert config.logging.level == "WARNING"
        assert config.logging.file == "/tmp/chunktree.log"

    def test_invalid_env_value(self, monkeypatch):
        monkeypatch.setenv("CHUNKTREE_TRAILING_BYTES", "truncate")

        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_env()

    def test_with_env_overrides_keeps_file_values(self, monkeypatch):
        base = RuntimeConfig.from_dict({"tree": {"trailing_bytes": "extend"}, "logging": {"level": "DEBUG"}})
        monkeypatch.setenv("CHUNKTREE_LOG_LEVEL", "ERROR")

        merged = base.with_env_overrides()

        assert merged.tree.trailing_bytes is TrailingBytesPolicy.EXTEND
        assert merged.logging.level == "ERROR"
        assert base.logging.level == "DEBUG"

    def test_with_env_overrides_noop(self):
        config = RuntimeConfig()

        assert config.with_env_overrides() is config


class TestFromFile:

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "chunktree.yaml"
        path.write_text("tree:\n  trailing_bytes: drop\nlogging:\n  level: DEBUG\n")

        config = RuntimeConfig.from_yaml(path)

        assert config.tree.trailing_bytes is TrailingBytesPolicy.DROP
        assert config.logging.level == "DEBUG"

    def test_from_yaml_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert RuntimeConfig.from_yaml(path).to_dict() == RuntimeConfig().to_dict()

    def test_from_yaml_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "missing.yaml")

    def test_from_yaml_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")

        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_yaml(path)

    def test_unknown_key_rejected(self):
        with pytest.raises(ConfigurationException):
            RuntimeConfig.from_dict({"tree": {"hash": "md5"}})

    def test_template_parses(self, tmp_path):
        path = tmp_path / "template.yaml"
        path.write_text(get_default_config_template())

        assert RuntimeConfig.from_yaml(path).to_dict() == RuntimeConfig().to_dict()


class TestToDict:

    def test_to_dict(self):
        config = RuntimeConfig.from_dict({"tree": {"trailing_bytes": "extend"}})

        assert config.to_dict() == {
            "tree": {"trailing_bytes": "extend"},
            "logging": {"level": "INFO", "file": None},
            "extra": {},
        }


class TestDefaultConfig:

    def test_cached(self):
        assert get_default_config() is get_default_config()

    def test_set_and_reset(self, monkeypatch):
        custom = RuntimeConfig(tree=TreeConfig(trailing_bytes="drop"))
        set_default_config(custom)

        assert get_default_config() is custom

        set_default_config(None)
        monkeypatch.setenv("CHUNKTREE_TRAILING_BYTES", "extend")

        assert get_default_config().tree.trailing_bytes is TrailingBytesPolicy.EXTEND
