"""
Tests for configuration loading and resolution.
"""

import pytest

from sqlblob import config as config_proxy
from sqlblob.config.loader import Config, _merge_dict, load_config
from sqlblob.config.resolver import resolve_config
from sqlblob.config.singleton import GlobalConfig, get_config
from sqlblob.exceptions import ConfigurationError


class TestConfig:
    """Tests for Config class."""

    def test_basic_access(self):
        cfg = Config({"name": "test", "codec": {"max_capacity": 1024}})
        assert cfg.get("name") == "test"
        assert cfg.data["name"] == "test"

    def test_dot_notation(self):
        cfg = Config({"codec": {"max_capacity": 1024}})
        assert cfg.get("codec.max_capacity") == 1024
        assert cfg.max_capacity == 1024

    def test_dot_notation_missing_returns_default(self):
        cfg = Config({"a": 1})
        assert cfg.get("a.b.c", "fallback") == "fallback"
        assert cfg.max_capacity is None

    def test_sections(self):
        cfg = Config({"codec": {"max_capacity": 10}, "logging": {"level": "DEBUG"}})
        assert cfg.codec == {"max_capacity": 10}
        assert cfg.logging == {"level": "DEBUG"}
        assert Config({}).codec == {}

    def test_contains(self):
        cfg = Config({"a": {"b": 1}})
        assert "a" in cfg
        assert "a.b" in cfg
        assert "a.c" not in cfg
        assert "z" not in cfg

    def test_getitem(self):
        cfg = Config({"name": "test", "nested": {"key": "val"}})
        assert cfg["name"] == "test"
        nested = cfg["nested"]
        assert isinstance(nested, Config)
        assert nested["key"] == "val"

    def test_getitem_missing_raises(self):
        with pytest.raises(KeyError):
            _ = Config({"a": 1})["missing"]

    def test_iter_keys_values_items(self):
        data = {"a": 1, "b": 2}
        cfg = Config(data)
        assert set(cfg.keys()) == {"a", "b"}
        assert list(cfg) == list(data.keys())
        assert set(cfg.values()) == {1, 2}
        assert set(cfg.items()) == {("a", 1), ("b", 2)}

    def test_validate_valid(self):
        Config({"codec": {"max_capacity": 4096}, "logging": {"level": "INFO"}}).validate()

    @pytest.mark.parametrize("value", [0, -5, "big", 1.5, True])
    def test_validate_bad_max_capacity(self, value):
        with pytest.raises(ConfigurationError, match="max_capacity"):
            Config({"codec": {"max_capacity": value}}).validate()

    def test_validate_codec_not_dict(self):
        with pytest.raises(ConfigurationError, match="codec"):
            Config({"codec": [1, 2]}).validate()

    def test_validate_logging_not_dict(self):
        with pytest.raises(ConfigurationError, match="logging"):
            Config({"logging": "loud"}).validate()


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_basic(self, tmp_path):
        (tmp_path / "config.yaml").write_text("codec:\n  max_capacity: 2048\n")
        cfg = load_config(tmp_path)
        assert cfg.max_capacity == 2048

    def test_load_empty_file(self, tmp_path):
        (tmp_path / "config.yaml").write_text("")
        assert load_config(tmp_path).data == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path)

    def test_invalid_yaml(self, tmp_path):
        (tmp_path / "config.yaml").write_text("codec: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Error parsing"):
            load_config(tmp_path)

    def test_non_mapping_yaml(self, tmp_path):
        (tmp_path / "config.yaml").write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="dictionary"):
            load_config(tmp_path)

    def test_invalid_values_rejected(self, tmp_path):
        (tmp_path / "config.yaml").write_text("codec:\n  max_capacity: -1\n")
        with pytest.raises(ConfigurationError):
            load_config(tmp_path)

    def test_env_overlay(self, tmp_path):
        (tmp_path / "config.yaml").write_text("codec:\n  max_capacity: 100\nlogging:\n  level: INFO\n")
        (tmp_path / "config.prod.yaml").write_text("codec:\n  max_capacity: 5000\n")
        cfg = load_config(tmp_path, env="prod")
        assert cfg.max_capacity == 5000
        assert cfg.get("logging.level") == "INFO"

    def test_env_var_substitution(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SQLBLOB_TEST_LIMIT", "65536")
        (tmp_path / "config.yaml").write_text("codec:\n  max_capacity: ${SQLBLOB_TEST_LIMIT}\n")
        assert load_config(tmp_path).max_capacity == 65536


class TestResolver:
    def test_env_placeholder(self):
        resolved = resolve_config({"logging": {"file": "logs/{env}.log"}}, env="staging")
        assert resolved["logging"]["file"] == "logs/staging.log"

    def test_unset_variable_left_alone(self, monkeypatch):
        monkeypatch.delenv("SQLBLOB_UNSET_VAR", raising=False)
        resolved = resolve_config({"value": "${SQLBLOB_UNSET_VAR}"})
        assert resolved["value"] == "${SQLBLOB_UNSET_VAR}"

    def test_plain_strings_not_coerced(self):
        assert resolve_config({"value": "123"})["value"] == "123"


class TestMergeDict:
    def test_nested_merge(self):
        base = {"a": {"b": 1, "c": 2}, "d": 3}
        _merge_dict(base, {"a": {"b": 10}, "e": 4})
        assert base == {"a": {"b": 10, "c": 2}, "d": 3, "e": 4}


class TestGlobalConfig:
    def test_set_and_reset(self):
        cfg = Config({"codec": {"max_capacity": 10}})
        GlobalConfig.set_config(cfg)
        assert get_config() is cfg
        GlobalConfig.reset_config()
        assert get_config() is None

    def test_proxy(self):
        assert config_proxy.get("codec.max_capacity", 7) == 7
        assert "codec" not in config_proxy
        with pytest.raises(RuntimeError):
            _ = config_proxy["codec"]

        GlobalConfig.set_config(Config({"codec": {"max_capacity": 10}}))
        assert config_proxy.get("codec.max_capacity") == 10
        assert "codec" in config_proxy
        assert list(config_proxy) == ["codec"]
