"""Tests for configuration loading and the global config singleton."""

import json
import logging

import pytest

from attrforge.config import (
    AttrforgeConfig,
    RegistryConfig,
    ValidationConfig,
    configure,
    get_config,
    parse_bool,
    parse_module_list,
    reset_config,
)


class TestParsing:
    """Tests for env var / CLI string parsing helpers."""

    @pytest.mark.parametrize("raw", ["1", "true", "YES", " on "])
    def test_true_values(self, raw):
        assert parse_bool(raw) is True

    @pytest.mark.parametrize("raw", ["0", "false", "No", "off"])
    def test_false_values(self, raw):
        assert parse_bool(raw) is False

    def test_invalid_bool(self):
        with pytest.raises(ValueError, match="Invalid boolean"):
            parse_bool("maybe")

    def test_module_list(self):
        assert parse_module_list("a.types, b.types,,") == ["a.types", "b.types"]


class TestLoad:
    """Tests for AttrforgeConfig.load() layering."""

    def test_defaults(self):
        config = AttrforgeConfig.load()
        assert config.validation.enforce_default_arity is True
        assert config.registry.type_modules == []

    def test_from_file(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text(
            json.dumps(
                {
                    "validation": {"enforce_default_arity": False},
                    "registry": {"type_modules": ["myapp.types"]},
                }
            )
        )
        config = AttrforgeConfig.load()
        assert config.validation.enforce_default_arity is False
        assert config.registry.type_modules == ["myapp.types"]

    def test_env_overrides_file(self, isolated_config, monkeypatch):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text(
            json.dumps({"validation": {"enforce_default_arity": False}})
        )
        monkeypatch.setenv("ATTRFORGE_ENFORCE_DEFAULT_ARITY", "true")
        monkeypatch.setenv("ATTRFORGE_TYPE_MODULES", "a.types,b.types")

        config = AttrforgeConfig.load()
        assert config.validation.enforce_default_arity is True
        assert config.registry.type_modules == ["a.types", "b.types"]

    def test_invalid_env_value_warns(self, monkeypatch, caplog):
        monkeypatch.setenv("ATTRFORGE_ENFORCE_DEFAULT_ARITY", "sometimes")
        with caplog.at_level(logging.WARNING, logger="attrforge.config"):
            config = AttrforgeConfig.load()
        assert config.validation.enforce_default_arity is True
        assert "ATTRFORGE_ENFORCE_DEFAULT_ARITY" in caplog.text

    def test_corrupt_file_warns(self, isolated_config, caplog):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text("{not json")
        with caplog.at_level(logging.WARNING, logger="attrforge.config"):
            config = AttrforgeConfig.load()
        assert config.validation.enforce_default_arity is True
        assert "Failed to load config" in caplog.text

    def test_unknown_file_key_warns(self, isolated_config, caplog):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text(json.dumps({"validation": {"strict": True}}))
        with caplog.at_level(logging.WARNING, logger="attrforge.config"):
            AttrforgeConfig.load()
        assert "validation.strict" in caplog.text


class TestSave:
    """Tests for persisting config."""

    def test_save_round_trip(self, isolated_config):
        config = AttrforgeConfig(
            validation=ValidationConfig(enforce_default_arity=False),
            registry=RegistryConfig(type_modules=["myapp.types"]),
        )
        config.save()

        assert json.loads(isolated_config.read_text()) == config.to_dict()
        assert AttrforgeConfig.load() == config

    def test_to_dict(self):
        assert AttrforgeConfig().to_dict() == {
            "validation": {"enforce_default_arity": True},
            "registry": {"type_modules": []},
        }


class TestGlobalConfig:
    """Tests for the config singleton."""

    def test_configure_replaces_global(self):
        config = AttrforgeConfig(validation=ValidationConfig(enforce_default_arity=False))
        configure(config)
        assert get_config() is config

    def test_reset_reloads(self, monkeypatch):
        reset_config()
        monkeypatch.setenv("ATTRFORGE_TYPE_MODULES", "x.types")
        assert get_config().registry.type_modules == ["x.types"]
        assert get_config() is get_config()
