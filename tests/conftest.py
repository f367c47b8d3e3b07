"""Shared fixtures for attrforge tests."""

import pytest

from attrforge import config as config_module
from attrforge.config import AttrforgeConfig, configure, reset_config
from attrforge.types import TypeRegistry, register_builtin_types, reset_default_registry


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Never read or write the user's real config file."""
    config_file = tmp_path / "config" / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_file.parent)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_file)
    monkeypatch.delenv("ATTRFORGE_ENFORCE_DEFAULT_ARITY", raising=False)
    monkeypatch.delenv("ATTRFORGE_TYPE_MODULES", raising=False)
    configure(AttrforgeConfig())
    reset_default_registry()
    yield config_file
    reset_config()
    reset_default_registry()


@pytest.fixture
def registry() -> TypeRegistry:
    """A fresh registry with the built-in types."""
    return register_builtin_types(TypeRegistry())
