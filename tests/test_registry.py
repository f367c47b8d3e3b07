"""Tests for the type registry and the default catalog."""

import pytest

from attrforge.config import AttrforgeConfig, RegistryConfig, configure
from attrforge.constraints import validators as v
from attrforge.constraints.schema import ConstraintOption, ConstraintSchema
from attrforge.core.models.types import ArrayType, ScalarType
from attrforge.errors import UnknownLogicalType
from attrforge import types as types_module
from attrforge.types import (
    TypeRegistry,
    default_registry,
    list_constraints,
    load_type_module,
    reset_default_registry,
)


class TestRegister:
    """Tests for registering types."""

    def test_register_and_lookup(self):
        registry = TypeRegistry()
        schema = ConstraintSchema({"min": ConstraintOption(v.integer())})
        registry.register("score", schema, description="A score")

        assert registry.has("score")
        assert registry.constraint_schema("score") is schema
        assert registry.describe("score") == "A score"

    def test_register_without_schema_accepts_no_constraints(self):
        registry = TypeRegistry()
        registry.register("flag")
        assert len(registry.constraint_schema("flag")) == 0

    def test_duplicate_rejected(self):
        registry = TypeRegistry()
        registry.register("score")
        with pytest.raises(ValueError, match="already registered"):
            registry.register("score")

    def test_container_names_reserved(self):
        registry = TypeRegistry()
        with pytest.raises(ValueError, match="reserved"):
            registry.register("array")

    def test_names_in_registration_order(self):
        registry = TypeRegistry()
        registry.register("b")
        registry.register("a")
        assert registry.names() == ["b", "a"]


class TestLookup:
    """Tests for schema lookup and container inspection."""

    def test_unknown_scalar(self, registry):
        with pytest.raises(UnknownLogicalType) as exc_info:
            registry.constraint_schema("money")
        assert exc_info.value.type_name == "money"

    def test_container_schema_is_list_constraints(self, registry):
        assert registry.constraint_schema(["array", "integer"]) is list_constraints()

    def test_container_schema_does_not_require_registered_item(self, registry):
        assert registry.constraint_schema(["array", "money"]) is list_constraints()

    def test_list_item_type(self, registry):
        assert registry.list_item_type("array<integer>") == ScalarType(name="integer")

    def test_list_item_type_of_nested(self, registry):
        item = registry.list_item_type(["array", ["array", "string"]])
        assert item == ArrayType(item=ScalarType(name="string"))

    def test_list_item_type_of_scalar_fails(self, registry):
        with pytest.raises(ValueError, match="not a container"):
            registry.list_item_type("integer")

    def test_is_container(self, registry):
        assert registry.is_container(["array", "integer"])
        assert not registry.is_container("integer")

    def test_list_constraints_keys(self):
        assert list(list_constraints()) == ["min_length", "max_length", "nil_items"]


class TestBuiltinCatalog:
    """Tests for the built-in types."""

    @pytest.mark.parametrize(
        "name",
        ["string", "ci_string", "integer", "float", "decimal", "boolean",
         "uuid", "atom", "date", "utc_datetime", "map", "term"],
    )
    def test_builtin_registered(self, registry, name):
        assert registry.has(name)

    def test_string_schema_declares_defaults(self, registry):
        schema = registry.constraint_schema("string")
        assert schema["trim"].default is True
        assert schema["allow_empty"].default is False


class TestDefaultRegistry:
    """Tests for the process-wide registry."""

    def test_is_cached(self):
        assert default_registry() is default_registry()

    def test_has_builtins(self):
        assert default_registry().has("utc_datetime")

    def test_loads_configured_type_modules(self, tmp_path, monkeypatch):
        _write_type_module(tmp_path, "money_types", "money")
        monkeypatch.syspath_prepend(str(tmp_path))
        configure(AttrforgeConfig(registry=RegistryConfig(type_modules=["money_types"])))

        assert default_registry().has("money")

    def test_type_module_types_survive_rebuild(self, tmp_path, monkeypatch):
        _write_type_module(tmp_path, "currency_types", "currency")
        monkeypatch.syspath_prepend(str(tmp_path))
        configure(
            AttrforgeConfig(registry=RegistryConfig(type_modules=["currency_types"]))
        )
        first = default_registry()
        assert first.has("currency")

        reset_default_registry()
        rebuilt = default_registry()
        assert rebuilt is not first
        assert rebuilt.has("currency")

    def test_failed_build_publishes_nothing(self, tmp_path, monkeypatch):
        _write_type_module(tmp_path, "weight_types", "weight")
        monkeypatch.syspath_prepend(str(tmp_path))
        configure(
            AttrforgeConfig(
                registry=RegistryConfig(type_modules=["weight_types", "no_such_types_mod"])
            )
        )
        with pytest.raises(ImportError):
            default_registry()
        assert types_module._default_registry is None

        configure(AttrforgeConfig(registry=RegistryConfig(type_modules=["weight_types"])))
        assert default_registry().has("weight")

    def test_module_without_hook_rejected(self, tmp_path, monkeypatch):
        (tmp_path / "hookless_types.py").write_text("NAME = 'hookless'\n")
        monkeypatch.syspath_prepend(str(tmp_path))
        configure(
            AttrforgeConfig(registry=RegistryConfig(type_modules=["hookless_types"]))
        )
        with pytest.raises(ImportError, match="register_types"):
            default_registry()

    def test_missing_type_module_raises(self):
        configure(
            AttrforgeConfig(registry=RegistryConfig(type_modules=["no_such_types_mod"]))
        )
        with pytest.raises(ImportError):
            default_registry()

    def test_load_type_module_into_given_registry(self, tmp_path, monkeypatch):
        _write_type_module(tmp_path, "length_types", "length")
        monkeypatch.syspath_prepend(str(tmp_path))
        registry = TypeRegistry()
        load_type_module(registry, "length_types")
        assert registry.names() == ["length"]


def _write_type_module(directory, module_name, type_name):
    (directory / f"{module_name}.py").write_text(
        "def register_types(registry):\n"
        f"    registry.register({type_name!r}, description='Custom type')\n"
    )
