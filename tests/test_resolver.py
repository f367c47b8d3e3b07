"""Tests for constraint resolution against scalar and container types."""

import pytest

from attrforge.constraints import resolve
from attrforge.constraints import validators as v
from attrforge.constraints.schema import ConstraintOption, ConstraintSchema
from attrforge.errors import (
    InvalidConstraintValue,
    InvalidNestedConstraints,
    UnknownConstraintKey,
    UnknownLogicalType,
)


class TestScalarResolution:
    """Scalar types validate the full mapping against their schema."""

    def test_accepts_known_keys_and_fills_defaults(self, registry):
        result = resolve("string", {"max_length": 10}, registry)
        assert result == {"max_length": 10, "trim": True, "allow_empty": False}

    def test_result_is_superset_of_input(self, registry):
        raw = {"min_length": 2, "trim": False}
        result = resolve("string", raw, registry)
        assert raw.items() <= result.items()

    def test_rejects_unknown_key(self, registry):
        with pytest.raises(UnknownConstraintKey) as exc_info:
            resolve("integer", {"min": 1, "precision": 2}, registry)
        assert exc_info.value.key == "precision"

    def test_rejects_bad_value(self, registry):
        with pytest.raises(InvalidConstraintValue) as exc_info:
            resolve("string", {"max_length": -3}, registry)
        assert exc_info.value.key == "max_length"

    def test_unknown_type(self, registry):
        with pytest.raises(UnknownLogicalType):
            resolve("money", {"min": 1}, registry)

    def test_regex_normalized(self, registry):
        result = resolve("string", {"match": "^[a-z]+$"}, registry)
        assert result["match"].match("abc")

    def test_uses_default_registry_when_none_given(self):
        assert resolve("integer", {"min": 0}) == {"min": 0}


class TestContainerResolution:
    """Containers split container-level keys from item constraints."""

    def test_round_trip(self, registry):
        result = resolve(
            ["array", "integer"], {"max_length": 5, "items": {"min": 1}}, registry
        )
        assert result == {
            "max_length": 5,
            "nil_items": False,
            "items": {"min": 1},
        }

    def test_items_get_element_defaults(self, registry):
        result = resolve(
            ["array", "string"], {"items": {"max_length": 20}}, registry
        )
        assert result["items"] == {
            "max_length": 20,
            "trim": True,
            "allow_empty": False,
        }

    def test_items_absent_defaults_to_empty(self, registry):
        result = resolve(["array", "string"], {"min_length": 1}, registry)
        assert result == {"min_length": 1, "nil_items": False, "items": {}}

    def test_items_key_is_last(self, registry):
        result = resolve(
            ["array", "integer"], {"items": {"min": 0}, "max_length": 3}, registry
        )
        assert list(result)[-1] == "items"

    def test_nested_rejection_wraps_inner_error(self, registry):
        with pytest.raises(InvalidNestedConstraints) as exc_info:
            resolve(
                ["array", "integer"],
                {"max_length": 5, "items": {"bogus": True}},
                registry,
            )
        err = exc_info.value
        assert isinstance(err.cause, UnknownConstraintKey)
        assert err.cause.key == "bogus"
        assert err.__cause__ is err.cause
        assert err.to_dict()["cause"]["key"] == "bogus"

    def test_container_level_unknown_key_is_not_nested(self, registry):
        with pytest.raises(UnknownConstraintKey) as exc_info:
            resolve(["array", "integer"], {"min": 1}, registry)
        assert exc_info.value.key == "min"

    def test_container_level_error_aborts_before_items(self, registry):
        with pytest.raises(InvalidConstraintValue) as exc_info:
            resolve(
                ["array", "money"],
                {"max_length": "five", "items": {"min": 1}},
                registry,
            )
        assert exc_info.value.key == "max_length"

    def test_unregistered_element_type_fails_only_with_items(self, registry):
        assert resolve(["array", "money"], {"max_length": 2}, registry)["items"] == {}
        with pytest.raises(InvalidNestedConstraints) as exc_info:
            resolve(["array", "money"], {"items": {"min": 1}}, registry)
        assert isinstance(exc_info.value.cause, UnknownLogicalType)

    def test_items_not_a_mapping(self, registry):
        with pytest.raises(InvalidNestedConstraints) as exc_info:
            resolve(["array", "integer"], {"items": [1, 2]}, registry)
        assert isinstance(exc_info.value.cause, InvalidConstraintValue)

    def test_constraints_not_a_mapping(self, registry):
        with pytest.raises(InvalidConstraintValue, match="expected a mapping"):
            resolve(["array", "integer"], "max_length=5", registry)

    def test_array_of_array(self, registry):
        result = resolve(
            ["array", ["array", "integer"]],
            {"max_length": 2, "items": {"min_length": 1, "items": {"max": 9}}},
            registry,
        )
        assert result == {
            "max_length": 2,
            "nil_items": False,
            "items": {
                "min_length": 1,
                "nil_items": False,
                "items": {"max": 9},
            },
        }

    def test_array_of_array_inner_failure_is_doubly_wrapped(self, registry):
        with pytest.raises(InvalidNestedConstraints) as exc_info:
            resolve(
                ["array", ["array", "integer"]],
                {"items": {"items": {"bogus": 1}}},
                registry,
            )
        inner = exc_info.value.cause
        assert isinstance(inner, InvalidNestedConstraints)
        assert isinstance(inner.cause, UnknownConstraintKey)

    def test_custom_element_type(self, registry):
        registry.register(
            "percent",
            ConstraintSchema(
                {"scale": ConstraintOption(v.one_of(1, 100), default=100)}
            ),
        )
        result = resolve(["array", "percent"], {"items": {}}, registry)
        assert result["items"] == {"scale": 100}
