"""Error taxonomy for attribute definition validation.

Every error is a ValueError subclass so it can be raised from inside a
pydantic validator and still be caught by callers as a plain value. Errors
carry the offending attribute name (filled in by the transformer), the
offending key/value where applicable, and for nested failures the inner cause.
"""

from typing import Any


class AttributeDefinitionError(ValueError):
    """Base class for all attribute definition validation failures."""

    category = "attribute_definition"

    def __init__(self, message: str, *, attribute: str | None = None):
        self.message = message
        self.attribute = attribute
        super().__init__(message)

    def __str__(self) -> str:
        if self.attribute:
            return f"{self.attribute}: {self.message}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Structured form for JSON reporting."""
        data: dict[str, Any] = {"category": self.category, "message": self.message}
        if self.attribute:
            data["attribute"] = self.attribute
        return data


class UnknownConstraintKey(AttributeDefinitionError):
    """A constraint key that is not part of the type's schema."""

    category = "unknown_constraint_key"

    def __init__(
        self,
        key: str,
        known_keys: list[str] | None = None,
        *,
        attribute: str | None = None,
    ):
        self.key = key
        self.known_keys = list(known_keys or [])
        if self.known_keys:
            message = (
                f"unknown constraint {key!r}, "
                f"known constraints: {', '.join(self.known_keys)}"
            )
        else:
            message = f"unknown constraint {key!r}, this type accepts no constraints"
        super().__init__(message, attribute=attribute)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["key"] = self.key
        return data


class InvalidConstraintValue(AttributeDefinitionError):
    """A known constraint key whose value fails the type-specific rule."""

    category = "invalid_constraint_value"

    def __init__(
        self,
        key: str | None,
        value: Any,
        expected: str,
        *,
        attribute: str | None = None,
    ):
        self.key = key
        self.value = value
        self.expected = expected
        if key is None:
            message = f"invalid constraints {value!r}: {expected}"
        elif expected == "required":
            message = f"required constraint {key!r} not found"
        else:
            message = f"invalid value for constraint {key!r}: {expected}, got: {value!r}"
        super().__init__(message, attribute=attribute)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["key"] = self.key
        data["value"] = repr(self.value)
        return data


class InvalidNestedConstraints(AttributeDefinitionError):
    """Failure while validating the items-scoped constraints of a container."""

    category = "invalid_nested_constraints"

    def __init__(
        self,
        cause: AttributeDefinitionError,
        key: str = "items",
        *,
        attribute: str | None = None,
    ):
        self.cause = cause
        self.key = key
        super().__init__(f"invalid {key} constraints: {cause.message}", attribute=attribute)
        self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["key"] = self.key
        data["cause"] = self.cause.to_dict()
        return data


class InvalidDefaultSpecification(AttributeDefinitionError):
    """A default/update_default matching none of the supported shapes."""

    category = "invalid_default"

    def __init__(
        self,
        value: Any,
        phase: str,
        reason: str | None = None,
        *,
        attribute: str | None = None,
    ):
        self.value = value
        self.phase = phase
        message = reason or (
            f"{value!r} is not a valid default. "
            f"To provide a constant value, use `Constant({value!r})`"
        )
        super().__init__(message, attribute=attribute)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["phase"] = self.phase
        data["value"] = repr(self.value)
        return data


class UnknownLogicalType(AttributeDefinitionError):
    """A logical type that is not registered in the type registry."""

    category = "unknown_type"

    def __init__(self, type_name: str, *, attribute: str | None = None):
        self.type_name = type_name
        super().__init__(f"unknown type {type_name!r}", attribute=attribute)
