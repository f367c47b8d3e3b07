"""Attribute definition model and its schema table.

An AttributeDefinition describes one field of a resource: its logical type,
type-specific constraints, nullability, key role and default policies. It is
constructed once from declarative input, normalized once by the transformer,
and read-only afterwards.

The schema table (ATTRIBUTE_SCHEMA) lists every field with its default and
doc. The timestamp presets are derived from it by overriding defaults, once,
at import.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from ...defaults import Computed, validate_default
from .types import LogicalType, parse_type


# Sentinel for "no default in the schema table"
_NO_DEFAULT = object()


def utc_now() -> datetime:
    """Current time in UTC, the timestamp presets' default."""
    return datetime.now(timezone.utc)


def freeze_constraints(constraints: Mapping[str, Any]) -> Mapping[str, Any]:
    """Read-only view of a constraints mapping, nested mappings included."""
    return MappingProxyType(
        {
            k: freeze_constraints(v) if isinstance(v, Mapping) else v
            for k, v in constraints.items()
        }
    )


def _thaw(constraints: Mapping[str, Any]) -> dict[str, Any]:
    return {
        k: _thaw(v) if isinstance(v, Mapping) else v for k, v in constraints.items()
    }


# =============================================================================
# Attribute Definition
# =============================================================================


class AttributeDefinition(BaseModel):
    """Declarative description of a single attribute."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(description="The name of the attribute")
    type: LogicalType = Field(description="The logical type of the attribute")
    constraints: Mapping[str, Any] = Field(
        default_factory=lambda: MappingProxyType({}),
        description="Type-specific constraints, validated against the type's schema",
    )
    allow_nil: bool = Field(
        default=True, description="Whether the attribute can be set to nil"
    )
    primary_key: bool = Field(
        default=False,
        description="Whether the attribute is part of the identifying key",
    )
    generated: bool = Field(
        default=False,
        description="Whether the value may be produced by the write path and must be read back",
    )
    writable: bool = Field(
        default=True, description="Whether the value can be written to"
    )
    default: Any = Field(
        default=None, description="Default used on create when no value is given"
    )
    update_default: Any = Field(
        default=None, description="Default used on update when no value is given"
    )
    description: str | None = Field(
        default=None, description="An optional description for the attribute"
    )

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"attribute name must be an identifier, got {v!r}")
        return v

    @field_validator("constraints")
    @classmethod
    def freeze(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        return freeze_constraints(v)

    @field_serializer("constraints")
    def dump_constraints(self, v: Mapping[str, Any]) -> dict[str, Any]:
        return _thaw(v)

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, v):
        return parse_type(v)

    @field_validator("default")
    @classmethod
    def check_default(cls, v):
        return validate_default(v, "create")

    @field_validator("update_default")
    @classmethod
    def check_update_default(cls, v):
        return validate_default(v, "update")

    def summary(self) -> str:
        """One-line text summary of the definition."""
        flags = []
        if self.primary_key:
            flags.append("primary key")
        if not self.allow_nil:
            flags.append("required")
        if not self.writable:
            flags.append("read-only")
        if self.generated:
            flags.append("generated")
        line = f"{self.name} ({self.type})"
        if flags:
            line += f" [{', '.join(flags)}]"
        return line


# =============================================================================
# Schema table and presets
# =============================================================================


@dataclass(frozen=True)
class FieldSpec:
    """One row of the attribute schema table."""

    default: Any = _NO_DEFAULT
    required: bool = False
    doc: str = ""

    @property
    def has_default(self) -> bool:
        return self.default is not _NO_DEFAULT


def _field_doc(name: str) -> str:
    return AttributeDefinition.model_fields[name].description or ""


ATTRIBUTE_SCHEMA: dict[str, FieldSpec] = {
    "name": FieldSpec(required=True, doc=_field_doc("name")),
    "type": FieldSpec(required=True, doc=_field_doc("type")),
    "constraints": FieldSpec(doc=_field_doc("constraints")),
    "primary_key": FieldSpec(default=False, doc=_field_doc("primary_key")),
    "allow_nil": FieldSpec(default=True, doc=_field_doc("allow_nil")),
    "generated": FieldSpec(default=False, doc=_field_doc("generated")),
    "writable": FieldSpec(default=True, doc=_field_doc("writable")),
    "update_default": FieldSpec(doc=_field_doc("update_default")),
    "default": FieldSpec(doc=_field_doc("default")),
    "description": FieldSpec(doc=_field_doc("description")),
}


def set_default(
    schema: Mapping[str, FieldSpec], field: str, value: Any
) -> dict[str, FieldSpec]:
    """Return a copy of a schema table with one field's default replaced.

    Raises:
        KeyError: If the field is not in the table.
    """
    if field not in schema:
        raise KeyError(f"Unknown attribute field {field!r}")
    table = dict(schema)
    table[field] = replace(table[field], default=value, required=False)
    return table


def create_timestamp_schema(
    schema: Mapping[str, FieldSpec] = ATTRIBUTE_SCHEMA,
) -> dict[str, FieldSpec]:
    """Schema table for attributes stamped once, on create."""
    table = set_default(schema, "writable", False)
    table = set_default(table, "default", Computed(utc_now))
    return set_default(table, "type", "utc_datetime")


def update_timestamp_schema(
    schema: Mapping[str, FieldSpec] = ATTRIBUTE_SCHEMA,
) -> dict[str, FieldSpec]:
    """Schema table for attributes stamped on create and on every update."""
    table = set_default(schema, "writable", False)
    table = set_default(table, "default", Computed(utc_now))
    table = set_default(table, "update_default", Computed(utc_now))
    return set_default(table, "type", "utc_datetime")


CREATE_TIMESTAMP_SCHEMA = create_timestamp_schema()
UPDATE_TIMESTAMP_SCHEMA = update_timestamp_schema()

PRESETS: dict[str, Mapping[str, FieldSpec]] = {
    "attribute": ATTRIBUTE_SCHEMA,
    "create_timestamp": CREATE_TIMESTAMP_SCHEMA,
    "update_timestamp": UPDATE_TIMESTAMP_SCHEMA,
}


def build_attribute(
    raw: Mapping[str, Any],
    schema: Mapping[str, FieldSpec] = ATTRIBUTE_SCHEMA,
) -> AttributeDefinition:
    """Construct an AttributeDefinition, filling omitted fields from a schema table.

    Raises:
        pydantic.ValidationError: If a field is missing, unknown or mistyped,
            or a default specification is invalid.
    """
    data = {k: spec.default for k, spec in schema.items() if spec.has_default}
    data.update(raw)
    return AttributeDefinition.model_validate(data)


def create_timestamp(name: str, **overrides: Any) -> AttributeDefinition:
    """A read-only utc_datetime attribute defaulting to the time of creation."""
    return build_attribute({"name": name, **overrides}, CREATE_TIMESTAMP_SCHEMA)


def update_timestamp(name: str, **overrides: Any) -> AttributeDefinition:
    """A read-only utc_datetime attribute refreshed on create and every update."""
    return build_attribute({"name": name, **overrides}, UPDATE_TIMESTAMP_SCHEMA)

