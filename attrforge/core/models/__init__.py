"""All Pydantic models for attrforge.

- types.py: Logical type references (scalar and array)
- attribute.py: Attribute definitions, the schema table and timestamp presets
"""

from .types import (
    ScalarType,
    ArrayType,
    LogicalType,
    parse_type,
)
from .attribute import (
    # Definition
    AttributeDefinition,
    # Schema table
    FieldSpec,
    ATTRIBUTE_SCHEMA,
    set_default,
    build_attribute,
    freeze_constraints,
    # Presets
    CREATE_TIMESTAMP_SCHEMA,
    UPDATE_TIMESTAMP_SCHEMA,
    PRESETS,
    create_timestamp_schema,
    update_timestamp_schema,
    create_timestamp,
    update_timestamp,
    utc_now,
)

__all__ = [
    "ScalarType",
    "ArrayType",
    "LogicalType",
    "parse_type",
    "AttributeDefinition",
    "FieldSpec",
    "ATTRIBUTE_SCHEMA",
    "set_default",
    "build_attribute",
    "freeze_constraints",
    "CREATE_TIMESTAMP_SCHEMA",
    "UPDATE_TIMESTAMP_SCHEMA",
    "PRESETS",
    "create_timestamp_schema",
    "update_timestamp_schema",
    "create_timestamp",
    "update_timestamp",
    "utc_now",
]
