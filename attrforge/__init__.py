"""attrforge: attribute definition validation and normalization.

Validate a declarative attribute definition against its type's constraint
schema and get back a normalized definition or a structured error:

    from attrforge import build_attribute, transform

    attr = build_attribute({
        "name": "tags",
        "type": ["array", "string"],
        "constraints": {"max_length": 5, "items": {"max_length": 20}},
    })
    attr = transform(attr)
"""

__version__ = "0.3.0"

from .core.models import (
    ATTRIBUTE_SCHEMA,
    CREATE_TIMESTAMP_SCHEMA,
    UPDATE_TIMESTAMP_SCHEMA,
    ArrayType,
    AttributeDefinition,
    ScalarType,
    build_attribute,
    create_timestamp,
    parse_type,
    set_default,
    update_timestamp,
)
from .defaults import (
    Computed,
    Constant,
    IndirectCall,
    evaluate_default,
    validate_default,
)
from .errors import (
    AttributeDefinitionError,
    InvalidConstraintValue,
    InvalidDefaultSpecification,
    InvalidNestedConstraints,
    UnknownConstraintKey,
    UnknownLogicalType,
)
from .constraints import ConstraintOption, ConstraintSchema, resolve
from .types import TypeRegistry, default_registry
from .transformer import TransformResult, compile_attribute, transform, try_transform

__all__ = [
    "__version__",
    # Models
    "ATTRIBUTE_SCHEMA",
    "CREATE_TIMESTAMP_SCHEMA",
    "UPDATE_TIMESTAMP_SCHEMA",
    "ArrayType",
    "AttributeDefinition",
    "ScalarType",
    "build_attribute",
    "create_timestamp",
    "parse_type",
    "set_default",
    "update_timestamp",
    # Defaults
    "Computed",
    "Constant",
    "IndirectCall",
    "evaluate_default",
    "validate_default",
    # Errors
    "AttributeDefinitionError",
    "InvalidConstraintValue",
    "InvalidDefaultSpecification",
    "InvalidNestedConstraints",
    "UnknownConstraintKey",
    "UnknownLogicalType",
    # Constraints and types
    "ConstraintOption",
    "ConstraintSchema",
    "TypeRegistry",
    "default_registry",
    "resolve",
    # Transformer
    "TransformResult",
    "compile_attribute",
    "transform",
    "try_transform",
]
