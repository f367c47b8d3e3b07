"""Built-in type catalog.

Registers the common scalar types and their constraint schemas into a
TypeRegistry. Modules listed in config `registry.type_modules` follow the
same pattern from their own `register_types(registry)` hook.
"""

from ..constraints import validators as v
from ..constraints.schema import ConstraintOption, ConstraintSchema
from .registry import TypeRegistry


_NUMERIC = ConstraintSchema(
    {
        "min": ConstraintOption(v.number(), doc="Enforces a minimum on the value"),
        "max": ConstraintOption(v.number(), doc="Enforces a maximum on the value"),
    }
)

_INTEGER = ConstraintSchema(
    {
        "min": ConstraintOption(v.integer(), doc="Enforces a minimum on the value"),
        "max": ConstraintOption(v.integer(), doc="Enforces a maximum on the value"),
    }
)

_STRING = ConstraintSchema(
    {
        "min_length": ConstraintOption(
            v.non_negative_integer(), doc="Enforces a minimum length on the value"
        ),
        "max_length": ConstraintOption(
            v.non_negative_integer(), doc="Enforces a maximum length on the value"
        ),
        "match": ConstraintOption(
            v.regex(), doc="Enforces that the string matches a passed in regex"
        ),
        "trim": ConstraintOption(
            v.boolean(), default=True, doc="Trims the value"
        ),
        "allow_empty": ConstraintOption(
            v.boolean(),
            default=False,
            doc="If false, the value is set to nil if it's empty",
        ),
    }
)

_ATOM = ConstraintSchema(
    {
        "one_of": ConstraintOption(
            v.list_of(v.string(), min_items=1),
            doc="Allows constraining the value to one of a fixed set",
        ),
    }
)

_DECIMAL = ConstraintSchema(
    {
        **_NUMERIC.options,
        "precision": ConstraintOption(
            v.positive_integer(), doc="Total number of significant digits"
        ),
        "scale": ConstraintOption(
            v.non_negative_integer(), doc="Number of digits after the decimal point"
        ),
    }
)

_DATETIME = ConstraintSchema(
    {
        "precision": ConstraintOption(
            v.one_of("second", "microsecond"),
            default="second",
            doc="Precision the value is truncated to",
        ),
    }
)


def register_builtin_types(registry: TypeRegistry) -> TypeRegistry:
    """Populate a registry with the built-in scalar types."""
    registry.register("string", _STRING, description="Text value")
    registry.register(
        "ci_string", _STRING, description="Case-insensitive text value"
    )
    registry.register("integer", _INTEGER, description="Whole number")
    registry.register("float", _NUMERIC, description="Floating point number")
    registry.register("decimal", _DECIMAL, description="Arbitrary precision decimal")
    registry.register("boolean", description="True or false")
    registry.register("uuid", description="UUID identifier")
    registry.register("atom", _ATOM, description="Symbolic value from a fixed set")
    registry.register("date", description="Calendar date")
    registry.register("utc_datetime", _DATETIME, description="Timestamp in UTC")
    registry.register("map", description="Arbitrary key/value mapping")
    registry.register("term", description="Any value, unvalidated")
    return registry
