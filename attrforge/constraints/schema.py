"""Constraint schemas as data.

A ConstraintSchema is an ordered mapping from constraint key to a small
descriptor (validator, default, required, doc). Validating a constraints
mapping checks every supplied key, then fills each omitted key that declares
a default, so a successful result is always fully populated.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterator

from ..errors import InvalidConstraintValue, UnknownConstraintKey
from .validators import Validator


logger = logging.getLogger(__name__)


# Sentinel for "no default declared"
MISSING = object()


@dataclass(frozen=True)
class ConstraintOption:
    """Descriptor for one legal constraint key."""

    validator: Validator
    default: Any = MISSING
    required: bool = False
    doc: str = ""

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    @property
    def expected(self) -> str:
        return getattr(self.validator, "expected", "valid value")


@dataclass(frozen=True)
class ConstraintSchema(Mapping):
    """Ordered, read-only mapping of constraint key → ConstraintOption."""

    options: dict[str, ConstraintOption] = field(default_factory=dict)

    def __getitem__(self, key: str) -> ConstraintOption:
        return self.options[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.options)

    def __len__(self) -> int:
        return len(self.options)

    def __hash__(self) -> int:
        return hash(tuple(self.options))


def validate_options(constraints: Any, schema: Mapping) -> dict[str, Any]:
    """Validate one flat constraints mapping against a schema.

    Returns a new dict: supplied keys in input order with normalized values,
    followed by omitted keys that declare a default, in schema order.

    Raises:
        InvalidConstraintValue: constraints is not a mapping, a value fails
            its validator, or a required key is missing.
        UnknownConstraintKey: a key is not declared by the schema.
    """
    if not isinstance(constraints, Mapping):
        raise InvalidConstraintValue(None, constraints, "expected a mapping")

    result: dict[str, Any] = {}

    for key, value in constraints.items():
        option = schema.get(key)
        if option is None:
            raise UnknownConstraintKey(key, list(schema))
        try:
            result[key] = option.validator(value)
        except ValueError as e:
            raise InvalidConstraintValue(key, value, str(e)) from e

    for key, option in schema.items():
        if key in result:
            continue
        if option.required:
            raise InvalidConstraintValue(key, None, "required")
        if option.has_default:
            result[key] = option.default

    logger.debug("Validated constraints %s against %d option(s)", list(result), len(schema))
    return result
