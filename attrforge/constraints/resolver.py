"""Constraint resolution for scalar and container types.

Scalars validate the full mapping against their registered schema. Containers
split the mapping: every key except `items` is validated against the
container schema, and `items` is resolved recursively against the element
type. The first violation aborts resolution.
"""

import logging
from collections.abc import Mapping
from typing import Any

from ..errors import (
    AttributeDefinitionError,
    InvalidConstraintValue,
    InvalidNestedConstraints,
)
from .schema import validate_options


logger = logging.getLogger(__name__)


def resolve(logical_type, constraints: Mapping[str, Any], registry=None) -> dict[str, Any]:
    """Validate and normalize constraints for a logical type.

    Args:
        logical_type: ScalarType/ArrayType or any form parse_type() accepts
        constraints: Raw constraints mapping
        registry: TypeRegistry to read schemas from (default registry if None)

    Returns:
        New constraints dict with per-key defaults filled in. For containers
        the `items` key always holds the (possibly empty) nested mapping.

    Raises:
        UnknownConstraintKey, InvalidConstraintValue, InvalidNestedConstraints,
        UnknownLogicalType
    """
    from ..types import ITEMS_KEY, default_registry

    if registry is None:
        registry = default_registry()

    if not registry.is_container(logical_type):
        return validate_options(constraints, registry.constraint_schema(logical_type))

    if not isinstance(constraints, Mapping):
        raise InvalidConstraintValue(None, constraints, "expected a mapping")

    container_level = {k: v for k, v in constraints.items() if k != ITEMS_KEY}
    resolved = validate_options(
        container_level, registry.constraint_schema(logical_type)
    )

    if ITEMS_KEY in constraints:
        item_type = registry.list_item_type(logical_type)
        try:
            item_constraints = resolve(item_type, constraints[ITEMS_KEY], registry)
        except AttributeDefinitionError as e:
            raise InvalidNestedConstraints(e, ITEMS_KEY) from e
        logger.debug("Resolved %s constraints for element type %s", ITEMS_KEY, item_type)
    else:
        item_constraints = {}

    resolved[ITEMS_KEY] = item_constraints
    return resolved
