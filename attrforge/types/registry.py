"""Type registry: the catalog of logical types and their constraint schemas.

Scalar types are registered by name with their ConstraintSchema. Container
(array) types are not registered individually: every array shares the
list-level schema from list_constraints(), and its element type is looked up
recursively.

The registry is populated at startup and only read afterwards; lookups take
no locks.
"""

import logging

from ..constraints.schema import ConstraintOption, ConstraintSchema
from ..constraints import validators as v
from ..core.models.types import ArrayType, ScalarType, parse_type
from ..errors import UnknownLogicalType


logger = logging.getLogger(__name__)


# Reserved key holding the element-scoped constraints of a container type
ITEMS_KEY = "items"


_LIST_CONSTRAINTS = ConstraintSchema(
    {
        "min_length": ConstraintOption(
            v.non_negative_integer(),
            doc="Minimum number of items in the list",
        ),
        "max_length": ConstraintOption(
            v.non_negative_integer(),
            doc="Maximum number of items in the list",
        ),
        "nil_items": ConstraintOption(
            v.boolean(),
            default=False,
            doc="Whether the list may contain nil items",
        ),
    }
)


def list_constraints() -> ConstraintSchema:
    """Container-level constraint schema shared by every array type."""
    return _LIST_CONSTRAINTS


class TypeRegistry:
    """Registered scalar types and their constraint schemas."""

    def __init__(self):
        self._schemas: dict[str, ConstraintSchema] = {}
        self._descriptions: dict[str, str] = {}

    # ── Registration ──────────────────────────────────────────────

    def register(
        self,
        name: str,
        schema: ConstraintSchema | None = None,
        *,
        description: str = "",
    ) -> None:
        """Register a scalar type.

        Raises ValueError if the name is already taken or uses the
        reserved container name.
        """
        if name in self._schemas:
            raise ValueError(f"Type '{name}' is already registered")
        if name == "array" or name.startswith("array<"):
            raise ValueError(f"Type name '{name}' is reserved for containers")

        self._schemas[name] = schema if schema is not None else ConstraintSchema()
        self._descriptions[name] = description
        logger.debug(
            "Registered type %s with constraints %s", name, list(self._schemas[name])
        )

    # ── Lookup ────────────────────────────────────────────────────

    def constraint_schema(self, logical_type) -> ConstraintSchema:
        """Return the constraint schema for a logical type.

        Container types return the container-level schema (the element type
        is resolved separately through list_item_type()).

        Raises UnknownLogicalType for unregistered scalar types.
        """
        logical_type = parse_type(logical_type)
        if isinstance(logical_type, ArrayType):
            return list_constraints()
        try:
            return self._schemas[logical_type.name]
        except KeyError:
            raise UnknownLogicalType(logical_type.name) from None

    def list_item_type(self, container) -> ScalarType | ArrayType:
        """Return the element type of a container type.

        Raises ValueError if the type is not a container.
        """
        container = parse_type(container)
        if not isinstance(container, ArrayType):
            raise ValueError(f"Type '{container}' is not a container type")
        return container.item

    def is_container(self, logical_type) -> bool:
        return isinstance(parse_type(logical_type), ArrayType)

    def has(self, name: str) -> bool:
        return name in self._schemas

    def names(self) -> list[str]:
        return list(self._schemas)

    def describe(self, name: str) -> str:
        return self._descriptions.get(name, "")
