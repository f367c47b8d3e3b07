"""Logical type references.

A logical type is either a scalar type name registered in a TypeRegistry or a
container (array) wrapping another logical type. Declarative input may spell
types several ways; parse_type() normalizes them all to the tagged models.
"""

import re
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


_ARRAY_STRING = re.compile(r"^array<(.+)>$")


class ScalarType(BaseModel):
    """A reference to a registered scalar type, e.g. ``integer``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["scalar"] = "scalar"
    name: str

    def __str__(self) -> str:
        return self.name


class ArrayType(BaseModel):
    """A container of elements of another logical type."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["array"] = "array"
    item: "LogicalType"

    def __str__(self) -> str:
        return f"array<{self.item}>"


LogicalType = Annotated[Union[ScalarType, ArrayType], Field(discriminator="kind")]

ArrayType.model_rebuild()


def parse_type(raw: Any) -> ScalarType | ArrayType:
    """Normalize a declarative type reference.

    Accepted forms:
        ScalarType / ArrayType     → unchanged
        "integer"                  → ScalarType("integer")
        "array<integer>"           → ArrayType(ScalarType("integer"))
        ("array", "integer")       → ArrayType(ScalarType("integer"))
        {"array": "integer"}       → ArrayType(ScalarType("integer"))

    Inner types are parsed recursively, so arrays of arrays are expressible.

    Raises:
        ValueError: If the value is none of the above.
    """
    if isinstance(raw, (ScalarType, ArrayType)):
        return raw

    if isinstance(raw, str):
        name = raw.strip()
        match = _ARRAY_STRING.match(name)
        if match:
            return ArrayType(item=parse_type(match.group(1)))
        if not name:
            raise ValueError("type name must be non-empty")
        return ScalarType(name=name)

    if isinstance(raw, (list, tuple)) and len(raw) == 2 and raw[0] == "array":
        return ArrayType(item=parse_type(raw[1]))

    if isinstance(raw, dict):
        if set(raw) == {"array"}:
            return ArrayType(item=parse_type(raw["array"]))
        if raw.get("kind") in ("scalar", "array"):
            if raw["kind"] == "scalar":
                return ScalarType.model_validate(raw)
            return ArrayType(item=parse_type(raw.get("item")))

    raise ValueError(
        f"Invalid type {raw!r}. Expected a type name (e.g. 'integer') "
        f"or an array form (e.g. ['array', 'integer'])"
    )
