"""Attribute transformation: validate and normalize constraints.

transform() is the single entry point the owning framework calls once per
attribute definition. Definitions without constraints pass through untouched
(no registry lookup), so types with no registered schema can still be used
unconstrained. Otherwise the constraints are resolved against the type's
schema and substituted into a copy of the definition.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import ValidationError

from .constraints.resolver import resolve
from .core.models.attribute import (
    ATTRIBUTE_SCHEMA,
    AttributeDefinition,
    FieldSpec,
    build_attribute,
    freeze_constraints,
)
from .errors import AttributeDefinitionError


logger = logging.getLogger(__name__)


def transform(definition: AttributeDefinition, registry=None) -> AttributeDefinition:
    """Resolve an attribute's constraints against its type.

    Args:
        definition: A constructed AttributeDefinition
        registry: TypeRegistry to resolve against (default registry if None)

    Returns:
        The same definition if it has no constraints, otherwise a copy with
        the constraints replaced by the normalized mapping.

    Raises:
        AttributeDefinitionError: The first violation found, with
            `attribute` set to the definition's name.
    """
    if not definition.constraints:
        return definition

    try:
        constraints = resolve(definition.type, definition.constraints, registry)
    except AttributeDefinitionError as e:
        e.attribute = definition.name
        raise

    logger.debug(
        "Resolved constraints for %s (%s): %s",
        definition.name,
        definition.type,
        list(constraints),
    )
    return definition.model_copy(
        update={"constraints": freeze_constraints(constraints)}
    )


@dataclass
class TransformResult:
    """Outcome of compiling one attribute, as a value."""

    name: str | None
    attribute: AttributeDefinition | None = None
    error: AttributeDefinitionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def try_transform(definition: AttributeDefinition, registry=None) -> TransformResult:
    """Like transform(), but return the error instead of raising it."""
    try:
        return TransformResult(definition.name, attribute=transform(definition, registry))
    except AttributeDefinitionError as e:
        return TransformResult(definition.name, error=e)


def compile_attribute(
    raw: Mapping[str, Any],
    registry=None,
    schema: Mapping[str, FieldSpec] = ATTRIBUTE_SCHEMA,
) -> AttributeDefinition:
    """Build an AttributeDefinition from raw input and transform it.

    Construction failures (missing/unknown fields, bad defaults) are mapped
    onto the same error taxonomy as constraint failures.

    Raises:
        AttributeDefinitionError
    """
    try:
        definition = build_attribute(raw, schema)
    except ValidationError as exc:
        raise _construction_error(exc, raw.get("name")) from exc
    return transform(definition, registry)


def _construction_error(exc: ValidationError, name: Any) -> AttributeDefinitionError:
    """Pick the first pydantic error, unwrapping our own error types."""
    attribute = name if isinstance(name, str) else None
    first = exc.errors()[0]

    original = first.get("ctx", {}).get("error")
    if isinstance(original, AttributeDefinitionError):
        original.attribute = attribute
        return original

    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", str(exc))
    if location:
        message = f"{location}: {message}"
    return AttributeDefinitionError(message, attribute=attribute)
