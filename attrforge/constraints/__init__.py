"""Constraint schemas, value validators and type-aware resolution."""

from .schema import MISSING, ConstraintOption, ConstraintSchema, validate_options
from .resolver import resolve

__all__ = [
    "MISSING",
    "ConstraintOption",
    "ConstraintSchema",
    "resolve",
    "validate_options",
]
