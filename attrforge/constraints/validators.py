"""Value validators for constraint options.

Each factory returns a callable ``value -> value`` that either returns the
(normalized) value or raises ValueError with an "expected ..." message. The
resolver turns that message into an InvalidConstraintValue for the key.
"""

import re
from decimal import Decimal
from typing import Any, Callable


Validator = Callable[[Any], Any]


def integer() -> Validator:
    def check(value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError("expected an integer")
        return value

    check.expected = "integer"
    return check


def non_negative_integer() -> Validator:
    def check(value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError("expected a non-negative integer")
        return value

    check.expected = "non-negative integer"
    return check


def positive_integer() -> Validator:
    def check(value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError("expected a positive integer")
        return value

    check.expected = "positive integer"
    return check


def number() -> Validator:
    """Any int, float or Decimal (booleans excluded)."""

    def check(value: Any) -> int | float | Decimal:
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            raise ValueError("expected a number")
        return value

    check.expected = "number"
    return check


def string() -> Validator:
    def check(value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("expected a string")
        return value

    check.expected = "string"
    return check


def boolean() -> Validator:
    def check(value: Any) -> bool:
        if not isinstance(value, bool):
            raise ValueError("expected a boolean")
        return value

    check.expected = "boolean"
    return check


def regex() -> Validator:
    """A compiled pattern or a pattern string, normalized to re.Pattern."""

    def check(value: Any) -> re.Pattern:
        if isinstance(value, re.Pattern):
            return value
        if not isinstance(value, str):
            raise ValueError("expected a regular expression")
        try:
            return re.compile(value)
        except re.error as e:
            raise ValueError(f"expected a valid regular expression ({e})") from e

    check.expected = "regular expression"
    return check


def one_of(*choices: Any) -> Validator:
    """Membership in choices; booleans only match booleans (True != 1)."""

    def check(value: Any) -> Any:
        if not any(
            value == choice and isinstance(value, bool) == isinstance(choice, bool)
            for choice in choices
        ):
            raise ValueError(f"expected one of {list(choices)!r}")
        return value

    check.expected = f"one of {list(choices)!r}"
    return check


def list_of(item: Validator, *, min_items: int = 0) -> Validator:
    """A list (or tuple) whose every element passes ``item``."""

    def check(value: Any) -> list:
        if not isinstance(value, (list, tuple)):
            raise ValueError(f"expected a list of {_describe(item)}")
        if len(value) < min_items:
            raise ValueError(f"expected at least {min_items} item(s)")
        normalized = []
        for i, element in enumerate(value):
            try:
                normalized.append(item(element))
            except ValueError as e:
                raise ValueError(f"item {i}: {e}") from e
        return normalized

    check.expected = f"list of {_describe(item)}"
    return check


def _describe(validator: Validator) -> str:
    return getattr(validator, "expected", getattr(validator, "__name__", "value"))
