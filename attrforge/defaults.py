"""Default value specifications.

A default is one of a closed set of shapes:

- Computed(fn)            a callable evaluated when a value is needed
- Constant(value)         a literal used verbatim
- IndirectCall(m, f, a)   `m.f(*a)`, imported and invoked when a value is needed
- None                    no default

validate_default() classifies raw declarative input into one of these and
rejects anything else. It never invokes a default; evaluate_default() is the
helper consumers use at value-resolution time.
"""

import importlib
import inspect
import re
from dataclasses import dataclass
from typing import Any, Callable, Literal

from .errors import InvalidDefaultSpecification


Phase = Literal["create", "update"]
PHASES = ("create", "update")

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


@dataclass(frozen=True)
class Computed:
    """Deferred computation, called with no arguments (or the record on update)."""

    fn: Callable[..., Any]

    def __repr__(self) -> str:
        return f"Computed({_callable_name(self.fn)})"


@dataclass(frozen=True)
class Constant:
    """A literal default value, used verbatim."""

    value: Any


@dataclass(frozen=True)
class IndirectCall:
    """A named function in a named module plus fixed arguments."""

    module: str
    function: str
    args: tuple = ()

    def __repr__(self) -> str:
        return f"IndirectCall({self.module}.{self.function}, args={list(self.args)!r})"


DefaultSpec = Computed | Constant | IndirectCall | None


def validate_default(value: Any, phase: Phase, *, enforce_arity: bool | None = None) -> DefaultSpec:
    """Classify and validate a default specification.

    Accepted forms:
        callable                                → Computed
        Computed / Constant / IndirectCall      → unchanged
        (Constant, v) / ("constant", v)         → Constant
        {"constant": v}                         → Constant
        (module, function, args)                → IndirectCall
        {"module": m, "function": f, "args": a} → IndirectCall
        None                                    → None

    Args:
        value: Raw default from the attribute definition
        phase: "create" for `default`, "update" for `update_default`
        enforce_arity: Check that callables take no required arguments
            (one is allowed on update). None reads config.

    Raises:
        InvalidDefaultSpecification: If the value fits none of the shapes.
        ValueError: If phase is not "create" or "update".
    """
    if phase not in PHASES:
        raise ValueError(f"Invalid phase {phase!r}, expected one of {PHASES}")

    if value is None:
        return None

    if isinstance(value, (Constant, IndirectCall)):
        return value

    if isinstance(value, Computed):
        _check_arity(value.fn, value, phase, enforce_arity)
        return value

    if isinstance(value, tuple):
        if len(value) == 2 and (value[0] is Constant or value[0] == "constant"):
            return Constant(value[1])
        if len(value) == 3:
            return _indirect_call(value[0], value[1], value[2], value, phase)

    if isinstance(value, dict):
        if set(value) == {"constant"}:
            return Constant(value["constant"])
        if set(value) in ({"module", "function"}, {"module", "function", "args"}):
            return _indirect_call(
                value["module"], value["function"], value.get("args", []), value, phase
            )

    if callable(value):
        _check_arity(value, value, phase, enforce_arity)
        return Computed(value)

    raise InvalidDefaultSpecification(value, phase)


def evaluate_default(spec: DefaultSpec, record: Any = None) -> Any:
    """Produce a value from a validated default specification.

    One-argument Computed defaults (update defaults) receive `record`.
    """
    if spec is None:
        return None
    if isinstance(spec, Constant):
        return spec.value
    if isinstance(spec, Computed):
        if _required_positional(spec.fn) == 1:
            return spec.fn(record)
        return spec.fn()
    if isinstance(spec, IndirectCall):
        module = importlib.import_module(spec.module)
        return getattr(module, spec.function)(*spec.args)
    raise TypeError(f"Not a default specification: {spec!r}")


def _indirect_call(module: Any, function: Any, args: Any, raw: Any, phase: str) -> IndirectCall:
    if inspect.ismodule(module):
        module = module.__name__
    if not (isinstance(module, str) and _IDENTIFIER.match(module)):
        raise InvalidDefaultSpecification(raw, phase)
    if not (isinstance(function, str) and function.isidentifier()):
        raise InvalidDefaultSpecification(raw, phase)
    if not isinstance(args, (list, tuple)):
        raise InvalidDefaultSpecification(
            raw,
            phase,
            f"{raw!r} is not a valid default: arguments must be a list, got {args!r}",
        )
    return IndirectCall(module, function, tuple(args))


def _check_arity(fn: Callable, raw: Any, phase: str, enforce_arity: bool | None) -> None:
    if enforce_arity is None:
        from .config import get_config

        enforce_arity = get_config().validation.enforce_default_arity
    if not enforce_arity:
        return

    signature = _signature(fn)
    if signature is None:
        return

    keywords = [
        p.name
        for p in signature.parameters.values()
        if p.kind is p.KEYWORD_ONLY and p.default is inspect.Parameter.empty
    ]
    if keywords:
        raise InvalidDefaultSpecification(
            raw,
            phase,
            f"{_callable_name(fn)} is not a valid {phase} default: it requires "
            f"keyword argument(s) {', '.join(keywords)}, which are never passed",
        )

    required = _count_positional(signature)
    allowed = 1 if phase == "update" else 0
    if required > allowed:
        accepts = "zero or one argument" if phase == "update" else "zero arguments"
        raise InvalidDefaultSpecification(
            raw,
            phase,
            f"{_callable_name(fn)} is not a valid {phase} default: it must accept "
            f"{accepts} but requires {required}. "
            f"To provide a constant value, use `Constant(...)`",
        )


def _signature(fn: Callable) -> inspect.Signature | None:
    try:
        return inspect.signature(fn)
    except (TypeError, ValueError):
        return None


def _required_positional(fn: Callable) -> int | None:
    """Number of required positional parameters, None if not introspectable."""
    signature = _signature(fn)
    if signature is None:
        return None
    return _count_positional(signature)


def _count_positional(signature: inspect.Signature) -> int:
    return sum(
        1
        for p in signature.parameters.values()
        if p.default is inspect.Parameter.empty
        and p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    )


def _callable_name(fn: Callable) -> str:
    module = getattr(fn, "__module__", None)
    name = getattr(fn, "__qualname__", None) or repr(fn)
    return f"{module}.{name}" if module else name
