"""
Constraint evaluation for conditional variables.

A constraint is a small Lua expression such as ``x > 0`` or
``kernel == "rbf"``. It is evaluated against the sibling variables that
already have a value; siblings without a value are left undefined so that an
expression referring to them fails instead of silently reading zero.

Every evaluation gets a fresh Lua runtime with no Python helpers registered
and without the ``os``, ``io`` and module-loading globals. The runtime is dropped
as soon as the result is read.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, Optional, Sequence

from lupa import LuaError, LuaRuntime, LuaSyntaxError

from kurobako.core.errors import ConstraintError

if TYPE_CHECKING:
    from kurobako.core.variable import Var

logger = logging.getLogger(__name__)


def is_unbound(value: Optional[float]) -> bool:
    """True for values of conditional variables that were not assigned."""
    return value is None or (isinstance(value, float) and math.isnan(value))


def _lua_value(var: "Var", value: float) -> Any:
    categorical = var.range.as_categorical()
    if (categorical is not None or var.range.as_discrete() is not None) and not math.isfinite(value):
        raise ConstraintError(f"value {value!r} of {var.name!r} is not a finite number")
    if categorical is not None:
        index = int(value)
        if not 0 <= index < len(categorical.choices):
            raise ConstraintError(
                f"value {value!r} of {var.name!r} is not a valid index into {categorical.choices!r}"
            )
        return categorical.choices[index]
    if var.range.as_discrete() is not None:
        return int(value)
    return float(value)


# Lua standard library entries that reach the host system.
_UNSAFE_GLOBALS = ("os", "io", "require", "dofile", "loadfile", "load", "package", "debug")


def _new_runtime() -> LuaRuntime:
    lua = LuaRuntime(register_eval=False, register_builtins=False)
    scope = lua.globals()
    for name in _UNSAFE_GLOBALS:
        scope[name] = None
    return lua


def evaluate_constraint(
    constraint: Optional[str],
    variables: Sequence["Var"],
    values: Sequence[Optional[float]],
) -> bool:
    """
    Decide whether ``constraint`` holds for a partially bound candidate.

    Args:
        constraint: Lua expression text, or None for an unconditional variable.
        variables: The domain's variables, in order.
        values: Candidate values aligned with ``variables``. ``None`` (or NaN)
            marks a variable without a value. Extra entries on either side are
            ignored.

    Returns:
        The boolean the expression evaluated to. True when there is no constraint.

    Raises:
        ConstraintError: if the expression fails to compile or run, or does not
            produce a boolean.
    """
    if constraint is None:
        return True

    lua = _new_runtime()
    scope = lua.globals()
    for var, value in zip(variables, values):
        if is_unbound(value):
            continue
        scope[var.name] = _lua_value(var, value)

    try:
        try:
            result = lua.eval(constraint)
        except LuaSyntaxError:
            # Not a bare expression; run it as a chunk ending in `return ...`.
            result = lua.execute(constraint)
    except LuaError as exc:
        raise ConstraintError(f"failed to evaluate constraint {constraint!r}: {exc}") from exc

    if not isinstance(result, bool):
        raise ConstraintError(f"expected a lua bool value from {constraint!r}, got {result!r}")

    logger.debug("Constraint %r evaluated to %s", constraint, result)
    return result
