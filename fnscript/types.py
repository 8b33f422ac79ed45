"""Runtime values and helpers for fnscript.

Values are represented by plain Python objects:

* strings are `str`
* numbers are `float`
* booleans are `bool`
* arrays are `list`
* functions are `FunctionValue` (user defined) or `BuiltinFunction`
* null is `None`

`FunctionValue` is the only runtime structure defined here. It keeps a
reference to the environment it was defined in, so a function body can see
the bindings that were visible at its definition site.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Tuple, TYPE_CHECKING

from .ast import Literal, Stmt
from .builtin_function import BuiltinFunction

if TYPE_CHECKING:
    from .environment import Environment


class FunctionValue:
    """Represents a user-defined fnscript function (a closure)."""
    def __init__(self, name: str, params: Tuple[str, ...], types: Tuple[Tuple[str, str], ...],
                 body: Tuple[Stmt, ...], env: 'Environment'):
        self.name = name
        self.params = tuple(params)
        self.types = tuple(types)
        self.body = tuple(body)
        self.env = env  # defining scope, shared by reference

    def declared_type(self, param: str):
        for name, declared in self.types:
            if name == param:
                return declared
        return None

    def __repr__(self) -> str:
        return f"<function {self.name}({', '.join(self.params)})>"


def is_number(value: Any) -> bool:
    # bool is a subclass of int; keep booleans out of arithmetic
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_function(value: Any) -> bool:
    return isinstance(value, (FunctionValue, BuiltinFunction))


def literal_value(literal: Literal) -> Any:
    """Convert an AST literal into the runtime value it denotes."""
    if literal.kind == 'Str':
        return literal.value
    if literal.kind == 'Num':
        return float(literal.value)
    if literal.kind == 'Bool':
        return bool(literal.value)
    if literal.kind == 'Array':
        return [literal_value(item) for item in literal.value]
    raise ValueError(f"unknown literal kind {literal.kind!r}")


def format_number(value: float) -> str:
    """Render a number the way string concatenation shows it.

    Integral values have no fractional part (`3.0` renders as `3`); other
    values are written out in plain decimal notation (`1e-07` renders as
    `0.0000001`).
    """
    value = float(value)
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), 'f')


def to_string(value: Any) -> str:
    """Convert a value to its user-visible string form."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if is_number(value):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return '[' + ', '.join(repr_value(item) for item in value) + ']'
    return repr(value)


def repr_value(value: Any) -> str:
    """Like `to_string`, but quotes strings so they read unambiguously in logs."""
    if isinstance(value, str):
        return '"' + value + '"'
    return to_string(value)


def type_name(value: Any) -> str:
    """Return the fnscript type name of a runtime value."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'boolean'
    if is_number(value):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, list):
        return 'array'
    if is_function(value):
        return 'function'
    return type(value).__name__
