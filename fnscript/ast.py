"""Abstract Syntax Tree (AST) definitions for fnscript.

The parser builds these nodes and the interpreter only reads them. Every node
is a frozen dataclass whose sequences are tuples, so a parsed program can be
shared between function values and re-walked on every call without copying.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class Literal:
    value: Any
    kind: str  # 'Str', 'Num', 'Bool' or 'Array' (value is a tuple of Literal)

    @staticmethod
    def string(value: str) -> 'Literal':
        return Literal(value, 'Str')

    @staticmethod
    def number(value: float) -> 'Literal':
        return Literal(float(value), 'Num')

    @staticmethod
    def boolean(value: bool) -> 'Literal':
        return Literal(bool(value), 'Bool')

    @staticmethod
    def array(items) -> 'Literal':
        return Literal(tuple(items), 'Array')


# Expressions

@dataclass(frozen=True)
class Import(Node):
    name: str
    alias: Optional[str]
    module: str

    @property
    def bound_name(self) -> str:
        return self.alias if self.alias is not None else self.name


@dataclass(frozen=True)
class Function(Node):
    params: Tuple[str, ...]
    types: Tuple[Tuple[str, str], ...]
    body: Tuple['Stmt', ...]


@dataclass(frozen=True)
class Call(Node):
    callee: Node
    args: Tuple[Node, ...] = ()


@dataclass(frozen=True)
class If(Node):
    condition: Node
    then_body: Tuple['Stmt', ...]
    else_body: Optional[Tuple['Stmt', ...]] = None


@dataclass(frozen=True)
class Run(Node):
    expr: Node


@dataclass(frozen=True)
class Return(Node):
    expr: Node


@dataclass(frozen=True)
class Binary(Node):
    left: Node
    op: str
    right: Node


@dataclass(frozen=True)
class Var(Node):
    name: str


@dataclass(frozen=True)
class Lit(Node):
    literal: Literal


# Statements

@dataclass(frozen=True)
class Stmt(Node):
    pass


@dataclass(frozen=True)
class ExprStmt(Stmt):
    expr: Node


@dataclass(frozen=True)
class FunctionDef(Stmt):
    function: Function
    name: Optional[str] = None  # set by `__fn <name> = (...)`


@dataclass(frozen=True)
class ImportStmt(Stmt):
    import_: Import


@dataclass(frozen=True)
class EmptyStmt(Stmt):
    pass
