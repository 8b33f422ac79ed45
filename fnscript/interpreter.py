"""Tree-walking interpreter for fnscript.

This module ties the pipeline together: `parse_program` lexes and parses
source text, and `Interpreter` walks the resulting statements against a
chain of `Environment` scopes. Evaluation is permissive: unknown names,
unknown modules, arity mismatches and operand type mismatches all produce
null instead of an error. The only errors that stop a run are lexer errors,
raised before execution starts.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .ast import (
    Binary, Call, EmptyStmt, ExprStmt, FunctionDef, If, Import, ImportStmt,
    Lit, Node, Return, Run, Stmt, Function, Var,
)
from .builtin_function import BuiltinFunction
from .environment import Environment
from .errors import FnScriptError, ReturnSignal
from .lexer import Lexer
from .parser import Parser
from .std import default_registry
from .types import FunctionValue, format_number, is_number, literal_value, repr_value, type_name

logger = logging.getLogger("fnscript.interpreter")
logger.addHandler(logging.NullHandler())

# Absolute tolerance used by `same` and `not equal` on numbers.
EPSILON = 1e-9


def parse_program(source: str, strict: bool = False) -> Tuple[Stmt, ...]:
    """Lex and parse source text into a tuple of top-level statements."""
    tokens = Lexer(source, strict=strict).tokenize()
    return Parser(tokens, strict=strict).parse_program()


###############################################################################
# Interpreter implementation
###############################################################################


class Interpreter:
    """Core interpreter that executes fnscript statements."""
    def __init__(self, registry: Optional[Dict[str, Any]] = None, debug_level: int = 0):
        self.global_env = Environment()
        self.registry: Dict[str, Any] = default_registry() if registry is None else dict(registry)
        self.functions: Dict[str, FunctionValue] = {}
        self.debug_level = debug_level
        self._fn_counter = 0

    def debug(self, msg: str, level: int = 1):
        if self.debug_level >= level:
            logger.debug(msg)

    def register(self, name: str, value: Any, env: Optional[Environment] = None) -> None:
        """Bind a host-provided value (usually a builtin) before running."""
        (env or self.global_env).set(name, value)

    # Public API
    def run(self, program: Sequence[Stmt], env: Optional[Environment] = None) -> None:
        if env is None:
            env = self.global_env
        signal = self.execute_block(program, env)
        if signal is not None:
            self.debug(f"top-level ret {repr_value(signal.value)} ended the run")

    def execute_block(self, statements: Sequence[Stmt], env: Environment) -> Optional[ReturnSignal]:
        for stmt in statements:
            result = self.execute(stmt, env)
            # propagate return signals
            if isinstance(result, ReturnSignal):
                return result
        return None

    def execute(self, node: Stmt, env: Environment) -> Optional[ReturnSignal]:
        if isinstance(node, ImportStmt):
            self.execute_import(node.import_, env)
            return None
        if isinstance(node, FunctionDef):
            self.define_function(node.function, node.name, env)
            return None
        if isinstance(node, ExprStmt):
            expr = node.expr
            if isinstance(expr, Return):
                return ReturnSignal(self.evaluate_return(expr, env))
            if isinstance(expr, If):
                return self.execute_if(expr, env)
            self.evaluate(expr, env)
            return None
        if isinstance(node, EmptyStmt):
            return None
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def execute_import(self, node: Import, env: Environment) -> None:
        value = self.registry.get(node.module)
        if value is None:
            self.debug(f"import: unknown module {node.module!r}, {node.bound_name} is null", 2)
        else:
            self.debug(f"import {node.bound_name} from {node.module}", 2)
        env.set(node.bound_name, value)

    def define_function(self, node: Function, name: Optional[str], env: Environment) -> FunctionValue:
        if name is None:
            name = f"__fn_{self._fn_counter}"
            self._fn_counter += 1
            # skip generated names a program already bound explicitly
            while name in self.functions:
                name = f"__fn_{self._fn_counter}"
                self._fn_counter += 1
        func_value = FunctionValue(name, node.params, node.types, node.body, env)
        env.set(name, func_value)
        self.functions[name] = func_value
        logger.info("Registered function %s", name)
        return func_value

    def execute_if(self, node: If, env: Environment) -> Optional[ReturnSignal]:
        try:
            cond = self.evaluate(node.condition, env)
        except FnScriptError as ex:
            self.debug(f"if condition failed: {ex}", 3)
            cond = None
        self.debug(f"if condition {repr_value(cond)}", 3)
        if cond is True:
            return self.execute_block(node.then_body, env)
        if node.else_body is not None:
            return self.execute_block(node.else_body, env)
        return None

    def evaluate_return(self, node: Return, env: Environment) -> Any:
        value = self.evaluate(node.expr, env)
        logger.info("Return => %s", repr_value(value))
        return value

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, Lit):
            return literal_value(node.literal)
        if isinstance(node, Var):
            return env.get(node.name)
        if isinstance(node, Binary):
            # both operands are always evaluated
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.op, left, right)
        if isinstance(node, Call):
            func = self.evaluate(node.callee, env)
            args = [self.evaluate(arg, env) for arg in node.args]
            return self.call_function(func, args)
        if isinstance(node, Run):
            value = self.evaluate(node.expr, env)
            self.debug(f"run => {repr_value(value)}", 3)
            return value
        if isinstance(node, Return):
            return self.evaluate_return(node, env)
        if isinstance(node, If):
            signal = self.execute_if(node, env)
            return signal.value if signal is not None else None
        if isinstance(node, Function):
            return FunctionValue('<anonymous>', node.params, node.types, node.body, env)
        if isinstance(node, Import):
            return self.registry.get(node.module)
        return None

    def call_function(self, func: Any, args: List[Any]) -> Any:
        if isinstance(func, BuiltinFunction):
            if func.arity is not None:
                args = (list(args) + [None] * func.arity)[:func.arity]
            self.debug(f"call {func.name} with {len(args)} argument(s)", 3)
            return func.fn(args)
        if isinstance(func, FunctionValue):
            if len(args) != len(func.params):
                self.debug(f"{func.name} expects {len(func.params)} arguments, got {len(args)}", 2)
            # Create new environment for call; closure's env is parent
            call_env = func.env.child_scope()
            for index, param in enumerate(func.params):
                call_env.set(param, args[index] if index < len(args) else None)
            self.debug(f"call {func.name}", 3)
            signal = self.execute_block(func.body, call_env)
            return signal.value if signal is not None else None
        self.debug(f"call of non-function {type_name(func)} {repr_value(func)} is null", 2)
        return None

    def apply_binary_op(self, op: str, a: Any, b: Any) -> Any:
        if op == 'plus':
            if is_number(a) and is_number(b):
                return float(a) + float(b)
            if isinstance(a, str) and is_number(b):
                return a + format_number(b)
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            self.debug(f"plus on {type_name(a)} and {type_name(b)} is null", 2)
            return None
        if op == 'and':
            if isinstance(a, bool) and isinstance(b, bool):
                return a and b
            self.debug(f"and on {type_name(a)} and {type_name(b)} is null", 2)
            return None
        if op == 'same':
            if isinstance(a, str) and isinstance(b, str):
                return a == b
            if is_number(a) and is_number(b):
                return abs(float(a) - float(b)) < EPSILON
            return False
        if op == 'not_equal':
            if is_number(a) and is_number(b):
                return abs(float(a) - float(b)) > EPSILON
            if isinstance(a, str) and isinstance(b, str):
                return a != b
            return True
        return None


def execute(statements: Sequence[Stmt], env: Environment,
            registry: Optional[Dict[str, Any]] = None, debug_level: int = 0) -> Interpreter:
    """Execute statements against an existing root environment."""
    interpreter = Interpreter(registry=registry, debug_level=debug_level)
    interpreter.global_env = env
    interpreter.run(statements, env)
    return interpreter


def run_program(source: str, registry: Optional[Dict[str, Any]] = None, debug_level: int = 0,
                builtins: Optional[Callable[[Environment], Any]] = None) -> Interpreter:
    """Convenience function to parse and run a program from source text.

    `builtins`, when given, is called with the root environment before
    execution so the host can register its own functions.
    """
    statements = parse_program(source)
    interpreter = Interpreter(registry=registry, debug_level=debug_level)
    if builtins is not None:
        builtins(interpreter.global_env)
    interpreter.run(statements)
    return interpreter
