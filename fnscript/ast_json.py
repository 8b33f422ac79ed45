"""JSON serialization/deserialization for the fnscript AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. It supports a full round-trip for all
expression and statement nodes and for nested literals.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Binary,
    Call,
    EmptyStmt,
    ExprStmt,
    Function,
    FunctionDef,
    If,
    Import,
    ImportStmt,
    Lit,
    Literal,
    Return,
    Run,
    Var,
)


def literal_to_obj(lit: Literal) -> Dict[str, Any]:
    if lit.kind == 'Array':
        return {"kind": "Array", "value": [literal_to_obj(item) for item in lit.value]}
    return {"kind": lit.kind, "value": lit.value}


def literal_from_obj(o: Dict[str, Any]) -> Literal:
    if o["kind"] == 'Array':
        return Literal.array(literal_from_obj(x) for x in o["value"])
    return Literal(o["value"], o["kind"])


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, (list, tuple)):
        return [ast_to_obj(n) for n in node]

    # Statements
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, FunctionDef):
        return {"type": "FunctionDef", "name": node.name, "function": ast_to_obj(node.function)}
    if isinstance(node, ImportStmt):
        return {"type": "ImportStmt", "import": ast_to_obj(node.import_)}
    if isinstance(node, EmptyStmt):
        return {"type": "EmptyStmt"}

    # Expressions
    if isinstance(node, Import):
        return {"type": "Import", "name": node.name, "alias": node.alias, "module": node.module}
    if isinstance(node, Function):
        return {
            "type": "Function",
            "params": list(node.params),
            "types": [[param, typ] for param, typ in node.types],
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, Call):
        return {"type": "Call", "callee": ast_to_obj(node.callee), "args": ast_to_obj(node.args)}
    if isinstance(node, If):
        return {
            "type": "If",
            "condition": ast_to_obj(node.condition),
            "then_body": ast_to_obj(node.then_body),
            "else_body": ast_to_obj(node.else_body),
        }
    if isinstance(node, Run):
        return {"type": "Run", "expr": ast_to_obj(node.expr)}
    if isinstance(node, Return):
        return {"type": "Return", "expr": ast_to_obj(node.expr)}
    if isinstance(node, Binary):
        return {
            "type": "Binary",
            "left": ast_to_obj(node.left),
            "op": node.op,
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Var):
        return {"type": "Var", "name": node.name}
    if isinstance(node, Lit):
        return {"type": "Lit", "literal": literal_to_obj(node.literal)}

    raise TypeError(f"Unsupported AST node for serialization: {type(node).__name__}")


def _body(o: Any):
    return tuple(ast_from_obj(x) for x in o)


def ast_from_obj(o: Any) -> Any:
    if o is None:
        return None
    if isinstance(o, list):
        return _body(o)

    t = o.get("type")
    if t == "ExprStmt":
        return ExprStmt(ast_from_obj(o["expr"]))
    if t == "FunctionDef":
        return FunctionDef(ast_from_obj(o["function"]), o.get("name"))
    if t == "ImportStmt":
        return ImportStmt(ast_from_obj(o["import"]))
    if t == "EmptyStmt":
        return EmptyStmt()
    if t == "Import":
        return Import(o["name"], o.get("alias"), o["module"])
    if t == "Function":
        return Function(
            tuple(o["params"]),
            tuple((param, typ) for param, typ in o.get("types", [])),
            _body(o["body"]),
        )
    if t == "Call":
        return Call(ast_from_obj(o["callee"]), _body(o.get("args", [])))
    if t == "If":
        else_body = o.get("else_body")
        return If(
            ast_from_obj(o["condition"]),
            _body(o["then_body"]),
            _body(else_body) if else_body is not None else None,
        )
    if t == "Run":
        return Run(ast_from_obj(o["expr"]))
    if t == "Return":
        return Return(ast_from_obj(o["expr"]))
    if t == "Binary":
        return Binary(ast_from_obj(o["left"]), o["op"], ast_from_obj(o["right"]))
    if t == "Var":
        return Var(o["name"])
    if t == "Lit":
        return Lit(literal_from_obj(o["literal"]))

    raise ValueError(f"Unknown AST object type: {t}")
