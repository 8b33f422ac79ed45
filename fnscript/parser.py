"""Recursive-descent parser for fnscript.

The grammar is small and forgiving. At the top level only `import`
statements and `__fn ... __` definitions are recognized; inside a function
body only `if`, `run` and `ret` start statements. Every other token is
skipped so that one malformed line never stops the rest of the program from
parsing. In strict mode each skipped token is reported as a `Diagnostic` on
`Parser.diagnostics`; the resulting tree is the same in both modes.

Expressions are deliberately limited to a single operator application,
`operand [operator operand]`, where an operand is an identifier, a literal
or a parenthesized simple expression.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from . import tokens as T
from .ast import (
    Binary, ExprStmt, Function, FunctionDef, If, Import,
    ImportStmt, Lit, Literal, Node, Return, Run, Stmt, Var,
)
from .errors import Diagnostic
from .tokens import Token


def describe(token: Token) -> str:
    if token.value is None:
        return token.type
    return f"{token.type} {token.value!r}"


class Parser:
    def __init__(self, tokens: Sequence[Token], strict: bool = False):
        self.tokens = list(tokens)
        if not self.tokens or self.tokens[-1].type != T.EOF:
            last = self.tokens[-1] if self.tokens else None
            line = last.line if last else 1
            column = last.column if last else 1
            self.tokens.append(Token(T.EOF, None, line, column))
        self.pos = 0
        self.strict = strict
        self.diagnostics: List[Diagnostic] = []

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        if token.type != T.EOF:
            self.pos += 1
        return token

    def match(self, *types: str) -> bool:
        return self.peek().type in types

    def skip(self, context: str) -> None:
        token = self.advance()
        if self.strict and token.type != T.EOF:
            self.diagnostics.append(
                Diagnostic(f"skipped {describe(token)} {context}", token.line, token.column))

    def note(self, message: str, token: Token) -> None:
        if self.strict:
            self.diagnostics.append(Diagnostic(message, token.line, token.column))

    def parse_program(self) -> Tuple[Stmt, ...]:
        statements: List[Stmt] = []
        while not self.match(T.EOF):
            if self.match(T.IMPORT):
                statements.append(self.parse_import_stmt())
            elif self.match(T.FN_START):
                statements.append(self.parse_func_def())
            else:
                self.skip('at top level')
        return tuple(statements)

    def parse_import_stmt(self) -> ImportStmt:
        # import <name> [-> <alias>] from <module>
        self.advance()
        name = self.expect_name('import name')
        alias: Optional[str] = None
        if self.match(T.ARROW):
            self.advance()
            alias = self.expect_name('import alias')
        if self.match(T.FROM):
            self.advance()
        else:
            self.note("expected 'from' in import", self.peek())
        if self.match(T.IDENT, T.STRING):
            module = self.advance().value
        else:
            self.note('expected module name in import', self.peek())
            module = ''
        return ImportStmt(Import(name, alias, module))

    def expect_name(self, what: str) -> str:
        if self.match(T.IDENT):
            return self.advance().value
        self.note(f"expected {what}", self.peek())
        return ''

    def parse_func_def(self) -> FunctionDef:
        self.advance()  # __fn
        name: Optional[str] = None
        if self.match(T.IDENT):
            name = self.advance().value
        if self.match(T.ASSIGN):
            self.advance()
        params = self.parse_param_list()
        types: Tuple[Tuple[str, str], ...] = ()
        if self.match(T.COLON):
            self.advance()
            types = self.parse_type_annotations()
        body = self.parse_body()
        return FunctionDef(Function(params, types, body), name)

    def parse_param_list(self) -> Tuple[str, ...]:
        params: List[str] = []
        if not self.match(T.LPAREN):
            self.note('expected parameter list', self.peek())
            return ()
        self.advance()
        while not self.match(T.RPAREN, T.EOF):
            if self.match(T.IDENT):
                params.append(self.advance().value)
            elif self.match(T.COMMA):
                self.advance()
            else:
                self.skip('in parameter list')
        if self.match(T.RPAREN):
            self.advance()
        return tuple(params)

    def parse_type_annotations(self) -> Tuple[Tuple[str, str], ...]:
        # : < a is string, b is number >
        types: List[Tuple[str, str]] = []
        if not self.match(T.LT):
            self.note("expected '<' after ':'", self.peek())
            return ()
        self.advance()
        while not self.match(T.GT, T.EOF):
            if self.match(T.COMMA):
                self.advance()
                continue
            if not self.match(T.IDENT):
                self.skip('in type annotations')
                continue
            param = self.advance().value
            if not (self.match(T.IDENT) and self.peek().value.lower() == 'is'):
                self.note(f"expected 'is' after {param!r}", self.peek())
                continue
            self.advance()
            if not self.match(T.IDENT):
                self.note(f"missing type for {param!r}", self.peek())
                continue
            types.append((param, self.advance().value))
            # one type word per clause; the rest of the clause is ignored
            while not self.match(T.COMMA, T.GT, T.EOF):
                self.skip(f"after type of {param!r}")
        if self.match(T.GT):
            self.advance()
        return tuple(types)

    def parse_body(self) -> Tuple[Stmt, ...]:
        body: List[Stmt] = []
        while True:
            if self.match(T.BLOCK_END):
                self.advance()
                break
            if self.match(T.EOF):
                self.note('function body not closed with __', self.peek())
                break
            stmt = self.parse_body_statement()
            if stmt is None:
                self.skip('in function body')
            else:
                body.append(stmt)
        return tuple(body)

    def parse_body_statement(self) -> Optional[Stmt]:
        if self.match(T.IF):
            return ExprStmt(self.parse_if())
        return self.parse_branch_statement()

    def parse_branch_statement(self) -> Optional[Stmt]:
        if self.match(T.RUN):
            self.advance()
            return ExprStmt(Run(self.parse_simple_expr()))
        if self.match(T.RET):
            self.advance()
            return ExprStmt(Return(self.parse_simple_expr()))
        return None

    def parse_if(self) -> If:
        self.advance()  # if
        condition = self.parse_simple_expr()
        if self.match(T.THEN):
            self.advance()
        then_body = self.parse_branch(stop_at_otherwise=True)
        else_body = None
        if self.match(T.OTHERWISE):
            self.advance()
            else_body = self.parse_branch(stop_at_otherwise=False)
        return If(condition, then_body, else_body)

    def parse_branch(self, stop_at_otherwise: bool) -> Tuple[Stmt, ...]:
        stmts: List[Stmt] = []
        while not self.match(T.BLOCK_END, T.EOF):
            if self.match(T.OTHERWISE):
                if stop_at_otherwise:
                    break
                self.skip('after otherwise branch')
                continue
            stmt = self.parse_branch_statement()
            if stmt is None:
                self.skip('in conditional branch')
            else:
                stmts.append(stmt)
        return tuple(stmts)

    def parse_simple_expr(self) -> Node:
        left = self.parse_operand()
        if not self.match(T.OPERATOR):
            return left
        op = self.advance().value
        if op == 'not' and self.match(T.IDENT) and self.peek().value == 'equal':
            self.advance()
            op = 'not_equal'
        right = self.parse_operand()
        return Binary(left, op, right)

    def parse_operand(self) -> Node:
        token = self.peek()
        if token.type == T.IDENT:
            self.advance()
            return Var(token.value)
        if token.type == T.STRING:
            self.advance()
            return Lit(Literal.string(token.value))
        if token.type == T.NUMBER:
            self.advance()
            return Lit(Literal.number(token.value))
        if token.type == T.BOOLEAN:
            self.advance()
            return Lit(Literal.boolean(token.value))
        if token.type == T.LPAREN:
            self.advance()
            inner = self.parse_simple_expr()
            if self.match(T.RPAREN):
                self.advance()
            else:
                self.note("expected ')'", self.peek())
            return inner
        # Unknown operand: consume it (never the block end) and read it as false.
        self.note(f"expected operand, got {describe(token)}", token)
        if token.type not in (T.BLOCK_END, T.OTHERWISE):
            self.advance()
        return Lit(Literal.boolean(False))


def parse(tokens: Sequence[Token], strict: bool = False) -> Tuple[Stmt, ...]:
    """Parse a token sequence into a tuple of top-level statements."""
    return Parser(tokens, strict=strict).parse_program()

