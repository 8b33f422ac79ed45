"""Token definitions shared by the lexer and the parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Structural symbols
LPAREN = 'LPAREN'
RPAREN = 'RPAREN'
COMMA = 'COMMA'
COLON = 'COLON'
LT = 'LT'
GT = 'GT'
ARROW = 'ARROW'
ASSIGN = 'ASSIGN'

# Reserved words
IMPORT = 'IMPORT'
FROM = 'FROM'
IF = 'IF'
THEN = 'THEN'
OTHERWISE = 'OTHERWISE'
RUN = 'RUN'
RET = 'RET'
FN_START = 'FN_START'
BLOCK_END = 'BLOCK_END'

# Names and literals
IDENT = 'IDENT'
OPERATOR = 'OPERATOR'
STRING = 'STRING'
NUMBER = 'NUMBER'
BOOLEAN = 'BOOLEAN'

EOF = 'EOF'

KEYWORDS = {
    'import': IMPORT,
    'from': FROM,
    'if': IF,
    'then': THEN,
    'otherwise': OTHERWISE,
    'run': RUN,
    'ret': RET,
}

OPERATORS = {'plus', 'and', 'same', 'not'}

BOOLEANS = {'true': True, 'false': False}

FN_START_WORD = '__fn'
BLOCK_END_WORD = '__'


@dataclass(frozen=True)
class Token:
    type: str
    value: Any
    line: int
    column: int

    def __repr__(self) -> str:
        if self.value is None:
            return f"Token({self.type})"
        return f"Token({self.type}, {self.value!r})"
