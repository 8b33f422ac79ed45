"""Lexer for fnscript.

Scanning is delegated to a Lark basic lexer built from the terminal set
below. Lark only splits the text into raw lexemes; turning those lexemes into
fnscript tokens (keywords, operators, literals, function markers) happens in
`Lexer.tokenize`. A catch-all `STRAY` terminal guarantees the scan never
fails: characters the language does not recognize are dropped, and in strict
mode reported as diagnostics.

Only two conditions abort lexing: an unterminated string literal and a
malformed number such as `1.2.3`.
"""

from __future__ import annotations

from typing import List, Tuple

from lark import Lark

from . import tokens as T
from .errors import Diagnostic, LexerError
from .tokens import Token


LEXER_GRAMMAR = r"""
    start: lexeme*
    lexeme: LPAREN | RPAREN | COMMA | COLON | LT | GT
          | ARROW | DASH | EQUAL
          | WORD | NUMBER | STRING | STRAY

    LPAREN: "("
    RPAREN: ")"
    COMMA: ","
    COLON: ":"
    LT: "<"
    GT: ">"
    ARROW: "->"
    DASH: "-"
    EQUAL: "="

    WORD: /[A-Za-z_]\w*/
    NUMBER: /[0-9][0-9.]*/
    STRING: /"[^"]*"?/
    STRAY.-1: /./s

    WS: /\s+/
    %ignore WS
"""


LEXEME_SCANNER = Lark(
    LEXER_GRAMMAR,
    parser='lalr',
    lexer='basic',
)


SYMBOLS = {
    'LPAREN': T.LPAREN,
    'RPAREN': T.RPAREN,
    'COMMA': T.COMMA,
    'COLON': T.COLON,
    'LT': T.LT,
    'GT': T.GT,
    'ARROW': T.ARROW,
    'EQUAL': T.ASSIGN,
}


class Lexer:
    def __init__(self, source: str, strict: bool = False):
        self.source = source
        self.strict = strict
        self.diagnostics: List[Diagnostic] = []

    def tokenize(self) -> Tuple[Token, ...]:
        result: List[Token] = []
        for lexeme in LEXEME_SCANNER.lex(self.source):
            kind = lexeme.type
            line, column = lexeme.line, lexeme.column
            if kind in SYMBOLS:
                result.append(Token(SYMBOLS[kind], None, line, column))
            elif kind == 'DASH':
                # cosmetic connector, as in "- then," or "- ret"
                continue
            elif kind == 'WORD':
                result.append(self.classify_word(str(lexeme), line, column))
            elif kind == 'NUMBER':
                result.append(self.number(str(lexeme), line, column))
            elif kind == 'STRING':
                result.append(self.string(str(lexeme), line, column))
            else:
                if self.strict:
                    self.diagnostics.append(
                        Diagnostic(f"unrecognized character {str(lexeme)!r}", line, column))
        line, column = self.end_position()
        result.append(Token(T.EOF, None, line, column))
        return tuple(result)

    def classify_word(self, word: str, line: int, column: int) -> Token:
        if word.startswith('_'):
            if word == T.FN_START_WORD:
                return Token(T.FN_START, None, line, column)
            if word == T.BLOCK_END_WORD:
                return Token(T.BLOCK_END, None, line, column)
            return Token(T.IDENT, word, line, column)
        if word in T.KEYWORDS:
            return Token(T.KEYWORDS[word], None, line, column)
        if word in T.OPERATORS:
            return Token(T.OPERATOR, word, line, column)
        if word in T.BOOLEANS:
            return Token(T.BOOLEAN, T.BOOLEANS[word], line, column)
        return Token(T.IDENT, word, line, column)

    def number(self, text: str, line: int, column: int) -> Token:
        try:
            value = float(text)
        except ValueError:
            raise LexerError(f"malformed number {text!r}", line, column)
        return Token(T.NUMBER, value, line, column)

    def string(self, text: str, line: int, column: int) -> Token:
        if len(text) < 2 or not text.endswith('"'):
            raise LexerError("unterminated string literal", line, column)
        return Token(T.STRING, text[1:-1], line, column)

    def end_position(self) -> Tuple[int, int]:
        line = self.source.count('\n') + 1
        last_break = self.source.rfind('\n')
        return line, len(self.source) - last_break


def tokenize(source: str, strict: bool = False) -> Tuple[Token, ...]:
    """Convert source text into a tuple of tokens ending with EOF."""
    return Lexer(source, strict=strict).tokenize()
