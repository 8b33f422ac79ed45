# fnscript language package
# This package provides a lexer, parser and tree-walking interpreter for fnscript.
from .interpreter import run_program, parse_program, execute, Interpreter
from .errors import FnScriptError, LexerError

__all__ = [
    'run_program',
    'parse_program',
    'execute',
    'Interpreter',
    'FnScriptError',
    'LexerError',
]
