from dataclasses import dataclass
from typing import Any


class FnScriptError(Exception):
    """Base class for errors raised by the fnscript toolchain."""


class LexerError(FnScriptError):
    """Raised when the source cannot be turned into well-formed tokens."""
    def __init__(self, message: str, line: int, column: int):
        super().__init__(f"{message} at {line}:{column}")
        self.line = line
        self.column = column


class ReturnSignal(Exception):
    """Internal carrier for a `ret` value leaving a function body."""
    def __init__(self, value: Any):
        super().__init__('return')
        self.value = value


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable problem noticed while lexing or parsing in strict mode."""
    message: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}: {self.message}"
