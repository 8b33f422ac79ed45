"""CLI entry point for the fnscript interpreter.

Usage:
    python -m fnscript [-v|-vv|-vvv] [--strict] [program_file]
    python -m fnscript [-v...] --emit-ast [program_file]

Options:
  -v            Increase debug verbosity (can be repeated)
  --strict      Report characters and tokens the lexer and parser skipped
  --emit-ast    Parse the program and print its AST as JSON instead of running it

Without a program file the built-in sample program is executed. The `add`
and `print` builtins are registered in the root scope before execution.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .ast_json import ast_to_obj
from .errors import LexerError
from .interpreter import Interpreter
from .lexer import Lexer
from .parser import Parser
from .std import populate_builtins


SAMPLE_PROGRAM = r'''
import request from http_request
import request -> req from http_request

__fn = (a,b):<a is string, b is string Array>
       if(a and b same) - then,
         run add(a plus 3)
       otherwise - ret false
__

__fn = (a):<a is number>
       if ( a is realNumber and a not equal 0 ) - then,
          ret a
        __
__
'''


def configure_logging(verbosity: int) -> None:
    level = logging.DEBUG if verbosity > 0 else logging.INFO
    logging.basicConfig(level=level, format='%(message)s', stream=sys.stderr)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="fnscript language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--strict', action='store_true', help='report skipped characters and tokens')
    parser.add_argument('--emit-ast', action='store_true', help='print the AST as JSON instead of running')
    parser.add_argument('program', nargs='?', help='fnscript program file to execute')
    args = parser.parse_args(argv)
    configure_logging(args.v)

    if args.program:
        program_file = Path(args.program)
        if not program_file.exists():
            print(f"Error: file {program_file} not found", file=sys.stderr)
            sys.exit(1)
        with open(program_file, 'r', encoding='utf-8') as f:
            source = f.read()
    else:
        source = SAMPLE_PROGRAM

    lexer = Lexer(source, strict=args.strict)
    try:
        tokens = lexer.tokenize()
    except LexerError as e:
        print(f"Syntax error: {e}", file=sys.stderr)
        sys.exit(1)
    ast_parser = Parser(tokens, strict=args.strict)
    program = ast_parser.parse_program()
    for diagnostic in lexer.diagnostics + ast_parser.diagnostics:
        print(f"warning: {diagnostic}", file=sys.stderr)

    if args.emit_ast:
        print(json.dumps(ast_to_obj(program), ensure_ascii=False, indent=2))
        return

    interpreter = Interpreter(debug_level=args.v)
    populate_builtins(interpreter.global_env)
    interpreter.run(program)


if __name__ == '__main__':
    main()
