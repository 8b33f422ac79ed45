"""Builtins a host can make available to fnscript programs.

`default_registry` maps module names to the values an `import` statement
binds. `populate_builtins` seeds a root environment with host functions that
programs reach by name, without an import.
"""

from typing import Any, Dict, List

from fnscript.builtin_function import BuiltinFunction
from fnscript.environment import Environment
from fnscript.types import FunctionValue, is_number, to_string


def default_registry() -> Dict[str, Any]:
    # http_request is a placeholder: a one-parameter function with no body.
    registry_env = Environment()
    return {
        'http_request': FunctionValue('http_request', ('url',), (), (), registry_env),
    }


def std_add(args: List[Any]) -> Any:
    if not all(is_number(a) for a in args):
        return None
    return float(sum(args))


def std_print(args: List[Any]) -> Any:
    print(''.join(to_string(a) for a in args))
    return None


def populate_builtins(env: Environment) -> Environment:
    env.set('add', BuiltinFunction('add', None, std_add))
    env.set('print', BuiltinFunction('print', None, std_print))
    return env
