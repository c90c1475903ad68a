"""String builtins."""

from typing import Any, List

from scopelang.builtin_function import BuiltinFunction, require_at_least
from scopelang.environment import Environment
from scopelang.errors import TypeMismatchError
from scopelang.types import ListVal, describe, expect_string


def populate_string_environment() -> Environment:
    string_env = Environment()

    def std_concat(args: List[Any]) -> Any:
        require_at_least('concat', args, 1)
        if all(isinstance(a, str) for a in args):
            return ''.join(args)
        if all(isinstance(a, ListVal) for a in args):
            return ListVal(tuple(item for a in args for item in a.items))
        found = ', '.join(describe(a) for a in args)
        raise TypeMismatchError('all strings or all lists', found, 'concat')

    def std_to_uppercase(args: List[Any]) -> Any:
        return expect_string(args[0], 'to_uppercase').upper()

    def std_to_lowercase(args: List[Any]) -> Any:
        return expect_string(args[0], 'to_lowercase').lower()

    string_env.bind('concat', BuiltinFunction('concat', None, std_concat))
    string_env.bind('to_uppercase', BuiltinFunction('to_uppercase', 1, std_to_uppercase))
    string_env.bind('to_lowercase', BuiltinFunction('to_lowercase', 1, std_to_lowercase))

    return string_env
