"""Arithmetic, comparison and predicate builtins."""

from functools import reduce
from typing import Any, List

from scopelang.builtin_function import BuiltinFunction, require_at_least
from scopelang.environment import Environment
from scopelang.errors import DivisionByZeroError, TypeMismatchError
from scopelang.types import check_i64, describe, expect_integer, is_integer, values_equal


def truncating_div(a: int, b: int) -> int:
    """Integer division rounding toward zero, like 64-bit machine division."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def populate_core_environment() -> Environment:
    core_env = Environment()

    def integers(name: str, args: List[Any]) -> List[int]:
        return [expect_integer(a, f"{name} argument {i + 1}") for i, a in enumerate(args)]

    def std_add(args: List[Any]) -> Any:
        require_at_least('add', args, 1)
        return check_i64(sum(integers('add', args)))

    def std_sub(args: List[Any]) -> Any:
        require_at_least('sub', args, 1)
        return check_i64(reduce(lambda first, x: first - x, integers('sub', args)))

    def std_mul(args: List[Any]) -> Any:
        require_at_least('mul', args, 1)
        return check_i64(reduce(lambda acc, x: acc * x, integers('mul', args), 1))

    def std_div(args: List[Any]) -> Any:
        a, b = integers('div', args)
        if b == 0:
            raise DivisionByZeroError('division by zero')
        return check_i64(truncating_div(a, b))

    def std_rem(args: List[Any]) -> Any:
        a, b = integers('rem', args)
        if b == 0:
            raise DivisionByZeroError('remainder by zero')
        # sign follows the dividend
        return a - b * truncating_div(a, b)

    def std_equal(args: List[Any]) -> Any:
        require_at_least('equal?', args, 2)
        first = args[0]
        return all(values_equal(first, other) for other in args[1:])

    def ordered(name: str, args: List[Any]):
        a, b = args
        if is_integer(a) and is_integer(b):
            return a, b
        if isinstance(a, str) and isinstance(b, str):
            return a, b
        raise TypeMismatchError('two integers or two strings', f"{describe(a)} and {describe(b)}", name)

    def std_less(args: List[Any]) -> Any:
        a, b = ordered('less?', args)
        return a < b

    def std_greater(args: List[Any]) -> Any:
        a, b = ordered('greater?', args)
        return a > b

    def std_zero(args: List[Any]) -> Any:
        return expect_integer(args[0], 'zero?') == 0

    core_env.bind('add', BuiltinFunction('add', None, std_add))
    core_env.bind('sub', BuiltinFunction('sub', None, std_sub))
    core_env.bind('mul', BuiltinFunction('mul', None, std_mul))
    core_env.bind('div', BuiltinFunction('div', 2, std_div))
    core_env.bind('rem', BuiltinFunction('rem', 2, std_rem))
    core_env.bind('equal?', BuiltinFunction('equal?', None, std_equal))
    core_env.bind('less?', BuiltinFunction('less?', 2, std_less))
    core_env.bind('greater?', BuiltinFunction('greater?', 2, std_greater))
    core_env.bind('zero?', BuiltinFunction('zero?', 1, std_zero))
    core_env.bind('true', True)
    core_env.bind('false', False)

    return core_env
