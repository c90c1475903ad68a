"""List builtins.

Lists are persistent: `set` and `sort` return new `ListVal` objects and
never touch the list they were given.
"""

from typing import Any, List

from scopelang.builtin_function import BuiltinFunction
from scopelang.environment import Environment
from scopelang.errors import IndexOutOfRangeError, TypeMismatchError
from scopelang.types import (
    ListVal, describe, expect_integer, expect_list, is_integer, values_equal,
)


def populate_list_environment() -> Environment:
    list_env = Environment()

    def checked_index(name: str, lst: ListVal, index: Any) -> int:
        index = expect_integer(index, f"{name} index")
        if index < 0 or index >= len(lst):
            raise IndexOutOfRangeError(f"{name}: index {index} out of range for list of length {len(lst)}")
        return index

    def std_as_list(args: List[Any]) -> Any:
        return ListVal(tuple(args))

    def std_get(args: List[Any]) -> Any:
        lst = expect_list(args[0], 'get')
        return lst.items[checked_index('get', lst, args[1])]

    def std_set(args: List[Any]) -> Any:
        lst = expect_list(args[0], 'set')
        index = checked_index('set', lst, args[1])
        return lst.replace(index, args[2])

    def std_length(args: List[Any]) -> Any:
        value = args[0]
        if isinstance(value, (ListVal, str)):
            return len(value)
        raise TypeMismatchError('list or string', describe(value), 'length')

    def std_sort(args: List[Any]) -> Any:
        lst = expect_list(args[0], 'sort')
        items = lst.items
        if all(is_integer(x) for x in items) or all(isinstance(x, str) for x in items):
            return ListVal(tuple(sorted(items)))
        raise TypeMismatchError('list of integers or list of strings', describe(lst), 'sort')

    def std_contains(args: List[Any]) -> Any:
        container, item = args
        if isinstance(container, ListVal):
            return any(values_equal(x, item) for x in container.items)
        if isinstance(container, str):
            if not isinstance(item, str):
                raise TypeMismatchError('string', describe(item), 'contains')
            return item in container
        raise TypeMismatchError('list or string', describe(container), 'contains')

    list_env.bind('as_list', BuiltinFunction('as_list', None, std_as_list))
    list_env.bind('get', BuiltinFunction('get', 2, std_get))
    list_env.bind('set', BuiltinFunction('set', 3, std_set))
    list_env.bind('length', BuiltinFunction('length', 1, std_length))
    list_env.bind('sort', BuiltinFunction('sort', 1, std_sort))
    list_env.bind('contains', BuiltinFunction('contains', 2, std_contains))

    return list_env
