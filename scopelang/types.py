"""Runtime value model for scopelang.

Values are represented with plain Python objects where possible:

* Integer -> `int` (kept within the signed 64-bit range)
* Boolean -> `bool`
* String  -> `str`
* List    -> `ListVal`, an immutable wrapper around a tuple
* Function -> `Closure` for user lambdas or `BuiltinFunction` for
  natives (see `builtin_function`)

Because `bool` is a subclass of `int` in Python, every check in this
module tests for booleans first.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple, TYPE_CHECKING

from .builtin_function import BuiltinFunction
from .errors import IntegerOverflowError, TypeMismatchError

if TYPE_CHECKING:
    from .ast import Block
    from .environment import Environment


I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class ListVal:
    """A persistent list value.

    The items are stored in a tuple so a `ListVal` can never be changed
    in place. Operations such as `set` and `sort` build a new `ListVal`.
    """
    items: Tuple[Any, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def replace(self, index: int, value: Any) -> 'ListVal':
        items = list(self.items)
        items[index] = value
        return ListVal(tuple(items))


@dataclass(eq=False)
class Closure:
    """A user-defined function.

    `env` is the frame captured when the lambda was evaluated under
    lexical scoping. Under dynamic scoping it is None and free names are
    resolved from the caller's frame at call time.
    """
    params: List[str]
    body: 'Block'
    env: Optional['Environment'] = field(default=None, repr=False)
    name: str = 'lambda'

    def __repr__(self) -> str:
        return f"<function {self.name}>"


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_function(value: Any) -> bool:
    return isinstance(value, (Closure, BuiltinFunction))


def check_i64(value: int) -> int:
    if value < I64_MIN or value > I64_MAX:
        raise IntegerOverflowError(f"integer overflow: {value} does not fit in 64 bits")
    return value


def type_name(value: Any) -> str:
    """Return the language-level type name of a runtime value."""
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, int):
        return 'integer'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, ListVal):
        return 'list'
    if is_function(value):
        return 'function'
    return type(value).__name__


def expect_integer(value: Any, context: Optional[str] = None) -> int:
    if not is_integer(value):
        raise TypeMismatchError('integer', describe(value), context)
    return value


def expect_string(value: Any, context: Optional[str] = None) -> str:
    if not isinstance(value, str):
        raise TypeMismatchError('string', describe(value), context)
    return value


def expect_list(value: Any, context: Optional[str] = None) -> ListVal:
    if not isinstance(value, ListVal):
        raise TypeMismatchError('list', describe(value), context)
    return value


def describe(value: Any) -> str:
    """Short description of a value for error messages, e.g. `string "a"`."""
    return f"{type_name(value)} {repr_value(value)}"


def values_equal(a: Any, b: Any) -> bool:
    """Structural equality. Booleans never equal integers."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, ListVal) and isinstance(b, ListVal):
        if len(a.items) != len(b.items):
            return False
        return all(values_equal(x, y) for x, y in zip(a.items, b.items))
    if is_function(a) or is_function(b):
        return a is b
    if type(a) is not type(b):
        return False
    return a == b


def to_string(value: Any) -> str:
    """Convert a value to its display text (used by println and results)."""
    if isinstance(value, str):
        return value
    return repr_value(value)


def repr_value(value: Any) -> str:
    """Convert a value to text, quoting strings (used inside lists)."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return quote_string(value)
    if isinstance(value, ListVal):
        return '[' + ', '.join(repr_value(item) for item in value.items) + ']'
    if isinstance(value, (Closure, BuiltinFunction)):
        return f"function: {value.name}"
    return str(value)


_ESCAPES = {'\\': '\\\\', '"': '\\"', '\n': '\\n', '\t': '\\t', '\r': '\\r'}


def quote_string(text: str) -> str:
    return '"' + ''.join(_ESCAPES.get(ch, ch) for ch in text) + '"'
