from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from .errors import ArityError


@dataclass(eq=False)
class BuiltinFunction:
    name: str
    arity: Optional[int]  # None means variadic; the function checks its own arguments
    fn: Callable[[List[Any]], Any]

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"


def require_at_least(name: str, args: List[Any], count: int):
    if len(args) < count:
        raise ArityError(name, f"at least {count}", len(args))
