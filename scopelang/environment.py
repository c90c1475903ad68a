"""Scope frames.

An `Environment` is one frame of bindings with a link to its parent.
Lookups walk outward through the parents; `bind` always writes to the
frame itself. `declare` reserves a name with the `UNINITIALIZED`
placeholder until a `def` value is ready.
"""

from typing import Any, Dict, Optional

from .errors import UnboundIdentifierError, UninitializedBindingError


class _Uninitialized:
    """Placeholder held by a `def` name until its value is ready."""
    def __repr__(self) -> str:
        return '<uninitialized>'


UNINITIALIZED = _Uninitialized()


class Environment:
    """A scope frame mapping identifiers to values, linked to a parent frame.

    Frames are shared by reference: closures and active calls may hold the
    same frame, and it stays alive for as long as any of them does.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    def child(self) -> 'Environment':
        return Environment(parent=self)

    def lookup(self, name: str) -> Any:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                value = env.values[name]
                if value is UNINITIALIZED:
                    raise UninitializedBindingError(name)
                return value
            env = env.parent
        raise UnboundIdentifierError(name)

    def bind(self, name: str, value: Any):
        self.values[name] = value

    def assign(self, name: str, value: Any) -> Any:
        # Overwrite the slot in whichever frame owns the name
        env = self.owner(name)
        if env is None:
            raise UnboundIdentifierError(name)
        if env.values[name] is UNINITIALIZED:
            raise UninitializedBindingError(name)
        env.values[name] = value
        return value

    def owner(self, name: str) -> Optional['Environment']:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env
            env = env.parent
        return None

    def declare(self, name: str):
        self.values[name] = UNINITIALIZED

    def is_ready(self, name: str) -> bool:
        return name in self.values and self.values[name] is not UNINITIALIZED

    def depth(self) -> int:
        depth = 0
        env = self.parent
        while env is not None:
            depth += 1
            env = env.parent
        return depth
