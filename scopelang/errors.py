"""Error taxonomy for scopelang.

Every failure in the lexer, parser, interchange decoder, evaluator and
builtin library is raised as a subclass of `InterpError`. Each class has
a `kind` used when the error is rendered for a host (`render()`).
"""

from typing import Optional


class InterpError(Exception):
    """Base class for all errors surfaced by scopelang."""
    kind = 'Error'

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def render(self) -> str:
        return f"{self.kind}: {self.message}"


class LexError(InterpError):
    """Invalid character, unterminated string or bad escape sequence."""
    kind = 'LexError'

    def __init__(self, message: str, line: int = 0, column: int = 0):
        if line:
            message = f"{message} at {line}:{column}"
        super().__init__(message)
        self.line = line
        self.column = column


class ParseError(InterpError):
    """Unexpected token, missing construct or malformed interchange document."""
    kind = 'ParseError'

    def __init__(self, message: str, line: int = 0, column: int = 0,
                 expected: Optional[str] = None, found: Optional[str] = None):
        super().__init__(message)
        self.line = line
        self.column = column
        self.expected = expected
        self.found = found


class UnboundIdentifierError(InterpError):
    kind = 'UnboundIdentifierError'

    def __init__(self, name: str, message: Optional[str] = None):
        super().__init__(message or f"undefined symbol '{name}'")
        self.name = name


class UninitializedBindingError(UnboundIdentifierError):
    """A `def` name was read before its value expression finished."""
    def __init__(self, name: str):
        super().__init__(name, f"'{name}' is referenced before its definition completes")


class TypeMismatchError(InterpError):
    kind = 'TypeError'

    def __init__(self, expected: str, found: str, context: Optional[str] = None):
        message = f"expected {expected}, found {found}"
        if context:
            message = f"{context}: {message}"
        super().__init__(message)
        self.expected = expected
        self.found = found


class ArityError(InterpError):
    kind = 'ArityError'

    def __init__(self, func: str, expected: str, got: int):
        super().__init__(f"function '{func}' expects {expected} arguments, got {got}")
        self.func = func
        self.expected = expected
        self.got = got


class NoMatchingClauseError(InterpError):
    kind = 'NoMatchingClauseError'


class DivisionByZeroError(InterpError):
    kind = 'DivisionByZeroError'


class IndexOutOfRangeError(InterpError):
    kind = 'IndexError'


class IntegerOverflowError(InterpError):
    kind = 'RuntimeError'


class RecursionDepthError(InterpError):
    kind = 'RuntimeError'
