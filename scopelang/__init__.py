# scopelang language package
# This package provides a parser and a lexically or dynamically scoped interpreter for scopelang.
from .errors import InterpError
from .interpreter import (
    Interpreter,
    run_program,
    parse_to_string,
    interpret_to_string,
    interpret_with_parser_to_string,
    parse,
    evaluate,
    parse_and_evaluate,
)
from .parser import parse_program

__all__ = [
    'Interpreter',
    'InterpError',
    'run_program',
    'parse_program',
    'parse_to_string',
    'interpret_to_string',
    'interpret_with_parser_to_string',
    'parse',
    'evaluate',
    'parse_and_evaluate',
]
