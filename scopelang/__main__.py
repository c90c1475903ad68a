"""CLI entry point for the scopelang interpreter.

Usage:
    python -m scopelang [-v|-vv|-vvv] [--dynamic] [<program_file>]
    python -m scopelang [-v...] --emit-ast [<program_file>]
    python -m scopelang [-v...] [--dynamic] --ast [<ast_json_file>]
    python -m scopelang [--dynamic] --repl

Options:
  -v            Increase debug verbosity (can be repeated)
  --dynamic     Evaluate with dynamic instead of lexical scoping
  --emit-ast    Parse the program and emit its AST as JSON
  --ast         Evaluate a previously emitted AST JSON document
  --repl        Start an interactive session

Without a file the program is read from standard input. The value of the
program is printed on success. Errors are printed as `Kind: message` and
the exit status is 1. Debug information is written to `debug.txt` in the
current directory when verbosity is greater than zero.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .ast_json import dumps, loads
from .errors import InterpError
from .interpreter import Interpreter
from .parser import parse_program
from .repl import Shell
from .types import to_string


def read_source(path: Optional[str]) -> str:
    if path is None:
        return sys.stdin.read()
    program_file = Path(path)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def emit_ast(path: Optional[str], source: str):
    document = dumps(parse_program(source), indent=2)
    if path is None:
        print(document)
        return
    program_file = Path(path)
    out_path = program_file.with_name(program_file.name + '.ast.json')
    with open(out_path, 'w', encoding='utf-8') as out:
        out.write(document + '\n')
    print(str(out_path))


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog='scopelang', description="scopelang interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--dynamic', action='store_true', help='use dynamic instead of lexical scoping')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', action='store_true', help='parse only and emit the AST as JSON')
    group.add_argument('--ast', action='store_true', help='input is an AST JSON document')
    group.add_argument('--repl', action='store_true', help='start an interactive session')
    parser.add_argument('program', nargs='?', help='program file to execute (default: standard input)')
    args = parser.parse_args(argv)

    if args.repl:
        Shell(Interpreter(lexical_scope=not args.dynamic, debug_level=args.v)).cmdloop()
        return

    source = read_source(args.program)
    try:
        if args.emit_ast:
            emit_ast(args.program, source)
            return
        program = loads(source) if args.ast else parse_program(source)
        interpreter = Interpreter(lexical_scope=not args.dynamic, debug_level=args.v)
        result = interpreter.run(program)
    except InterpError as e:
        print(e.render())
        sys.exit(1)
    print(to_string(result))


if __name__ == '__main__':
    main()
