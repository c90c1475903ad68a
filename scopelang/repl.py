"""Interactive mode for the scopelang interpreter. Uses cmd as backend."""

import cmd

from termcolor import colored

from .environment import Environment
from .errors import InterpError, LexError
from .interpreter import Interpreter
from .parser import parse_program, tokenize
from .types import to_string

OPENERS = {'(', '{'}
CLOSERS = {')', '}'}


def is_incomplete(source: str) -> bool:
    """True when `source` has unclosed brackets or an unterminated string."""
    try:
        tokens = tokenize(source)
    except LexError as e:
        return e.message.startswith('unterminated')
    depth = 0
    for token in tokens:
        if token.type in OPENERS:
            depth += 1
        elif token.type in CLOSERS:
            depth -= 1
    return depth > 0


class Shell(cmd.Cmd):
    """scopelang interpreter shell."""
    intro = "scopelang interpreter\nType 'help' for more information, 'exit' to quit."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "

    def __init__(self, interpreter: Interpreter = None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.interpreter = interpreter or Interpreter()
        # Session frame: definitions accumulate here across lines
        self.home: Environment = self.interpreter.global_env.child()
        self.scope: Environment = self.home
        self._tmp_line = ""

    def default(self, line):
        """Evaluates one scopelang expression."""
        source = self._tmp_line + line
        if is_incomplete(source):
            self._tmp_line = source + "\n"
            self.prompt = self.secondary_prompt
            return
        self._tmp_line = ""
        self.prompt = self._tmp_prompt
        if not source.strip():
            return
        try:
            self.evaluate(source)
        except InterpError as e:  # cmd.Cmd would otherwise exit on exception
            print(colored(e.kind + ": ", "red", attrs=["bold"]) + e.message)

    def evaluate(self, source: str):
        program = parse_program(source)
        value, self.scope = self.interpreter.execute_statement(program, self.scope, self.home)
        print(colored(to_string(value), attrs=["bold"]))

    def do_help(self, arg):
        """Prints a short introduction to the language."""
        print("Welcome to the scopelang interpreter!\n\n"
              "Each line is evaluated in one session, so 'def' and 'let' bindings stay \n"
              "visible to later lines. Try 'def sq = λ(n) { mul(n, n) }' followed by \n"
              "'sq(7)'. Unclosed brackets continue on the next line.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        self.interpreter.close()
        return True
