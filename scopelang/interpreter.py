"""Tree-walking evaluator for scopelang.

`Interpreter` evaluates the AST produced by `parser.parse_program` or by
the interchange decoder in `ast_json`. One evaluator serves both scoping
disciplines: under lexical scoping a lambda captures the frame it was
evaluated in, under dynamic scoping it captures nothing and each call
extends the caller's frame instead. The mode is fixed for the lifetime
of an `Interpreter`.

The module also provides the host entry points, which take and return
plain strings and render every error into the returned text.
"""

from __future__ import annotations

import sys
from typing import Any, List, Optional, TextIO, Tuple

from .ast import (
    Node, Identifier, StringLiteral, IntegerLiteral, BooleanLiteral,
    Application, Block, Lambda, Cond, Let, Definition, Assignment,
)
from .ast_json import dumps, loads
from .builtin_function import BuiltinFunction
from .environment import Environment
from .errors import (
    InterpError, ParseError, ArityError, TypeMismatchError,
    NoMatchingClauseError, RecursionDepthError,
)
from .parser import parse_program
from .std import BasicIO, populate_standard_environment
from .types import Closure, describe, repr_value, to_string


class Interpreter:
    """Core interpreter that evaluates scopelang ASTs."""
    def __init__(self, lexical_scope: bool = True, debug_level: int = 0, debug_file: str = 'debug.txt',
                 output: Optional[TextIO] = None, store_output: bool = False, recursion_limit: int = 10000):
        self.lexical_scope = lexical_scope
        self.io = BasicIO(output, store_output)
        # Fresh root frame with the builtin library for every interpreter
        self.global_env = populate_standard_environment(self.io)
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None
        self.recursion_limit = recursion_limit

    @property
    def scoping(self) -> str:
        return 'lexical' if self.lexical_scope else 'dynamic'

    @property
    def output(self) -> List[str]:
        return self.io.output

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Node, env: Optional[Environment] = None) -> Any:
        try:
            return self.execute(program, env)
        finally:
            self.close()

    def execute(self, program: Node, env: Optional[Environment] = None) -> Any:
        """Evaluate a whole program, reporting host stack exhaustion as an InterpError."""
        if env is None:
            env = self.global_env.child()
        result, _ = self.execute_statement(program, env, env)
        return result

    def execute_statement(self, node: Node, scope: Environment, home: Environment) -> Tuple[Any, Environment]:
        """Like `eval_statement`, for callers outside the evaluator such as the REPL."""
        self.debug(f"run ({self.scoping} scoping)")
        # Every interpreted call takes several Python frames
        previous_limit = sys.getrecursionlimit()
        sys.setrecursionlimit(max(previous_limit, self.recursion_limit))
        try:
            result, scope = self.eval_statement(node, scope, home)
        except RecursionError:
            self.debug("error: maximum recursion depth exceeded")
            raise RecursionDepthError('maximum recursion depth exceeded') from None
        except InterpError as e:
            self.debug(f"error: {e.render()}")
            raise
        finally:
            sys.setrecursionlimit(previous_limit)
            self.io.flush()
        self.debug(f"result: {repr_value(result)}")
        return result, scope

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, IntegerLiteral):
            return node.value
        if isinstance(node, StringLiteral):
            return node.text
        if isinstance(node, BooleanLiteral):
            return node.value
        if isinstance(node, Identifier):
            return env.lookup(node.name)
        if isinstance(node, Block):
            return self.eval_block(node, env)
        if isinstance(node, Let):
            return self.eval_let(node, env)
        if isinstance(node, Definition):
            return self.eval_definition(node, env, env)
        if isinstance(node, Assignment):
            value = self.evaluate(node.value, env)
            env.assign(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name} = {repr_value(value)}")
            return value
        if isinstance(node, Lambda):
            # Dynamic scoping captures nothing; free names resolve at the call site
            captured = env if self.lexical_scope else None
            return Closure(node.params, node.body, captured)
        if isinstance(node, Application):
            callee = self.evaluate(node.callee, env)
            args = [self.evaluate(arg, env) for arg in node.args]
            return self.call_function(callee, args, env)
        if isinstance(node, Cond):
            return self.eval_cond(node, env)
        raise ParseError(f"malformed tree: unexpected node type {type(node).__name__}")

    def eval_block(self, block: Block, env: Environment) -> Any:
        if not block.exprs:
            raise ParseError('block must contain at least one expression')
        block_env = env.child()
        scope = block_env
        result = None
        for expr in block.exprs:
            result, scope = self.eval_statement(expr, scope, block_env)
        return result

    def eval_statement(self, expr: Node, scope: Environment, home: Environment) -> Tuple[Any, Environment]:
        """Evaluate one expression of a block.

        Returns the value and the frame the rest of the block continues in.
        A `let` without a body opens a new frame holding its binding, so
        only later expressions can see it. A `def` is declared in `home`,
        the block's own frame, where every definition in the block can see
        it, unless an earlier `let` of the block already binds the name; then
        it is bound in the current frame, in front of that `let`.
        """
        if isinstance(expr, Let) and expr.body is None:
            value = self.evaluate(expr.value, scope)
            scope = scope.child()
            scope.bind(expr.name, value)
            if self.debug_level >= 2:
                self.debug(f"let {expr.name} = {repr_value(value)}")
            return value, scope
        if isinstance(expr, Definition):
            # A name already bound by a let in this block is redefined where that let is visible
            target = home
            env = scope
            while env is not None and env is not home:
                if expr.name in env.values:
                    target = scope
                    break
                env = env.parent
            return self.eval_definition(expr, scope, target), scope
        return self.evaluate(expr, scope), scope

    def eval_let(self, node: Let, env: Environment) -> Any:
        value = self.evaluate(node.value, env)
        let_env = env.child()
        let_env.bind(node.name, value)
        if self.debug_level >= 2:
            self.debug(f"let {node.name} = {repr_value(value)}")
        if node.body is None:
            return value
        return self.evaluate(node.body, let_env)

    def eval_definition(self, node: Definition, env: Environment, home: Environment) -> Any:
        # The name exists before its value is evaluated so the value can refer to it
        missing = object()
        previous = home.values.get(node.name, missing)
        home.declare(node.name)
        try:
            value = self.evaluate(node.value, env)
        except Exception:
            if previous is missing:
                del home.values[node.name]
            else:
                home.values[node.name] = previous
            raise
        if isinstance(node.value, Lambda) and isinstance(value, Closure):
            value.name = node.name
        home.bind(node.name, value)
        if self.debug_level >= 2:
            self.debug(f"define {node.name} = {repr_value(value)}")
        return value

    def eval_cond(self, node: Cond, env: Environment) -> Any:
        for clause in node.clauses:
            test = self.evaluate(clause.test, env)
            if not isinstance(test, bool):
                raise TypeMismatchError('boolean', describe(test), 'cond test')
            if self.debug_level >= 3:
                self.debug(f"cond test -> {repr_value(test)}")
            if test:
                return self.evaluate(clause.result, env)
        raise NoMatchingClauseError('no cond clause matched')

    def call_function(self, func: Any, args: List[Any], env: Environment) -> Any:
        if isinstance(func, BuiltinFunction):
            # Check arity; None means variadic
            if func.arity is not None and len(args) != func.arity:
                raise ArityError(func.name, str(func.arity), len(args))
            if self.debug_level >= 3:
                self.debug(f"call builtin {func.name}({', '.join(repr_value(a) for a in args)})")
            return func.fn(args)
        if isinstance(func, Closure):
            if len(args) != len(func.params):
                raise ArityError(func.name, str(len(func.params)), len(args))
            # Lexical closures extend their captured frame, dynamic ones the caller's
            parent = env if func.env is None else func.env
            call_env = parent.child()
            for param, arg in zip(func.params, args):
                call_env.bind(param, arg)
            if self.debug_level >= 3:
                self.debug(f"call {func.name}({', '.join(repr_value(a) for a in args)}) at depth {call_env.depth()}")
            return self.evaluate(func.body, call_env)
        raise TypeMismatchError('function', describe(func), 'application')


###############################################################################
# Host entry points
###############################################################################


def run_program(source: str, lexical_scope: bool = True, debug_level: int = 0) -> Any:
    """Convenience function to parse and evaluate a program from source."""
    program = parse_program(source)
    interpreter = Interpreter(lexical_scope=lexical_scope, debug_level=debug_level)
    return interpreter.run(program)


def parse_to_string(source: str) -> str:
    """Parse source text and return its JSON interchange document, or the error text."""
    try:
        return dumps(parse_program(source))
    except InterpError as e:
        return e.render()


def interpret_to_string(document: str, lexical_scope: bool = True) -> str:
    """Evaluate a JSON interchange document and return the value or the error text."""
    try:
        program = loads(document)
        return to_string(Interpreter(lexical_scope=lexical_scope).run(program))
    except InterpError as e:
        return e.render()


def interpret_with_parser_to_string(source: str, lexical_scope: bool = True) -> str:
    """Parse and evaluate source text and return the value or the error text."""
    try:
        program = parse_program(source)
        return to_string(Interpreter(lexical_scope=lexical_scope).run(program))
    except InterpError as e:
        return e.render()


parse = parse_to_string
evaluate = interpret_to_string
parse_and_evaluate = interpret_with_parser_to_string
