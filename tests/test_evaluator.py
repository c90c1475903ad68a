import sys

import pytest

from scopelang.ast import Block, Cond, Clause, BooleanLiteral, IntegerLiteral
from scopelang.errors import (
    ArityError, NoMatchingClauseError, ParseError, RecursionDepthError,
    TypeMismatchError, UnboundIdentifierError, UninitializedBindingError,
)
from scopelang.interpreter import Interpreter, run_program
from scopelang.parser import parse_program

PROGRAMS_WITHOUT_DEF = [
    '{ add(1,2) }',
    'let x = 4 { let sq = λ(n) { mul(n, n) } { sq(x) } }',
    '{ let twice = λ(f, v) { f(f(v)) }; twice(λ(n) { add(n, 3) }, 1) }',
    '{ let xs = as_list(3, 1); let n = length(xs); cond (equal?(n, 2) => sort(xs)) (true => xs) }',
    '{ let f = λ(self, n) { cond (zero?(n) => 0) (true => add(n, self(self, sub(n, 1)))) }; f(f, 10) }',
]


@pytest.mark.parametrize('source', PROGRAMS_WITHOUT_DEF)
def test_modes_agree_without_free_late_bindings(source):
    ast = parse_program(source)
    assert Interpreter(lexical_scope=True).run(ast) == Interpreter(lexical_scope=False).run(ast)


def test_scoping_divergence():
    source = '{ let incr = λ(n){add(amt,n)}; let amt = 1; incr(5) }'
    assert run_program(source, lexical_scope=False) == 6
    with pytest.raises(UnboundIdentifierError):
        run_program(source, lexical_scope=True)


def test_lexical_closure_ignores_caller_binding():
    source = '{ let x = 1; let get_x = λ() { x }; let x = 2; get_x() }'
    assert run_program(source, lexical_scope=True) == 1
    assert run_program(source, lexical_scope=False) == 2


def test_let_body_scope():
    assert run_program('let x = 2 { mul(x, x) }') == 4
    with pytest.raises(UnboundIdentifierError):
        run_program('{ let y = 1 { y }; y }')


def test_bodiless_let_value():
    assert run_program('{ let x = 7 }') == 7


def test_mutual_recursion():
    defs = 'def even = λ(n){cond(zero?(n)=>true)(true=>odd(sub(n,1)))}; ' \
           'def odd = λ(n){cond(zero?(n)=>false)(true=>even(sub(n,1)))}; '
    assert run_program('{ ' + defs + 'even(10) }') is True
    assert run_program('{ ' + defs + 'odd(10) }') is False


def test_definition_read_during_its_own_initializer():
    with pytest.raises(UninitializedBindingError) as excinfo:
        run_program('{ def x = add(x, 1); x }')
    assert excinfo.value.name == 'x'


def test_definition_calls_sibling_before_it_is_ready():
    # g is declared when f runs, but its value is still being computed
    with pytest.raises(UninitializedBindingError):
        run_program('{ def f = λ() { g }; def g = f(); g }')


def test_assignment_updates_enclosing_binding():
    assert run_program('{ let n = 1; { n = add(n, 10) }; n }') == 11
    with pytest.raises(UnboundIdentifierError):
        run_program('{ nope = 1 }')


def test_cond_stops_at_first_true(capsys):
    result = run_program('cond (true => "first") (println("side effect") => "second")')
    assert result == 'first'
    assert capsys.readouterr().out == ''


def test_cond_errors():
    with pytest.raises(NoMatchingClauseError):
        run_program('cond (false => 1) (equal?(1, 2) => 2)')
    with pytest.raises(TypeMismatchError):
        run_program('cond (1 => 1)')


def test_arity_mismatch():
    with pytest.raises(ArityError) as excinfo:
        run_program('λ(n){n}(1, 2)')
    assert excinfo.value.render() == "ArityError: function 'lambda' expects 1 arguments, got 2"


def test_calling_a_non_function():
    with pytest.raises(TypeMismatchError) as excinfo:
        run_program('{ let x = 3; x(1) }')
    assert excinfo.value.render() == 'TypeError: application: expected function, found integer 3'


def test_empty_block_from_another_producer():
    with pytest.raises(ParseError):
        Interpreter().run(Block([]))


def test_boolean_literals():
    node = Cond([Clause(BooleanLiteral(False), IntegerLiteral(0)), Clause(BooleanLiteral(True), IntegerLiteral(1))])
    assert Interpreter().run(node) == 1


def test_unbounded_recursion_is_reported():
    with pytest.raises(RecursionDepthError) as excinfo:
        run_program('{ def loop = λ(n) { loop(add(n, 1)) }; loop(0) }')
    assert excinfo.value.render() == 'RuntimeError: maximum recursion depth exceeded'


def test_runs_do_not_share_bindings():
    run_program('{ def leaked = 1; leaked }')
    with pytest.raises(UnboundIdentifierError):
        run_program('leaked')


def test_store_output():
    interp = Interpreter(store_output=True)
    interp.run(parse_program('{ println("one", "two"); print("three") }'))
    assert interp.output == ['one', 'two', 'three']


def test_debug_trace(tmp_path):
    trace = tmp_path / 'trace.txt'
    interp = Interpreter(debug_level=3, debug_file=str(trace))
    interp.run(parse_program('{ def sq = λ(n) { mul(n, n) }; sq(3) }'))
    lines = trace.read_text(encoding='utf-8').splitlines()
    assert lines[0] == 'run (lexical scoping)'
    assert 'define sq = function: sq' in lines
    assert any(line.startswith('call sq(3)') for line in lines)
    assert lines[-1] == 'result: 9'
    assert interp.debug_fp is None


def test_definition_after_let_of_the_same_name():
    assert run_program('{ let x = 1; def x = 2; x }') == 2
    assert run_program('{ let x = 1; let y = 5; def x = add(y, 1); x }') == 6


def test_deep_recursion():
    defs = 'def even = λ(n){cond(zero?(n)=>true)(true=>odd(sub(n,1)))}; ' \
           'def odd = λ(n){cond(zero?(n)=>false)(true=>even(sub(n,1)))}; '
    limit = sys.getrecursionlimit()
    assert run_program('{ ' + defs + 'even(1000) }') is True
    assert sys.getrecursionlimit() == limit


def test_unknown_node_is_a_parse_error():
    with pytest.raises(ParseError):
        Interpreter().run(object())
