import pytest

from scopelang.errors import (
    ArityError, DivisionByZeroError, IndexOutOfRangeError,
    IntegerOverflowError, TypeMismatchError,
)
from scopelang.interpreter import run_program
from scopelang.std.core import truncating_div
from scopelang.types import ListVal, to_string


def run(source):
    return run_program(source)


def test_arithmetic():
    assert run('{ add(1,2) }') == 3
    assert run('add(1, 2, 3, 4)') == 10
    assert run('sub(10, 3, 2)') == 5
    assert run('sub(4)') == 4
    assert run('mul(2, 3, 7)') == 42


def test_division_truncates_toward_zero():
    assert run('div(7, 2)') == 3
    assert run('div(-7, 2)') == -3
    assert run('rem(-7, 2)') == -1
    assert run('rem(7, -2)') == 1
    assert truncating_div(-9, 4) == -2


def test_division_by_zero():
    with pytest.raises(DivisionByZeroError):
        run('div(1, 0)')
    with pytest.raises(DivisionByZeroError):
        run('rem(1, 0)')


def test_overflow():
    with pytest.raises(IntegerOverflowError) as excinfo:
        run('add(9223372036854775807, 1)')
    assert excinfo.value.kind == 'RuntimeError'
    with pytest.raises(IntegerOverflowError):
        run('mul(4294967296, 4294967296)')


def test_arithmetic_type_errors():
    with pytest.raises(TypeMismatchError):
        run('add(1, "2")')
    with pytest.raises(TypeMismatchError):
        run('add(1, true)')


def test_arity_checks():
    with pytest.raises(ArityError):
        run('add()')
    with pytest.raises(ArityError):
        run('div(1)')
    with pytest.raises(ArityError):
        run('equal?(1)')
    with pytest.raises(ArityError):
        run('zero?(1, 2)')


def test_comparisons():
    assert run('equal?(1, 1, 1)') is True
    assert run('equal?(1, 2)') is False
    assert run('equal?(true, 1)') is False
    assert run('equal?(as_list(1, "a"), as_list(1, "a"))') is True
    assert run('less?(1, 2)') is True
    assert run('greater?("b", "a")') is True
    assert run('zero?(0)') is True
    with pytest.raises(TypeMismatchError):
        run('less?(1, "a")')


def test_list_operations():
    assert run('get(as_list(4, 5, 6), 1)') == 5
    assert run('length(as_list())') == 0
    assert run('length("abc")') == 3
    assert to_string(run('sort(as_list("pear", "apple"))')) == '["apple", "pear"]'
    assert run('contains(as_list(1, 2), 2)') is True
    assert run('contains("scopelang", "lang")') is True
    assert run('contains(as_list(1), true)') is False


def test_set_never_mutates():
    assert run('{ let xs = as_list(1, 2, 3); let ys = set(xs, 1, 20); as_list(get(xs, 1), get(ys, 1)) }') == \
        ListVal((2, 20))


def test_list_errors():
    with pytest.raises(IndexOutOfRangeError) as excinfo:
        run('get(as_list(1), 1)')
    assert excinfo.value.render().startswith('IndexError: ')
    with pytest.raises(IndexOutOfRangeError):
        run('set(as_list(1), -1, 0)')
    with pytest.raises(TypeMismatchError):
        run('sort(as_list(1, "a"))')
    with pytest.raises(TypeMismatchError):
        run('get("abc", 0)')


def test_strings():
    assert run('{ to_uppercase(concat("hello", " ", "WORLD")) }') == 'HELLO WORLD'
    assert run('to_lowercase("MiXeD")') == 'mixed'
    assert to_string(run('concat(as_list(1), as_list(2, 3))')) == '[1, 2, 3]'
    with pytest.raises(TypeMismatchError):
        run('concat("a", 1)')
    with pytest.raises(TypeMismatchError):
        run('to_uppercase(1)')


def test_println_one_line_per_argument(capsys):
    assert run('println("a", 1, as_list("b", true))') is True
    assert capsys.readouterr().out == 'a\n1\n["b", true]\n'


def test_print_without_newline(capsys):
    run('{ print("a", "b"); println("c") }')
    assert capsys.readouterr().out == 'abc\n'


def test_function_values_render():
    assert to_string(run('{ def sq = λ(n) { mul(n, n) }; sq }')) == 'function: sq'
    assert to_string(run('λ(n) { n }')) == 'function: lambda'
    assert to_string(run('add')) == 'function: add'


def test_dbg_writes_quoted_values(capsys):
    assert run('dbg("a", 1, as_list("b"))') is True
    assert capsys.readouterr().out == '"a"\n1\n["b"]\n'
