from scopelang.interpreter import Interpreter
from scopelang.repl import Shell, is_incomplete


def test_is_incomplete():
    assert is_incomplete('{ add(1,')
    assert is_incomplete('println("still open')
    assert not is_incomplete('{ add(1, 2) }')
    assert not is_incomplete('add(1, 2))')


def test_bindings_persist_between_lines(capsys):
    shell = Shell(Interpreter())
    shell.onecmd('def sq = λ(n) { mul(n, n) }')
    shell.onecmd('let x = 7')
    shell.onecmd('sq(x)')
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert '49' in out_lines[-1]


def test_continuation_lines(capsys):
    shell = Shell(Interpreter())
    shell.onecmd('{ let a = 2;')
    assert shell.prompt == shell.secondary_prompt
    shell.onecmd('  mul(a, 21) }')
    assert shell.prompt == '> '
    assert '42' in capsys.readouterr().out


def test_errors_do_not_end_session(capsys):
    shell = Shell(Interpreter())
    assert not shell.onecmd('missing')
    assert 'undefined symbol' in capsys.readouterr().out
    assert not shell.onecmd('def recover = 1')
    shell.onecmd('recover')
    assert '1' in capsys.readouterr().out.strip().split('\n')[-1]


def test_failed_definition_is_rolled_back(capsys):
    shell = Shell(Interpreter())
    shell.onecmd('def y = div(1, 0)')
    shell.onecmd('y')
    assert "undefined symbol 'y'" in capsys.readouterr().out


def test_exit():
    shell = Shell(Interpreter())
    assert shell.onecmd('exit')
