import builtins

import pytest

from lox.__main__ import main, repl


def run_cli(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


def test_runs_script(tmp_path, capsys):
    script = tmp_path / 'hello.lox'
    script.write_text('print "hello";', encoding='utf-8')
    assert run_cli([str(script)]) == 0
    assert capsys.readouterr().out == 'hello\n'


def test_exit_codes(tmp_path, capsys):
    bad_syntax = tmp_path / 'syntax.lox'
    bad_syntax.write_text('print ;', encoding='utf-8')
    assert run_cli([str(bad_syntax)]) == 65

    bad_scope = tmp_path / 'scope.lox'
    bad_scope.write_text('return 1;', encoding='utf-8')
    assert run_cli([str(bad_scope)]) == 65

    failing = tmp_path / 'runtime.lox'
    failing.write_text('print 1 + nil;', encoding='utf-8')
    assert run_cli([str(failing)]) == 70
    assert '[line 1] TypeError' in capsys.readouterr().err

    assert run_cli([str(tmp_path / 'missing.lox')]) == 66


def test_emit_and_execute_ast(tmp_path, capsys):
    script = tmp_path / 'prog.lox'
    script.write_text('var a = 1; { var b = a + 1; print b; }', encoding='utf-8')
    main(['--emit-ast', str(script)])
    out_path = capsys.readouterr().out.strip()
    assert out_path.endswith('prog.lox.ast.json')
    assert run_cli(['--ast', out_path]) == 0
    assert capsys.readouterr().out == '2\n'


def test_debug_trace(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    script = tmp_path / 'prog.lox'
    script.write_text('fun f() {}\nvar x = 1;', encoding='utf-8')
    assert run_cli(['-vv', str(script)]) == 0
    trace = (tmp_path / 'debug.txt').read_text(encoding='utf-8')
    assert 'define function f' in trace
    assert 'declare x: number = 1' in trace


def test_repl_keeps_state_between_lines(monkeypatch, capsys):
    lines = iter([
        'var a = 1;',
        'print nope;',
        'fun twice(x) { return x * 2; }',
        'print twice(a);',
        'print a;',
        '',
    ])
    monkeypatch.setattr(builtins, 'input', lambda prompt='': next(lines))
    assert repl(0) == 0
    captured = capsys.readouterr()
    assert captured.out == '2\n1\n'
    assert "UndefinedVariable: Undefined variable 'nope'." in captured.err


def test_repl_survives_errors_and_deep_recursion(monkeypatch, capsys):
    lines = iter([
        'var = 1;',
        'fun down(n) { if (n == 0) return 0; return 1 + down(n - 1); }',
        'fun forever() { return forever(); }',
        'forever();',
        'print down(1000);',
    ])
    # Running out of lines ends the session like end of input.
    monkeypatch.setattr(builtins, 'input', _ends_with_eof(lines))
    assert repl(0) == 0
    captured = capsys.readouterr()
    assert captured.out == '1000\n'
    assert 'StackOverflow: Stack overflow.' in captured.err


def _ends_with_eof(lines):
    def fake_input(prompt=''):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError from None
    return fake_input
