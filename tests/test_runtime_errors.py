import pytest

from lox.errors import LoxRuntimeError
from lox.interpreter import run_program


def run_error(source):
    with pytest.raises(LoxRuntimeError) as exc:
        run_program(source)
    return exc.value


@pytest.mark.parametrize('args, got', [('1', 1), ('1, 2, 3', 3)])
def test_arity_mismatch(args, got):
    err = run_error(f'fun f(a, b) {{}}\nf({args});')
    assert err.name == 'ArityMismatch'
    assert err.message == f'Expected 2 arguments but got {got}.'
    assert err.line == 2


def test_class_arity_follows_initializer():
    err = run_error('class P { init(x) {} }\nP();')
    assert err.message == 'Expected 1 arguments but got 0.'


def test_string_plus_number_is_a_type_error():
    err = run_error('print "a" + 1;')
    assert err.name == 'TypeError'
    assert err.message == 'Operands must be two numbers or two strings.'


def test_comparison_and_negation_need_numbers():
    assert run_error('print "a" < "b";').message == 'Operands must be numbers.'
    assert run_error('print -"a";').message == 'Operand must be a number.'


def test_undefined_variable():
    err = run_error('print nope;')
    assert err.name == 'UndefinedVariable'
    assert str(err) == "[line 1] UndefinedVariable: Undefined variable 'nope'."
    assert run_error('nope = 1;').name == 'UndefinedVariable'


def test_calling_a_non_callable():
    err = run_error('"text"();')
    assert err.name == 'NotCallable'
    assert err.message == 'Can only call functions and classes.'


def test_superclass_must_be_a_class():
    err = run_error('var NotAClass = "x";\nclass B < NotAClass {}')
    assert err.name == 'TypeError'
    assert err.message == 'Superclass must be a class.'


def test_properties_need_instances():
    assert run_error('var a = 1; print a.b;').message == 'Only instances have properties.'
    assert run_error('var a = 1; a.b = 2;').message == 'Only instances have fields.'


def test_undefined_property():
    err = run_error('class A {} print A().missing;')
    assert err.name == 'UndefinedProperty'
    assert err.message == "Undefined property 'missing'."


def test_runtime_error_stops_remaining_statements(capsys):
    with pytest.raises(LoxRuntimeError):
        run_program('print 1;\nprint "a" + 1;\nprint 2;')
    assert capsys.readouterr().out == '1\n'


def test_runs_are_deterministic(capsys):
    source = '''
        class Counter { init() { this.n = 0; } tick() { this.n = this.n + 1; return this.n; } }
        var c = Counter();
        for (var i = 0; i < 3; i = i + 1) print c.tick();
    '''
    run_program(source)
    first = capsys.readouterr().out
    run_program(source)
    second = capsys.readouterr().out
    assert first == second == '1\n2\n3\n'


def test_native_functions_can_be_registered():
    from lox.interpreter import Interpreter
    from lox.parser import parse_program

    seen = []
    interp = Interpreter()
    interp.define_native('record', 1, lambda args: seen.append(args[0]))
    interp.run(parse_program('record("hi"); record(clock() > 0);'))
    assert seen == ['hi', True]


def test_deep_recursion_runs(capsys):
    run_program(
        'fun depth(n) { if (n == 0) return 0; return 1 + depth(n - 1); }\n'
        'print depth(1000);'
    )
    assert capsys.readouterr().out == '1000\n'


def test_unbounded_recursion_is_a_stack_overflow():
    err = run_error('fun forever(n) { return forever(n + 1); }\nforever(0);')
    assert err.name == 'StackOverflow'
    assert err.message == 'Stack overflow.'
