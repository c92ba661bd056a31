import math

from lox.builtin_function import BuiltinFunction
from lox.types import is_equal, is_truthy, to_string, type_name


def test_truthiness():
    assert not is_truthy(None)
    assert not is_truthy(False)
    assert is_truthy(True)
    assert is_truthy(0.0)
    assert is_truthy('')


def test_equality_never_crosses_types():
    assert is_equal(None, None)
    assert not is_equal(None, False)
    assert not is_equal(0.0, False)
    assert not is_equal(1.0, True)
    assert not is_equal(1.0, '1')
    assert is_equal(2.0, 2.0)
    assert is_equal('ab', 'ab')


def test_callables_compare_by_identity():
    first = BuiltinFunction('f', 0, lambda args: None)
    second = BuiltinFunction('f', 0, lambda args: None)
    assert is_equal(first, first)
    assert not is_equal(first, second)


def test_to_string():
    assert to_string(None) == 'nil'
    assert to_string(True) == 'true'
    assert to_string(3.0) == '3'
    assert to_string(2.5) == '2.5'
    assert to_string('text') == 'text'
    assert type_name(1.0) == 'number'
    assert type_name(None) == 'nil'


def test_large_numbers_print_in_exponent_form():
    assert to_string(1e20) == '100000000000000000000'
    assert to_string(1e21) == '1e+21'
    assert to_string(-1e29) == '-1e+29'
    assert to_string(math.inf) == 'inf'


def test_nan_is_not_equal_to_itself():
    assert not is_equal(math.nan, math.nan)
