import pytest

from lox.environment import Environment
from lox.errors import LoxRuntimeError


def test_define_overwrites_in_same_scope():
    env = Environment()
    env.define('a', 1.0)
    env.define('a', 2.0)
    assert env.get('a') == 2.0


def test_assign_walks_outward_and_mutates_first_match():
    outer = Environment()
    outer.define('a', 1.0)
    inner = Environment(parent=outer)
    inner.assign('a', 5.0)
    assert outer.values['a'] == 5.0
    assert 'a' not in inner.values


def test_assign_and_get_fail_for_unknown_names():
    env = Environment(parent=Environment())
    with pytest.raises(LoxRuntimeError) as exc:
        env.assign('missing', 1.0, line=4)
    assert exc.value.name == 'UndefinedVariable'
    assert exc.value.line == 4
    with pytest.raises(LoxRuntimeError, match="Undefined variable 'missing'."):
        env.get('missing')


def test_depth_addressed_access_skips_shadowing_scopes():
    globals_env = Environment()
    globals_env.define('x', 'global')
    middle = Environment(parent=globals_env)
    middle.define('x', 'middle')
    inner = Environment(parent=middle)
    inner.define('x', 'inner')

    assert inner.get_at(0, 'x') == 'inner'
    assert inner.get_at(1, 'x') == 'middle'
    assert inner.get_at(2, 'x') == 'global'

    inner.assign_at(1, 'x', 'changed')
    assert middle.values['x'] == 'changed'
    assert inner.values['x'] == 'inner'
    assert globals_env.values['x'] == 'global'
