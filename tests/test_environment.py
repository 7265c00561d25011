import pytest

from loxi.environment import Environment
from loxi.errors import RuntimeNameError


def test_define_and_get():
    env = Environment()
    env.define('a', 1.0)
    assert env.get('a') == 1.0


def test_shadowing_does_not_touch_enclosing():
    outer = Environment()
    outer.define('a', 'outer')
    inner = Environment(outer)
    inner.define('a', 'inner')
    assert inner.get('a') == 'inner'
    assert outer.get('a') == 'outer'


def test_assign_walks_outward():
    outer = Environment()
    outer.define('a', 1.0)
    inner = Environment(Environment(outer))
    inner.assign('a', 2.0)
    assert outer.values['a'] == 2.0
    assert 'a' not in inner.values


def test_undefined_variable():
    env = Environment(Environment())
    with pytest.raises(RuntimeNameError) as exc:
        env.get('missing')
    assert "undefined variable 'missing'" in str(exc.value)
    with pytest.raises(RuntimeNameError):
        env.assign('missing', 1.0)


def test_distance_access_to_unbound_name():
    env = Environment(Environment())
    with pytest.raises(RuntimeNameError) as exc:
        env.get_at(1, 'x')
    assert "uninitialized variable 'x'" in str(exc.value)
    with pytest.raises(RuntimeNameError):
        env.assign_at(0, 'x', 1.0)
    assert 'x' not in env.values


def test_distance_access():
    root = Environment()
    root.define('x', 'root')
    middle = Environment(root)
    middle.define('x', 'middle')
    leaf = Environment(middle)
    assert leaf.ancestor(0) is leaf
    assert leaf.ancestor(2) is root
    assert leaf.get_at(1, 'x') == 'middle'
    assert leaf.get_at(2, 'x') == 'root'
    leaf.assign_at(2, 'x', 'changed')
    assert root.values['x'] == 'changed'
    assert middle.values['x'] == 'middle'


def test_child_sees_later_updates():
    parent = Environment()
    parent.define('n', 1.0)
    child = Environment(parent)
    parent.assign('n', 5.0)
    assert child.get('n') == 5.0
