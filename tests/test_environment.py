import pytest

from scopelang.environment import Environment, UNINITIALIZED
from scopelang.errors import UnboundIdentifierError, UninitializedBindingError
from scopelang.std import populate_standard_environment
from scopelang.std.io import BasicIO


def test_lookup_walks_parents():
    root = Environment()
    root.bind('x', 1)
    child = root.child().child()
    assert child.lookup('x') == 1
    assert child.depth() == 2


def test_bind_shadows_locally():
    root = Environment()
    root.bind('x', 1)
    child = root.child()
    child.bind('x', 2)
    assert child.lookup('x') == 2
    assert root.lookup('x') == 1


def test_assign_overwrites_owner():
    root = Environment()
    root.bind('x', 1)
    child = root.child()
    assert child.assign('x', 5) == 5
    assert root.lookup('x') == 5
    assert 'x' not in child.values


def test_unbound():
    with pytest.raises(UnboundIdentifierError):
        Environment().lookup('missing')
    with pytest.raises(UnboundIdentifierError):
        Environment().assign('missing', 1)


def test_declared_but_not_ready():
    env = Environment()
    env.declare('f')
    assert env.values['f'] is UNINITIALIZED
    assert not env.is_ready('f')
    with pytest.raises(UninitializedBindingError):
        env.child().lookup('f')
    with pytest.raises(UninitializedBindingError):
        env.assign('f', 1)
    env.bind('f', 1)
    assert env.is_ready('f')


def test_root_frames_are_independent():
    first = populate_standard_environment(BasicIO())
    second = populate_standard_environment(BasicIO())
    first.bind('add', 0)
    assert second.lookup('add').name == 'add'
    assert second.lookup('true') is True
