from luminary.context import Context
from luminary.types import Number


def test_lookup_walks_parents():
    root = Context('<program>')
    root.set('x', Number(1))
    child = Context('f', parent=root)
    assert child.get('x').value == 1
    assert child.get('missing') is None


def test_set_and_delete_are_local():
    root = Context()
    root.set('x', Number(1))
    child = Context('f', parent=root)
    child.set('x', Number(2))
    assert root.get('x').value == 1
    child.delete('x')
    assert child.get('x').value == 1
    assert 'x' not in child
    child.delete('never-bound')


def test_repr():
    assert repr(Context('f')) == '<context f>'
