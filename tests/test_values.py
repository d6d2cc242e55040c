import math

import pytest

from luminary.errors import InvalidSyntaxError, LuminaryError, RTError
from luminary.tokens import Position
from luminary.types import Function, List, Null, Number, String, format_number, value_or_null


def test_number_arithmetic():
    assert Number(7).sub_by(Number(2)).value == 5
    assert Number(3).mul_by(Number(4)).value == 12
    assert Number(1).div_by(Number(4)).value == 0.25
    assert Number(2).pow(Number(10)).value == 1024


def test_number_pow_edge_cases():
    assert Number(10).pow(Number(1000)).value == math.inf
    assert math.isnan(Number(-8).pow(Number(0.5)).value)


def test_division_by_zero():
    with pytest.raises(RTError, match="Can't divide by zero"):
        Number(1).div_by(Number(0))
    with pytest.raises(RTError, match="Can't divide by zero"):
        Number(1).mod(Number(0))


def test_number_formatting():
    assert format_number(3.0) == '3'
    assert format_number(2.5) == '2.5'
    assert format_number(math.inf) == 'inf'
    assert str(Number(-0.5)) == '-0.5'


def test_truthiness():
    assert not Number(0).is_true()
    assert Number(-1).is_true()
    assert not String('').is_true()
    assert String('x').is_true()
    assert List([]).is_true()
    assert not Null().is_true()


def test_equality_is_total():
    assert Number(1).is_equal_to(Number(1)).value == 1
    assert Number(1).is_equal_to(String('1')).value == 0
    assert List([]).is_equal_to(List([])).value == 0
    assert Null().is_equal_to(Null()).value == 1
    assert Null().is_not_equal_to(Number(0)).value == 1


def test_illegal_operations_raise():
    with pytest.raises(InvalidSyntaxError, match="Invalid '\\*' operation on a list"):
        List([]).mul_by(Number(2))
    with pytest.raises(LuminaryError):
        String('a').sub_by(String('b'))


def test_list_copy_shares_elements():
    original = List([Number(1)])
    alias = original.copy()
    alias.assign(Number(0), Number(5))
    assert original.elements[0].value == 5
    assert original.add_to(List([])).elements is not original.elements


def test_list_access():
    items = List([Number(1), Number(2), Number(3)])
    assert items.access(Number(2)).value == 3
    assert str(items.access(Number(0), Number(2))) == '[1, 2]'
    with pytest.raises(RTError, match=r"Index out of range \(3\) with length of 3"):
        items.access(Number(3))


def test_string_repr_escapes():
    assert repr(String('say "hi"')) == '"say \\"hi\\""'
    assert str(String('plain')) == 'plain'


def test_value_or_null():
    assert isinstance(value_or_null(None), Null)
    n = Number(1)
    assert value_or_null(n) is n


def test_set_pos_defaults_end():
    start = Position('f', 1, 3, 2)
    value = Number(1).set_pos(start)
    assert value.pos_end.col == 4


def test_function_display_name():
    assert Function(None, [], None, True, None).display_name == '<anonymous>'
