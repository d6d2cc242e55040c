import pytest

from luminary.ast import (
    BinaryOp, Block, ElementAccess, ElementAssign, For, FunctionCall, FunctionDef,
    If, Ternary, UnaryOp, VarAssign,
)
from luminary.lexer import tokenize
from luminary.parser import parse


def parse_source(source):
    tokens, error = tokenize(source)
    assert error is None
    return parse(tokens)


def first(source):
    program, error = parse_source(source)
    assert error is None, error
    assert isinstance(program, Block)
    return program.statements[0]


def test_precedence_multiplication_binds_tighter():
    node = first("1 + 2 * 3")
    assert isinstance(node, BinaryOp) and node.op.value == '+'
    assert isinstance(node.right, BinaryOp) and node.right.op.value == '*'


def test_power_is_left_associative():
    node = first("2 ^ 3 ^ 2")
    assert node.op.value == '^'
    assert isinstance(node.left, BinaryOp) and node.left.op.value == '^'
    assert node.right.token.value == 2.0


def test_unary_minus_binds_tighter_than_power():
    node = first("-2 ^ 2")
    assert isinstance(node, BinaryOp)
    assert isinstance(node.left, UnaryOp)


def test_ternary():
    node = first("a ? 1 : 2")
    assert isinstance(node, Ternary)


def test_chained_assignment():
    node = first("x = y = 3")
    assert isinstance(node, VarAssign) and isinstance(node.value, VarAssign)


def test_element_access_slice_and_assign():
    assert isinstance(first("a[1] = 2"), ElementAssign)
    access = first("a[1]")
    assert isinstance(access, ElementAccess) and access.to_index is None
    assert first("a[1:2]").to_index is not None
    assert isinstance(first("a[b[0]] == 1"), BinaryOp)


def test_chained_calls():
    node = first("f(1)(2)")
    assert isinstance(node, FunctionCall)
    assert isinstance(node.callee, FunctionCall)


def test_if_elif_else_across_lines():
    node = first("if a: 1\nelif b: 2\nelse: 3")
    assert isinstance(node, If)
    assert len(node.cases) == 2
    assert node.else_case is not None


def test_for_with_step():
    node = first("for i = 1 to 5 by 2: i")
    assert isinstance(node, For)
    assert node.var_name.value == 'i'
    assert node.step is not None


def test_function_bodies():
    expr = first("func f(a, b): a + b")
    assert isinstance(expr, FunctionDef)
    assert expr.is_expression_body
    assert [p.value for p in expr.params] == ['a', 'b']
    block = first("func(a) {\n  return a\n}")
    assert block.name is None
    assert not block.is_expression_body


def test_program_span():
    program, _ = parse_source("x = 1\ny = 2")
    assert len(program.statements) == 2
    assert program.pos_start.line == 1


@pytest.mark.parametrize("source, details", [
    ("1 +", "Unexpected end of input"),
    ("(1", "Expected ')'"),
    ("1 2", "Expected a newline or ';' between statements"),
    ("break", "'break' outside of a loop"),
    ("continue", "'continue' outside of a loop"),
    ("return 1", "'return' outside of a function"),
    ("for i = 0 to 1 { func g() { break } }", "'break' outside of a loop"),
    ("for i = 0 1 {}", "Expected ':' or 'to'"),
    ("while 1 2", "Expected '{' or ':'"),
])
def test_syntax_errors(source, details):
    program, error = parse_source(source)
    assert program is None
    assert error.kind == 'Invalid Syntax'
    assert error.details == details


def test_break_and_return_allowed_in_context():
    _, error = parse_source("func f() {\n  while 1 { if 1: break }\n  return 2\n}")
    assert error is None
