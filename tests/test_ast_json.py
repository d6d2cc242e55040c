import json

import pytest

from luminary.ast import Block, If, IfCase
from luminary.ast_json import ast_from_obj, ast_to_obj
from luminary.interpreter import Interpreter
from luminary.lexer import tokenize
from luminary.parser import parse

SOURCE = """
func classify(n) {
    if n < 0: return "negative"
    elif n == 0: return "zero"
    else: return "positive"
}
out = []
each n in [-2, 0, 3]: out = append(out, classify(n))
println(out, [1, 2, 3][1:2], 1 ? null : 2)
"""


def parse_source(source):
    tokens, error = tokenize(source, 'prog.lum')
    assert error is None
    program, error = parse(tokens)
    assert error is None
    return program


def test_ast_survives_json_encoding():
    program = parse_source(SOURCE)
    data = json.loads(json.dumps(ast_to_obj(program)))
    assert data['type'] == 'Block'
    restored = ast_from_obj(data)
    assert restored == program


def test_restored_ast_runs(capsys):
    restored = ast_from_obj(json.loads(json.dumps(ast_to_obj(parse_source(SOURCE)))))
    res = Interpreter().run(restored)
    assert res.error is None
    assert capsys.readouterr().out.strip() == '[negative, zero, positive] [2] null'


def test_if_cases_are_serialized():
    program = parse_source("if 1: 2")
    node = ast_from_obj(ast_to_obj(program)).statements[0]
    assert isinstance(node, If)
    assert isinstance(node.cases[0], IfCase)


def test_positions_are_kept():
    program = parse_source("x = 1\ny = z")
    restored = ast_from_obj(ast_to_obj(program))
    assert isinstance(restored, Block)
    assert restored.statements[1].pos_start.line == 2
    assert restored.statements[1].pos_start.file == 'prog.lum'


def test_unknown_node_type():
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'Bogus'})
    with pytest.raises(TypeError):
        ast_to_obj(object())
