"""JSON serialization/deserialization for Luminary ASTs.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. Tokens and positions are kept, so
an AST loaded back from JSON reports errors at the original source
locations.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Dict

from . import ast
from .tokens import Position, Token, TokenKind

NODE_TYPES: Dict[str, type] = {
    cls.__name__: cls
    for cls in (
        ast.NumberLit, ast.StringLit, ast.NullLit, ast.ListLit, ast.Block,
        ast.Ternary, ast.BinaryOp, ast.UnaryOp, ast.VarAccess, ast.VarAssign,
        ast.ElementAccess, ast.ElementAssign, ast.IfCase, ast.If, ast.For,
        ast.Each, ast.While, ast.Break, ast.Continue, ast.FunctionDef,
        ast.FunctionCall, ast.Return,
    )
}


def position_to_obj(p: Position) -> Dict[str, Any]:
    return {"file": p.file, "line": p.line, "col": p.col, "index": p.index}


def position_from_obj(o: Dict[str, Any]) -> Position:
    return Position(o["file"], o["line"], o["col"], o["index"])


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None or isinstance(node, (bool, int, float, str)):
        return node
    if isinstance(node, list):
        return [ast_to_obj(item) for item in node]

    if isinstance(node, Position):
        return {"__type__": "Position", "value": position_to_obj(node)}
    if isinstance(node, Token):
        return {
            "__type__": "Token",
            "kind": node.kind.name,
            "value": node.value,
            "pos_start": position_to_obj(node.pos_start),
            "pos_end": position_to_obj(node.pos_end),
        }

    # Node types
    name = type(node).__name__
    if name not in NODE_TYPES:
        raise TypeError(f"Unsupported node for serialization: {name}")
    obj: Dict[str, Any] = {"type": name}
    for f in fields(node):
        obj[f.name] = ast_to_obj(getattr(node, f.name))
    return obj


def ast_from_obj(obj: Any) -> Any:
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, list):
        return [ast_from_obj(item) for item in obj]
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")

    marker = obj.get("__type__")
    if marker == "Position":
        return position_from_obj(obj["value"])
    if marker == "Token":
        return Token(
            TokenKind[obj["kind"]],
            obj["value"],
            position_from_obj(obj["pos_start"]),
            position_from_obj(obj["pos_end"]),
        )

    t = obj.get("type")
    cls = NODE_TYPES.get(t)
    if cls is None:
        raise ValueError(f"Unknown AST node type: {t}")
    return cls(**{f.name: ast_from_obj(obj[f.name]) for f in fields(cls)})
