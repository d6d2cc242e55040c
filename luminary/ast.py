"""Abstract Syntax Tree (AST) definitions for the Luminary language.

The parser produces these nodes and the interpreter consumes them. Nodes
are plain data: each keeps the tokens (or explicit positions) it needs to
report the span of source text it came from, exposed uniformly as
`pos_start` / `pos_end`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .tokens import Position, Token


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class NumberLit(Node):
    token: Token

    @property
    def pos_start(self) -> Position:
        return self.token.pos_start

    @property
    def pos_end(self) -> Position:
        return self.token.pos_end


@dataclass
class StringLit(Node):
    token: Token

    @property
    def pos_start(self) -> Position:
        return self.token.pos_start

    @property
    def pos_end(self) -> Position:
        return self.token.pos_end


@dataclass
class NullLit(Node):
    token: Token

    @property
    def pos_start(self) -> Position:
        return self.token.pos_start

    @property
    def pos_end(self) -> Position:
        return self.token.pos_end


@dataclass
class ListLit(Node):
    elements: List[Node]
    pos_start: Position
    pos_end: Position


@dataclass
class Block(Node):
    statements: List[Node]
    pos_start: Position
    pos_end: Position


@dataclass
class Ternary(Node):
    condition: Node
    left: Node
    right: Node

    @property
    def pos_start(self) -> Position:
        return self.condition.pos_start

    @property
    def pos_end(self) -> Position:
        return self.right.pos_end


@dataclass
class BinaryOp(Node):
    left: Node
    op: Token
    right: Node

    @property
    def pos_start(self) -> Position:
        return self.left.pos_start

    @property
    def pos_end(self) -> Position:
        return self.right.pos_end


@dataclass
class UnaryOp(Node):
    op: Token
    operand: Node

    @property
    def pos_start(self) -> Position:
        return self.op.pos_start

    @property
    def pos_end(self) -> Position:
        return self.operand.pos_end


@dataclass
class VarAccess(Node):
    name: Token

    @property
    def pos_start(self) -> Position:
        return self.name.pos_start

    @property
    def pos_end(self) -> Position:
        return self.name.pos_end


@dataclass
class VarAssign(Node):
    name: Token
    value: Node

    @property
    def pos_start(self) -> Position:
        return self.name.pos_start

    @property
    def pos_end(self) -> Position:
        return self.value.pos_end


@dataclass
class ElementAccess(Node):
    target: Node
    index: Node
    to_index: Optional[Node]
    pos_end: Position  # closing bracket

    @property
    def pos_start(self) -> Position:
        return self.target.pos_start


@dataclass
class ElementAssign(Node):
    name: Token
    index: Node
    value: Node

    @property
    def pos_start(self) -> Position:
        return self.name.pos_start

    @property
    def pos_end(self) -> Position:
        return self.value.pos_end


@dataclass
class IfCase:
    condition: Node
    body: Node


@dataclass
class If(Node):
    cases: List[IfCase]
    else_case: Optional[Node]
    pos_start: Position
    pos_end: Position


@dataclass
class For(Node):
    var_name: Token
    start: Node
    end: Node
    step: Optional[Node]
    body: Node
    pos_start: Position
    pos_end: Position


@dataclass
class Each(Node):
    item_name: Token
    iterable: Node
    body: Node
    pos_start: Position
    pos_end: Position


@dataclass
class While(Node):
    condition: Node
    body: Node
    pos_start: Position
    pos_end: Position


@dataclass
class Break(Node):
    token: Token

    @property
    def pos_start(self) -> Position:
        return self.token.pos_start

    @property
    def pos_end(self) -> Position:
        return self.token.pos_end


@dataclass
class Continue(Node):
    token: Token

    @property
    def pos_start(self) -> Position:
        return self.token.pos_start

    @property
    def pos_end(self) -> Position:
        return self.token.pos_end


@dataclass
class FunctionDef(Node):
    name: Optional[Token]  # None for anonymous functions
    params: List[Token]
    body: Node
    is_expression_body: bool
    pos_start: Position
    pos_end: Position


@dataclass
class FunctionCall(Node):
    callee: Node
    args: List[Node]
    pos_end: Position  # closing parenthesis

    @property
    def pos_start(self) -> Position:
        return self.callee.pos_start


@dataclass
class Return(Node):
    value: Optional[Node]
    pos_start: Position
    pos_end: Position
