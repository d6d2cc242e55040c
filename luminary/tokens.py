"""Source positions and lexical tokens for the Luminary language.

A `Position` is an immutable snapshot of a cursor into the source text.
Advancing a position returns a new one, so tokens, nodes, values and
errors can hold on to the positions they were created with.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True)
class Position:
    """A coordinate in a source file.

    `line` and `col` are 1-based, `index` is the raw 0-based offset into
    the source text.
    """
    file: str
    line: int
    col: int
    index: int

    @staticmethod
    def start(file: str) -> 'Position':
        # one step before the first character
        return Position(file, 1, 0, -1)

    def advance(self, char: Optional[str] = None) -> 'Position':
        """Return the position one step further.

        `char` is the character being stepped over; stepping over a
        newline moves to the first column of the next line.
        """
        if char == '\n':
            return Position(self.file, self.line + 1, 1, self.index + 1)
        return Position(self.file, self.line, self.col + 1, self.index + 1)

    def __repr__(self) -> str:
        return f"{self.file}:{self.line}:{self.col}"


class TokenKind(Enum):
    NUMBER = 'Number'
    STRING = 'String'
    IDENTIFIER = 'Identifier'
    KEYWORD = 'Keyword'
    OPERATOR = 'Operator'
    PAREN = 'Paren'
    NEWLINE = 'Newline'
    EOF = 'EOF'


KEYWORDS = {
    'if', 'elif', 'else', 'for', 'to', 'by', 'each', 'in', 'while',
    'break', 'continue', 'func', 'return', 'null',
}

# Reserved words that lex as operators rather than keywords.
WORD_OPERATORS = {'and', 'or', 'not'}

OPERATORS = {
    '+', '-', '*', '/', '%', '^', '=', '==', '!=', '>', '>=', '<', '<=', '?', ':',
}

PARENS = {'(', ')', '[', ']', '{', '}', ','}

OPENING = {'(': ')', '[': ']', '{': '}'}


@dataclass
class Token:
    kind: TokenKind
    value: Union[float, str, None]
    pos_start: Position
    pos_end: Optional[Position] = None

    def __post_init__(self):
        if self.pos_end is None:
            self.pos_end = self.pos_start.advance()

    def matches(self, kind: TokenKind, value: Union[float, str, None] = None) -> bool:
        if self.kind != kind:
            return False
        return value is None or self.value == value

    def __repr__(self) -> str:
        if self.value is None:
            return f"[{self.kind.value}]"
        return f"[{self.kind.value}: {self.value}]"
