"""Tokenizer for the Luminary language.

The lexer makes a single left-to-right pass over the source text and has
no knowledge of the grammar. Whitespace is skipped, newlines and `;`
become statement separators, and `#` starts a comment that runs to the end
of the line. Numbers never carry a sign: unary minus is handled by the
parser.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from .errors import IllegalCharError, LuminaryError
from .tokens import (
    KEYWORDS, OPERATORS, PARENS, WORD_OPERATORS, Position, Token, TokenKind,
)

DIGITS = '0123456789'

ESCAPES = {
    'n': '\n',
    't': '\t',
    '\\': '\\',
    '"': '"',
    '\'': '\'',
}


class Lexer:
    def __init__(self, source: str, file_name: str = '<stdin>'):
        self.source = source
        self.file_name = file_name
        self.pos = Position.start(file_name)
        self.current: Optional[str] = None
        self.advance()

    def advance(self):
        self.pos = self.pos.advance(self.current)
        if self.pos.index < len(self.source):
            self.current = self.source[self.pos.index]
        else:
            self.current = None

    def make_tokens(self) -> List[Token]:
        """Tokenize the whole source, raising IllegalCharError on failure."""
        tokens: List[Token] = []
        while self.current is not None:
            c = self.current
            if c in '\n;':
                tokens.append(Token(TokenKind.NEWLINE, None, self.pos))
                self.advance()
            elif c.isspace():
                self.advance()
            elif c == '#':
                self.skip_comment()
            elif c in DIGITS:
                tokens.append(self.make_number())
            elif c.isalpha() or c == '_':
                tokens.append(self.make_identifier())
            elif c in '"\'':
                tokens.append(self.make_string())
            elif c in PARENS:
                tokens.append(Token(TokenKind.PAREN, c, self.pos))
                self.advance()
            elif c in OPERATORS or c == '!':
                tokens.append(self.make_operator())
            else:
                pos_start = self.pos
                self.advance()
                raise IllegalCharError(f"'{c}'", pos_start, self.pos)
        tokens.append(Token(TokenKind.EOF, None, self.pos))
        return tokens

    def skip_comment(self):
        while self.current is not None and self.current != '\n':
            self.advance()

    def make_number(self) -> Token:
        pos_start = self.pos
        digits = ''
        seen_dot = False
        while self.current is not None and (self.current in DIGITS or self.current == '.'):
            if self.current == '.':
                # a second dot ends the literal
                if seen_dot:
                    break
                seen_dot = True
            digits += self.current
            self.advance()
        return Token(TokenKind.NUMBER, float(digits), pos_start, self.pos)

    def make_identifier(self) -> Token:
        pos_start = self.pos
        name = ''
        while self.current is not None and (self.current.isalnum() or self.current == '_'):
            name += self.current
            self.advance()
        if name in WORD_OPERATORS:
            kind = TokenKind.OPERATOR
        elif name in KEYWORDS:
            kind = TokenKind.KEYWORD
        else:
            kind = TokenKind.IDENTIFIER
        return Token(kind, name, pos_start, self.pos)

    def make_string(self) -> Token:
        pos_start = self.pos
        quote = self.current
        self.advance()
        chars: List[str] = []
        while self.current is not None and self.current != quote:
            if self.current == '\\':
                self.advance()
                if self.current is None:
                    break
                chars.append(ESCAPES.get(self.current, '\\' + self.current))
            else:
                chars.append(self.current)
            self.advance()
        if self.current is None:
            raise IllegalCharError(f"'{quote}' (unterminated string)", pos_start)
        self.advance()
        return Token(TokenKind.STRING, ''.join(chars), pos_start, self.pos)

    def make_operator(self) -> Token:
        pos_start = self.pos
        first = self.current
        self.advance()
        if self.current is not None and first + self.current in OPERATORS:
            op = first + self.current
            self.advance()
            return Token(TokenKind.OPERATOR, op, pos_start, self.pos)
        if first == '!':
            # '!' only exists as the first half of '!='
            raise IllegalCharError("'!'", pos_start, self.pos)
        return Token(TokenKind.OPERATOR, first, pos_start, self.pos)


def tokenize(source: str, file_name: str = '<stdin>') -> Tuple[List[Token], Optional[LuminaryError]]:
    """Convert source code into a list of tokens.

    Returns `(tokens, None)` on success and `([], error)` when an illegal
    character stops the scan. A successful scan always ends with exactly
    one EOF token.
    """
    try:
        return Lexer(source, file_name).make_tokens(), None
    except IllegalCharError as err:
        return [], err
