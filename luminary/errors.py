from typing import Optional

from luminary.tokens import Position

RED = '\033[31m'
RESET = '\033[0m'


class LuminaryError(Exception):
    """A diagnostic produced by the lexer, the parser or the interpreter.

    Errors are raised inside the lexer, the parser and the value model and
    travel through the interpreter as part of a `RuntimeResult`.
    """
    kind = 'Error'

    def __init__(self, details: str, pos_start: Optional[Position] = None,
                 pos_end: Optional[Position] = None):
        super().__init__(details)
        self.details = details
        self.pos_start = None
        self.pos_end = None
        self.set_pos(pos_start, pos_end)

    def set_pos(self, pos_start: Optional[Position] = None,
                pos_end: Optional[Position] = None) -> 'LuminaryError':
        self.pos_start = pos_start
        self.pos_end = pos_end
        if pos_start is not None and pos_end is None:
            self.pos_end = pos_start.advance()
        return self

    def as_string(self) -> str:
        if self.pos_start is not None and self.pos_end is not None:
            return (f"{RED}Error({self.kind}): {self.details}.\n"
                    f"File: {self.pos_start.file} - Line: {self.pos_start.line}"
                    f" - Col: {self.pos_start.col}:{self.pos_end.col}")
        return f"{RED}Error({self.kind}): {self.details}."

    def __str__(self) -> str:
        return self.as_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.details!r})"


class IllegalCharError(LuminaryError):
    kind = 'Illigal Char'


class InvalidSyntaxError(LuminaryError):
    kind = 'Invalid Syntax'


class RTError(LuminaryError):
    kind = 'Runtime Error'
