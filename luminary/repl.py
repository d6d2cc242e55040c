"""Interactive shell for the Luminary interpreter. Uses cmd as backend."""

import cmd

from termcolor import colored

from .errors import RESET
from .interpreter import Interpreter, run_program
from .lexer import tokenize
from .tokens import OPENING, TokenKind
from .types import Null


def open_brackets(source: str) -> int:
    """Return how many brackets are still open at the end of `source`.

    Source that does not tokenize is treated as complete so that the error
    gets reported instead of waiting for more input.
    """
    tokens, error = tokenize(source)
    if error is not None:
        return 0
    depth = 0
    for token in tokens:
        if token.kind != TokenKind.PAREN:
            continue
        if token.value in OPENING:
            depth += 1
        elif token.value in (')', ']', '}'):
            depth -= 1
    return depth


class Shell(cmd.Cmd):
    """Luminary read-eval-print loop.

    Every complete line (or group of lines, while brackets are open) is
    run against one interpreter, so definitions persist between inputs.
    Errors are printed and the shell returns to the prompt; only `exit`
    (the command or the built-in) and end of input leave.
    """
    intro = "Luminary interpreter\nType 'exit' or press Ctrl-D to leave."
    prompt = colored("luminary %", "yellow") + " "
    secondary_prompt = colored("...", "yellow") + " "  # used for line continuations
    _tmp_prompt = prompt

    def __init__(self, interpreter=None, file_name='<stdin>', *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.interpreter = interpreter or Interpreter()
        self.file_name = file_name
        self._tmp_source = ""

    def default(self, line):
        """Evaluates a line of Luminary source."""
        source = self._tmp_source + line + "\n"
        if open_brackets(source) > 0:
            self._tmp_source = source
            self.prompt = self.secondary_prompt
            return
        self._tmp_source = ""
        self.prompt = self._tmp_prompt

        value, error = run_program(source, self.file_name, self.interpreter)
        if error is not None:
            print(error.as_string() + RESET)
        elif value is not None and not isinstance(value, Null):
            print(repr(value))

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        if self._tmp_source:
            self.default("")
        return False

    def do_exit(self, arg):
        """Exits interpreter; `exit(code)` calls the built-in instead."""
        if arg:
            return self.default("exit " + arg)
        return True

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return True
