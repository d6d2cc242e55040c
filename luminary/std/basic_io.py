import sys
from typing import List, Optional, TextIO

from luminary.types import String, Value


class BasicIO:
    """Console input/output used by print, println and scan."""
    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin
        self.stdout = stdout

    @property
    def out(self) -> TextIO:
        # resolved lazily so pytest's capsys sees the output
        return self.stdout if self.stdout is not None else sys.stdout

    def write_values(self, values: List[Value], end: str = ''):
        self.out.write(' '.join(str(value) for value in values) + end)
        self.out.flush()

    def read_line(self, prompt: str) -> String:
        if self.stdin is None:
            try:
                return String(input(prompt))
            except EOFError:
                return String('')
        self.out.write(prompt)
        self.out.flush()
        return String(self.stdin.readline().rstrip('\n'))
