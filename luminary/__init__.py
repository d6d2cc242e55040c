# Luminary language package
# This package provides a tokenizer, parser and tree-walking interpreter for the Luminary language.
from .errors import LuminaryError
from .interpreter import Interpreter, run_file, run_program
from .lexer import tokenize
from .parser import parse

__all__ = [
    'run_program',
    'run_file',
    'Interpreter',
    'tokenize',
    'parse',
    'LuminaryError',
]
