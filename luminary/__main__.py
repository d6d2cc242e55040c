"""CLI entry point for the Luminary interpreter.

Usage:
    python -m luminary [-v|-vv|-vvv]                 (interactive shell)
    python -m luminary [-v...] <program_file>
    python -m luminary [-v...] --emit-ast <program_file>
    python -m luminary [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .lum file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import ast_from_obj, ast_to_obj
from .interpreter import Interpreter, run_program
from .lexer import tokenize
from .parser import parse
from .repl import Shell


def fail(message: str) -> None:
    print(message, file=sys.stderr)
    sys.exit(1)


def read_source(path: Path) -> str:
    if not path.exists():
        fail(f"Error: file {path} not found")
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='luminary', description="Luminary language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='LUM_FILE', help='emit AST JSON for the given .lum file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Luminary program file (.lum) to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        tokens, error = tokenize(source, str(program_file))
        if error is None:
            program, error = parse(tokens)
        if error is not None:
            fail(error.as_string())
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    interpreter = Interpreter(debug_level=args.v)
    try:
        # Execute from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            if not ast_path.exists():
                fail(f"Error: file {ast_path} not found")
            with open(ast_path, 'r', encoding='utf-8') as f:
                program = ast_from_obj(json.load(f))
            error = interpreter.run(program).error
        elif args.program:
            program_file = Path(args.program)
            _, error = run_program(read_source(program_file), str(program_file), interpreter)
        else:
            Shell(interpreter).cmdloop()
            return
        if error is not None:
            fail(error.as_string())
    finally:
        interpreter.close()


if __name__ == '__main__':
    main()
