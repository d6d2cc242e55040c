import io

import pytest

from luminary.interpreter import Interpreter, run_program
from luminary.std import BasicIO, populate_global_context
from luminary.context import Context


def make_interpreter(stdin_text=None):
    out = io.StringIO()
    stdin = io.StringIO(stdin_text) if stdin_text is not None else None
    return Interpreter(basic_io=BasicIO(stdin=stdin, stdout=out)), out


def run(source, interp=None):
    value, error = run_program(source, 'test.lum', interp)
    assert error is None, error
    return value


def test_all_builtins_registered():
    context = populate_global_context(Context())
    for name in ('print', 'println', 'scan', 'len', 'trim', 'upper', 'lower',
                 'replace', 'append', 'prepend', 'shift', 'pop', 'exit'):
        assert name in context


def test_print_and_println():
    interp, out = make_interpreter()
    run('print("a", 1, [2, "b"])\nprintln(" end")\nprintln()', interp)
    assert out.getvalue() == 'a 1 [2, b] end\n\n'


def test_print_returns_null():
    interp, _ = make_interpreter()
    assert repr(run('print("x")', interp)) == 'null'


def test_scan_reads_line():
    interp, out = make_interpreter("Ada\n")
    assert run('scan("name? ")', interp).value == 'Ada'
    assert out.getvalue() == 'name? '


def test_scan_default_prompt_and_eof():
    interp, out = make_interpreter("")
    assert run('scan()', interp).value == ''
    assert out.getvalue() == '> '


def test_scan_uses_input(monkeypatch):
    monkeypatch.setattr('builtins.input', lambda prompt='': 'typed')
    assert run('scan()').value == 'typed'


def test_scan_eof_from_input(monkeypatch):
    def raise_eof(prompt=''):
        raise EOFError
    monkeypatch.setattr('builtins.input', raise_eof)
    assert run('scan()').value == ''


@pytest.mark.parametrize("source, expected", [
    ('len([1, 2, 3])', 3),
    ('len("four")', 4),
    ('trim("  x  ")', 'x'),
    ('upper("abc")', 'ABC'),
    ('lower("ABC")', 'abc'),
    ('replace("a-b-c", "-", "+")', 'a+b+c'),
])
def test_scalar_builtins(source, expected):
    assert run(source).value == expected


def test_list_builtins_do_not_mutate():
    value = run(
        'a = [1, 2, 3]\n'
        'b = [append(a, 4, 5), prepend(a, 0), shift(a), pop(a)]\n'
        '[a, b]'
    )
    assert str(value) == '[[1, 2, 3], [[1, 2, 3, 4, 5], [0, 1, 2, 3], [2, 3], [1, 2]]]'


@pytest.mark.parametrize("source, details", [
    ('len(5)', "len() only works for strings or lists"),
    ('len()', "len() expects 1 argument(s), got 0"),
    ('upper(1)', "upper() only works for strings"),
    ('append(1, 2)', "append() only works for lists"),
    ('append([1])', "append() expects at least 2 arguments"),
    ('shift([])', "Can't shift an empty list"),
    ('pop([])', "Can't pop an empty list"),
    ('scan(1)', "scan() only works for strings"),
    ('exit("x")', "exit() expects a number"),
    ('exit(10 ^ 400)', "exit() expects a finite number"),
])
def test_builtin_misuse_is_runtime_error(source, details):
    value, error = run_program(source)
    assert value is None
    assert error.kind == 'Runtime Error'
    assert error.details == details


def test_exit_raises_system_exit():
    with pytest.raises(SystemExit) as excinfo:
        run_program('exit(3)')
    assert excinfo.value.code == 3
    with pytest.raises(SystemExit) as excinfo:
        run_program('exit()')
    assert excinfo.value.code == 0


def test_builtin_repr_and_rebinding():
    assert repr(run('len')) == '<builtin len>'
    assert run('len = 3\nlen').value == 3
