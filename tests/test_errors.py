from luminary.errors import IllegalCharError, InvalidSyntaxError, LuminaryError, RTError
from luminary.interpreter import run_program
from luminary.tokens import Position


def test_rendering_with_position():
    start = Position('main.lum', 3, 7, 20)
    err = RTError("Something broke", start, Position('main.lum', 3, 9, 22))
    assert err.as_string() == (
        "\033[31mError(Runtime Error): Something broke.\nFile: main.lum - Line: 3 - Col: 7:9"
    )
    assert str(err) == err.as_string()


def test_rendering_without_position():
    assert InvalidSyntaxError("Oops").as_string() == "\033[31mError(Invalid Syntax): Oops."


def test_end_defaults_to_one_past_start():
    err = IllegalCharError("'$'", Position('f', 1, 4, 3))
    assert err.pos_end.col == 5


def test_kinds():
    assert IllegalCharError.kind == 'Illigal Char'
    assert InvalidSyntaxError.kind == 'Invalid Syntax'
    assert RTError.kind == 'Runtime Error'
    assert issubclass(RTError, LuminaryError)


def test_runtime_error_reports_line_and_columns():
    _, error = run_program("x = 1\ny = [1, 2][x + 4]", 'p.lum')
    assert error.as_string() == (
        "\033[31mError(Runtime Error): Index out of range (5) with length of 2.\n"
        "File: p.lum - Line: 2 - Col: 12:17"
    )


def test_syntax_error_reports_offending_token():
    _, error = run_program("x = (1 + 2", 'p.lum')
    assert error.details == "Expected ')'"
    assert error.pos_start.col == 11
