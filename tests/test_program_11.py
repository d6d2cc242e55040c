from pathlib import Path

from luminary.interpreter import Interpreter, run_file

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_11_stops_at_runtime_error(capsys):
    value, error = run_file(EXAMPLES / 'program_11.lum', Interpreter())
    out = capsys.readouterr().out.strip()
    assert out == 'ticks: 3'
    assert value is None
    assert error.kind == 'Runtime Error'
    assert error.details == "Can't divide by zero"
    assert error.pos_start.file.endswith('program_11.lum')
    assert error.pos_start.line == 10
