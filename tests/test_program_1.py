from pathlib import Path

from luminary.interpreter import Interpreter, run_file

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_1(capsys):
    value, error = run_file(EXAMPLES / 'program_1.lum', Interpreter())
    assert error is None
    out = capsys.readouterr().out.strip()
    assert out == 'Hello World!!'
