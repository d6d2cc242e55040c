from pathlib import Path

from luminary.interpreter import Interpreter, run_file

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_7_operators(capsys):
    value, error = run_file(EXAMPLES / 'program_7.lum', Interpreter())
    assert error is None
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['odd', '1 0 0 2', 'ababab 1', '64 4 6']
