from pathlib import Path

from luminary.interpreter import Interpreter, run_file

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_8_higher_order(capsys):
    value, error = run_file(EXAMPLES / 'program_8.lum', Interpreter())
    assert error is None
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['[1, 4, 9]', '[a!, b!]']
