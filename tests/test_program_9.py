from pathlib import Path

from luminary.interpreter import Interpreter, run_file

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_9_slices_and_strings(capsys):
    value, error = run_file(EXAMPLES / 'program_9.lum', Interpreter())
    assert error is None
    out = capsys.readouterr().out.strip().splitlines()
    assert out == [
        '[b, c] a d',
        'hi you loud',
        '[b, c, d] [a, b, c] [z, a, b, c, d]',
    ]
