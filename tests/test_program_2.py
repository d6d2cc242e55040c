from pathlib import Path

from luminary.interpreter import Interpreter, run_file

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_2_fibonacci(capsys):
    value, error = run_file(EXAMPLES / 'program_2.lum', Interpreter())
    assert error is None
    out = capsys.readouterr().out.strip()
    assert out == 'fib(10) = 55'
