from pathlib import Path

from luminary.interpreter import Interpreter, run_file

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_10_fizzbuzz(capsys):
    value, error = run_file(EXAMPLES / 'program_10.lum', Interpreter())
    assert error is None
    out = capsys.readouterr().out.strip()
    assert out == '[1, 2, Fizz, 4, Buzz, Fizz, 7, 8, Fizz, Buzz, 11, Fizz, 13, 14, FizzBuzz]'
