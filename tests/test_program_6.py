import builtins
from pathlib import Path

from luminary.interpreter import Interpreter, run_file

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_6_while_break(monkeypatch, capsys):
    monkeypatch.setattr(builtins, 'input', lambda prompt='': 'abc')
    value, error = run_file(EXAMPLES / 'program_6.lum', Interpreter())
    assert error is None
    out = capsys.readouterr().out.strip()
    assert out == 'n = 6'
