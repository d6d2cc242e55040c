"""Runtime value model for Luminary.

Every runtime value is a `Value` and implements the same capability set:
arithmetic (`add_to`, `sub_by`, `mul_by`, `div_by`, `mod`, `pow`),
comparison, logical `and`/`or`/`not`, truthiness (`is_true`), raw access
(`get_val`) and `call`.

Capabilities that make no sense for a variant raise a `LuminaryError`
spanning the offending operand; the interpreter turns it into a failed
`RuntimeResult`. Equality, inequality, truthiness and the logical
operators are total: they never fail. Lists and functions are never equal
to anything and are always truthy.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, List as PyList, Optional

from .context import Context
from .errors import InvalidSyntaxError, LuminaryError, RTError
from .runtime_result import RuntimeResult
from .tokens import Position

if TYPE_CHECKING:
    from .ast import Node
    from .interpreter import Interpreter


class Value:
    type_name = 'value'

    def __init__(self):
        self.pos_start: Optional[Position] = None
        self.pos_end: Optional[Position] = None

    def set_pos(self, pos_start: Optional[Position] = None,
                pos_end: Optional[Position] = None) -> 'Value':
        self.pos_start = pos_start
        self.pos_end = pos_end
        if pos_start is not None and pos_end is None:
            self.pos_end = pos_start.advance()
        return self

    def copy(self) -> 'Value':
        raise NotImplementedError(f"copy not implemented for {self.type_name}")

    def illegal_operation(self, op: str) -> LuminaryError:
        return InvalidSyntaxError(f"Invalid '{op}' operation on a {self.type_name}",
                                  self.pos_start, self.pos_end)

    def cannot_compare(self, other: 'Value') -> LuminaryError:
        if type(other) is type(self):
            return RTError(f"Can't compare {self.type_name}s", self.pos_start, self.pos_end)
        return RTError(f"Can't compare a {self.type_name} with a {other.type_name}",
                       self.pos_start, other.pos_end)

    # Arithmetic

    def add_to(self, other: 'Value') -> 'Value':
        raise self.illegal_operation('+')

    def sub_by(self, other: 'Value') -> 'Value':
        raise self.illegal_operation('-')

    def mul_by(self, other: 'Value') -> 'Value':
        raise self.illegal_operation('*')

    def div_by(self, other: 'Value') -> 'Value':
        raise self.illegal_operation('/')

    def mod(self, other: 'Value') -> 'Value':
        raise self.illegal_operation('%')

    def pow(self, other: 'Value') -> 'Value':
        raise self.illegal_operation('^')

    # Comparison

    def is_equal_to(self, other: 'Value') -> 'Number':
        return Number(0)

    def is_not_equal_to(self, other: 'Value') -> 'Number':
        return Number(0 if self.is_equal_to(other).is_true() else 1)

    def is_greater_than(self, other: 'Value') -> 'Number':
        raise self.cannot_compare(other)

    def is_greater_than_or_equal(self, other: 'Value') -> 'Number':
        raise self.cannot_compare(other)

    def is_less_than(self, other: 'Value') -> 'Number':
        raise self.cannot_compare(other)

    def is_less_than_or_equal(self, other: 'Value') -> 'Number':
        raise self.cannot_compare(other)

    # Logic

    def logical_and(self, other: 'Value') -> 'Value':
        if self.is_true() and other.is_true():
            return other
        return Number(0)

    def logical_or(self, other: 'Value') -> 'Value':
        if self.is_true():
            return self
        if other.is_true():
            return other
        return Number(0)

    def logical_not(self) -> 'Number':
        return Number(0 if self.is_true() else 1)

    def is_true(self) -> bool:
        return True

    def get_val(self) -> Any:
        return None

    def call(self, args: PyList['Value'], interpreter: 'Interpreter') -> RuntimeResult:
        return RuntimeResult.failure(
            RTError(f"Can't call a {self.type_name}", self.pos_start, self.pos_end))


def value_or_null(value: Optional[Value]) -> Value:
    """Constructs that produce no value read as null where a value is needed."""
    return Null() if value is None else value


def format_number(value: float) -> str:
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


class Number(Value):
    type_name = 'number'

    def __init__(self, value: float):
        super().__init__()
        self.value = float(value)

    def copy(self) -> 'Number':
        return Number(self.value).set_pos(self.pos_start, self.pos_end)

    def expect_number(self, other: Value) -> float:
        if not isinstance(other, Number):
            raise RTError("Expected a number", other.pos_start, other.pos_end)
        return other.value

    def add_to(self, other: Value) -> 'Number':
        return Number(self.value + self.expect_number(other))

    def sub_by(self, other: Value) -> 'Number':
        return Number(self.value - self.expect_number(other))

    def mul_by(self, other: Value) -> 'Number':
        return Number(self.value * self.expect_number(other))

    def div_by(self, other: Value) -> 'Number':
        divisor = self.expect_number(other)
        if divisor == 0:
            raise RTError("Can't divide by zero", other.pos_start, other.pos_end)
        return Number(self.value / divisor)

    def mod(self, other: Value) -> 'Number':
        divisor = self.expect_number(other)
        if divisor == 0:
            raise RTError("Can't divide by zero", other.pos_start, other.pos_end)
        return Number(math.fmod(self.value, divisor))

    def pow(self, other: Value) -> 'Number':
        exponent = self.expect_number(other)
        try:
            return Number(math.pow(self.value, exponent))
        except OverflowError:
            negative = self.value < 0 and exponent.is_integer() and exponent % 2 == 1
            return Number(-math.inf if negative else math.inf)
        except ValueError:
            # 0 ^ negative, or a negative base with a fractional exponent
            return Number(math.inf if self.value == 0 else math.nan)

    def is_equal_to(self, other: Value) -> 'Number':
        return Number(1 if isinstance(other, Number) and self.value == other.value else 0)

    def compare(self, other: Value) -> float:
        if not isinstance(other, Number):
            raise self.cannot_compare(other)
        return other.value

    def is_greater_than(self, other: Value) -> 'Number':
        return Number(1 if self.value > self.compare(other) else 0)

    def is_greater_than_or_equal(self, other: Value) -> 'Number':
        return Number(1 if self.value >= self.compare(other) else 0)

    def is_less_than(self, other: Value) -> 'Number':
        return Number(1 if self.value < self.compare(other) else 0)

    def is_less_than_or_equal(self, other: Value) -> 'Number':
        return Number(1 if self.value <= self.compare(other) else 0)

    def is_true(self) -> bool:
        return self.value != 0

    def get_val(self) -> float:
        return self.value

    def __str__(self) -> str:
        return format_number(self.value)

    def __repr__(self) -> str:
        return str(self)


class String(Value):
    type_name = 'string'

    def __init__(self, value: str):
        super().__init__()
        self.value = value

    def copy(self) -> 'String':
        return String(self.value).set_pos(self.pos_start, self.pos_end)

    def add_to(self, other: Value) -> 'String':
        if isinstance(other, String):
            return String(self.value + other.value)
        raise RTError("Only strings can be concatenated with a string",
                      other.pos_start, other.pos_end)

    def mul_by(self, other: Value) -> 'String':
        if not isinstance(other, Number):
            raise RTError("Expected a number", other.pos_start, other.pos_end)
        if not math.isfinite(other.value):
            raise RTError("Expected a finite number", other.pos_start, other.pos_end)
        return String(self.value * int(other.value))

    def is_equal_to(self, other: Value) -> Number:
        return Number(1 if isinstance(other, String) and self.value == other.value else 0)

    def compare(self, other: Value) -> str:
        if not isinstance(other, String):
            raise self.cannot_compare(other)
        return other.value

    def is_greater_than(self, other: Value) -> Number:
        return Number(1 if self.value > self.compare(other) else 0)

    def is_greater_than_or_equal(self, other: Value) -> Number:
        return Number(1 if self.value >= self.compare(other) else 0)

    def is_less_than(self, other: Value) -> Number:
        return Number(1 if self.value < self.compare(other) else 0)

    def is_less_than_or_equal(self, other: Value) -> Number:
        return Number(1 if self.value <= self.compare(other) else 0)

    def is_true(self) -> bool:
        return len(self.value) > 0

    def get_val(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return '"' + self.value.replace('\\', '\\\\').replace('"', '\\"') + '"'


class List(Value):
    """An ordered sequence of values.

    Copies share the backing `elements` list, so a list reached through two
    names is the same list: element assignment through one is visible
    through the other. Every other list operation builds a new list.
    """
    type_name = 'list'

    def __init__(self, elements: PyList[Value]):
        super().__init__()
        self.elements = elements

    @property
    def length(self) -> int:
        return len(self.elements)

    def copy(self) -> 'List':
        return List(self.elements).set_pos(self.pos_start, self.pos_end)

    def add_to(self, other: Value) -> 'List':
        if isinstance(other, List):
            return List(self.elements + other.elements)
        raise InvalidSyntaxError("Only lists can be concatenated with a list",
                                 self.pos_start, self.pos_end)

    def check_index(self, index: Value, upper: int) -> int:
        if not isinstance(index, Number) or not math.isfinite(index.value):
            raise RTError("Expected a number", index.pos_start, index.pos_end)
        position = int(index.value)
        if position < 0 or position > upper:
            raise RTError(f"Index out of range ({position}) with length of {self.length}",
                          index.pos_start, index.pos_end)
        return position

    def access(self, index: Value, to_index: Optional[Value] = None) -> Value:
        """Return the element at `index`, or a new list for `[index:to_index]`."""
        start = self.check_index(index, self.length - 1)
        if to_index is None:
            return self.elements[start]
        end = self.check_index(to_index, self.length)
        if end < start:
            raise RTError(f"Invalid slice ({start}:{end})", index.pos_start, to_index.pos_end)
        return List(self.elements[start:end])

    def assign(self, index: Value, value: Value) -> Value:
        self.elements[self.check_index(index, self.length - 1)] = value
        return value

    def get_val(self) -> PyList[Value]:
        return self.elements

    def call(self, args: PyList[Value], interpreter: 'Interpreter') -> RuntimeResult:
        if len(args) not in (1, 2):
            return RuntimeResult.failure(
                RTError("Expected an index or start & end indexes", self.pos_start, self.pos_end))
        try:
            return RuntimeResult.success(self.access(*args))
        except LuminaryError as err:
            return RuntimeResult.failure(err)

    def __str__(self) -> str:
        return '[' + ', '.join(str(element) for element in self.elements) + ']'

    def __repr__(self) -> str:
        return '[' + ', '.join(repr(element) for element in self.elements) + ']'


class Null(Value):
    type_name = 'null'

    def copy(self) -> 'Null':
        return Null().set_pos(self.pos_start, self.pos_end)

    def is_equal_to(self, other: Value) -> Number:
        return Number(1 if isinstance(other, Null) else 0)

    def is_true(self) -> bool:
        return False

    def __str__(self) -> str:
        return 'null'

    def __repr__(self) -> str:
        return 'null'


class Function(Value):
    """A user-defined function closing over the context it was defined in."""
    type_name = 'function'

    def __init__(self, name: Optional[str], params: PyList[str], body: 'Node',
                 is_expression_body: bool, context: Context):
        super().__init__()
        self.name = name
        self.params = params
        self.body = body
        self.is_expression_body = is_expression_body
        self.context = context

    @property
    def display_name(self) -> str:
        return self.name or '<anonymous>'

    def copy(self) -> 'Function':
        return Function(self.name, self.params, self.body, self.is_expression_body,
                        self.context).set_pos(self.pos_start, self.pos_end)

    def call(self, args: PyList[Value], interpreter: 'Interpreter') -> RuntimeResult:
        if len(args) != len(self.params):
            return RuntimeResult.failure(RTError(
                f"{self.display_name}() expects {len(self.params)} argument(s), got {len(args)}",
                self.pos_start, self.pos_end))
        exec_context = Context(self.display_name, parent=self.context)
        for name, arg in zip(self.params, args):
            exec_context.set(name, arg)
        res = interpreter.evaluate(self.body, exec_context)
        if res.error is not None:
            return res
        # a pending return stops here: callers only ever see a plain value
        if res.return_value is not None:
            return RuntimeResult.success(res.return_value)
        if self.is_expression_body:
            return RuntimeResult.success(value_or_null(res.value))
        return RuntimeResult.success(Null())

    def __repr__(self) -> str:
        return f"<function {self.display_name}>"
