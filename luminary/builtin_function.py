from typing import Any, Callable, List, Optional

from luminary.errors import LuminaryError, RTError
from luminary.runtime_result import RuntimeResult
from luminary.types import Value, value_or_null


class BuiltinFunction(Value):
    """A host-implemented function, callable exactly like a user function.

    `fn` receives the evaluated argument values and returns a Value (or
    None for "no value"). `arity` is the exact argument count, or None
    when `fn` validates the count itself.
    """
    type_name = 'builtin function'

    def __init__(self, name: str, params: List[str], fn: Callable[[List[Value]], Any],
                 arity: Optional[int] = None):
        super().__init__()
        self.name = name
        self.params = params
        self.fn = fn
        self.arity = arity

    def copy(self) -> 'BuiltinFunction':
        return BuiltinFunction(self.name, self.params, self.fn, self.arity).set_pos(
            self.pos_start, self.pos_end)

    def call(self, args: List[Value], interpreter) -> RuntimeResult:
        if self.arity is not None and len(args) != self.arity:
            return RuntimeResult.failure(RTError(
                f"{self.name}() expects {self.arity} argument(s), got {len(args)}",
                self.pos_start, self.pos_end))
        try:
            result = self.fn(args)
        except LuminaryError as err:
            return RuntimeResult.failure(err)
        return RuntimeResult.success(value_or_null(result))

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
