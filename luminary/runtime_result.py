"""Result of evaluating one AST node.

Evaluation never uses host exceptions for control flow. Every call to
`Interpreter.evaluate` returns a `RuntimeResult` carrying exactly one of:
a plain value (possibly no value at all), a function-return value, a loop
break, a loop continue, or an error. Callers check `should_return` after
every recursive evaluation and hand the result straight back when it is
set.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .errors import LuminaryError

if TYPE_CHECKING:
    from .types import Value


@dataclass(frozen=True)
class RuntimeResult:
    value: Optional['Value'] = None
    return_value: Optional['Value'] = None
    should_break: bool = False
    should_continue: bool = False
    error: Optional[LuminaryError] = None

    @classmethod
    def success(cls, value: Optional['Value'] = None) -> 'RuntimeResult':
        return cls(value=value)

    @classmethod
    def returning(cls, value: 'Value') -> 'RuntimeResult':
        return cls(return_value=value)

    @classmethod
    def breaking(cls) -> 'RuntimeResult':
        return cls(should_break=True)

    @classmethod
    def continuing(cls) -> 'RuntimeResult':
        return cls(should_continue=True)

    @classmethod
    def failure(cls, error: LuminaryError) -> 'RuntimeResult':
        return cls(error=error)

    @property
    def should_return(self) -> bool:
        return (self.error is not None or self.return_value is not None
                or self.should_break or self.should_continue)

    @property
    def is_loop_signal(self) -> bool:
        return self.should_break or self.should_continue
