import math
from typing import Any, List, Optional

from .basic_io import BasicIO
from luminary.builtin_function import BuiltinFunction
from luminary.context import Context
from luminary.errors import RTError
from luminary.types import List as ListVal, Number, String, Value


def expect_string(name: str, value: Value) -> str:
    if not isinstance(value, String):
        raise RTError(f"{name}() only works for strings", value.pos_start, value.pos_end)
    return value.value


def expect_list(name: str, value: Value) -> ListVal:
    if not isinstance(value, ListVal):
        raise RTError(f"{name}() only works for lists", value.pos_start, value.pos_end)
    return value


def populate_global_context(context: Optional[Context] = None,
                            basic_io: Optional[BasicIO] = None) -> Context:
    """Register the built-in library in `context` (a new root context by default)."""
    basic_io = basic_io or BasicIO()
    context = context or Context('<program>')

    def std_print(args: List[Value]) -> Any:
        basic_io.write_values(args)
        return None

    def std_println(args: List[Value]) -> Any:
        basic_io.write_values(args, end='\n')
        return None

    def std_scan(args: List[Value]) -> Any:
        if len(args) > 1:
            raise RTError(f"scan() expects at most 1 argument, got {len(args)}")
        prompt = expect_string('scan', args[0]) if args else '> '
        return basic_io.read_line(prompt)

    def std_len(args: List[Value]) -> Any:
        value = args[0]
        if isinstance(value, ListVal):
            return Number(value.length)
        if isinstance(value, String):
            return Number(len(value.value))
        raise RTError("len() only works for strings or lists", value.pos_start, value.pos_end)

    def std_trim(args: List[Value]) -> Any:
        return String(expect_string('trim', args[0]).strip())

    def std_upper(args: List[Value]) -> Any:
        return String(expect_string('upper', args[0]).upper())

    def std_lower(args: List[Value]) -> Any:
        return String(expect_string('lower', args[0]).lower())

    def std_replace(args: List[Value]) -> Any:
        text, old, new = (expect_string('replace', arg) for arg in args)
        return String(text.replace(old, new))

    def std_append(args: List[Value]) -> Any:
        if len(args) < 2:
            raise RTError("append() expects at least 2 arguments")
        target = expect_list('append', args[0])
        return ListVal(target.elements + list(args[1:]))

    def std_prepend(args: List[Value]) -> Any:
        if len(args) < 2:
            raise RTError("prepend() expects at least 2 arguments")
        target = expect_list('prepend', args[0])
        return ListVal(list(args[1:]) + target.elements)

    def std_shift(args: List[Value]) -> Any:
        target = expect_list('shift', args[0])
        if not target.elements:
            raise RTError("Can't shift an empty list", target.pos_start, target.pos_end)
        return ListVal(target.elements[1:])

    def std_pop(args: List[Value]) -> Any:
        target = expect_list('pop', args[0])
        if not target.elements:
            raise RTError("Can't pop an empty list", target.pos_start, target.pos_end)
        return ListVal(target.elements[:-1])

    def std_exit(args: List[Value]) -> Any:
        if len(args) > 1:
            raise RTError(f"exit() expects at most 1 argument, got {len(args)}")
        code = 0
        if args:
            if not isinstance(args[0], Number):
                raise RTError("exit() expects a number", args[0].pos_start, args[0].pos_end)
            if not math.isfinite(args[0].value):
                raise RTError("exit() expects a finite number", args[0].pos_start, args[0].pos_end)
            code = int(args[0].value)
        raise SystemExit(code)

    builtins = [
        BuiltinFunction('print', ['...values'], std_print),
        BuiltinFunction('println', ['...values'], std_println),
        BuiltinFunction('scan', ['prompt'], std_scan),
        BuiltinFunction('len', ['list|string'], std_len, arity=1),
        BuiltinFunction('trim', ['string'], std_trim, arity=1),
        BuiltinFunction('upper', ['string'], std_upper, arity=1),
        BuiltinFunction('lower', ['string'], std_lower, arity=1),
        BuiltinFunction('replace', ['string', 'old', 'new'], std_replace, arity=3),
        BuiltinFunction('append', ['list', '...elements'], std_append),
        BuiltinFunction('prepend', ['list', '...elements'], std_prepend),
        BuiltinFunction('shift', ['list'], std_shift, arity=1),
        BuiltinFunction('pop', ['list'], std_pop, arity=1),
        BuiltinFunction('exit', ['code'], std_exit),
    ]
    for builtin in builtins:
        context.set(builtin.name, builtin)
    return context
