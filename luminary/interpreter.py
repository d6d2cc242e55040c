"""Tree-walking interpreter for the Luminary language.

`Interpreter.evaluate(node, context)` dispatches on the node's class to a
`visit_<NodeName>` method and always returns a `RuntimeResult`. Return,
break, continue and errors travel back up through those results rather
than through host exceptions: every visitor checks `should_return` right
after each recursive evaluation and hands the result back unchanged.

Value capabilities raise `LuminaryError` on invalid operations; the
visitor that invoked the capability converts the error into a failed
result, stamping the node's span on errors that carry none.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, TextIO, Tuple

from .ast import (
    Block, BinaryOp, Break, Continue, Each, ElementAccess, ElementAssign, For,
    FunctionCall, FunctionDef, If, ListLit, Node, NullLit, NumberLit, Return,
    StringLit, Ternary, UnaryOp, VarAccess, VarAssign, While,
)
from .context import Context
from .errors import InvalidSyntaxError, LuminaryError, RTError
from .lexer import tokenize
from .parser import parse
from .runtime_result import RuntimeResult
from .std import BasicIO, populate_global_context
from .types import Function, List as ListVal, Null, Number, String, Value, value_or_null

BINARY_CAPABILITIES = {
    '+': 'add_to',
    '-': 'sub_by',
    '*': 'mul_by',
    '/': 'div_by',
    '%': 'mod',
    '^': 'pow',
    '==': 'is_equal_to',
    '!=': 'is_not_equal_to',
    '>': 'is_greater_than',
    '>=': 'is_greater_than_or_equal',
    '<': 'is_less_than',
    '<=': 'is_less_than_or_equal',
    'and': 'logical_and',
    'or': 'logical_or',
}


def failure_at(err: LuminaryError, node: Node) -> RuntimeResult:
    if err.pos_start is None:
        err.set_pos(node.pos_start, node.pos_end)
    return RuntimeResult.failure(err)


class Interpreter:
    """Core interpreter that evaluates Luminary ASTs."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 basic_io: Optional[BasicIO] = None):
        self.debug_level = debug_level
        self.debug_fp: Optional[TextIO] = open(debug_file, 'w') if debug_level > 0 else None
        self.global_context = populate_global_context(Context('<program>'), basic_io)

    def debug(self, msg: str, level: int = 1):
        if self.debug_level >= level and self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Node, context: Optional[Context] = None) -> RuntimeResult:
        """Evaluate a whole program and return its final result.

        A return signal reaching the top level becomes a plain value.
        Exhausting the host stack is reported as a runtime error instead
        of escaping as a Python exception.
        """
        context = context or self.global_context
        self.debug(f"run {type(program).__name__} in {context!r}")
        try:
            res = self.evaluate(program, context)
        except RecursionError:
            return RuntimeResult.failure(
                RTError("Maximum recursion depth exceeded", program.pos_start, program.pos_end))
        if res.return_value is not None:
            return RuntimeResult.success(res.return_value)
        if res.is_loop_signal:
            return RuntimeResult.success()
        return res

    def evaluate(self, node: Node, context: Context) -> RuntimeResult:
        method = getattr(self, f"visit_{type(node).__name__}", None)
        if method is None:
            raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")
        return method(node, context)

    # Literals

    def visit_NumberLit(self, node: NumberLit, context: Context) -> RuntimeResult:
        return RuntimeResult.success(Number(node.token.value).set_pos(node.pos_start, node.pos_end))

    def visit_StringLit(self, node: StringLit, context: Context) -> RuntimeResult:
        return RuntimeResult.success(String(node.token.value).set_pos(node.pos_start, node.pos_end))

    def visit_NullLit(self, node: NullLit, context: Context) -> RuntimeResult:
        return RuntimeResult.success(Null().set_pos(node.pos_start, node.pos_end))

    def visit_ListLit(self, node: ListLit, context: Context) -> RuntimeResult:
        elements: List[Value] = []
        for element_node in node.elements:
            res = self.evaluate(element_node, context)
            if res.should_return:
                return res
            elements.append(value_or_null(res.value))
        return RuntimeResult.success(ListVal(elements).set_pos(node.pos_start, node.pos_end))

    def visit_Block(self, node: Block, context: Context) -> RuntimeResult:
        last: Optional[Value] = None
        for statement in node.statements:
            res = self.evaluate(statement, context)
            if res.should_return:
                return res
            last = res.value
        return RuntimeResult.success(last)

    # Operators

    def visit_BinaryOp(self, node: BinaryOp, context: Context) -> RuntimeResult:
        # the right operand is evaluated first
        res = self.evaluate(node.right, context)
        if res.should_return:
            return res
        right = value_or_null(res.value)
        res = self.evaluate(node.left, context)
        if res.should_return:
            return res
        left = value_or_null(res.value)

        capability = BINARY_CAPABILITIES.get(node.op.value)
        if capability is None:
            return failure_at(InvalidSyntaxError(f"Unexpected operator '{node.op.value}'"), node)
        try:
            result = getattr(left, capability)(right)
        except LuminaryError as err:
            return failure_at(err, node)
        return RuntimeResult.success(result.copy().set_pos(node.pos_start, node.pos_end))

    def visit_UnaryOp(self, node: UnaryOp, context: Context) -> RuntimeResult:
        res = self.evaluate(node.operand, context)
        if res.should_return:
            return res
        operand = value_or_null(res.value)
        try:
            if node.op.value == '-':
                result = operand.mul_by(Number(-1))
            elif node.op.value == 'not':
                result = operand.logical_not()
            else:
                result = operand
        except LuminaryError as err:
            return failure_at(err, node)
        return RuntimeResult.success(result.copy().set_pos(node.pos_start, node.pos_end))

    def visit_Ternary(self, node: Ternary, context: Context) -> RuntimeResult:
        res = self.evaluate(node.condition, context)
        if res.should_return:
            return res
        branch = node.left if value_or_null(res.value).is_true() else node.right
        return self.evaluate(branch, context)

    # Variables

    def visit_VarAccess(self, node: VarAccess, context: Context) -> RuntimeResult:
        value = context.get(node.name.value)
        if value is None:
            return RuntimeResult.success(Null().set_pos(node.pos_start, node.pos_end))
        return RuntimeResult.success(value.copy().set_pos(node.pos_start, node.pos_end))

    def visit_VarAssign(self, node: VarAssign, context: Context) -> RuntimeResult:
        res = self.evaluate(node.value, context)
        if res.should_return:
            return res
        value = value_or_null(res.value)
        context.set(node.name.value, value)
        self.debug(f"assign {node.name.value} = {value!r}", level=2)
        return RuntimeResult.success(value)

    def visit_ElementAccess(self, node: ElementAccess, context: Context) -> RuntimeResult:
        res = self.evaluate(node.target, context)
        if res.should_return:
            return res
        target = value_or_null(res.value)
        res = self.evaluate(node.index, context)
        if res.should_return:
            return res
        index = value_or_null(res.value)
        if not isinstance(index, Number):
            return failure_at(RTError("Expected a number for the index",
                                      node.index.pos_start, node.index.pos_end), node)
        to_index = None
        if node.to_index is not None:
            res = self.evaluate(node.to_index, context)
            if res.should_return:
                return res
            to_index = value_or_null(res.value)
            if not isinstance(to_index, Number):
                return failure_at(RTError("Expected a number for the to-index",
                                          node.to_index.pos_start, node.to_index.pos_end), node)
        if not isinstance(target, ListVal):
            return failure_at(RTError(f"Can't index into a {target.type_name}",
                                      target.pos_start, target.pos_end), node)
        try:
            element = target.access(index, to_index)
        except LuminaryError as err:
            return failure_at(err, node)
        return RuntimeResult.success(element)

    def visit_ElementAssign(self, node: ElementAssign, context: Context) -> RuntimeResult:
        name = node.name.value
        target = context.get(name)
        if not isinstance(target, ListVal):
            return failure_at(RTError("Expected a list to assign its element value",
                                      node.name.pos_start, node.name.pos_end), node)
        res = self.evaluate(node.index, context)
        if res.should_return:
            return res
        index = value_or_null(res.value)
        res = self.evaluate(node.value, context)
        if res.should_return:
            return res
        value = value_or_null(res.value)
        if not isinstance(index, Number):
            return failure_at(RTError("Expected a number for the index",
                                      node.index.pos_start, node.index.pos_end), node)
        try:
            target.assign(index, value)
        except LuminaryError as err:
            return failure_at(err, node)
        self.debug(f"assign {name}[{index!r}] = {value!r}", level=2)
        return RuntimeResult.success(value)

    # Control flow

    def visit_If(self, node: If, context: Context) -> RuntimeResult:
        for case in node.cases:
            res = self.evaluate(case.condition, context)
            if res.should_return:
                return res
            if value_or_null(res.value).is_true():
                self.debug(f"if: taking case at {case.condition.pos_start!r}", level=3)
                return self.evaluate(case.body, context)
        if node.else_case is not None:
            self.debug("if: taking else", level=3)
            return self.evaluate(node.else_case, context)
        return RuntimeResult.success()

    def visit_While(self, node: While, context: Context) -> RuntimeResult:
        while True:
            res = self.evaluate(node.condition, context)
            if res.should_return:
                return res
            if not value_or_null(res.value).is_true():
                break
            res = self.evaluate(node.body, context)
            if res.should_return and not res.is_loop_signal:
                return res
            if res.should_break:
                break
        return RuntimeResult.success()

    def loop_bound(self, bound: Node, context: Context,
                   what: str) -> Tuple[Optional[float], RuntimeResult]:
        res = self.evaluate(bound, context)
        if res.should_return:
            return None, res
        value = value_or_null(res.value)
        if not isinstance(value, Number):
            return None, failure_at(RTError(f"Expected a number after '{what}'",
                                            bound.pos_start, bound.pos_end), bound)
        return value.value, res

    def visit_For(self, node: For, context: Context) -> RuntimeResult:
        cursor, res = self.loop_bound(node.start, context, '=')
        if res.should_return:
            return res
        end, res = self.loop_bound(node.end, context, ':')
        if res.should_return:
            return res
        step = 1.0
        if node.step is not None:
            step, res = self.loop_bound(node.step, context, 'by')
            if res.should_return:
                return res
            if step == 0:
                return failure_at(RTError("Step can't be zero", node.step.pos_start,
                                          node.step.pos_end), node)

        name = node.var_name.value
        while True:
            if (cursor <= end) if step > 0 else (cursor >= end):
                context.set(name, Number(cursor))
                self.debug(f"for: {name} = {cursor!r}", level=3)
                cursor += step
                res = self.evaluate(node.body, context)
                if res.should_return and not res.is_loop_signal:
                    return res
                if res.should_break:
                    # the loop variable stays bound after a break
                    break
            else:
                context.delete(name)
                break
        return RuntimeResult.success()

    def visit_Each(self, node: Each, context: Context) -> RuntimeResult:
        res = self.evaluate(node.iterable, context)
        if res.should_return:
            return res
        iterable = value_or_null(res.value)
        if not isinstance(iterable, ListVal):
            return failure_at(RTError("Expected a list in 'each'", node.iterable.pos_start,
                                      node.iterable.pos_end), node)
        name = node.item_name.value
        for item in iterable.elements:
            context.set(name, item)
            self.debug(f"each: {name} = {item!r}", level=3)
            res = self.evaluate(node.body, context)
            if res.should_return and not res.is_loop_signal:
                return res
            if res.should_break:
                break
        context.delete(name)
        return RuntimeResult.success()

    def visit_Break(self, node: Break, context: Context) -> RuntimeResult:
        return RuntimeResult.breaking()

    def visit_Continue(self, node: Continue, context: Context) -> RuntimeResult:
        return RuntimeResult.continuing()

    # Functions

    def visit_FunctionDef(self, node: FunctionDef, context: Context) -> RuntimeResult:
        name = node.name.value if node.name is not None else None
        params = [param.value for param in node.params]
        function = Function(name, params, node.body, node.is_expression_body, context)
        function.set_pos(node.pos_start, node.pos_end)
        if name is not None:
            context.set(name, function)
        self.debug(f"define function {function.display_name}({', '.join(params)})", level=2)
        return RuntimeResult.success(function)

    def visit_FunctionCall(self, node: FunctionCall, context: Context) -> RuntimeResult:
        res = self.evaluate(node.callee, context)
        if res.should_return:
            return res
        callee = value_or_null(res.value)
        args: List[Value] = []
        for arg_node in node.args:
            res = self.evaluate(arg_node, context)
            if res.should_return:
                return res
            args.append(value_or_null(res.value))

        self.debug(f"call {callee!r} with {len(args)} argument(s)", level=2)
        res = callee.call(args, self)
        if res.error is not None:
            return failure_at(res.error, node)
        value = value_or_null(res.value)
        return RuntimeResult.success(value.copy().set_pos(node.pos_start, node.pos_end))

    def visit_Return(self, node: Return, context: Context) -> RuntimeResult:
        if node.value is None:
            return RuntimeResult.returning(Null().set_pos(node.pos_start, node.pos_end))
        res = self.evaluate(node.value, context)
        if res.should_return:
            return res
        return RuntimeResult.returning(value_or_null(res.value))


def run_program(source: str, file_name: str = '<stdin>',
                interpreter: Optional[Interpreter] = None) -> Tuple[Optional[Value], Optional[LuminaryError]]:
    """Tokenize, parse and evaluate `source`.

    Returns `(value, None)` on success, where value may be None when the
    program produced no value, or `(None, error)` for the first error.
    """
    tokens, error = tokenize(source, file_name)
    if error is not None:
        return None, error
    program, error = parse(tokens)
    if error is not None:
        return None, error
    interpreter = interpreter or Interpreter()
    res = interpreter.run(program)
    if res.error is not None:
        return None, res.error
    return res.value, None


def run_file(path: str, interpreter: Optional[Interpreter] = None) -> Tuple[Optional[Value], Optional[LuminaryError]]:
    """Run a Luminary source file."""
    source = Path(path).read_text(encoding='utf-8')
    return run_program(source, str(path), interpreter)
