"""Recursive-descent parser for the Luminary language.

Each grammar rule is a method that consumes tokens from a cursor and
returns an AST node. Binary operators are parsed by precedence climbing,
from lowest to highest:

    ternary ?:  ->  and / or  ->  == !=  ->  < > <= >=  ->  + -
    ->  * / %  ->  ^  ->  unary - + not  ->  call / index  ->  literal

All binary levels (including `^`) are left associative; the ternary
operator chains to the right. Parsing stops at the first error: there is
no recovery and only one error is ever reported.

`if`, `for`, `each`, `while` and `func` are expressions, so they can be
used anywhere a value is expected. Their bodies are either a `{ ... }`
block or a `:` followed by a single statement (a single expression for
functions).
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from .ast import (
    Block, BinaryOp, Break, Continue, Each, ElementAccess, ElementAssign, For,
    FunctionCall, FunctionDef, If, IfCase, ListLit, Node, NullLit, NumberLit,
    Return, StringLit, Ternary, UnaryOp, VarAccess, VarAssign, While,
)
from .errors import InvalidSyntaxError, LuminaryError
from .tokens import OPENING, Token, TokenKind

OP = TokenKind.OPERATOR
PAREN = TokenKind.PAREN
KEYWORD = TokenKind.KEYWORD


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0
        # nesting counters used to reject stray break/continue/return
        self.loop_depth = 0
        self.function_depth = 0

    # Cursor helpers

    def peek(self, offset: int = 0) -> Token:
        index = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def advance(self) -> Token:
        token = self.peek()
        if token.kind != TokenKind.EOF:
            self.pos += 1
        return token

    def match(self, kind: TokenKind, value=None) -> bool:
        return self.peek().matches(kind, value)

    def consume(self, kind: TokenKind, value=None, expected: Optional[str] = None) -> Token:
        token = self.peek()
        if not token.matches(kind, value):
            what = expected or (f"'{value}'" if value is not None else kind.value.lower())
            raise self.error(f"Expected {what}")
        return self.advance()

    def error(self, details: str, token: Optional[Token] = None) -> InvalidSyntaxError:
        token = token or self.peek()
        return InvalidSyntaxError(details, token.pos_start, token.pos_end)

    def skip_newlines(self):
        while self.match(TokenKind.NEWLINE):
            self.advance()

    def next_significant(self) -> Token:
        """Return the first token after any run of newlines, without consuming."""
        offset = 0
        while self.peek(offset).kind == TokenKind.NEWLINE:
            offset += 1
        return self.peek(offset)

    # Statements

    def parse_program(self) -> Block:
        pos_start = self.peek().pos_start
        statements = self.parse_statements(TokenKind.EOF)
        if not self.match(TokenKind.EOF):
            raise self.error("Unexpected token")
        return Block(statements, pos_start, self.peek().pos_end)

    def parse_statements(self, end_kind: TokenKind, end_value=None) -> List[Node]:
        statements: List[Node] = []
        self.skip_newlines()
        while not self.match(end_kind, end_value) and not self.match(TokenKind.EOF):
            statements.append(self.parse_statement())
            if not (self.match(TokenKind.NEWLINE) or self.match(end_kind, end_value)):
                raise self.error("Expected a newline or ';' between statements")
            self.skip_newlines()
        return statements

    def parse_statement(self) -> Node:
        token = self.peek()
        if token.matches(KEYWORD, 'return'):
            if self.function_depth == 0:
                raise self.error("'return' outside of a function")
            self.advance()
            value = None
            pos_end = token.pos_end
            if not (self.match(TokenKind.NEWLINE) or self.match(TokenKind.EOF)
                    or self.match(PAREN, '}') or self.at_case_boundary()):
                value = self.parse_expression()
                pos_end = value.pos_end
            return Return(value, token.pos_start, pos_end)
        if token.matches(KEYWORD, 'break'):
            if self.loop_depth == 0:
                raise self.error("'break' outside of a loop")
            return Break(self.advance())
        if token.matches(KEYWORD, 'continue'):
            if self.loop_depth == 0:
                raise self.error("'continue' outside of a loop")
            return Continue(self.advance())
        return self.parse_expression()

    def at_case_boundary(self) -> bool:
        return self.match(KEYWORD, 'elif') or self.match(KEYWORD, 'else')

    def parse_block(self) -> Block:
        open_token = self.consume(PAREN, '{')
        statements = self.parse_statements(PAREN, '}')
        close_token = self.consume(PAREN, '}')
        return Block(statements, open_token.pos_start, close_token.pos_end)

    def parse_body(self) -> Node:
        """body: block | ':' statement"""
        if self.match(PAREN, '{'):
            return self.parse_block()
        if self.match(OP, ':'):
            self.advance()
            return self.parse_statement()
        raise self.error("Expected '{' or ':'")

    def parse_loop_body(self) -> Node:
        self.loop_depth += 1
        try:
            return self.parse_body()
        finally:
            self.loop_depth -= 1

    # Expressions

    def parse_expression(self) -> Node:
        token = self.peek()
        if token.kind == TokenKind.IDENTIFIER:
            nxt = self.peek(1)
            if nxt.matches(OP, '='):
                self.advance()
                self.advance()
                return VarAssign(token, self.parse_expression())
            if nxt.matches(PAREN, '[') and self.is_element_assignment():
                self.advance()
                self.advance()
                self.skip_newlines()
                index = self.parse_expression()
                self.skip_newlines()
                self.consume(PAREN, ']')
                self.consume(OP, '=')
                return ElementAssign(token, index, self.parse_expression())
        return self.parse_ternary()

    def is_element_assignment(self) -> bool:
        """Look ahead from `name [` to the matching `]` and check for `=`."""
        depth = 0
        offset = 1
        while True:
            token = self.peek(offset)
            if token.kind == TokenKind.EOF:
                return False
            if token.kind == PAREN and token.value in OPENING:
                depth += 1
            elif token.kind == PAREN and token.value in (')', ']', '}'):
                depth -= 1
                if depth == 0:
                    return self.peek(offset + 1).matches(OP, '=')
            offset += 1

    def parse_ternary(self) -> Node:
        condition = self.parse_logical()
        if self.match(OP, '?'):
            self.advance()
            left = self.parse_expression()
            self.consume(OP, ':')
            right = self.parse_expression()
            return Ternary(condition, left, right)
        return condition

    def parse_binary(self, operand: Callable[[], Node], ops: Tuple[str, ...]) -> Node:
        node = operand()
        while self.peek().kind == OP and self.peek().value in ops:
            op_token = self.advance()
            right = operand()
            node = BinaryOp(node, op_token, right)
        return node

    def parse_logical(self) -> Node:
        return self.parse_binary(self.parse_equality, ('and', 'or'))

    def parse_equality(self) -> Node:
        return self.parse_binary(self.parse_relational, ('==', '!='))

    def parse_relational(self) -> Node:
        return self.parse_binary(self.parse_additive, ('<', '>', '<=', '>='))

    def parse_additive(self) -> Node:
        return self.parse_binary(self.parse_multiplicative, ('+', '-'))

    def parse_multiplicative(self) -> Node:
        return self.parse_binary(self.parse_power, ('*', '/', '%'))

    def parse_power(self) -> Node:
        return self.parse_binary(self.parse_unary, ('^',))

    def parse_unary(self) -> Node:
        token = self.peek()
        if token.kind == OP and token.value in ('-', '+', 'not'):
            self.advance()
            return UnaryOp(token, self.parse_unary())
        return self.parse_postfix()

    def parse_postfix(self) -> Node:
        node = self.parse_primary()
        while True:
            if self.match(PAREN, '('):
                self.advance()
                args = self.parse_arguments(')')
                close_token = self.consume(PAREN, ')')
                node = FunctionCall(node, args, close_token.pos_end)
                continue
            if self.match(PAREN, '['):
                self.advance()
                self.skip_newlines()
                index = self.parse_expression()
                self.skip_newlines()
                to_index = None
                if self.match(OP, ':'):
                    self.advance()
                    self.skip_newlines()
                    to_index = self.parse_expression()
                    self.skip_newlines()
                close_token = self.consume(PAREN, ']')
                node = ElementAccess(node, index, to_index, close_token.pos_end)
                continue
            break
        return node

    def parse_arguments(self, closing: str) -> List[Node]:
        args: List[Node] = []
        self.skip_newlines()
        if self.match(PAREN, closing):
            return args
        args.append(self.parse_expression())
        self.skip_newlines()
        while self.match(PAREN, ','):
            self.advance()
            self.skip_newlines()
            args.append(self.parse_expression())
            self.skip_newlines()
        return args

    def parse_primary(self) -> Node:
        token = self.peek()
        if token.kind == TokenKind.NUMBER:
            return NumberLit(self.advance())
        if token.kind == TokenKind.STRING:
            return StringLit(self.advance())
        if token.kind == TokenKind.IDENTIFIER:
            return VarAccess(self.advance())
        if token.kind == KEYWORD:
            if token.value == 'null':
                return NullLit(self.advance())
            if token.value == 'if':
                return self.parse_if()
            if token.value == 'for':
                return self.parse_for()
            if token.value == 'each':
                return self.parse_each()
            if token.value == 'while':
                return self.parse_while()
            if token.value == 'func':
                return self.parse_func_def()
        if token.matches(PAREN, '('):
            self.advance()
            self.skip_newlines()
            expr = self.parse_expression()
            self.skip_newlines()
            self.consume(PAREN, ')')
            return expr
        if token.matches(PAREN, '['):
            self.advance()
            elements = self.parse_arguments(']')
            close_token = self.consume(PAREN, ']')
            return ListLit(elements, token.pos_start, close_token.pos_end)
        if token.kind == TokenKind.EOF:
            raise self.error("Unexpected end of input")
        raise self.error(f"Unexpected token '{token.value}'")

    def parse_if(self) -> If:
        if_token = self.consume(KEYWORD, 'if')
        cases = [IfCase(self.parse_expression(), self.parse_body())]
        else_case = None
        while True:
            nxt = self.next_significant()
            if nxt.matches(KEYWORD, 'elif'):
                self.skip_newlines()
                self.advance()
                cases.append(IfCase(self.parse_expression(), self.parse_body()))
                continue
            if nxt.matches(KEYWORD, 'else'):
                self.skip_newlines()
                self.advance()
                else_case = self.parse_body()
            break
        last = else_case if else_case is not None else cases[-1].body
        return If(cases, else_case, if_token.pos_start, last.pos_end)

    def parse_for(self) -> For:
        for_token = self.consume(KEYWORD, 'for')
        var_name = self.consume(TokenKind.IDENTIFIER, expected='an identifier')
        self.consume(OP, '=')
        start = self.parse_expression()
        if self.match(OP, ':') or self.match(KEYWORD, 'to'):
            self.advance()
        else:
            raise self.error("Expected ':' or 'to'")
        end = self.parse_expression()
        step = None
        if self.match(KEYWORD, 'by'):
            self.advance()
            step = self.parse_expression()
        body = self.parse_loop_body()
        return For(var_name, start, end, step, body, for_token.pos_start, body.pos_end)

    def parse_each(self) -> Each:
        each_token = self.consume(KEYWORD, 'each')
        item_name = self.consume(TokenKind.IDENTIFIER, expected='an identifier')
        self.consume(KEYWORD, 'in')
        iterable = self.parse_expression()
        body = self.parse_loop_body()
        return Each(item_name, iterable, body, each_token.pos_start, body.pos_end)

    def parse_while(self) -> While:
        while_token = self.consume(KEYWORD, 'while')
        condition = self.parse_expression()
        body = self.parse_loop_body()
        return While(condition, body, while_token.pos_start, body.pos_end)

    def parse_func_def(self) -> FunctionDef:
        func_token = self.consume(KEYWORD, 'func')
        name = None
        if self.match(TokenKind.IDENTIFIER):
            name = self.advance()
        self.consume(PAREN, '(')
        params: List[Token] = []
        self.skip_newlines()
        if not self.match(PAREN, ')'):
            params.append(self.consume(TokenKind.IDENTIFIER, expected='a parameter name'))
            self.skip_newlines()
            while self.match(PAREN, ','):
                self.advance()
                self.skip_newlines()
                params.append(self.consume(TokenKind.IDENTIFIER, expected='a parameter name'))
                self.skip_newlines()
        self.consume(PAREN, ')')

        # a function body starts a fresh loop nesting
        saved_loop_depth = self.loop_depth
        self.loop_depth = 0
        self.function_depth += 1
        try:
            if self.match(OP, ':'):
                self.advance()
                body = self.parse_expression()
                is_expression_body = True
            elif self.match(PAREN, '{'):
                body = self.parse_block()
                is_expression_body = False
            else:
                raise self.error("Expected '{' or ':'")
        finally:
            self.loop_depth = saved_loop_depth
            self.function_depth -= 1
        return FunctionDef(name, params, body, is_expression_body, func_token.pos_start, body.pos_end)


def parse(tokens: List[Token]) -> Tuple[Optional[Block], Optional[LuminaryError]]:
    """Parse a token sequence into a program `Block`.

    Returns `(root, None)` on success or `(None, error)` for the first
    syntax error encountered.
    """
    parser = Parser(tokens)
    try:
        return parser.parse_program(), None
    except InvalidSyntaxError as err:
        return None, err
    except RecursionError:
        return None, parser.error("Maximum nesting depth exceeded")
