"""
Pratt Parser for Monkey

Consumes tokens from a Lexer and builds the tree defined in `tree.py`.

Structure:
- Token navigation: current token plus one token of lookahead
- Statements: let, return, expression statements
- Expressions: Pratt parsing; prefix handlers start an expression, infix
  handlers extend the left expression while the lookahead binds tighter

The parser never raises on malformed input. Each failed expectation appends a
message to `errors` and yields None for that subtree; parsing resumes at the
next statement so one pass can surface several problems.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from .lexer import Lexer
from .token_types import TT, Precedence, Tok, describe, precedence_of
from .tree import (
    ArrayLiteral,
    BlockStatement,
    Boolean,
    CallExpression,
    ElseIfExpression,
    Expression,
    ExpressionStatement,
    FloatLiteral,
    FunctionLiteral,
    Identifier,
    IfExpression,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
    StringLiteral,
)

log = logging.getLogger(__name__)

PrefixParseFn = Callable[[], Optional[Expression]]
InfixParseFn = Callable[[Expression], Optional[Expression]]

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# ============================================================================
# Parser
# ============================================================================

class Parser:
    """
    Pratt parser for Monkey.

    Expression precedence (lowest to highest):
    1. equality (==, !=)
    2. relational (<, >)
    3. additive (+, -)
    4. multiplicative (*, /, %)
    5. prefix (-, !)
    6. call / index (f(x), a[i])
    """

    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.errors: List[str] = []

        self.prefix_parse_fns: Dict[TT, PrefixParseFn] = {
            TT.IDENT: self.parse_identifier,
            TT.INT: self.parse_integer_literal,
            TT.FLOAT: self.parse_float_literal,
            TT.STRING: self.parse_string_literal,
            TT.TRUE: self.parse_boolean,
            TT.FALSE: self.parse_boolean,
            TT.BANG: self.parse_prefix_expression,
            TT.MINUS: self.parse_prefix_expression,
            TT.LPAREN: self.parse_grouped_expression,
            TT.LBRACKET: self.parse_array_literal,
            TT.IF: self.parse_if_expression,
            TT.FUNCTION: self.parse_function_literal,
        }

        self.infix_parse_fns: Dict[TT, InfixParseFn] = {
            TT.PLUS: self.parse_infix_expression,
            TT.MINUS: self.parse_infix_expression,
            TT.ASTERISK: self.parse_infix_expression,
            TT.SLASH: self.parse_infix_expression,
            TT.MOD: self.parse_infix_expression,
            TT.EQ: self.parse_infix_expression,
            TT.NOT_EQ: self.parse_infix_expression,
            TT.LT: self.parse_infix_expression,
            TT.GT: self.parse_infix_expression,
            TT.LPAREN: self.parse_call_expression,
            TT.LBRACKET: self.parse_index_expression,
        }

        # Read two tokens so cur_token and peek_token are both set
        self.cur_token: Tok = self.lexer.next_token()
        self.peek_token: Tok = self.lexer.next_token()

    # ========================================================================
    # Token Navigation
    # ========================================================================

    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, token_type: TT) -> bool:
        return self.cur_token.type == token_type

    def peek_token_is(self, token_type: TT) -> bool:
        return self.peek_token.type == token_type

    def expect_peek(self, token_type: TT) -> bool:
        """Advance when the lookahead matches, otherwise record an error"""
        if self.peek_token_is(token_type):
            self.next_token()
            return True

        self.peek_error(token_type)
        return False

    def peek_precedence(self) -> Precedence:
        return precedence_of(self.peek_token.type)

    def cur_precedence(self) -> Precedence:
        return precedence_of(self.cur_token.type)

    # ========================================================================
    # Errors
    # ========================================================================

    def peek_error(self, token_type: TT) -> None:
        self.errors.append(
            f"expected next token to be {describe(token_type)}, got {describe(self.peek_token.type)} instead"
        )

    def no_prefix_parse_fn_error(self, token_type: TT) -> None:
        self.errors.append(f"no prefix parse function for {describe(token_type)} found")

    # ========================================================================
    # Top-Level Parsing
    # ========================================================================

    def parse_program(self) -> Program:
        """Parse statements until EOF"""
        statements: List[Statement] = []

        while not self.cur_token_is(TT.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()

        if self.errors:
            log.debug("parse finished with %d error(s)", len(self.errors))

        return Program(tuple(statements))

    # ========================================================================
    # Statements
    # ========================================================================

    def parse_statement(self) -> Optional[Statement]:
        match self.cur_token.type:
            case TT.LET:
                return self.parse_let_statement()
            case TT.RETURN:
                return self.parse_return_statement()
            case _:
                return self.parse_expression_statement()

    def parse_let_statement(self) -> Optional[LetStatement]:
        """let <ident> = <expr>[;]"""
        let_tok = self.cur_token

        if not self.expect_peek(TT.IDENT):
            return None

        name = Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(TT.ASSIGN):
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TT.SEMICOLON):
            self.next_token()

        return LetStatement(let_tok, name, value)

    def parse_return_statement(self) -> ReturnStatement:
        """return <expr>[;]"""
        return_tok = self.cur_token

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TT.SEMICOLON):
            self.next_token()

        return ReturnStatement(return_tok, value)

    def parse_expression_statement(self) -> Optional[ExpressionStatement]:
        first = self.cur_token
        expr = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TT.SEMICOLON):
            self.next_token()

        if expr is None:
            return None

        return ExpressionStatement(first, expr)

    def parse_block_statement(self) -> BlockStatement:
        """Statements up to the closing brace (or EOF); cur_token is '{' on entry"""
        brace = self.cur_token
        statements: List[Statement] = []

        self.next_token()

        while not self.cur_token_is(TT.RBRACE) and not self.cur_token_is(TT.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()

        return BlockStatement(brace, tuple(statements))

    # ========================================================================
    # Expressions (Pratt)
    # ========================================================================

    def parse_expression(self, precedence: Precedence) -> Optional[Expression]:
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.type)
            return None

        left = prefix()

        while left is not None and not self.peek_token_is(TT.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left

            self.next_token()
            left = infix(left)

        return left

    # ---------- prefix handlers ----------

    def parse_identifier(self) -> Expression:
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> Optional[Expression]:
        tok = self.cur_token

        try:
            value = int(tok.literal)
        except ValueError:
            value = None

        if value is None or not INT64_MIN <= value <= INT64_MAX:
            self.errors.append(f'could not parse "{tok.literal}" as integer')
            return None

        return IntegerLiteral(tok, value)

    def parse_float_literal(self) -> Optional[Expression]:
        tok = self.cur_token

        try:
            value = float(tok.literal)
        except ValueError:
            self.errors.append(f'could not parse "{tok.literal}" as float')
            return None

        return FloatLiteral(tok, value)

    def parse_string_literal(self) -> Expression:
        return StringLiteral(self.cur_token, self.cur_token.literal)

    def parse_boolean(self) -> Expression:
        return Boolean(self.cur_token, self.cur_token_is(TT.TRUE))

    def parse_prefix_expression(self) -> Expression:
        op_tok = self.cur_token

        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)

        return PrefixExpression(op_tok, op_tok.literal, right)

    def parse_grouped_expression(self) -> Optional[Expression]:
        self.next_token()
        expr = self.parse_expression(Precedence.LOWEST)

        if not self.expect_peek(TT.RPAREN):
            return None

        return expr

    def parse_array_literal(self) -> Optional[Expression]:
        bracket = self.cur_token
        elements = self.parse_expression_list(TT.RBRACKET)

        if elements is None:
            return None

        return ArrayLiteral(bracket, tuple(elements))

    def parse_if_expression(self) -> Optional[Expression]:
        """
        if (<cond>) { ... } [else if (<cond>) { ... }]* [else { ... }]
        """
        if_tok = self.cur_token

        condition = self.parse_condition()
        if condition is None:
            return None

        if not self.expect_peek(TT.LBRACE):
            return None

        consequence = self.parse_block_statement()
        else_ifs: List[ElseIfExpression] = []

        while self.peek_token_is(TT.ELSE_IF):
            self.next_token()
            elif_tok = self.cur_token

            elif_condition = self.parse_condition()
            if elif_condition is None:
                return None

            if not self.expect_peek(TT.LBRACE):
                return None

            else_ifs.append(ElseIfExpression(elif_tok, elif_condition, self.parse_block_statement()))

        alternative: Optional[BlockStatement] = None

        if self.peek_token_is(TT.ELSE):
            self.next_token()

            if not self.expect_peek(TT.LBRACE):
                return None

            alternative = self.parse_block_statement()

        return IfExpression(if_tok, condition, consequence, tuple(else_ifs), alternative)

    def parse_condition(self) -> Optional[Expression]:
        """Parenthesized condition following `if` / `else if`"""
        if not self.expect_peek(TT.LPAREN):
            return None

        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)

        if not self.expect_peek(TT.RPAREN):
            return None

        return condition

    def parse_function_literal(self) -> Optional[Expression]:
        fn_tok = self.cur_token

        if not self.expect_peek(TT.LPAREN):
            return None

        params = self.parse_function_parameters()
        if params is None:
            return None

        if not self.expect_peek(TT.LBRACE):
            return None

        return FunctionLiteral(fn_tok, tuple(params), self.parse_block_statement())

    def parse_function_parameters(self) -> Optional[List[Identifier]]:
        params: List[Identifier] = []

        if self.peek_token_is(TT.RPAREN):
            self.next_token()
            return params

        if not self.expect_peek(TT.IDENT):
            return None
        params.append(Identifier(self.cur_token, self.cur_token.literal))

        while self.peek_token_is(TT.COMMA):
            self.next_token()
            if not self.expect_peek(TT.IDENT):
                return None
            params.append(Identifier(self.cur_token, self.cur_token.literal))

        if not self.expect_peek(TT.RPAREN):
            return None

        return params

    # ---------- infix handlers ----------

    def parse_infix_expression(self, left: Expression) -> Expression:
        op_tok = self.cur_token
        precedence = self.cur_precedence()

        self.next_token()
        right = self.parse_expression(precedence)

        return InfixExpression(op_tok, left, op_tok.literal, right)

    def parse_call_expression(self, function: Expression) -> Optional[Expression]:
        paren = self.cur_token
        args = self.parse_expression_list(TT.RPAREN)

        if args is None:
            return None

        return CallExpression(paren, function, tuple(args))

    def parse_index_expression(self, left: Expression) -> Optional[Expression]:
        bracket = self.cur_token

        self.next_token()
        index = self.parse_expression(Precedence.LOWEST)

        if not self.expect_peek(TT.RBRACKET):
            return None

        return IndexExpression(bracket, left, index)

    # ---------- shared ----------

    def parse_expression_list(self, end: TT) -> Optional[List[Expression]]:
        """Comma-separated expressions up to *end*; cur_token is the opener"""
        items: List[Expression] = []

        if self.peek_token_is(end):
            self.next_token()
            return items

        self.next_token()
        item = self.parse_expression(Precedence.LOWEST)
        if item is not None:
            items.append(item)

        while self.peek_token_is(TT.COMMA):
            self.next_token()
            self.next_token()
            item = self.parse_expression(Precedence.LOWEST)
            if item is not None:
                items.append(item)

        if not self.expect_peek(end):
            return None

        return items
