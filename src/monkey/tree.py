"""AST node family produced by the parser and walked by the evaluator.

Every node keeps the token it was built from (for `token_literal()`) and
renders a canonical, fully parenthesized form through `string()`; the parser
tests lean on that rendering to check precedence.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union
from typing_extensions import TypeAlias

from .token_types import Tok


class Node:
    """Common capability of statements and expressions."""
    __slots__ = ()

    token: Tok

    def token_literal(self) -> str:
        return self.token.literal

    def string(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.string()


def _render(node: Optional[Node]) -> str:
    return node.string() if node is not None else ""


# ---------- Expressions ----------

@dataclass(frozen=True)
class Identifier(Node):
    token: Tok
    value: str

    def string(self) -> str:
        return self.value

@dataclass(frozen=True)
class IntegerLiteral(Node):
    token: Tok
    value: int

    def string(self) -> str:
        return self.token.literal

@dataclass(frozen=True)
class FloatLiteral(Node):
    token: Tok
    value: float

    def string(self) -> str:
        return self.token.literal

@dataclass(frozen=True)
class StringLiteral(Node):
    token: Tok
    value: str

    def string(self) -> str:
        return self.token.literal

@dataclass(frozen=True)
class Boolean(Node):
    token: Tok
    value: bool

    def string(self) -> str:
        return self.token.literal

@dataclass(frozen=True)
class ArrayLiteral(Node):
    token: Tok  # the '[' token
    elements: Tuple[Expression, ...]

    def string(self) -> str:
        return "[" + ", ".join(_render(el) for el in self.elements) + "]"

@dataclass(frozen=True)
class PrefixExpression(Node):
    token: Tok
    operator: str
    right: Optional[Expression]

    def string(self) -> str:
        return f"({self.operator}{_render(self.right)})"

@dataclass(frozen=True)
class InfixExpression(Node):
    token: Tok
    left: Expression
    operator: str
    right: Optional[Expression]

    def string(self) -> str:
        return f"({_render(self.left)} {self.operator} {_render(self.right)})"

@dataclass(frozen=True)
class ElseIfExpression(Node):
    token: Tok  # the ELSE_IF token
    condition: Expression
    consequence: BlockStatement

    def string(self) -> str:
        return f"else if{_render(self.condition)} {self.consequence.string()}"

@dataclass(frozen=True)
class IfExpression(Node):
    token: Tok
    condition: Expression
    consequence: BlockStatement
    else_ifs: Tuple[ElseIfExpression, ...] = ()
    alternative: Optional[BlockStatement] = None

    def string(self) -> str:
        out = f"if{_render(self.condition)} {self.consequence.string()}"

        for clause in self.else_ifs:
            out += clause.string()

        if self.alternative is not None:
            out += "else " + self.alternative.string()

        return out

@dataclass(frozen=True)
class FunctionLiteral(Node):
    token: Tok
    parameters: Tuple[Identifier, ...]
    body: BlockStatement

    def string(self) -> str:
        params = ", ".join(p.string() for p in self.parameters)
        return f"{self.token_literal()}({params}){self.body.string()}"

@dataclass(frozen=True)
class CallExpression(Node):
    token: Tok  # the '(' token
    function: Expression  # Identifier or FunctionLiteral
    arguments: Tuple[Expression, ...]

    def string(self) -> str:
        args = ", ".join(_render(a) for a in self.arguments)
        return f"{_render(self.function)}({args})"

@dataclass(frozen=True)
class IndexExpression(Node):
    token: Tok  # the '[' token
    left: Expression
    index: Optional[Expression]

    def string(self) -> str:
        return f"({_render(self.left)}[{_render(self.index)}])"


# ---------- Statements ----------

@dataclass(frozen=True)
class LetStatement(Node):
    token: Tok
    name: Identifier
    value: Optional[Expression]

    def string(self) -> str:
        return f"{self.token_literal()} {self.name.string()} = {_render(self.value)};"

@dataclass(frozen=True)
class ReturnStatement(Node):
    token: Tok
    return_value: Optional[Expression]

    def string(self) -> str:
        return f"{self.token_literal()} {_render(self.return_value)};"

@dataclass(frozen=True)
class ExpressionStatement(Node):
    token: Tok  # first token of the expression
    expression: Optional[Expression]

    def string(self) -> str:
        return _render(self.expression)

@dataclass(frozen=True)
class BlockStatement(Node):
    token: Tok  # the '{' token
    statements: Tuple[Statement, ...]

    def string(self) -> str:
        return "".join(s.string() for s in self.statements)

@dataclass(frozen=True)
class Program(Node):
    statements: Tuple[Statement, ...]

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def string(self) -> str:
        return "".join(s.string() for s in self.statements)


Expression: TypeAlias = Union[
    Identifier,
    IntegerLiteral,
    FloatLiteral,
    StringLiteral,
    Boolean,
    ArrayLiteral,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    CallExpression,
    IndexExpression,
]

Statement: TypeAlias = Union[
    LetStatement,
    ReturnStatement,
    ExpressionStatement,
    BlockStatement,
]
