"""
Token Types for the Monkey lexer and parser

Shared between lexer and parser to avoid circular dependencies: token kinds,
the keyword table and the operator precedence table used by the Pratt parser.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from typing import Dict


class TT(Enum):
    """Token Types"""

    ILLEGAL = auto()
    EOF = auto()

    # Identifiers + literals
    IDENT = auto()
    INT = auto()
    FLOAT = auto()
    STRING = auto()

    # Operators
    ASSIGN = auto()
    PLUS = auto()
    MINUS = auto()
    BANG = auto()
    ASTERISK = auto()
    SLASH = auto()
    MOD = auto()

    # Comparison
    LT = auto()
    GT = auto()
    EQ = auto()
    NOT_EQ = auto()

    # Delimiters
    COMMA = auto()
    SEMICOLON = auto()
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()

    # Keywords
    FUNCTION = auto()
    LET = auto()
    TRUE = auto()
    FALSE = auto()
    IF = auto()
    ELSE = auto()
    ELSE_IF = auto()  # `else if` folded into one token
    RETURN = auto()


KEYWORDS: Dict[str, TT] = {
    'fn': TT.FUNCTION,
    'let': TT.LET,
    'true': TT.TRUE,
    'false': TT.FALSE,
    'if': TT.IF,
    'else': TT.ELSE,
    'return': TT.RETURN,
}


def lookup_ident(ident: str) -> TT:
    """Keyword kind for *ident*, or IDENT when it is a plain name."""
    return KEYWORDS.get(ident, TT.IDENT)


class Precedence(IntEnum):
    """Binding power, lowest to highest"""

    LOWEST = 1
    EQUALS = 2       # ==
    LESSGREATER = 3  # > or <
    SUM = 4          # +
    PRODUCT = 5      # *
    PREFIX = 6       # -X or !X
    CALL = 7         # myFunc(X), array[X]


PRECEDENCES: Dict[TT, Precedence] = {
    TT.EQ: Precedence.EQUALS,
    TT.NOT_EQ: Precedence.EQUALS,
    TT.LT: Precedence.LESSGREATER,
    TT.GT: Precedence.LESSGREATER,
    TT.PLUS: Precedence.SUM,
    TT.MINUS: Precedence.SUM,
    TT.SLASH: Precedence.PRODUCT,
    TT.ASTERISK: Precedence.PRODUCT,
    TT.MOD: Precedence.PRODUCT,
    TT.LPAREN: Precedence.CALL,
    TT.LBRACKET: Precedence.CALL,
}


def precedence_of(token_type: TT) -> Precedence:
    return PRECEDENCES.get(token_type, Precedence.LOWEST)


# Operator and delimiter kinds read as their source text in parser messages
KIND_TEXT: Dict[TT, str] = {
    TT.ASSIGN: '=',
    TT.PLUS: '+',
    TT.MINUS: '-',
    TT.BANG: '!',
    TT.ASTERISK: '*',
    TT.SLASH: '/',
    TT.MOD: '%',
    TT.LT: '<',
    TT.GT: '>',
    TT.EQ: '==',
    TT.NOT_EQ: '!=',
    TT.COMMA: ',',
    TT.SEMICOLON: ';',
    TT.LPAREN: '(',
    TT.RPAREN: ')',
    TT.LBRACE: '{',
    TT.RBRACE: '}',
    TT.LBRACKET: '[',
    TT.RBRACKET: ']',
}


def describe(token_type: TT) -> str:
    """`=` for ASSIGN, `(` for LPAREN; word kinds (IDENT, INT, EOF, LET, ...) by name."""
    return KIND_TEXT.get(token_type, token_type.name)


@dataclass(frozen=True)
class Tok:
    """Token with position info (position is not part of equality)"""

    type: TT
    literal: str
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    def __repr__(self):
        return f"Tok({self.type.name}, {self.literal!r}, {self.line}:{self.column})"
