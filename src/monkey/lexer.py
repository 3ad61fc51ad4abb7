"""
Lexer for Monkey

Turns source text into a stream of tokens, one per `next_token()` call,
ending with EOF. The lexer never raises: bytes it does not recognize come
back as ILLEGAL tokens and the parser reports them.

Features:
- Position tracking (line, column)
- Greedy number scanning (`1.2.3` -> FLOAT `1.2`, ILLEGAL `.`, INT `3`)
- `else if` folded into a single ELSE_IF token
- Double-quoted strings with a small set of escapes
"""

from typing import List

from .token_types import TT, Tok, lookup_ident

# ============================================================================
# Lexer Implementation
# ============================================================================

WHITESPACE = (' ', '\t', '\n', '\r')

# Two-character operators are matched before their one-character prefixes
OPERATORS = [
    ('==', TT.EQ),
    ('!=', TT.NOT_EQ),

    ('=', TT.ASSIGN),
    ('+', TT.PLUS),
    ('-', TT.MINUS),
    ('!', TT.BANG),
    ('*', TT.ASTERISK),
    ('/', TT.SLASH),
    ('%', TT.MOD),
    ('<', TT.LT),
    ('>', TT.GT),
    (',', TT.COMMA),
    (';', TT.SEMICOLON),
    ('(', TT.LPAREN),
    (')', TT.RPAREN),
    ('{', TT.LBRACE),
    ('}', TT.RBRACE),
    ('[', TT.LBRACKET),
    (']', TT.RBRACKET),
]

ESCAPES = {
    '"': '"',
    '\\': '\\',
    'n': '\n',
    't': '\t',
    'r': '\r',
}


def is_letter(ch: str) -> bool:
    return 'a' <= ch <= 'z' or 'A' <= ch <= 'Z' or ch == '_'


def is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


class Lexer:
    """Monkey lexer: a cursor over the source plus line/column bookkeeping."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1

    # ========================================================================
    # Main Tokenization
    # ========================================================================

    def next_token(self) -> Tok:
        """Scan and return the next token; EOF forever once input runs out"""
        self.skip_whitespace()

        line, column = self.line, self.column
        ch = self.peek()

        if self.pos >= len(self.source):
            return Tok(TT.EOF, '', line, column)

        if ch == '"':
            return Tok(TT.STRING, self.scan_string(), line, column)

        if is_digit(ch):
            token_type, literal = self.scan_number()
            return Tok(token_type, literal, line, column)

        if is_letter(ch):
            ident = self.scan_identifier()
            token_type = lookup_ident(ident)

            if token_type == TT.ELSE and self.match_following_if():
                return Tok(TT.ELSE_IF, 'else if', line, column)

            return Tok(token_type, ident, line, column)

        for op_str, op_type in OPERATORS:
            if self.source.startswith(op_str, self.pos):
                self.advance(len(op_str))
                return Tok(op_type, op_str, line, column)

        return Tok(TT.ILLEGAL, self.advance(), line, column)

    def tokenize(self) -> List[Tok]:
        """Tokenize entire source, return token list ending with EOF"""
        tokens: List[Tok] = []

        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.type == TT.EOF:
                return tokens

    # ========================================================================
    # Token Scanners
    # ========================================================================

    def scan_string(self) -> str:
        """Scan "..." and return the decoded contents.

        An unterminated string runs to the end of input.
        """
        self.advance()  # opening quote
        chars: List[str] = []

        while self.pos < len(self.source) and self.peek() != '"':
            ch = self.advance()

            if ch == '\\' and self.pos < len(self.source):
                nxt = self.advance()
                chars.append(ESCAPES.get(nxt, ch + nxt))
                continue

            chars.append(ch)

        if self.pos < len(self.source):
            self.advance()  # closing quote

        return ''.join(chars)

    def scan_number(self):
        value = ''

        while is_digit(self.peek()):
            value += self.advance()

        if self.peek() == '.' and is_digit(self.peek(1)):
            value += self.advance()
            while is_digit(self.peek()):
                value += self.advance()
            return TT.FLOAT, value

        return TT.INT, value

    def scan_identifier(self) -> str:
        value = ''

        while is_letter(self.peek()):
            value += self.advance()

        return value

    def match_following_if(self) -> bool:
        """After `else`, consume whitespace + `if` when they follow.

        Leaves the cursor untouched otherwise.
        """
        offset = 0
        while self.peek(offset) in WHITESPACE:
            offset += 1

        if self.peek(offset) != 'i' or self.peek(offset + 1) != 'f':
            return False

        if is_letter(self.peek(offset + 2)):
            return False

        self.advance(offset + 2)
        return True

    # ========================================================================
    # Utilities
    # ========================================================================

    def peek(self, offset: int = 0) -> str:
        """Look ahead at character"""
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def advance(self, n: int = 1) -> str:
        """Consume n characters and return them as a string"""
        if n < 0:
            raise ValueError(f"advance() requires n >= 0, got {n}")
        result = ''
        for _ in range(n):
            ch = self.source[self.pos] if self.pos < len(self.source) else '\0'
            result += ch
            self.pos += 1
            if ch == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        return result

    def skip_whitespace(self) -> None:
        while self.pos < len(self.source) and self.peek() in WHITESPACE:
            self.advance()


def tokenize(source: str) -> List[Tok]:
    """Convenience function to tokenize source"""
    return Lexer(source).tokenize()
