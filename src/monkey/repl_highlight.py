"""prompt_toolkit lexer for live Monkey syntax highlighting in the REPL."""

from __future__ import annotations

from typing import Callable, List

from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from .lexer import WHITESPACE, Lexer as MkyLexer
from .token_types import TT, Tok

# Map highlight groups → prompt_toolkit style strings.
GROUP_STYLE = {
    "keyword": "bold ansicyan",
    "boolean": "ansicyan",
    "number": "ansimagenta",
    "string": "ansigreen",
    "identifier": "",
    "builtin": "bold ansiyellow",
    "operator": "",
    "punctuation": "",
    "error": "bold ansired",
}

_TT_GROUP = {
    TT.FUNCTION: "keyword",
    TT.LET: "keyword",
    TT.IF: "keyword",
    TT.ELSE: "keyword",
    TT.ELSE_IF: "keyword",
    TT.RETURN: "keyword",
    TT.TRUE: "boolean",
    TT.FALSE: "boolean",
    TT.INT: "number",
    TT.FLOAT: "number",
    TT.STRING: "string",
    TT.IDENT: "identifier",
    TT.ASSIGN: "operator",
    TT.PLUS: "operator",
    TT.MINUS: "operator",
    TT.BANG: "operator",
    TT.ASTERISK: "operator",
    TT.SLASH: "operator",
    TT.MOD: "operator",
    TT.LT: "operator",
    TT.GT: "operator",
    TT.EQ: "operator",
    TT.NOT_EQ: "operator",
    TT.COMMA: "punctuation",
    TT.SEMICOLON: "punctuation",
    TT.LPAREN: "punctuation",
    TT.RPAREN: "punctuation",
    TT.LBRACE: "punctuation",
    TT.RBRACE: "punctuation",
    TT.LBRACKET: "punctuation",
    TT.RBRACKET: "punctuation",
    TT.ILLEGAL: "error",
}

BUILTIN_NAMES = {"len", "first", "last", "rest", "push", "pop"}


def _token_group(tok: Tok) -> str:
    if tok.type == TT.IDENT and tok.literal in BUILTIN_NAMES:
        return "builtin"
    return _TT_GROUP.get(tok.type, "")


def highlight_line(text: str) -> StyleAndTextTuples:
    """Tokenize a single line and return styled fragments.

    Token spans come from the lexer's column positions: each token runs from
    its own column up to the next token's, minus the whitespace in between.
    """
    if not text:
        return [("", "")]

    tokens: List[Tok] = MkyLexer(text).tokenize()
    result: StyleAndTextTuples = []
    pos = 0

    for tok, nxt in zip(tokens, tokens[1:]):
        start = tok.column - 1
        end = len(text[start:nxt.column - 1].rstrip("".join(WHITESPACE))) + start

        if start > pos:
            result.append(("", text[pos:start]))

        result.append((GROUP_STYLE.get(_token_group(tok), ""), text[start:end]))
        pos = end

    if pos < len(text):
        result.append(("", text[pos:]))

    return result if result else [("", text)]


class MonkeyLexer(Lexer):
    """prompt_toolkit Lexer that highlights Monkey source using the Monkey lexer."""

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines

        # Pre-compute highlights for all lines.
        cache: dict[int, StyleAndTextTuples] = {}

        def get_line(lineno: int) -> StyleAndTextTuples:
            if lineno not in cache:
                if lineno < len(lines):
                    cache[lineno] = highlight_line(lines[lineno])
                else:
                    cache[lineno] = [("", "")]

            return cache[lineno]

        return get_line
