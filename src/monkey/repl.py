"""Interactive REPL for Monkey, powered by prompt_toolkit."""

from __future__ import annotations

import re
import sys
import traceback
from typing import List

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings

from .lexer import tokenize
from .repl_highlight import MonkeyLexer
from .runner import parse_source, repl_eval
from .runtime import init_stdlib
from .token_types import TT
from .types import Environment
from .utils import configure_logging, debug_py_trace_enabled

PROMPT = ">> "

# Zero-width and invisible characters to strip from input.
_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\ufeff\u00a0\r]")

# Slash commands: name => description.
_SLASH_CMDS = {
    "/ast": "Toggle printing the parsed program instead of evaluating it",
    "/env": "List the names bound in this session",
    "/reset": "Start over with an empty environment",
}

_DEPTH_OPEN = {TT.LPAREN, TT.LBRACKET, TT.LBRACE}
_DEPTH_CLOSE = {TT.RPAREN, TT.RBRACKET, TT.RBRACE}


def open_depth(text: str) -> int:
    """Unclosed ( [ { count; a positive result means the input continues."""
    depth = 0

    for tok in tokenize(text):
        if tok.type in _DEPTH_OPEN:
            depth += 1
        elif tok.type in _DEPTH_CLOSE:
            depth -= 1

    return depth


def format_parser_errors(errors: List[str]) -> str:
    lines = ["parser errors:"]
    lines.extend(f"\t{msg}" for msg in errors)
    return "\n".join(lines)


class _SlashCompleter(Completer):
    """Autocomplete slash commands on the primary prompt."""

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if not text.startswith("/"):
            return

        for cmd, desc in _SLASH_CMDS.items():
            if cmd.startswith(text):
                yield Completion(
                    cmd,
                    start_position=-len(text),
                    display_meta=desc,
                )


class ReplState:
    """What a session carries between lines."""

    def __init__(self) -> None:
        self.env = Environment()
        self.show_ast = False

    def handle_slash(self, line: str) -> bool:
        """Handle slash commands. Returns True if the line was a command."""
        stripped = line.strip()
        if not stripped.startswith("/"):
            return False

        cmd = stripped.split(None, 1)[0]

        if cmd == "/reset":
            self.env = Environment()
            print("Environment reset.")
            return True

        if cmd == "/env":
            for name in sorted(self.env.names()):
                value = self.env.get(name)
                print(f"{name} = {value.inspect() if value is not None else ''}")
            return True

        if cmd == "/ast":
            self.show_ast = not self.show_ast
            print(f"AST mode: {'on' if self.show_ast else 'off'}")
            return True

        print(f"Unknown command: {cmd}", file=sys.stderr)
        return True

    def feed(self, text: str) -> None:
        """Parse and evaluate one submission, printing the outcome."""
        if self.show_ast:
            program, errors = parse_source(text)
            if errors:
                print(format_parser_errors(errors), file=sys.stderr)
            else:
                print(program.string())
            return

        result, errors = repl_eval(text, self.env)

        if errors:
            print(format_parser_errors(errors), file=sys.stderr)
            return

        if result is not None:
            print(result.inspect())


def _normalize(text: str) -> str:
    """Strip invisible characters from input."""
    return _INVISIBLE_RE.sub("", text)


def repl() -> None:
    """Interactive read-eval-print loop with prompt_toolkit."""
    init_stdlib()
    state = ReplState()

    bindings = KeyBindings()

    @bindings.add("enter")
    def _enter(event):
        buf = event.app.current_buffer

        # Keep reading while brackets are still open.
        if open_depth(buf.text) > 0:
            buf.insert_text("\n" + "    " * open_depth(buf.text))
            return

        buf.validate_and_handle()

    session: PromptSession[str] = PromptSession(
        history=InMemoryHistory(),
        lexer=MonkeyLexer(),
        completer=_SlashCompleter(),
        complete_while_typing=True,
        key_bindings=bindings,
        multiline=True,
        prompt_continuation=".. ",
    )

    print("monkey repl (Ctrl-D to exit, / for commands)")

    while True:
        try:
            text = session.prompt(PROMPT)
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print("KeyboardInterrupt")
            continue

        text = _normalize(text)
        if not text.strip():
            continue

        if state.handle_slash(text):
            continue

        try:
            state.feed(text)
        except RecursionError as exc:
            print(f"Error: recursion too deep ({exc})", file=sys.stderr)
            if debug_py_trace_enabled():
                print("\nPython traceback:", file=sys.stderr)
                traceback.print_exc()


def main() -> None:
    configure_logging()
    repl()


if __name__ == "__main__":
    main()
