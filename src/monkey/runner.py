from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional, Tuple

from .evaluator import eval_program
from .lexer import Lexer, tokenize
from .parser import Parser
from .tree import Program
from .types import Environment, MkyError, MkyValue
from .utils import configure_logging


class MonkeyParseError(Exception):
    """Raised by `run` when the parser reported syntax errors."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def parse_source(source: str) -> Tuple[Program, List[str]]:
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors


def run(src: str, env: Optional[Environment]=None) -> Optional[MkyValue]:
    """Parse and evaluate *src*; raises MonkeyParseError on syntax errors.

    Runtime failures are not raised: they come back as an MkyError value.
    """
    program, errors = parse_source(src)
    if errors:
        raise MonkeyParseError(errors)

    return eval_program(program, env if env is not None else Environment())


def repl_eval(src: str, env: Environment) -> Tuple[Optional[MkyValue], List[str]]:
    """One REPL line: (result, parser errors). Nothing is evaluated when errors exist."""
    program, errors = parse_source(src)
    if errors:
        return None, errors

    return eval_program(program, env), []


def _load_source(arg: Optional[str]) -> str:
    """
    Resolve CLI input into source text.
    - None or "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as literal source.
    """

    if arg is None or arg == "-":
        data = sys.stdin.read()
        if not data:
            raise SystemExit("No input provided on stdin")
        return data

    candidate = Path(arg)
    if candidate.exists():
        return candidate.read_text(encoding="utf-8")

    return arg


def main() -> None:
    configure_logging()

    mode = "eval"
    arg = None

    for token in sys.argv[1:]:
        if token == "--tokens":
            mode = "tokens"
            continue

        if token == "--ast":
            mode = "ast"
            continue

        if arg is None:
            arg = token
        else:
            raise SystemExit(f"Unexpected argument: {token}")

    source = _load_source(arg)

    if mode == "tokens":
        for tok in tokenize(source):
            print(tok)
        return

    program, errors = parse_source(source)

    if errors:
        print("parser errors:", file=sys.stderr)
        for msg in errors:
            print(f"\t{msg}", file=sys.stderr)
        raise SystemExit(1)

    if mode == "ast":
        print(program.string())
        return

    result = eval_program(program, Environment())

    if result is not None:
        print(result.inspect())

    if isinstance(result, MkyError):
        raise SystemExit(1)


if __name__ == "__main__":
    main()
