from __future__ import annotations

from typing import Callable, Iterable, Optional

from ..tree import Node, Statement
from ..types import Environment, MkyError, MkyReturn, MkyValue

EvalFunc = Callable[[Node, Environment], Optional[MkyValue]]

def eval_program(statements: Iterable[Statement], env: Environment, eval_func: EvalFunc) -> Optional[MkyValue]:
    """Top level: stop at the first return or error, unwrapping a return."""
    result: Optional[MkyValue] = None

    for stmt in statements:
        result = eval_func(stmt, env)

        match result:
            case MkyReturn(value=inner):
                return inner
            case MkyError():
                return result

    return result

def eval_block(statements: Iterable[Statement], env: Environment, eval_func: EvalFunc) -> Optional[MkyValue]:
    """Nested block: stop at the first return or error but hand the wrapper up
    intact, so the enclosing call (not an inner `if`) does the unwrap."""
    result: Optional[MkyValue] = None

    for stmt in statements:
        result = eval_func(stmt, env)

        if isinstance(result, (MkyReturn, MkyError)):
            return result

    return result
