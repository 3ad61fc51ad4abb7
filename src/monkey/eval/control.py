from __future__ import annotations

from typing import Callable, Optional

from ..tree import IfExpression, Node, ReturnStatement
from ..types import NULL, Environment, MkyReturn, MkyValue, is_sentinel
from .helpers import is_truthy, or_null

EvalFunc = Callable[[Node, Environment], Optional[MkyValue]]

def eval_if_expression(node: IfExpression, env: Environment, eval_func: EvalFunc) -> MkyValue:
    """if / else if ... / else: first truthy condition wins, in source order."""
    condition = eval_func(node.condition, env)
    if is_sentinel(condition):
        return condition

    if is_truthy(condition):
        return or_null(eval_func(node.consequence, env))

    for clause in node.else_ifs:
        condition = eval_func(clause.condition, env)
        if is_sentinel(condition):
            return condition

        if is_truthy(condition):
            return or_null(eval_func(clause.consequence, env))

    if node.alternative is not None:
        return or_null(eval_func(node.alternative, env))

    return NULL

def eval_return_stmt(node: ReturnStatement, env: Environment, eval_func: EvalFunc) -> MkyValue:
    value = or_null(eval_func(node.return_value, env))
    if is_sentinel(value):
        return value

    return MkyReturn(value)
