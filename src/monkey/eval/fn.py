from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Union

from ..runtime import call_function
from ..tree import CallExpression, FunctionLiteral, Node
from ..types import Environment, MkyBuiltin, MkyFn, MkyValue, is_sentinel, new_error
from .helpers import or_null

EvalFunc = Callable[[Node, Environment], Optional[MkyValue]]

def eval_function_literal(node: FunctionLiteral, env: Environment) -> MkyFn:
    # The defining scope is captured by reference, not copied.
    return MkyFn(parameters=node.parameters, body=node.body, env=env)

def eval_call_expression(node: CallExpression, env: Environment, eval_func: EvalFunc) -> MkyValue:
    function = eval_func(node.function, env)
    if is_sentinel(function):
        return function

    if not isinstance(function, (MkyFn, MkyBuiltin)):
        return new_error(f"not a function: {or_null(function).type_name}")

    args = eval_expressions(node.arguments, env, eval_func)
    if not isinstance(args, list):
        return args

    return or_null(call_function(function, args))

def eval_expressions(nodes: Sequence[Node], env: Environment, eval_func: EvalFunc) -> Union[List[MkyValue], MkyValue]:
    """Evaluate left to right; the first error or pending return short-circuits the rest."""
    values: List[MkyValue] = []

    for node in nodes:
        value = or_null(eval_func(node, env))
        if is_sentinel(value):
            return value
        values.append(value)

    return values
