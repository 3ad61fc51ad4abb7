from __future__ import annotations

from typing import Callable, Optional

from ..tree import ArrayLiteral, Identifier, IndexExpression, Node
from ..runtime import lookup_builtin
from ..types import NULL, Environment, MkyArray, MkyInteger, MkyValue, is_sentinel, new_error
from .fn import eval_expressions

EvalFunc = Callable[[Node, Environment], Optional[MkyValue]]

def eval_identifier(node: Identifier, env: Environment) -> MkyValue:
    """Environment chain first, builtins second, so user bindings shadow builtins."""
    value = env.get(node.value)
    if value is not None:
        return value

    builtin = lookup_builtin(node.value)
    if builtin is not None:
        return builtin

    return new_error(f"identifier not found: {node.value}")

def eval_array_literal(node: ArrayLiteral, env: Environment, eval_func: EvalFunc) -> MkyValue:
    elements = eval_expressions(node.elements, env, eval_func)
    if not isinstance(elements, list):
        return elements

    return MkyArray(elements)

def eval_index_expression(node: IndexExpression, env: Environment, eval_func: EvalFunc) -> MkyValue:
    left = eval_func(node.left, env)
    if is_sentinel(left):
        return left

    index = eval_func(node.index, env)
    if is_sentinel(index):
        return index

    match (left, index):
        case (MkyArray(elements=elements), MkyInteger(value=i)):
            # out of range is a soft failure: null, not an error
            if i < 0 or i >= len(elements):
                return NULL
            return elements[i]
        case _:
            return new_error(f"index operator not supported: {left.type_name}")
