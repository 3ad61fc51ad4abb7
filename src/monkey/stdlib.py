"""Built-in functions (len, first, last, rest, push, pop) registered via monkey.runtime.

Each builtin checks its own argument count and types and answers with an
error value rather than raising. Arrays are never mutated in place: `rest`,
`push` and `pop` build new arrays.
"""

from __future__ import annotations

from typing import Optional

from .runtime import register_builtin
from .types import MkyArray, MkyError, MkyInteger, MkyString, MkyValue, NULL, new_error

def _arity_error(got: int, want: int) -> MkyError:
    return new_error(f"wrong number of arguments. got={got}, want={want}")

def _require_array(name: str, arg: MkyValue) -> Optional[MkyError]:
    if isinstance(arg, MkyArray):
        return None

    return new_error(f"argument to '{name}' must be ARRAY, got {arg.type_name}")

@register_builtin("len")
def builtin_len(*args: MkyValue) -> MkyValue:
    if len(args) != 1:
        return _arity_error(len(args), 1)

    match args[0]:
        case MkyString(value=s):
            return MkyInteger(len(s))
        case MkyArray(elements=elements):
            return MkyInteger(len(elements))
        case other:
            return new_error(f"argument to 'len' not supported, got {other.type_name}")

@register_builtin("first")
def builtin_first(*args: MkyValue) -> MkyValue:
    if len(args) != 1:
        return _arity_error(len(args), 1)

    err = _require_array("first", args[0])
    if err is not None:
        return err

    elements = args[0].elements
    return elements[0] if elements else NULL

@register_builtin("last")
def builtin_last(*args: MkyValue) -> MkyValue:
    if len(args) != 1:
        return _arity_error(len(args), 1)

    err = _require_array("last", args[0])
    if err is not None:
        return err

    elements = args[0].elements
    return elements[-1] if elements else NULL

@register_builtin("rest")
def builtin_rest(*args: MkyValue) -> MkyValue:
    """Everything but the first element, or null for an empty array."""
    if len(args) != 1:
        return _arity_error(len(args), 1)

    err = _require_array("rest", args[0])
    if err is not None:
        return err

    elements = args[0].elements
    if not elements:
        return NULL

    return MkyArray(list(elements[1:]))

@register_builtin("push")
def builtin_push(*args: MkyValue) -> MkyValue:
    if len(args) != 2:
        return _arity_error(len(args), 2)

    err = _require_array("push", args[0])
    if err is not None:
        return err

    return MkyArray([*args[0].elements, args[1]])

@register_builtin("pop")
def builtin_pop(*args: MkyValue) -> MkyValue:
    """Everything but the last element, or null for an empty array."""
    if len(args) != 1:
        return _arity_error(len(args), 1)

    err = _require_array("pop", args[0])
    if err is not None:
        return err

    elements = args[0].elements
    if not elements:
        return NULL

    return MkyArray(list(elements[:-1]))
