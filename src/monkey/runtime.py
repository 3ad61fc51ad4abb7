from __future__ import annotations

import importlib
import logging
from typing import Dict, List, Optional

from .types import (
    BuiltinFn, Environment, MkyBuiltin, MkyFn, MkyReturn, MkyValue, new_error,
)

log = logging.getLogger(__name__)

# Process-wide builtin table; filled once when the stdlib module is imported
# and read-only afterwards.
BUILTINS: Dict[str, MkyBuiltin] = {}

_STDLIB_INITIALIZED = False

def init_stdlib() -> None:
    """Load stdlib modules (idempotent) so register_builtin hooks run."""
    global _STDLIB_INITIALIZED

    if _STDLIB_INITIALIZED:
        return

    importlib.import_module("monkey.stdlib")
    _STDLIB_INITIALIZED = True
    log.debug("builtins registered: %s", ", ".join(sorted(BUILTINS)))

def register_builtin(name: str):
    def dec(fn: BuiltinFn):
        BUILTINS[name] = MkyBuiltin(name=name, fn=fn)
        return fn

    return dec

def lookup_builtin(name: str) -> Optional[MkyBuiltin]:
    return BUILTINS.get(name)

def call_function(fn: MkyValue, args: List[MkyValue]) -> MkyValue:
    """
    Call semantics:
    - Function: fresh scope enclosed by the *captured* environment (not the
      caller's), parameters bound positionally, a `return` unwrapped here.
    - Builtin: arguments handed over as-is; the builtin validates them.
    """
    from .evaluator import eval_node  # local import to avoid cycle

    match fn:
        case MkyFn(parameters=params, body=body, env=closure):
            if len(args) != len(params):
                return new_error(f"wrong number of arguments: want={len(params)}, got={len(args)}")

            call_env = Environment.new_enclosed(closure)

            for param, arg in zip(params, args):
                call_env.set(param.value, arg)

            return unwrap_return_value(eval_node(body, call_env))
        case MkyBuiltin(fn=native):
            return native(*args)
        case _:
            return new_error(f"not a function: {fn.type_name}")

def unwrap_return_value(value: MkyValue) -> MkyValue:
    if isinstance(value, MkyReturn):
        return value.value

    return value
