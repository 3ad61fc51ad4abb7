from __future__ import annotations

import logging
from typing import Optional

from .runtime import init_stdlib
from .tree import (
    ArrayLiteral,
    BlockStatement,
    Boolean,
    CallExpression,
    ExpressionStatement,
    FloatLiteral,
    FunctionLiteral,
    Identifier,
    IfExpression,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    Node,
    PrefixExpression,
    Program,
    ReturnStatement,
    StringLiteral,
)
from .types import Environment, MkyFloat, MkyInteger, MkyString, MkyValue, is_sentinel, native_bool

from .eval.blocks import eval_block, eval_program as _eval_statements
from .eval.control import eval_if_expression, eval_return_stmt
from .eval.expr import eval_infix, eval_prefix
from .eval.fn import eval_call_expression, eval_function_literal
from .eval.helpers import or_null
from .eval.literals import eval_array_literal, eval_identifier, eval_index_expression

log = logging.getLogger(__name__)

# ---------------- Public API ----------------

def eval_program(program: Program, env: Optional[Environment]=None) -> Optional[MkyValue]:
    """Evaluate a whole program.

    Pass the same *env* across calls to keep bindings (a REPL session); a new
    top-level Environment is created when none is given. Returns None when the
    program produced no value (empty, or ending in `let`).
    """
    init_stdlib()

    if env is None:
        env = Environment()

    result = eval_node(program, env)
    log.debug("program evaluated to %r", result)
    return result

# ---------------- Core evaluator ----------------

def eval_node(n: Node, env: Environment) -> Optional[MkyValue]:
    match n:
        # statements
        case Program(statements=stmts):
            return _eval_statements(stmts, env, eval_node)
        case BlockStatement(statements=stmts):
            return eval_block(stmts, env, eval_node)
        case ExpressionStatement(expression=expr):
            return eval_node(expr, env)
        case ReturnStatement():
            return eval_return_stmt(n, env, eval_node)
        case LetStatement(name=name, value=expr):
            val = or_null(eval_node(expr, env))
            if is_sentinel(val):
                return val
            env.set(name.value, val)
            return None

        # literals
        case IntegerLiteral(value=v):
            return MkyInteger(v)
        case FloatLiteral(value=v):
            return MkyFloat(v)
        case StringLiteral(value=v):
            return MkyString(v)
        case Boolean(value=v):
            return native_bool(v)
        case ArrayLiteral():
            return eval_array_literal(n, env, eval_node)

        # expressions
        case Identifier():
            return eval_identifier(n, env)
        case PrefixExpression(operator=op, right=rhs_node):
            rhs = or_null(eval_node(rhs_node, env))
            if is_sentinel(rhs):
                return rhs
            return eval_prefix(op, rhs)
        case InfixExpression(left=lhs_node, operator=op, right=rhs_node):
            lhs = or_null(eval_node(lhs_node, env))
            if is_sentinel(lhs):
                return lhs
            rhs = or_null(eval_node(rhs_node, env))
            if is_sentinel(rhs):
                return rhs
            return eval_infix(op, lhs, rhs)
        case IfExpression():
            return eval_if_expression(n, env, eval_node)
        case FunctionLiteral():
            return eval_function_literal(n, env)
        case CallExpression():
            return eval_call_expression(n, env, eval_node)
        case IndexExpression():
            return eval_index_expression(n, env, eval_node)
        case _:
            raise TypeError(f"cannot evaluate {type(n).__name__}")
