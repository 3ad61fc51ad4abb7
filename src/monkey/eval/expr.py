from __future__ import annotations

import math

from ..types import (
    MkyFloat,
    MkyInteger,
    MkyString,
    MkyValue,
    native_bool,
    new_error,
)
from .helpers import is_truthy, wrap_int64

def eval_prefix(op: str, right: MkyValue) -> MkyValue:
    match op:
        case '!':
            return native_bool(not is_truthy(right))
        case '-':
            return _eval_minus(right)
        case _:
            return new_error(f"unknown operator: {op}{right.type_name}")

def _eval_minus(right: MkyValue) -> MkyValue:
    match right:
        case MkyInteger(value=v):
            return MkyInteger(wrap_int64(-v))
        case MkyFloat(value=v):
            return MkyFloat(-v)
        case _:
            return new_error(f"unknown operator: -{right.type_name}")

def eval_infix(op: str, left: MkyValue, right: MkyValue) -> MkyValue:
    """Dispatch on the runtime type pair, in a fixed order.

    The `==`/`!=` fallback compares identity, so only the shared TRUE/FALSE/NULL
    singletons (or the very same object) compare equal there.
    """
    match (left, right):
        case (MkyInteger(), MkyInteger()):
            return _integer_infix(op, left, right)
        case (MkyFloat(), MkyFloat()):
            return _float_infix(op, left, right)
        case (MkyFloat(), MkyInteger()) | (MkyInteger(), MkyFloat()):
            return _float_infix(op, left, right)
        case (MkyString(), MkyString()):
            return _string_infix(op, left, right)

    if op == '==':
        return native_bool(left is right)

    if op == '!=':
        return native_bool(left is not right)

    if left.type_name != right.type_name:
        return new_error(f"type mismatch: {left.type_name} {op} {right.type_name}")

    return _unknown_operator(op, left, right)

def _unknown_operator(op: str, left: MkyValue, right: MkyValue) -> MkyValue:
    return new_error(f"unknown operator: {left.type_name} {op} {right.type_name}")

def _division_by_zero(op: str, left: MkyValue, right: MkyValue) -> MkyValue:
    return new_error(f"division by zero: {left.type_name} {op} {right.type_name}")

def _ieee_div(a: float, b: float) -> float:
    """Float division that yields inf/nan on a zero divisor instead of raising."""
    if b != 0.0:
        return a / b
    if a == 0.0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)

def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient

def _integer_infix(op: str, left: MkyInteger, right: MkyInteger) -> MkyValue:
    lv, rv = left.value, right.value

    match op:
        case '+':
            return MkyInteger(wrap_int64(lv + rv))
        case '-':
            return MkyInteger(wrap_int64(lv - rv))
        case '*':
            return MkyInteger(wrap_int64(lv * rv))
        case '/':
            if rv == 0:
                return _division_by_zero(op, left, right)
            return MkyInteger(wrap_int64(_trunc_div(lv, rv)))
        case '%':
            if rv == 0:
                return _division_by_zero(op, left, right)
            # remainder takes the sign of the dividend, like fmod
            return MkyInteger(lv - rv * _trunc_div(lv, rv))
        case '<':
            return native_bool(lv < rv)
        case '>':
            return native_bool(lv > rv)
        case '==':
            return native_bool(lv == rv)
        case '!=':
            return native_bool(lv != rv)
        case _:
            return _unknown_operator(op, left, right)

def _float_infix(op: str, left: MkyValue, right: MkyValue) -> MkyValue:
    """(float, float) and mixed pairs; an integer operand is promoted."""
    lv, rv = float(left.value), float(right.value)

    match op:
        case '+':
            return MkyFloat(lv + rv)
        case '-':
            return MkyFloat(lv - rv)
        case '*':
            return MkyFloat(lv * rv)
        case '/':
            return MkyFloat(_ieee_div(lv, rv))
        case '%':
            # fmod raises where IEEE remainder is NaN
            if rv == 0.0 or math.isinf(lv):
                return MkyFloat(math.nan)
            return MkyFloat(math.fmod(lv, rv))
        case '<':
            return native_bool(lv < rv)
        case '>':
            return native_bool(lv > rv)
        case '==':
            return native_bool(lv == rv)
        case '!=':
            return native_bool(lv != rv)
        case _:
            return _unknown_operator(op, left, right)

def _string_infix(op: str, left: MkyString, right: MkyString) -> MkyValue:
    match op:
        case '+':
            return MkyString(left.value + right.value)
        case '==':
            return native_bool(left.value == right.value)
        case '!=':
            return native_bool(left.value != right.value)
        case _:
            return _unknown_operator(op, left, right)
