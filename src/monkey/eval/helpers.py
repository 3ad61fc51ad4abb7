from __future__ import annotations

from typing import Optional

from ..types import FALSE, NULL, MkyValue

_INT64_SPAN = 2 ** 64
_INT64_MIN = -(2 ** 63)

def is_truthy(val: MkyValue) -> bool:
    """Everything but the FALSE and NULL singletons counts as true (0 and "" included)."""
    return val is not FALSE and val is not NULL

def wrap_int64(value: int) -> int:
    """Two's-complement wrap into the signed 64-bit range."""
    return (value - _INT64_MIN) % _INT64_SPAN + _INT64_MIN

def or_null(val: Optional[MkyValue]) -> MkyValue:
    """Blocks ending in a `let` produce no value; callers that need one get NULL."""
    return NULL if val is None else val
