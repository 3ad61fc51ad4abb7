"""Runtime values and the lexical Environment chain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ClassVar, Dict, List, Optional, Tuple
from typing_extensions import TypeAlias

from .tree import BlockStatement, Identifier

# ---------- Value Model ----------
#
# `type_name` is what runtime error messages print ("type mismatch: INTEGER +
# BOOLEAN"); `inspect()` is the user-facing rendering the REPL prints.

@dataclass
class MkyInteger:
    type_name: ClassVar[str] = "INTEGER"
    value: int

    def inspect(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return self.inspect()

@dataclass
class MkyFloat:
    type_name: ClassVar[str] = "FLOAT"
    value: float

    def inspect(self) -> str:
        return f"{self.value:f}"

    def __repr__(self) -> str:
        return self.inspect()

@dataclass(frozen=True, eq=False)
class MkyBool:
    """Only the TRUE and FALSE singletons below should ever exist."""
    type_name: ClassVar[str] = "BOOLEAN"
    value: bool

    def inspect(self) -> str:
        return "true" if self.value else "false"

    def __repr__(self) -> str:
        return self.inspect()

@dataclass(frozen=True, eq=False)
class MkyNull:
    type_name: ClassVar[str] = "NULL"

    def inspect(self) -> str:
        return "null"

    def __repr__(self) -> str:
        return "null"

@dataclass
class MkyString:
    type_name: ClassVar[str] = "STRING"
    value: str

    def inspect(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f'"{self.value}"'

@dataclass
class MkyArray:
    type_name: ClassVar[str] = "ARRAY"
    elements: List['MkyValue']

    def inspect(self) -> str:
        return "[" + ", ".join(el.inspect() for el in self.elements) + "]"

    def __repr__(self) -> str:
        return "[" + ", ".join(repr(el) for el in self.elements) + "]"

@dataclass
class MkyError:
    type_name: ClassVar[str] = "ERROR"
    message: str

    def inspect(self) -> str:
        return f"ERROR {self.message}"

    def __repr__(self) -> str:
        return self.inspect()

@dataclass
class MkyReturn:
    """Carries a `return` value up through nested blocks to the call boundary."""
    type_name: ClassVar[str] = "RETURN_VALUE"
    value: 'MkyValue'

    def inspect(self) -> str:
        return self.value.inspect()

@dataclass(eq=False)
class MkyFn:
    type_name: ClassVar[str] = "FUNCTION"
    parameters: Tuple[Identifier, ...]
    body: BlockStatement
    env: 'Environment'  # Closure environment, shared by reference

    def inspect(self) -> str:
        params = ", ".join(p.string() for p in self.parameters)
        return f"fn({params}) {{\n{self.body.string()}\n}}"

    def __repr__(self) -> str:
        params = ", ".join(p.value for p in self.parameters) or "nullary"
        return f"<fn params={params}>"

BuiltinFn = Callable[..., 'MkyValue']

@dataclass(frozen=True, eq=False)
class MkyBuiltin:
    type_name: ClassVar[str] = "BUILTIN"
    name: str
    fn: BuiltinFn

    def inspect(self) -> str:
        return "builtin function"

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"

MkyValue: TypeAlias = (
    MkyInteger
    | MkyFloat
    | MkyBool
    | MkyNull
    | MkyString
    | MkyArray
    | MkyError
    | MkyReturn
    | MkyFn
    | MkyBuiltin
)

TRUE = MkyBool(True)
FALSE = MkyBool(False)
NULL = MkyNull()

def native_bool(value: bool) -> MkyBool:
    return TRUE if value else FALSE

def new_error(message: str) -> MkyError:
    return MkyError(message)

def is_sentinel(value: Optional[MkyValue]) -> bool:
    """Errors and pending returns both cut evaluation short and travel upward unchanged."""
    return isinstance(value, (MkyError, MkyReturn))

# ---------- Environment ----------

class Environment:
    """One lexical scope: a binding table plus a link to the enclosing scope."""

    def __init__(self, outer: Optional['Environment']=None):
        self.store: Dict[str, MkyValue] = {}
        self.outer = outer

    @classmethod
    def new_enclosed(cls, outer: 'Environment') -> 'Environment':
        return cls(outer=outer)

    def get(self, name: str) -> Optional[MkyValue]:
        env: Optional[Environment] = self

        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer

        return None

    def set(self, name: str, val: MkyValue) -> MkyValue:
        """Bind in this scope only; outer bindings of the same name are shadowed."""
        self.store[name] = val
        return val

    def names(self) -> List[str]:
        seen: Dict[str, None] = {}
        env: Optional[Environment] = self

        while env is not None:
            for name in env.store:
                seen.setdefault(name, None)
            env = env.outer

        return list(seen)

    def __repr__(self) -> str:
        depth = 0
        env = self.outer

        while env is not None:
            depth += 1
            env = env.outer

        return f"<Environment names={sorted(self.store)} depth={depth}>"
