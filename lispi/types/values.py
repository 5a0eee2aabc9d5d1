"""Runtime values produced by evaluation.

Values are immutable: lists hold their elements in a tuple and every list
operation builds a new one. Structural sharing between values is fine since
nothing mutates a value in place.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Mapping


class Value:
    """Base class of all runtime values."""

    __slots__ = ()
    type_name = "value"


@dataclass(frozen=True, slots=True)
class Number(Value):
    value: float
    type_name = "number"

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True, slots=True)
class BigNumber(Value):
    """Arbitrary precision integer built from a literal's exact text."""

    value: int
    type_name = "bignum"

    @classmethod
    def from_text(cls, text: str) -> BigNumber:
        return cls(int(text))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class String(Value):
    value: str
    type_name = "string"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Boolean(Value):
    value: bool
    type_name = "boolean"

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True, slots=True)
class Keyword(Value):
    value: str
    type_name = "keyword"

    def __str__(self) -> str:
        return f":{self.value}"


@dataclass(frozen=True, slots=True)
class SymbolValue(Value):
    """A symbol as data, produced by quoting."""

    name: str
    type_name = "symbol"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class ListValue(Value):
    elements: tuple[Value, ...] = ()
    type_name = "list"

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self):
        return iter(self.elements)

    def __str__(self) -> str:
        return "(" + " ".join(format_value(v) for v in self.elements) + ")"


class NilType(Value):
    __slots__ = ()
    type_name = "nil"

    def __repr__(self):
        return "nil"

    def __str__(self):
        return "nil"

    def __bool__(self):
        return False

    def __eq__(self, other):
        return isinstance(other, NilType)

    def __hash__(self):
        return hash(NilType)


Nil = NilType()
TRUE = Boolean(True)
FALSE = Boolean(False)


@dataclass(frozen=True, eq=False)
class Builtin(Value):
    """A primitive implemented in Python, called as fn(env, args)."""

    name: str
    fn: Callable = field(repr=False)
    type_name = "function"

    def __call__(self, env, args):
        return self.fn(env, args)

    def __str__(self) -> str:
        return f"<builtin {self.name}>"


@dataclass(frozen=True, eq=False)
class Namespace(Value):
    """Exported bindings of a module, reached as `name.member`."""

    name: str
    members: Mapping[str, Value]
    type_name = "namespace"

    def __str__(self) -> str:
        return f"<namespace {self.name}>"


def format_number(n: float) -> str:
    if math.isfinite(n) and n == int(n) and abs(n) < 1e16:
        return str(int(n))
    return repr(n)


def format_value(value: Value) -> str:
    """Lisp notation for a value; strings are quoted."""
    if isinstance(value, String):
        escaped = value.value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
        return f'"{escaped}"'
    return str(value)


def is_truthy(value: Value) -> bool:
    return not (value is Nil or value == FALSE)
