"""Syntax tree nodes produced by the reader.

Every node is a frozen dataclass and child sequences are tuples, so a tree is
immutable once the parser has built it and may be evaluated any number of
times. `Expr` is the common base; the evaluator and the quote form match on
the concrete classes exhaustively.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class Expr:
    """Base class of all syntax tree nodes."""

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class NumberExpr(Expr):
    value: float


@dataclass(frozen=True, slots=True)
class BigNumberExpr(Expr):
    """Integer literal kept as its exact source text."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class StringExpr(Expr):
    value: str


@dataclass(frozen=True, slots=True)
class BooleanExpr(Expr):
    value: bool


@dataclass(frozen=True, slots=True)
class SymbolExpr(Expr):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class KeywordExpr(Expr):
    # Keyword text without the leading colon, e.g. "as" for `:as`
    value: str

    def __str__(self) -> str:
        return f":{self.value}"


@dataclass(frozen=True, slots=True)
class ListExpr(Expr):
    elements: tuple[Expr, ...] = ()


@dataclass(frozen=True, slots=True)
class BracketExpr(Expr):
    elements: tuple[Expr, ...] = ()


@dataclass(frozen=True, slots=True)
class ModuleExpr(Expr):
    """(module name (export sym...) body...)"""

    name: str
    exports: tuple[str, ...]
    body: tuple[Expr, ...]


@dataclass(frozen=True, slots=True)
class ImportExpr(Expr):
    """(import name)"""

    module_name: str


@dataclass(frozen=True, slots=True)
class LoadExpr(Expr):
    """(load "file")"""

    filename: str


@dataclass(frozen=True, slots=True)
class RequireExpr(Expr):
    """(require "file"), (require "file" :as alias) or (require "file" :only (a b))"""

    filename: str
    as_alias: Optional[str] = None
    only: Optional[tuple[str, ...]] = None

    def __post_init__(self):
        if self.as_alias is not None and self.only is not None:
            raise ValueError("require accepts either :as or :only, not both")
