"""
  Recursive-descent parser for lispi

Reads the typed token stream produced by `lispi.reader.lexer` and builds an
immutable Expr tree:

    - number      -> NumberExpr, or BigNumberExpr when a float would lose digits
    - string      -> StringExpr
    - boolean     -> BooleanExpr
    - symbol      -> SymbolExpr
    - keyword     -> KeywordExpr
    - ( ... )     -> ListExpr, reinterpreted as a declaration node when it
                     starts with module / import / load / require
    - [ ... ]     -> BracketExpr, never reinterpreted
    - 'x          -> (quote x)
"""

from __future__ import annotations

import math
from typing import Callable, Iterable

from lispi.errors import (
    LispiEmptyInputError,
    LispiInvalidBooleanError,
    LispiInvalidNumberError,
    LispiMalformedFormError,
    LispiTrailingTokenError,
    LispiUnexpectedClosingDelimiterError,
    LispiUnexpectedTokenError,
    LispiUnmatchedDelimiterError,
)
from lispi.reader.lexer import NUMBER_RE
from lispi.reader.tokens import EOF_TOKEN, Token, TokenType
from lispi.types.expr import (
    BigNumberExpr,
    BooleanExpr,
    BracketExpr,
    Expr,
    ImportExpr,
    KeywordExpr,
    ListExpr,
    LoadExpr,
    ModuleExpr,
    NumberExpr,
    RequireExpr,
    StringExpr,
    SymbolExpr,
)


# Spellings float() accepts besides plain decimal literals
SPECIAL_FLOATS = frozenset({"inf", "infinity", "nan"})


def is_number_text(text: str) -> bool:
    """True for a decimal literal (sign, fraction and exponent optional) or inf/nan."""
    if NUMBER_RE.fullmatch(text):
        return True
    body = text[1:] if text[:1] in ("+", "-") else text
    return body.lower() in SPECIAL_FLOATS


def is_big_integer_literal(text: str) -> bool:
    """True when an integer literal may lose precision as a 64-bit float.

    This counts characters of the literal (sign included) rather than checking
    magnitude, so exactly representable values such as 1000000000000000 are
    kept as text too.
    """
    if "." in text or "e" in text or "E" in text:
        return False
    return len(text) > 15 or (len(text) == 16 and text[0] > "1")


class Parser:
    def __init__(self, tokens: Iterable[Token]):
        self.tokens: list[Token] = list(tokens)
        self.position = 0

    # ------------------------
    # Token cursor
    # ------------------------
    def peek(self) -> Token:
        if self.position >= len(self.tokens):
            return EOF_TOKEN
        return self.tokens[self.position]

    def advance(self) -> Token:
        tok = self.peek()
        self.position += 1
        return tok

    def at_end(self) -> bool:
        return self.peek().type is TokenType.EOF

    # ------------------------
    # Entry points
    # ------------------------
    def parse(self) -> Expr:
        """Parse exactly one expression; the whole stream must be consumed."""
        if self.at_end():
            raise LispiEmptyInputError("empty input")
        expr = self.parse_expr()
        if not self.at_end():
            raise LispiTrailingTokenError(
                f"unexpected token after expression: {self.peek()}"
            )
        return expr

    def parse_all(self) -> list[Expr]:
        """Parse consecutive top-level expressions until end of input."""
        forms = []
        while not self.at_end():
            forms.append(self.parse_expr())
        return forms

    # ------------------------
    # Expressions
    # ------------------------
    def parse_expr(self) -> Expr:
        tok = self.peek()
        match tok.type:
            case TokenType.NUMBER:
                return self._parse_number()
            case TokenType.STRING:
                self.advance()
                return StringExpr(tok.value)
            case TokenType.BOOLEAN:
                return self._parse_boolean()
            case TokenType.SYMBOL:
                self.advance()
                return SymbolExpr(tok.value)
            case TokenType.KEYWORD:
                self.advance()
                return KeywordExpr(tok.value)
            case TokenType.LPAREN:
                return self._parse_list()
            case TokenType.LBRACKET:
                return self._parse_bracket()
            case TokenType.QUOTE:
                return self._parse_quote()
            case TokenType.RPAREN:
                raise LispiUnexpectedClosingDelimiterError("unexpected closing parenthesis")
            case TokenType.RBRACKET:
                raise LispiUnexpectedClosingDelimiterError("unexpected closing bracket")
            case _:
                raise LispiUnexpectedTokenError(f"unexpected token: {tok}")

    def _parse_number(self) -> Expr:
        text = self.advance().value
        if not is_number_text(text):
            raise LispiInvalidNumberError(f"invalid number: {text}")
        value = float(text)
        if math.isinf(value) and "inf" not in text.lower():
            raise LispiInvalidNumberError(f"invalid number: {text} (out of range)")
        if is_big_integer_literal(text):
            return BigNumberExpr(text)
        return NumberExpr(value)

    def _parse_boolean(self) -> Expr:
        text = self.advance().value
        if text == "true":
            return BooleanExpr(True)
        if text == "false":
            return BooleanExpr(False)
        raise LispiInvalidBooleanError(f"invalid boolean value: {text}")

    def _parse_sequence(self, closer: TokenType, what: str) -> tuple[Expr, ...]:
        self.advance()  # consume the opening delimiter
        elements = []
        while self.peek().type is not closer:
            if self.at_end():
                raise LispiUnmatchedDelimiterError(f"unmatched opening {what}")
            elements.append(self.parse_expr())
        self.advance()  # consume the closing delimiter
        return tuple(elements)

    def _parse_list(self) -> Expr:
        elements = self._parse_sequence(TokenType.RPAREN, "parenthesis")
        if elements and isinstance(elements[0], SymbolExpr):
            reinterpret = DECLARATION_FORMS.get(elements[0].name)
            if reinterpret is not None:
                return reinterpret(elements)
        return ListExpr(elements)

    def _parse_bracket(self) -> Expr:
        return BracketExpr(self._parse_sequence(TokenType.RBRACKET, "bracket"))

    def _parse_quote(self) -> Expr:
        self.advance()  # consume '
        quoted = self.parse_expr()
        return ListExpr((SymbolExpr("quote"), quoted))


# ---------------------------------------------------------------------------
# Declaration forms: generic lists reclassified by their first symbol
# ---------------------------------------------------------------------------

def _symbol_names(exprs: Iterable[Expr], message: str) -> tuple[str, ...]:
    names = []
    for e in exprs:
        if not isinstance(e, SymbolExpr):
            raise LispiMalformedFormError(message)
        names.append(e.name)
    return tuple(names)


def module_from_elements(elements: tuple[Expr, ...]) -> ModuleExpr:
    """(module name (export sym...) body...)"""
    if len(elements) < 4:
        raise LispiMalformedFormError(
            "module requires at least name, export list, and body"
        )
    name = elements[1]
    if not isinstance(name, SymbolExpr):
        raise LispiMalformedFormError("module name must be a symbol")
    export_list = elements[2]
    if not isinstance(export_list, ListExpr):
        raise LispiMalformedFormError("module export list must be a list")
    if not export_list.elements:
        raise LispiMalformedFormError("export list cannot be empty")
    head = export_list.elements[0]
    if not isinstance(head, SymbolExpr) or head.name != "export":
        raise LispiMalformedFormError("export list must start with 'export'")
    exports = _symbol_names(export_list.elements[1:], "exported names must be symbols")
    return ModuleExpr(name=name.name, exports=exports, body=elements[3:])


def import_from_elements(elements: tuple[Expr, ...]) -> ImportExpr:
    """(import module-name)"""
    if len(elements) != 2:
        raise LispiMalformedFormError("import requires exactly one module name")
    name = elements[1]
    if not isinstance(name, SymbolExpr):
        raise LispiMalformedFormError("import module name must be a symbol")
    return ImportExpr(name.name)


def load_from_elements(elements: tuple[Expr, ...]) -> LoadExpr:
    """(load "file")"""
    if len(elements) != 2:
        raise LispiMalformedFormError("load requires exactly one filename")
    filename = elements[1]
    if not isinstance(filename, StringExpr):
        raise LispiMalformedFormError("load filename must be a string")
    return LoadExpr(filename.value)


def require_from_elements(elements: tuple[Expr, ...]) -> RequireExpr:
    """
    Supported shapes:
        (require "file")
        (require "file" :as alias)
        (require "file" :only (a b))
    """
    if len(elements) < 2:
        raise LispiMalformedFormError("require requires at least a filename")
    filename = elements[1]
    if not isinstance(filename, StringExpr):
        raise LispiMalformedFormError("require filename must be a string")
    if len(elements) == 2:
        return RequireExpr(filename.value)
    if len(elements) != 4:
        raise LispiMalformedFormError(
            "require modifier expects exactly one argument: :as alias or :only (names)"
        )

    modifier, payload = elements[2], elements[3]
    if not isinstance(modifier, KeywordExpr):
        raise LispiMalformedFormError("require modifier must be a keyword (:as or :only)")
    if modifier.value == "as":
        if not isinstance(payload, SymbolExpr):
            raise LispiMalformedFormError("require :as alias must be a symbol")
        return RequireExpr(filename.value, as_alias=payload.name)
    if modifier.value == "only":
        if not isinstance(payload, (ListExpr, BracketExpr)):
            raise LispiMalformedFormError("require :only expects a list of symbols")
        only = _symbol_names(payload.elements, "require :only list must contain only symbols")
        return RequireExpr(filename.value, only=only)
    raise LispiMalformedFormError(
        f"require modifier must be :as or :only, got :{modifier.value}"
    )


DECLARATION_FORMS: dict[str, Callable[[tuple[Expr, ...]], Expr]] = {
    "module": module_from_elements,
    "import": import_from_elements,
    "load": load_from_elements,
    "require": require_from_elements,
}


def parse(tokens: Iterable[Token]) -> Expr:
    """Parse a complete token stream into a single Expr."""
    return Parser(tokens).parse()
