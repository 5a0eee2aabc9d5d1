"""
  Lisp lexer

Turns source text into the typed token stream read by `lispi.reader.parser`.

    - ( ) [ ]       -> LPAREN RPAREN LBRACKET RBRACKET
    - 'x            -> QUOTE, then the tokens of x
    - "text"        -> STRING (value is the unescaped text)
    - true / false  -> BOOLEAN
    - :name         -> KEYWORD (value is "name")
    - 12, -3.5, 1e9 -> NUMBER (value is the literal text)
    - anything else -> SYMBOL
"""

from __future__ import annotations

import re
from typing import Iterator

from lispi.errors import LispiSyntaxError
from lispi.reader.tokens import EOF_TOKEN, Token, TokenType


TOKEN_RE = re.compile(
    r"\s*(?:"
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<quote>')"  # '
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbracket>\[)"  # [
    r"|(?P<rbracket>\])"  # ]
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r'|(?P<atom>[^\s()\[\]\'";]+)'  # numbers, booleans, keywords, symbols
    r")",
    re.DOTALL,
)

NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    '"': '"',
}

_DELIMITERS = {
    "quote": TokenType.QUOTE,
    "lparen": TokenType.LPAREN,
    "rparen": TokenType.RPAREN,
    "lbracket": TokenType.LBRACKET,
    "rbracket": TokenType.RBRACKET,
}


def _unescape(body: str) -> str:
    out = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\" and i + 1 < len(body):
            nxt = body[i + 1]
            out.append(ESCAPES.get(nxt, nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def classify_atom(text: str) -> Token:
    if NUMBER_RE.fullmatch(text):
        return Token(TokenType.NUMBER, text)
    if text in ("true", "false"):
        return Token(TokenType.BOOLEAN, text)
    if text.startswith(":") and len(text) > 1:
        return Token(TokenType.KEYWORD, text[1:])
    return Token(TokenType.SYMBOL, text)


def lex(source: str) -> Iterator[Token]:
    """Token generator; does not emit the trailing EOF token."""
    pos = 0
    n = len(source)
    while pos < n:
        if source[pos].isspace():
            pos += 1
            continue
        m = TOKEN_RE.match(source, pos)
        if not m or m.end() == pos:
            if source[pos] == '"':
                raise LispiSyntaxError(f"Unterminated string starting at {pos}")
            raise LispiSyntaxError(f"Unexpected char at {pos}: {source[pos]!r}")
        pos = m.end()
        kind = m.lastgroup
        text = m.group(kind)
        if kind == "comment":
            continue
        if kind == "string":
            yield Token(TokenType.STRING, _unescape(text[1:-1]))
        elif kind == "atom":
            yield classify_atom(text)
        else:
            yield Token(_DELIMITERS[kind], text)


def tokenize(source: str) -> list[Token]:
    """All tokens of `source`, terminated by a single EOF token."""
    tokens = list(lex(source))
    tokens.append(EOF_TOKEN)
    return tokens
