from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    NUMBER = auto()
    STRING = auto()
    BOOLEAN = auto()
    SYMBOL = auto()
    KEYWORD = auto()
    LPAREN = auto()
    RPAREN = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    QUOTE = auto()
    EOF = auto()


@dataclass(frozen=True, slots=True)
class Token:
    type: TokenType
    value: str = ""

    def __str__(self) -> str:
        if self.type is TokenType.EOF:
            return "end of input"
        return f"{self.type.name.lower()} {self.value!r}"


EOF_TOKEN = Token(TokenType.EOF)
