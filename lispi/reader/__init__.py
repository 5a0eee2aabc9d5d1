from lispi.reader.lexer import lex, tokenize
from lispi.reader.parser import Parser, parse
from lispi.reader.tokens import Token, TokenType


def read(source: str):
    """Parse a single expression from source text."""
    return Parser(tokenize(source)).parse()


def read_all(source: str):
    """Parse every top-level expression in source text."""
    return Parser(tokenize(source)).parse_all()


__all__ = ["lex", "tokenize", "Parser", "parse", "read", "read_all", "Token", "TokenType"]
