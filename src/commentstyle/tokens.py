from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .spans import Span
from .trivia import Trivia


class TokenKind(str, Enum):
    # Identifiers and literals (keywords are identifiers; the parser looks at lexemes)
    IDENT = "IDENT"
    NUMBER = "NUMBER"
    STRING = "STRING"
    CHAR = "CHAR"

    # Grouping / separators
    LBRACE = "{"
    RBRACE = "}"
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    SEMI = ";"
    COMMA = ","

    # Everything else: `=`, `+=`, `=>`, `.`, `<`, ...
    OPERATOR = "OPERATOR"

    EOF = "EOF"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    lexeme: str
    span: Span
    leading: tuple[Trivia, ...] = ()
    trailing: tuple[Trivia, ...] = ()

    def is_word(self, *words: str) -> bool:
        return self.kind is TokenKind.IDENT and self.lexeme in words

    def is_op(self, *ops: str) -> bool:
        return self.kind is TokenKind.OPERATOR and self.lexeme in ops

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.lexeme!r}, {self.span.format()})"
