from __future__ import annotations

import re
from dataclasses import dataclass, field

from .errors import SourceError
from .spans import Position, Span
from .tokens import Token, TokenKind
from .trivia import Trivia, TriviaKind


_IDENT_RE = re.compile(r"[@$]?[^\W\d][\w$]*|\$[\w$]*")
_NUMBER_RE = re.compile(
    r"(?:"
    r"0[xXbB][0-9A-Fa-f_]+"
    r"|(?:[0-9][0-9_]*(?:\.[0-9][0-9_]*)?|\.[0-9][0-9_]*)(?:[eE][+-]?[0-9]+)?"
    r")[A-Za-z]*"
)
_WHITESPACE = " \t\f\v"

# Longest first.
_OPERATORS: tuple[str, ...] = (
    ">>>=",
    ">>=",
    "<<=",
    "??=",
    "**=",
    "...",
    ">>>",
    "===",
    "!==",
    "=>",
    "==",
    "!=",
    "<=",
    ">=",
    "&&",
    "||",
    "++",
    "--",
    "+=",
    "-=",
    "*=",
    "/=",
    "%=",
    "&=",
    "|=",
    "^=",
    "->",
    "::",
    "??",
    "?.",
    "<<",
    "**",
)

_PUNCTUATION = {
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    ";": TokenKind.SEMI,
    ",": TokenKind.COMMA,
}


@dataclass(slots=True)
class _Cursor:
    file: str
    src: str
    i: int = 0
    line: int = 1
    col: int = 1

    def eof(self) -> bool:
        return self.i >= len(self.src)

    def peek(self, n: int = 0) -> str:
        j = self.i + n
        if j >= len(self.src):
            return ""
        return self.src[j]

    def startswith(self, s: str) -> bool:
        return self.src.startswith(s, self.i)

    def advance(self, n: int = 1) -> None:
        for _ in range(n):
            if self.eof():
                return
            ch = self.src[self.i]
            self.i += 1
            # "\r\n" counts once, on the "\n".
            if ch == "\n" or (ch == "\r" and self.peek() != "\n"):
                self.line += 1
                self.col = 1
            else:
                self.col += 1

    def pos(self) -> Position:
        return Position(offset=self.i, line=self.line, column=self.col)


@dataclass(slots=True)
class _Attacher:
    """Distributes trivia over tokens.

    A token owns the trivia that follows it up to and including the first
    line break; whatever comes after that belongs to the next token.
    """

    tokens: list[Token] = field(default_factory=list)
    leading: list[Trivia] = field(default_factory=list)
    trailing: list[Trivia] = field(default_factory=list)
    open_token: tuple[TokenKind, str, Span, tuple[Trivia, ...]] | None = None

    def trivia(self, item: Trivia) -> None:
        if self.open_token is None:
            self.leading.append(item)
            return
        self.trailing.append(item)
        if item.kind is TriviaKind.END_OF_LINE:
            self._close()

    def token(self, kind: TokenKind, lexeme: str, span: Span) -> None:
        self._close()
        self.open_token = (kind, lexeme, span, tuple(self.leading))
        self.leading = []

    def finish(self, eof_span: Span) -> list[Token]:
        self._close()
        self.tokens.append(Token(TokenKind.EOF, "", eof_span, leading=tuple(self.leading)))
        self.leading = []
        return self.tokens

    def _close(self) -> None:
        if self.open_token is None:
            return
        kind, lexeme, span, leading = self.open_token
        self.tokens.append(Token(kind, lexeme, span, leading=leading, trailing=tuple(self.trailing)))
        self.open_token = None
        self.trailing = []


def tokenize(src: str, *, file: str = "<memory>") -> list[Token]:
    """Split C-family source into tokens carrying their leading/trailing trivia."""
    cur = _Cursor(file=file, src=src)
    out = _Attacher()
    line_has_code = False

    def make_span(start: Position, end: Position) -> Span:
        return Span(file=file, start=start, end=end)

    def error_at(start: Position, msg: str, hint: str | None = None) -> SourceError:
        end = cur.pos()
        if end.offset < start.offset:
            end = start
        return SourceError(span=make_span(start, end), message=msg, hint=hint)

    def emit_trivia(kind: TriviaKind, start: Position) -> None:
        out.trivia(Trivia(kind, src[start.offset:cur.i], make_span(start, cur.pos())))

    def emit_token(kind: TokenKind, start: Position) -> None:
        out.token(kind, src[start.offset:cur.i], make_span(start, cur.pos()))

    def skip_quoted(start: Position, quote: str, *, multiline: bool, verbatim: bool) -> None:
        while not cur.eof():
            c = cur.peek()
            if c == quote:
                if verbatim and cur.peek(1) == quote:
                    cur.advance(2)
                    continue
                cur.advance()
                return
            if c in "\r\n" and not multiline:
                break
            if c == "\\" and not verbatim:
                cur.advance(2)
                continue
            cur.advance()
        raise error_at(start, "unterminated literal", hint=f"close the {quote} quote")

    while not cur.eof():
        ch = cur.peek()
        start = cur.pos()

        # line breaks
        if ch in "\r\n":
            cur.advance(2 if cur.startswith("\r\n") else 1)
            emit_trivia(TriviaKind.END_OF_LINE, start)
            line_has_code = False
            continue

        # whitespace run
        if ch in _WHITESPACE:
            while not cur.eof() and cur.peek() in _WHITESPACE:
                cur.advance()
            emit_trivia(TriviaKind.WHITESPACE, start)
            continue

        # line comment //, up to (not including) the line break
        if cur.startswith("//"):
            while not cur.eof() and cur.peek() not in "\r\n":
                cur.advance()
            emit_trivia(TriviaKind.LINE_COMMENT, start)
            continue

        # block comment /* ... */
        if cur.startswith("/*"):
            cur.advance(2)
            while not cur.eof():
                if cur.startswith("*/"):
                    cur.advance(2)
                    break
                cur.advance()
            else:
                raise error_at(start, "unterminated block comment", hint="add closing */")
            emit_trivia(TriviaKind.OTHER, start)
            line_has_code = True
            continue

        # preprocessor directive: '#' as the first thing on a line, line break included
        if ch == "#" and not line_has_code:
            while not cur.eof() and cur.peek() not in "\r\n":
                cur.advance()
            if not cur.eof():
                cur.advance(2 if cur.startswith("\r\n") else 1)
            emit_trivia(TriviaKind.OTHER, start)
            continue

        line_has_code = True

        # verbatim strings: @"..." $@"..." @$"..."
        prefix = next((p for p in ('$@"', '@$"', '@"') if cur.startswith(p)), None)
        if prefix is not None:
            cur.advance(len(prefix))
            skip_quoted(start, '"', multiline=True, verbatim=True)
            emit_token(TokenKind.STRING, start)
            continue

        # strings: "..." $"..." `...`
        if ch == '"' or (ch == "$" and cur.peek(1) == '"'):
            cur.advance(2 if ch == "$" else 1)
            skip_quoted(start, '"', multiline=False, verbatim=False)
            emit_token(TokenKind.STRING, start)
            continue
        if ch == "`":
            cur.advance()
            skip_quoted(start, "`", multiline=True, verbatim=False)
            emit_token(TokenKind.STRING, start)
            continue

        # char literal (or single-quoted string)
        if ch == "'":
            cur.advance()
            skip_quoted(start, "'", multiline=False, verbatim=False)
            emit_token(TokenKind.CHAR, start)
            continue

        m = _NUMBER_RE.match(src, cur.i)
        if m:
            cur.advance(len(m.group(0)))
            emit_token(TokenKind.NUMBER, start)
            continue

        m = _IDENT_RE.match(src, cur.i)
        if m:
            cur.advance(len(m.group(0)))
            emit_token(TokenKind.IDENT, start)
            continue

        k = _PUNCTUATION.get(ch)
        if k is not None:
            cur.advance()
            emit_token(k, start)
            continue

        op = next((o for o in _OPERATORS if cur.startswith(o)), ch)
        cur.advance(len(op))
        emit_token(TokenKind.OPERATOR, start)

    eof_pos = cur.pos()
    return out.finish(make_span(eof_pos, eof_pos))
