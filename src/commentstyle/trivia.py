"""
Trivia model and the small classifier helpers the checks are built on.

Trivia are the non-executable pieces of source attached to tokens:
whitespace runs, line breaks, comments. The helpers here never fail; empty
input yields the neutral value ("" / 0 / -1).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .spans import Span


class TriviaKind(str, Enum):
    WHITESPACE = "whitespace"
    END_OF_LINE = "end-of-line"
    LINE_COMMENT = "line-comment"
    OTHER = "other"  # block comments, preprocessor lines


@dataclass(frozen=True, slots=True)
class Trivia:
    kind: TriviaKind
    text: str
    span: Span

    @property
    def line(self) -> int:
        return self.span.start.line

    def __repr__(self) -> str:
        return f"Trivia({self.kind.name}, {self.text!r}, {self.span.format()})"


def leading_whitespace_run(trivia: Sequence[Trivia]) -> str:
    """Concatenated text of the whitespace items at the front of `trivia`."""
    out: list[str] = []
    for item in trivia:
        if item.kind is not TriviaKind.WHITESPACE:
            break
        out.append(item.text)
    return "".join(out)


def count_line_breaks_after(trivia: Sequence[Trivia], index: int) -> int:
    """Number of END_OF_LINE items from `index` to the end."""
    return sum(1 for item in trivia[max(index, 0):] if item.kind is TriviaKind.END_OF_LINE)


def last_index_of_kind(trivia: Sequence[Trivia], kind: TriviaKind) -> int:
    for i in range(len(trivia) - 1, -1, -1):
        if trivia[i].kind is kind:
            return i
    return -1


def text_width(text: str, tab_width: int) -> int:
    """Rendered width of a whitespace run; a tab counts as `tab_width` columns."""
    return sum(tab_width if ch == "\t" else 1 for ch in text)
