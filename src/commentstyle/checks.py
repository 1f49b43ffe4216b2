"""
The comment checks, each a pure function over nodes/trivia and a Reporter.

- **Prefix**: `check_comment_prefix` (a space after `//` or `///`)
- **Spacing**: `check_leading_comment_space`, `check_trailing_comment_space`
- **Segments**: `partition_segments` + `require_comment` / `check_segments`
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from .diagnostics import Reporter
from .rules import (
    COMMENT_STARTS_WITH_SPACE,
    COMMENTED_SEGMENTS,
    NEWLINE_BEFORE_COMMENT,
    SPACES_BEFORE_TRAILING_COMMENT,
    TERMINAL_STATEMENT_KINDS,
)
from .spans import Span
from .syntax import SyntaxNode, SyntaxTree, statement_kind
from .trivia import (
    Trivia,
    TriviaKind,
    count_line_breaks_after,
    last_index_of_kind,
    leading_whitespace_run,
    text_width,
)


# Both plain `//` and documentation `///` comments.
_SPACE_AFTER_MARKER_RE = re.compile(r"///?(?: |$)")

TRAILING_COMMENT_GAP = 2


# ---------------------------------------------------------------------------
# Comment prefix
# ---------------------------------------------------------------------------


def check_comment_prefix(comment: Trivia, report: Reporter) -> None:
    text = comment.text
    if not text.startswith("//"):
        # Not a comment we know how to judge.
        return
    if _SPACE_AFTER_MARKER_RE.match(text):
        return
    report(COMMENT_STARTS_WITH_SPACE, comment.span)


# ---------------------------------------------------------------------------
# Spacing around comments
# ---------------------------------------------------------------------------


def check_leading_comment_space(tree: SyntaxTree, node: SyntaxNode, report: Reporter) -> None:
    """A new comment group needs an empty line (or a lone `{`) above it.

    Comments on consecutive lines form one group; only the first is checked.
    """
    comments = [t for t in node.leading_trivia if t.kind is TriviaKind.LINE_COMMENT]
    previous_line: int | None = None
    for comment in comments:
        line = comment.line
        if previous_line is not None and line == previous_line + 1:
            previous_line = line
            continue
        previous_line = line

        above = tree.line_text(line - 1).strip()
        if above == "" or above == "{":
            continue
        report(NEWLINE_BEFORE_COMMENT, comment.span)


def check_trailing_comment_space(node: SyntaxNode, report: Reporter, *, tab_width: int) -> None:
    trivia = node.trailing_trivia
    whitespace = leading_whitespace_run(trivia)
    cursor = _whitespace_prefix_len(trivia)
    if cursor >= len(trivia) or trivia[cursor].kind is not TriviaKind.LINE_COMMENT:
        return
    if text_width(whitespace, tab_width) == TRAILING_COMMENT_GAP:
        return
    report(SPACES_BEFORE_TRAILING_COMMENT, trivia[cursor].span)


def _whitespace_prefix_len(trivia: Sequence[Trivia]) -> int:
    n = 0
    while n < len(trivia) and trivia[n].kind is TriviaKind.WHITESPACE:
        n += 1
    return n


# ---------------------------------------------------------------------------
# Segments
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Segment:
    """A run of line-adjacent sibling statements, commented as one unit."""

    nodes: tuple[SyntaxNode, ...]

    @property
    def first(self) -> SyntaxNode:
        return self.nodes[0]

    @property
    def last(self) -> SyntaxNode:
        return self.nodes[-1]

    @property
    def span(self) -> Span:
        return Span.between(self.first.span, self.last.span)

    def __len__(self) -> int:
        return len(self.nodes)


def partition_segments(children: Sequence[SyntaxNode]) -> list[Segment]:
    """Split a block's statements wherever an empty line separates two of them.

    A statement joins the current segment when it starts no more than one
    line after the segment's last end line.
    """
    segments: list[Segment] = []
    current: list[SyntaxNode] = []
    last_end_line = 0
    for node in children:
        span = node.span
        if current and span.start_line > last_end_line + 1:
            segments.append(Segment(tuple(current)))
            current = []
        current.append(node)
        last_end_line = span.end_line
    if current:
        segments.append(Segment(tuple(current)))
    return segments


def has_attached_comment(node: SyntaxNode) -> bool:
    """True if the last leading line comment has no empty line below it."""
    trivia = node.leading_trivia
    last = last_index_of_kind(trivia, TriviaKind.LINE_COMMENT)
    if last < 0:
        return False
    return count_line_breaks_after(trivia, last) <= 1


def is_terminal_exception(segment: Segment) -> bool:
    """A lone allow-listed statement may end a block without a comment."""
    return len(segment) == 1 and statement_kind(segment.first) in TERMINAL_STATEMENT_KINDS


def require_comment(segment: Segment, report: Reporter) -> None:
    if has_attached_comment(segment.first):
        return
    report(COMMENTED_SEGMENTS, segment.span)


def check_segments(block: SyntaxNode, report: Reporter) -> None:
    open_brace, close_brace = block.open_brace, block.close_brace
    if open_brace is not None and close_brace is not None:
        if open_brace.span.start.line == close_brace.span.end.line:
            return

    segments = partition_segments(block.children)
    for i, segment in enumerate(segments):
        if i == len(segments) - 1 and is_terminal_exception(segment):
            continue
        require_comment(segment, report)
