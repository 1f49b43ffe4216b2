from __future__ import annotations

from commentstyle.spans import Position, Span
from commentstyle.trivia import (
    Trivia,
    TriviaKind,
    count_line_breaks_after,
    last_index_of_kind,
    leading_whitespace_run,
    text_width,
)


def _t(kind: TriviaKind, text: str, line: int = 1) -> Trivia:
    pos = Position(offset=0, line=line, column=1)
    return Trivia(kind, text, Span(file="t.cs", start=pos, end=pos))


WS = TriviaKind.WHITESPACE
EOL = TriviaKind.END_OF_LINE
COMMENT = TriviaKind.LINE_COMMENT


def test_empty_input_defaults() -> None:
    assert leading_whitespace_run([]) == ""
    assert count_line_breaks_after([], 0) == 0
    assert last_index_of_kind([], COMMENT) == -1


def test_leading_whitespace_run_stops_at_first_other_item() -> None:
    trivia = [_t(WS, " "), _t(WS, "\t"), _t(COMMENT, "// c"), _t(WS, "   ")]
    assert leading_whitespace_run(trivia) == " \t"
    assert leading_whitespace_run([_t(EOL, "\n"), _t(WS, " ")]) == ""


def test_line_breaks_and_last_comment() -> None:
    trivia = [
        _t(COMMENT, "// a", 1),
        _t(EOL, "\n", 1),
        _t(WS, "    ", 2),
        _t(COMMENT, "// b", 2),
        _t(EOL, "\n", 2),
        _t(EOL, "\n", 3),
        _t(WS, "    ", 4),
    ]
    last = last_index_of_kind(trivia, COMMENT)
    assert last == 3
    assert count_line_breaks_after(trivia, last) == 2
    assert count_line_breaks_after(trivia, 0) == 3
    assert last_index_of_kind(trivia, TriviaKind.OTHER) == -1


def test_text_width_expands_tabs() -> None:
    assert text_width("  ", 4) == 2
    assert text_width("\t", 4) == 4
    assert text_width(" \t", 2) == 3
