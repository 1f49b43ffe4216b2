from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """A concrete source position.

    Offsets are 0-based; line/column are 1-based for user-facing messages.
    """

    offset: int
    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open span [start, end) in a single file."""

    file: str
    start: Position
    end: Position

    @classmethod
    def between(cls, first: "Span", last: "Span") -> "Span":
        """Span from the start of `first` to the end of `last`."""
        return cls(file=first.file, start=first.start, end=last.end)

    @property
    def start_line(self) -> int:
        return self.start.line

    @property
    def end_line(self) -> int:
        return self.end.line

    def format(self) -> str:
        return f"{self.file}:{self.start.line}:{self.start.column}"
