from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from .rules import RuleDescriptor
from .spans import Span


# The sink handed to every check. Checks call it; they never keep results.
Reporter = Callable[[RuleDescriptor, Span], None]


@dataclass(frozen=True, slots=True)
class Diagnostic:
    rule: RuleDescriptor
    span: Span

    @property
    def file(self) -> str:
        return self.span.file

    @property
    def line(self) -> int:
        return self.span.start.line

    @property
    def column(self) -> int:
        return self.span.start.column

    def sort_key(self) -> tuple[str, int, str]:
        return (self.span.file, self.span.start.offset, self.rule.id)

    def format(self) -> str:
        return f"{self.span.format()}: [{self.rule.id}] {self.rule.message}"

    def to_dict(self) -> dict[str, object]:
        return {
            "rule": self.rule.id,
            "category": self.rule.category,
            "severity": self.rule.severity.value,
            "message": self.rule.message,
            "file": self.span.file,
            "start": {"line": self.span.start.line, "column": self.span.start.column},
            "end": {"line": self.span.end.line, "column": self.span.end.column},
        }


@dataclass(slots=True)
class DiagnosticCollector:
    """A Reporter that keeps what it is given."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def __call__(self, rule: RuleDescriptor, span: Span) -> None:
        self.diagnostics.append(Diagnostic(rule=rule, span=span))

    def sorted(self) -> list[Diagnostic]:
        return sorted(self.diagnostics, key=Diagnostic.sort_key)
