from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .syntax import SyntaxKind


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class RuleDescriptor:
    id: str
    category: str
    title: str
    message: str
    severity: Severity = Severity.WARNING

    def __str__(self) -> str:
        return self.id


COMMENTS = "Comments"

COMMENTED_SEGMENTS = RuleDescriptor(
    id="CommentedSegments",
    category=COMMENTS,
    title="All code segments must be commented",
    message="Code segment has no comment; add a comment directly above it",
)
NEWLINE_BEFORE_COMMENT = RuleDescriptor(
    id="NewlineBeforeComment",
    category=COMMENTS,
    title="Comments must have an empty line before them",
    message="Add an empty line before the comment",
)
SPACES_BEFORE_TRAILING_COMMENT = RuleDescriptor(
    id="SpacesBeforeTrailingComment",
    category=COMMENTS,
    title="Trailing comments must be separated from the code by two spaces",
    message="Use exactly two spaces between the code and the trailing comment",
)
COMMENT_STARTS_WITH_SPACE = RuleDescriptor(
    id="CommentStartsWithSpace",
    category=COMMENTS,
    title="Comments must have a space after the '//'",
    message="Add a space after the comment marker",
)

RULES: tuple[RuleDescriptor, ...] = (
    COMMENTED_SEGMENTS,
    NEWLINE_BEFORE_COMMENT,
    SPACES_BEFORE_TRAILING_COMMENT,
    COMMENT_STARTS_WITH_SPACE,
)

_BY_ID = {r.id: r for r in RULES}


def rule_by_id(rule_id: str) -> RuleDescriptor:
    try:
        return _BY_ID[rule_id]
    except KeyError:
        raise ValueError(f"unknown rule: {rule_id!r}") from None


# Statements that may stand alone at the end of a block without a comment.
# Usually these are the only statement in a small function. Adding a kind here
# changes which blocks need comments at all.
TERMINAL_STATEMENT_KINDS: frozenset[SyntaxKind] = frozenset(
    {
        SyntaxKind.RETURN_STATEMENT,
        SyntaxKind.ADD_ASSIGNMENT_EXPRESSION,
        SyntaxKind.SUBTRACT_ASSIGNMENT_EXPRESSION,
        SyntaxKind.SIMPLE_ASSIGNMENT_EXPRESSION,
        SyntaxKind.INVOCATION_EXPRESSION,
        SyntaxKind.THROW_STATEMENT,
    }
)
