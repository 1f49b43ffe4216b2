from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from .spans import Span
from .tokens import Token, TokenKind
from .trivia import Trivia, TriviaKind


class SyntaxKind(str, Enum):
    COMPILATION_UNIT = "CompilationUnit"
    BLOCK = "Block"
    BRACE_BODY = "BraceBody"  # type bodies, initializers, switch bodies

    # Statements
    EMPTY_STATEMENT = "EmptyStatement"
    RETURN_STATEMENT = "ReturnStatement"
    THROW_STATEMENT = "ThrowStatement"
    IF_STATEMENT = "IfStatement"
    FOR_STATEMENT = "ForStatement"
    FOREACH_STATEMENT = "ForEachStatement"
    WHILE_STATEMENT = "WhileStatement"
    DO_STATEMENT = "DoStatement"
    SWITCH_STATEMENT = "SwitchStatement"
    TRY_STATEMENT = "TryStatement"
    USING_STATEMENT = "UsingStatement"
    LOCK_STATEMENT = "LockStatement"
    BREAK_STATEMENT = "BreakStatement"
    CONTINUE_STATEMENT = "ContinueStatement"
    GOTO_STATEMENT = "GotoStatement"
    YIELD_STATEMENT = "YieldStatement"
    LOCAL_DECLARATION_STATEMENT = "LocalDeclarationStatement"
    EXPRESSION_STATEMENT = "ExpressionStatement"
    MEMBER_DECLARATION = "MemberDeclaration"

    # Expressions (the payload of an EXPRESSION_STATEMENT)
    SIMPLE_ASSIGNMENT_EXPRESSION = "SimpleAssignmentExpression"
    ADD_ASSIGNMENT_EXPRESSION = "AddAssignmentExpression"
    SUBTRACT_ASSIGNMENT_EXPRESSION = "SubtractAssignmentExpression"
    COMPOUND_ASSIGNMENT_EXPRESSION = "CompoundAssignmentExpression"
    INVOCATION_EXPRESSION = "InvocationExpression"
    OTHER_EXPRESSION = "OtherExpression"


@dataclass(frozen=True, slots=True, eq=False)
class SyntaxNode:
    """An immutable node covering a contiguous run of tokens.

    Identity semantics: two nodes are equal only if they are the same object.
    """

    kind: SyntaxKind
    tokens: tuple[Token, ...]
    children: tuple["SyntaxNode", ...] = ()
    expression: SyntaxKind | None = None  # only for EXPRESSION_STATEMENT

    @property
    def first_token(self) -> Token:
        return self.tokens[0]

    @property
    def last_token(self) -> Token:
        return self.tokens[-1]

    @property
    def span(self) -> Span:
        """Span of the node's own text, trivia excluded."""
        return Span.between(self.first_token.span, self.last_token.span)

    @property
    def leading_trivia(self) -> tuple[Trivia, ...]:
        return self.first_token.leading

    @property
    def trailing_trivia(self) -> tuple[Trivia, ...]:
        return self.last_token.trailing

    @property
    def open_brace(self) -> Token | None:
        tok = self.first_token
        return tok if tok.kind is TokenKind.LBRACE else None

    @property
    def close_brace(self) -> Token | None:
        tok = self.last_token
        return tok if tok.kind is TokenKind.RBRACE else None

    def descendant_trivia(self) -> Iterator[Trivia]:
        """All trivia under this node, in document order."""
        for tok in self.tokens:
            yield from tok.leading
            yield from tok.trailing

    def walk(self) -> Iterator["SyntaxNode"]:
        """Pre-order traversal, this node first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def text(self) -> str:
        return " ".join(t.lexeme for t in self.tokens)

    def __repr__(self) -> str:
        return f"SyntaxNode({self.kind.value}, {self.span.format()}, children={len(self.children)})"


def statement_kind(node: SyntaxNode) -> SyntaxKind:
    """The kind that matters for statement policies.

    Expression statements are judged by the expression they wrap.
    """
    if node.kind is SyntaxKind.EXPRESSION_STATEMENT and node.expression is not None:
        return node.expression
    return node.kind


_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True, slots=True)
class SyntaxTree:
    file: str
    text: str
    root: SyntaxNode
    _lines: list[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_lines", _LINE_BREAK_RE.split(self.text))

    def line_text(self, line: int) -> str:
        """Text of a 1-based line without its terminator; "" outside the file."""
        if line < 1 or line > len(self._lines):
            return ""
        return self._lines[line - 1]

    def blocks(self) -> Iterator[SyntaxNode]:
        return (n for n in self.root.walk() if n.kind is SyntaxKind.BLOCK)

    def comments(self) -> Iterator[Trivia]:
        return (t for t in self.root.descendant_trivia() if t.kind is TriviaKind.LINE_COMMENT)
