from __future__ import annotations

from dataclasses import dataclass

from .checks import (
    check_comment_prefix,
    check_leading_comment_space,
    check_segments,
    check_trailing_comment_space,
)
from .diagnostics import Reporter
from .syntax import SyntaxKind, SyntaxNode, SyntaxTree


DEFAULT_TAB_WIDTH = 4


@dataclass(frozen=True, slots=True)
class AnalysisOptions:
    tab_width: int = DEFAULT_TAB_WIDTH

    def __post_init__(self) -> None:
        if self.tab_width < 1:
            raise ValueError(f"tab_width must be positive, got {self.tab_width}")


def analyze_block(
    tree: SyntaxTree,
    block: SyntaxNode,
    report: Reporter,
    *,
    options: AnalysisOptions | None = None,
) -> None:
    """Run the per-block checks over one block's direct statements."""
    if block.kind is not SyntaxKind.BLOCK:
        raise ValueError(f"analyze_block() expects a block, got {block.kind.value}")
    opts = options or AnalysisOptions()

    for child in block.children:
        if child.leading_trivia:
            check_leading_comment_space(tree, child, report)
        if child.trailing_trivia:
            check_trailing_comment_space(child, report, tab_width=opts.tab_width)

    check_segments(block, report)


def analyze_comments(tree: SyntaxTree, report: Reporter) -> None:
    """Check the prefix of every line comment in the tree."""
    for comment in tree.comments():
        check_comment_prefix(comment, report)


def analyze_tree(tree: SyntaxTree, report: Reporter, *, options: AnalysisOptions | None = None) -> None:
    for block in tree.blocks():
        analyze_block(tree, block, report, options=options)
    analyze_comments(tree, report)
