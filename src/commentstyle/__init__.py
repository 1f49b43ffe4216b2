from __future__ import annotations

from .analyzer import AnalysisOptions, analyze_block, analyze_comments, analyze_tree
from .api import LintResult, is_generated_code, lint_file, lint_files, lint_source, lint_tree
from .checks import Segment, partition_segments
from .diagnostics import Diagnostic, DiagnosticCollector, Reporter
from .errors import SourceError
from .parser import parse_source
from .rules import RULES, RuleDescriptor, Severity
from .syntax import SyntaxKind, SyntaxNode, SyntaxTree

__all__ = [
    "AnalysisOptions",
    "Diagnostic",
    "DiagnosticCollector",
    "LintResult",
    "RULES",
    "Reporter",
    "RuleDescriptor",
    "Segment",
    "Severity",
    "SourceError",
    "SyntaxKind",
    "SyntaxNode",
    "SyntaxTree",
    "analyze_block",
    "analyze_comments",
    "analyze_tree",
    "is_generated_code",
    "lint_file",
    "lint_files",
    "lint_source",
    "lint_tree",
    "parse_source",
    "partition_segments",
]
