from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from .analyzer import AnalysisOptions, analyze_tree
from .diagnostics import Diagnostic, DiagnosticCollector
from .parser import parse_source
from .syntax import SyntaxTree


DEFAULT_EXTENSIONS: tuple[str, ...] = (".cs",)

# `Form1.Designer.cs`, `App.g.cs`, `App.g.i.cs`, `Model.generated.cs`
_GENERATED_STEM_SUFFIXES = (".designer", ".generated", ".g", ".g.i")
_GENERATED_NAME_PREFIX = "temporarygeneratedfile_"
_GENERATED_MARKERS = ("<auto-generated", "<autogenerated")


@dataclass(frozen=True, slots=True)
class LintResult:
    files: tuple[str, ...]
    diagnostics: tuple[Diagnostic, ...]
    generated: tuple[str, ...] = ()
    unreadable: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def for_file(self, file: str) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.file == file]


def is_generated_code(path: str | Path, src: str | None = None) -> bool:
    """True for tool-generated sources, by file name or by an auto-generated header.

    The header is any comment before the first line of code that mentions
    `<auto-generated>` (or the older `<autogenerated>`).
    """
    name = Path(path).name.lower()
    if name.startswith(_GENERATED_NAME_PREFIX):
        return True
    stem = name.rpartition(".")[0] if "." in name else name
    if stem.endswith(_GENERATED_STEM_SUFFIXES):
        return True
    if src is None:
        return False

    in_block_comment = False
    for line in src.splitlines():
        s = line.strip()
        if in_block_comment or s.startswith(("//", "/*")):
            if any(m in s.lower() for m in _GENERATED_MARKERS):
                return True
            if s.startswith("/*"):
                in_block_comment = True
            if in_block_comment and "*/" in s:
                in_block_comment = False
            continue
        if s == "" or s.startswith("#"):
            continue
        return False
    return False


def lint_tree(tree: SyntaxTree, *, options: AnalysisOptions | None = None) -> list[Diagnostic]:
    sink = DiagnosticCollector()
    analyze_tree(tree, sink, options=options)
    return sink.sorted()


def lint_source(
    src: str,
    *,
    file: str = "<memory>",
    options: AnalysisOptions | None = None,
) -> list[Diagnostic]:
    return lint_tree(parse_source(src, file=file), options=options)


def read_source(path: str | Path) -> str:
    # A UTF-8 byte order mark is not part of the text.
    return Path(path).read_text(encoding="utf-8-sig")


def lint_file(path: str | Path, *, options: AnalysisOptions | None = None) -> list[Diagnostic]:
    p = Path(path).expanduser().resolve()
    diagnostics = lint_source(read_source(p), file=str(p), options=options)
    logger.debug("{}: {} diagnostic(s)", p, len(diagnostics))
    return diagnostics


def collect_files(
    paths: Iterable[str | Path],
    *,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    include_generated: bool = False,
) -> list[Path]:
    """Expand directories (recursively, by extension); files are kept as given.

    Files whose names mark them as generated are dropped unless
    `include_generated` is set.
    """
    exts = tuple(extensions)
    out: list[Path] = []
    seen: set[Path] = set()
    for raw in paths:
        p = Path(raw).expanduser().resolve()
        if p.is_dir():
            found = sorted(c for c in p.rglob("*") if c.is_file() and c.suffix in exts)
            if not found:
                logger.warning("no {} files under {}", "/".join(exts), p)
        elif p.exists():
            found = [p]
        else:
            raise FileNotFoundError(f"no such file or directory: {raw}")
        for f in found:
            if f in seen:
                continue
            seen.add(f)
            if not include_generated and is_generated_code(f):
                logger.debug("{}: generated code, skipped", f)
                continue
            out.append(f)
    return out


def lint_files(
    paths: Iterable[str | Path],
    *,
    options: AnalysisOptions | None = None,
    jobs: int = 1,
    include_generated: bool = False,
) -> LintResult:
    """Lint every file; with jobs > 1 files are analysed concurrently.

    Analyses share nothing but the rule constants, so results do not depend
    on `jobs`; they come back sorted by file, offset, rule. A file that
    cannot be read or decoded is logged and listed in `unreadable`; one with
    an auto-generated header is listed in `generated`. Neither is linted.
    """
    files = [Path(p).expanduser().resolve() for p in paths]
    logger.debug("linting {} file(s) with {} job(s)", len(files), jobs)

    def run(f: Path) -> tuple[str, list[Diagnostic]]:
        try:
            src = read_source(f)
        except (UnicodeDecodeError, OSError) as e:
            logger.warning("{}: cannot read ({})", f, e)
            return "unreadable", []
        if not include_generated and is_generated_code(f, src):
            logger.debug("{}: generated code, skipped", f)
            return "generated", []
        diagnostics = lint_source(src, file=str(f), options=options)
        logger.debug("{}: {} diagnostic(s)", f, len(diagnostics))
        return "linted", diagnostics

    if jobs > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            outcomes = list(pool.map(run, files))
    else:
        outcomes = [run(f) for f in files]

    by_status: dict[str, list[str]] = {"linted": [], "generated": [], "unreadable": []}
    diagnostics: list[Diagnostic] = []
    for f, (status, ds) in zip(files, outcomes):
        by_status[status].append(str(f))
        diagnostics.extend(ds)
    diagnostics.sort(key=Diagnostic.sort_key)
    return LintResult(
        files=tuple(by_status["linted"]),
        diagnostics=tuple(diagnostics),
        generated=tuple(by_status["generated"]),
        unreadable=tuple(by_status["unreadable"]),
    )
