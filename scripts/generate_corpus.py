from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path

from commentstyle import RULES, lint_files
from commentstyle.testing import generate_corpus_files


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="generate_corpus",
        description="Write a generated C# corpus and report which rules it exercises",
    )
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--count", type=int, default=200)
    ap.add_argument("--out", default="tests/fixtures/generated_corpus")
    ap.add_argument("--ext", choices=[".cs", ".java"], default=".cs", help="Suffix of the written files")
    ap.add_argument("--jobs", type=int, default=4)
    ap.add_argument(
        "--require-all-rules",
        action="store_true",
        help="Exit 1 unless every rule fires at least once on the corpus",
    )
    args = ap.parse_args(argv)

    out_dir = Path(args.out).resolve() / f"seed_{args.seed}_count_{args.count}"
    out_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for rel, src in generate_corpus_files(seed=args.seed, count=args.count):
        path = (out_dir / rel).with_suffix(args.ext)
        path.write_text(src, encoding="utf-8")
        written.append(path)

    res = lint_files(written, jobs=args.jobs)
    hits = Counter(d.rule.id for d in res.diagnostics)
    flagged = {d.file for d in res.diagnostics}

    print(str(out_dir))
    print(f"{len(written)} file(s), {len(flagged)} with diagnostics")
    for rule in RULES:
        print(f"  {rule.id:<28} {hits[rule.id]:>6}")

    missing = [r.id for r in RULES if not hits[r.id]]
    if args.require_all_rules and missing:
        print(f"never fired: {', '.join(missing)}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
