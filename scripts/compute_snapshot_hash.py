from __future__ import annotations

import argparse
import hashlib

from commentstyle import lint_source
from commentstyle.testing import generate_sources


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="compute_snapshot_hash")
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--count", type=int, default=500)
    args = ap.parse_args(argv)

    h = hashlib.sha256()
    for i, src in enumerate(generate_sources(seed=args.seed, count=args.count)):
        file = f"snapshot:{args.seed}:{i}.cs"
        first = [d.format() for d in lint_source(src, file=file)]
        second = [d.format() for d in lint_source(src, file=file)]
        if first != second:
            raise SystemExit(f"non-deterministic diagnostics at case {i}")
        for line in first:
            h.update(line.encode("utf-8"))
            h.update(b"\n")
        h.update(b"---\n")

    print(h.hexdigest())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
