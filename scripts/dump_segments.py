from __future__ import annotations

import sys

from commentstyle.checks import partition_segments
from commentstyle.parser import parse_source


def main() -> None:
    path = sys.argv[1]
    with open(path, encoding="utf-8-sig") as fh:
        tree = parse_source(fh.read(), file=path)
    for block in tree.blocks():
        print(f"block {block.span.format()}")
        for i, seg in enumerate(partition_segments(block.children)):
            kinds = ", ".join(n.kind.value for n in seg.nodes)
            print(f"  {i:>3}: lines {seg.span.start_line}-{seg.span.end_line} [{kinds}]")


if __name__ == "__main__":
    main()
