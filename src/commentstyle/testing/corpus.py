from __future__ import annotations

import random
import string


_KEYWORDS = {
    "return",
    "throw",
    "if",
    "else",
    "for",
    "foreach",
    "while",
    "do",
    "switch",
    "try",
    "catch",
    "finally",
    "using",
    "lock",
    "new",
    "var",
    "class",
    "void",
    "int",
    "await",
    "yield",
    "goto",
    "break",
    "continue",
}

_COMMENT_WORDS = ["check", "the", "input", "update", "state", "compute", "result", "and", "bail", "out"]


def _ident(r: random.Random) -> str:
    head = r.choice(string.ascii_letters + "_")
    tail = "".join(r.choice(string.ascii_letters + string.digits + "_") for _ in range(r.randint(0, 8)))
    s = head + tail
    if s in _KEYWORDS:
        return s + "_"
    return s


def _comment(r: random.Random) -> str:
    words = " ".join(r.choice(_COMMENT_WORDS) for _ in range(r.randint(1, 6)))
    # Mostly well-formed; sometimes missing the space after the marker.
    if r.random() < 0.85:
        return f"// {words}"
    return r.choice(["//", "///"]) + words


def generate_sources(*, seed: int, count: int) -> list[str]:
    r = random.Random(seed)
    return [_gen_one(r) for _ in range(count)]


def generate_corpus_files(*, seed: int, count: int) -> list[tuple[str, str]]:
    """Generate a deterministic corpus as a *file set*.

    Returns a list of (relative_path, source); names are `case_000000.cs`, ...
    """
    r = random.Random(seed)
    return [(f"case_{i:06d}.cs", _gen_one(r)) for i in range(count)]


def _gen_one(r: random.Random) -> str:
    lines = ["using System;", "", f"namespace {_ident(r)}", "{", f"    public class {_ident(r)}", "    {"]
    for i in range(r.randint(1, 4)):
        if i:
            lines.append("")
        lines.extend(_gen_method(r, indent=8))
    lines.extend(["    }", "}", ""])
    return "\n".join(lines)


def _gen_method(r: random.Random, *, indent: int) -> list[str]:
    pad = " " * indent
    out = [f"{pad}/// <summary>{_ident(r)}</summary>", f"{pad}public int {_ident(r)}(int {_ident(r)})"]
    if r.random() < 0.1:
        out[-1] += " { return 0; }"
        return out
    out.append(pad + "{")
    out.extend(_gen_body(r, indent=indent + 4, depth=0))
    out.append(pad + "}")
    return out


def _gen_body(r: random.Random, *, indent: int, depth: int) -> list[str]:
    pad = " " * indent
    out: list[str] = []
    segments = r.randint(0, 4)
    for s in range(segments):
        if s and r.random() < 0.85:
            out.append("")
        if r.random() < 0.7:
            out.append(pad + _comment(r))
            if r.random() < 0.2:
                out.append(pad + _comment(r))
            if r.random() < 0.1:
                out.append("")
        for _ in range(r.randint(1, 3)):
            out.extend(_gen_statement(r, indent=indent, depth=depth))
    if r.random() < 0.5:
        if out and r.random() < 0.7:
            out.append("")
        out.append(pad + f"return {_ident(r)};")
    return out


def _gen_statement(r: random.Random, *, indent: int, depth: int) -> list[str]:
    pad = " " * indent
    k = r.random()
    if k < 0.3:
        line = f"{pad}var {_ident(r)} = {r.randint(0, 99)};"
    elif k < 0.55:
        line = f"{pad}{_ident(r)} += {r.randint(0, 9)};"
    elif k < 0.8 or depth >= 2:
        line = f"{pad}{_ident(r)}.{_ident(r)}({_ident(r)});"
    else:
        body = _gen_body(r, indent=indent + 4, depth=depth + 1)
        return [f"{pad}if ({_ident(r)} > {r.randint(0, 9)})", pad + "{", *body, pad + "}"]
    if r.random() < 0.2:
        gap = r.choice([" ", "  ", "   ", "\t"])
        line += f"{gap}// {_ident(r)}"
    return [line]
