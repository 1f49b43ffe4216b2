from __future__ import annotations

import pytest

from commentstyle import SourceError, SyntaxKind, parse_source
from commentstyle.syntax import statement_kind


def _body(stmts: str):
    tree = parse_source("void F()\n{\n" + stmts + "\n}\n")
    (block,) = list(tree.blocks())[:1]
    return block


@pytest.mark.parametrize(
    ("src", "kind"),
    [
        ("return 1;", SyntaxKind.RETURN_STATEMENT),
        ("throw new Exception();", SyntaxKind.THROW_STATEMENT),
        ("x = 1;", SyntaxKind.SIMPLE_ASSIGNMENT_EXPRESSION),
        ("this.x = 1;", SyntaxKind.SIMPLE_ASSIGNMENT_EXPRESSION),
        ("a[i] = 2;", SyntaxKind.SIMPLE_ASSIGNMENT_EXPRESSION),
        ("x += 1;", SyntaxKind.ADD_ASSIGNMENT_EXPRESSION),
        ("x -= 1;", SyntaxKind.SUBTRACT_ASSIGNMENT_EXPRESSION),
        ("x *= 2;", SyntaxKind.COMPOUND_ASSIGNMENT_EXPRESSION),
        ("Foo(1);", SyntaxKind.INVOCATION_EXPRESSION),
        ("a.b.Foo(x);", SyntaxKind.INVOCATION_EXPRESSION),
        ("Foo<T>(x);", SyntaxKind.INVOCATION_EXPRESSION),
        ("var x = 1;", SyntaxKind.LOCAL_DECLARATION_STATEMENT),
        ("int x;", SyntaxKind.LOCAL_DECLARATION_STATEMENT),
        ("List<int> xs = new List<int>();", SyntaxKind.LOCAL_DECLARATION_STATEMENT),
        ("x++;", SyntaxKind.OTHER_EXPRESSION),
        ("await Foo();", SyntaxKind.OTHER_EXPRESSION),
        ("if (x) { }", SyntaxKind.IF_STATEMENT),
        ("foreach (var x in xs) { }", SyntaxKind.FOREACH_STATEMENT),
        ("while (x) Foo();", SyntaxKind.WHILE_STATEMENT),
        ("break;", SyntaxKind.BREAK_STATEMENT),
    ],
)
def test_statement_kinds(src: str, kind: SyntaxKind) -> None:
    block = _body(src)
    assert len(block.children) == 1
    assert statement_kind(block.children[0]) is kind


def test_if_else_is_one_statement_with_two_blocks() -> None:
    block = _body("if (x)\n{\n  a();\n}\nelse\n{\n  b();\n}\nc();")
    assert [c.kind for c in block.children] == [SyntaxKind.IF_STATEMENT, SyntaxKind.EXPRESSION_STATEMENT]
    if_stmt = block.children[0]
    assert [c.kind for c in if_stmt.children] == [SyntaxKind.BLOCK, SyntaxKind.BLOCK]


def test_try_catch_finally_and_do_while() -> None:
    block = _body("try { a(); } catch (E e) { b(); } finally { c(); }\ndo { d(); } while (x);")
    kinds = [c.kind for c in block.children]
    assert kinds == [SyntaxKind.TRY_STATEMENT, SyntaxKind.DO_STATEMENT]
    assert len(block.children[0].children) == 3
    assert all(c.kind is SyntaxKind.BLOCK for c in block.children[0].children)


def test_initializers_are_not_blocks() -> None:
    block = _body("var p = new Point { X = 1, Y = 2 };\nvar q = new Point(1) { Y = 2 };")
    assert len(block.children) == 2
    for stmt in block.children:
        assert stmt.kind is SyntaxKind.LOCAL_DECLARATION_STATEMENT
        assert [c.kind for c in stmt.children] == [SyntaxKind.BRACE_BODY]


def test_lambda_body_is_a_block() -> None:
    block = _body("Run(() => { a(); });")
    (stmt,) = block.children
    assert statement_kind(stmt) is SyntaxKind.INVOCATION_EXPRESSION
    assert [c.kind for c in stmt.children] == [SyntaxKind.BLOCK]


def test_switch_body_is_not_a_block() -> None:
    block = _body("switch (x) { case 1: a(); break; }")
    (stmt,) = block.children
    assert stmt.kind is SyntaxKind.SWITCH_STATEMENT
    assert [c.kind for c in stmt.children] == [SyntaxKind.BRACE_BODY]


def test_type_bodies_hold_method_blocks() -> None:
    src = "namespace N\n{\n  class A : B\n  {\n    int X { get; set; } = 5;\n    void F() { a(); }\n    void G()\n    {\n    }\n  }\n}\n"
    tree = parse_source(src)
    top = tree.root.children
    assert [c.kind for c in top] == [SyntaxKind.MEMBER_DECLARATION]
    blocks = list(tree.blocks())
    assert [b.span.start.line for b in blocks] == [6, 8]


@pytest.mark.parametrize(
    "header",
    [
        "void F<T>() where T : class",
        "void F<T>() where T : new()",
        "void F<T>() where T : IFoo<T>",
        "void F<T, U>(T t) where T : struct where U : IList<T>",
        "void f() throws IOException",
        "public void f(int x) throws IOException, InterruptedException",
    ],
)
def test_method_body_after_constraint_clause_is_a_block(header: str) -> None:
    tree = parse_source(header + "\n{\n    a();\n}\n")
    (decl,) = tree.root.children
    assert [c.kind for c in decl.children] == [SyntaxKind.BLOCK]


def test_constrained_type_body_is_not_a_block() -> None:
    tree = parse_source("class A<T> where T : new()\n{\n    void F() { a(); }\n}\n")
    (decl,) = tree.root.children
    assert [c.kind for c in decl.children] == [SyntaxKind.BRACE_BODY]
    assert [b.span.start.line for b in tree.blocks()] == [3]


def test_bare_nested_block_is_a_statement() -> None:
    block = _body("{\n  a();\n}\nb();")
    assert [c.kind for c in block.children] == [SyntaxKind.BLOCK, SyntaxKind.EXPRESSION_STATEMENT]


def test_missing_semicolon_before_brace_still_parses() -> None:
    block = _body("a()")
    assert len(block.children) == 1


def test_unclosed_brace_is_error() -> None:
    with pytest.raises(SourceError) as e:
        parse_source("void F() {\n  a();\n", file="x.cs")
    assert "unclosed brace" in str(e.value)
    assert "x.cs:1:10" in str(e.value)


def test_unmatched_closing_brace_is_error() -> None:
    with pytest.raises(SourceError) as e:
        parse_source("a();\n}\n", file="x.cs")
    assert "unmatched closing brace" in str(e.value)


def test_line_text_lookup() -> None:
    tree = parse_source("a();\r\n  b();\n")
    assert tree.line_text(1) == "a();"
    assert tree.line_text(2) == "  b();"
    assert tree.line_text(0) == ""
    assert tree.line_text(99) == ""
