from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .errors import SourceError
from .lexer import tokenize
from .syntax import SyntaxKind, SyntaxNode, SyntaxTree
from .tokens import Token, TokenKind


_STATEMENT_KEYWORDS: dict[str, SyntaxKind] = {
    "return": SyntaxKind.RETURN_STATEMENT,
    "throw": SyntaxKind.THROW_STATEMENT,
    "if": SyntaxKind.IF_STATEMENT,
    "for": SyntaxKind.FOR_STATEMENT,
    "foreach": SyntaxKind.FOREACH_STATEMENT,
    "while": SyntaxKind.WHILE_STATEMENT,
    "do": SyntaxKind.DO_STATEMENT,
    "switch": SyntaxKind.SWITCH_STATEMENT,
    "try": SyntaxKind.TRY_STATEMENT,
    "using": SyntaxKind.USING_STATEMENT,
    "lock": SyntaxKind.LOCK_STATEMENT,
    "break": SyntaxKind.BREAK_STATEMENT,
    "continue": SyntaxKind.CONTINUE_STATEMENT,
    "goto": SyntaxKind.GOTO_STATEMENT,
    "yield": SyntaxKind.YIELD_STATEMENT,
}

_ASSIGNMENT_EXPRESSIONS: dict[str, SyntaxKind] = {
    "=": SyntaxKind.SIMPLE_ASSIGNMENT_EXPRESSION,
    "+=": SyntaxKind.ADD_ASSIGNMENT_EXPRESSION,
    "-=": SyntaxKind.SUBTRACT_ASSIGNMENT_EXPRESSION,
}
_COMPOUND_ASSIGNMENT_OPS = frozenset(
    {"*=", "/=", "%=", "&=", "|=", "^=", "<<=", ">>=", ">>>=", "??=", "**="}
)

# Keywords directly followed by a code block: `else {`, `try {`, `get {`, ...
_BLOCK_OPENERS = frozenset(
    {"else", "try", "catch", "finally", "do", "get", "set", "init", "add", "remove",
     "unsafe", "checked", "unchecked"}
)
# Keywords that keep a statement going after a closing brace.
_CONTINUATIONS = frozenset({"else", "catch", "finally"})
# Tokens that may appear in a type name, scanned when looking for `new T(...) {`.
_TYPE_NAME_OPS = frozenset({".", "<", ">", ">>", "?", "::", ","})


def _type_name_token(tok: Token) -> bool:
    if tok.kind in (TokenKind.IDENT, TokenKind.LBRACKET, TokenKind.RBRACKET):
        return True
    return tok.kind is TokenKind.OPERATOR and tok.lexeme in _TYPE_NAME_OPS


@dataclass(slots=True)
class Parser:
    """Groups a token stream into statements and brace groups.

    It knows where statements start and end, which brace groups hold code,
    and enough about a statement's head and top-level operators to name
    its kind. Nothing below statement level is modelled.
    """

    tokens: list[Token]
    i: int = 0

    def peek(self, n: int = 0) -> Token:
        j = min(self.i + n, len(self.tokens) - 1)
        return self.tokens[j]

    def parse_unit(self) -> SyntaxNode:
        children = self.parse_statements()
        tok = self.peek()
        if tok.kind is TokenKind.RBRACE:
            raise SourceError(span=tok.span, message="unmatched closing brace", hint="remove the extra }")
        return SyntaxNode(SyntaxKind.COMPILATION_UNIT, tuple(self.tokens), tuple(children))

    def parse_statements(self) -> list[SyntaxNode]:
        out: list[SyntaxNode] = []
        while self.peek().kind not in (TokenKind.RBRACE, TokenKind.EOF):
            out.append(self.parse_statement())
        return out

    def parse_brace_group(self, kind: SyntaxKind) -> SyntaxNode:
        start = self.i
        open_tok = self.tokens[start]
        self.i += 1
        children = self.parse_statements()
        if self.peek().kind is not TokenKind.RBRACE:
            raise SourceError(span=open_tok.span, message="unclosed brace", hint="add the matching }")
        self.i += 1
        return SyntaxNode(kind, tuple(self.tokens[start:self.i]), tuple(children))

    def parse_statement(self) -> SyntaxNode:
        start = self.i
        head = self.peek()
        if head.kind is TokenKind.LBRACE:
            return self.parse_brace_group(SyntaxKind.BLOCK)
        if head.kind is TokenKind.SEMI:
            self.i += 1
            return SyntaxNode(SyntaxKind.EMPTY_STATEMENT, (head,))

        children: list[SyntaxNode] = []
        depth = 0
        while True:
            tok = self.peek()
            if tok.kind in (TokenKind.EOF, TokenKind.RBRACE):
                # Missing ';' before the end of the enclosing group.
                break
            if tok.kind is TokenKind.LBRACE:
                children.append(self.parse_brace_group(self._group_kind(start)))
                if depth == 0 and self._ends_statement(head):
                    break
                continue
            self.i += 1
            if tok.kind in (TokenKind.LPAREN, TokenKind.LBRACKET):
                depth += 1
            elif tok.kind in (TokenKind.RPAREN, TokenKind.RBRACKET):
                depth = max(depth - 1, 0)
            elif tok.kind is TokenKind.SEMI and depth == 0:
                break

        toks = tuple(self.tokens[start:self.i])
        kind, expression = classify_statement(toks, has_groups=bool(children))
        return SyntaxNode(kind, toks, tuple(children), expression)

    def _group_kind(self, start: int) -> SyntaxKind:
        # self.i is at '{'; start is the statement's first token.
        if self.i == start:
            return SyntaxKind.BLOCK
        prev = self.tokens[self.i - 1]
        if prev.is_op("=>") or prev.is_word(*_BLOCK_OPENERS):
            return SyntaxKind.BLOCK
        if prev.is_op(":") and self.tokens[start].is_word("case", "default"):
            return SyntaxKind.BLOCK
        if self._has_signature_clause(start) and not prev.is_word("new"):
            return SyntaxKind.BLOCK
        if prev.kind is not TokenKind.RPAREN:
            return SyntaxKind.BRACE_BODY

        # `) {`: a code block unless it is `switch (x) {` or `new T(...) {`.
        lparen = self._matching_lparen(self.i - 1, start)
        if lparen <= start:
            return SyntaxKind.BLOCK
        if self.tokens[lparen - 1].is_word("switch"):
            return SyntaxKind.BRACE_BODY
        j = lparen - 1
        while j >= start and _type_name_token(self.tokens[j]):
            if self.tokens[j].is_word("new"):
                return SyntaxKind.BRACE_BODY
            j -= 1
        return SyntaxKind.BLOCK

    def _has_signature_clause(self, start: int) -> bool:
        # `F<T>() where T : new() {`, `void f() throws IOException {`
        depth = 0
        for j in range(start + 1, self.i):
            tok = self.tokens[j]
            if tok.kind in (TokenKind.LPAREN, TokenKind.LBRACKET):
                depth += 1
            elif tok.kind in (TokenKind.RPAREN, TokenKind.RBRACKET):
                depth = max(depth - 1, 0)
            elif depth == 0 and tok.is_word("where", "throws"):
                if self.tokens[j - 1].kind is TokenKind.RPAREN:
                    return True
        return False

    def _matching_lparen(self, rparen: int, start: int) -> int:
        depth = 0
        for j in range(rparen, start - 1, -1):
            kind = self.tokens[j].kind
            if kind is TokenKind.RPAREN:
                depth += 1
            elif kind is TokenKind.LPAREN:
                depth -= 1
                if depth == 0:
                    return j
        return start

    def _ends_statement(self, head: Token) -> bool:
        if head.is_word("do"):
            return False
        nxt = self.peek()
        if nxt.kind in (TokenKind.SEMI, TokenKind.COMMA, TokenKind.RPAREN, TokenKind.RBRACKET):
            return False
        if nxt.is_word(*_CONTINUATIONS):
            return False
        if nxt.kind is TokenKind.OPERATOR:
            # `}.Select(...)`, `} = value;` continue; `++i;` on its own starts a new statement.
            return nxt.lexeme in ("++", "--") and nxt.span.start.line > self.tokens[self.i - 1].span.end.line
        return True


def classify_statement(
    toks: Sequence[Token], *, has_groups: bool = False
) -> tuple[SyntaxKind, SyntaxKind | None]:
    """Name a statement from its tokens. Returns (kind, expression kind)."""
    head = toks[0]
    if head.kind is TokenKind.IDENT and head.lexeme in _STATEMENT_KEYWORDS:
        return _STATEMENT_KEYWORDS[head.lexeme], None

    if toks[-1].kind is not TokenKind.SEMI:
        if has_groups:
            return SyntaxKind.MEMBER_DECLARATION, None
        return SyntaxKind.EXPRESSION_STATEMENT, SyntaxKind.OTHER_EXPRESSION

    body = toks[:-1]
    if not body:
        return SyntaxKind.EMPTY_STATEMENT, None

    k = _top_level_assignment(body)
    if k >= 0:
        if _looks_like_declaration(body[:k]):
            return SyntaxKind.LOCAL_DECLARATION_STATEMENT, None
        op = body[k].lexeme
        if op in _ASSIGNMENT_EXPRESSIONS:
            return SyntaxKind.EXPRESSION_STATEMENT, _ASSIGNMENT_EXPRESSIONS[op]
        return SyntaxKind.EXPRESSION_STATEMENT, SyntaxKind.COMPOUND_ASSIGNMENT_EXPRESSION

    if _looks_like_declaration(body):
        return SyntaxKind.LOCAL_DECLARATION_STATEMENT, None
    if head.is_word("new", "await"):
        return SyntaxKind.EXPRESSION_STATEMENT, SyntaxKind.OTHER_EXPRESSION
    if body[-1].kind is TokenKind.RPAREN:
        lparen = next((i for i, t in enumerate(body) if t.kind is TokenKind.LPAREN), -1)
        if lparen > 0:
            callee = body[:lparen]
            if _looks_like_declaration(callee):
                # `void Run(int x);` is a signature, not a call.
                return SyntaxKind.MEMBER_DECLARATION, None
            if callee[-1].kind is TokenKind.IDENT or callee[-1].is_op(">"):
                return SyntaxKind.EXPRESSION_STATEMENT, SyntaxKind.INVOCATION_EXPRESSION
    return SyntaxKind.EXPRESSION_STATEMENT, SyntaxKind.OTHER_EXPRESSION


def _top_level_assignment(toks: Sequence[Token]) -> int:
    depth = 0
    for i, tok in enumerate(toks):
        if tok.kind in (TokenKind.LPAREN, TokenKind.LBRACKET, TokenKind.LBRACE):
            depth += 1
        elif tok.kind in (TokenKind.RPAREN, TokenKind.RBRACKET, TokenKind.RBRACE):
            depth = max(depth - 1, 0)
        elif depth == 0 and tok.kind is TokenKind.OPERATOR:
            if tok.lexeme in _ASSIGNMENT_EXPRESSIONS or tok.lexeme in _COMPOUND_ASSIGNMENT_OPS:
                return i
    return -1


def _looks_like_declaration(toks: Sequence[Token]) -> bool:
    # `<type> name`: the name is an identifier right after something that ends a type.
    if len(toks) < 2 or toks[-1].kind is not TokenKind.IDENT:
        return False
    prev = toks[-2]
    if prev.kind is TokenKind.IDENT:
        return prev.lexeme not in ("return", "new", "await", "throw")
    if prev.kind is TokenKind.RBRACKET or prev.is_op(">", ">>", "?", "*"):
        return len(toks) >= 3
    return False


def parse_tree(tokens: list[Token], *, file: str, text: str) -> SyntaxTree:
    return SyntaxTree(file=file, text=text, root=Parser(tokens).parse_unit())


def parse_source(src: str, *, file: str = "<memory>") -> SyntaxTree:
    return parse_tree(tokenize(src, file=file), file=file, text=src)
