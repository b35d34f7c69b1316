"""Build constraint evaluation for Go source files.

Constraint lines are only honoured in the leading comment block, before the
``package`` clause.  ``// +build`` lines combine with a three-level grammar:

* lines are ANDed together,
* space-separated groups within a line are ORed,
* comma-separated terms within a group are ANDed,

and a term is ``tag`` or ``!tag``.  ``//go:build`` lines carry a full boolean
expression (``&&``, ``||``, ``!``, parentheses) and are ANDed with the
``+build`` lines like any other directive line.

Unrecognised directive shapes are treated as unconstrained.  The single fatal
case is a term negated more than once (``!!tag`` on either kind of line),
which raises :class:`InvalidBuildConstraintError` so callers can tell
"excluded by tags" apart from "constraints are broken".
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Set
from dataclasses import dataclass

from gopherdeps.golang.lexer import (
    BLOCK_COMMENT,
    COMMENT,
    GO_BUILD_RE,
    NEWLINE,
    PLUS_BUILD_RE,
    tokenize,
)

logger = logging.getLogger(__name__)

PLUS_BUILD = "+build"
GO_BUILD = "go:build"

_TAG = r"[\w.]+"
_TERM_RE = re.compile(rf"(!*)({_TAG})")
_GROUP_RE = re.compile(rf"!*{_TAG}(?:,!*{_TAG})*")
_GO_BUILD_TOKEN_RE = re.compile(rf"\s*(&&|\|\||!|\(|\)|{_TAG})")


class InvalidBuildConstraintError(ValueError):
    """Raised for a build constraint term negated more than once."""

    def __init__(self, term: str, line: int | None = None) -> None:
        self.term = term
        self.line = line
        where = f" on line {line}" if line is not None else ""
        super().__init__(f"Invalid build constraint term {term!r}{where}: multiple negation")


class Expr:
    """Boolean expression over build tags."""

    def evaluate(self, tags: Set[str]) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class Tag(Expr):
    name: str

    def evaluate(self, tags: Set[str]) -> bool:
        return self.name in tags

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Not(Expr):
    operand: Expr

    def evaluate(self, tags: Set[str]) -> bool:
        return not self.operand.evaluate(tags)

    def __str__(self) -> str:
        if isinstance(self.operand, Tag):
            return f"!{self.operand}"
        return f"!({self.operand})"


@dataclass(frozen=True)
class And(Expr):
    operands: tuple[Expr, ...]

    def evaluate(self, tags: Set[str]) -> bool:
        return all(op.evaluate(tags) for op in self.operands)

    def __str__(self) -> str:
        return " && ".join(_wrap(op, Or) for op in self.operands)


@dataclass(frozen=True)
class Or(Expr):
    operands: tuple[Expr, ...]

    def evaluate(self, tags: Set[str]) -> bool:
        return any(op.evaluate(tags) for op in self.operands)

    def __str__(self) -> str:
        return " || ".join(_wrap(op, And) for op in self.operands)


class _Always(Expr):
    def evaluate(self, tags: Set[str]) -> bool:
        return True

    def __str__(self) -> str:
        return "true"

    def __repr__(self) -> str:
        return "TRUE"


TRUE = _Always()


def _wrap(expr: Expr, needs_parens: type) -> str:
    text = str(expr)
    return f"({text})" if isinstance(expr, needs_parens) else text


def all_of(exprs: Iterable[Expr]) -> Expr:
    items = tuple(exprs)
    if not items:
        return TRUE
    return items[0] if len(items) == 1 else And(items)


def any_of(exprs: Iterable[Expr]) -> Expr:
    items = tuple(exprs)
    if not items:
        return TRUE
    return items[0] if len(items) == 1 else Or(items)


@dataclass(frozen=True)
class Directive:
    kind: str
    text: str
    line: int


def find_directives(source: str) -> list[Directive]:
    """Directive comment lines in the leading comment block of *source*.

    The block ends at the first token that is not a comment, normally the
    ``package`` keyword.  Directives further down are ordinary comments.
    """
    directives: list[Directive] = []
    for token in tokenize(source):
        if token.kind in (NEWLINE, BLOCK_COMMENT):
            continue
        if token.kind != COMMENT:
            break
        if PLUS_BUILD_RE.match(token.text):
            directives.append(Directive(PLUS_BUILD, token.text, token.line))
        elif GO_BUILD_RE.match(token.text):
            directives.append(Directive(GO_BUILD, token.text, token.line))
    return directives


def _parse_term(term: str, line: int | None) -> Expr:
    match = _TERM_RE.fullmatch(term)
    bangs, name = match.groups()
    if len(bangs) > 1:
        raise InvalidBuildConstraintError(term, line)
    tag = Tag(name)
    return Not(tag) if bangs else tag


def parse_plus_build_line(text: str, line: int | None = None) -> Expr | None:
    """Parse one ``// +build`` comment; None when it carries no usable groups.

    Parsing stops at the first field that is not a group of terms, so trailing
    comment text on the directive is ignored.
    """
    match = PLUS_BUILD_RE.match(text.strip())
    if match is None:
        return None
    groups: list[Expr] = []
    for field in text.strip()[match.end() :].split():
        if not _GROUP_RE.fullmatch(field):
            break
        groups.append(all_of(_parse_term(term, line) for term in field.split(",")))
    if not groups:
        return None
    return any_of(groups)


class _GoBuildSyntaxError(ValueError):
    pass


class _GoBuildParser:
    """Recursive-descent parser for ``//go:build`` expressions."""

    def __init__(self, text: str, line: int | None = None) -> None:
        self.tokens = self._lex(text)
        self.pos = 0
        self.line = line

    @staticmethod
    def _lex(text: str) -> list[str]:
        tokens: list[str] = []
        pos = 0
        text = text.rstrip()
        while pos < len(text):
            match = _GO_BUILD_TOKEN_RE.match(text, pos)
            if match is None:
                raise _GoBuildSyntaxError(f"unexpected input at {text[pos:]!r}")
            tokens.append(match.group(1))
            pos = match.end()
        return tokens

    def _peek(self) -> str | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _take(self) -> str:
        token = self._peek()
        if token is None:
            raise _GoBuildSyntaxError("unexpected end of expression")
        self.pos += 1
        return token

    def parse(self) -> Expr:
        expr = self._or()
        if self._peek() is not None:
            raise _GoBuildSyntaxError(f"unexpected token {self._peek()!r}")
        return expr

    def _or(self) -> Expr:
        operands = [self._and()]
        while self._peek() == "||":
            self._take()
            operands.append(self._and())
        return any_of(operands)

    def _and(self) -> Expr:
        operands = [self._unary()]
        while self._peek() == "&&":
            self._take()
            operands.append(self._unary())
        return all_of(operands)

    def _unary(self) -> Expr:
        token = self._take()
        if token == "!":
            if self._peek() == "!":
                operand = self.tokens[self.pos + 1] if self.pos + 1 < len(self.tokens) else ""
                raise InvalidBuildConstraintError(f"!!{operand}", self.line)
            return Not(self._unary())
        if token == "(":
            expr = self._or()
            if self._take() != ")":
                raise _GoBuildSyntaxError("missing closing parenthesis")
            return expr
        if token in ("&&", "||", ")"):
            raise _GoBuildSyntaxError(f"unexpected operator {token!r}")
        return Tag(token)


def parse_go_build_expr(text: str, line: int | None = None) -> Expr | None:
    """Parse a ``//go:build`` comment; None if it is not a valid expression.

    A doubled ``!`` raises InvalidBuildConstraintError like ``+build`` does.
    """
    match = GO_BUILD_RE.match(text.strip())
    if match is None:
        return None
    body = text.strip()[match.end() :]
    for marker in ("//", "/*"):
        cut = body.find(marker)
        if cut != -1:
            body = body[:cut]
    if not body.strip():
        return None
    try:
        return _GoBuildParser(body, line).parse()
    except _GoBuildSyntaxError as exc:
        logger.debug("Ignoring malformed //go:build line %r: %s", text, exc)
        return None


def parse_constraints(source: str) -> Expr:
    """Combined constraint expression of *source* (``TRUE`` when unconstrained)."""
    lines: list[Expr] = []
    for directive in find_directives(source):
        if directive.kind == PLUS_BUILD:
            expr = parse_plus_build_line(directive.text, directive.line)
        else:
            expr = parse_go_build_expr(directive.text, directive.line)
        if expr is not None:
            lines.append(expr)
    return all_of(lines)


def evaluate(source: str, active_tags: Iterable[str]) -> bool:
    """Whether *source* is included when *active_tags* are set.

    Raises InvalidBuildConstraintError for ``!!tag`` terms.
    """
    tags = active_tags if isinstance(active_tags, Set) else frozenset(active_tags)
    return parse_constraints(source).evaluate(tags)


__all__ = [
    "And",
    "Directive",
    "Expr",
    "GO_BUILD",
    "InvalidBuildConstraintError",
    "Not",
    "Or",
    "PLUS_BUILD",
    "TRUE",
    "Tag",
    "all_of",
    "any_of",
    "evaluate",
    "find_directives",
    "parse_constraints",
    "parse_go_build_expr",
    "parse_plus_build_line",
]
