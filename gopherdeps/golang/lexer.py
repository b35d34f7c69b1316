"""Go tokenizer: just enough of the language to find package/import clauses.

The tokenizer never raises.  Unterminated strings and comments simply run to
the end of the line (interpreted strings) or the end of input (everything
else), so arbitrary or half-written files still produce a token stream.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

COMMENT = "comment"
BLOCK_COMMENT = "block_comment"
IDENT = "ident"
STRING = "string"
RAW_STRING = "raw_string"
RUNE = "rune"
PUNCT = "punct"
NEWLINE = "newline"
OTHER = "other"

_TRIVIA = frozenset({COMMENT, BLOCK_COMMENT, NEWLINE})
_WHITESPACE = frozenset(" \t\r\f\v\ufeff")
_PUNCTUATION = frozenset("()[]{};,.=:+-*/%&|^<>!~")

_IDENT_RE = re.compile(r"[^\W\d]\w*")
_NUMBER_RE = re.compile(r"\d[\w.]*")

# Directive prefixes, matched against the raw text of a line comment.
PLUS_BUILD_RE = re.compile(r"//\s*\+build(?=\s|$)")
GO_BUILD_RE = re.compile(r"//go:build(?=\s|$)")

_PACKAGE_LINE_RE = re.compile(
    r"^[ \t]*package[ \t]+[^\W\d]\w*[ \t]*(?:;|//.*|/\*.*)?$", re.MULTILINE
)


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    start: int
    end: int
    line: int
    closed: bool = True


def _scan_interpreted(source: str, start: int, quote: str) -> tuple[int, bool]:
    """Return (end, closed) for a "..." or '...' literal starting at *start*."""
    i = start + 1
    length = len(source)
    while i < length:
        ch = source[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1, True
        if ch == "\n":
            return i, False
        i += 1
    return length, False


def _scan_delimited(source: str, start: int, opener: str, closer: str) -> tuple[int, bool]:
    close = source.find(closer, start + len(opener))
    if close == -1:
        return len(source), False
    return close + len(closer), True


def _extend_directive_comment(source: str, start: int, end: int) -> int:
    """Let a ``+build`` line comment swallow a ``/*`` it opens but never closes.

    ``// +build !appengine /* note`` followed by ``more note */`` on the next
    line is one comment as far as directive parsing is concerned.  The
    extension never reaches past the package clause: a ``/*`` left open there
    is plain comment text.
    """
    text = source[start:end]
    if not PLUS_BUILD_RE.match(text):
        return end
    last_open = text.rfind("/*")
    if last_open == -1 or "*/" in text[last_open + 2 :]:
        return end
    close = source.find("*/", end)
    if close == -1:
        return end
    package = _PACKAGE_LINE_RE.search(source, end, close)
    return end if package is not None else close + 2


def tokenize(source: str) -> Iterator[Token]:
    """Yield tokens for *source* lazily, comments and newlines included."""
    i = 0
    line = 1
    length = len(source)
    while i < length:
        ch = source[i]
        nxt = source[i + 1] if i + 1 < length else ""

        if ch == "\n":
            yield Token(NEWLINE, ch, i, i + 1, line)
            line += 1
            i += 1
            continue
        if ch in _WHITESPACE:
            i += 1
            continue

        closed = True
        if ch == "/" and nxt == "/":
            end = source.find("\n", i)
            if end == -1:
                end = length
            end = _extend_directive_comment(source, i, end)
            kind = COMMENT
        elif ch == "/" and nxt == "*":
            end, closed = _scan_delimited(source, i, "/*", "*/")
            kind = BLOCK_COMMENT
        elif ch == '"':
            end, closed = _scan_interpreted(source, i, '"')
            kind = STRING
        elif ch == "'":
            end, closed = _scan_interpreted(source, i, "'")
            kind = RUNE
        elif ch == "`":
            end, closed = _scan_delimited(source, i, "`", "`")
            kind = RAW_STRING
        elif match := _IDENT_RE.match(source, i):
            end = match.end()
            kind = IDENT
        elif match := _NUMBER_RE.match(source, i):
            end = match.end()
            kind = OTHER
        else:
            end = i + 1
            kind = PUNCT if ch in _PUNCTUATION else OTHER

        text = source[i:end]
        yield Token(kind, text, i, end, line, closed)
        line += text.count("\n")
        i = end


def significant_tokens(source: str) -> Iterator[Token]:
    """Yield tokens with comments and newlines dropped."""
    return (token for token in tokenize(source) if token.kind not in _TRIVIA)


def string_literal_value(token: Token) -> str:
    """Literal text between the delimiters; escapes are left as written."""
    if token.closed:
        return token.text[1:-1]
    return token.text[1:]


__all__ = [
    "BLOCK_COMMENT",
    "COMMENT",
    "GO_BUILD_RE",
    "IDENT",
    "NEWLINE",
    "OTHER",
    "PLUS_BUILD_RE",
    "PUNCT",
    "RAW_STRING",
    "RUNE",
    "STRING",
    "Token",
    "significant_tokens",
    "string_literal_value",
    "tokenize",
]
