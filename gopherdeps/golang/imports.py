"""Go import scanning: locate the package clause and collect import paths.

Best-effort.  Third-party trees contain generated, transient and
outright broken files, so anything that does not look like a package clause
followed by import declarations collapses to "no imports" instead of raising.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass

from gopherdeps.golang.lexer import (
    IDENT,
    PUNCT,
    RAW_STRING,
    STRING,
    Token,
    significant_tokens,
    string_literal_value,
)

GO_KEYWORDS = frozenset(
    {
        "break", "case", "chan", "const", "continue", "default", "defer",
        "else", "fallthrough", "for", "func", "go", "goto", "if", "import",
        "interface", "map", "package", "range", "return", "select", "struct",
        "switch", "type", "var",
    }
)
_PATH_KINDS = frozenset({STRING, RAW_STRING})


class ScanStatus(enum.StrEnum):
    OK = "ok"
    NO_STRUCTURE = "no_structure"


@dataclass(frozen=True)
class ImportScan:
    """Outcome of scanning one file.

    ``NO_STRUCTURE`` means no package clause was recognised or an import
    declaration was malformed; ``imports`` is then always empty.
    """

    status: ScanStatus
    package: str | None = None
    package_offset: int | None = None
    imports: tuple[str, ...] = ()

    @property
    def found(self) -> bool:
        return self.status is ScanStatus.OK


NO_STRUCTURE = ImportScan(ScanStatus.NO_STRUCTURE)


class _Cursor:
    """One-token lookahead over a lazy token stream."""

    def __init__(self, tokens: Iterator[Token]) -> None:
        self._tokens = tokens
        self._peeked: Token | None = None

    def peek(self) -> Token | None:
        if self._peeked is None:
            self._peeked = next(self._tokens, None)
        return self._peeked

    def accept(self, kind: str, text: str | None = None) -> Token | None:
        token = self.peek()
        if token is None or token.kind != kind:
            return None
        if text is not None and token.text != text:
            return None
        self._peeked = None
        return token

    def skip_semicolons(self) -> None:
        while self.accept(PUNCT, ";"):
            pass


def _import_spec(cursor: _Cursor) -> str | None:
    """Consume ``[name | . | _] path`` and return the path, or None if malformed."""
    alias = cursor.accept(IDENT)
    if alias is not None and alias.text in GO_KEYWORDS:
        return None
    if alias is None:
        cursor.accept(PUNCT, ".")
    token = cursor.peek()
    if token is None or token.kind not in _PATH_KINDS or not token.closed:
        return None
    cursor.accept(token.kind)
    return string_literal_value(token)


def _package_clause(cursor: _Cursor) -> tuple[Token, Token] | None:
    keyword = cursor.accept(IDENT, "package")
    if keyword is None:
        return None
    name = cursor.accept(IDENT)
    if name is None or name.text in GO_KEYWORDS:
        return None
    return keyword, name


def scan_imports(source: str) -> ImportScan:
    """Scan *source* for its package clause and import declarations."""
    cursor = _Cursor(significant_tokens(source))
    clause = _package_clause(cursor)
    if clause is None:
        return NO_STRUCTURE
    keyword, name = clause
    cursor.skip_semicolons()

    imports: list[str] = []
    while cursor.accept(IDENT, "import"):
        if cursor.accept(PUNCT, "("):
            while not cursor.accept(PUNCT, ")"):
                path = _import_spec(cursor)
                if path is None:
                    return NO_STRUCTURE
                imports.append(path)
                cursor.skip_semicolons()
        else:
            path = _import_spec(cursor)
            if path is None:
                return NO_STRUCTURE
            imports.append(path)
        cursor.skip_semicolons()

    return ImportScan(
        ScanStatus.OK,
        package=name.text,
        package_offset=keyword.start,
        imports=tuple(imports),
    )


def find_package_clause(source: str) -> int | None:
    """Offset of the genuine ``package`` keyword, ignoring comments."""
    clause = _package_clause(_Cursor(significant_tokens(source)))
    if clause is None:
        return None
    return clause[0].start


def extract(source: str) -> list[str]:
    """Import paths declared by *source*, in order, duplicates kept.

    Returns an empty list for anything that does not scan as Go.
    """
    return list(scan_imports(source).imports)


__all__ = [
    "GO_KEYWORDS",
    "ImportScan",
    "NO_STRUCTURE",
    "ScanStatus",
    "extract",
    "find_package_clause",
    "scan_imports",
]
