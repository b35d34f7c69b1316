"""Canonical enums shared across scanning and resolution.

StrEnum values compare equal to their string values (DependencyKind.GIT ==
"git"), so JSON payloads and config files can keep using raw strings.
"""

from __future__ import annotations

import enum


class DependencyKind(enum.StrEnum):
    STDLIB = "stdlib"
    LOCAL = "local"
    GIT = "git"
    PSEUDO = "pseudo"  # cgo's "C"
    UNKNOWN = "unknown"


class FileVerdict(enum.StrEnum):
    INCLUDED = "included"
    EXCLUDED_BY_TAGS = "excluded_by_tags"
    EXCLUDED_BY_FILENAME = "excluded_by_filename"
    INVALID_CONSTRAINT = "invalid_constraint"
    UNREADABLE = "unreadable"


_EXTERNAL_KINDS = frozenset({DependencyKind.GIT, DependencyKind.UNKNOWN})


def is_external(kind: object) -> bool:
    """Return True for kinds that come from outside the project and stdlib."""
    try:
        return DependencyKind(str(kind)) in _EXTERNAL_KINDS
    except ValueError:
        return False


__all__ = ["DependencyKind", "FileVerdict", "is_external"]
