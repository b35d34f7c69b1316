"""User-declared Git dependency notations (url + commit/tag pins)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from gopherdeps.core.enums import DependencyKind

NEWEST_COMMIT = "NEWEST_COMMIT"

URL_KEY = "url"
COMMIT_KEY = "commit"
BRANCH_KEY = "branch"  # recorded, not acted on
TAG_KEY = "tag"
NOTATION_KEYS = frozenset({URL_KEY, COMMIT_KEY, BRANCH_KEY, TAG_KEY})


class NotationError(ValueError):
    """Raised when a dependency notation cannot be understood."""


@dataclass
class GitNotationDependency:
    """How a user pinned a Git-hosted dependency.

    ``commit`` doubles as the version.  When neither a commit nor a tag is
    given the dependency tracks ``NEWEST_COMMIT``.
    """

    name: str
    url: str | None = None
    commit: str | None = None
    tag: str | None = None
    branch: str | None = None

    @property
    def version(self) -> str | None:
        return self.commit

    def set_version(self, version: str) -> None:
        self.commit = version

    @property
    def resolver_kind(self) -> DependencyKind:
        return DependencyKind.GIT

    def to_dict(self) -> dict[str, str]:
        payload = {
            URL_KEY: self.url,
            COMMIT_KEY: self.commit,
            TAG_KEY: self.tag,
            BRANCH_KEY: self.branch,
        }
        return {key: value for key, value in payload.items() if value is not None}

    @classmethod
    def from_notation(
        cls, name: str, notation: str | Mapping[str, object] | None
    ) -> GitNotationDependency:
        """Build from ``"<commit>"`` or ``{"url", "commit", "tag", "branch"}``."""
        if not name or not name.strip():
            raise NotationError("Dependency notation needs a non-empty name")
        if notation is None:
            return cls(name=name, commit=NEWEST_COMMIT)
        if isinstance(notation, str):
            commit = notation.strip()
            return cls(name=name, commit=commit or NEWEST_COMMIT)
        if not isinstance(notation, Mapping):
            raise NotationError(
                f"Notation for {name!r} must be a string or mapping, "
                f"got {type(notation).__name__}"
            )

        unknown = sorted(set(notation) - NOTATION_KEYS)
        if unknown:
            raise NotationError(f"Unknown notation keys for {name!r}: {', '.join(unknown)}")
        values: dict[str, str | None] = {}
        for key in NOTATION_KEYS:
            raw = notation.get(key)
            if raw is not None and not isinstance(raw, str):
                raise NotationError(f"{key!r} for {name!r} must be a string")
            values[key] = raw.strip() if raw else None

        dependency = cls(
            name=name,
            url=values[URL_KEY],
            commit=values[COMMIT_KEY],
            tag=values[TAG_KEY],
            branch=values[BRANCH_KEY],
        )
        if dependency.commit is None and dependency.tag is None:
            dependency.set_version(NEWEST_COMMIT)
        return dependency


def parse_notation_string(text: str) -> GitNotationDependency:
    """Parse ``github.com/owner/repo@commit`` (the ``@commit`` part is optional)."""
    name, _, commit = text.strip().partition("@")
    return GitNotationDependency.from_notation(name, commit or None)


def load_pins(raw: Mapping[str, object] | None) -> dict[str, GitNotationDependency]:
    """Turn the config ``dependencies`` mapping into notation objects."""
    return {
        name: GitNotationDependency.from_notation(name, notation)
        for name, notation in (raw or {}).items()
    }


__all__ = [
    "BRANCH_KEY",
    "COMMIT_KEY",
    "GitNotationDependency",
    "NEWEST_COMMIT",
    "NotationError",
    "TAG_KEY",
    "URL_KEY",
    "load_pins",
    "parse_notation_string",
]
