"""Map an import path to the repository root that provides it."""

from __future__ import annotations

import re
from dataclasses import dataclass

from gopherdeps.core.enums import DependencyKind

# host -> number of leading path elements forming the repository root
_GIT_HOSTS = {
    "github.com": 3,
    "bitbucket.org": 3,
    "gitlab.com": 3,
}
_GOPKG_IN_RE = re.compile(r"^gopkg\.in/(?:[\w-]+/)?[\w.-]+?\.v\d+(?=/|$)")
_GOLANG_X_RE = re.compile(r"^golang\.org/x/([\w.-]+)(?=/|$)")


@dataclass(frozen=True)
class ImportTarget:
    path: str
    root: str
    kind: DependencyKind
    url: str | None = None


def _is_relative(path: str) -> bool:
    return path in (".", "..") or path.startswith(("./", "../"))


def _within(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def classify_import(path: str, *, module_path: str | None = None) -> ImportTarget:
    """Classify *path* as stdlib, local, Git-hosted or unknown.

    Follows the go tool's own heuristic: an import path whose first element
    has no dot belongs to the standard library.
    """
    if path == "C":
        return ImportTarget(path, path, DependencyKind.PSEUDO)
    if _is_relative(path):
        return ImportTarget(path, path, DependencyKind.LOCAL)
    if module_path and _within(path, module_path):
        return ImportTarget(path, module_path, DependencyKind.LOCAL)

    parts = path.split("/")
    if "." not in parts[0]:
        return ImportTarget(path, path, DependencyKind.STDLIB)

    width = _GIT_HOSTS.get(parts[0])
    if width is not None:
        if len(parts) < width:
            return ImportTarget(path, path, DependencyKind.UNKNOWN)
        root = "/".join(parts[:width])
        return ImportTarget(path, root, DependencyKind.GIT, f"https://{root}.git")

    if match := _GOLANG_X_RE.match(path):
        return ImportTarget(
            path,
            match.group(0),
            DependencyKind.GIT,
            f"https://go.googlesource.com/{match.group(1)}",
        )

    if match := _GOPKG_IN_RE.match(path):
        root = match.group(0)
        return ImportTarget(path, root, DependencyKind.GIT, f"https://{root}")

    for index, part in enumerate(parts[1:], start=1):
        if part.endswith(".git"):
            root = "/".join(parts[: index + 1])
            return ImportTarget(path, root, DependencyKind.GIT, f"https://{root}")

    return ImportTarget(path, path, DependencyKind.UNKNOWN)


__all__ = ["ImportTarget", "classify_import"]
