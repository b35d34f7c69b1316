"""Implicit build constraints carried by Go file names."""

from __future__ import annotations

from collections.abc import Set
from pathlib import PurePosixPath

from gopherdeps.golang.tags import KNOWN_ARCH, KNOWN_OS

GO_SUFFIX = ".go"
TEST_SUFFIX = "_test.go"


def is_go_file(filename: str) -> bool:
    return filename.endswith(GO_SUFFIX)


def is_test_file(filename: str) -> bool:
    return PurePosixPath(filename.replace("\\", "/")).name.endswith(TEST_SUFFIX)


def filename_constraint_ok(filename: str, tags: Set[str]) -> bool:
    """Check ``name_GOOS.go``, ``name_GOARCH.go`` and ``name_GOOS_GOARCH.go``.

    Everything before the first underscore is the free-form part of the name,
    so ``linux.go`` carries no constraint while ``x_linux.go`` does.  The name
    is cut at its first dot, so ``x_linux.pb.go`` is constrained too.
    """
    name = PurePosixPath(filename.replace("\\", "/")).name.split(".", 1)[0]
    if name.endswith("_test"):
        name = name[: -len("_test")]
    underscore = name.find("_")
    if underscore < 0:
        return True
    parts = name[underscore:].split("_")

    if len(parts) >= 2 and parts[-2] in KNOWN_OS and parts[-1] in KNOWN_ARCH:
        return parts[-2] in tags and parts[-1] in tags
    if parts[-1] in KNOWN_OS or parts[-1] in KNOWN_ARCH:
        return parts[-1] in tags
    return True


__all__ = ["filename_constraint_ok", "is_go_file", "is_test_file"]
