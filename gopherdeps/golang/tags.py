"""Build tag context: the set of tags considered satisfied for one run."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

DEFAULT_GOOS = "linux"
DEFAULT_GOARCH = "amd64"
DEFAULT_GO_VERSION = "1.22"
DEFAULT_COMPILER = "gc"

KNOWN_OS = frozenset(
    {
        "aix", "android", "darwin", "dragonfly", "freebsd", "hurd", "illumos",
        "ios", "js", "linux", "nacl", "netbsd", "openbsd", "plan9", "solaris",
        "wasip1", "windows", "zos",
    }
)
UNIX_OS = frozenset(
    {
        "aix", "android", "darwin", "dragonfly", "freebsd", "hurd", "illumos",
        "ios", "linux", "netbsd", "openbsd", "solaris",
    }
)
KNOWN_ARCH = frozenset(
    {
        "386", "amd64", "amd64p32", "arm", "arm64", "arm64be", "armbe",
        "loong64", "mips", "mips64", "mips64le", "mips64p32", "mips64p32le",
        "mipsle", "ppc", "ppc64", "ppc64le", "riscv", "riscv64", "s390",
        "s390x", "sparc", "sparc64", "wasm",
    }
)

# GOOS values that also satisfy another OS tag.
_IMPLIED_OS = {"android": "linux", "illumos": "solaris", "ios": "darwin"}

_GO_VERSION_RE = re.compile(r"^(?:go)?1\.(\d+)(?:\.\d+)?$")


def release_tags(go_version: str) -> list[str]:
    """``go1.1`` .. ``go1.N`` for a Go version such as ``1.22`` or ``go1.21.4``."""
    match = _GO_VERSION_RE.match(go_version.strip())
    if match is None:
        raise ValueError(f"Unrecognized Go version: {go_version!r}")
    minor = int(match.group(1))
    return [f"go1.{n}" for n in range(1, minor + 1)]


def build_tag_context(
    *,
    goos: str = DEFAULT_GOOS,
    goarch: str = DEFAULT_GOARCH,
    go_version: str = DEFAULT_GO_VERSION,
    cgo: bool = True,
    compiler: str = DEFAULT_COMPILER,
    extra_tags: Iterable[str] = (),
) -> frozenset[str]:
    """Tags satisfied when building for *goos*/*goarch* with *go_version*."""
    tags = {goos, goarch, compiler, *release_tags(go_version)}
    implied = _IMPLIED_OS.get(goos)
    if implied:
        tags.add(implied)
    if goos in UNIX_OS:
        tags.add("unix")
    if cgo:
        tags.add("cgo")
    tags.update(tag.strip() for tag in extra_tags if tag and tag.strip())
    return frozenset(tags)


def tag_context_from_config(
    config: Mapping[str, object],
    *,
    goos: str | None = None,
    goarch: str | None = None,
    extra_tags: Iterable[str] = (),
) -> frozenset[str]:
    """Build the tag context from project config plus command-line overrides."""
    configured = [str(tag) for tag in config.get("build_tags", []) or []]
    return build_tag_context(
        goos=goos or str(config.get("goos") or DEFAULT_GOOS),
        goarch=goarch or str(config.get("goarch") or DEFAULT_GOARCH),
        go_version=str(config.get("go_version") or DEFAULT_GO_VERSION),
        cgo=bool(config.get("cgo_enabled", True)),
        extra_tags=[*configured, *extra_tags],
    )


def split_tag_list(raw: str | None) -> list[str]:
    """Split a ``--tags`` value; Go accepts both commas and spaces."""
    if not raw:
        return []
    return [tag for tag in re.split(r"[,\s]+", raw) if tag]


__all__ = [
    "DEFAULT_GOARCH",
    "DEFAULT_GOOS",
    "DEFAULT_GO_VERSION",
    "KNOWN_ARCH",
    "KNOWN_OS",
    "UNIX_OS",
    "build_tag_context",
    "release_tags",
    "split_tag_list",
    "tag_context_from_config",
]
