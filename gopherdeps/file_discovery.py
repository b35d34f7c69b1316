"""File discovery: Go source finding, exclusion matching, and file reading."""

from __future__ import annotations

import fnmatch
import os
import tempfile
from pathlib import Path

from gopherdeps.core._internal.text_utils import get_project_root
from gopherdeps.core.runtime_state import current_runtime_context
from gopherdeps.golang.filenames import is_go_file, is_test_file

__all__ = [
    "DEFAULT_EXCLUSIONS",
    "disable_file_cache",
    "enable_file_cache",
    "find_go_files",
    "get_exclusions",
    "is_file_cache_enabled",
    "matches_exclusion",
    "read_file_text",
    "rel",
    "resolve_path",
    "safe_write_text",
    "set_exclusions",
]


# Directories the go tool never builds from, plus VCS/tooling noise.
DEFAULT_EXCLUSIONS = frozenset(
    {
        "vendor",
        "testdata",
        "node_modules",
        ".git",
        ".hg",
        ".svn",
        ".gopherdeps",
    }
)


def set_exclusions(patterns: list[str]):
    """Set global exclusion patterns (called once from CLI at startup)."""
    runtime = current_runtime_context()
    runtime.exclusions = tuple(patterns)
    runtime.source_file_cache.clear()


def get_exclusions() -> tuple[str, ...]:
    """Return current extra exclusion patterns."""
    return current_runtime_context().exclusions


def matches_exclusion(rel_path: str, exclusion: str) -> bool:
    """Check if a relative path matches an exclusion pattern (path-component aware).

    ``internal`` matches ``internal/x.go`` and ``pkg/internal/y.go`` but not
    ``internalize.go``; ``cmd/tool`` matches as a directory prefix; ``*`` globs
    are matched against single path components (``*_gen.go``).
    """
    parts = Path(rel_path).parts
    if exclusion in parts:
        return True
    if "*" in exclusion and any(fnmatch.fnmatch(part, exclusion) for part in parts):
        return True
    if "/" in exclusion or os.sep in exclusion:
        normalized = exclusion.rstrip("/").rstrip(os.sep)
        return rel_path.startswith(normalized + "/") or rel_path.startswith(
            normalized + os.sep
        )
    return False


def _normalize_path_separators(path: str) -> str:
    return path.replace("\\", "/")


def _safe_relpath(path: str | Path, start: str | Path) -> str:
    try:
        return os.path.relpath(str(path), str(start))
    except ValueError:
        return str(Path(path).resolve())


def rel(path: str) -> str:
    root = get_project_root()
    resolved = Path(path).resolve()
    try:
        return _normalize_path_separators(str(resolved.relative_to(root)))
    except ValueError:
        return _normalize_path_separators(_safe_relpath(resolved, root))


def resolve_path(filepath: str) -> str:
    """Resolve a filepath to absolute, handling both relative and absolute."""
    p = Path(filepath)
    if p.is_absolute():
        return str(p.resolve())
    return str((get_project_root() / filepath).resolve())


def safe_write_text(filepath: str | Path, content: str) -> None:
    """Atomically write text to a file using temp+rename."""
    p = Path(filepath)
    p.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=p.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            f.write(content)
        os.replace(tmp, str(p))
    except OSError:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def enable_file_cache():
    """Enable scan-scoped file content cache."""
    current_runtime_context().file_text_cache.enable()


def disable_file_cache():
    """Disable file content cache and free memory."""
    current_runtime_context().file_text_cache.disable()


def is_file_cache_enabled() -> bool:
    return current_runtime_context().file_text_cache.enabled


def read_file_text(filepath: str) -> str | None:
    """Read a file as text, with optional caching."""
    return current_runtime_context().file_text_cache.read(filepath)


def _is_excluded_dir(name: str, rel_path: str, extra: tuple[str, ...]) -> bool:
    # The go tool ignores directories starting with "." or "_".
    hidden = name.startswith((".", "_"))
    return (
        name in DEFAULT_EXCLUSIONS
        or hidden
        or any(matches_exclusion(rel_path, ex) or ex == name for ex in extra)
    )


def _find_go_files_cached(
    path: str, include_tests: bool, extra_exclusions: tuple[str, ...]
) -> tuple[str, ...]:
    cache_key = (path, include_tests, extra_exclusions)
    cache = current_runtime_context().source_file_cache
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    project_root = get_project_root()
    root = Path(path)
    if not root.is_absolute():
        root = project_root / root
    files: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = _normalize_path_separators(_safe_relpath(dirpath, project_root))
        prefix = "" if rel_dir == "." else rel_dir + "/"
        dirnames[:] = sorted(
            d
            for d in dirnames
            if not _is_excluded_dir(d, prefix + d, extra_exclusions)
        )
        for fname in filenames:
            if not is_go_file(fname) or fname.startswith((".", "_")):
                continue
            if not include_tests and is_test_file(fname):
                continue
            full = os.path.join(dirpath, fname)
            rel_file = _normalize_path_separators(_safe_relpath(full, project_root))
            if any(matches_exclusion(rel_file, ex) for ex in extra_exclusions):
                continue
            files.append(rel_file)
    result = tuple(sorted(files))
    cache.put(cache_key, result)
    return result


def find_go_files(path: str | Path, *, include_tests: bool = False) -> list[str]:
    """Find Go source files under *path*, relative to the project root."""
    return list(_find_go_files_cached(str(path), include_tests, get_exclusions()))
