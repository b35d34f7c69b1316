"""Scan a Go project and collect the dependencies its built files import."""

from __future__ import annotations

import contextvars
import logging
import posixpath
import re
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from gopherdeps.core._internal.text_utils import get_project_root
from gopherdeps.core.enums import FileVerdict, is_external
from gopherdeps.engine.graph import build_graph, graph_to_dict
from gopherdeps.file_discovery import find_go_files, read_file_text, rel
from gopherdeps.golang.constraints import InvalidBuildConstraintError
from gopherdeps.golang.extractor import FileImports, analyze_source
from gopherdeps.resolve.notation import GitNotationDependency
from gopherdeps.resolve.pipeline import resolve_imports, target_for
from gopherdeps.resolve.types import ResolutionContext, ResolvedDependency

logger = logging.getLogger(__name__)

GO_MOD = "go.mod"
_MODULE_RE = re.compile(r'^\s*module\s+"?([^"\s]+)"?', re.MULTILINE)


def read_module_path(root: str | Path) -> str | None:
    """Return the module path declared in ``root/go.mod``, if any."""
    gomod = Path(root) / GO_MOD
    try:
        text = gomod.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None
    match = _MODULE_RE.search(text)
    return match.group(1) if match else None


@dataclass
class DependencySet:
    root: str
    tags: frozenset[str]
    module_path: str | None = None
    files_scanned: int = 0
    included_files: list[str] = field(default_factory=list)
    excluded_files: dict[str, FileVerdict] = field(default_factory=dict)
    invalid_files: dict[str, str] = field(default_factory=dict)
    unreadable_files: list[str] = field(default_factory=list)
    # package directory -> import paths of its built files
    imports: dict[str, set[str]] = field(default_factory=dict)
    dependencies: dict[str, ResolvedDependency] = field(default_factory=dict)
    graph: dict[str, dict[str, Any]] = field(default_factory=dict)

    def external(self) -> list[ResolvedDependency]:
        """Dependencies that come from outside the project and the stdlib."""
        return [
            dep
            for _, dep in sorted(self.dependencies.items())
            if is_external(dep.kind)
        ]

    def to_dict(self) -> dict:
        return {
            "root": self.root,
            "module_path": self.module_path,
            "tags": sorted(self.tags),
            "files_scanned": self.files_scanned,
            "included_files": sorted(self.included_files),
            "excluded_files": {
                path: str(verdict) for path, verdict in sorted(self.excluded_files.items())
            },
            "invalid_files": dict(sorted(self.invalid_files.items())),
            "unreadable_files": sorted(self.unreadable_files),
            "imports": {pkg: sorted(paths) for pkg, paths in sorted(self.imports.items())},
            "dependencies": [dep.to_dict() for _, dep in sorted(self.dependencies.items())],
            "graph": graph_to_dict(self.graph),
        }


@dataclass(frozen=True)
class _FileResult:
    path: str
    result: FileImports | None = None
    error: str | None = None


def _scan_file(rel_path: str, tags: frozenset[str]) -> _FileResult:
    source = read_file_text(str(get_project_root() / rel_path))
    if source is None:
        logger.debug("Skipping unreadable file %s", rel_path)
        return _FileResult(rel_path, FileImports(FileVerdict.UNREADABLE))
    try:
        result = analyze_source(source, tags, filename=posixpath.basename(rel_path))
    except InvalidBuildConstraintError as exc:
        logger.debug("Invalid build constraint in %s: %s", rel_path, exc)
        return _FileResult(rel_path, FileImports(FileVerdict.INVALID_CONSTRAINT), str(exc))
    return _FileResult(rel_path, result)


def _run_scans(
    files: list[str], tags: frozenset[str], max_workers: int
) -> list[_FileResult]:
    if max_workers <= 1 or len(files) <= 1:
        return [_scan_file(path, tags) for path in files]
    # Workers see the caller's RuntimeContext through a context copy per task.
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(contextvars.copy_context().run, _scan_file, path, tags)
            for path in files
        ]
        return [future.result() for future in futures]


def _package_node(path: str, module_path: str | None) -> str | None:
    """Graph node for a project-local import path, or None when not local."""
    if not module_path:
        return None
    if path == module_path:
        return "."
    if path.startswith(module_path + "/"):
        return path[len(module_path) + 1 :]
    return None


def _graph_edges(dep_set: DependencySet, context: ResolutionContext) -> dict[str, set[str]]:
    edges: dict[str, set[str]] = {}
    for pkg, paths in dep_set.imports.items():
        targets = edges.setdefault(pkg, set())
        for path in paths:
            local = _package_node(path, context.module_path)
            targets.add(local if local is not None else target_for(path, context).root)
    return edges


def scan_project(
    path: str | Path = ".",
    tags: Iterable[str] = (),
    *,
    include_tests: bool = False,
    module_path: str | None = None,
    pins: Mapping[str, GitNotationDependency] | None = None,
    max_workers: int = 8,
) -> DependencySet:
    """Collect the imports of every built ``.go`` file under *path*.

    Each file goes through the per-file pipeline independently; results are
    merged per package directory and each repository root is resolved once.
    """
    root = Path(path)
    if not root.is_absolute():
        root = get_project_root() / root
    active = frozenset(tags)
    if module_path is None:
        module_path = read_module_path(root)

    root_rel = rel(str(root))
    files = find_go_files(root, include_tests=include_tests)
    logger.debug("Scanning %d Go files under %s", len(files), root)
    dep_set = DependencySet(
        root=str(root), tags=active, module_path=module_path, files_scanned=len(files)
    )

    all_imports: set[str] = set()
    for scanned in _run_scans(files, active, max_workers):
        verdict = scanned.result.verdict if scanned.result else FileVerdict.UNREADABLE
        if verdict is FileVerdict.INVALID_CONSTRAINT:
            dep_set.invalid_files[scanned.path] = scanned.error or ""
            continue
        if verdict is FileVerdict.UNREADABLE:
            dep_set.unreadable_files.append(scanned.path)
            continue
        if verdict is not FileVerdict.INCLUDED:
            dep_set.excluded_files[scanned.path] = verdict
            continue
        dep_set.included_files.append(scanned.path)
        pkg = posixpath.relpath(posixpath.dirname(scanned.path) or ".", root_rel)
        dep_set.imports.setdefault(pkg, set()).update(scanned.result.imports)
        all_imports.update(scanned.result.imports)

    context = ResolutionContext(module_path=module_path, pins=dict(pins or {}))
    dep_set.dependencies = resolve_imports(all_imports, context)
    dep_set.graph = build_graph(_graph_edges(dep_set, context))
    if dep_set.invalid_files:
        logger.debug("%d files had malformed build constraints", len(dep_set.invalid_files))
    return dep_set


__all__ = ["DependencySet", "read_module_path", "scan_project"]
