"""Per-file pipeline: build constraints first, then the import scan."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Set
from dataclasses import dataclass

from gopherdeps.core.enums import FileVerdict
from gopherdeps.golang.constraints import evaluate
from gopherdeps.golang.filenames import filename_constraint_ok
from gopherdeps.golang.imports import scan_imports

TagProvider = Callable[[], Iterable[str]]


@dataclass(frozen=True)
class FileImports:
    verdict: FileVerdict
    imports: tuple[str, ...] = ()
    package: str | None = None

    @property
    def included(self) -> bool:
        return self.verdict is FileVerdict.INCLUDED


def analyze_source(
    source: str, tags: Set[str], *, filename: str | None = None
) -> FileImports:
    """Decide whether *source* is built under *tags* and list its imports.

    The import scan is skipped entirely for excluded files.  Raises
    InvalidBuildConstraintError when the file's constraints are malformed.
    """
    if filename is not None and not filename_constraint_ok(filename, tags):
        return FileImports(FileVerdict.EXCLUDED_BY_FILENAME)
    if not evaluate(source, tags):
        return FileImports(FileVerdict.EXCLUDED_BY_TAGS)
    scan = scan_imports(source)
    return FileImports(FileVerdict.INCLUDED, scan.imports, scan.package)


class GoImportExtractor:
    """Import extraction bound to a tag source.

    *tags* is either a fixed collection or a zero-argument callable queried on
    every call, so the active tags may change between files.  The extractor
    keeps no per-file state and is safe to share between threads.
    """

    def __init__(self, tags: TagProvider | Iterable[str] = ()) -> None:
        if callable(tags):
            self._tag_provider = tags
        else:
            fixed = frozenset(tags)
            self._tag_provider = lambda: fixed

    def active_tags(self) -> frozenset[str]:
        return frozenset(self._tag_provider())

    def analyze(self, source: str, *, filename: str | None = None) -> FileImports:
        return analyze_source(source, self.active_tags(), filename=filename)

    def extract(self, source: str) -> list[str]:
        """Imports of *source*, or an empty list when its constraints exclude it."""
        return list(self.analyze(source).imports)


__all__ = ["FileImports", "GoImportExtractor", "TagProvider", "analyze_source"]
