"""Go source front end: import scanning and build constraint evaluation."""

from __future__ import annotations

from gopherdeps.golang.constraints import InvalidBuildConstraintError, evaluate
from gopherdeps.golang.extractor import FileImports, GoImportExtractor, analyze_source
from gopherdeps.golang.imports import ImportScan, ScanStatus, extract, scan_imports

__all__ = [
    "FileImports",
    "GoImportExtractor",
    "ImportScan",
    "InvalidBuildConstraintError",
    "ScanStatus",
    "analyze_source",
    "evaluate",
    "extract",
    "scan_imports",
]
