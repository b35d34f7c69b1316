"""Reading a single source file named on the command line."""

from __future__ import annotations

import sys

from gopherdeps.core.fallbacks import print_error
from gopherdeps.file_discovery import read_file_text, resolve_path


def read_source_or_exit(filepath: str) -> str:
    source = read_file_text(resolve_path(filepath))
    if source is None:
        print_error(f"cannot read {filepath}")
        sys.exit(1)
    return source


__all__ = ["read_source_or_exit"]
