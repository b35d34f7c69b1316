"""Project-root resolution shared by config and file discovery."""

from __future__ import annotations

import os
from pathlib import Path

from gopherdeps.core.runtime_state import current_runtime_context

_DEFAULT_PROJECT_ROOT = Path(os.environ.get("GOPHERDEPS_ROOT", Path.cwd())).resolve()


def get_project_root() -> Path:
    """Return the active project root, checking RuntimeContext first.

    Tests set ``RuntimeContext.project_root`` to a tmp directory.  Production
    code uses the process default from $GOPHERDEPS_ROOT / cwd.
    """
    override = current_runtime_context().project_root
    if override is not None:
        return override
    return _DEFAULT_PROJECT_ROOT


__all__ = ["get_project_root"]
