"""check command: explain why a file is or is not part of the build."""

from __future__ import annotations

import argparse
import os
import sys

from gopherdeps.app.commands.helpers.runtime import command_runtime
from gopherdeps.app.commands.helpers.source import read_source_or_exit
from gopherdeps.core.fallbacks import print_error
from gopherdeps.golang.constraints import (
    TRUE,
    InvalidBuildConstraintError,
    find_directives,
    parse_constraints,
)
from gopherdeps.golang.filenames import filename_constraint_ok
from gopherdeps.utils import colorize


def cmd_check(args: argparse.Namespace) -> None:
    runtime = command_runtime(args)
    source = read_source_or_exit(args.file)

    directives = find_directives(source)
    for directive in directives:
        print(colorize(f"  line {directive.line}: {directive.text.strip()}", "dim"))

    try:
        expr = parse_constraints(source)
    except InvalidBuildConstraintError as exc:
        print_error(f"{args.file}: {exc}")
        sys.exit(1)

    name_ok = filename_constraint_ok(os.path.basename(args.file), runtime.tags)
    satisfied = expr.evaluate(runtime.tags)
    print(f"  constraint: {'(none)' if expr is TRUE else expr}")
    if not name_ok:
        print(colorize("  excluded: file name targets another GOOS/GOARCH", "yellow"))
    elif satisfied:
        print(colorize("  included", "green"))
    else:
        print(colorize("  excluded: build constraints not satisfied", "yellow"))
    print(colorize(f"  tags: {' '.join(sorted(runtime.tags))}", "dim"))


__all__ = ["cmd_check"]
