"""imports command: list one file's imports under the active build tags."""

from __future__ import annotations

import argparse
import json
import os
import sys

from gopherdeps.app.commands.helpers.runtime import command_runtime
from gopherdeps.app.commands.helpers.source import read_source_or_exit
from gopherdeps.core.fallbacks import print_error
from gopherdeps.golang.constraints import InvalidBuildConstraintError
from gopherdeps.golang.extractor import analyze_source
from gopherdeps.utils import colorize


def cmd_imports(args: argparse.Namespace) -> None:
    runtime = command_runtime(args)
    source = read_source_or_exit(args.file)
    try:
        result = analyze_source(
            source, runtime.tags, filename=os.path.basename(args.file)
        )
    except InvalidBuildConstraintError as exc:
        print_error(f"{args.file}: {exc}")
        sys.exit(1)

    if getattr(args, "json", False):
        payload = {
            "file": args.file,
            "verdict": str(result.verdict),
            "package": result.package,
            "imports": list(result.imports),
        }
        print(json.dumps(payload, indent=2))
        return

    if not result.included:
        print(colorize(f"  {args.file}: {result.verdict}", "yellow"), file=sys.stderr)
        return
    for path in result.imports:
        print(path)


__all__ = ["cmd_imports"]
