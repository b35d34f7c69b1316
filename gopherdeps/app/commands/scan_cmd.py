"""scan command: collect the dependencies of every built file in a project."""

from __future__ import annotations

import argparse
import json
import sys

from gopherdeps.app.commands.helpers.runtime import command_runtime
from gopherdeps.core.enums import is_external
from gopherdeps.core.fallbacks import print_error
from gopherdeps.engine.dependency_set import DependencySet, scan_project
from gopherdeps.file_discovery import disable_file_cache, enable_file_cache
from gopherdeps.resolve.notation import NotationError, load_pins
from gopherdeps.utils import colorize, log, print_table


def _print_summary(dep_set: DependencySet, *, show_all: bool) -> None:
    log(
        f"  {dep_set.files_scanned} files: {len(dep_set.included_files)} built, "
        f"{len(dep_set.excluded_files)} excluded, {len(dep_set.invalid_files)} invalid"
    )
    deps = [
        dep
        for _, dep in sorted(dep_set.dependencies.items())
        if show_all or is_external(dep.kind)
    ]
    if not deps:
        print(colorize("  No dependencies found.", "dim"))
    rows = [
        [dep.name, str(dep.kind), dep.version or "", str(len(dep.packages))]
        for dep in deps
    ]
    print_table(["Dependency", "Kind", "Version", "Pkgs"], rows)
    for path, message in sorted(dep_set.invalid_files.items()):
        print(colorize(f"  invalid: {path}: {message}", "red"), file=sys.stderr)


def cmd_scan(args: argparse.Namespace) -> None:
    runtime = command_runtime(args)
    config = runtime.config
    try:
        pins = load_pins(config.get("dependencies"))
    except NotationError as exc:
        print_error(f"bad dependency pin in config: {exc}")
        sys.exit(1)

    include_tests = args.tests if args.tests is not None else config["include_tests"]
    workers = args.workers or config["scan_workers"]
    enable_file_cache()
    try:
        dep_set = scan_project(
            args.path,
            runtime.tags,
            include_tests=bool(include_tests),
            module_path=config.get("module_path") or None,
            pins=pins,
            max_workers=workers,
        )
    finally:
        disable_file_cache()

    if getattr(args, "json", False):
        print(json.dumps(dep_set.to_dict(), indent=2))
    else:
        _print_summary(dep_set, show_all=getattr(args, "all", False))

    if args.strict and dep_set.invalid_files:
        sys.exit(1)


__all__ = ["cmd_scan"]
