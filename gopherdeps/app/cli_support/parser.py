"""CLI parser construction helpers."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version as get_version

from gopherdeps.app.cli_support.parser_groups import (
    _add_check_parser,
    _add_config_parser,
    _add_exclude_parser,
    _add_imports_parser,
    _add_scan_parser,
)

USAGE_EXAMPLES = """
commands:
  imports    Imports of one file (empty when its build constraints exclude it)
  check      Build constraints of one file and their verdict
  scan       Dependencies of every built file under a directory
  exclude    Exclude path pattern from scanning
  config     Project configuration

examples:
  gopherdeps imports main.go
  gopherdeps --tags appengine imports handler.go
  gopherdeps --goos windows --goarch arm64 check sys_windows.go
  gopherdeps scan --json > deps.json
  gopherdeps scan ./cmd --strict
  gopherdeps config set build_tags "integration,netgo"
"""


class _NoAbbrevArgumentParser(argparse.ArgumentParser):
    """Argparse parser variant that disables long-option abbreviation."""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("allow_abbrev", False)
        super().__init__(*args, **kwargs)


def _cli_version_string() -> str:
    try:
        return f"gopherdeps {get_version('gopherdeps')}"
    except PackageNotFoundError:
        return "gopherdeps (version unknown)"


def create_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser with all subcommands."""
    parser = _NoAbbrevArgumentParser(
        prog="gopherdeps",
        description="gopherdeps - Go import scanner with build-constraint evaluation",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--tags",
        action="append",
        default=None,
        metavar="TAGS",
        help="Extra build tags, comma or space separated (repeatable)",
    )
    parser.add_argument("--goos", default=None, help="Target GOOS (default: config goos)")
    parser.add_argument(
        "--goarch", default=None, help="Target GOARCH (default: config goarch)"
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Path pattern to exclude (component/prefix match; repeatable)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=_cli_version_string(),
    )
    sub = parser.add_subparsers(
        dest="command",
        required=True,
        parser_class=_NoAbbrevArgumentParser,
    )
    _add_imports_parser(sub)
    _add_check_parser(sub)
    _add_scan_parser(sub)
    _add_exclude_parser(sub)
    _add_config_parser(sub)
    return parser


__all__ = ["USAGE_EXAMPLES", "create_parser"]
