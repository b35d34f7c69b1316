"""Subcommand parser builders."""

from __future__ import annotations


def _add_imports_parser(sub) -> None:
    p_imports = sub.add_parser(
        "imports", help="List the imports of one .go file under the active tags"
    )
    p_imports.add_argument("file", help="Go source file")
    p_imports.add_argument("--json", action="store_true", help="Emit JSON")


def _add_check_parser(sub) -> None:
    p_check = sub.add_parser(
        "check", help="Show a file's build constraints and whether they are satisfied"
    )
    p_check.add_argument("file", help="Go source file")


def _add_scan_parser(sub) -> None:
    p_scan = sub.add_parser("scan", help="Scan a project and list its dependencies")
    p_scan.add_argument(
        "path", nargs="?", default=".", help="Directory to scan (default: project root)"
    )
    p_scan.add_argument("--json", action="store_true", help="Emit JSON")
    p_scan.add_argument(
        "--tests",
        action="store_true",
        default=None,
        help="Include _test.go files (overrides config include_tests)",
    )
    p_scan.add_argument(
        "--strict",
        action="store_true",
        help="Exit 1 when any file has malformed build constraints",
    )
    p_scan.add_argument(
        "--workers",
        type=int,
        default=None,
        metavar="N",
        help="Worker threads (overrides config scan_workers)",
    )
    p_scan.add_argument(
        "--all",
        action="store_true",
        help="List stdlib and local packages too, not only external repositories",
    )


def _add_exclude_parser(sub) -> None:
    p_exclude = sub.add_parser(
        "exclude", help="Add path pattern to exclude list"
    )
    p_exclude.add_argument("pattern", help="Path pattern to exclude from scanning")


def _add_config_parser(sub) -> None:
    p_config = sub.add_parser("config", help="Show/set/unset project configuration")
    config_sub = p_config.add_subparsers(dest="config_action")
    config_sub.add_parser("show", help="Show all config values")
    c_set = config_sub.add_parser("set", help="Set a config value")
    c_set.add_argument("config_key", type=str, help="Config key name")
    c_set.add_argument("config_value", type=str, help="Value to set")
    c_unset = config_sub.add_parser("unset", help="Reset a config key to default")
    c_unset.add_argument("config_key", type=str, help="Config key name")


__all__ = [
    "_add_check_parser",
    "_add_config_parser",
    "_add_exclude_parser",
    "_add_imports_parser",
    "_add_scan_parser",
]
