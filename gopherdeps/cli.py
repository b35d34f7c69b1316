"""CLI entry point: parse args, load shared context, dispatch command handlers."""

from __future__ import annotations

import logging
import sys

from gopherdeps.app.cli_support.parser import create_parser
from gopherdeps.app.commands.helpers.runtime import build_command_runtime
from gopherdeps.app.commands.registry import get_command_handlers
from gopherdeps.core.config import load_config
from gopherdeps.core.runtime_state import runtime_scope
from gopherdeps.file_discovery import set_exclusions
from gopherdeps.utils import colorize

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )


def _apply_persisted_exclusions(args, config: dict):
    """Merge CLI --exclude with persisted config.exclude and apply globally."""
    cli_exclusions = getattr(args, "exclude", None) or []
    persisted = config.get("exclude", [])
    combined = list(cli_exclusions) + [e for e in persisted if e not in cli_exclusions]
    if not combined:
        return
    set_exclusions(combined)
    source = "" if cli_exclusions else " (from config)"
    print(colorize(f"  Excluding{source}: {', '.join(combined)}", "dim"), file=sys.stderr)


def _load_shared_runtime(args) -> None:
    """Load config, build the tag context and attach both to parsed args."""
    config = load_config()
    _apply_persisted_exclusions(args, config)
    args.runtime = build_command_runtime(args, config)


def main(argv: list[str] | None = None) -> None:
    parser = create_parser()
    args = parser.parse_args(argv)
    _configure_logging(getattr(args, "verbose", False))

    try:
        with runtime_scope():
            try:
                _load_shared_runtime(args)
            except ValueError as exc:
                # unparseable go_version in config
                print(colorize(f"  {exc}", "red"), file=sys.stderr)
                sys.exit(1)
            handler = get_command_handlers()[args.command]
            handler(args)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(1)


if __name__ == "__main__":
    main()
