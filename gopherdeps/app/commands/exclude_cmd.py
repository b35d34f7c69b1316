"""exclude command: add path patterns to the config exclude list."""

from __future__ import annotations

import argparse
import sys

from gopherdeps.core import config as config_mod
from gopherdeps.core.fallbacks import print_error
from gopherdeps.utils import colorize


def cmd_exclude(args: argparse.Namespace) -> None:
    """Add a path pattern to the exclude list."""
    config = config_mod.load_config()
    config_mod.add_exclude_pattern(config, args.pattern)
    try:
        config_mod.save_config(config)
    except OSError as exc:
        print_error(f"could not save config: {exc}")
        sys.exit(1)

    print(colorize(f"Added exclude pattern: {args.pattern}", "green"))


__all__ = ["cmd_exclude"]
