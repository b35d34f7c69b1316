"""config command: show/set/unset project configuration."""

from __future__ import annotations

import argparse
import json
import sys

from gopherdeps.core import config as config_mod
from gopherdeps.core.fallbacks import print_error
from gopherdeps.utils import colorize, print_table


def _format_value(value: object) -> str:
    if isinstance(value, (list, dict)):
        return json.dumps(value) if value else "(empty)"
    return str(value)


def _show(config: dict) -> None:
    rows = [
        [key, _format_value(config.get(key, schema.default)), schema.description]
        for key, schema in config_mod.CONFIG_SCHEMA.items()
    ]
    print(colorize(f"  {config_mod.config_path()}", "dim"))
    print_table(["Key", "Value", "Description"], rows)


def _save_or_exit(config: dict) -> None:
    try:
        config_mod.save_config(config)
    except OSError as exc:
        print_error(f"could not save config: {exc}")
        sys.exit(1)


def cmd_config(args: argparse.Namespace) -> None:
    action = getattr(args, "config_action", None)
    config = config_mod.load_config()

    if action in (None, "show"):
        _show(config)
        return

    key = args.config_key
    try:
        if action == "set":
            config_mod.set_config_value(config, key, args.config_value)
        else:
            config_mod.unset_config_value(config, key)
    except (KeyError, ValueError) as exc:
        print_error(str(exc).strip("'\""))
        sys.exit(1)

    _save_or_exit(config)
    if action == "set":
        print(colorize(f"Set {key} = {_format_value(config[key])}", "green"))
    else:
        print(colorize(f"Reset {key} to default", "green"))


__all__ = ["cmd_config"]
