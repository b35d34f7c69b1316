"""Central command registry for CLI command handler resolution."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

CommandHandler = Callable[[Any], None]

_COMMAND_HANDLERS: dict[str, CommandHandler] | None = None


def _build_handlers() -> dict[str, CommandHandler]:
    """Import all command modules and build the handler dict on first access."""
    from gopherdeps.app.commands.check_cmd import cmd_check
    from gopherdeps.app.commands.config_cmd import cmd_config
    from gopherdeps.app.commands.exclude_cmd import cmd_exclude
    from gopherdeps.app.commands.imports_cmd import cmd_imports
    from gopherdeps.app.commands.scan_cmd import cmd_scan

    return {
        "imports": cmd_imports,
        "check": cmd_check,
        "scan": cmd_scan,
        "exclude": cmd_exclude,
        "config": cmd_config,
    }


def get_command_handlers() -> dict[str, CommandHandler]:
    """Return cached command handler dict, building on first access."""
    global _COMMAND_HANDLERS
    if _COMMAND_HANDLERS is None:
        _COMMAND_HANDLERS = _build_handlers()
    return _COMMAND_HANDLERS


__all__ = ["CommandHandler", "get_command_handlers"]
