"""Runtime context helpers for command handlers."""

from __future__ import annotations

from dataclasses import dataclass

from gopherdeps.core.config import load_config
from gopherdeps.golang.tags import split_tag_list, tag_context_from_config


@dataclass(frozen=True)
class CommandRuntime:
    """Explicit runtime dependencies shared by command handlers."""

    config: dict
    tags: frozenset[str]


def cli_extra_tags(args) -> list[str]:
    tags: list[str] = []
    for raw in getattr(args, "tags", None) or []:
        tags.extend(split_tag_list(raw))
    return tags


def build_command_runtime(args, config: dict) -> CommandRuntime:
    tags = tag_context_from_config(
        config,
        goos=getattr(args, "goos", None),
        goarch=getattr(args, "goarch", None),
        extra_tags=cli_extra_tags(args),
    )
    return CommandRuntime(config=config, tags=tags)


def command_runtime(args) -> CommandRuntime:
    """Return runtime context from explicit args.runtime or construct one."""
    runtime = getattr(args, "runtime", None)
    if isinstance(runtime, CommandRuntime):
        return runtime
    return build_command_runtime(args, load_config())


__all__ = ["CommandRuntime", "build_command_runtime", "cli_extra_tags", "command_runtime"]
