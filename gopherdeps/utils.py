"""Terminal output for the command handlers."""

from __future__ import annotations

import os
import sys

COLORS = {
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
}
_RESET = "\033[0m"


def _color_enabled() -> bool:
    return "NO_COLOR" not in os.environ and sys.stdout.isatty()


def colorize(text: str, color: str) -> str:
    if not _color_enabled():
        return str(text)
    return f"{COLORS.get(color, '')}{text}{_RESET}"


def log(msg: str):
    print(colorize(msg, "dim"), file=sys.stderr)


def print_table(headers: list[str], rows: list[list[str]]) -> None:
    """Left-aligned columns; the last column is free text and left unpadded."""
    if not rows:
        return
    cells = [[str(value) for value in row] for row in rows]
    widths = [
        max(len(header), *(len(row[i]) for row in cells))
        for i, header in enumerate(headers[:-1])
    ]

    def _line(values: list[str]) -> str:
        padded = [value.ljust(width) for value, width in zip(values, widths)]
        return "  ".join([*padded, values[-1]]).rstrip()

    print(colorize(_line(headers), "bold"))
    print(colorize("-" * len(_line(headers)), "dim"))
    for row in cells:
        print(_line(row))


__all__ = ["COLORS", "colorize", "log", "print_table"]
