"""Shared helpers for best-effort paths and user-facing error lines."""

from __future__ import annotations

import logging
import sys

from gopherdeps.utils import colorize


def log_best_effort_failure(logger: logging.Logger, action: str, exc: BaseException) -> None:
    """Record a failure that the caller deliberately recovers from."""
    logger.debug("Best-effort step failed (%s): %s", action, exc)


def print_error(message: str) -> None:
    print(colorize(f"  error: {message}", "red"), file=sys.stderr)


__all__ = ["log_best_effort_failure", "print_error"]
