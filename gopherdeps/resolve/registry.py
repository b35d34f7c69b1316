"""Registry of resolvers, one per dependency kind."""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable

from gopherdeps.core.enums import DependencyKind
from gopherdeps.resolve.classify import ImportTarget
from gopherdeps.resolve.types import ResolutionContext, ResolvedDependency

Resolver = Callable[[ImportTarget, ResolutionContext], ResolvedDependency]

_RESOLVERS: dict[DependencyKind, Resolver] = {}
_BUILTIN_MODULE = "gopherdeps.resolve.resolvers"
_LOGGER = logging.getLogger(__name__)


class ResolverNotFoundError(LookupError):
    def __init__(self, kind: object) -> None:
        super().__init__(f"No resolver registered for dependency kind {kind!r}")
        self.kind = kind


def register_resolver(kind: DependencyKind) -> Callable[[Resolver], Resolver]:
    """Decorator registering *fn* as the resolver for *kind*."""

    def decorator(fn: Resolver) -> Resolver:
        _RESOLVERS[DependencyKind(kind)] = fn
        return fn

    return decorator


def get_resolver(kind: DependencyKind) -> Resolver:
    resolver = _RESOLVERS.get(kind)
    if resolver is not None:
        return resolver

    # Built-in resolvers register on import; reload after a test clear.
    module = importlib.import_module(_BUILTIN_MODULE)
    if kind not in _RESOLVERS:
        _LOGGER.debug("Reloading %s to re-register resolvers", _BUILTIN_MODULE)
        importlib.reload(module)

    resolver = _RESOLVERS.get(kind)
    if resolver is None:
        raise ResolverNotFoundError(kind)
    return resolver


def registered_kinds() -> list[DependencyKind]:
    return sorted(_RESOLVERS)


def clear_resolvers_for_tests() -> None:
    """Clear registry (test helper)."""
    _RESOLVERS.clear()


__all__ = [
    "Resolver",
    "ResolverNotFoundError",
    "clear_resolvers_for_tests",
    "get_resolver",
    "register_resolver",
    "registered_kinds",
]
