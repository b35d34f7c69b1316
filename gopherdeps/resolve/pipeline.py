"""Turn a set of import paths into resolved dependencies keyed by root."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from gopherdeps.core.enums import DependencyKind
from gopherdeps.resolve.classify import ImportTarget, classify_import
from gopherdeps.resolve.registry import get_resolver
from gopherdeps.resolve.types import ResolutionContext, ResolvedDependency

logger = logging.getLogger(__name__)


def _apply_pins(target: ImportTarget, context: ResolutionContext) -> ImportTarget:
    """A pin covering an unrecognised host makes that path a Git dependency."""
    if target.kind is not DependencyKind.UNKNOWN:
        return target
    pin = context.pin_for(target.path)
    if pin is None:
        return target
    return ImportTarget(
        target.path, pin.name, DependencyKind.GIT, pin.url or f"https://{pin.name}"
    )


def target_for(path: str, context: ResolutionContext) -> ImportTarget:
    return _apply_pins(classify_import(path, module_path=context.module_path), context)


def resolve_imports(
    paths: Iterable[str], context: ResolutionContext | None = None
) -> dict[str, ResolvedDependency]:
    """Group *paths* by repository root and resolve each root once."""
    context = context or ResolutionContext()
    resolved: dict[str, ResolvedDependency] = {}
    for path in sorted(set(paths)):
        target = target_for(path, context)
        dependency = resolved.get(target.root)
        if dependency is None:
            dependency = get_resolver(target.kind)(target, context)
            resolved[target.root] = dependency
            logger.debug("Resolved %s as %s (%s)", target.root, target.kind, path)
        dependency.packages.add(path)
    return resolved


__all__ = ["resolve_imports", "target_for"]
