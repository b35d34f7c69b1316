"""Built-in resolvers.  Nothing here touches the network or a VCS."""

from __future__ import annotations

from gopherdeps.core.enums import DependencyKind
from gopherdeps.resolve.classify import ImportTarget
from gopherdeps.resolve.notation import NEWEST_COMMIT
from gopherdeps.resolve.registry import register_resolver
from gopherdeps.resolve.types import ResolutionContext, ResolvedDependency


@register_resolver(DependencyKind.STDLIB)
def resolve_stdlib(target: ImportTarget, context: ResolutionContext) -> ResolvedDependency:
    return ResolvedDependency(target.root, DependencyKind.STDLIB)


@register_resolver(DependencyKind.PSEUDO)
def resolve_pseudo(target: ImportTarget, context: ResolutionContext) -> ResolvedDependency:
    return ResolvedDependency(target.root, DependencyKind.PSEUDO)


@register_resolver(DependencyKind.LOCAL)
def resolve_local(target: ImportTarget, context: ResolutionContext) -> ResolvedDependency:
    return ResolvedDependency(target.root, DependencyKind.LOCAL)


@register_resolver(DependencyKind.UNKNOWN)
def resolve_unknown(target: ImportTarget, context: ResolutionContext) -> ResolvedDependency:
    return ResolvedDependency(target.root, DependencyKind.UNKNOWN)


@register_resolver(DependencyKind.GIT)
def resolve_git(target: ImportTarget, context: ResolutionContext) -> ResolvedDependency:
    """Apply the user's pin if one covers the root, else track the newest commit."""
    pin = context.pin_for(target.root)
    if pin is None:
        return ResolvedDependency(
            target.root,
            DependencyKind.GIT,
            version=NEWEST_COMMIT,
            url=target.url,
            commit=NEWEST_COMMIT,
        )
    return ResolvedDependency(
        target.root,
        DependencyKind.GIT,
        version=pin.version,
        url=pin.url or target.url,
        commit=pin.commit,
        tag=pin.tag,
    )


__all__ = [
    "resolve_git",
    "resolve_local",
    "resolve_pseudo",
    "resolve_stdlib",
    "resolve_unknown",
]
