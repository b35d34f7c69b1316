"""Dependency resolution: classify import paths and pin their repositories."""

from gopherdeps.resolve.classify import ImportTarget, classify_import
from gopherdeps.resolve.notation import (
    NEWEST_COMMIT,
    GitNotationDependency,
    NotationError,
    load_pins,
    parse_notation_string,
)
from gopherdeps.resolve.pipeline import resolve_imports
from gopherdeps.resolve.registry import (
    ResolverNotFoundError,
    get_resolver,
    register_resolver,
)
from gopherdeps.resolve.types import ResolutionContext, ResolvedDependency

__all__ = [
    "GitNotationDependency",
    "ImportTarget",
    "NEWEST_COMMIT",
    "NotationError",
    "ResolutionContext",
    "ResolvedDependency",
    "ResolverNotFoundError",
    "classify_import",
    "get_resolver",
    "load_pins",
    "parse_notation_string",
    "register_resolver",
    "resolve_imports",
]
