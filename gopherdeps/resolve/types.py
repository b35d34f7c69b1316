"""Data carried through dependency resolution."""

from __future__ import annotations

from dataclasses import dataclass, field

from gopherdeps.core.enums import DependencyKind
from gopherdeps.resolve.notation import GitNotationDependency


@dataclass
class ResolvedDependency:
    """One repository root and every imported package that lives in it."""

    name: str
    kind: DependencyKind
    version: str | None = None
    url: str | None = None
    commit: str | None = None
    tag: str | None = None
    packages: set[str] = field(default_factory=set)

    def to_dict(self) -> dict:
        payload: dict = {
            "name": self.name,
            "kind": str(self.kind),
            "packages": sorted(self.packages),
        }
        for key in ("version", "url", "commit", "tag"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        return payload


@dataclass(frozen=True)
class ResolutionContext:
    module_path: str | None = None
    pins: dict[str, GitNotationDependency] = field(default_factory=dict)

    def pin_for(self, path: str) -> GitNotationDependency | None:
        """Longest pin whose name is *path* or a path prefix of it."""
        best = None
        for name, pin in self.pins.items():
            if path == name or path.startswith(name + "/"):
                if best is None or len(name) > len(best.name):
                    best = pin
        return best


__all__ = ["ResolutionContext", "ResolvedDependency"]
