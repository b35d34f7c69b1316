"""Package dependency graph.

The graph structure is: {node: {"imports": set, "importers": set, "import_count": int, "importer_count": int}}
Nodes are project package directories and dependency roots.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _node() -> dict[str, Any]:
    return {"imports": set(), "importers": set()}


def build_graph(edges: Mapping[str, set[str]]) -> dict[str, dict[str, Any]]:
    """Build a finalized graph from ``{importer: {imported, ...}}``."""
    graph: dict[str, dict[str, Any]] = {}
    for source, targets in edges.items():
        graph.setdefault(source, _node())
        for target in targets:
            if target == source:
                continue
            graph[source]["imports"].add(target)
            graph.setdefault(target, _node())["importers"].add(source)
    return finalize_graph(graph)


def finalize_graph(graph: dict[str, dict[str, Any]]) -> dict[str, dict[str, Any]]:
    """Add counts to a raw graph (imports/importers sets only)."""
    for v in graph.values():
        v["import_count"] = len(v["imports"])
        v["importer_count"] = len(v["importers"])
    return graph


def graph_to_dict(graph: dict[str, dict[str, Any]]) -> dict[str, dict[str, Any]]:
    """JSON-friendly copy with sets turned into sorted lists."""
    return {
        node: {
            "imports": sorted(entry["imports"]),
            "importers": sorted(entry["importers"]),
            "import_count": entry["import_count"],
            "importer_count": entry["importer_count"],
        }
        for node, entry in sorted(graph.items())
    }


__all__ = ["build_graph", "finalize_graph", "graph_to_dict"]
