"""Directed graph of xcconfig include relationships.

The parser records one edge per resolved include directive
(``including -> included``). The graph is a plain networkx DiGraph, so
cycles and transitive includes come straight from networkx algorithms.
Repeated includes of the same file collapse into one edge.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

import networkx as nx

logger = logging.getLogger("xcconfparse.graph.include_graph")

PathLike = Union[str, Path]


class IncludeGraph:
    """Include edges between xcconfig files, keyed by path string."""

    def __init__(self) -> None:
        self._graph = nx.DiGraph()

    @property
    def native_graph(self) -> nx.DiGraph:
        return self._graph

    def add_file(self, path: PathLike) -> str:
        node = str(path)
        if not self._graph.has_node(node):
            self._graph.add_node(node)
        return node

    def add_include(self, including: PathLike, included: PathLike, optional: bool = False) -> None:
        """Record that ``including`` pulls in ``included``."""
        source = self.add_file(including)
        target = self.add_file(included)
        self._graph.add_edge(source, target, optional=optional)
        logger.debug("Include edge %s -> %s", source, target)

    def files(self) -> List[str]:
        return list(self._graph.nodes)

    def includes_of(self, path: PathLike) -> List[str]:
        """Files directly included by ``path``, in the order first seen."""
        node = str(path)
        if not self._graph.has_node(node):
            return []
        return list(self._graph.successors(node))

    def transitive_includes(self, path: PathLike) -> Set[str]:
        """Every file reachable from ``path`` through include edges."""
        node = str(path)
        if not self._graph.has_node(node):
            return set()
        return set(nx.descendants(self._graph, node))

    def roots(self) -> List[str]:
        """Files that no other recorded file includes."""
        return [n for n, degree in self._graph.in_degree() if degree == 0]

    def cycles(self, limit: Optional[int] = None) -> List[List[str]]:
        """Enumerate include cycles (simple_cycles semantics).

        Args:
            limit: Maximum number of cycles to return; None or <= 0 for all.
        """
        cycles: List[List[str]] = []
        for cycle in nx.simple_cycles(self._graph):
            cycles.append([str(node) for node in cycle])
            if limit is not None and limit > 0 and len(cycles) >= limit:
                break
        return cycles

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files": self.files(),
            "includes": [
                {"from": source, "to": target, "optional": bool(data.get("optional", False))}
                for source, target, data in self._graph.edges(data=True)
            ],
        }


__all__ = ["IncludeGraph"]
