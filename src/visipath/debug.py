"""
Debug utilities for visipath.

This module provides tools for checking a built visibility graph and a found
path against the invariants the search relies on, and for explaining why a
search came back empty.

Key Components:
- GraphInspector: Invariant checks and reachability queries on a build
- logging_sink: Adapt a logging.Logger into a diagnostic sink

Usage:
    >>> scene.solve()
    >>> inspector = GraphInspector(scene.adjacency, scene.nodes)
    >>> inspector.asymmetric_edges()
    []
    >>> inspector.path_problems(scene.path, scene.start, scene.goal)
    []
"""

import logging
from typing import Iterable, List, Optional, Set, Tuple

import networkx as nx

from .geometry import distance
from .graph import AdjacencyIndex
from .models import Node
from .tracer import DiagnosticSink


def logging_sink(logger: logging.Logger, level: int = logging.DEBUG) -> DiagnosticSink:
    """
    Create a diagnostic sink that forwards messages to a logger.

    Args:
        logger: Logger to write to
        level: Logging level for every message

    Returns:
        Callable accepting one message string
    """

    def sink(message: str) -> None:
        logger.log(level, "%s", message)

    return sink


class GraphInspector:
    """
    Utilities for inspecting a built visibility graph.

    Provides checks for edge symmetry, edge weights and path validity, plus
    connectivity queries backed by networkx.
    """

    def __init__(self, adjacency: AdjacencyIndex, nodes: Iterable[Node] = ()):
        """
        Initialize the inspector.

        Args:
            adjacency: The adjacency index to inspect
            nodes: All scene nodes, so that isolated ones are included
        """
        self._adjacency = adjacency
        self._nodes = list(nodes)
        self._graph: Optional[nx.Graph] = None

    @property
    def graph(self) -> nx.Graph:
        """Undirected networkx view of the adjacency index."""
        if self._graph is None:
            self._graph = self._adjacency.to_networkx(self._nodes)
        return self._graph

    def asymmetric_edges(self) -> List[Tuple[int, int]]:
        """
        Find directed edges without a reverse edge of equal weight.

        Returns:
            List of (source id, target id) pairs; empty for a valid build
        """
        problems = []
        for source_id, neighbors in self._adjacency.items():
            for neighbor, weight in neighbors:
                reverse = [
                    w for n, w in self._adjacency.neighbors(neighbor.id)
                    if n.id == source_id
                ]
                if weight not in reverse:
                    problems.append((source_id, neighbor.id))
        return problems

    def misweighted_edges(self, tolerance: float = 1e-9) -> List[Tuple[int, int]]:
        """Find edges whose weight differs from the Euclidean distance."""
        problems = []
        for source_id, neighbors in self._adjacency.items():
            source = self._node(source_id)
            if source is None:
                continue
            for neighbor, weight in neighbors:
                if abs(weight - distance(source, neighbor)) > tolerance:
                    problems.append((source_id, neighbor.id))
        return problems

    def path_problems(
        self, path: Iterable[Node], start: Optional[Node], goal: Optional[Node]
    ) -> List[str]:
        """
        Check a path for validity.

        A valid path starts at start, ends at goal, and every consecutive
        pair of nodes is an edge of the index.

        Returns:
            Human-readable problem descriptions; empty for a valid path
        """
        nodes = list(path) if path else []
        if not nodes:
            return ["path is empty"]

        problems = []
        if start is not None and nodes[0].id != start.id:
            problems.append(f"path starts at {nodes[0]}, not {start}")
        if goal is not None and nodes[-1].id != goal.id:
            problems.append(f"path ends at {nodes[-1]}, not {goal}")
        for a, b in zip(nodes, nodes[1:]):
            if not self._adjacency.has_edge(a.id, b.id):
                problems.append(f"no edge {a} -> {b}")
        return problems

    def reachable_from(self, node: Node) -> Set[int]:
        """Ids of all nodes connected to the given node, itself included."""
        if node.id not in self.graph:
            return {node.id}
        return set(nx.node_connected_component(self.graph, node.id))

    def explain_unreachable(self, start: Node, goal: Node) -> str:
        """Describe why goal cannot be reached from start, or that it can."""
        reachable = self.reachable_from(start)
        if goal.id in reachable:
            return f"{goal} is reachable from {start}"
        if goal.id not in self.graph or self.graph.degree(goal.id) == 0:
            return f"{goal} has no visible neighbours"
        return (
            f"{goal} is not connected to {start}: start component has "
            f"{len(reachable)} node(s), "
            f"{nx.number_connected_components(self.graph)} component(s) in total"
        )

    def _node(self, node_id: int) -> Optional[Node]:
        for node in self._nodes:
            if node.id == node_id:
                return node
        if node_id in self.graph:
            attrs = self.graph.nodes[node_id]
            return Node(node_id, attrs["x"], attrs["y"], attrs["parent_wall"])
        return None
