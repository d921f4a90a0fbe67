"""
Visibility graph construction.

Connects every pair of nodes that can see each other past all obstacles,
with two edges per visible pair (one in each direction) weighted by the
Euclidean distance between them.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .geometry import distance, is_visible
from .graph import AdjacencyIndex, build_adjacency
from .models import Edge, Node, Obstacle
from .tracer import DiagnosticSink

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Result of a visibility graph build."""

    edges: List[Edge] = field(default_factory=list)
    adjacency: AdjacencyIndex = field(default_factory=AdjacencyIndex)
    pairs_considered: int = 0
    pairs_pruned: int = 0
    pairs_blocked: int = 0

    def __iter__(self):
        # Allows ``edges, adjacency = build_visibility_graph(...)``
        return iter((self.edges, self.adjacency))


def same_wall_pair_allowed(a: Node, b: Node) -> bool:
    """
    Decide whether two nodes may be connected given their parent walls.

    Corners of the same wall are only joined along the wall's sides, never
    across its diagonal. Nodes of different walls, or without a wall, are
    always allowed through to the visibility test.
    """
    if a.parent_wall is None or b.parent_wall is None:
        return True
    if a.parent_wall != b.parent_wall:
        return True

    dx = abs(a.x - b.x)
    dy = abs(a.y - b.y)
    aligned_horizontally = dx > 0 and dy == 0
    aligned_vertically = dy > 0 and dx == 0
    return aligned_horizontally or aligned_vertically


class VisibilityGraphBuilder:
    """
    Builds a pruned, weighted, undirected visibility graph.

    Every call to build() produces a fresh BuildResult; nothing is carried
    over from an earlier build.
    """

    def __init__(self, sink: Optional[DiagnosticSink] = None):
        self.sink = sink

    def _emit(self, message: str) -> None:
        if self.sink is not None:
            self.sink(message)

    def build(
        self, obstacles: Sequence[Obstacle], nodes: Sequence[Node]
    ) -> BuildResult:
        """
        Build the visibility graph for a set of obstacles and nodes.

        Args:
            obstacles: Rectangles that block line of sight
            nodes: Candidate vertices; ids must be unique

        Returns:
            BuildResult with the symmetric edge list and its adjacency index
        """
        result = BuildResult()
        self._emit(
            f"Beginning build: {len(nodes)} nodes, {len(obstacles)} obstacles"
        )

        for i in range(len(nodes)):
            for j in range(i + 1, len(nodes)):
                node_a = nodes[i]
                node_b = nodes[j]
                result.pairs_considered += 1

                if not same_wall_pair_allowed(node_a, node_b):
                    result.pairs_pruned += 1
                    logger.debug("Pruned same-wall diagonal %s - %s", node_a, node_b)
                    continue

                if not is_visible(node_a, node_b, obstacles):
                    result.pairs_blocked += 1
                    continue

                weight = distance(node_a, node_b)
                result.edges.append(Edge(node_a, node_b, weight))
                result.edges.append(Edge(node_b, node_a, weight))
                self._emit(f"Connected {node_a} <-> {node_b} ({weight:.1f})")

        result.adjacency = build_adjacency(result.edges)

        logger.info(
            "Built visibility graph: %d nodes, %d directed edges "
            "(%d pairs pruned, %d blocked)",
            len(nodes),
            len(result.edges),
            result.pairs_pruned,
            result.pairs_blocked,
        )
        self._emit(
            f"Build complete: {len(result.edges)} directed edges, "
            f"{result.pairs_pruned} pruned, {result.pairs_blocked} blocked"
        )
        return result


def build_visibility_graph(
    obstacles: Sequence[Obstacle],
    nodes: Sequence[Node],
    sink: Optional[DiagnosticSink] = None,
) -> BuildResult:
    """
    Convenience function to build a visibility graph.

    Args:
        obstacles: Rectangles that block line of sight
        nodes: Candidate vertices
        sink: Optional callable receiving progress messages

    Returns:
        BuildResult with ``edges`` and ``adjacency``
    """
    return VisibilityGraphBuilder(sink=sink).build(obstacles, nodes)
