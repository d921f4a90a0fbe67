"""
Graph module for visibility-graph pathfinding.

Provides the adjacency index the A* search walks.
"""

from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, Tuple

import networkx as nx

from .models import Edge, Node

Neighbor = Tuple[Node, float]


class AdjacencyIndex:
    """
    Mapping from node id to the ordered list of (neighbor, weight) pairs.

    The index is a snapshot: it is built once from an edge list and never
    updated. Querying a node with no visible neighbours gives an empty list.
    """

    def __init__(self):
        self._neighbors: Dict[int, List[Neighbor]] = defaultdict(list)
        self._nodes: Dict[int, Node] = {}
        self._edge_count = 0

    def add_edge(self, edge: Edge) -> None:
        """Append a directed edge to its source's neighbour list."""
        self._nodes[edge.source.id] = edge.source
        self._nodes[edge.target.id] = edge.target
        self._neighbors[edge.source.id].append((edge.target, edge.weight))
        self._edge_count += 1

    def neighbors(self, node_id: int) -> List[Neighbor]:
        """Get (neighbor, weight) pairs for a node, in edge emission order."""
        return self._neighbors.get(node_id, [])

    def __getitem__(self, node_id: int) -> List[Neighbor]:
        return self.neighbors(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._neighbors

    def __iter__(self) -> Iterator[int]:
        return iter(self._neighbors)

    def __len__(self) -> int:
        return len(self._neighbors)

    @property
    def edge_count(self) -> int:
        """Number of directed edges indexed."""
        return self._edge_count

    def items(self) -> Iterator[Tuple[int, List[Neighbor]]]:
        return iter(self._neighbors.items())

    def has_edge(self, source_id: int, target_id: int) -> bool:
        return any(n.id == target_id for n, _ in self.neighbors(source_id))

    def weight(self, source_id: int, target_id: int) -> float:
        """Weight of the first edge source -> target, KeyError if absent."""
        for neighbor, weight in self.neighbors(source_id):
            if neighbor.id == target_id:
                return weight
        raise KeyError((source_id, target_id))

    def to_dict(self) -> Dict[int, List[Tuple[int, float]]]:
        """Plain id -> [(neighbor id, weight)] mapping, for diagnostics."""
        return {
            node_id: [(n.id, w) for n, w in neighbors]
            for node_id, neighbors in self._neighbors.items()
        }

    def to_networkx(self, nodes: Iterable[Node] = ()) -> nx.Graph:
        """
        Export the index as an undirected networkx graph.

        Edges are stored in symmetric pairs, so collapsing them onto an
        undirected graph loses nothing. Extra ``nodes`` are added even when
        isolated, which keeps unreachable start/goal nodes visible.

        Args:
            nodes: Additional nodes to include

        Returns:
            networkx.Graph keyed by node id, with x/y/parent_wall node
            attributes and a weight edge attribute
        """
        graph = nx.Graph()
        for node in list(self._nodes.values()) + list(nodes):
            graph.add_node(node.id, x=node.x, y=node.y, parent_wall=node.parent_wall)
        for source_id, neighbors in self._neighbors.items():
            for neighbor, weight in neighbors:
                graph.add_edge(source_id, neighbor.id, weight=weight)
        return graph


def build_adjacency(edges: Iterable[Edge]) -> AdjacencyIndex:
    """
    Create an AdjacencyIndex from a list of edges.

    Args:
        edges: Directed edges, grouped by source in emission order

    Returns:
        AdjacencyIndex object
    """
    index = AdjacencyIndex()
    for edge in edges:
        index.add_edge(edge)
    return index
