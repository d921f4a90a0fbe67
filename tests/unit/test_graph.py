"""Unit tests for the graph module."""

import networkx as nx
import pytest

from visipath.graph import AdjacencyIndex, build_adjacency
from visipath.models import Edge, Node


@pytest.fixture
def triangle_edges():
    """Symmetric edges of a 3-4-5 triangle."""
    a, b, c = Node(0, 0, 0), Node(1, 3, 0), Node(2, 3, 4)
    edges = []
    for source, target, weight in [(a, b, 3.0), (b, c, 4.0), (a, c, 5.0)]:
        edges.append(Edge(source, target, weight))
        edges.append(Edge(target, source, weight))
    return edges


class TestAdjacencyIndex:
    """Tests for the AdjacencyIndex class."""

    def test_add_edge(self):
        """Add an edge to the index."""
        index = AdjacencyIndex()
        a, b = Node(0, 0, 0), Node(1, 1, 0)
        index.add_edge(Edge(a, b, 1.0))
        assert 0 in index
        assert 1 not in index
        assert index.neighbors(0) == [(b, 1.0)]
        assert index.edge_count == 1

    def test_missing_key_is_empty(self):
        """Unknown ids resolve to an empty list."""
        index = AdjacencyIndex()
        assert index[42] == []
        assert index.neighbors(42) == []
        assert 42 not in index

    def test_preserves_emission_order(self, triangle_edges):
        """Neighbours appear in the order their edges were added."""
        index = build_adjacency(triangle_edges)
        assert [n.id for n, _ in index[0]] == [1, 2]
        assert [n.id for n, _ in index[2]] == [1, 0]

    def test_len_and_iter(self, triangle_edges):
        """Length and iteration cover source ids."""
        index = build_adjacency(triangle_edges)
        assert len(index) == 3
        assert sorted(index) == [0, 1, 2]

    def test_has_edge_and_weight(self, triangle_edges):
        """Edge lookup by ids."""
        index = build_adjacency(triangle_edges)
        assert index.has_edge(0, 2)
        assert index.weight(2, 0) == 5.0
        assert not index.has_edge(0, 0)
        with pytest.raises(KeyError):
            index.weight(0, 0)

    def test_to_dict(self, triangle_edges):
        """Plain mapping export."""
        index = build_adjacency(triangle_edges)
        assert index.to_dict()[1] == [(0, 3.0), (2, 4.0)]


class TestToNetworkx:
    """Tests for the networkx export."""

    def test_undirected_graph(self, triangle_edges):
        """Symmetric pairs collapse onto undirected edges."""
        graph = build_adjacency(triangle_edges).to_networkx()
        assert isinstance(graph, nx.Graph)
        assert graph.number_of_nodes() == 3
        assert graph.number_of_edges() == 3
        assert graph[0][2]["weight"] == 5.0

    def test_node_attributes(self, triangle_edges):
        """Positions travel with the nodes."""
        graph = build_adjacency(triangle_edges).to_networkx()
        assert graph.nodes[2]["x"] == 3
        assert graph.nodes[2]["y"] == 4
        assert graph.nodes[2]["parent_wall"] is None

    def test_isolated_nodes_included(self, triangle_edges):
        """Extra nodes appear even without edges."""
        lonely = Node(9, 100, 100)
        graph = build_adjacency(triangle_edges).to_networkx([lonely])
        assert 9 in graph
        assert graph.degree(9) == 0

    def test_shortest_path_length(self, triangle_edges):
        """networkx sees the same weights the search does."""
        graph = build_adjacency(triangle_edges).to_networkx()
        assert nx.dijkstra_path_length(graph, 0, 2) == 5.0


class TestBuildAdjacency:
    """Tests for the build_adjacency function."""

    def test_empty(self):
        """No edges gives an empty index."""
        index = build_adjacency([])
        assert len(index) == 0
        assert index.edge_count == 0

    def test_from_generator(self, triangle_edges):
        """Any iterable of edges is accepted."""
        index = build_adjacency(e for e in triangle_edges)
        assert index.edge_count == 6
