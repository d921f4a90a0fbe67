"""
Tests for the debug module.

These tests verify GraphInspector's invariant checks and the logging sink.
"""

import logging

from visipath.debug import GraphInspector, logging_sink
from visipath.graph import build_adjacency
from visipath.models import Edge, Node


class TestLoggingSink:
    """Tests for logging_sink()."""

    def test_forwards_to_logger(self, caplog):
        """Messages reach the logger at the chosen level."""
        logger = logging.getLogger("visipath.test")
        sink = logging_sink(logger, logging.INFO)
        with caplog.at_level(logging.INFO, logger="visipath.test"):
            sink("Connected #0 <-> #1")
        assert "Connected #0 <-> #1" in caplog.text

    def test_percent_signs_are_literal(self, caplog):
        """Messages are not treated as format strings."""
        logger = logging.getLogger("visipath.test")
        sink = logging_sink(logger, logging.INFO)
        with caplog.at_level(logging.INFO, logger="visipath.test"):
            sink("100% done")
        assert "100% done" in caplog.text


class TestGraphInspectorOnScene:
    """GraphInspector against real builds."""

    def test_build_is_symmetric(self, single_wall_scene):
        """A real build has no one-way edges."""
        single_wall_scene.build()
        inspector = GraphInspector(single_wall_scene.adjacency, single_wall_scene.nodes)
        assert inspector.asymmetric_edges() == []

    def test_build_weights_are_euclidean(self, single_wall_scene):
        """A real build has no misweighted edges."""
        single_wall_scene.build()
        inspector = GraphInspector(single_wall_scene.adjacency, single_wall_scene.nodes)
        assert inspector.misweighted_edges() == []

    def test_found_path_is_valid(self, single_wall_scene):
        """A found path passes validation."""
        path = single_wall_scene.solve()
        inspector = GraphInspector(single_wall_scene.adjacency, single_wall_scene.nodes)
        assert inspector.path_problems(
            path, single_wall_scene.start, single_wall_scene.goal
        ) == []

    def test_explain_reachable(self, single_wall_scene):
        """A reachable goal is reported as such."""
        single_wall_scene.build()
        inspector = GraphInspector(single_wall_scene.adjacency, single_wall_scene.nodes)
        message = inspector.explain_unreachable(
            single_wall_scene.start, single_wall_scene.goal
        )
        assert "is reachable" in message

    def test_explain_isolated_goal(self, closed_room_scene):
        """An enclosed goal is reported as having no neighbours."""
        closed_room_scene.build()
        inspector = GraphInspector(closed_room_scene.adjacency, closed_room_scene.nodes)
        message = inspector.explain_unreachable(
            closed_room_scene.start, closed_room_scene.goal
        )
        assert "no visible neighbours" in message


class TestGraphInspectorChecks:
    """GraphInspector against hand-made graphs."""

    def test_detects_one_way_edge(self):
        """An edge without its reverse is reported."""
        a, b = Node(0, 0, 0), Node(1, 1, 0)
        inspector = GraphInspector(build_adjacency([Edge(a, b, 1.0)]))
        assert inspector.asymmetric_edges() == [(0, 1)]

    def test_detects_unequal_reverse_weight(self):
        """A reverse edge with a different weight is reported."""
        a, b = Node(0, 0, 0), Node(1, 1, 0)
        inspector = GraphInspector(build_adjacency([Edge(a, b, 1.0), Edge(b, a, 2.0)]))
        assert sorted(inspector.asymmetric_edges()) == [(0, 1), (1, 0)]

    def test_detects_misweighted_edge(self):
        """A weight different from the distance is reported."""
        a, b = Node(0, 0, 0), Node(1, 3, 4)
        inspector = GraphInspector(
            build_adjacency([Edge(a, b, 7.0), Edge(b, a, 5.0)]), [a, b]
        )
        assert inspector.misweighted_edges() == [(0, 1)]

    def test_path_problems(self):
        """Wrong endpoints and missing edges are all listed."""
        a, b, c = Node(0, 0, 0), Node(1, 1, 0), Node(2, 2, 0)
        inspector = GraphInspector(build_adjacency([Edge(a, b, 1.0), Edge(b, a, 1.0)]))
        problems = inspector.path_problems([b, c], a, b)
        assert "path starts at #1(1, 0), not #0(0, 0)" in problems
        assert "path ends at #2(2, 0), not #1(1, 0)" in problems
        assert "no edge #1(1, 0) -> #2(2, 0)" in problems

    def test_empty_path(self):
        """An empty path is a problem in itself."""
        inspector = GraphInspector(build_adjacency([]))
        assert inspector.path_problems([], None, None) == ["path is empty"]

    def test_reachable_from(self):
        """Connected components are reported by id."""
        a, b, c = Node(0, 0, 0), Node(1, 1, 0), Node(2, 50, 50)
        inspector = GraphInspector(
            build_adjacency([Edge(a, b, 1.0), Edge(b, a, 1.0)]), [a, b, c]
        )
        assert inspector.reachable_from(a) == {0, 1}
        assert inspector.reachable_from(c) == {2}

    def test_explain_separate_components(self):
        """A goal in another component is described with component counts."""
        a, b = Node(0, 0, 0), Node(1, 1, 0)
        c, d = Node(2, 50, 50), Node(3, 51, 50)
        edges = [Edge(a, b, 1.0), Edge(b, a, 1.0), Edge(c, d, 1.0), Edge(d, c, 1.0)]
        inspector = GraphInspector(build_adjacency(edges), [a, b, c, d])
        message = inspector.explain_unreachable(a, c)
        assert "is not connected" in message
        assert "2 component(s)" in message
