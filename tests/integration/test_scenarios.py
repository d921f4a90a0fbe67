"""
Integration tests for whole-scene path finding.

These tests go from scene text or Scene placement calls through graph
building and search, and check the result against independent geometry.
"""

import math

import networkx as nx
import pytest

from visipath import NOT_FOUND, Scene, build_visibility_graph, find_path
from visipath.debug import GraphInspector
from visipath.geometry import distance
from visipath.pathfinder import path_length


def assert_valid_path(scene, path):
    inspector = GraphInspector(scene.adjacency, scene.nodes)
    assert inspector.path_problems(path, scene.start, scene.goal) == []


class TestScenarios:
    """End-to-end searches over small scenes."""

    def test_open_field(self):
        """With no walls the path is the straight segment."""
        scene = Scene()
        scene.set_start(0, 0)
        scene.set_goal(10, 0)
        path = scene.solve()
        assert path == [scene.start, scene.goal]
        assert path_length(path) == pytest.approx(10.0)

    def test_single_wall(self, single_wall_scene):
        """The path bends around one corner of a blocking wall."""
        scene = single_wall_scene
        path = scene.solve()
        assert_valid_path(scene, path)

        straight = distance(scene.start, scene.goal)
        length = path_length(path)
        assert length > straight
        assert math.isfinite(length)
        assert length == pytest.approx(math.hypot(150, 100) + math.hypot(50, 100))

        corners = {(n.x, n.y) for n in path[1:-1]}
        assert 1 <= len(corners) <= 2
        assert corners <= {(100, 100), (150, 100), (100, 150), (150, 150)}

    def test_goal_inside_wall(self):
        """A goal strictly inside a wall cannot be reached."""
        scene = Scene()
        scene.add_wall(100, 100, 50, 50)
        scene.set_start(0, 0)
        scene.set_goal(125, 125)
        assert scene.solve() is NOT_FOUND

    def test_goal_inside_overlapping_walls(self):
        """Two overlapping walls around the goal leave no way in."""
        scene = Scene()
        scene.add_wall(0, 0, 100, 100)
        scene.add_wall(50, 50, 100, 100)
        scene.set_start(-20, -20)
        scene.set_goal(75, 75)
        assert scene.solve() is NOT_FOUND

    def test_closed_room(self, closed_room_scene):
        """Walls meeting edge to edge seal off the goal."""
        assert closed_room_scene.solve() is NOT_FOUND

    def test_start_equals_goal_position(self):
        """Start and goal on the same spot give a zero-length path."""
        scene = Scene()
        scene.set_start(5, 5)
        scene.set_goal(5, 5)
        path = scene.solve()
        assert path == [scene.start, scene.goal]
        assert path_length(path) == 0


class TestMaze:
    """Searches through the corridor maze."""

    @pytest.fixture
    def maze(self, maze_input):
        scene = Scene.from_text(maze_input)
        scene.solve()
        return scene

    def test_path_is_valid(self, maze):
        """The found path follows graph edges from start to goal."""
        assert maze.path
        assert_valid_path(maze, maze.path)

    def test_edges_symmetric_and_euclidean(self, maze):
        """Every edge has an equal-weight reverse and a distance weight."""
        inspector = GraphInspector(maze.adjacency, maze.nodes)
        assert inspector.asymmetric_edges() == []
        assert inspector.misweighted_edges() == []

    def test_cost_matches_dijkstra(self, maze):
        """A* finds the same cost as networkx's Dijkstra."""
        graph = maze.adjacency.to_networkx(maze.nodes)
        expected = nx.dijkstra_path_length(
            graph, maze.start.id, maze.goal.id, weight="weight"
        )
        assert path_length(maze.path) == pytest.approx(expected)

    def test_path_is_longer_than_straight_line(self, maze):
        """The walls force a detour."""
        assert path_length(maze.path) > distance(maze.start, maze.goal)


class TestFunctionalAPI:
    """The builder and search used without a Scene."""

    def test_build_then_search(self, single_wall_scene):
        """build_visibility_graph() and find_path() compose."""
        scene = single_wall_scene
        result = build_visibility_graph(scene.obstacles, scene.nodes)
        path = find_path(result.adjacency, scene.nodes, scene.start, scene.goal)
        assert path_length(path) == pytest.approx(
            math.hypot(150, 100) + math.hypot(50, 100)
        )
