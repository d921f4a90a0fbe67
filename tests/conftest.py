"""Pytest configuration and shared fixtures for visipath tests."""

import pytest

from visipath import Node, Obstacle, Scene


@pytest.fixture
def square():
    """A 50x50 wall with its top-left corner at (100, 100)."""
    return Obstacle(100, 100, 50, 50)


@pytest.fixture
def square_corners(square):
    """Corner nodes of the square wall, tagged with wall id 0."""
    return [
        Node(id=i, x=p.x, y=p.y, parent_wall=0)
        for i, p in enumerate(square.corners())
    ]


@pytest.fixture
def single_wall_scene():
    """One wall between a start at the origin and a goal at (200, 200)."""
    scene = Scene()
    scene.add_wall(100, 100, 50, 50)
    scene.set_start(0, 0)
    scene.set_goal(200, 200)
    return scene


@pytest.fixture
def maze_input():
    """Scene text with several walls forming corridors."""
    return """
    # outer corridor walls
    wall 50 0 20 150
    wall 130 60 20 150
    wall 210 0 20 150
    wall 0 220 300 10
    start 10 10
    goal 280 10
    """


@pytest.fixture
def closed_room_scene():
    """Goal enclosed by four walls that meet without gaps."""
    scene = Scene()
    scene.add_wall(0, 0, 100, 10)
    scene.add_wall(0, 90, 100, 10)
    scene.add_wall(0, 0, 10, 100)
    scene.add_wall(90, 0, 10, 100)
    scene.set_start(-50, -50)
    scene.set_goal(50, 50)
    return scene
