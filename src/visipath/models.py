"""
Data models for visibility-graph pathfinding.

This module contains the immutable records shared by every stage of the
pipeline: the geometry kernel reads points and obstacles, the builder turns
nodes into edges, and the pathfinder walks the resulting adjacency index.

Classes:
    Point: A bare 2D position.
    Obstacle: Axis-aligned rectangular wall.
    Node: A graph vertex (obstacle corner, start or goal).
    Edge: A directed, weighted connection between two visible nodes.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Point:
    """A position in the plane. Screen coordinates: y grows downwards."""

    x: float
    y: float


@dataclass(frozen=True)
class Obstacle:
    """
    Axis-aligned rectangular obstacle.

    Attributes:
        x: X coordinate of the top-left corner.
        y: Y coordinate of the top-left corner.
        width: Horizontal extent, never negative.
        height: Vertical extent, never negative.
    """

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Obstacle size must be non-negative, got "
                f"width={self.width}, height={self.height}"
            )

    @classmethod
    def from_corners(cls, x0: float, y0: float, x1: float, y1: float) -> "Obstacle":
        """
        Create an obstacle from two opposite corners in any order.

        This is how a dragged selection becomes a wall: the rectangle is
        normalised so that (x, y) is the top-left corner.
        """
        return cls(
            x=min(x0, x1),
            y=min(y0, y1),
            width=abs(x1 - x0),
            height=abs(y1 - y0),
        )

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def corners(self) -> List[Point]:
        """Return corners as top-left, top-right, bottom-left, bottom-right."""
        return [
            Point(self.x, self.y),
            Point(self.right, self.y),
            Point(self.x, self.bottom),
            Point(self.right, self.bottom),
        ]

    def edges(self) -> List[tuple]:
        """Return the four boundary segments as (start, end) point pairs."""
        top_left, top_right, bottom_left, bottom_right = self.corners()
        return [
            (top_left, top_right),
            (top_left, bottom_left),
            (top_right, bottom_right),
            (bottom_left, bottom_right),
        ]


@dataclass(frozen=True)
class Node:
    """
    A vertex of the visibility graph.

    Attributes:
        id: Unique, monotonically assigned identifier (the graph key).
        x: X coordinate.
        y: Y coordinate.
        parent_wall: Id of the obstacle this node is a corner of, or None
            for free-standing nodes such as the start and goal.
    """

    id: int
    x: float
    y: float
    parent_wall: Optional[int] = None

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)

    def __str__(self) -> str:
        return f"#{self.id}({self.x:g}, {self.y:g})"


@dataclass(frozen=True)
class Edge:
    """A directed edge between two mutually visible nodes."""

    source: Node
    target: Node
    weight: float

    def reversed(self) -> "Edge":
        return Edge(source=self.target, target=self.source, weight=self.weight)
