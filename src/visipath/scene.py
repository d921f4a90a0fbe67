"""
Scene module: the owned collections a planner works on.

A Scene keeps the obstacle list, the node list and the start/goal
designation, and runs the build-then-search pipeline over them. It replaces
the global lists and mode switches of an interactive editor: placing a wall
adds its four corner nodes, placing a start or goal replaces the previous
one, and clear() resets everything including the node id counter.
"""

import logging
from typing import List, Optional

from .builder import BuildResult, VisibilityGraphBuilder
from .graph import AdjacencyIndex
from .models import Edge, Node, Obstacle
from .parser import parse_scene
from .pathfinder import (
    NOT_FOUND,
    AStarPathfinder,
    PathOrNotFound,
    SearchPreconditionError,
    path_length,
)
from .tracer import DiagnosticSink, PlanTrace

logger = logging.getLogger(__name__)


class Scene:
    """
    Obstacles, nodes and start/goal designation for one planning session.

    Example:
        >>> scene = Scene()
        >>> scene.add_wall(100, 100, 50, 50)
        >>> scene.set_start(0, 0)
        >>> scene.set_goal(200, 200)
        >>> path = scene.solve()
        >>> [str(node) for node in path]
    """

    def __init__(
        self,
        max_expansions: Optional[int] = None,
        debug: bool = False,
        sink: Optional[DiagnosticSink] = None,
    ):
        """
        Initialize an empty scene.

        Args:
            max_expansions: Optional cap on A* expansions per search
            debug: Record a PlanTrace of every build and search
            sink: Optional callable receiving progress messages
        """
        if max_expansions is not None and max_expansions <= 0:
            raise ValueError("max_expansions must be a positive integer or None")

        self.max_expansions = max_expansions
        self.debug = debug
        self.sink = sink

        self._obstacles: List[Obstacle] = []
        self._nodes: List[Node] = []
        self._start: Optional[Node] = None
        self._goal: Optional[Node] = None
        self._next_id = 0

        self._build: Optional[BuildResult] = None
        self._path: PathOrNotFound = NOT_FOUND
        self._trace: Optional[PlanTrace] = PlanTrace() if debug else None

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "Scene":
        """
        Create a scene from the text format understood by parse_scene().

        Args:
            text: Scene description
            **kwargs: Passed to the Scene constructor

        Raises:
            ParseError: If the description is malformed
        """
        definition = parse_scene(text)
        scene = cls(**kwargs)
        for wall in definition.walls:
            scene.add_obstacle(wall)
        if definition.start is not None:
            scene.set_start(definition.start.x, definition.start.y)
        if definition.goal is not None:
            scene.set_goal(definition.goal.x, definition.goal.y)
        return scene

    # Read-only views

    @property
    def obstacles(self) -> List[Obstacle]:
        return list(self._obstacles)

    @property
    def nodes(self) -> List[Node]:
        return list(self._nodes)

    @property
    def start(self) -> Optional[Node]:
        return self._start

    @property
    def goal(self) -> Optional[Node]:
        return self._goal

    @property
    def edges(self) -> List[Edge]:
        """Edges of the current build, empty until build() runs again."""
        return list(self._build.edges) if self._build else []

    @property
    def adjacency(self) -> AdjacencyIndex:
        """Adjacency index of the current build, empty until build() runs."""
        return self._build.adjacency if self._build else AdjacencyIndex()

    @property
    def path(self) -> PathOrNotFound:
        """Path of the last search, NOT_FOUND before the first search."""
        return self._path

    def get_trace(self) -> Optional[PlanTrace]:
        """Return the debug trace, or None when debug mode is off."""
        return self._trace

    # Placement

    def _new_node(self, x: float, y: float, parent_wall: Optional[int] = None) -> Node:
        node = Node(id=self._next_id, x=x, y=y, parent_wall=parent_wall)
        self._next_id += 1
        return node

    def _invalidate(self) -> None:
        # The last build and path describe a scene that no longer exists
        self._build = None
        self._path = NOT_FOUND

    def _diagnostic(self, message: str) -> None:
        if self._trace is not None:
            self._trace.log(message)
        if self.sink is not None:
            self.sink(message)

    def add_obstacle(self, obstacle: Obstacle) -> Obstacle:
        """Add an obstacle and its four corner nodes."""
        wall_id = len(self._obstacles)
        self._obstacles.append(obstacle)
        self._invalidate()
        for corner in obstacle.corners():
            self._nodes.append(self._new_node(corner.x, corner.y, parent_wall=wall_id))

        logger.debug("Added wall %d: %s", wall_id, obstacle)
        self._diagnostic(
            f"Created wall at ({obstacle.x:g}, {obstacle.y:g}) with width "
            f"{obstacle.width:g} and height {obstacle.height:g}"
        )
        return obstacle

    def add_wall(self, x: float, y: float, width: float, height: float) -> Obstacle:
        """
        Add a wall given its top-left corner and size.

        Raises:
            ValueError: If width or height is negative
        """
        return self.add_obstacle(Obstacle(x, y, width, height))

    def add_wall_from_drag(self, x0: float, y0: float, x1: float, y1: float) -> Obstacle:
        """Add a wall spanning two dragged corners, in any order."""
        return self.add_obstacle(Obstacle.from_corners(x0, y0, x1, y1))

    def _replace(self, old: Optional[Node], x: float, y: float) -> Node:
        if old is not None and old in self._nodes:
            self._nodes.remove(old)
        node = self._new_node(x, y)
        self._nodes.append(node)
        self._invalidate()
        return node

    def set_start(self, x: float, y: float) -> Node:
        """Place the start node, removing any previous start."""
        self._start = self._replace(self._start, x, y)
        self._diagnostic(f"Set start node at ({x:.1f}, {y:.1f})")
        return self._start

    def set_goal(self, x: float, y: float) -> Node:
        """Place the goal node, removing any previous goal."""
        self._goal = self._replace(self._goal, x, y)
        self._diagnostic(f"Set goal node at ({x:.1f}, {y:.1f})")
        return self._goal

    def set_start_from_drag(self, x0: float, y0: float, x1: float, y1: float) -> Node:
        """Place the start at the centre of a dragged rectangle."""
        return self.set_start((x0 + x1) / 2, (y0 + y1) / 2)

    def set_goal_from_drag(self, x0: float, y0: float, x1: float, y1: float) -> Node:
        """Place the goal at the centre of a dragged rectangle."""
        return self.set_goal((x0 + x1) / 2, (y0 + y1) / 2)

    def clear(self) -> None:
        """Remove all obstacles, nodes, derived graph state and the path."""
        self._obstacles.clear()
        self._nodes.clear()
        self._start = None
        self._goal = None
        self._next_id = 0
        self._invalidate()
        if self._trace is not None:
            self._trace.clear()
        self._diagnostic("Cleared all obstacles, nodes, and paths.")

    # Pipeline

    def build(self) -> BuildResult:
        """Rebuild the visibility graph from the current obstacles and nodes."""
        if self._trace is not None:
            self._trace.add_stage(
                "scene",
                {
                    "obstacles": len(self._obstacles),
                    "nodes": len(self._nodes),
                    "start": str(self._start) if self._start else None,
                    "goal": str(self._goal) if self._goal else None,
                },
            )

        builder = VisibilityGraphBuilder(sink=self._diagnostic)
        self._build = builder.build(self._obstacles, self._nodes)

        if self._trace is not None:
            self._trace.add_stage(
                "graph_built",
                {
                    "edges": len(self._build.edges),
                    "indexed_nodes": len(self._build.adjacency),
                    "pairs_considered": self._build.pairs_considered,
                    "pairs_pruned": self._build.pairs_pruned,
                    "pairs_blocked": self._build.pairs_blocked,
                },
            )
        return self._build

    def find_path(self) -> PathOrNotFound:
        """
        Search the visibility graph for a path from start to goal.

        The graph is rebuilt first if the scene changed since the last build.

        Returns:
            Ordered list of nodes, or NOT_FOUND

        Raises:
            SearchPreconditionError: If no start or goal has been placed
        """
        if self._start is None or self._goal is None:
            missing = "start" if self._start is None else "goal"
            raise SearchPreconditionError(f"Cannot search: no {missing} node set")

        if self._build is None:
            self.build()

        pathfinder = AStarPathfinder(
            max_expansions=self.max_expansions, sink=self._diagnostic
        )
        if self._trace is not None:
            self._trace.add_stage(
                "search_started",
                {"start": str(self._start), "goal": str(self._goal)},
            )

        self._path = pathfinder.find_path(
            self.adjacency, self._nodes, self._start, self._goal
        )

        if self._trace is not None:
            self._trace.add_stage(
                "search_finished",
                {
                    "outcome": "found" if self._path else "not_found",
                    "expansions": pathfinder.expansions,
                    "length": path_length(self._path) if self._path else None,
                    "path": [str(n) for n in self._path] if self._path else [],
                },
            )
        return self._path

    def solve(self) -> PathOrNotFound:
        """Build the graph and search it."""
        self._diagnostic("Beginning building of graph")
        self.build()
        return self.find_path()
