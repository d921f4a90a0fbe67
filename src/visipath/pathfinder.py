"""
A* search over a visibility graph.

The heuristic is the straight-line distance to the goal. Every edge weight
is itself a straight-line distance, so the heuristic is admissible and
consistent and the first time the goal leaves the frontier its path is
optimal.

No closed set is kept: a node that was already expanded is put back on the
frontier whenever a strictly cheaper route to it turns up.
"""

import heapq
import itertools
import logging
import math
from enum import Enum
from typing import Dict, Iterable, List, Optional, Union

from .geometry import distance
from .graph import AdjacencyIndex
from .models import Node
from .tracer import DiagnosticSink

logger = logging.getLogger(__name__)


class PathfindingError(Exception):
    """Base class for search failures that are not a plain "no path"."""

    pass


class SearchPreconditionError(PathfindingError):
    """Raised when a search is requested without a start or a goal."""

    pass


class SearchLimitError(PathfindingError):
    """Raised when a search exceeds its expansion cap."""

    pass


class PathStatus(Enum):
    """Outcome marker for searches that end without a path."""

    NOT_FOUND = "not_found"

    def __bool__(self) -> bool:
        return False


NOT_FOUND = PathStatus.NOT_FOUND

PathOrNotFound = Union[List[Node], PathStatus]


def heuristic(a: Node, b: Node) -> float:
    """Euclidean distance; never more than any route between a and b."""
    return distance(a, b)


def path_length(path: Iterable[Node]) -> float:
    """Total Euclidean length of a node sequence."""
    nodes = list(path)
    return sum(distance(a, b) for a, b in zip(nodes, nodes[1:]))


class AStarPathfinder:
    """
    A* search with a binary-heap frontier.

    The heap holds (estimated total cost, insertion order, node id). Entries
    go stale when a node's estimate improves; stale entries are skipped when
    popped. Ties on estimated cost go to the earliest insertion.
    """

    def __init__(
        self,
        max_expansions: Optional[int] = None,
        sink: Optional[DiagnosticSink] = None,
    ):
        """
        Initialize the pathfinder.

        Args:
            max_expansions: Optional cap on frontier expansions; None means
                run until the frontier is empty
            sink: Optional callable receiving progress messages
        """
        if max_expansions is not None and max_expansions <= 0:
            raise ValueError("max_expansions must be a positive integer or None")
        self.max_expansions = max_expansions
        self.sink = sink
        self.expansions = 0

    def _emit(self, message: str) -> None:
        if self.sink is not None:
            self.sink(message)

    def find_path(
        self,
        adjacency: AdjacencyIndex,
        all_nodes: Iterable[Node],
        start: Optional[Node],
        goal: Optional[Node],
    ) -> PathOrNotFound:
        """
        Find the shortest path from start to goal.

        Args:
            adjacency: Adjacency index of the visibility graph
            all_nodes: Every node in the scene
            start: Node the path begins at
            goal: Node the path ends at

        Returns:
            List of nodes from start to goal inclusive, or NOT_FOUND when
            the goal cannot be reached

        Raises:
            SearchPreconditionError: If start or goal is missing
            SearchLimitError: If max_expansions is exceeded
        """
        if start is None or goal is None:
            missing = "start" if start is None else "goal"
            raise SearchPreconditionError(f"Cannot search: no {missing} node set")

        self.expansions = 0

        # Unseen nodes default to infinite cost
        cost_from_start: Dict[int, float] = {node.id: math.inf for node in all_nodes}
        estimated_total_cost: Dict[int, float] = dict(cost_from_start)
        came_from: Dict[int, Node] = {}
        by_id: Dict[int, Node] = {start.id: start}

        cost_from_start[start.id] = 0.0
        estimated_total_cost[start.id] = heuristic(start, goal)

        counter = itertools.count()
        frontier = [(estimated_total_cost[start.id], next(counter), start.id)]
        in_frontier = {start.id}

        self._emit(
            f"Searching from {start} to {goal}, "
            f"heuristic {estimated_total_cost[start.id]:.1f}"
        )

        while frontier:
            f_score, _, current_id = heapq.heappop(frontier)
            if current_id not in in_frontier:
                continue
            if f_score != estimated_total_cost[current_id]:
                continue

            current = by_id[current_id]
            if current_id == goal.id:
                path = self._reconstruct_path(came_from, current)
                logger.info(
                    "Path found: %d nodes, length %.3f, %d expansions",
                    len(path),
                    cost_from_start[current_id],
                    self.expansions,
                )
                self._emit(
                    f"Reached goal after {self.expansions} expansions, "
                    f"cost {cost_from_start[current_id]:.1f}"
                )
                return path

            in_frontier.discard(current_id)
            self.expansions += 1
            if self.max_expansions is not None and self.expansions > self.max_expansions:
                raise SearchLimitError(
                    f"Search exceeded {self.max_expansions} expansions"
                )

            logger.debug("Expanding %s (f=%.3f)", current, f_score)

            for neighbor, weight in adjacency.neighbors(current_id):
                tentative = cost_from_start[current_id] + weight
                if tentative < cost_from_start.get(neighbor.id, math.inf):
                    came_from[neighbor.id] = current
                    by_id[neighbor.id] = neighbor
                    cost_from_start[neighbor.id] = tentative
                    estimated_total_cost[neighbor.id] = tentative + heuristic(
                        neighbor, goal
                    )
                    in_frontier.add(neighbor.id)
                    heapq.heappush(
                        frontier,
                        (estimated_total_cost[neighbor.id], next(counter), neighbor.id),
                    )

        logger.info("No path found after %d expansions", self.expansions)
        self._emit(f"Frontier exhausted after {self.expansions} expansions")
        return NOT_FOUND

    @staticmethod
    def _reconstruct_path(came_from: Dict[int, Node], current: Node) -> List[Node]:
        path = [current]
        while current.id in came_from:
            current = came_from[current.id]
            path.append(current)
        path.reverse()
        return path


def find_path(
    adjacency: AdjacencyIndex,
    all_nodes: Iterable[Node],
    start: Optional[Node],
    goal: Optional[Node],
    max_expansions: Optional[int] = None,
    sink: Optional[DiagnosticSink] = None,
) -> PathOrNotFound:
    """
    Convenience function to run an A* search.

    Returns:
        Ordered list of nodes from start to goal, or NOT_FOUND
    """
    pathfinder = AStarPathfinder(max_expansions=max_expansions, sink=sink)
    return pathfinder.find_path(adjacency, all_nodes, start, goal)
