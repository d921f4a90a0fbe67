"""
visipath - Shortest paths around rectangular walls

A Python library that connects obstacle corners into a visibility graph and
searches it with A*.

Example:
    >>> from visipath import Scene
    >>> scene = Scene()
    >>> scene.add_wall(100, 100, 50, 50)
    >>> scene.set_start(0, 0)
    >>> scene.set_goal(200, 200)
    >>> path = scene.solve()
    >>> print(" -> ".join(str(node) for node in path))

Core API Example:
    >>> from visipath import build_visibility_graph, find_path
    >>> edges, adjacency = build_visibility_graph(obstacles, nodes)
    >>> path = find_path(adjacency, nodes, start, goal)
    >>> if path is NOT_FOUND:
    ...     print("no path")
"""

from .builder import BuildResult, VisibilityGraphBuilder, build_visibility_graph
from .debug import GraphInspector, logging_sink
from .geometry import (
    distance,
    is_visible,
    point_in_rect,
    segment_blocked_by_rect,
    segments_intersect,
)
from .graph import AdjacencyIndex, build_adjacency
from .models import Edge, Node, Obstacle, Point
from .parser import ParseError, Parser, SceneDefinition, parse_scene
from .pathfinder import (
    NOT_FOUND,
    AStarPathfinder,
    PathfindingError,
    PathStatus,
    SearchLimitError,
    SearchPreconditionError,
    find_path,
    heuristic,
    path_length,
)
from .png_renderer import ScenePNGRenderer, render_to_png
from .scene import Scene
from .tracer import DiagnosticSink, PipelineStage, PlanTrace

__version__ = "0.1.0"

__all__ = [
    # Main API
    "Scene",
    "build_visibility_graph",
    "find_path",
    "is_visible",
    # Models
    "Point",
    "Obstacle",
    "Node",
    "Edge",
    # Geometry
    "distance",
    "segments_intersect",
    "point_in_rect",
    "segment_blocked_by_rect",
    # Graph
    "AdjacencyIndex",
    "build_adjacency",
    "BuildResult",
    "VisibilityGraphBuilder",
    # Search
    "AStarPathfinder",
    "NOT_FOUND",
    "PathStatus",
    "heuristic",
    "path_length",
    "PathfindingError",
    "SearchPreconditionError",
    "SearchLimitError",
    # Parser
    "Parser",
    "ParseError",
    "SceneDefinition",
    "parse_scene",
    # Rendering
    "ScenePNGRenderer",
    "render_to_png",
    # Debug/Tracing
    "PlanTrace",
    "PipelineStage",
    "DiagnosticSink",
    "GraphInspector",
    "logging_sink",
]
