"""
Geometry kernel for visibility testing.

All predicates use open intervals: touching a rectangle corner or sliding
along one of its edges never counts as a collision. Obstacle corners are graph
nodes that lie exactly on those boundaries, and they must stay visible to
their neighbours.
"""

import math
from typing import Iterable, Union

from .models import Node, Obstacle, Point

PointLike = Union[Point, Node]


def distance(a: PointLike, b: PointLike) -> float:
    """Euclidean distance between two positions."""
    return math.hypot(a.x - b.x, a.y - b.y)


def segments_intersect(
    a1: PointLike, a2: PointLike, b1: PointLike, b2: PointLike
) -> bool:
    """
    Check whether segments a1-a2 and b1-b2 cross strictly inside both.

    Solves for lambda (position along a1-a2) and gamma (position along b1-b2)
    using the 2D cross product of the direction vectors. Parallel and
    collinear segments have a zero determinant and are reported as not
    intersecting. Shared endpoints are not intersections either.
    """
    det = (a2.x - a1.x) * (b2.y - b1.y) - (a2.y - a1.y) * (b2.x - b1.x)
    if det == 0:
        return False

    lam = ((b2.y - b1.y) * (b2.x - a1.x) + (b1.x - b2.x) * (b2.y - a1.y)) / det
    gamma = ((a1.y - a2.y) * (b2.x - a1.x) + (a2.x - a1.x) * (b2.y - a1.y)) / det

    return 0 < lam < 1 and 0 < gamma < 1


def point_in_rect(p: PointLike, r: Obstacle) -> bool:
    """Strict interior test. Boundary points are outside."""
    return r.x < p.x < r.right and r.y < p.y < r.bottom


def _passes_through_interior(a: PointLike, b: PointLike, r: Obstacle) -> bool:
    """
    Check whether segment a-b enters the open interior of r.

    Clips the segment against the closed rectangle (Liang-Barsky) and tests
    the midpoint of the clipped span. A segment that hits no edge strictly
    can still pass through the body when it enters and leaves at corners,
    e.g. along the rectangle's diagonal.
    """
    if r.width == 0 or r.height == 0:
        return False

    dx = b.x - a.x
    dy = b.y - a.y
    t_enter, t_exit = 0.0, 1.0

    for p, q in (
        (-dx, a.x - r.x),
        (dx, r.right - a.x),
        (-dy, a.y - r.y),
        (dy, r.bottom - a.y),
    ):
        if p == 0:
            if q < 0:
                return False
            continue
        t = q / p
        if p < 0:
            t_enter = max(t_enter, t)
        else:
            t_exit = min(t_exit, t)
        if t_enter > t_exit:
            return False

    if t_enter >= t_exit:
        return False

    t_mid = (t_enter + t_exit) / 2
    return point_in_rect(Point(a.x + t_mid * dx, a.y + t_mid * dy), r)


def segment_blocked_by_rect(a: PointLike, b: PointLike, r: Obstacle) -> bool:
    """
    Check whether rectangle r obstructs the segment a-b.

    Blocked means the segment strictly crosses one of the four boundary
    edges, has an endpoint strictly inside, or cuts through the interior
    between two boundary points. Corner touches and edge-hugging segments
    are not blocked.
    """
    for p1, p2 in r.edges():
        if segments_intersect(a, b, p1, p2):
            return True

    if point_in_rect(a, r) or point_in_rect(b, r):
        return True

    return _passes_through_interior(a, b, r)


def is_visible(a: PointLike, b: PointLike, obstacles: Iterable[Obstacle]) -> bool:
    """Return True when no obstacle blocks the straight segment a-b."""
    for obstacle in obstacles:
        if segment_blocked_by_rect(a, b, obstacle):
            return False
    return True
