"""Planar geometry used to decide which tuning region a point falls in."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

MAX_NUM_VERTICES = 20
"""Maximum number of vertices a region may have."""

TUNER_MAX_RANKS = 1024.0 * 1024
"""Largest rank count the tuner handles."""

TUNER_MAX_SIZE = 100.0 * 1024 * 1024 * 1024
"""Largest message size the tuner handles."""

INSIDE = 1
ON_EDGE = 0
OUTSIDE = -1


@dataclass(frozen=True)
class Point:
    """A point or vector in the (message size, rank count) plane."""

    x: float
    y: float

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def dot(self, other: Point) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Point) -> float:
        return self.x * other.y - self.y * other.x

    def madd(self, scale: float, other: Point) -> Point:
        """Return self + scale * other."""
        return Point(self.x + scale * other.x, self.y + scale * other.y)


@dataclass(frozen=True)
class Region:
    """A polygon that selects an algorithm/protocol pair."""

    algorithm: int
    protocol: int
    vertices: tuple[Point, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        vertices = tuple(
            v if isinstance(v, Point) else Point(float(v[0]), float(v[1]))
            for v in self.vertices
        )
        if len(vertices) > MAX_NUM_VERTICES:
            raise ValueError(
                f"region has {len(vertices)} vertices, at most {MAX_NUM_VERTICES} allowed"
            )
        object.__setattr__(self, "vertices", vertices)

    @property
    def num_vertices(self) -> int:
        return len(self.vertices)

    def edges(self):
        """Yield consecutive vertex pairs, closing the polygon."""
        count = len(self.vertices)
        for i, start in enumerate(self.vertices):
            yield start, self.vertices[(i + 1) % count]


def intersect(x0: Point, x1: Point, y0: Point, y1: Point, eps: float):
    """Check whether segment x0->x1 crosses segment y0->y1.

    Returns ``(result, point)`` where result is 1 for a crossing, -1 for
    none and 0 when the edges are parallel or the crossing lies too close
    to y0 or y1. ``point`` is the intersection of the lines, or None when
    they are parallel.
    """
    dx = x1 - x0
    dy = y1 - y0
    d = dy.cross(dx)
    if abs(d) < eps:
        return 0, None

    a = (x0.cross(dx) - y0.cross(dx)) / d
    sect = y0.madd(a, dy)

    if a < -eps or a > 1 + eps:
        return -1, sect
    if a < eps or a > 1 - eps:
        return 0, sect

    a = (x0.cross(dy) - y0.cross(dy)) / d
    if a < 0 or a > 1:
        return -1, sect
    return 1, sect


def distance(x: Point, y0: Point, y1: Point, eps: float) -> float:
    """Distance from x to the segment y0->y1, or infinity if x projects outside it."""
    dy = y1 - y0
    x1 = Point(x.x + dy.y, x.y - dy.x)
    result, sect = intersect(x, x1, y0, y1, eps)
    if result == -1:
        return math.inf
    if sect is None:
        # Degenerate (zero-length) edge: measure to its single point.
        sect = y0
    s = sect - x
    return math.sqrt(s.dot(s))


def extend_region(a: Point, b: Point, z: Point) -> Point:
    """Extend the line through a and b to the farthest point sharing z's x or y."""
    if a.x == b.x:
        return Point(a.x, z.y)
    if a.y == b.y:
        return Point(z.x, a.y)

    m = (a.y - b.y) / (a.x - b.x)
    c = b.y - m * b.x
    projected_zy = m * z.x + c
    if projected_zy < z.y:
        return Point(z.x, projected_zy)
    return Point((z.y - c) / m, z.y)


def is_inside_region(point: Point, region: Region) -> int:
    """Ray-cast test: 1 if inside, -1 if outside, 0 if on an edge."""
    if region.num_vertices <= 1:
        raise ValueError("a region needs more than one vertex")

    eps = 1e-10
    if any(distance(point, start, end, eps) < eps for start, end in region.edges()):
        return ON_EDGE

    min_x = min(v.x for v in region.vertices)
    max_x = max(v.x for v in region.vertices)
    min_y = min(v.y for v in region.vertices)
    max_y = max(v.y for v in region.vertices)
    if point.x < min_x or point.x > max_x or point.y < min_y or point.y > max_y:
        return OUTSIDE

    far = Point(2.0 * TUNER_MAX_SIZE, 2.0 * TUNER_MAX_RANKS)
    crosses = sum(
        1 for start, end in region.edges() if intersect(point, far, start, end, eps)[0] == 1
    )
    return INSIDE if crosses % 2 else OUTSIDE