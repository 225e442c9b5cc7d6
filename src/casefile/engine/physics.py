"""Minimal arcade physics: vectors, axis-aligned boxes and a body step.

All boxes are centre-anchored, matching how quest locations are specified.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Vector:
    x: float = 0.0
    y: float = 0.0

    @property
    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def scaled(self, factor: float) -> "Vector":
        return Vector(self.x * factor, self.y * factor)

    def normalized(self) -> "Vector":
        length = self.length
        if length == 0:
            return ZERO
        return Vector(self.x / length, self.y / length)


ZERO = Vector()


@dataclass(frozen=True)
class Box:
    """An axis-aligned rectangle given by its centre and size."""

    cx: float
    cy: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.cx - self.width / 2

    @property
    def right(self) -> float:
        return self.cx + self.width / 2

    @property
    def top(self) -> float:
        return self.cy - self.height / 2

    @property
    def bottom(self) -> float:
        return self.cy + self.height / 2

    def overlaps(self, other: "Box") -> bool:
        """True when the interiors intersect; touching edges do not count."""
        return (
            self.left < other.right
            and other.left < self.right
            and self.top < other.bottom
            and other.top < self.bottom
        )

    def moved_to(self, cx: float, cy: float) -> "Box":
        return Box(cx, cy, self.width, self.height)


@dataclass
class Body:
    """A dynamic box with a velocity in units per second."""

    box: Box
    velocity: Vector = field(default=ZERO)

    @property
    def position(self) -> Vector:
        return Vector(self.box.cx, self.box.cy)

    def set_velocity(self, velocity: Vector) -> None:
        self.velocity = velocity

    def stop(self) -> None:
        self.velocity = ZERO


def _resolve_x(box: Box, dx: float, obstacles: Iterable[Box]) -> Box:
    for obstacle in obstacles:
        if not box.overlaps(obstacle):
            continue
        if dx > 0:
            box = box.moved_to(obstacle.left - box.width / 2, box.cy)
        elif dx < 0:
            box = box.moved_to(obstacle.right + box.width / 2, box.cy)
    return box


def _resolve_y(box: Box, dy: float, obstacles: Iterable[Box]) -> Box:
    for obstacle in obstacles:
        if not box.overlaps(obstacle):
            continue
        if dy > 0:
            box = box.moved_to(box.cx, obstacle.top - box.height / 2)
        elif dy < 0:
            box = box.moved_to(box.cx, obstacle.bottom + box.height / 2)
    return box


def step(body: Body, dt: float, bounds: Box, obstacles: tuple[Box, ...] = ()) -> None:
    """Integrate one tick: move per axis, push out of obstacles, clamp to bounds."""
    dx = body.velocity.x * dt
    dy = body.velocity.y * dt

    box = body.box.moved_to(body.box.cx + dx, body.box.cy)
    box = _resolve_x(box, dx, obstacles)
    box = box.moved_to(box.cx, box.cy + dy)
    box = _resolve_y(box, dy, obstacles)

    half_w = box.width / 2
    half_h = box.height / 2
    cx = min(max(box.cx, bounds.left + half_w), bounds.right - half_w)
    cy = min(max(box.cy, bounds.top + half_h), bounds.bottom - half_h)
    body.box = box.moved_to(cx, cy)
