"""Vectors, rays, hit records and axis-aligned bounding boxes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Iterator, Optional, Tuple

FLOAT_MAX = 3.4028234663852886e38


def _div(numerator: float, denominator: float) -> float:
    """Divide the way IEEE floats do, giving infinities or NaN instead of raising."""
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


@dataclass(frozen=True, slots=True)
class Vec3:
    """An immutable three-component vector, also used for RGB colours."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def splat(cls, value: float) -> Vec3:
        """A vector with all three components set to ``value``."""
        return cls(value, value, value)

    def __add__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other):
        """Scale by a number, or multiply component-wise by another vector."""
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, Real):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return self * other
        return NotImplemented

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index: int) -> float:
        """Component by axis: 0 is x, 1 is y, anything else is z."""
        if index == 0:
            return self.x
        if index == 1:
            return self.y
        return self.z

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> Vec3:
        """Unit vector in the same direction; the zero vector is returned unchanged."""
        length = self.length()
        return self * (1.0 / length) if length > 0 else self


@dataclass(frozen=True, slots=True)
class Ray:
    """A half-line starting at ``origin`` and running along ``direction``."""

    origin: Vec3
    direction: Vec3


@dataclass(frozen=True, slots=True)
class Hit:
    """Where a ray struck a surface and what that surface looks like."""

    t: float
    normal: Vec3 = field(default_factory=Vec3)
    color: Vec3 = field(default_factory=Vec3)
    reflective: bool = False


@dataclass(frozen=True, slots=True)
class AABB:
    """An axis-aligned bounding box given by its two extreme corners."""

    minimum: Vec3
    maximum: Vec3

    @classmethod
    def empty(cls) -> AABB:
        """A box that contains nothing and vanishes under ``combine``."""
        return cls(Vec3.splat(FLOAT_MAX), Vec3.splat(-FLOAT_MAX))

    def combine(self, other: AABB) -> AABB:
        """The smallest box enclosing both boxes."""
        return AABB(
            Vec3(
                min(self.minimum.x, other.minimum.x),
                min(self.minimum.y, other.minimum.y),
                min(self.minimum.z, other.minimum.z),
            ),
            Vec3(
                max(self.maximum.x, other.maximum.x),
                max(self.maximum.y, other.maximum.y),
                max(self.maximum.z, other.maximum.z),
            ),
        )

    def intersect(self, ray: Ray) -> Optional[Tuple[float, float]]:
        """Entry and exit distances along the ray, or None if the box is missed."""
        origin, direction = ray.origin, ray.direction

        tx_min = _div(self.minimum.x - origin.x, direction.x)
        tx_max = _div(self.maximum.x - origin.x, direction.x)
        if direction.x < 0:
            tx_min, tx_max = tx_max, tx_min

        ty_min = _div(self.minimum.y - origin.y, direction.y)
        ty_max = _div(self.maximum.y - origin.y, direction.y)
        if direction.y < 0:
            ty_min, ty_max = ty_max, ty_min

        if tx_min > ty_max or ty_min > tx_max:
            return None

        t_min = max(tx_min, ty_min)
        t_max = min(tx_max, ty_max)

        tz_min = _div(self.minimum.z - origin.z, direction.z)
        tz_max = _div(self.maximum.z - origin.z, direction.z)
        if direction.z < 0:
            tz_min, tz_max = tz_max, tz_min

        if t_min > tz_max or tz_min > t_max:
            return None

        t_min = max(t_min, tz_min)
        t_max = min(t_max, tz_max)

        return (t_min, t_max) if t_max > 0 else None

    def center(self) -> Vec3:
        return (self.minimum + self.maximum) * 0.5

    def corners(self) -> Tuple[Vec3, ...]:
        """The eight corners; bit 0 picks max x, bit 1 max y, bit 2 max z."""
        lo, hi = self.minimum, self.maximum
        return tuple(
            Vec3(
                hi.x if i & 1 else lo.x,
                hi.y if i & 2 else lo.y,
                hi.z if i & 4 else lo.z,
            )
            for i in range(8)
        )