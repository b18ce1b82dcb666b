"""Host-side 3-component vector used to author and validate scenes.

Kernels work on ``taichi.math.vec3``; this class is the Python-scope
counterpart used before data is uploaded to Taichi fields. It supports the
usual arithmetic plus an in-place ``normalize`` that refuses zero vectors.

Example:
    >>> v = Vector3(3.0, 0.0, 4.0)
    >>> v.magnitude()
    5.0
    >>> v.normalize().to_tuple()
    (0.6, 0.0, 0.8)
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from spheretrace.errors import DegenerateGeometryError


@dataclass
class Vector3:
    """A vector with float components x, y, z."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def of(cls, value: Vector3 | Sequence[float]) -> Vector3:
        """Coerce a Vector3 or a 3-sequence into a new Vector3.

        Raises:
            ValueError: If a sequence does not have exactly three entries.
        """
        if isinstance(value, Vector3):
            return cls(value.x, value.y, value.z)
        if len(value) != 3:
            raise ValueError(f"Expected 3 components, got {len(value)}")
        return cls(float(value[0]), float(value[1]), float(value[2]))

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, other: Vector3 | float) -> Vector3:
        # Vector operand means component-wise (Hadamard) product
        if isinstance(other, Vector3):
            return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vector3(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: float) -> Vector3:
        return self * other

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: Vector3) -> float:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        """Cross product self x other."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.dot(self))

    def normalize(self) -> Vector3:
        """Scale this vector to unit length in place.

        Returns:
            self, so calls can be chained.

        Raises:
            DegenerateGeometryError: If the vector has zero magnitude.
        """
        mag = self.magnitude()
        if mag == 0.0 or not math.isfinite(mag):
            raise DegenerateGeometryError(f"Cannot normalize vector {self.to_tuple()}")
        self.x /= mag
        self.y /= mag
        self.z /= mag
        return self

    def normalized(self) -> Vector3:
        """Return a unit-length copy, leaving self untouched."""
        return Vector3(self.x, self.y, self.z).normalize()

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)
