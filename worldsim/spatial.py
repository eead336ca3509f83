"""Positions, grid coordinates and bounding boxes."""

import math
from dataclasses import dataclass


def _div_euclid(a: int, b: int) -> int:
    quotient, remainder = divmod(a, b)
    if remainder < 0:
        quotient += 1
    return quotient


@dataclass(frozen=True)
class Position:
    """A point in continuous 3D world space."""

    x: float
    y: float
    z: float

    def distance_to(self, other: "Position") -> float:
        """Euclidean distance to ``other``."""
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return math.sqrt(dx * dx + dy * dy + dz * dz)

    def to_vector3(self) -> tuple[float, float, float]:
        """The position as an ``(x, y, z)`` tuple."""
        return (self.x, self.y, self.z)

    def to_grid_coord(self) -> "GridCoord":
        """The grid cell containing this position."""
        return GridCoord(math.floor(self.x), math.floor(self.y), math.floor(self.z))


@dataclass(frozen=True)
class GridCoord:
    """An integer cell of the voxel grid."""

    x: int
    y: int
    z: int

    def to_position(self) -> Position:
        """The centre of this cell."""
        return Position(self.x + 0.5, self.y + 0.5, self.z + 0.5)

    def to_chunk_coord(self, chunk_size: int) -> "ChunkCoord":
        """The chunk containing this cell."""
        return ChunkCoord(
            _div_euclid(self.x, chunk_size),
            _div_euclid(self.y, chunk_size),
            _div_euclid(self.z, chunk_size),
        )

    def manhattan_distance(self, other: "GridCoord") -> int:
        """Sum of absolute coordinate differences."""
        return abs(self.x - other.x) + abs(self.y - other.y) + abs(self.z - other.z)


@dataclass(frozen=True)
class ChunkCoord:
    """Coordinate of a chunk in the spatial partition."""

    x: int
    y: int
    z: int


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box between two corners, inclusive."""

    min: Position
    max: Position

    def contains(self, pos: Position) -> bool:
        """Whether ``pos`` lies inside the box."""
        return (
            self.min.x <= pos.x <= self.max.x
            and self.min.y <= pos.y <= self.max.y
            and self.min.z <= pos.z <= self.max.z
        )