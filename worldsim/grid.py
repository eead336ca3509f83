"""The voxel grid split into chunks, and free-moving dynamic objects."""

import copy
import threading
import uuid
from dataclasses import dataclass, field
from typing import Any

from worldsim.core_types import BlockType
from worldsim.spatial import ChunkCoord, GridCoord, Position

CHUNK_SIZE = 32
"""Edge length of a cubic chunk, in blocks."""

_CHUNK_VOLUME = CHUNK_SIZE * CHUNK_SIZE * CHUNK_SIZE


def _in_chunk(x: int, y: int, z: int) -> bool:
    return 0 <= x < CHUNK_SIZE and 0 <= y < CHUNK_SIZE and 0 <= z < CHUNK_SIZE


def _index(x: int, y: int, z: int) -> int:
    return z * CHUNK_SIZE * CHUNK_SIZE + y * CHUNK_SIZE + x


@dataclass
class Chunk:
    """A cube of blocks addressed by local coordinates 0..CHUNK_SIZE-1."""

    coord: ChunkCoord
    blocks: list[BlockType] = field(default_factory=lambda: [BlockType.AIR] * _CHUNK_VOLUME)

    def get(self, x: int, y: int, z: int) -> BlockType:
        """Block at local coordinates; air outside the chunk."""
        if not _in_chunk(x, y, z):
            return BlockType.AIR
        return self.blocks[_index(x, y, z)]

    def set(self, x: int, y: int, z: int, block: BlockType) -> None:
        """Set the block at local coordinates; outside the chunk nothing happens."""
        if _in_chunk(x, y, z):
            self.blocks[_index(x, y, z)] = block


def _local(coord: GridCoord) -> tuple[int, int, int]:
    return coord.x % CHUNK_SIZE, coord.y % CHUNK_SIZE, coord.z % CHUNK_SIZE


class GridLayer:
    """The physical world as a sparse set of chunks; missing chunks are air."""

    def __init__(self) -> None:
        self._chunks: dict[ChunkCoord, Chunk] = {}
        self._lock = threading.Lock()

    def get_block(self, coord: GridCoord) -> BlockType:
        """Block at world coordinates."""
        chunk_coord = coord.to_chunk_coord(CHUNK_SIZE)
        with self._lock:
            chunk = self._chunks.get(chunk_coord)
            if chunk is None:
                return BlockType.AIR
            return chunk.get(*_local(coord))

    def set_block(self, coord: GridCoord, block: BlockType) -> None:
        """Set the block at world coordinates, loading its chunk if needed."""
        chunk_coord = coord.to_chunk_coord(CHUNK_SIZE)
        with self._lock:
            chunk = self._chunks.get(chunk_coord)
            if chunk is None:
                chunk = self._chunks[chunk_coord] = Chunk(chunk_coord)
            chunk.set(*_local(coord), block)

    def is_walkable(self, coord: GridCoord) -> bool:
        """Whether an agent may stand at ``coord``."""
        return self.get_block(coord).is_walkable()

    def get_loaded_chunks(self) -> list[ChunkCoord]:
        """Coordinates of every chunk that has been created."""
        with self._lock:
            return list(self._chunks)

    def generate_simple_terrain(self, minimum: GridCoord, maximum: GridCoord) -> None:
        """Grass at y=0 over the x/z rectangle, with dirt from y=-5 to y=-1."""
        for x in range(minimum.x, maximum.x + 1):
            for z in range(minimum.z, maximum.z + 1):
                self.set_block(GridCoord(x, 0, z), BlockType.GRASS)
                for y in range(-5, 0):
                    self.set_block(GridCoord(x, y, z), BlockType.DIRT)


@dataclass
class DynamicObject:
    """A non-voxel entity such as a ship or a catapult."""

    object_type: str
    position: Position
    rotation: float = 0.0
    data: Any = field(default_factory=dict)
    id: uuid.UUID = field(default_factory=uuid.uuid4)


class DynamicObjectList:
    """Thread-safe collection of dynamic objects."""

    def __init__(self) -> None:
        self._objects: list[DynamicObject] = []
        self._lock = threading.Lock()

    def add(self, obj: DynamicObject) -> None:
        """Add an object."""
        with self._lock:
            self._objects.append(obj)

    def get_all(self) -> list[DynamicObject]:
        """Copies of every object."""
        with self._lock:
            return copy.deepcopy(self._objects)

    def remove(self, object_id: uuid.UUID) -> None:
        """Remove every object with ``object_id``."""
        with self._lock:
            self._objects = [o for o in self._objects if o.id != object_id]