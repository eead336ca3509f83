"""Serializable snapshot of the whole world state."""

import struct
from dataclasses import dataclass, field

from worldsim.core_types import SimTime


class PersistenceError(Exception):
    """Raised when saved state cannot be written or read back."""


@dataclass
class SnapshotMetadata:
    """Descriptive information stored alongside a snapshot."""

    world_name: str
    description: str = ""
    agent_count: int = 0
    faction_count: int = 0


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = memoryview(data)
        self._pos = 0

    def take(self, count: int) -> bytes:
        end = self._pos + count
        if end > len(self._data):
            raise PersistenceError("unexpected end of snapshot data")
        chunk = bytes(self._data[self._pos:end])
        self._pos = end
        return chunk

    def unpack(self, fmt: str) -> tuple:
        return struct.unpack(fmt, self.take(struct.calcsize(fmt)))

    def blob(self) -> bytes:
        (length,) = self.unpack("<Q")
        return self.take(length)

    def text(self) -> str:
        try:
            return self.blob().decode("utf-8")
        except UnicodeDecodeError as exc:
            raise PersistenceError(f"invalid text in snapshot: {exc}") from exc


def _blob(data: bytes) -> bytes:
    return struct.pack("<Q", len(data)) + data


@dataclass
class WorldSnapshot:
    """The master record of world state used for save and load.

    Encoded little-endian: u32 version, u64 ticks, f64 seconds, then
    length-prefixed (u64) agent data, world data, world name and
    description, then u64 agent and faction counts.
    """

    metadata: SnapshotMetadata
    version: int = 1
    sim_time: SimTime = field(default_factory=SimTime)
    agents: bytes = b""
    world_state: bytes = b""

    def to_bytes(self) -> bytes:
        """Binary encoding of the snapshot."""
        try:
            return b"".join(
                (
                    struct.pack("<IQd", self.version, self.sim_time.ticks, self.sim_time.seconds),
                    _blob(bytes(self.agents)),
                    _blob(bytes(self.world_state)),
                    _blob(self.metadata.world_name.encode("utf-8")),
                    _blob(self.metadata.description.encode("utf-8")),
                    struct.pack("<QQ", self.metadata.agent_count, self.metadata.faction_count),
                )
            )
        except (struct.error, TypeError) as exc:
            raise PersistenceError(f"cannot encode snapshot: {exc}") from exc

    @classmethod
    def from_bytes(cls, data: bytes) -> "WorldSnapshot":
        """Decode a snapshot; raises PersistenceError on malformed data."""
        reader = _Reader(data)
        version, ticks, seconds = reader.unpack("<IQd")
        agents = reader.blob()
        world_state = reader.blob()
        world_name = reader.text()
        description = reader.text()
        agent_count, faction_count = reader.unpack("<QQ")
        return cls(
            metadata=SnapshotMetadata(world_name, description, agent_count, faction_count),
            version=version,
            sim_time=SimTime(ticks, seconds),
            agents=agents,
            world_state=world_state,
        )