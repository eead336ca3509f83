"""Strongly typed identifiers for simulation entities."""

import uuid
from dataclasses import dataclass, field


@dataclass(frozen=True)
class AgentId:
    """Identifier of an agent."""

    value: uuid.UUID = field(default_factory=uuid.uuid4)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ItemId:
    """Identifier of an item."""

    value: uuid.UUID = field(default_factory=uuid.uuid4)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class FactionId:
    """Identifier of a faction."""

    value: uuid.UUID = field(default_factory=uuid.uuid4)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ChunkId:
    """Identifier of a chunk by its integer coordinates."""

    x: int
    y: int
    z: int