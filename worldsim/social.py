"""Relationships and memories between agents."""

import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from worldsim.ids import AgentId


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Relationship:
    """How one agent feels about another."""

    affinity: float = 0.0
    trust: float = 50.0
    last_interaction: datetime = field(default_factory=_now)

    def is_friendly(self) -> bool:
        """Affinity above 50."""
        return self.affinity > 50.0

    def is_hostile(self) -> bool:
        """Affinity below -50."""
        return self.affinity < -50.0


class RelationshipManager:
    """Directed relationships, keyed by the agent that holds them."""

    def __init__(self) -> None:
        self._relationships: dict[AgentId, dict[AgentId, Relationship]] = {}

    def get(self, agent_a: AgentId, agent_b: AgentId) -> Optional[Relationship]:
        """A copy of how ``agent_a`` regards ``agent_b``, or None."""
        relationship = self._relationships.get(agent_a, {}).get(agent_b)
        return replace(relationship) if relationship is not None else None

    def set(self, agent_a: AgentId, agent_b: AgentId, relationship: Relationship) -> None:
        """Replace how ``agent_a`` regards ``agent_b``."""
        self._relationships.setdefault(agent_a, {})[agent_b] = relationship

    def modify_affinity(self, agent_a: AgentId, agent_b: AgentId, delta: float) -> None:
        """Shift affinity by ``delta``, kept within -100..100."""
        relationship = self._relationships.setdefault(agent_a, {}).setdefault(
            agent_b, Relationship()
        )
        relationship.affinity = min(max(relationship.affinity + delta, -100.0), 100.0)
        relationship.last_interaction = _now()

    def decay_relationships_with(self, agent_id: AgentId, decay_factor: float) -> None:
        """Scale everyone's affinity towards ``agent_id`` by ``decay_factor``."""
        for relationships in self._relationships.values():
            relationship = relationships.get(agent_id)
            if relationship is not None:
                relationship.affinity *= decay_factor


class MemorySource(Enum):
    """How a memory came to be."""

    WITNESSED = "Witnessed"
    TOLD = "Told"
    INFERRED = "Inferred"
    FABRICATED = "Fabricated"


@dataclass
class MemoryFact:
    """Something an agent remembers.

    ``informant`` names the agent who told it when ``source`` is TOLD.
    """

    fact: str
    source: MemorySource
    importance: float
    informant: Optional[AgentId] = None
    timestamp: datetime = field(default_factory=_now)


class MemoryManager:
    """Memories per agent, in the order they were added."""

    def __init__(self) -> None:
        self._memories: dict[AgentId, list[MemoryFact]] = {}

    def add(self, agent_id: AgentId, memory: MemoryFact) -> None:
        """Give ``agent_id`` a memory."""
        self._memories.setdefault(agent_id, []).append(memory)

    def get(self, agent_id: AgentId) -> list[MemoryFact]:
        """Copies of every memory of ``agent_id``."""
        return [replace(m) for m in self._memories.get(agent_id, ())]

    def get_important_memories(self, agent_id: AgentId, min_importance: float) -> list[MemoryFact]:
        """Copies of memories at least as important as ``min_importance``."""
        return [
            replace(m) for m in self._memories.get(agent_id, ()) if m.importance >= min_importance
        ]


class SocialLayer:
    """Thread-safe access to relationships and memories."""

    def __init__(self) -> None:
        self._relationships = RelationshipManager()
        self._memories = MemoryManager()
        self._lock = threading.Lock()

    def get_relationship(self, agent_a: AgentId, agent_b: AgentId) -> Optional[Relationship]:
        """How ``agent_a`` regards ``agent_b``, or None."""
        with self._lock:
            return self._relationships.get(agent_a, agent_b)

    def set_relationship(self, agent_a: AgentId, agent_b: AgentId, relationship: Relationship) -> None:
        """Replace a relationship."""
        with self._lock:
            self._relationships.set(agent_a, agent_b, relationship)

    def modify_affinity(self, agent_a: AgentId, agent_b: AgentId, delta: float) -> None:
        """Shift affinity of ``agent_a`` towards ``agent_b``."""
        with self._lock:
            self._relationships.modify_affinity(agent_a, agent_b, delta)

    def add_memory(self, agent_id: AgentId, memory: MemoryFact) -> None:
        """Give an agent a memory."""
        with self._lock:
            self._memories.add(agent_id, memory)

    def get_memories(self, agent_id: AgentId) -> list[MemoryFact]:
        """Every memory of an agent."""
        with self._lock:
            return self._memories.get(agent_id)

    def on_agent_died(self, agent_id: AgentId) -> None:
        """Halve everyone's affinity towards a dead agent."""
        with self._lock:
            self._relationships.decay_relationships_with(agent_id, 0.5)