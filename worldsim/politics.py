"""Factions, their relations and the territory they hold."""

import copy
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from worldsim.bus import EventBus
from worldsim.events import PeaceTreatyEvent, WarDeclaredEvent
from worldsim.ids import AgentId, FactionId
from worldsim.spatial import ChunkCoord


class FactionRelation(Enum):
    """Standing of one faction towards another."""

    ALLIED = "Allied"
    FRIENDLY = "Friendly"
    NEUTRAL = "Neutral"
    HOSTILE = "Hostile"
    WAR = "War"


@dataclass
class Policies:
    """How a faction is governed."""

    tax_rate: float = 0.1
    military_focus: float = 0.5
    trade_openness: float = 0.7


@dataclass
class Faction:
    """A political faction."""

    id: FactionId
    name: str
    leader: AgentId
    members: list[AgentId] = field(default_factory=list)
    policies: Policies = field(default_factory=Policies)
    relations: dict[FactionId, FactionRelation] = field(default_factory=dict)


class TerritoryManager:
    """Which faction controls which chunk."""

    def __init__(self) -> None:
        self._territory: dict[ChunkCoord, FactionId] = {}

    def claim(self, chunk: ChunkCoord, faction_id: FactionId) -> None:
        """Give control of ``chunk`` to ``faction_id``."""
        self._territory[chunk] = faction_id

    def get_owner(self, chunk: ChunkCoord) -> Optional[FactionId]:
        """The faction controlling ``chunk``, or None."""
        return self._territory.get(chunk)

    def get_all_territory(self, faction_id: FactionId) -> list[ChunkCoord]:
        """Every chunk controlled by ``faction_id``."""
        return [chunk for chunk, owner in self._territory.items() if owner == faction_id]


class PoliticalLayer:
    """Factions, their diplomacy and their territory."""

    def __init__(self, event_bus: EventBus) -> None:
        self._factions: dict[FactionId, Faction] = {}
        self._territory = TerritoryManager()
        self._event_bus = event_bus
        self._lock = threading.Lock()

    def create_faction(self, name: str, leader: AgentId) -> FactionId:
        """Found a faction led by ``leader``; returns its id."""
        faction_id = FactionId()
        with self._lock:
            self._factions[faction_id] = Faction(faction_id, name, leader, members=[leader])
        return faction_id

    def get_faction(self, faction_id: FactionId) -> Optional[Faction]:
        """A copy of the faction, or None."""
        with self._lock:
            faction = self._factions.get(faction_id)
            return copy.deepcopy(faction) if faction is not None else None

    def get_all_factions(self) -> list[Faction]:
        """Copies of every faction."""
        with self._lock:
            return copy.deepcopy(list(self._factions.values()))

    def add_member(self, faction_id: FactionId, agent_id: AgentId) -> None:
        """Add ``agent_id`` to a faction once; unknown factions are ignored."""
        with self._lock:
            faction = self._factions.get(faction_id)
            if faction is not None and agent_id not in faction.members:
                faction.members.append(agent_id)

    def _set_mutual(self, a: FactionId, b: FactionId, relation: FactionRelation) -> None:
        with self._lock:
            if a in self._factions:
                self._factions[a].relations[b] = relation
            if b in self._factions:
                self._factions[b].relations[a] = relation

    async def declare_war(self, aggressor: FactionId, defender: FactionId, reason: str) -> None:
        """Put both factions at war and publish the declaration."""
        self._set_mutual(aggressor, defender, FactionRelation.WAR)
        await self._event_bus.publish(
            WarDeclaredEvent(aggressor=aggressor, defender=defender, reason=reason)
        )

    async def make_peace(self, faction_a: FactionId, faction_b: FactionId, terms: str) -> None:
        """Return both factions to neutral and publish the treaty."""
        self._set_mutual(faction_a, faction_b, FactionRelation.NEUTRAL)
        await self._event_bus.publish(
            PeaceTreatyEvent(faction_a=faction_a, faction_b=faction_b, terms=terms)
        )

    def claim_territory(self, faction_id: FactionId, chunk: ChunkCoord) -> None:
        """Give control of ``chunk`` to ``faction_id``."""
        with self._lock:
            self._territory.claim(chunk, faction_id)

    def get_territory_owner(self, chunk: ChunkCoord) -> Optional[FactionId]:
        """The faction controlling ``chunk``, or None."""
        with self._lock:
            return self._territory.get_owner(chunk)