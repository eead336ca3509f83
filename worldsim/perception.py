"""What agents can see and hear, and what they remember of the world."""

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from worldsim.core_types import BlockType
from worldsim.ids import AgentId, ItemId
from worldsim.spatial import GridCoord, Position


class VisualKind(Enum):
    """What a visual stimulus shows."""

    AGENT = "Agent"
    ITEM = "Item"
    BLOCK = "Block"
    ACTION = "Action"


class AuditoryKind(Enum):
    """What a sound is."""

    SPEECH = "Speech"
    COMBAT = "Combat"
    EXPLOSION = "Explosion"
    ANIMAL_NOISE = "AnimalNoise"


@dataclass(frozen=True)
class VisualStimulus:
    """Something visible at ``source``; the fields used depend on ``kind``."""

    source: Position
    kind: VisualKind
    agent_id: Optional[AgentId] = None
    item_id: Optional[ItemId] = None
    coord: Optional[GridCoord] = None
    block_type: Optional[BlockType] = None
    action: Optional[str] = None

    def __post_init__(self) -> None:
        missing = {
            VisualKind.AGENT: self.agent_id is None,
            VisualKind.ITEM: self.item_id is None,
            VisualKind.BLOCK: self.coord is None or self.block_type is None,
            VisualKind.ACTION: self.action is None,
        }[self.kind]
        if missing:
            raise ValueError(f"{self.kind.value} stimulus is missing its subject")

    @classmethod
    def of_agent(cls, source: Position, agent_id: AgentId) -> "VisualStimulus":
        """An agent seen at ``source``."""
        return cls(source, VisualKind.AGENT, agent_id=agent_id)

    @classmethod
    def of_item(cls, source: Position, item_id: ItemId) -> "VisualStimulus":
        """An item seen at ``source``."""
        return cls(source, VisualKind.ITEM, item_id=item_id)

    @classmethod
    def of_block(
        cls, source: Position, coord: GridCoord, block_type: BlockType
    ) -> "VisualStimulus":
        """A block seen at ``coord``."""
        return cls(source, VisualKind.BLOCK, coord=coord, block_type=block_type)

    @classmethod
    def of_action(cls, source: Position, action: str) -> "VisualStimulus":
        """An action seen being performed."""
        return cls(source, VisualKind.ACTION, action=action)


@dataclass(frozen=True)
class AuditoryStimulus:
    """A sound from ``source``; ``loudness`` scales how far it carries."""

    source: Position
    kind: AuditoryKind
    loudness: float
    speaker: Optional[AgentId] = None
    text: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind is AuditoryKind.SPEECH and (self.speaker is None or self.text is None):
            raise ValueError("Speech stimulus needs a speaker and text")


Stimulus = Union[VisualStimulus, AuditoryStimulus]


class StimulusSubsystem:
    """Buffer of stimuli broadcast during a tick."""

    def __init__(self) -> None:
        self._stimuli: list[Stimulus] = []
        self._lock = threading.Lock()

    def broadcast(self, stimulus: Stimulus) -> None:
        """Make a stimulus available to perceivers."""
        with self._lock:
            self._stimuli.append(stimulus)

    def collect_and_clear(self) -> list[Stimulus]:
        """Every buffered stimulus, emptying the buffer."""
        with self._lock:
            collected, self._stimuli = self._stimuli, []
        return collected


@dataclass
class KnownAgent:
    """Last sighting of another agent."""

    id: AgentId
    last_seen_position: Position
    last_seen_time: int
    known_traits: list[str] = field(default_factory=list)


@dataclass
class KnownItem:
    """Last sighting of an item."""

    id: ItemId
    item_type: str
    last_seen_position: Position
    last_seen_time: int


@dataclass
class KnownWorld:
    """An agent's subjective view of the world."""

    known_agents: dict[AgentId, KnownAgent] = field(default_factory=dict)
    known_items: dict[ItemId, KnownItem] = field(default_factory=dict)
    known_blocks: dict[GridCoord, BlockType] = field(default_factory=dict)
    last_updated: int = 0


@dataclass
class AgentPerception:
    """Senses of one agent and what they have told it."""

    sight_radius: float = 50.0
    hearing_radius: float = 100.0
    sight_cone_angle: float = 120.0
    known_world: KnownWorld = field(default_factory=KnownWorld)

    def process_stimuli(
        self, agent_position: Position, stimuli: list[Stimulus], current_time: int
    ) -> None:
        """Take in every stimulus within range of ``agent_position``."""
        for stimulus in stimuli:
            distance = agent_position.distance_to(stimulus.source)
            if isinstance(stimulus, VisualStimulus):
                if distance <= self.sight_radius:
                    self._see(stimulus, current_time)
            elif distance <= self.hearing_radius * stimulus.loudness:
                self._hear(stimulus, current_time)
        self.known_world.last_updated = current_time

    def _see(self, stimulus: VisualStimulus, time: int) -> None:
        world = self.known_world
        if stimulus.kind is VisualKind.AGENT:
            world.known_agents[stimulus.agent_id] = KnownAgent(
                stimulus.agent_id, stimulus.source, time
            )
        elif stimulus.kind is VisualKind.ITEM:
            world.known_items[stimulus.item_id] = KnownItem(
                stimulus.item_id, "unknown", stimulus.source, time
            )
        elif stimulus.kind is VisualKind.BLOCK:
            world.known_blocks[stimulus.coord] = stimulus.block_type

    def _hear(self, stimulus: AuditoryStimulus, time: int) -> None:
        """Sounds are noticed but do not yet change the known world."""

    def knows_agent(self, agent_id: AgentId) -> bool:
        """Whether ``agent_id`` has been seen."""
        return agent_id in self.known_world.known_agents

    def get_known_agent_position(self, agent_id: AgentId) -> Optional[Position]:
        """Where ``agent_id`` was last seen, or None."""
        known = self.known_world.known_agents.get(agent_id)
        return known.last_seen_position if known is not None else None