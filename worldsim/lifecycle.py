"""Birth, death and bookkeeping of the agent population."""

import copy
import random
import threading
from typing import Callable, Iterable, Optional

from worldsim.agent import AgentActivity, AgentState, SimAgent
from worldsim.bus import EventBus
from worldsim.events import AgentBornEvent, AgentDiedEvent
from worldsim.ids import AgentId
from worldsim.spatial import Position


class LifecycleLayer:
    """Holds the population and drives natural births and deaths."""

    def __init__(
        self,
        event_bus: EventBus,
        birth_rate: float = 0.01,
        death_rate: float = 0.005,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._agents: list[SimAgent] = []
        self._lock = threading.Lock()
        self.birth_rate = birth_rate
        self.death_rate = death_rate
        self._event_bus = event_bus
        self._rng = rng if rng is not None else random.Random()

    def spawn_agent(self, agent: SimAgent) -> None:
        """Add an existing agent to the population."""
        with self._lock:
            self._agents.append(agent)

    async def birth_agent(
        self, name: str, position: Position, parents: Iterable[AgentId]
    ) -> AgentId:
        """Create a peasant, add it and publish its birth; returns its id."""
        agent = SimAgent(name, position, rng=self._rng)
        self.spawn_agent(agent)
        await self._event_bus.publish(
            AgentBornEvent(agent_id=agent.id, parent_ids=list(parents), location=position)
        )
        return agent.id

    async def kill_agent(self, agent_id: AgentId, cause: str) -> None:
        """Mark an agent dead and publish its death; unknown ids are ignored."""
        with self._lock:
            agent = self._find(agent_id)
            if agent is None:
                return
            agent.state = AgentState(AgentActivity.DEAD)
            position = agent.position
        await self._event_bus.publish(
            AgentDiedEvent(agent_id=agent_id, cause=cause, location=position)
        )

    async def tick(self) -> None:
        """Roll for one random birth, then a death roll for each living agent."""
        rng = self._rng
        with self._lock:
            agent_count = len(self._agents)
        if rng.random() < self.birth_rate * agent_count:
            position = Position(rng.uniform(-100.0, 100.0), 1.0, rng.uniform(-100.0, 100.0))
            await self.birth_agent(f"Citizen_{rng.getrandbits(32)}", position, [])

        with self._lock:
            alive = [a.id for a in self._agents if a.is_alive()]
        for agent_id in alive:
            if rng.random() < self.death_rate:
                await self.kill_agent(agent_id, "Natural causes")

    def get_agents(self) -> list[SimAgent]:
        """Copies of every agent, living or dead."""
        with self._lock:
            return copy.deepcopy(self._agents)

    def get_agent(self, agent_id: AgentId) -> Optional[SimAgent]:
        """A copy of the agent with ``agent_id``, or None."""
        with self._lock:
            agent = self._find(agent_id)
            return copy.deepcopy(agent) if agent is not None else None

    def count_living(self) -> int:
        """Number of agents still alive."""
        with self._lock:
            return sum(1 for a in self._agents if a.is_alive())

    def update_agent_position(self, agent_id: AgentId, new_position: Position) -> None:
        """Move an agent; unknown ids are ignored."""
        with self._lock:
            agent = self._find(agent_id)
            if agent is not None:
                agent.position = new_position

    def update_agent_state(self, agent_id: AgentId, new_state: AgentState) -> None:
        """Change an agent's behaviour state; unknown ids are ignored."""
        with self._lock:
            agent = self._find(agent_id)
            if agent is not None:
                agent.state = new_state

    def update_living_agents(self, updater: Callable[[SimAgent], object]) -> None:
        """Apply ``updater`` in place to every living agent."""
        with self._lock:
            for agent in self._agents:
                if agent.is_alive():
                    updater(agent)

    def _find(self, agent_id: AgentId) -> Optional[SimAgent]:
        return next((a for a in self._agents if a.id == agent_id), None)