"""The simulated individual and its economic state."""

import random
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from worldsim.core_types import Attributes, ResourceType, Skill, Trait
from worldsim.ids import AgentId
from worldsim.ownership import AgentDomain
from worldsim.personality import random_personality
from worldsim.skills import SkillDatabase
from worldsim.spatial import GridCoord, Position


@dataclass
class BuildingResources:
    """Materials an agent is carrying to a construction site."""

    wood: int
    stone: int
    iron: int
    target_building_id: uuid.UUID

    def total(self) -> int:
        """Total units carried."""
        return self.wood + self.stone + self.iron


@dataclass
class Loan:
    """A loan between two agents."""

    lender_id: AgentId
    borrower_id: AgentId
    principal: float
    remaining: float
    interest_rate: float
    issued_time: float


class TransactionType(Enum):
    """Direction of a trade, seen from the agent."""

    SOLD = "Sold"
    BOUGHT = "Bought"


class AgentActivity(Enum):
    """Kind of behaviour an agent is engaged in."""

    IDLE = "Idle"
    MOVING = "Moving"
    WORKING = "Working"
    FIGHTING = "Fighting"
    SLEEPING = "Sleeping"
    EATING = "Eating"
    DEAD = "Dead"
    TALKING = "Talking"
    PATROLLING = "Patrolling"
    FOLLOWING = "Following"
    BUILDING = "Building"
    TRADING = "Trading"


@dataclass(frozen=True)
class AgentState:
    """Current behaviour with the details that go with it.

    ``other`` is the fight target, conversation or trade partner, or the
    leader being followed, depending on ``activity``.
    """

    activity: AgentActivity = AgentActivity.IDLE
    destination: Optional[GridCoord] = None
    task: Optional[str] = None
    other: Optional[AgentId] = None
    route_index: Optional[int] = None
    building_type: Optional[str] = None


class Job(Enum):
    """Profession of an agent."""

    WOODCUTTER = "Woodcutter"
    MINER = "Miner"
    FARMER = "Farmer"
    BUILDER = "Builder"
    UNEMPLOYED = "Unemployed"


class SocialClass(Enum):
    """Place in the social hierarchy."""

    KING = "King"
    NOBLE = "Noble"
    KNIGHT = "Knight"
    SOLDIER = "Soldier"
    MERCHANT = "Merchant"
    BURGHER = "Burgher"
    CLERIC = "Cleric"
    PEASANT = "Peasant"


_STARTING_WALLET = {
    SocialClass.KING: 5000.0,
    SocialClass.NOBLE: 2000.0,
    SocialClass.KNIGHT: 500.0,
    SocialClass.MERCHANT: 400.0,
    SocialClass.BURGHER: 400.0,
    SocialClass.SOLDIER: 300.0,
    SocialClass.CLERIC: 200.0,
    SocialClass.PEASANT: 300.0,
}

_CARRY_CAPACITY = {
    SocialClass.KING: 200,
    SocialClass.NOBLE: 200,
    SocialClass.MERCHANT: 100,
    SocialClass.BURGHER: 100,
    SocialClass.KNIGHT: 80,
    SocialClass.SOLDIER: 80,
    SocialClass.CLERIC: 50,
    SocialClass.PEASANT: 60,
}

_JOB_NEEDS = {
    Job.BUILDER: {ResourceType.WOOD: 10, ResourceType.STONE: 10},
    Job.FARMER: {ResourceType.WOOD: 2},
    Job.WOODCUTTER: {ResourceType.IRON: 1},
    Job.MINER: {ResourceType.IRON: 1},
}


def _choose_job(social_class: SocialClass, rng) -> Job:
    if social_class is not SocialClass.PEASANT:
        return Job.UNEMPLOYED
    if rng.randrange(5) == 0:
        return Job.BUILDER
    return (Job.WOODCUTTER, Job.MINER, Job.FARMER)[rng.randrange(3)]


class SimAgent:
    """A single simulated individual."""

    def __init__(
        self,
        name: str,
        position: Position,
        social_class: SocialClass = SocialClass.PEASANT,
        rng: Optional[random.Random] = None,
    ) -> None:
        generator = rng if rng is not None else random
        self.id = AgentId()
        self.name = name
        self.position = position
        self.age: int = generator.randrange(60) + 18
        self.attributes = Attributes()
        self.personality = random_personality(rng)
        self.skills = SkillDatabase()
        self.domain = AgentDomain()
        self.state = AgentState()
        self.job = _choose_job(social_class, generator)
        self.social_class = social_class
        self.leader_id: Optional[AgentId] = None
        self.wallet: float = _STARTING_WALLET[social_class]
        self.inventory: dict[ResourceType, int] = {}
        self.needs: dict[ResourceType, int] = {ResourceType.FOOD: 5}
        self.needs.update(_JOB_NEEDS.get(self.job, {}))
        self.carrying_resources: Optional[BuildingResources] = None
        self.just_harvested: Optional[tuple[ResourceType, int, float]] = None
        self.just_transacted: Optional[tuple[TransactionType, float, float]] = None
        self.loans_given: list[Loan] = []
        self.loans_owed: list[Loan] = []

    def __repr__(self) -> str:
        return (
            f"SimAgent(name={self.name!r}, social_class={self.social_class.value}, "
            f"job={self.job.value}, state={self.state.activity.value})"
        )

    def is_alive(self) -> bool:
        """Whether the agent is not dead."""
        return self.state.activity is not AgentActivity.DEAD

    def max_carrying_capacity(self) -> int:
        """Units this agent can carry, by social class."""
        return _CARRY_CAPACITY[self.social_class]

    def current_inventory_weight(self) -> int:
        """Inventory units plus any building materials being carried."""
        total = sum(self.inventory.values())
        if self.carrying_resources is not None:
            total += self.carrying_resources.total()
        return total

    def can_carry_more(self, additional: int) -> bool:
        """Whether ``additional`` units fit within capacity."""
        return self.current_inventory_weight() + additional <= self.max_carrying_capacity()

    def get_skill(self, skill: Skill) -> float:
        """Current level of ``skill``."""
        return self.skills.get_level(skill)

    def gain_skill_experience(self, skill: Skill, amount: float) -> None:
        """Add experience to ``skill``."""
        self.skills.add_experience(skill, amount)

    def has_trait(self, trait_type: Trait) -> bool:
        """Whether the personality holds ``trait_type``."""
        return self.personality.has_trait(trait_type)