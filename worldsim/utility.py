"""Utility AI: urges that rise over time and decide what an agent wants."""

from dataclasses import dataclass, field
from enum import Enum

from worldsim.agent import AgentActivity, SimAgent
from worldsim.core_types import Trait
from worldsim.mathutil import clamp, sigmoid


class UrgeType(Enum):
    """Kinds of drive an agent can feel."""

    HUNGER = "Hunger"
    THIRST = "Thirst"
    TIREDNESS = "Tiredness"
    SAFETY = "Safety"
    PERSONAL_WEALTH = "PersonalWealth"
    FACTION_LOYALTY = "FactionLoyalty"
    SOCIAL_CONNECTION = "SocialConnection"
    CURIOSITY = "Curiosity"
    REVENGE = "Revenge"
    COMFORT = "Comfort"


@dataclass(frozen=True)
class Goal:
    """A condition the planner should make true."""

    condition: str


_GOAL_FOR_URGE = {
    UrgeType.HUNGER: "NotHungry",
    UrgeType.THIRST: "NotThirsty",
    UrgeType.TIREDNESS: "Rested",
    UrgeType.SAFETY: "Safe",
    UrgeType.PERSONAL_WEALTH: "Wealthy",
    UrgeType.FACTION_LOYALTY: "ServeFaction",
    UrgeType.SOCIAL_CONNECTION: "HasFriends",
    UrgeType.CURIOSITY: "Explored",
    UrgeType.REVENGE: "Avenged",
    UrgeType.COMFORT: "Comfortable",
}

_GROWTH_PER_SECOND = {
    UrgeType.HUNGER: 0.1,
    UrgeType.THIRST: 0.15,
    UrgeType.TIREDNESS: 0.05,
}


@dataclass
class Urge:
    """One drive with its weight and current intensity (0 to 10)."""

    urge_type: UrgeType
    weight: float
    current_value: float = 0.0

    def score(self) -> float:
        """Weighted urgency on a sigmoid curve centred at 5."""
        return sigmoid(self.current_value - 5.0) * self.weight


def _default_urges() -> list[Urge]:
    return [
        Urge(UrgeType.HUNGER, 1.0),
        Urge(UrgeType.THIRST, 1.0),
        Urge(UrgeType.TIREDNESS, 0.8),
        Urge(UrgeType.SAFETY, 1.5),
        Urge(UrgeType.PERSONAL_WEALTH, 0.5),
        Urge(UrgeType.FACTION_LOYALTY, 0.3),
        Urge(UrgeType.SOCIAL_CONNECTION, 0.6),
    ]


@dataclass
class UtilityAI:
    """Tracks urges and picks the most pressing one as a goal."""

    urges: list[Urge] = field(default_factory=_default_urges)

    def update(self, agent: SimAgent, delta_time: float) -> None:
        """Advance urges by ``delta_time`` seconds given the agent's situation."""
        for urge in self.urges:
            growth = _GROWTH_PER_SECOND.get(urge.urge_type)
            if growth is not None:
                urge.current_value += delta_time * growth
            elif urge.urge_type is UrgeType.SAFETY:
                fighting = agent.state.activity is AgentActivity.FIGHTING
                urge.current_value = 10.0 if fighting else 0.0
            elif urge.urge_type is UrgeType.PERSONAL_WEALTH:
                if agent.has_trait(Trait.GREEDY):
                    urge.weight = 2.0
                elif agent.has_trait(Trait.GENEROUS):
                    urge.weight = 0.2
            urge.current_value = clamp(urge.current_value, 0.0, 10.0)

    def get_top_goal(self) -> Goal:
        """Goal for the highest-scoring urge; hunger if none scores above zero."""
        max_score = 0.0
        top_urge = UrgeType.HUNGER
        for urge in self.urges:
            score = urge.score()
            if score > max_score:
                max_score = score
                top_urge = urge.urge_type
        return Goal(_GOAL_FOR_URGE[top_urge])

    def satisfy(self, urge_type: UrgeType, amount: float) -> None:
        """Lower an urge by ``amount``, not below zero."""
        urge = next((u for u in self.urges if u.urge_type is urge_type), None)
        if urge is not None:
            urge.current_value = max(urge.current_value - amount, 0.0)