"""Personality traits and beliefs of agents."""

import random
from dataclasses import dataclass, field
from typing import Optional

from worldsim.core_types import Trait
from worldsim.ids import FactionId


@dataclass
class Beliefs:
    """An agent's worldview and specific beliefs."""

    worldview: str = "Neutral"
    faction_loyalty: Optional[FactionId] = None
    custom_beliefs: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class PersonalityProfile:
    """Traits and beliefs that shape an agent's choices."""

    traits: set[Trait] = field(default_factory=set)
    beliefs: Beliefs = field(default_factory=Beliefs)

    def has_trait(self, trait_type: Trait) -> bool:
        """Whether the profile holds ``trait_type``."""
        return trait_type in self.traits

    def add_trait(self, trait_type: Trait) -> None:
        """Add a trait."""
        self.traits.add(trait_type)

    def get_action_cost_modifier(self, action_type: str) -> float:
        """Product of every trait's cost multiplier for ``action_type``."""
        modifier = 1.0
        for trait_type in self.traits:
            modifier *= trait_type.action_cost_modifier(action_type)
        return modifier

    def add_belief(self, subject: str, belief: str) -> None:
        """Record a belief about ``subject``."""
        self.beliefs.custom_beliefs.append((subject, belief))

    def get_belief(self, subject: str) -> Optional[str]:
        """The first belief recorded about ``subject``, if any."""
        return next((b for s, b in self.beliefs.custom_beliefs if s == subject), None)


def random_personality(rng: Optional[random.Random] = None) -> PersonalityProfile:
    """A profile with two to four random trait draws."""
    generator = rng if rng is not None else random
    all_traits = tuple(Trait)
    profile = PersonalityProfile()
    for _ in range(generator.randint(2, 4)):
        profile.add_trait(generator.choice(all_traits))
    return profile