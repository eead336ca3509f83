"""Learned skills and knowledge of an agent."""

import math
from dataclasses import dataclass, field
from enum import Enum

from worldsim.core_types import Skill


@dataclass
class SkillData:
    """Level and accumulated experience for one skill."""

    level: float = 0.0
    experience: float = 0.0


class KnowledgeType(str, Enum):
    """Category of a piece of knowledge."""

    RECIPE = "Recipe"
    SECRET = "Secret"
    LOCATION = "Location"
    RUMOR = "Rumor"


@dataclass
class Knowledge:
    """A piece of knowledge an agent holds."""

    id: str
    knowledge_type: KnowledgeType
    detail: str
    acquired_at: int


@dataclass
class SkillDatabase:
    """Skills and knowledge learned by one agent."""

    skills: dict[Skill, SkillData] = field(default_factory=dict)
    knowledge: list[Knowledge] = field(default_factory=list)

    def get_level(self, skill: Skill) -> float:
        """Skill level, 0.0 if never practised."""
        data = self.skills.get(skill)
        return data.level if data is not None else 0.0

    def add_experience(self, skill: Skill, amount: float) -> None:
        """Add experience; level is sqrt(experience / 10)."""
        data = self.skills.setdefault(skill, SkillData())
        data.experience += amount
        data.level = math.sqrt(data.experience / 10.0)

    def has_knowledge(self, knowledge_id: str) -> bool:
        """Whether knowledge with this id is known."""
        return any(k.id == knowledge_id for k in self.knowledge)

    def learn_knowledge(self, knowledge: Knowledge) -> None:
        """Remember ``knowledge`` unless its id is already known."""
        if not self.has_knowledge(knowledge.id):
            self.knowledge.append(knowledge)

    def get_knowledge_by_type(self, knowledge_type: str) -> list[Knowledge]:
        """All knowledge of the given type name, e.g. ``"Recipe"``."""
        return [k for k in self.knowledge if k.knowledge_type == knowledge_type]