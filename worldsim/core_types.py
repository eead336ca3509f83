"""Enumerations and value types shared across the simulation."""

from dataclasses import dataclass
from enum import Enum


class BlockType(Enum):
    """Kinds of voxel in the world grid."""

    AIR = "Air"
    WALL_STONE = "WallStone"
    WALL_WOOD = "WallWood"
    WATER = "Water"
    DIRT = "Dirt"
    GRASS = "Grass"
    WOOD = "Wood"
    BURNING_WOOD = "BurningWood"
    STONE = "Stone"
    IRON = "Iron"
    GOLD = "Gold"

    def is_solid(self) -> bool:
        """Whether the block blocks movement."""
        return self not in (BlockType.AIR, BlockType.WATER)

    def is_walkable(self) -> bool:
        """Whether an agent may stand in this block."""
        return self in (BlockType.AIR, BlockType.GRASS)


class ResourceType(Enum):
    """Tradeable resources."""

    WOOD = "Wood"
    STONE = "Stone"
    IRON = "Iron"
    GOLD = "Gold"
    FOOD = "Food"
    WATER = "Water"
    CLOTH = "Cloth"
    TOOL = "Tool"
    WEAPON = "Weapon"
    COIN = "Coin"

    def __str__(self) -> str:
        return self.value


class Skill(Enum):
    """Skills that agents can learn."""

    MINING = "Mining"
    WOODCUTTING = "Woodcutting"
    FARMING = "Farming"
    BLACKSMITHING = "Blacksmithing"
    CRAFTING = "Crafting"
    COMBAT = "Combat"
    DIPLOMACY = "Diplomacy"
    TRADING = "Trading"
    CONSTRUCTION = "Construction"
    MEDICINE = "Medicine"


class Trait(Enum):
    """Personality traits."""

    BRAVE = "Brave"
    COWARDLY = "Cowardly"
    GREEDY = "Greedy"
    GENEROUS = "Generous"
    HONEST = "Honest"
    DECEPTIVE = "Deceptive"
    LOYAL = "Loyal"
    REBELLIOUS = "Rebellious"
    AMBITIOUS = "Ambitious"
    CONTENT = "Content"
    AGGRESSIVE = "Aggressive"
    PEACEFUL = "Peaceful"

    def action_cost_modifier(self, action_type: str) -> float:
        """Cost multiplier this trait applies to ``action_type``."""
        return _ACTION_COST_MODIFIERS.get((self, action_type), 1.0)


_ACTION_COST_MODIFIERS: dict[tuple[Trait, str], float] = {
    (Trait.BRAVE, "Fight"): 0.5,
    (Trait.BRAVE, "RunAway"): 2.0,
    (Trait.COWARDLY, "Fight"): 2.0,
    (Trait.COWARDLY, "RunAway"): 0.5,
    (Trait.GREEDY, "GiveItem"): 2.0,
    (Trait.GREEDY, "TakeItem"): 0.7,
    (Trait.GENEROUS, "GiveItem"): 0.5,
    (Trait.HONEST, "Lie"): 3.0,
    (Trait.DECEPTIVE, "Lie"): 0.5,
}


@dataclass
class Attributes:
    """Agent stats."""

    strength: float = 10.0
    intelligence: float = 10.0
    charisma: float = 10.0
    constitution: float = 10.0
    agility: float = 10.0


@dataclass
class SimTime:
    """Simulation clock counted in ticks and seconds."""

    ticks: int = 0
    seconds: float = 0.0

    def advance(self, delta_seconds: float) -> None:
        """Move the clock forward by one tick of ``delta_seconds``."""
        self.seconds += delta_seconds
        self.ticks += 1