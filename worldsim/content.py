"""Definitions of actions, items, recipes and traits available in the world."""

from dataclasses import dataclass, field
from typing import Optional

from worldsim.core_types import ResourceType, Skill, Trait


@dataclass
class ActionDefinition:
    """An action the planner may use, with its preconditions and effects."""

    id: str
    name: str
    base_cost: float
    intended_use: int
    required_skill: Optional[tuple[Skill, float]] = None
    preconditions: list[str] = field(default_factory=list)
    effects: list[str] = field(default_factory=list)


@dataclass
class ItemDefinition:
    """A kind of item."""

    id: str
    name: str
    resource_type: ResourceType
    can_burn: bool
    can_build: bool
    weight: float
    base_value: float


@dataclass
class Recipe:
    """A crafting recipe turning input items into an output item."""

    id: str
    output: str
    output_quantity: int
    inputs: list[tuple[str, int]]
    required_skill: Optional[tuple[Skill, float]]
    crafting_time: float


@dataclass
class TraitDefinition:
    """Description of a trait and the action costs it scales."""

    trait_type: Trait
    name: str
    description: str
    action_modifiers: list[tuple[str, float]]


def _default_items() -> list[ItemDefinition]:
    return [
        ItemDefinition("wood", "Wood", ResourceType.WOOD, True, True, 10.0, 5.0),
        ItemDefinition("stone", "Stone", ResourceType.STONE, False, True, 20.0, 3.0),
        ItemDefinition("food", "Food", ResourceType.FOOD, False, False, 1.0, 10.0),
    ]


def _default_actions() -> list[ActionDefinition]:
    return [
        ActionDefinition(
            id="chop_wood",
            name="Chop Wood",
            base_cost=10.0,
            intended_use=80,
            required_skill=(Skill.WOODCUTTING, 0.0),
            preconditions=["HasAxe", "NearTree"],
            effects=["HasWood"],
        ),
        ActionDefinition(
            id="eat",
            name="Eat",
            base_cost=1.0,
            intended_use=95,
            preconditions=["HasFood"],
            effects=["NotHungry"],
        ),
    ]


def _default_recipes() -> list[Recipe]:
    return [
        Recipe(
            id="wooden_plank",
            output="wooden_plank",
            output_quantity=4,
            inputs=[("wood", 1)],
            required_skill=(Skill.CRAFTING, 5.0),
            crafting_time=5.0,
        )
    ]


def _default_traits() -> list[TraitDefinition]:
    return [
        TraitDefinition(
            trait_type=Trait.BRAVE,
            name="Brave",
            description="Fearless in combat",
            action_modifiers=[("fight", 0.5), ("run_away", 2.0)],
        )
    ]


class ContentDefinitionLayer:
    """Catalogue of every content definition, seeded with the defaults."""

    def __init__(self) -> None:
        self._actions = {a.id: a for a in _default_actions()}
        self._items = {i.id: i for i in _default_items()}
        self._recipes = {r.id: r for r in _default_recipes()}
        self._traits = {t.trait_type: t for t in _default_traits()}

    def get_action(self, action_id: str) -> Optional[ActionDefinition]:
        """Action by id, or None."""
        return self._actions.get(action_id)

    def get_item(self, item_id: str) -> Optional[ItemDefinition]:
        """Item by id, or None."""
        return self._items.get(item_id)

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        """Recipe by id, or None."""
        return self._recipes.get(recipe_id)

    def get_trait(self, trait_type: Trait) -> Optional[TraitDefinition]:
        """Definition of a trait, or None."""
        return self._traits.get(trait_type)

    def all_actions(self) -> list[ActionDefinition]:
        """Every action definition."""
        return list(self._actions.values())

    def all_items(self) -> list[ItemDefinition]:
        """Every item definition."""
        return list(self._items.values())