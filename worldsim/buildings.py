"""Buildings, their construction materials and storage, and their manager."""

import math
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from worldsim.core_types import ResourceType
from worldsim.ids import AgentId, FactionId
from worldsim.spatial import Position


class BuildingType(Enum):
    """Kinds of building."""

    WAREHOUSE = "Warehouse"
    MARKET = "Market"
    BARRACKS = "Barracks"
    WORKSHOP = "Workshop"
    FARM = "Farm"
    MINE = "Mine"
    NOBLE_ESTATE = "NobleEstate"
    CHURCH = "Church"
    TAVERN = "Tavern"
    WALLS = "Walls"
    PEASANT_HOUSE = "PeasantHouse"
    FARMING_SHED = "FarmingShed"

    def required_resources(self) -> dict[ResourceType, int]:
        """Materials needed to construct a building of this type."""
        return dict(_REQUIREMENTS[self])


_W, _S, _I = ResourceType.WOOD, ResourceType.STONE, ResourceType.IRON

_REQUIREMENTS: dict[BuildingType, dict[ResourceType, int]] = {
    BuildingType.WAREHOUSE: {_W: 100, _S: 50, _I: 20},
    BuildingType.BARRACKS: {_W: 80, _S: 60, _I: 30},
    BuildingType.WORKSHOP: {_W: 60, _S: 40, _I: 15},
    BuildingType.FARM: {_W: 40, _S: 20, _I: 5},
    BuildingType.MINE: {_W: 30, _S: 50, _I: 25},
    BuildingType.NOBLE_ESTATE: {_W: 150, _S: 100, _I: 40},
    BuildingType.CHURCH: {_W: 70, _S: 80, _I: 10},
    BuildingType.TAVERN: {_W: 50, _S: 30, _I: 5},
    BuildingType.WALLS: {_W: 20, _S: 200, _I: 50},
    BuildingType.PEASANT_HOUSE: {_W: 30, _S: 10},
    BuildingType.FARMING_SHED: {_W: 20, _S: 5},
    BuildingType.MARKET: {_W: 90, _S: 70, _I: 15},
}

_STORAGE_CAPACITY: dict[BuildingType, int] = {
    BuildingType.WAREHOUSE: 1000,
    BuildingType.WORKSHOP: 200,
    BuildingType.FARM: 300,
    BuildingType.MINE: 500,
    BuildingType.BARRACKS: 100,
    BuildingType.NOBLE_ESTATE: 200,
    BuildingType.CHURCH: 50,
    BuildingType.TAVERN: 100,
}


class OwnerKind(Enum):
    """Who a building belongs to."""

    FACTION = "Faction"
    AGENT = "Agent"
    PUBLIC = "Public"


@dataclass(frozen=True)
class BuildingOwner:
    """Owner of a building: a faction, an agent, or the public."""

    kind: OwnerKind = OwnerKind.PUBLIC
    owner_id: Optional[Union[AgentId, FactionId]] = None

    def __post_init__(self) -> None:
        expected = {
            OwnerKind.FACTION: FactionId,
            OwnerKind.AGENT: AgentId,
            OwnerKind.PUBLIC: type(None),
        }[self.kind]
        if not isinstance(self.owner_id, expected):
            raise ValueError(f"{self.kind.value} owner needs an id of type {expected.__name__}")

    @classmethod
    def faction(cls, faction_id: FactionId) -> "BuildingOwner":
        """Ownership by a faction."""
        return cls(OwnerKind.FACTION, faction_id)

    @classmethod
    def agent(cls, agent_id: AgentId) -> "BuildingOwner":
        """Ownership by an agent."""
        return cls(OwnerKind.AGENT, agent_id)

    @classmethod
    def public(cls) -> "BuildingOwner":
        """Shared, neutral ownership."""
        return cls(OwnerKind.PUBLIC)


@dataclass
class ResourceStorage:
    """Bounded resource store inside a building."""

    capacity: int
    inventory: dict[ResourceType, int] = field(default_factory=dict)

    def current_usage(self) -> int:
        """Units stored in total."""
        return sum(self.inventory.values())

    def available_space(self) -> int:
        """Free units of capacity, never negative."""
        return max(self.capacity - self.current_usage(), 0)

    def can_store(self, resource: ResourceType, quantity: int) -> bool:
        """Whether ``quantity`` more units fit."""
        return self.available_space() >= quantity

    def store(self, resource: ResourceType, quantity: int) -> bool:
        """Store ``quantity`` units if they fit; returns whether they did."""
        if not self.can_store(resource, quantity):
            return False
        self.inventory[resource] = self.inventory.get(resource, 0) + quantity
        return True

    def retrieve(self, resource: ResourceType, quantity: int) -> int:
        """Take up to ``quantity`` units; returns how many were taken."""
        available = self.inventory.get(resource, 0)
        retrieved = min(available, quantity)
        if retrieved > 0:
            self.inventory[resource] = available - retrieved
        return retrieved

    def get_quantity(self, resource: ResourceType) -> int:
        """Units of ``resource`` stored."""
        return self.inventory.get(resource, 0)


@dataclass
class Building:
    """A physical building under construction or complete."""

    building_type: BuildingType
    position: Position
    name: str
    owner: BuildingOwner
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    construction_progress: float = 0.0
    health: float = 100.0
    construction_fund: float = 0.0
    current_resources: dict[ResourceType, int] = field(default_factory=dict)
    storage: ResourceStorage = field(init=False)
    required_resources: dict[ResourceType, int] = field(init=False)

    def __post_init__(self) -> None:
        self.storage = ResourceStorage(_STORAGE_CAPACITY.get(self.building_type, 0))
        self.required_resources = self.building_type.required_resources()

    def _delivered(self, resource: ResourceType) -> int:
        return self.current_resources.get(resource, 0)

    def has_sufficient_resources(self) -> bool:
        """Whether every required material has been delivered in full."""
        return all(
            self._delivered(resource) >= required
            for resource, required in self.required_resources.items()
        )

    def resource_completion_percent(self) -> float:
        """Delivered share of the total material requirement, 0.0 to 1.0+."""
        total_required = sum(self.required_resources.values())
        if total_required == 0:
            return 1.0
        total_delivered = sum(self._delivered(r) for r in self.required_resources)
        return total_delivered / total_required

    def add_resources(self, resource_type: ResourceType, quantity: int) -> None:
        """Record a delivery of materials."""
        self.current_resources[resource_type] = self._delivered(resource_type) + quantity

    def remaining_resources(self) -> dict[ResourceType, int]:
        """Materials still missing, by type."""
        return {
            resource: required - self._delivered(resource)
            for resource, required in self.required_resources.items()
            if self._delivered(resource) < required
        }

    def is_complete(self) -> bool:
        """Whether construction has finished."""
        return self.construction_progress >= 1.0

    def add_construction_progress(self, amount: float) -> None:
        """Advance construction without consuming materials, capped at 1.0."""
        self.construction_progress = min(self.construction_progress + amount, 1.0)

    def construct_with_resources(self, progress_amount: float) -> bool:
        """Consume materials for ``progress_amount`` of work; returns whether it happened."""
        consumption = {
            resource: math.ceil(required * progress_amount)
            for resource, required in self.required_resources.items()
        }
        if any(self._delivered(r) < needed for r, needed in consumption.items()):
            return False
        for resource, needed in consumption.items():
            if resource in self.current_resources:
                self.current_resources[resource] = max(self.current_resources[resource] - needed, 0)
        self.construction_progress = min(self.construction_progress + progress_amount, 1.0)
        return True

    def damage(self, amount: float) -> None:
        """Reduce health, never below zero."""
        self.health = max(self.health - amount, 0.0)

    def is_destroyed(self) -> bool:
        """Whether health has run out."""
        return self.health <= 0.0


class BuildingManager:
    """All buildings in the world, by id."""

    def __init__(self) -> None:
        self._buildings: dict[uuid.UUID, Building] = {}

    def add_building(self, building: Building) -> uuid.UUID:
        """Register a building; returns its id."""
        self._buildings[building.id] = building
        return building.id

    def get_building(self, building_id: uuid.UUID) -> Optional[Building]:
        """The building with ``building_id``, or None."""
        return self._buildings.get(building_id)

    def get_all_buildings(self) -> list[Building]:
        """Every building."""
        return list(self._buildings.values())

    def find_nearest_building(
        self,
        position: Position,
        building_type: Optional[BuildingType] = None,
        only_complete: bool = False,
    ) -> Optional[Building]:
        """Nearest building matching the type filter and completeness, or None."""
        candidates = [
            b
            for b in self._buildings.values()
            if (building_type is None or b.building_type == building_type)
            and (not only_complete or b.is_complete())
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda b: b.position.distance_to(position))

    def remove_destroyed_buildings(self) -> list[uuid.UUID]:
        """Drop destroyed buildings; returns their ids."""
        destroyed = [bid for bid, b in self._buildings.items() if b.is_destroyed()]
        for bid in destroyed:
            del self._buildings[bid]
        return destroyed