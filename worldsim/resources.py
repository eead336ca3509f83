"""Harvestable resource nodes scattered over the world."""

import copy
import random
import threading
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from worldsim.spatial import Position


class ResourceNodeType(Enum):
    """Kinds of harvestable node."""

    TREE = "Tree"
    ROCK = "Rock"
    FARM = "Farm"
    IRON_DEPOSIT = "IronDeposit"


_MAX_QUANTITY = {
    ResourceNodeType.TREE: 200,
    ResourceNodeType.ROCK: 150,
    ResourceNodeType.FARM: 300,
    ResourceNodeType.IRON_DEPOSIT: 100,
}

_REGEN_RATE = {
    ResourceNodeType.TREE: 5,
    ResourceNodeType.ROCK: 2,
    ResourceNodeType.FARM: 10,
    ResourceNodeType.IRON_DEPOSIT: 3,
}


@dataclass
class ResourceNode:
    """A harvestable node at a position."""

    resource_type: ResourceNodeType
    position: Position
    quantity: int
    id: uuid.UUID = field(default_factory=uuid.uuid4)


class ResourceManager:
    """All resource nodes in the world."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._nodes: list[ResourceNode] = []
        self._lock = threading.Lock()
        self._rng = rng if rng is not None else random.Random()

    def add_node(self, node: ResourceNode) -> None:
        """Add a node."""
        with self._lock:
            self._nodes.append(node)

    def get_nodes(self) -> list[ResourceNode]:
        """Copies of every node."""
        with self._lock:
            return copy.deepcopy(self._nodes)

    def get_nodes_by_type(self, resource_type: ResourceNodeType) -> list[ResourceNode]:
        """Copies of the nodes of ``resource_type``."""
        with self._lock:
            return [copy.deepcopy(n) for n in self._nodes if n.resource_type == resource_type]

    def find_nearest(
        self, pos: Position, resource_type: ResourceNodeType
    ) -> Optional[ResourceNode]:
        """Nearest non-empty node of ``resource_type``, or None."""
        with self._lock:
            candidates = [
                n for n in self._nodes if n.resource_type == resource_type and n.quantity > 0
            ]
            if not candidates:
                return None
            return copy.deepcopy(min(candidates, key=lambda n: pos.distance_to(n.position)))

    def harvest(self, node_id: uuid.UUID, amount: int) -> int:
        """Take up to ``amount`` from a node; raises KeyError for unknown ids."""
        with self._lock:
            node = next((n for n in self._nodes if n.id == node_id), None)
            if node is None:
                raise KeyError(node_id)
            harvested = min(amount, node.quantity)
            node.quantity -= harvested
            return harvested

    def regenerate(self) -> None:
        """Grow every node below its maximum by its type's rate."""
        with self._lock:
            for node in self._nodes:
                maximum = _MAX_QUANTITY[node.resource_type]
                if node.quantity < maximum:
                    node.quantity = min(node.quantity + _REGEN_RATE[node.resource_type], maximum)

    def generate_random_nodes(self, count: int, world_size: float) -> None:
        """Replace all nodes with ``count`` random ones inside ``±world_size``."""
        rng = self._rng
        kinds = tuple(ResourceNodeType)
        nodes = [
            ResourceNode(
                kinds[rng.randrange(len(kinds))],
                Position(rng.uniform(-world_size, world_size), 1.0,
                         rng.uniform(-world_size, world_size)),
                rng.randrange(50, 200),
            )
            for _ in range(count)
        ]
        with self._lock:
            self._nodes = nodes