"""Item ownership registry and an agent's personal domain."""

import threading
from dataclasses import dataclass, field
from typing import Optional

from worldsim.ids import AgentId, ItemId
from worldsim.spatial import GridCoord


class GlobalOwnershipRegistry:
    """Shared record of which agent owns which item."""

    def __init__(self) -> None:
        self._ownership: dict[ItemId, AgentId] = {}
        self._lock = threading.Lock()

    def set_owner(self, item_id: ItemId, owner_id: AgentId) -> None:
        """Record ``owner_id`` as the owner of ``item_id``."""
        with self._lock:
            self._ownership[item_id] = owner_id

    def get_owner(self, item_id: ItemId) -> Optional[AgentId]:
        """The owner of ``item_id``, or None if unowned."""
        with self._lock:
            return self._ownership.get(item_id)

    def transfer(self, item_id: ItemId, new_owner: AgentId) -> None:
        """Hand ``item_id`` over to ``new_owner``."""
        self.set_owner(item_id, new_owner)

    def remove(self, item_id: ItemId) -> None:
        """Forget the owner of ``item_id`` (item destroyed or lost)."""
        with self._lock:
            self._ownership.pop(item_id, None)

    def get_items_owned_by(self, owner_id: AgentId) -> list[ItemId]:
        """Every item owned by ``owner_id``."""
        with self._lock:
            return [item for item, owner in self._ownership.items() if owner == owner_id]


@dataclass
class SocialCache:
    """Quick-reference view of an agent's social network."""

    inner_circle: list[AgentId] = field(default_factory=list)
    allies: list[AgentId] = field(default_factory=list)
    superiors: list[AgentId] = field(default_factory=list)
    rivals: list[AgentId] = field(default_factory=list)
    enemies: list[AgentId] = field(default_factory=list)


@dataclass
class AgentDomain:
    """An agent's personal places and social connections."""

    home_location: Optional[GridCoord] = None
    sleep_location: Optional[GridCoord] = None
    work_location: Optional[GridCoord] = None
    safe_zones: list[GridCoord] = field(default_factory=list)
    social_cache: SocialCache = field(default_factory=SocialCache)

    def set_home(self, location: GridCoord) -> None:
        """Set the home; it also becomes the sleep spot if none is set."""
        self.home_location = location
        if self.sleep_location is None:
            self.sleep_location = location

    def add_to_inner_circle(self, agent_id: AgentId) -> None:
        """Add ``agent_id`` to the inner circle once."""
        if agent_id not in self.social_cache.inner_circle:
            self.social_cache.inner_circle.append(agent_id)

    def add_enemy(self, agent_id: AgentId) -> None:
        """Mark ``agent_id`` as an enemy once."""
        if agent_id not in self.social_cache.enemies:
            self.social_cache.enemies.append(agent_id)

    def is_enemy(self, agent_id: AgentId) -> bool:
        """Whether ``agent_id`` is an enemy."""
        return agent_id in self.social_cache.enemies