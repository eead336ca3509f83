"""Resource prices driven by supply and demand."""

import threading

from worldsim.bus import EventBus, EventSubscriber
from worldsim.core_types import ResourceType
from worldsim.events import BlightStartedEvent, PriceChangeEvent

_DEFAULT_PRICE = 10.0
_MIN_PRICE = 0.1
_MAX_PRICE = 1000.0
_NO_SUPPLY_RATIO = 2.0
_REPORT_THRESHOLD = 0.5
_BLIGHT_SURVIVAL = 0.3

_INITIAL_PRICES = {
    ResourceType.WOOD: 5.0,
    ResourceType.STONE: 3.0,
    ResourceType.IRON: 15.0,
    ResourceType.GOLD: 100.0,
    ResourceType.FOOD: 10.0,
    ResourceType.WATER: 1.0,
    ResourceType.CLOTH: 8.0,
    ResourceType.TOOL: 25.0,
    ResourceType.WEAPON: 50.0,
    ResourceType.COIN: 1.0,
}


class EconomySubsystem(EventSubscriber):
    """Keeps resource prices and adjusts them to supply and demand."""

    def __init__(self, event_bus: EventBus) -> None:
        self._prices: dict[ResourceType, float] = dict(_INITIAL_PRICES)
        self._supply: dict[ResourceType, int] = {}
        self._demand: dict[ResourceType, int] = {}
        self._event_bus = event_bus
        self._lock = threading.Lock()

    def get_price(self, resource: ResourceType) -> float:
        """Current price of ``resource``."""
        with self._lock:
            return self._prices.get(resource, _DEFAULT_PRICE)

    def update_supply(self, resource: ResourceType, quantity: int) -> None:
        """Set the total supply of ``resource``."""
        with self._lock:
            self._supply[resource] = quantity

    def update_demand(self, resource: ResourceType, quantity: int) -> None:
        """Set the total demand for ``resource``."""
        with self._lock:
            self._demand[resource] = quantity

    async def recalculate_prices(self) -> None:
        """Adjust every supplied resource's price; publish notable changes."""
        changes: list[PriceChangeEvent] = []
        with self._lock:
            for resource, supply_qty in self._supply.items():
                demand_qty = self._demand.get(resource, 0)
                old_price = self._prices.get(resource, _DEFAULT_PRICE)
                ratio = demand_qty / supply_qty if supply_qty > 0 else _NO_SUPPLY_RATIO
                new_price = min(max(old_price * (0.9 + ratio * 0.2), _MIN_PRICE), _MAX_PRICE)
                if abs(new_price - old_price) > _REPORT_THRESHOLD:
                    changes.append(
                        PriceChangeEvent(
                            resource=resource,
                            old_price=old_price,
                            new_price=new_price,
                            total_supply=supply_qty,
                            total_demand=demand_qty,
                        )
                    )
                self._prices[resource] = new_price

        for change in changes:
            await self._event_bus.publish(change)

    async def on_blight_started(self, resource: ResourceType) -> None:
        """Cut the supply of ``resource`` by 70% and reprice."""
        with self._lock:
            if resource in self._supply:
                self._supply[resource] = int(self._supply[resource] * _BLIGHT_SURVIVAL)
        await self.recalculate_prices()

    async def on_event(self, event) -> None:
        """React to blights; other events and unreadable payloads are ignored."""
        if event.event_type != "BlightStarted":
            return
        try:
            blight = BlightStartedEvent.from_payload(event.payload)
        except (KeyError, TypeError, ValueError):
            return
        await self.on_blight_started(blight.affected_resource)