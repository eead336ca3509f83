"""Physical markets with inventories and order books."""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from worldsim.core_types import ResourceType
from worldsim.ids import AgentId
from worldsim.spatial import Position


class MarketType(Enum):
    """Speciality of a market."""

    GENERAL = "General"
    FOOD = "Food"
    MATERIALS = "Materials"
    LUXURY = "Luxury"
    WEAPONS = "Weapons"


class OrderType(Enum):
    """Side of a trade order."""

    BUY = "Buy"
    SELL = "Sell"


@dataclass
class MarketGood:
    """A resource held in a market's inventory."""

    resource_type: ResourceType
    quantity: int
    base_price: float
    current_price: float
    sellers: list[uuid.UUID] = field(default_factory=list)


@dataclass
class TradeOrder:
    """An agent's wish to buy or sell a quantity at a unit price."""

    agent_id: AgentId
    resource: ResourceType
    quantity: int
    price_per_unit: float
    order_type: OrderType
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass
class TradeExecution:
    """A completed match between a buyer and a seller."""

    buyer_id: AgentId
    seller_id: AgentId
    resource: ResourceType
    quantity: int
    price_per_unit: float
    market_id: uuid.UUID
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass
class Market:
    """A place where agents trade."""

    name: str
    position: Position
    market_type: MarketType
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    inventory: dict[ResourceType, MarketGood] = field(default_factory=dict)
    buy_orders: list[TradeOrder] = field(default_factory=list)
    sell_orders: list[TradeOrder] = field(default_factory=list)
    transaction_count: int = 0
    reputation: float = 50.0

    def add_inventory(self, resource: ResourceType, quantity: int, base_price: float) -> None:
        """Add stock; the base price is only set when the good is new."""
        good = self.inventory.setdefault(
            resource, MarketGood(resource, 0, base_price, base_price)
        )
        good.quantity += quantity

    def remove_inventory(self, resource: ResourceType, quantity: int) -> bool:
        """Take stock out if enough is held; returns whether it was."""
        good = self.inventory.get(resource)
        if good is None or good.quantity < quantity:
            return False
        good.quantity -= quantity
        return True

    def place_buy_order(self, order: TradeOrder) -> None:
        """Queue a buy order."""
        self.buy_orders.append(order)

    def place_sell_order(self, order: TradeOrder) -> None:
        """Queue a sell order."""
        self.sell_orders.append(order)

    def match_orders(self) -> list[TradeExecution]:
        """Match buys against sells of the same resource at a crossing price.

        Each buy order is matched against at most one sell order per pass,
        trading at the midpoint of the two prices; filled orders are removed.
        """
        executions: list[TradeExecution] = []
        buys, sells = self.buy_orders, self.sell_orders
        i = 0
        while i < len(buys):
            j = 0
            while j < len(sells):
                buy, sell = buys[i], sells[j]
                if buy.resource == sell.resource and buy.price_per_unit >= sell.price_per_unit:
                    quantity = min(buy.quantity, sell.quantity)
                    executions.append(
                        TradeExecution(
                            buyer_id=buy.agent_id,
                            seller_id=sell.agent_id,
                            resource=buy.resource,
                            quantity=quantity,
                            price_per_unit=(buy.price_per_unit + sell.price_per_unit) / 2.0,
                            market_id=self.id,
                        )
                    )
                    self.transaction_count += 1
                    buy.quantity -= quantity
                    sell.quantity -= quantity
                    if buy.quantity == 0:
                        del buys[i]
                    else:
                        i += 1
                    if sell.quantity == 0:
                        del sells[j]
                    else:
                        j += 1
                    break
                j += 1
            if j >= len(sells):
                i += 1
        return executions

    def update_prices(self) -> None:
        """Reprice each good from buy demand against stock on hand."""
        for good in self.inventory.values():
            demand = sum(o.quantity for o in self.buy_orders if o.resource == good.resource_type)
            supply_factor = demand / good.quantity if good.quantity > 0 else 2.0
            price = good.base_price * (0.8 + supply_factor * 0.4)
            good.current_price = min(max(price, good.base_price * 0.5), good.base_price * 3.0)


class MarketSystem:
    """Every market in the world, by id."""

    def __init__(self) -> None:
        self._markets: dict[uuid.UUID, Market] = {}

    def create_market(self, name: str, position: Position, market_type: MarketType) -> uuid.UUID:
        """Open a new market; returns its id."""
        market = Market(name, position, market_type)
        self._markets[market.id] = market
        return market.id

    def get_market(self, market_id: uuid.UUID) -> Optional[Market]:
        """The market with ``market_id``, or None."""
        return self._markets.get(market_id)

    def get_all_markets(self) -> list[Market]:
        """Every market."""
        return list(self._markets.values())

    def find_nearest_market(
        self, position: Position, market_type: Optional[MarketType] = None
    ) -> Optional[Market]:
        """Nearest market, of ``market_type`` if given, or None."""
        candidates = [
            m for m in self._markets.values() if market_type is None or m.market_type == market_type
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda m: m.position.distance_to(position))

    def process_all_markets(self) -> list[TradeExecution]:
        """Reprice and match orders in every market; returns all executions."""
        executions: list[TradeExecution] = []
        for market in self._markets.values():
            market.update_prices()
            executions.extend(market.match_orders())
        return executions