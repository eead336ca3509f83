import pytest

from worldsim.bus import EventBus, EventSubscriber
from worldsim.core_types import ResourceType
from worldsim.economy import EconomySubsystem
from worldsim.events import BlightStartedEvent, PriceChangeEvent, WarDeclaredEvent
from worldsim.ids import FactionId
from worldsim.spatial import Position


class Recorder(EventSubscriber):
    def __init__(self):
        self.received = []

    async def on_event(self, event):
        self.received.append(event)


def test_initial_prices():
    economy = EconomySubsystem(EventBus())
    assert economy.get_price(ResourceType.WOOD) == 5.0
    assert economy.get_price(ResourceType.IRON) == 15.0
    assert economy.get_price(ResourceType.GOLD) == 100.0


@pytest.mark.asyncio
async def test_economy_high_demand_raises_price():
    economy = EconomySubsystem(EventBus())
    economy.update_supply(ResourceType.WOOD, 100)
    economy.update_demand(ResourceType.WOOD, 200)

    initial_price = economy.get_price(ResourceType.WOOD)
    await economy.recalculate_prices()
    new_price = economy.get_price(ResourceType.WOOD)

    assert new_price > initial_price


@pytest.mark.asyncio
async def test_price_change_is_published():
    bus = EventBus()
    recorder = Recorder()
    bus.subscribe("PriceChange", recorder)
    economy = EconomySubsystem(bus)
    economy.update_supply(ResourceType.WOOD, 100)
    economy.update_demand(ResourceType.WOOD, 200)

    await economy.recalculate_prices()

    assert len(recorder.received) == 1
    envelope = recorder.received[0]
    assert envelope.event_type == "PriceChange"
    change = PriceChangeEvent.from_payload(envelope.payload)
    assert change.old_price == pytest.approx(5.0)
    assert change.new_price == pytest.approx(economy.get_price(ResourceType.WOOD))
    assert change.total_supply == 100
    assert change.total_demand == 200


@pytest.mark.asyncio
async def test_small_change_is_not_published():
    bus = EventBus()
    recorder = Recorder()
    bus.subscribe("PriceChange", recorder)
    economy = EconomySubsystem(bus)
    economy.update_supply(ResourceType.STONE, 100)
    economy.update_demand(ResourceType.STONE, 100)

    await economy.recalculate_prices()

    assert recorder.received == []
    assert economy.get_price(ResourceType.STONE) > 3.0


@pytest.mark.asyncio
async def test_prices_are_capped():
    economy = EconomySubsystem(EventBus())
    economy.update_supply(ResourceType.WOOD, 1)
    economy.update_demand(ResourceType.WOOD, 1_000_000)
    for _ in range(5):
        await economy.recalculate_prices()
    assert economy.get_price(ResourceType.WOOD) == pytest.approx(1000.0)


@pytest.mark.asyncio
async def test_prices_have_a_floor():
    economy = EconomySubsystem(EventBus())
    economy.update_supply(ResourceType.WOOD, 1_000_000)
    economy.update_demand(ResourceType.WOOD, 0)
    for _ in range(200):
        await economy.recalculate_prices()
    assert economy.get_price(ResourceType.WOOD) == pytest.approx(0.1)


@pytest.mark.asyncio
async def test_unsupplied_resources_keep_their_price():
    economy = EconomySubsystem(EventBus())
    economy.update_demand(ResourceType.FOOD, 500)
    await economy.recalculate_prices()
    assert economy.get_price(ResourceType.FOOD) == 10.0


@pytest.mark.asyncio
async def test_balanced_market_is_stable_without_blight():
    economy = EconomySubsystem(EventBus())
    economy.update_supply(ResourceType.WOOD, 100)
    economy.update_demand(ResourceType.WOOD, 50)
    await economy.recalculate_prices()
    assert economy.get_price(ResourceType.WOOD) == pytest.approx(5.0)


@pytest.mark.asyncio
async def test_blight_raises_price():
    economy = EconomySubsystem(EventBus())
    economy.update_supply(ResourceType.WOOD, 100)
    economy.update_demand(ResourceType.WOOD, 50)
    await economy.on_blight_started(ResourceType.WOOD)
    assert economy.get_price(ResourceType.WOOD) > 5.0


@pytest.mark.asyncio
async def test_blight_event_through_bus():
    bus = EventBus()
    economy = EconomySubsystem(bus)
    bus.subscribe("BlightStarted", economy)
    economy.update_supply(ResourceType.WOOD, 100)
    economy.update_demand(ResourceType.WOOD, 50)

    await bus.publish(
        BlightStartedEvent(
            center=Position(0.0, 0.0, 0.0),
            radius=100.0,
            affected_resource=ResourceType.WOOD,
        )
    )

    assert economy.get_price(ResourceType.WOOD) > 5.0


@pytest.mark.asyncio
async def test_other_events_are_ignored():
    bus = EventBus()
    economy = EconomySubsystem(bus)
    bus.subscribe("WarDeclared", economy)
    economy.update_supply(ResourceType.WOOD, 100)
    economy.update_demand(ResourceType.WOOD, 1000)

    await bus.publish(
        WarDeclaredEvent(aggressor=FactionId(), defender=FactionId(), reason="Border dispute")
    )

    assert economy.get_price(ResourceType.WOOD) == 5.0