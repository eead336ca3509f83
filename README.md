# worldsim

A pure-Python library of building blocks for an agent-based world
simulation. It has no third-party dependencies.

## What is in it

| Module | Contents |
| --- | --- |
| `worldsim.ids` | `AgentId`, `ItemId`, `FactionId` (UUID-backed, random by default) and `ChunkId` |
| `worldsim.mathutil` | `lerp`, `clamp`, `sigmoid`, `normalize` |
| `worldsim.spatial` | `Position`, `GridCoord`, `ChunkCoord`, `BoundingBox` |
| `worldsim.core_types` | `BlockType`, `ResourceType`, `Skill`, `Trait` (with `action_cost_modifier`), `Attributes`, `SimTime` |
| `worldsim.events` | `Event` base with `to_payload`/`from_payload`, `EventEnvelope` with `to_dict`/`from_dict`, and the typed events (`PriceChangeEvent`, `TradeExecutedEvent`, `WarDeclaredEvent`, `PeaceTreatyEvent`, `BlightStartedEvent`, `DroughtStartedEvent`, `SeasonChangeEvent`, `AgentDiedEvent`, `AgentBornEvent`, `DungeonMasterEvent`) and `Season` |
| `worldsim.bus` | asynchronous `EventBus`, the `EventSubscriber` base class and `get_event_bus()` for a shared bus |
| `worldsim.skills` | `SkillDatabase` (level = sqrt(experience / 10)), `Knowledge`, `KnowledgeType` |
| `worldsim.personality` | `PersonalityProfile`, `Beliefs`, `random_personality` |
| `worldsim.ownership` | `GlobalOwnershipRegistry`, `AgentDomain`, `SocialCache` |
| `worldsim.agent` | `SimAgent` with social class, job, wallet, inventory, needs and carrying capacity; `AgentState`, `AgentActivity`, `Job`, `SocialClass`, `Loan`, `BuildingResources`, `TransactionType` |
| `worldsim.lifecycle` | `LifecycleLayer`: population, random births and deaths, publishing `AgentBorn`/`AgentDied` events |
| `worldsim.currency` | `CurrencySystem` (money supply and inflation) and `Wallet` |
| `worldsim.grid` | chunked voxel `GridLayer` (chunks of 32³, missing chunks read as air), `Chunk`, `DynamicObject`, `DynamicObjectList` |
| `worldsim.pathfinding` | six-directional A* `find_path` and `HierarchicalPathfinding` |
| `worldsim.resources` | `ResourceNode`, `ResourceNodeType`, `ResourceManager` (harvesting, regeneration, random generation) |
| `worldsim.content` | `ContentDefinitionLayer` with default actions, items, recipes and traits |
| `worldsim.buildings` | `Building` with resource-based construction, `BuildingType`, `BuildingOwner`, `ResourceStorage`, `BuildingManager` |
| `worldsim.social` | `SocialLayer`, `Relationship`, `RelationshipManager`, `MemoryFact`, `MemorySource`, `MemoryManager` |
| `worldsim.snapshot` | `WorldSnapshot` binary encoding with `to_bytes`/`from_bytes`, `SnapshotMetadata`, `PersistenceError` |
| `worldsim.utility` | urge-driven `UtilityAI`, `Urge`, `UrgeType`, `Goal` |
| `worldsim.goap` | `GOAPPlanner` (regressive A* over facts) and `WorldState` |
| `worldsim.perception` | `VisualStimulus`, `AuditoryStimulus`, `StimulusSubsystem`, `AgentPerception` and its `KnownWorld` |
| `worldsim.economy` | `EconomySubsystem`: supply/demand prices, `PriceChange` events, reacts to `BlightStarted` events |
| `worldsim.market` | `Market` with inventory and buy/sell order matching, `MarketSystem` |
| `worldsim.politics` | `PoliticalLayer` with factions, war, peace and territory; `TerritoryManager`, `Faction`, `Policies`, `FactionRelation` |

A few behaviours worth knowing:

- `Wallet.withdraw` raises `worldsim.currency.InsufficientFundsError` when the
  balance does not cover the amount.
- `ResourceManager.harvest` raises `KeyError` for an unknown node id and
  otherwise returns how much was taken.
- `Event.from_payload`, `EventEnvelope.from_dict` raise `ValueError` on
  malformed data; `WorldSnapshot.from_bytes` raises `PersistenceError`.
- Query methods on the thread-safe managers (`LifecycleLayer.get_agents`,
  `PoliticalLayer.get_faction`, `ResourceManager.get_nodes`, ...) return
  copies; change state through the manager's own methods.
- Randomised classes (`SimAgent`, `LifecycleLayer`, `ResourceManager`,
  `random_personality`) accept a `random.Random` for reproducible runs.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
import asyncio

from worldsim.bus import EventBus
from worldsim.content import ActionDefinition
from worldsim.goap import GOAPPlanner, WorldState
from worldsim.grid import GridLayer
from worldsim.ids import AgentId
from worldsim.pathfinding import find_path
from worldsim.politics import PoliticalLayer
from worldsim.spatial import GridCoord
from worldsim.utility import Goal

# Plan a way to stop being hungry
planner = GOAPPlanner([
    ActionDefinition(id="eat", name="Eat", base_cost=1.0, intended_use=95,
                     preconditions=["HasFood"], effects=["NotHungry"]),
    ActionDefinition(id="get_food", name="Get Food", base_cost=5.0, intended_use=80,
                     preconditions=[], effects=["HasFood"]),
])
print(planner.plan(WorldState(), Goal("NotHungry"), 100))  # ['get_food', 'eat']

# Walk across generated terrain
grid = GridLayer()
grid.generate_simple_terrain(GridCoord(0, 0, 0), GridCoord(9, 0, 9))
path = find_path(grid, GridCoord(0, 1, 0), GridCoord(5, 1, 5), 1000)
print(path[0], path[-1])

# Factions go to war; subscribers on the bus hear about it
async def main():
    politics = PoliticalLayer(EventBus())
    a = politics.create_faction("Kingdom A", AgentId())
    b = politics.create_faction("Kingdom B", AgentId())
    await politics.declare_war(a, b, "Border dispute")
    print(politics.get_faction(a).relations[b])  # FactionRelation.WAR

asyncio.run(main())
```

## What it does not do

This is a library only. It has no command-line program, no main simulation
loop, no HTTP or WebSocket control interface and no storyteller that injects
events on its own. Nothing is stored in a database: `EventBus.connect_to_history`
simply hands each published envelope to a callable you supply, and
`WorldSnapshot` only turns a snapshot into bytes and back, leaving where they
are kept up to you.