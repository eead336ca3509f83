import pytest

from worldsim.bus import EventBus, EventSubscriber
from worldsim.events import PeaceTreatyEvent, WarDeclaredEvent
from worldsim.ids import AgentId, FactionId
from worldsim.politics import FactionRelation, PoliticalLayer, TerritoryManager
from worldsim.spatial import ChunkCoord


class Recorder(EventSubscriber):
    def __init__(self):
        self.received = []

    async def on_event(self, event):
        self.received.append(event)


@pytest.mark.asyncio
async def test_politics():
    politics = PoliticalLayer(EventBus())
    leader_a = AgentId()
    leader_b = AgentId()

    faction_a = politics.create_faction("Kingdom A", leader_a)
    faction_b = politics.create_faction("Kingdom B", leader_b)

    await politics.declare_war(faction_a, faction_b, "Border dispute")

    faction = politics.get_faction(faction_a)
    assert faction.relations.get(faction_b) is FactionRelation.WAR
    assert politics.get_faction(faction_b).relations.get(faction_a) is FactionRelation.WAR


def test_new_faction_has_leader_as_member_and_default_policies():
    politics = PoliticalLayer(EventBus())
    leader = AgentId()
    faction_id = politics.create_faction("Kingdom A", leader)
    faction = politics.get_faction(faction_id)
    assert faction.id == faction_id
    assert faction.name == "Kingdom A"
    assert faction.leader == leader
    assert faction.members == [leader]
    assert faction.policies.tax_rate == 0.1
    assert faction.policies.military_focus == 0.5
    assert faction.policies.trade_openness == 0.7


def test_add_member_once():
    politics = PoliticalLayer(EventBus())
    leader, member = AgentId(), AgentId()
    faction_id = politics.create_faction("Kingdom A", leader)
    politics.add_member(faction_id, member)
    politics.add_member(faction_id, member)
    politics.add_member(faction_id, leader)
    assert politics.get_faction(faction_id).members == [leader, member]


def test_get_faction_returns_copy():
    politics = PoliticalLayer(EventBus())
    faction_id = politics.create_faction("Kingdom A", AgentId())
    politics.get_faction(faction_id).members.clear()
    assert len(politics.get_faction(faction_id).members) == 1


def test_unknown_faction():
    politics = PoliticalLayer(EventBus())
    assert politics.get_faction(FactionId()) is None


def test_get_all_factions():
    politics = PoliticalLayer(EventBus())
    ids = {politics.create_faction(name, AgentId()) for name in ("A", "B", "C")}
    assert {f.id for f in politics.get_all_factions()} == ids


@pytest.mark.asyncio
async def test_war_and_peace_publish_events():
    bus = EventBus()
    recorder = Recorder()
    bus.subscribe("WarDeclared", recorder)
    bus.subscribe("PeaceTreaty", recorder)
    politics = PoliticalLayer(bus)
    a = politics.create_faction("Kingdom A", AgentId())
    b = politics.create_faction("Kingdom B", AgentId())

    await politics.declare_war(a, b, "Border dispute")
    await politics.make_peace(a, b, "Status quo")

    assert [e.event_type for e in recorder.received] == ["WarDeclared", "PeaceTreaty"]
    assert WarDeclaredEvent.from_payload(recorder.received[0].payload).reason == "Border dispute"
    assert PeaceTreatyEvent.from_payload(recorder.received[1].payload).terms == "Status quo"


@pytest.mark.asyncio
async def test_peace_restores_neutrality():
    politics = PoliticalLayer(EventBus())
    a = politics.create_faction("Kingdom A", AgentId())
    b = politics.create_faction("Kingdom B", AgentId())
    await politics.declare_war(a, b, "Border dispute")
    await politics.make_peace(a, b, "Status quo")
    assert politics.get_faction(a).relations[b] is FactionRelation.NEUTRAL
    assert politics.get_faction(b).relations[a] is FactionRelation.NEUTRAL


def test_territory_claims():
    politics = PoliticalLayer(EventBus())
    a = politics.create_faction("Kingdom A", AgentId())
    b = politics.create_faction("Kingdom B", AgentId())
    chunk = ChunkCoord(1, 0, 2)
    assert politics.get_territory_owner(chunk) is None
    politics.claim_territory(a, chunk)
    assert politics.get_territory_owner(chunk) == a
    politics.claim_territory(b, chunk)
    assert politics.get_territory_owner(chunk) == b


def test_territory_manager_lists_faction_chunks():
    manager = TerritoryManager()
    a, b = FactionId(), FactionId()
    manager.claim(ChunkCoord(0, 0, 0), a)
    manager.claim(ChunkCoord(1, 0, 0), a)
    manager.claim(ChunkCoord(2, 0, 0), b)
    assert set(manager.get_all_territory(a)) == {ChunkCoord(0, 0, 0), ChunkCoord(1, 0, 0)}
    assert manager.get_all_territory(b) == [ChunkCoord(2, 0, 0)]
    assert manager.get_owner(ChunkCoord(9, 9, 9)) is None