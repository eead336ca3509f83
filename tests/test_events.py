import json
from datetime import timezone

import pytest

from worldsim.core_types import ResourceType
from worldsim.events import (
    AgentBornEvent,
    AgentDiedEvent,
    BlightStartedEvent,
    DroughtStartedEvent,
    DungeonMasterEvent,
    EventEnvelope,
    PeaceTreatyEvent,
    PriceChangeEvent,
    Season,
    SeasonChangeEvent,
    TradeExecutedEvent,
    WarDeclaredEvent,
)
from worldsim.ids import AgentId, FactionId
from worldsim.spatial import Position

HERE = Position(1.0, 2.0, 3.0)


def _through_json(payload):
    return json.loads(json.dumps(payload))


@pytest.mark.parametrize(
    ("cls", "name"),
    [
        (PriceChangeEvent, "PriceChange"),
        (TradeExecutedEvent, "TradeExecuted"),
        (WarDeclaredEvent, "WarDeclared"),
        (PeaceTreatyEvent, "PeaceTreaty"),
        (BlightStartedEvent, "BlightStarted"),
        (DroughtStartedEvent, "DroughtStarted"),
        (SeasonChangeEvent, "SeasonChange"),
        (AgentDiedEvent, "AgentDied"),
        (AgentBornEvent, "AgentBorn"),
        (DungeonMasterEvent, "DungeonMaster"),
    ],
)
def test_event_type_names(cls, name):
    assert cls.event_type == name


def test_price_change_round_trip():
    event = PriceChangeEvent(ResourceType.WOOD, 5.0, 6.5, 100, 200)
    assert PriceChangeEvent.from_payload(_through_json(event.to_payload())) == event


def test_trade_executed_round_trip():
    event = TradeExecutedEvent(AgentId(), AgentId(), ResourceType.IRON, 3, 15.0, HERE)
    assert TradeExecutedEvent.from_payload(_through_json(event.to_payload())) == event


def test_war_declared_round_trip():
    event = WarDeclaredEvent(FactionId(), FactionId(), "Border dispute")
    assert WarDeclaredEvent.from_payload(_through_json(event.to_payload())) == event


def test_peace_treaty_round_trip():
    event = PeaceTreatyEvent(FactionId(), FactionId(), "tribute")
    assert PeaceTreatyEvent.from_payload(_through_json(event.to_payload())) == event


def test_blight_started_round_trip():
    event = BlightStartedEvent(HERE, 100.0, ResourceType.WOOD)
    assert BlightStartedEvent.from_payload(_through_json(event.to_payload())) == event


def test_drought_started_round_trip():
    event = DroughtStartedEvent("global", 0.7, 30)
    assert DroughtStartedEvent.from_payload(_through_json(event.to_payload())) == event


def test_season_change_round_trip():
    event = SeasonChangeEvent(Season.SPRING, Season.SUMMER)
    assert SeasonChangeEvent.from_payload(_through_json(event.to_payload())) == event


def test_agent_died_round_trip():
    event = AgentDiedEvent(AgentId(), "Natural causes", HERE)
    assert AgentDiedEvent.from_payload(_through_json(event.to_payload())) == event


def test_agent_born_round_trip():
    event = AgentBornEvent(AgentId(), [AgentId(), AgentId()], HERE)
    assert AgentBornEvent.from_payload(_through_json(event.to_payload())) == event


def test_dungeon_master_round_trip():
    event = DungeonMasterEvent("Forest Blight", "trees die", "Blight")
    assert DungeonMasterEvent.from_payload(_through_json(event.to_payload())) == event


def test_payload_encodes_ids_and_enums_as_strings():
    agent = AgentId()
    event = AgentDiedEvent(agent, "Natural causes", Position(1.0, 2.0, 3.0))
    payload = event.to_payload()
    assert payload["agent_id"] == str(agent)
    assert payload["location"] == {"x": 1.0, "y": 2.0, "z": 3.0}
    assert BlightStartedEvent(Position(0.0, 0.0, 0.0), 1.0, ResourceType.WOOD).to_payload()[
        "affected_resource"
    ] == "Wood"


def test_missing_field_is_rejected():
    with pytest.raises(ValueError):
        BlightStartedEvent.from_payload({"radius": 100.0, "affected_resource": "Wood"})


def test_unknown_enum_value_is_rejected():
    payload = BlightStartedEvent(Position(0.0, 0.0, 0.0), 1.0, ResourceType.WOOD).to_payload()
    payload["affected_resource"] = "Unobtainium"
    with pytest.raises(ValueError):
        BlightStartedEvent.from_payload(payload)


def test_non_mapping_payload_is_rejected():
    with pytest.raises(ValueError):
        WarDeclaredEvent.from_payload(None)


def test_envelope_defaults():
    envelope = EventEnvelope("Custom", "admin_api", {"a": 1})
    assert envelope.id.version == 4
    assert envelope.timestamp.tzinfo == timezone.utc


def test_envelope_round_trip():
    envelope = EventEnvelope("Custom", "admin_api", {"a": [1, 2]})
    data = json.loads(json.dumps(envelope.to_dict()))
    assert EventEnvelope.from_dict(data) == envelope


def test_envelope_from_dict_accepts_zulu_suffix():
    envelope = EventEnvelope("Custom", "system", None)
    data = envelope.to_dict()
    data["timestamp"] = envelope.timestamp.replace(tzinfo=None).isoformat() + "Z"
    assert EventEnvelope.from_dict(data).timestamp == envelope.timestamp


def test_envelope_from_dict_rejects_bad_id():
    data = EventEnvelope("Custom", "system", None).to_dict()
    data["id"] = "not-a-uuid"
    with pytest.raises(ValueError):
        EventEnvelope.from_dict(data)