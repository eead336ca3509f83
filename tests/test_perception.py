import pytest

from worldsim.core_types import BlockType
from worldsim.ids import AgentId, ItemId
from worldsim.perception import (
    AgentPerception,
    AuditoryKind,
    AuditoryStimulus,
    StimulusSubsystem,
    VisualKind,
    VisualStimulus,
)
from worldsim.spatial import GridCoord, Position

ORIGIN = Position(0.0, 0.0, 0.0)


def test_perception():
    perception = AgentPerception()
    other_agent = AgentId()
    stimulus = VisualStimulus.of_agent(Position(10.0, 0.0, 0.0), other_agent)
    perception.process_stimuli(ORIGIN, [stimulus], 0)
    assert perception.knows_agent(other_agent)


def test_agent_out_of_sight_is_unknown():
    perception = AgentPerception()
    other = AgentId()
    perception.process_stimuli(ORIGIN, [VisualStimulus.of_agent(Position(60.0, 0.0, 0.0), other)], 3)
    assert not perception.knows_agent(other)
    assert perception.get_known_agent_position(other) is None
    assert perception.known_world.last_updated == 3


def test_known_agent_position_and_time():
    perception = AgentPerception()
    other = AgentId()
    where = Position(3.0, 4.0, 0.0)
    perception.process_stimuli(ORIGIN, [VisualStimulus.of_agent(where, other)], 7)
    assert perception.get_known_agent_position(other) == where
    assert perception.known_world.known_agents[other].last_seen_time == 7


def test_item_and_block_are_recorded():
    perception = AgentPerception()
    item = ItemId()
    coord = GridCoord(1, 2, 3)
    perception.process_stimuli(
        ORIGIN,
        [
            VisualStimulus.of_item(Position(1.0, 0.0, 0.0), item),
            VisualStimulus.of_block(Position(1.0, 2.0, 3.0), coord, BlockType.STONE),
            VisualStimulus.of_action(Position(1.0, 0.0, 0.0), "Chop"),
        ],
        5,
    )
    known_item = perception.known_world.known_items[item]
    assert known_item.item_type == "unknown"
    assert known_item.last_seen_time == 5
    assert perception.known_world.known_blocks == {coord: BlockType.STONE}
    assert perception.known_world.known_agents == {}


def test_sound_does_not_add_agents():
    perception = AgentPerception()
    speaker = AgentId()
    sound = AuditoryStimulus(ORIGIN, AuditoryKind.SPEECH, 1.0, speaker=speaker, text="hello")
    perception.process_stimuli(ORIGIN, [sound], 9)
    assert not perception.knows_agent(speaker)
    assert perception.known_world.last_updated == 9


def test_missing_subject_raises():
    with pytest.raises(ValueError):
        VisualStimulus(ORIGIN, VisualKind.AGENT)
    with pytest.raises(ValueError):
        AuditoryStimulus(ORIGIN, AuditoryKind.SPEECH, 1.0)


def test_default_senses():
    perception = AgentPerception()
    assert perception.sight_radius == 50.0
    assert perception.hearing_radius == 100.0
    assert perception.sight_cone_angle == 120.0


def test_collect_and_clear():
    subsystem = StimulusSubsystem()
    first = VisualStimulus.of_action(ORIGIN, "Wave")
    second = AuditoryStimulus(ORIGIN, AuditoryKind.EXPLOSION, 2.0)
    subsystem.broadcast(first)
    subsystem.broadcast(second)
    assert subsystem.collect_and_clear() == [first, second]
    assert subsystem.collect_and_clear() == []