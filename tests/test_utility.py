import pytest

from worldsim.agent import AgentActivity, AgentState, SimAgent
from worldsim.core_types import Trait
from worldsim.ids import AgentId
from worldsim.spatial import Position
from worldsim.utility import Goal, Urge, UrgeType, UtilityAI


def _urge(ai, urge_type):
    return next(u for u in ai.urges if u.urge_type is urge_type)


def _agent():
    return SimAgent("Tester", Position(0.0, 0.0, 0.0))


def test_utility_ai_hunger_goal():
    utility = UtilityAI()
    _urge(utility, UrgeType.HUNGER).current_value = 8.0
    assert utility.get_top_goal().condition == "NotHungry"


def test_urge_score_midpoint():
    assert Urge(UrgeType.HUNGER, 1.0, 5.0).score() == pytest.approx(0.5)
    assert Urge(UrgeType.HUNGER, 2.0, 5.0).score() == pytest.approx(1.0)


def test_default_urges():
    utility = UtilityAI()
    assert [u.urge_type for u in utility.urges] == [
        UrgeType.HUNGER,
        UrgeType.THIRST,
        UrgeType.TIREDNESS,
        UrgeType.SAFETY,
        UrgeType.PERSONAL_WEALTH,
        UrgeType.FACTION_LOYALTY,
        UrgeType.SOCIAL_CONNECTION,
    ]
    assert all(u.current_value == 0.0 for u in utility.urges)


def test_update_grows_bodily_urges():
    utility = UtilityAI()
    utility.update(_agent(), 10.0)
    assert _urge(utility, UrgeType.HUNGER).current_value == pytest.approx(1.0)
    assert _urge(utility, UrgeType.THIRST).current_value == pytest.approx(1.5)
    assert _urge(utility, UrgeType.TIREDNESS).current_value == pytest.approx(0.5)
    assert _urge(utility, UrgeType.SAFETY).current_value == 0.0


def test_update_clamps_at_ten():
    utility = UtilityAI()
    utility.update(_agent(), 1000.0)
    assert _urge(utility, UrgeType.HUNGER).current_value == 10.0
    assert _urge(utility, UrgeType.TIREDNESS).current_value == 10.0


def test_fighting_raises_safety():
    utility = UtilityAI()
    agent = _agent()
    agent.state = AgentState(AgentActivity.FIGHTING, other=AgentId())
    utility.update(agent, 1.0)
    assert _urge(utility, UrgeType.SAFETY).current_value == 10.0
    assert utility.get_top_goal() == Goal("Safe")


def test_greedy_agent_values_wealth():
    utility = UtilityAI()
    agent = _agent()
    agent.personality.add_trait(Trait.GREEDY)
    utility.update(agent, 1.0)
    assert _urge(utility, UrgeType.PERSONAL_WEALTH).weight == 2.0


def test_satisfy_floors_at_zero():
    utility = UtilityAI()
    _urge(utility, UrgeType.HUNGER).current_value = 3.0
    utility.satisfy(UrgeType.HUNGER, 1.0)
    assert _urge(utility, UrgeType.HUNGER).current_value == pytest.approx(2.0)
    utility.satisfy(UrgeType.HUNGER, 5.0)
    assert _urge(utility, UrgeType.HUNGER).current_value == 0.0


def test_idle_top_goal_is_safety_by_weight():
    assert UtilityAI().get_top_goal().condition == "Safe"