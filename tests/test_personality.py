import random

import pytest

from worldsim.core_types import Trait
from worldsim.personality import PersonalityProfile, random_personality


def test_personality_traits():
    profile = PersonalityProfile()
    assert not profile.has_trait(Trait.BRAVE)

    profile.add_trait(Trait.BRAVE)
    assert profile.has_trait(Trait.BRAVE)

    assert profile.get_action_cost_modifier("Fight") < 1.0


def test_modifier_without_traits_is_neutral():
    assert PersonalityProfile().get_action_cost_modifier("Fight") == 1.0


def test_modifiers_multiply():
    profile = PersonalityProfile()
    profile.add_trait(Trait.BRAVE)
    profile.add_trait(Trait.COWARDLY)
    assert profile.get_action_cost_modifier("Fight") == pytest.approx(1.0)
    profile.add_trait(Trait.HONEST)
    assert profile.get_action_cost_modifier("Lie") == pytest.approx(3.0)


def test_default_beliefs():
    profile = PersonalityProfile()
    assert profile.beliefs.worldview == "Neutral"
    assert profile.beliefs.faction_loyalty is None


def test_get_belief_returns_first_match():
    profile = PersonalityProfile()
    profile.add_belief("king", "just")
    profile.add_belief("king", "cruel")
    assert profile.get_belief("king") == "just"
    assert profile.get_belief("queen") is None


def test_random_personality_trait_count():
    for seed in range(30):
        profile = random_personality(random.Random(seed))
        assert 1 <= len(profile.traits) <= 4
        assert all(isinstance(t, Trait) for t in profile.traits)


def test_random_personality_is_reproducible():
    first = random_personality(random.Random(42))
    second = random_personality(random.Random(42))
    assert first.traits == second.traits


def test_random_personalities_are_independent_objects():
    first = random_personality()
    second = random_personality()
    first.add_belief("x", "y")
    assert second.get_belief("x") is None