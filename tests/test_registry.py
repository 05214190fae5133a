"""
Tests for the strategy registry.
"""

import pytest

from who_to_follow.recommenders import BaseRecommender, StrategyRegistry
from who_to_follow.recommenders.strategies import GraphProximityRecommender


class EchoRecommender(BaseRecommender):
    """Returns nothing; used to exercise registration."""

    @property
    def strategy_name(self) -> str:
        return "echo"

    def recommend(self, requester_id, limit=10, **kwargs):
        return []


def test_manager_registers_builtin_strategies(recommendation_manager):
    for name in ("graph_proximity", "interest_overlap", "popularity", "recency"):
        assert StrategyRegistry.is_registered(name)


def test_register_and_instantiate(session, config):
    StrategyRegistry.register("echo", EchoRecommender)

    strategy = StrategyRegistry.get_strategy("echo", session=session, config=config)

    assert isinstance(strategy, EchoRecommender)
    assert strategy.session is session
    assert "echo" in StrategyRegistry.list_strategies()


def test_duplicate_registration_rejected(recommendation_manager):
    with pytest.raises(ValueError):
        StrategyRegistry.register("graph_proximity", GraphProximityRecommender)


def test_non_recommender_rejected():
    with pytest.raises(TypeError):
        StrategyRegistry.register("bogus", dict)


def test_unknown_strategy(session):
    with pytest.raises(ValueError, match="Unknown strategy"):
        StrategyRegistry.get_strategy("does_not_exist", session=session)


def test_unregister_and_clear():
    StrategyRegistry.register("echo", EchoRecommender)
    StrategyRegistry.unregister("echo")
    assert not StrategyRegistry.is_registered("echo")

    with pytest.raises(ValueError):
        StrategyRegistry.unregister("echo")

    StrategyRegistry.clear()
    assert StrategyRegistry.list_strategies() == []
