"""
Strategy registry for plugin-based recommendation system.

This module provides a central registry for recommendation strategies,
so new strategies can be added without modifying the manager.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Type

from who_to_follow.recommenders.base import BaseRecommender

logger = logging.getLogger(__name__)


class StrategyRegistry:
    """
    Plugin registry for recommendation strategies.

    Typical usage:
        >>> StrategyRegistry.register("graph_proximity", GraphProximityRecommender)
        >>> strategy = StrategyRegistry.get_strategy("graph_proximity", session=session, config=config)
        >>> signals = strategy.recommend(user_id, limit=10)

    Attributes:
        _strategies: Class-level dict mapping strategy names to classes.
    """

    _strategies: Dict[str, Type[BaseRecommender]] = {}

    @classmethod
    def register(cls, name: str, strategy_class: Type[BaseRecommender]) -> None:
        """
        Register a recommendation strategy class.

        Args:
            name: Unique identifier for the strategy (e.g., 'popularity').
            strategy_class: Class inheriting from BaseRecommender.

        Raises:
            ValueError: If strategy name is already registered.
            TypeError: If strategy_class doesn't inherit from BaseRecommender.
        """
        if name in cls._strategies:
            raise ValueError(f"Strategy '{name}' is already registered")

        if not isinstance(strategy_class, type) or not issubclass(strategy_class, BaseRecommender):
            raise TypeError(
                f"Strategy class must inherit from BaseRecommender, "
                f"got {getattr(strategy_class, '__name__', strategy_class)!r}"
            )

        cls._strategies[name] = strategy_class
        logger.info(f"Registered strategy: {name} ({strategy_class.__name__})")

    @classmethod
    def get_strategy(cls, name: str, **kwargs) -> BaseRecommender:
        """
        Instantiate a strategy by name.

        Args:
            name: Strategy identifier.
            **kwargs: Arguments to pass to strategy constructor.

        Raises:
            ValueError: If strategy name is not registered.
        """
        if name not in cls._strategies:
            available = ", ".join(cls.list_strategies())
            raise ValueError(
                f"Unknown strategy: '{name}'. Available strategies: {available}"
            )

        logger.debug(f"Instantiating strategy: {name}")
        return cls._strategies[name](**kwargs)

    @classmethod
    def list_strategies(cls) -> List[str]:
        """List all registered strategy names."""
        return list(cls._strategies.keys())

    @classmethod
    def is_registered(cls, name: str) -> bool:
        """Check if a strategy is registered."""
        return name in cls._strategies

    @classmethod
    def unregister(cls, name: str) -> None:
        """
        Unregister a strategy.

        Raises:
            ValueError: If strategy name is not registered.
        """
        if name not in cls._strategies:
            raise ValueError(f"Cannot unregister unknown strategy: '{name}'")

        del cls._strategies[name]
        logger.info(f"Unregistered strategy: {name}")

    @classmethod
    def clear(cls) -> None:
        """Clear all registered strategies. Mostly useful in tests."""
        cls._strategies.clear()
        logger.warning("Cleared all registered strategies")
