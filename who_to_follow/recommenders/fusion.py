"""
Fusion engine for combining multiple recommendation strategies.

Signals are folded into one AggregateRecommendation per candidate using
weighted score summation, then ranked by fused score.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from who_to_follow.recommenders.base import AggregateRecommendation, Signal

logger = logging.getLogger(__name__)

DEFAULT_STRATEGY_ORDER = ("graph_proximity", "interest_overlap", "popularity", "recency")
DEFAULT_WEIGHTS = {
    "graph_proximity": 1.0,
    "interest_overlap": 1.0,
    "popularity": 0.3,
    "recency": 0.2,
}
DEFAULT_EXPLAINED = frozenset({"graph_proximity", "interest_overlap"})


class FusionEngine:
    """
    Combine strategy signals by weighted score summation.

    Strategies are replayed in a fixed declared order. For every signal the
    candidate's entry is looked up or created:

    - on first sight the entry stores ``weight * score`` and the signal's reason;
    - on merge ``weight * score`` is added, and the reason is appended only
      when the strategy is an *explained* strategy.

    Explained strategies (graph proximity and interest overlap by default)
    always surface their reasons. The others corroborate silently and only
    explain a recommendation when they introduce the candidate.

    Typical usage:
        >>> fusion = FusionEngine()
        >>> results = fusion.fuse({"graph_proximity": gp, "popularity": pop}, limit=10)

    Attributes:
        strategy_order: Declared order strategies are folded in.
        strategy_weights: Weight multiplier for each strategy.
        explained_strategies: Strategies whose reasons append on merge.
    """

    def __init__(
        self,
        strategy_order: Sequence[str] = DEFAULT_STRATEGY_ORDER,
        strategy_weights: Optional[Mapping[str, float]] = None,
        explained_strategies: Iterable[str] = DEFAULT_EXPLAINED,
    ):
        self.strategy_order: List[str] = list(strategy_order)
        self.strategy_weights: Dict[str, float] = dict(DEFAULT_WEIGHTS)
        if strategy_weights:
            self.strategy_weights.update(strategy_weights)
        self.explained_strategies = frozenset(explained_strategies)

    def set_strategy_weights(self, weights: Mapping[str, float]) -> None:
        """
        Override weight multipliers for strategies.

        Args:
            weights: Dictionary mapping strategy names to weight multipliers.
                     Strategies not in the dict keep their current weight.

        Raises:
            ValueError: If a weight is negative.
        """
        for name, weight in weights.items():
            if weight < 0:
                raise ValueError(f"Weight for '{name}' must be non-negative, got {weight}")
        self.strategy_weights.update(weights)
        logger.info(f"Set strategy weights: {dict(weights)}")

    def get_strategy_weight(self, strategy_name: str) -> float:
        """
        Get weight for a strategy.

        Returns:
            Weight multiplier (1.0 if not explicitly set).
        """
        return self.strategy_weights.get(strategy_name, 1.0)

    def fuse(
        self,
        strategy_results: Mapping[str, List[Signal]],
        limit: int = 10,
    ) -> List[AggregateRecommendation]:
        """
        Fold strategy signals into a ranked list of recommendations.

        Args:
            strategy_results: Dictionary mapping strategy names to their signals.
                              Insertion order is ignored; strategies are replayed
                              in ``strategy_order``, then any others by name.
            limit: Number of final results to return.

        Returns:
            Recommendations sorted by fused score desc, candidate id asc.
        """
        if not strategy_results:
            logger.warning("No strategy results to fuse")
            return []

        order = [name for name in self.strategy_order if name in strategy_results]
        order += sorted(name for name in strategy_results if name not in self.strategy_order)

        recommendations: Dict[str, AggregateRecommendation] = {}

        for strategy_name in order:
            signals = strategy_results[strategy_name]
            if not signals:
                logger.debug(f"Strategy '{strategy_name}' produced no results")
                continue

            weight = self.get_strategy_weight(strategy_name)
            explained = strategy_name in self.explained_strategies
            logger.debug(
                f"Fusing results from '{strategy_name}' (weight={weight}, count={len(signals)})"
            )

            for signal in signals:
                existing = recommendations.get(signal.candidate_id)
                if existing is None:
                    recommendations[signal.candidate_id] = AggregateRecommendation(
                        candidate=signal.candidate,
                        score=weight * signal.score,
                        reasons=[signal.reason],
                    )
                    continue

                existing.score += weight * signal.score
                if explained:
                    existing.reasons.append(signal.reason)

        ranked = sorted(
            recommendations.values(),
            key=lambda rec: (-rec.score, rec.candidate.id),
        )[:limit]

        logger.info(
            f"Fused {len(order)} strategies into {len(ranked)} results "
            f"({len(recommendations)} candidates, limit={limit})"
        )

        return ranked
