#!/usr/bin/env python3
"""
Who To Follow - Recommendation Demo

This script builds a small social network in an in-memory database and
prints follow suggestions for one user:
1. Create users, follow edges, posts, likes and comments
2. Run each strategy on its own and show its signals
3. Fuse all strategies and show the ranked suggestions
"""

import logging
import sys
from datetime import datetime, timedelta

from who_to_follow.config import Config
from who_to_follow.logging_config import ContextualLogger, setup_logging

# Configure logging first
config = Config.from_env()
config.database.url = "sqlite:///:memory:"
setup_logging(config.log, log_level_override="WARNING")
logger = logging.getLogger(__name__)

from who_to_follow.database import init_db
from who_to_follow.recommenders import RecommendationManager, StrategyRegistry
from who_to_follow.users import UserManager


def print_section(title: str, icon: str = "⚡"):
    """Print a section header."""
    print(f"\n{'=' * 80}")
    print(f"{icon}  {title}")
    print(f"{'=' * 80}\n")


def build_network(users: UserManager) -> str:
    """Create a demo network and return the id of the user to recommend for."""
    print_section("STEP 1: Build Social Network", icon="🕸")

    now = datetime.now()
    names = ["alice", "bob", "carol", "dave", "erin", "frank", "grace", "heidi"]
    people = {name: users.create_user(name, name.title()) for name in names}
    fans = [users.create_user(f"fan{i:02d}") for i in range(15)]

    alice = people["alice"]

    # alice follows bob and carol; both follow dave, bob also follows erin
    users.follow(alice.id, people["bob"].id)
    users.follow(alice.id, people["carol"].id)
    users.follow(people["bob"].id, people["dave"].id)
    users.follow(people["carol"].id, people["dave"].id)
    users.follow(people["bob"].id, people["erin"].id)

    # grace is popular
    for fan in fans:
        users.follow(fan.id, people["grace"].id)

    # frank and alice engage with the same posts
    post = users.create_post(people["heidi"].id, "Weekend hike photos", created_at=now - timedelta(days=20))
    users.like(alice.id, post.id)
    users.comment(people["frank"].id, post.id, "Beautiful!")

    # heidi posted recently
    users.create_post(people["heidi"].id, "Back from the trail", created_at=now - timedelta(hours=3))

    print(f"Users: {len(names) + len(fans)}")
    print(f"Recommending for: {alice.username} ({alice.id})")
    return alice.id


def show_strategies(session, user_id: str):
    """Run every strategy individually."""
    print_section("STEP 2: Individual Strategies", icon="🔍")

    for name in config.recommendation.enabled_strategies:
        strategy = StrategyRegistry.get_strategy(name, session=session, config=config)
        signals = strategy.recommend(user_id, limit=5)
        print(f"--- {name} ({len(signals)} signals) ---")
        for signal in signals:
            print(f"  {signal.candidate.username:<10} score={signal.score:6.3f}  {signal.reason}")


def show_recommendations(manager: RecommendationManager, user_id: str):
    """Fuse all strategies."""
    print_section("STEP 3: Fused Recommendations", icon="⭐")

    with ContextualLogger("who_to_follow.recommenders", level="INFO"):
        results = manager.get_recommendations(user_id, limit=5)

    for i, rec in enumerate(results, 1):
        print(
            f"{i}. {rec.candidate.display_name:<10} "
            f"score={rec.score:6.3f}  followers={rec.candidate.follower_count:<3} "
            f"{rec.reason}"
        )


def main():
    session = init_db(config.database.url)
    users = UserManager(session)
    manager = RecommendationManager(config, session)

    try:
        user_id = build_network(users)
        show_strategies(session, user_id)
        show_recommendations(manager, user_id)
    except Exception as e:
        logger.error(f"Demo failed: {e}")
        return 1
    finally:
        session.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
