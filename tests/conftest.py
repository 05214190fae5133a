"""
pytest configuration and fixtures for Who To Follow tests.

This module provides shared fixtures for all test modules.
"""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from who_to_follow.config import Config
from who_to_follow.database import init_db
from who_to_follow.recommenders import RecommendationManager, StrategyRegistry
from who_to_follow.users import UserManager

# Import test utilities
from tests.test_utils import (
    assert_test_db_url,
    cleanup_test_env,
    disable_test_mode,
    enable_test_mode,
    setup_test_env,
)


@pytest.fixture(scope="session", autouse=True)
def test_mode_guard():
    """
    Auto-enabled test mode guard that runs for all tests.

    Points DATABASE_URL and LOG_DIR at throwaway locations for the
    whole session and cleans them up afterwards.
    """
    enable_test_mode()
    setup_test_env()
    yield
    disable_test_mode()
    cleanup_test_env()


@pytest.fixture(autouse=True)
def registry_snapshot():
    """Restore the strategy registry after each test."""
    saved = dict(StrategyRegistry._strategies)
    yield
    StrategyRegistry._strategies.clear()
    StrategyRegistry._strategies.update(saved)


@pytest.fixture(scope="function")
def config():
    """Create a test configuration backed by an in-memory database."""
    config = Config.from_env()
    assert_test_db_url(config.database.url, context="config fixture")
    return config


@pytest.fixture(scope="function")
def session(config):
    """Create a database session for testing."""
    session = init_db(config.database.url)
    yield session
    session.close()


@pytest.fixture(scope="function")
def user_manager(session):
    """Create a user manager for testing."""
    return UserManager(session)


@pytest.fixture(scope="function")
def recommendation_manager(config, session):
    """Create a recommendation manager for testing."""
    return RecommendationManager(config, session)


@pytest.fixture(scope="function")
def now():
    """Fixed evaluation time for time-windowed strategies."""
    return datetime(2024, 6, 15, 12, 0, 0)


@pytest.fixture(scope="function")
def make_users(user_manager):
    """
    Factory creating users whose id equals their username.

    Example:
        >>> alice, bob = make_users("alice", "bob")
    """

    def _make(*names):
        return [user_manager.create_user(name, name.title(), user_id=name) for name in names]

    return _make


@pytest.fixture(scope="function")
def add_followers(user_manager):
    """Factory giving a user ``count`` brand new followers."""

    def _add(user_id, count, prefix=None):
        prefix = prefix or f"{user_id}_fan"
        for i in range(count):
            fan = user_manager.create_user(f"{prefix}{i:02d}", user_id=f"{prefix}{i:02d}")
            user_manager.follow(fan.id, user_id)

    return _add
