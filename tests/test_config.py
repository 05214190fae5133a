"""
Tests for environment-driven configuration and logging setup.
"""

import logging

from who_to_follow.config import Config, LogConfig, RecommendationConfig
from who_to_follow.logging_config import ContextualLogger, setup_logging


def test_recommendation_defaults(monkeypatch):
    for var in (
        "RECOMMEND_STRATEGIES",
        "RECOMMEND_MAX_LIMIT",
        "RECOMMEND_POPULARITY_WEIGHT",
        "RECOMMEND_RECENCY_WEIGHT",
    ):
        monkeypatch.delenv(var, raising=False)

    config = RecommendationConfig.from_env()

    assert config.enabled_strategies == [
        "graph_proximity",
        "interest_overlap",
        "popularity",
        "recency",
    ]
    assert config.max_limit == 50
    assert config.strategy_weights() == {
        "graph_proximity": 1.0,
        "interest_overlap": 1.0,
        "popularity": 0.3,
        "recency": 0.2,
    }


def test_recommendation_from_env(monkeypatch):
    monkeypatch.setenv("RECOMMEND_STRATEGIES", "popularity, recency,")
    monkeypatch.setenv("RECOMMEND_MAX_LIMIT", "20")
    monkeypatch.setenv("RECOMMEND_RECENT_DAYS", "3")
    monkeypatch.setenv("RECOMMEND_RECENCY_WEIGHT", "0.5")

    config = RecommendationConfig.from_env()

    assert config.enabled_strategies == ["popularity", "recency"]
    assert config.max_limit == 20
    assert config.recent_days == 3
    assert config.strategy_weights()["recency"] == 0.5


def test_config_uses_test_database(config):
    assert config.database.url == "sqlite:///:memory:"


def test_setup_logging_writes_log_file(tmp_path):
    log_config = LogConfig(log_dir=tmp_path, log_file="test.log", console_output=False)
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level

    try:
        setup_logging(log_config, log_level_override="DEBUG")
        logging.getLogger("who_to_follow.test").debug("hello from test")
        for handler in root.handlers:
            handler.flush()

        assert root.level == logging.DEBUG
        assert "hello from test" in (tmp_path / "test.log").read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_contextual_logger_restores_level():
    logger = logging.getLogger("who_to_follow.contextual")
    logger.setLevel(logging.WARNING)

    with ContextualLogger("who_to_follow.contextual", level="DEBUG") as scoped:
        assert scoped.level == logging.DEBUG

    assert logger.level == logging.WARNING


def test_full_config_from_env():
    config = Config.from_env()
    assert config.recommendation.default_limit >= 1
    assert config.log.log_dir.exists()
