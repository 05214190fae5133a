"""
Configuration management for the Who To Follow system.

This module provides centralized configuration management using environment
variables and python-dotenv. It covers the database connection, the
recommendation strategies and their weights, and application logging.

Environment variables are loaded from .env file or system environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file if present
load_dotenv()

DEFAULT_STRATEGIES = "graph_proximity,interest_overlap,popularity,recency"


@dataclass
class DatabaseConfig:
    """
    Configuration for database connection.

    Attributes:
        url: Database connection URL (SQLAlchemy format).
    """

    url: str = "sqlite:///data/social.db"

    @classmethod
    def from_env(cls) -> "DatabaseConfig":
        """
        Create DatabaseConfig from environment variables.

        Returns:
            A configured DatabaseConfig instance.
        """
        return cls(url=os.getenv("DATABASE_URL", "sqlite:///data/social.db"))


@dataclass
class RecommendationConfig:
    """
    Configuration for the follow recommendation engine.

    The order of enabled_strategies is significant: fusion replays strategy
    results in this order, which decides how reasons are concatenated.

    Attributes:
        enabled_strategies: Strategy names in declared fusion order.
        default_limit: Number of users recommended when no limit is given.
        max_limit: Upper bound the API clamps requested limits to.
        mutual_weight: Score per mutual connection (graph proximity).
        interest_weight: Score per shared post (interest overlap).
        popular_min_followers: Popular users need strictly more followers.
        recent_days: Trailing window for the recency strategy.
        popularity_weight: Fusion weight for popularity signals.
        recency_weight: Fusion weight for recency signals.
    """

    enabled_strategies: List[str] = field(
        default_factory=lambda: DEFAULT_STRATEGIES.split(",")
    )
    default_limit: int = 10
    max_limit: int = 50
    mutual_weight: float = 2.0
    interest_weight: float = 1.5
    popular_min_followers: int = 10
    recent_days: int = 7
    popularity_weight: float = 0.3
    recency_weight: float = 0.2

    @classmethod
    def from_env(cls) -> "RecommendationConfig":
        """
        Create RecommendationConfig from environment variables.

        Returns:
            A configured RecommendationConfig instance.
        """
        strategies_str = os.getenv("RECOMMEND_STRATEGIES", DEFAULT_STRATEGIES)
        strategies = [s.strip() for s in strategies_str.split(",") if s.strip()]

        return cls(
            enabled_strategies=strategies,
            default_limit=int(os.getenv("RECOMMEND_DEFAULT_LIMIT", "10")),
            max_limit=int(os.getenv("RECOMMEND_MAX_LIMIT", "50")),
            mutual_weight=float(os.getenv("RECOMMEND_MUTUAL_WEIGHT", "2.0")),
            interest_weight=float(os.getenv("RECOMMEND_INTEREST_WEIGHT", "1.5")),
            popular_min_followers=int(os.getenv("RECOMMEND_POPULAR_MIN_FOLLOWERS", "10")),
            recent_days=int(os.getenv("RECOMMEND_RECENT_DAYS", "7")),
            popularity_weight=float(os.getenv("RECOMMEND_POPULARITY_WEIGHT", "0.3")),
            recency_weight=float(os.getenv("RECOMMEND_RECENCY_WEIGHT", "0.2")),
        )

    def strategy_weights(self) -> dict:
        """Fusion weights keyed by strategy name."""
        return {
            "graph_proximity": 1.0,
            "interest_overlap": 1.0,
            "popularity": self.popularity_weight,
            "recency": self.recency_weight,
        }


@dataclass
class LogConfig:
    """
    Configuration for application logging.

    Controls logging behavior including log level, output format,
    and file rotation settings.

    Attributes:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory for log files.
        log_file: Name of the log file.
        max_bytes: Maximum size of a single log file before rotation.
        backup_count: Number of backup log files to keep.
        format_string: Log message format string.
        date_format: Date format for log timestamps.
        console_output: Whether to also output logs to console.
    """

    level: str = "INFO"
    log_dir: Path = field(default_factory=lambda: Path("data/logs"))
    log_file: str = "who_to_follow.log"
    max_bytes: int = 10 * 1024 * 1024  # 10 MB
    backup_count: int = 5
    format_string: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    console_output: bool = True

    @classmethod
    def from_env(cls) -> "LogConfig":
        """
        Create LogConfig from environment variables.

        Creates log directory if it doesn't exist.

        Returns:
            A configured LogConfig instance.
        """
        log_dir = Path(os.getenv("LOG_DIR", "data/logs"))
        log_dir.mkdir(parents=True, exist_ok=True)

        return cls(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_dir=log_dir,
            log_file=os.getenv("LOG_FILE", "who_to_follow.log"),
            max_bytes=int(os.getenv("LOG_MAX_BYTES", str(10 * 1024 * 1024))),
            backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
            format_string=os.getenv(
                "LOG_FORMAT",
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            ),
            date_format=os.getenv("LOG_DATE_FORMAT", "%Y-%m-%d %H:%M:%S"),
            console_output=os.getenv("LOG_CONSOLE_OUTPUT", "true").lower() == "true",
        )


@dataclass
class Config:
    """
    Main configuration container for the Who To Follow system.

    Typically created once at application startup using from_env().

    Attributes:
        database: Database connection configuration.
        recommendation: Recommendation engine configuration.
        log: Logging configuration.
    """

    database: DatabaseConfig = field(default_factory=DatabaseConfig.from_env)
    recommendation: RecommendationConfig = field(default_factory=RecommendationConfig.from_env)
    log: LogConfig = field(default_factory=LogConfig.from_env)

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create Config from environment variables.

        Returns:
            A fully configured Config instance.

        Examples:
            >>> config = Config.from_env()
            >>> config.recommendation.max_limit
            50
        """
        return cls(
            database=DatabaseConfig.from_env(),
            recommendation=RecommendationConfig.from_env(),
            log=LogConfig.from_env(),
        )
