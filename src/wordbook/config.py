"""Configuration settings for wordbook."""
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from wordbook.exceptions import InvalidConfiguration

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)

# Learning settings
REVIEW_INTERVALS = (0, 1, 2, 4, 7, 15, 30, 60, 180)  # days between reviews
MISTAKES_COLLECTION = "mistakes"


def parse_intervals(raw: Optional[str]) -> tuple[int, ...]:
    """Parse a comma-separated list of day offsets."""
    if raw is None:
        return REVIEW_INTERVALS
    if not raw.strip():
        return ()
    parts = raw.split(",")
    if any(not part.strip() for part in parts):
        raise InvalidConfiguration(
            "WORDBOOK_REVIEW_INTERVALS must not contain blank entries",
            details={"value": raw},
        )
    try:
        return tuple(int(part) for part in parts)
    except ValueError as e:
        raise InvalidConfiguration(
            "WORDBOOK_REVIEW_INTERVALS must be a comma-separated list of integers",
            details={"value": raw},
        ) from e


def get_review_intervals() -> tuple[int, ...]:
    """Get review intervals from environment variable."""
    return parse_intervals(os.getenv("WORDBOOK_REVIEW_INTERVALS"))


@dataclass
class DatabaseSettings:
    """Database configuration settings."""
    url: str = os.getenv("DATABASE_URL", "sqlite:///wordbook.db")
    echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = os.getenv("LOG_DIR", None)
    rotation: str = os.getenv("LOG_ROTATION", "midnight")
    interval: int = int(os.getenv("LOG_INTERVAL", "1"))
    backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "7"))


@dataclass
class LearningSettings:
    """Spaced repetition settings."""
    review_intervals: tuple[int, ...] = field(default_factory=get_review_intervals)
    mistakes_collection: str = os.getenv("WORDBOOK_MISTAKES_COLLECTION", MISTAKES_COLLECTION)
    require_translation: bool = os.getenv("WORDBOOK_REQUIRE_TRANSLATION", "false").lower() == "true"


@dataclass
class MonitoringSettings:
    """Prometheus metrics settings."""
    enabled: bool = os.getenv("METRICS_ENABLED", "false").lower() == "true"
    port: int = int(os.getenv("METRICS_PORT", "9090"))


def get_database_settings() -> DatabaseSettings:
    """Get database settings."""
    return DatabaseSettings()


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return LoggingSettings()


def get_learning_settings() -> LearningSettings:
    """Get learning settings."""
    return LearningSettings()


def get_monitoring_settings() -> MonitoringSettings:
    """Get monitoring settings."""
    return MonitoringSettings()


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    database: DatabaseSettings = field(default_factory=get_database_settings)
    logging: LoggingSettings = field(default_factory=get_logging_settings)
    learning: LearningSettings = field(default_factory=get_learning_settings)
    monitoring: MonitoringSettings = field(default_factory=get_monitoring_settings)

    def validate(self) -> None:
        """Validate settings and raise InvalidConfiguration if invalid."""
        intervals = self.learning.review_intervals
        if not intervals:
            raise InvalidConfiguration("WORDBOOK_REVIEW_INTERVALS must not be empty")

        if any(days < 0 for days in intervals):
            raise InvalidConfiguration(
                "WORDBOOK_REVIEW_INTERVALS must not contain negative values",
                details={"intervals": list(intervals)},
            )

        if not self.learning.mistakes_collection.strip():
            raise InvalidConfiguration("WORDBOOK_MISTAKES_COLLECTION must not be empty")

        if self.monitoring.port < 1:
            raise InvalidConfiguration("METRICS_PORT must be positive")


# Create global settings instance
settings = Settings()
settings.validate()
