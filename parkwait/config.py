"""
Configuration for the parkwait pipeline.

Loads settings from environment variables (and a local .env file).
Every settings model is frozen: stages receive their section at
construction time and never read a global.

Environment variables:
    PARKWAIT_INGEST_SEPARATOR: Raw file delimiter (default: ",")
    PARKWAIT_REPORT_TOP_N: Rows kept by the top-N views (default: 10)
    PARKWAIT_REPORT_OUTPUT_DIR: Directory for view tables (default: reports)
    PARKWAIT_TRAIN_TEST_RATIO: Chronological hold-out share (default: 0.2)
    PARKWAIT_LOG_LEVEL: Log level (default: INFO)
"""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file before settings are initialized
load_dotenv()


class IngestionSettings(BaseSettings):
    """Raw file parsing configuration."""

    separator: str = Field(default=",", min_length=1, max_length=1)
    has_header: bool = Field(default=True)

    model_config = SettingsConfigDict(env_prefix="PARKWAIT_INGEST_", frozen=True)


class ReportSettings(BaseSettings):
    """Aggregation reporting configuration."""

    top_n: int = Field(default=10, ge=1)
    output_dir: str = Field(default="reports")
    float_precision: int = Field(default=2, ge=0)
    separator: str = Field(default=",", min_length=1, max_length=1)

    model_config = SettingsConfigDict(env_prefix="PARKWAIT_REPORT_", frozen=True)


class TrainingSettings(BaseSettings):
    """Gradient-boosted baseline configuration."""

    # Chronological hold-out share
    test_ratio: float = Field(default=0.2, gt=0, lt=1)
    n_estimators: int = Field(default=200, ge=1)
    learning_rate: float = Field(default=0.1, gt=0)
    max_depth: int = Field(default=4, ge=1)
    random_state: int = Field(default=42)

    model_config = SettingsConfigDict(env_prefix="PARKWAIT_TRAIN_", frozen=True)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field(default="INFO")
    log_dir: str = Field(default="logs")
    log_file: str = Field(default="parkwait.log")
    rotation: str = Field(default="10 MB")
    retention: str = Field(default="7 days")
    to_file: bool = Field(default=False)
    file_level: str = Field(default="DEBUG")

    model_config = SettingsConfigDict(env_prefix="PARKWAIT_LOG_", frozen=True)


class Settings(BaseSettings):
    """Main settings aggregating all configuration."""

    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    report: ReportSettings = Field(default_factory=ReportSettings)
    training: TrainingSettings = Field(default_factory=TrainingSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_prefix="PARKWAIT_",
        env_nested_delimiter="__",
        frozen=True,
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Only entry points should call this; library code takes its
    settings section as a constructor argument.

    Returns:
        Settings: The application settings
    """
    return Settings()


__all__ = [
    "Settings",
    "IngestionSettings",
    "ReportSettings",
    "TrainingSettings",
    "LoggingSettings",
    "get_settings",
]
