"""
API Configuration Management

Provides centralized configuration handling with environment-aware settings
for the analysis API and the engine parameters exposed to operators.

Design Considerations:
- Environment-specific configuration profiles
- Engine defaults overridable through environment variables or .env
- Validation of numeric thresholds at startup
"""

from enum import Enum
from functools import lru_cache
from typing import Dict

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator

from api.models.analysis import reject_negative_averages
from src.config.intelligence_config import DEFAULT_DEPARTMENT_AVERAGES, INTELLIGENCE_CONFIG


class EnvironmentType(str, Enum):
    """Valid environment types for configuration context."""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class APISettings(BaseSettings):
    """
    API configuration settings with environment-specific defaults and validation.

    Uses Pydantic for validation and environment variable loading. Engine
    parameters default to the built-in configuration so an empty
    environment reproduces the stock behaviour.
    """
    # Environment Configuration
    ENVIRONMENT: EnvironmentType = Field(
        default=EnvironmentType.DEVELOPMENT,
        description="Runtime environment context"
    )
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )

    # API Settings
    API_TITLE: str = Field(
        default="Mail Intelligence API",
        description="API title for documentation"
    )
    API_DESCRIPTION: str = Field(
        default="Heuristic duplicate, priority, delay and suggestion analysis for mail tracking",
        description="API description for documentation"
    )
    API_VERSION: str = Field(
        default="1.0.0",
        description="API version"
    )

    # CORS Settings
    CORS_ORIGINS: str = Field(
        default="*",
        description="Comma-separated list of allowed origins for CORS"
    )
    CORS_METHODS: str = Field(
        default="GET,POST,OPTIONS",
        description="Comma-separated list of allowed methods for CORS"
    )

    # Analysis Settings
    DUPLICATE_THRESHOLD: float = Field(
        default=INTELLIGENCE_CONFIG["duplicate_detection"]["threshold"],
        ge=0.0,
        le=1.0,
        description="Similarity a mail must exceed to count as a duplicate"
    )
    PENDING_STATUS: str = Field(
        default=INTELLIGENCE_CONFIG["anomaly_detection"]["pending_status"],
        description="Status value that marks a mail as awaiting processing"
    )
    DEFAULT_PROCESSING_DAYS: float = Field(
        default=INTELLIGENCE_CONFIG["anomaly_detection"]["default_processing_days"],
        gt=0,
        description="Baseline used for departments without a recorded average"
    )
    DEPARTMENT_AVERAGES: Dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_DEPARTMENT_AVERAGES),
        description="Average processing days per department (JSON object)"
    )

    @field_validator("CORS_ORIGINS")
    @classmethod
    def parse_cors_origins(cls, value: str) -> list:
        """Parse comma-separated CORS origins into list."""
        if value == "*":
            return ["*"]
        return [origin.strip() for origin in value.split(",") if origin.strip()]

    @field_validator("CORS_METHODS")
    @classmethod
    def parse_cors_methods(cls, value: str) -> list:
        """Parse comma-separated CORS methods into list."""
        return [method.strip() for method in value.split(",") if method.strip()]

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize and validate the logging level name."""
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {value}")
        return level

    @field_validator("DEPARTMENT_AVERAGES")
    @classmethod
    def validate_department_averages(cls, value: Dict[str, float]) -> Dict[str, float]:
        """Reject negative baselines."""
        return reject_negative_averages(value)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }


@lru_cache()
def get_settings() -> APISettings:
    """
    Retrieve validated API settings.

    Settings are loaded once per process; tests clear the cache with
    ``get_settings.cache_clear()`` after changing the environment.

    Returns:
        Validated API settings object

    Raises:
        ValidationError: If configuration fails validation
    """
    return APISettings()
