"""
Configuration management with environment variable support and validation.

Design principles:
- Environment-specific configs (dev, staging, prod)
- Validation at startup (fail fast)
- Type safety with Pydantic
- Business thresholds stay in code; only operational knobs live here
"""

import os
import re
from functools import lru_cache
from typing import Literal, cast

from dateutil import tz
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

# Load environment variables from .env file
load_dotenv()


class ComparisonConfig(BaseModel):
    """Request limits and computation settings for pet comparisons."""

    min_pets: int = Field(default=2, ge=2, description="Fewest pets a comparison accepts")
    max_pets: int = Field(default=5, ge=2, description="Most pets a comparison accepts")
    min_days: int = Field(default=1, gt=0, description="Shortest comparison window")
    max_days: int = Field(default=365, gt=0, description="Longest comparison window")
    min_trend_days: int = Field(default=7, gt=0, description="Shortest trend window")
    default_days: int = Field(default=30, gt=0, description="Window used when none is given")

    timezone: str = Field(
        default="UTC", description="Time reference used to bucket observations into days"
    )
    pet_id_pattern: str = Field(
        default=r"^[A-Za-z0-9_-]{1,64}$", description="Accepted shape of a pet id"
    )

    # Fetch tuning
    max_concurrent_fetches: int = Field(
        default=5, gt=0, description="Maximum number of concurrent observation fetches"
    )
    fetch_timeout_seconds: float | None = Field(
        default=None, gt=0.0, description="Optional per-fetch timeout; None waits indefinitely"
    )

    @field_validator("timezone")
    def validate_timezone(cls, v):
        if tz.gettz(v) is None:
            raise ValueError(f"Unknown timezone: {v}")
        return v

    @field_validator("pet_id_pattern")
    def validate_pattern(cls, v):
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid pet id pattern: {e}") from e
        return v

    @model_validator(mode="after")
    def check_ranges(self) -> "ComparisonConfig":
        if self.min_pets > self.max_pets:
            raise ValueError("min_pets must not exceed max_pets")
        if not self.min_days <= self.min_trend_days <= self.max_days:
            raise ValueError("day limits must satisfy min_days <= min_trend_days <= max_days")
        if not self.min_days <= self.default_days <= self.max_days:
            raise ValueError("default_days must lie within [min_days, max_days]")
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    format: Literal["json", "console"] = Field(default="json", description="Logging format")


class AppConfig(BaseModel):
    """Main application configuration combining all subsystems."""

    # Environment
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    # Component configs
    comparison: ComparisonConfig = Field(default_factory=ComparisonConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def debug_only_in_dev(self) -> "AppConfig":
        """Ensure debug mode is only allowed in development environment."""
        if self.debug and self.environment != "development":
            raise ValueError("debug mode is only allowed in development environment")
        return self


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables with validation."""

    def _env_to_literal(val: str) -> Literal["development", "staging", "production"]:
        v = val.strip().lower()
        if v in {"dev", "development"}:
            return "development"
        if v in {"stage", "staging"}:
            return "staging"
        return "production"

    def _level_to_literal(val: str) -> Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        v = val.strip().upper()
        return cast(
            Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            v if v in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else "INFO",
        )

    def _optional_float(val: str | None) -> float | None:
        if val is None or not val.strip():
            return None
        return float(val)

    # Detect environment
    environment = _env_to_literal(os.getenv("ENVIRONMENT", "development"))
    debug = environment == "development"

    comparison_config = ComparisonConfig(
        default_days=int(os.getenv("COMPARISON_DEFAULT_DAYS", "30")),
        timezone=os.getenv("COMPARISON_TIMEZONE", "UTC"),
        pet_id_pattern=os.getenv("PET_ID_PATTERN", r"^[A-Za-z0-9_-]{1,64}$"),
        max_concurrent_fetches=int(os.getenv("MAX_CONCURRENT_FETCHES", "5")),
        fetch_timeout_seconds=_optional_float(os.getenv("FETCH_TIMEOUT_SECONDS")),
    )

    logging_config = LoggingConfig(
        level=_level_to_literal(os.getenv("LOG_LEVEL", "INFO")),
        format="console" if debug else "json",
    )

    return AppConfig(
        environment=environment,
        debug=debug,
        comparison=comparison_config,
        logging=logging_config,
    )


@lru_cache
def get_config() -> AppConfig:
    """Get cached application configuration."""
    return load_config_from_env()


def validate_config() -> None:
    """Validate configuration at startup."""
    try:
        config = get_config()
        print(f"Configuration loaded for {config.environment} environment")
    except Exception as e:
        print(f"Configuration validation failed: {e}")
        raise


def print_config_summary() -> None:
    """Print configuration summary for debugging."""
    config = get_config()
    comparison = config.comparison

    print("\nCONFIGURATION SUMMARY")
    print(f"Environment: {config.environment}")
    print(f"Debug Mode: {config.debug}")
    print(f"Log Level: {config.logging.level}")

    print("\nCOMPARISON LIMITS")
    print(f"Pets per comparison: {comparison.min_pets}-{comparison.max_pets}")
    print(f"Window days: {comparison.min_days}-{comparison.max_days}")
    print(f"Trend window days: {comparison.min_trend_days}-{comparison.max_days}")
    print(f"Time reference: {comparison.timezone}")
    print(f"Concurrent fetches: {comparison.max_concurrent_fetches}")


if __name__ == "__main__":
    # Test configuration loading
    validate_config()
    print_config_summary()
