"""Application configuration management using Pydantic Settings."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application Environment
    app_env: str = Field(default="development", alias="MORTGAGE_APP_ENV")

    # Logging Configuration
    log_level: str = Field(default="INFO", alias="MORTGAGE_LOG_LEVEL")

    # Effective-rate solver
    rate_search_upper_bound: float = Field(
        default=0.2, alias="MORTGAGE_RATE_SEARCH_UPPER_BOUND"
    )
    rate_bisection_iterations: int = Field(
        default=60, alias="MORTGAGE_RATE_BISECTION_ITERATIONS"
    )

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v):
        """Validate application environment."""
        allowed_envs = {"development", "testing", "production"}
        if v not in allowed_envs:
            raise ValueError(f"MORTGAGE_APP_ENV must be one of {allowed_envs}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed_levels:
            raise ValueError(f"MORTGAGE_LOG_LEVEL must be one of {allowed_levels}")
        return v.upper()

    @field_validator("rate_search_upper_bound")
    @classmethod
    def validate_rate_search_upper_bound(cls, v):
        """The monthly-rate search bracket must be (0, 1]."""
        if not 0 < v <= 1:
            raise ValueError("MORTGAGE_RATE_SEARCH_UPPER_BOUND must be in (0, 1]")
        return v

    @field_validator("rate_bisection_iterations")
    @classmethod
    def validate_rate_bisection_iterations(cls, v):
        """Validate bisection iteration count."""
        if not 1 <= v <= 500:
            raise ValueError("MORTGAGE_RATE_BISECTION_ITERATIONS must be between 1 and 500")
        return v


def get_settings(env_file: Optional[str] = None) -> Settings:
    """Get application settings instance."""
    if env_file is not None:
        return Settings(_env_file=env_file)
    return Settings()


# Global settings instance - will be created when first requested
_settings: Optional[Settings] = None


def get_global_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = get_settings()
    return _settings


def reset_global_settings() -> None:
    """Reset global settings instance (useful for testing)."""
    global _settings
    _settings = None
