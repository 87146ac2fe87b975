"""
Configuration Management for WorkTrack

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Storage backend, credential literals and submission limits are all
read from the environment (or .env) and validated at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Key-value persistence configuration."""

    model_config = SettingsConfigDict(
        env_prefix="WORKTRACK_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: str = Field(
        default="json_file",
        pattern="^(memory|json_file)$",
        description="Which key-value backend to use"
    )
    data_path: str = Field(
        default="worktrack_data.json",
        description="Path of the JSON file holding the key-value namespace"
    )
    key_prefix: str = Field(
        default="worktrack_",
        description="Prefix applied to every storage key"
    )

    @field_validator('data_path')
    @classmethod
    def validate_data_path(cls, v: str) -> str:
        """Warn if the parent directory is missing (it may be mounted later)."""
        parent = Path(v).expanduser().parent
        if not parent.exists():
            import warnings
            warnings.warn(
                f"WorkTrack data directory not found at {parent}. "
                "Make sure it exists before the first write."
            )
        return v


class AuthSettings(BaseSettings):
    """
    Credential literals for the authentication stub.

    There are no per-user credentials: one password is shared by
    every admin login and one by every employee login.
    """

    model_config = SettingsConfigDict(
        env_prefix="WORKTRACK_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    admin_password: str = Field(
        default="admin123",
        min_length=1,
        description="Shared password for admin logins"
    )
    employee_password: str = Field(
        default="emp123",
        min_length=1,
        description="Shared password for employee logins"
    )
    enforce_role_passwords: bool = Field(
        default=False,
        description=(
            "Require the password literal of the looked-up user's role. "
            "When False either literal unlocks any existing email."
        )
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="WORKTRACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for local structured logs"
    )

    # Edit governance
    max_edits_per_day: int = Field(
        default=3,
        ge=1,
        le=20,
        description="How many times a day's record may be resubmitted"
    )

    # Submission validation
    min_working_hours: float = Field(
        default=0.5,
        gt=0.0,
        le=24.0,
        description="Smallest accepted working hours on an EOD report"
    )
    max_working_hours: float = Field(
        default=24.0,
        gt=0.0,
        le=24.0,
        description="Largest accepted working hours on an EOD report"
    )

    # Reporting windows
    recent_reports_limit: int = Field(
        default=5,
        ge=1,
        le=100,
        description="How many reports the recent-activity feed shows"
    )
    compliance_window_days: int = Field(
        default=7,
        ge=1,
        le=90,
        description="Number of days in the compliance trend"
    )

    @model_validator(mode='after')
    def validate_hours_range(self) -> 'AppSettings':
        """Working-hours bounds must form a non-empty range."""
        if self.min_working_hours > self.max_working_hours:
            raise ValueError("min_working_hours cannot exceed max_working_hours")
        return self


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def auth(self) -> AuthSettings:
        return AuthSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings(settings: Optional[Settings] = None) -> dict[str, object]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid} plus an
    "<name>_error" entry for every section that failed to load.
    Useful for startup checks.
    """
    results: dict[str, object] = {}
    settings = settings or get_settings()

    for name in ("storage", "auth", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
