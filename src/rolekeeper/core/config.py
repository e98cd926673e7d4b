"""Configuration management for RoleKeeper.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. A ``Settings`` instance is passed
explicitly to the table builder and the role service; there is no
process-wide model registry.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ROLEKEEPER_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "RoleKeeper"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False

    # Database Settings
    database_url: str = "sqlite:///./rk_data/rolekeeper.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Table Layout
    table_prefix: str = ""
    roles_table: str = "roles"
    assigned_roles_table: str = "assigned_roles"

    # Authorities
    authority_key_attribute: str = "id"
    morph_map: dict[str, str] = Field(
        default_factory=dict,
        description="Dotted class path -> type tag stored in entity_type",
    )

    # What happens when a role is assigned to an authority that already holds it
    assignment_conflict: Literal["ignore", "raise"] = "ignore"

    @field_validator("roles_table", "assigned_roles_table", "authority_key_attribute")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject blank identifiers."""
        if not v or not v.strip():
            raise ValueError("Value must not be blank")
        return v.strip()

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"

    @property
    def roles_table_name(self) -> str:
        """Physical name of the roles table."""
        return f"{self.table_prefix}{self.roles_table}"

    @property
    def assigned_roles_table_name(self) -> str:
        """Physical name of the role assignment table."""
        return f"{self.table_prefix}{self.assigned_roles_table}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    This function caches the settings instance to avoid reloading
    configuration on every call.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
