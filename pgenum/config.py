"""Configuration management for pgenum.

This module handles environment-based configuration using Pydantic Settings.
Values act as defaults only: every component also accepts them explicitly.
"""

from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .catalog import CatalogConfig


class EnumMigrationConfig(BaseSettings):
    """Settings for enum migrations and the inspection CLI."""

    model_config = SettingsConfigDict(
        env_prefix="PGENUM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "testing", "production"] = Field(
        default="development", description="Application environment"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Enable JSON formatted logs")

    # Catalog
    catalog_backend: str = Field(
        default="postgres", description="Catalog backend (postgres or mock)"
    )
    database_url: str | None = Field(
        default=None, description="SQLAlchemy URL used by the CLI"
    )
    schema_name: str = Field(
        default="public", description="Schema holding enum types and their tables"
    )

    # Substitution protocol
    temporary_type_prefix: str = Field(
        default="new_",
        min_length=1,
        description="Prefix of the placeholder type created while changing values",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def catalog(self) -> CatalogConfig:
        """Create catalog configuration from individual fields."""
        return CatalogConfig(
            backend_type=self.catalog_backend,
            database_url=self.database_url,
            schema_name=self.schema_name,
        )


# Global configuration instance
config = EnumMigrationConfig()
