"""Catalog backend factory.

This module provides a factory function to create catalog backends
based on configuration, supporting different backend types.
"""

import logging

from sqlalchemy.engine import Connection

from .exceptions import CatalogConfigurationError
from .interface import CatalogInterface
from .mock import MockCatalog
from .models import CatalogConfig
from .postgres import PostgresCatalog

logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ("postgres", "mock")


def create_catalog(
    config: CatalogConfig, connection: Connection | None = None
) -> CatalogInterface:
    """Create a catalog backend instance based on configuration.

    Args:
        config: Catalog configuration specifying backend type and schema
        connection: Open connection, required by the postgres backend

    Returns:
        CatalogInterface: Configured catalog backend instance

    Raises:
        CatalogConfigurationError: If backend type is unsupported or no
            connection is given for the postgres backend
    """
    backend_type = config.backend_type.lower()

    logger.info(f"Creating catalog backend: {backend_type}")

    if backend_type == "mock":
        return MockCatalog(schema_name=config.schema_name)

    elif backend_type == "postgres":
        if connection is None:
            raise CatalogConfigurationError(
                "The postgres catalog needs an open connection"
            )
        return PostgresCatalog(connection, schema_name=config.schema_name)

    else:
        raise CatalogConfigurationError(
            f"Unsupported catalog backend: {backend_type}. "
            f"Supported backends: {', '.join(SUPPORTED_BACKENDS)}"
        )


def validate_catalog_config(config: CatalogConfig) -> None:
    """Validate catalog configuration.

    Args:
        config: Catalog configuration to validate

    Raises:
        CatalogConfigurationError: If configuration is invalid
    """
    if config.backend_type.lower() not in SUPPORTED_BACKENDS:
        raise CatalogConfigurationError(
            f"Unsupported catalog backend: {config.backend_type}"
        )

    if not config.schema_name:
        raise CatalogConfigurationError("Schema name is required")

    if config.backend_type.lower() == "postgres" and not config.database_url:
        raise CatalogConfigurationError(
            "Database URL is required for the postgres backend"
        )

    logger.debug(f"Catalog configuration validated for backend: {config.backend_type}")
