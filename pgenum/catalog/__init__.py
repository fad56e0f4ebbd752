"""Catalog access for PostgreSQL enum types."""

from .exceptions import (
    CatalogConfigurationError,
    CatalogConnectionError,
    CatalogOperationError,
    DependentObjectsExistError,
    DuplicateTypeError,
    EnumCatalogError,
    InvalidEnumValueError,
    UndefinedTypeError,
)
from .factory import create_catalog, validate_catalog_config
from .interface import CatalogInterface
from .mock import MockCatalog
from .models import CatalogConfig, ColumnBinding, EnumType
from .postgres import PostgresCatalog

__all__ = [
    # Core interface
    "CatalogInterface",
    # Implementations
    "MockCatalog",
    "PostgresCatalog",
    # Factory functions
    "create_catalog",
    "validate_catalog_config",
    # Models
    "CatalogConfig",
    "ColumnBinding",
    "EnumType",
    # Exceptions
    "CatalogConfigurationError",
    "CatalogConnectionError",
    "CatalogOperationError",
    "DependentObjectsExistError",
    "DuplicateTypeError",
    "EnumCatalogError",
    "InvalidEnumValueError",
    "UndefinedTypeError",
]
