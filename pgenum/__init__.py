"""pgenum - Reversible PostgreSQL enum migrations for Alembic."""

__version__ = "0.1.0"

from .catalog import (
    CatalogInterface,
    ColumnBinding,
    DependentObjectsExistError,
    DuplicateTypeError,
    EnumCatalogError,
    InvalidEnumValueError,
    MockCatalog,
    PostgresCatalog,
    UndefinedTypeError,
)
from .migrations import (
    AddEnumValues,
    ChangeEnumValues,
    CreateEnum,
    DropEnum,
    EnumMigration,
    EnumMigrationError,
    IrreversibleOperationError,
    MigrationResult,
    RemoveEnumValues,
    RenameEnum,
    columns_using_type,
    enum_values,
)

# Registers op.create_enum and the other enum operations with Alembic
from .migrations import alembic_ops  # noqa: F401, E402

__all__ = [
    "__version__",
    # Operations
    "AddEnumValues",
    "ChangeEnumValues",
    "CreateEnum",
    "DropEnum",
    "EnumMigration",
    "MigrationResult",
    "RemoveEnumValues",
    "RenameEnum",
    "columns_using_type",
    "enum_values",
    # Catalog
    "CatalogInterface",
    "ColumnBinding",
    "MockCatalog",
    "PostgresCatalog",
    # Exceptions
    "DependentObjectsExistError",
    "DuplicateTypeError",
    "EnumCatalogError",
    "EnumMigrationError",
    "InvalidEnumValueError",
    "IrreversibleOperationError",
    "UndefinedTypeError",
]
