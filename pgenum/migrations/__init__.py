"""Reversible enum operations and the executor that applies them."""

from .exceptions import EnumMigrationError, IrreversibleOperationError
from .executor import (
    DEFAULT_TEMPORARY_PREFIX,
    EnumMutationExecutor,
    columns_using_type,
    enum_values,
)
from .operations import (
    AddEnumValues,
    ChangeEnumValues,
    CreateEnum,
    DropEnum,
    EnumOperation,
    RemoveEnumValues,
    RenameEnum,
)
from .runner import EnumMigration, MigrationResult, ensure_reversible, run_operations
from .types import Direction

__all__ = [
    # Operations
    "AddEnumValues",
    "ChangeEnumValues",
    "CreateEnum",
    "DropEnum",
    "EnumOperation",
    "RemoveEnumValues",
    "RenameEnum",
    # Execution
    "DEFAULT_TEMPORARY_PREFIX",
    "Direction",
    "EnumMigration",
    "EnumMutationExecutor",
    "MigrationResult",
    "ensure_reversible",
    "run_operations",
    # Inspection
    "columns_using_type",
    "enum_values",
    # Exceptions
    "EnumMigrationError",
    "IrreversibleOperationError",
]
