"""Alembic operation plugins for enum types.

Importing this module registers the enum operations on
``alembic.operations.Operations`` so that migration scripts can write::

    def upgrade():
        op.change_enum_values("status", add=["archived"], remove=["stale"])

    def downgrade():
        op.change_enum_values("status", add=["stale"], remove=["archived"])

Statements run on the connection Alembic hands out, inside the transaction
Alembic manages for the revision.
"""

from alembic.operations import MigrateOperation, Operations

from ..catalog import CatalogInterface, PostgresCatalog
from ..config import config
from ..core import get_logger
from .executor import EnumMutationExecutor
from .operations import (
    AddEnumValues,
    ChangeEnumValues,
    CreateEnum,
    DropEnum,
    EnumOperation,
    RemoveEnumValues,
    RenameEnum,
)
from .runner import MigrationResult, run_operations
from .types import Direction

logger = get_logger(__name__)


def catalog_for(operations: Operations, schema: str | None) -> CatalogInterface:
    """Catalog over the migration's connection."""
    return PostgresCatalog(
        operations.get_bind(), schema_name=schema or config.schema_name
    )


def executor_for(operations: Operations, schema: str | None) -> EnumMutationExecutor:
    return EnumMutationExecutor(
        catalog_for(operations, schema),
        temporary_prefix=config.temporary_type_prefix,
    )


@Operations.register_operation("create_enum")
@Operations.register_operation("drop_enum")
@Operations.register_operation("add_enum_values")
@Operations.register_operation("remove_enum_values")
@Operations.register_operation("change_enum_values")
@Operations.register_operation("rename_enum")
class EnumMigrateOperation(MigrateOperation):
    """A single enum operation issued from a migration script."""

    def __init__(self, operation: EnumOperation, schema: str | None = None):
        self.operation = operation
        self.schema = schema

    def reverse(self) -> "EnumMigrateOperation":
        return EnumMigrateOperation(self.operation.inverse(), schema=self.schema)

    @classmethod
    def create_enum(cls, operations, enum_name, values, schema=None):
        """Create enum type ``enum_name`` with ``values`` in order."""
        return operations.invoke(cls(CreateEnum(enum_name, values), schema=schema))

    @classmethod
    def drop_enum(cls, operations, enum_name, values=None, schema=None):
        """Drop enum type ``enum_name``.

        Pass the type's ``values`` to keep the operation reversible.
        """
        return operations.invoke(cls(DropEnum(enum_name, values), schema=schema))

    @classmethod
    def add_enum_values(cls, operations, enum_name, values, schema=None):
        """Append one label or a list of labels to ``enum_name``."""
        return operations.invoke(cls(AddEnumValues(enum_name, values), schema=schema))

    @classmethod
    def remove_enum_values(cls, operations, enum_name, values, schema=None):
        """Remove one label or a list of labels from ``enum_name``.

        Fails if a bound column still stores one of them.
        """
        return operations.invoke(
            cls(RemoveEnumValues(enum_name, values), schema=schema)
        )

    @classmethod
    def change_enum_values(
        cls, operations, enum_name, add=None, remove=None, schema=None
    ):
        """Add and remove labels of ``enum_name`` in a single substitution."""
        return operations.invoke(
            cls(ChangeEnumValues(enum_name, add=add, remove=remove), schema=schema)
        )

    @classmethod
    def rename_enum(cls, operations, from_name, to_name, schema=None):
        """Rename enum ``from_name`` to ``to_name``, repointing its columns."""
        return operations.invoke(cls(RenameEnum(from_name, to_name), schema=schema))


@Operations.register_operation("apply_enum_operations")
@Operations.register_operation("revert_enum_operations")
class EnumOperationsBatch(MigrateOperation):
    """A list of enum operations declared once for upgrade and downgrade."""

    def __init__(
        self,
        enum_operations: list[EnumOperation],
        direction: Direction = Direction.FORWARD,
        schema: str | None = None,
    ):
        self.enum_operations = list(enum_operations)
        self.direction = direction
        self.schema = schema

    def reverse(self) -> "EnumOperationsBatch":
        opposite = (
            Direction.BACKWARD
            if self.direction == Direction.FORWARD
            else Direction.FORWARD
        )
        return EnumOperationsBatch(self.enum_operations, opposite, schema=self.schema)

    @classmethod
    def apply_enum_operations(cls, operations, enum_operations, schema=None):
        """Apply ``enum_operations`` in order."""
        return operations.invoke(cls(enum_operations, Direction.FORWARD, schema))

    @classmethod
    def revert_enum_operations(cls, operations, enum_operations, schema=None):
        """Run the inverses of ``enum_operations`` in reverse order."""
        return operations.invoke(cls(enum_operations, Direction.BACKWARD, schema))


@Operations.register_operation("enum_values")
@Operations.register_operation("columns_using_type")
class EnumInspection(MigrateOperation):
    """Read-only catalog lookups available as ``op.enum_values`` and friends."""

    def __init__(self, query: str, enum_name: str, schema: str | None = None):
        self.query = query
        self.enum_name = enum_name
        self.schema = schema

    @classmethod
    def enum_values(cls, operations, enum_name, schema=None):
        """Labels of ``enum_name`` in definition order."""
        return operations.invoke(cls("enum_values", enum_name, schema))

    @classmethod
    def columns_using_type(cls, operations, enum_name, schema=None):
        """Columns whose declared type is ``enum_name``."""
        return operations.invoke(cls("columns_using_type", enum_name, schema))


@Operations.implementation_for(EnumMigrateOperation)
def run_enum_operation(operations: Operations, operation: EnumMigrateOperation) -> None:
    logger.info("Applying enum operation", operation=operation.operation.describe())
    operation.operation.forward(executor_for(operations, operation.schema))


@Operations.implementation_for(EnumOperationsBatch)
def run_enum_operations_batch(
    operations: Operations, batch: EnumOperationsBatch
) -> MigrationResult:
    return run_operations(
        executor_for(operations, batch.schema), batch.enum_operations, batch.direction
    )


@Operations.implementation_for(EnumInspection)
def run_enum_inspection(operations: Operations, inspection: EnumInspection):
    executor = executor_for(operations, inspection.schema)
    if inspection.query == "enum_values":
        return executor.list_labels(inspection.enum_name)
    return executor.list_bindings(inspection.enum_name)
