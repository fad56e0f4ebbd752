"""Tests for the Alembic operation plugins.

Operations run on an offline ``MigrationContext``; the catalog factory is
patched to hand out an in-memory catalog.
"""

from unittest.mock import patch

from alembic.migration import MigrationContext
from alembic.operations import Operations
import pytest

from pgenum.catalog import ColumnBinding, InvalidEnumValueError, MockCatalog
from pgenum.migrations import (
    AddEnumValues,
    ChangeEnumValues,
    CreateEnum,
    Direction,
    DropEnum,
    IrreversibleOperationError,
    RenameEnum,
)
from pgenum.migrations.alembic_ops import EnumMigrateOperation, EnumOperationsBatch


@pytest.fixture
def op():
    context = MigrationContext.configure(dialect_name="postgresql")
    return Operations(context)


@pytest.fixture
def patched_catalog(user_role_catalog: MockCatalog):
    with patch(
        "pgenum.migrations.alembic_ops.catalog_for", return_value=user_role_catalog
    ) as catalog_for:
        yield catalog_for


class TestRegisteredOperations:
    """``op.<name>`` is available once pgenum is imported."""

    @pytest.mark.parametrize(
        "name",
        [
            "create_enum",
            "drop_enum",
            "add_enum_values",
            "remove_enum_values",
            "change_enum_values",
            "rename_enum",
            "enum_values",
            "columns_using_type",
            "apply_enum_operations",
            "revert_enum_operations",
        ],
    )
    def test_operation_is_registered(self, op, name):
        assert callable(getattr(op, name))

    def test_create_and_drop(self, op, patched_catalog, user_role_catalog):
        op.create_enum("status", ["draft", "published"])
        assert op.enum_values("status") == ["draft", "published"]

        op.drop_enum("status")
        assert not user_role_catalog.enum_exists("status")

    def test_add_and_remove_values(self, op, patched_catalog):
        op.add_enum_values("user_role", "guest")
        assert op.enum_values("user_role") == ["admin", "member", "guest"]

        op.remove_enum_values("user_role", ["guest"])
        assert op.enum_values("user_role") == ["admin", "member"]

    def test_change_values(self, op, patched_catalog):
        """Labels no row stores can be swapped in one change."""
        op.add_enum_values("user_role", "guest")

        op.change_enum_values("user_role", add=["owner", "viewer"], remove="guest")

        assert op.enum_values("user_role") == ["admin", "member", "owner", "viewer"]

    def test_change_values_refuses_stored_label(self, op, patched_catalog):
        with pytest.raises(InvalidEnumValueError):
            op.change_enum_values("user_role", add=["guest"], remove="admin")

    def test_rename(self, op, patched_catalog):
        op.rename_enum("user_role", "user_kind")

        assert op.columns_using_type("user_kind") == [
            ColumnBinding(table_name="users", column_name="role")
        ]
        assert op.columns_using_type("user_role") == []

    def test_schema_is_forwarded(self, op, patched_catalog):
        op.enum_values("user_role", schema="billing")

        _, schema = patched_catalog.call_args.args
        assert schema == "billing"

    def test_apply_then_revert(self, op, patched_catalog, user_role_catalog):
        changes = [
            CreateEnum("status", ["a"]),
            AddEnumValues("user_role", "guest"),
            RenameEnum("user_role", "user_kind"),
        ]

        result = op.apply_enum_operations(changes)
        assert result.direction == Direction.FORWARD
        assert op.enum_values("user_kind") == ["admin", "member", "guest"]

        op.revert_enum_operations(changes)
        assert op.enum_values("user_role") == ["admin", "member"]
        assert not user_role_catalog.enum_exists("status")
        assert not user_role_catalog.enum_exists("user_kind")

    def test_revert_irreversible_batch(self, op, patched_catalog, user_role_catalog):
        user_role_catalog.create_enum("status", ["a"])
        user_role_catalog.statements.clear()

        with pytest.raises(IrreversibleOperationError):
            op.revert_enum_operations([AddEnumValues("user_role", "x"), DropEnum("status")])

        assert user_role_catalog.statements == []


class TestReverse:
    """``MigrateOperation.reverse()`` yields the inverse operation."""

    def test_single_operation_reverse(self):
        operation = EnumMigrateOperation(
            ChangeEnumValues("status", add=["b"], remove=["a"]), schema="billing"
        )

        reversed_operation = operation.reverse()

        assert reversed_operation.operation == ChangeEnumValues(
            "status", add=["a"], remove=["b"]
        )
        assert reversed_operation.schema == "billing"

    def test_irreversible_operation_reverse(self):
        with pytest.raises(IrreversibleOperationError):
            EnumMigrateOperation(DropEnum("status")).reverse()

    def test_batch_reverse_flips_direction(self):
        batch = EnumOperationsBatch([CreateEnum("status", ["a"])])

        assert batch.reverse().direction == Direction.BACKWARD
        assert batch.reverse().reverse().direction == Direction.FORWARD
