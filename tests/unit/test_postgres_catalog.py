"""Tests for the PostgreSQL catalog backend without a database server.

The connection is a mock carrying the real PostgreSQL dialect, so quoting
and statement text are produced exactly as they would be live.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import DBAPIError

from pgenum.catalog import (
    CatalogConnectionError,
    CatalogOperationError,
    ColumnBinding,
    DependentObjectsExistError,
    DuplicateTypeError,
    EnumType,
    InvalidEnumValueError,
    PostgresCatalog,
    UndefinedTypeError,
)
from pgenum.catalog.postgres import translate_database_error


class FakeDriverError(Exception):
    """Driver exception exposing a SQLSTATE like psycopg does."""

    def __init__(self, message: str, sqlstate: str | None):
        super().__init__(message)
        self.sqlstate = sqlstate


def database_error(sqlstate: str | None, invalidated: bool = False) -> DBAPIError:
    return DBAPIError(
        "SELECT 1",
        {},
        FakeDriverError(f"driver said {sqlstate}", sqlstate),
        connection_invalidated=invalidated,
    )


@pytest.fixture
def connection():
    connection = MagicMock()
    connection.dialect = postgresql.dialect()
    return connection


@pytest.fixture
def pg_catalog(connection) -> PostgresCatalog:
    return PostgresCatalog(connection, schema_name="public")


class TestErrorTranslation:
    """Test SQLSTATE to exception mapping."""

    @pytest.mark.parametrize(
        ("sqlstate", "expected"),
        [
            ("42710", DuplicateTypeError),
            ("2BP01", DependentObjectsExistError),
            ("22P02", InvalidEnumValueError),
            ("42704", UndefinedTypeError),
            ("08006", CatalogConnectionError),
            ("42601", CatalogOperationError),
            (None, CatalogOperationError),
        ],
    )
    def test_sqlstate_mapping(self, sqlstate, expected):
        error = database_error(sqlstate)

        translated = translate_database_error(error, "Creating enum 'status'")

        assert type(translated) is expected
        assert translated.cause is error
        assert "Creating enum 'status' failed" in str(translated)

    def test_invalidated_connection(self):
        translated = translate_database_error(
            database_error("42601", invalidated=True), "Listing enum types"
        )
        assert isinstance(translated, CatalogConnectionError)

    def test_errors_are_chained(self, connection, pg_catalog: PostgresCatalog):
        error = database_error("22P02")
        connection.exec_driver_sql.side_effect = error
        binding = ColumnBinding(table_name="users", column_name="role")

        with pytest.raises(InvalidEnumValueError) as exc_info:
            pg_catalog.alter_column_type(binding, "user_role")

        assert exc_info.value.__cause__ is error


class TestIntrospection:
    """Test catalog queries and their parameters."""

    def test_enum_labels(self, connection, pg_catalog: PostgresCatalog):
        connection.execute.return_value.scalars.return_value.all.return_value = [
            "admin",
            "member",
        ]

        assert pg_catalog.enum_labels("user_role") == ["admin", "member"]

        _, params = connection.execute.call_args.args
        assert params == {"schema_name": "public", "type_name": "user_role"}

    def test_enum_labels_of_missing_type(self, connection, pg_catalog: PostgresCatalog):
        labels_result = MagicMock()
        labels_result.scalars.return_value.all.return_value = []
        exists_result = MagicMock()
        exists_result.scalar.return_value = False
        connection.execute.side_effect = [labels_result, exists_result]

        with pytest.raises(UndefinedTypeError, match="user_role"):
            pg_catalog.enum_labels("user_role")

    def test_enum_labels_of_empty_enum(self, connection, pg_catalog: PostgresCatalog):
        labels_result = MagicMock()
        labels_result.scalars.return_value.all.return_value = []
        exists_result = MagicMock()
        exists_result.scalar.return_value = True
        connection.execute.side_effect = [labels_result, exists_result]

        assert pg_catalog.enum_labels("nothing") == []

    def test_list_enums_groups_rows(self, connection, pg_catalog: PostgresCatalog):
        connection.execute.return_value.all.return_value = [
            MagicMock(type_name="mood", label="happy"),
            MagicMock(type_name="mood", label="sad"),
            MagicMock(type_name="nothing", label=None),
        ]

        assert pg_catalog.list_enums() == [
            EnumType(name="mood", labels=["happy", "sad"]),
            EnumType(name="nothing", labels=[]),
        ]

    def test_columns_using_type(self, connection, pg_catalog: PostgresCatalog):
        connection.execute.return_value.all.return_value = [
            MagicMock(table_name="users", column_name="role"),
        ]

        assert pg_catalog.columns_using_type("user_role") == [
            ColumnBinding(table_name="users", column_name="role")
        ]

    def test_query_errors_are_translated(self, connection, pg_catalog: PostgresCatalog):
        connection.execute.side_effect = database_error("08006")

        with pytest.raises(CatalogConnectionError):
            pg_catalog.columns_using_type("user_role")


class TestAlterColumn:
    """Test the repoint statement."""

    def test_statement_casts_through_text(self, pg_catalog: PostgresCatalog):
        binding = ColumnBinding(table_name="items", column_name="kind")

        statement = pg_catalog.alter_column_statement(binding, "item_kind")

        assert statement == (
            "ALTER TABLE public.items ALTER COLUMN kind "
            "TYPE public.item_kind USING kind::text::public.item_kind"
        )

    def test_identifiers_are_quoted(self, connection):
        pg_catalog = PostgresCatalog(connection, schema_name="Sales")
        binding = ColumnBinding(table_name="Order Items", column_name="Kind")

        statement = pg_catalog.alter_column_statement(binding, "Item Kind")

        assert 'ALTER TABLE "Sales"."Order Items"' in statement
        assert 'USING "Kind"::text::"Sales"."Item Kind"' in statement

    def test_statement_sent_verbatim_to_driver(self, connection):
        """Colons in quoted identifiers reach the driver untouched."""
        pg_catalog = PostgresCatalog(connection)
        binding = ColumnBinding(table_name="a:b", column_name="kind")

        pg_catalog.alter_column_type(binding, "item_kind")

        connection.exec_driver_sql.assert_called_once_with(
            'ALTER TABLE public."a:b" ALTER COLUMN kind '
            "TYPE public.item_kind USING kind::text::public.item_kind"
        )
        connection.execute.assert_not_called()


class TestTransaction:
    def test_savepoint_inside_transaction(self, connection, pg_catalog):
        connection.in_transaction.return_value = True

        with pg_catalog.transaction():
            pass

        connection.begin_nested.assert_called_once()
        connection.begin.assert_not_called()

    def test_transaction_when_idle(self, connection, pg_catalog):
        connection.in_transaction.return_value = False

        with pg_catalog.transaction():
            pass

        connection.begin.assert_called_once()
        connection.begin_nested.assert_not_called()
