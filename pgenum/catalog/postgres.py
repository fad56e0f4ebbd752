"""PostgreSQL catalog backend implementation.

This module implements the CatalogInterface on top of a SQLAlchemy
connection. Enum DDL is produced by SQLAlchemy's ``postgresql.ENUM``
constructs, catalog lookups use bound parameters, and every identifier in
``ALTER TABLE`` statements goes through the dialect's identifier preparer.
"""

from collections.abc import Iterator, Sequence
from contextlib import contextmanager

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql
from sqlalchemy.engine import Connection
from sqlalchemy.exc import DBAPIError

from ..core import get_logger
from .exceptions import (
    CatalogConnectionError,
    CatalogOperationError,
    DependentObjectsExistError,
    DuplicateTypeError,
    EnumCatalogError,
    InvalidEnumValueError,
    UndefinedTypeError,
)
from .interface import CatalogInterface
from .models import ColumnBinding, EnumType

logger = get_logger(__name__)

SQLSTATE_ERRORS: dict[str, type[CatalogOperationError]] = {
    "42710": DuplicateTypeError,  # duplicate_object
    "2BP01": DependentObjectsExistError,  # dependent_objects_still_exist
    "22P02": InvalidEnumValueError,  # invalid_text_representation
    "42704": UndefinedTypeError,  # undefined_object
}

ENUM_LABELS_QUERY = sa.text(
    """
    SELECT e.enumlabel
      FROM pg_catalog.pg_enum e
      JOIN pg_catalog.pg_type t ON t.oid = e.enumtypid
      JOIN pg_catalog.pg_namespace n ON n.oid = t.typnamespace
     WHERE n.nspname = :schema_name
       AND t.typname = :type_name
     ORDER BY e.enumsortorder
    """
)

ENUM_EXISTS_QUERY = sa.text(
    """
    SELECT EXISTS (
        SELECT 1
          FROM pg_catalog.pg_type t
          JOIN pg_catalog.pg_namespace n ON n.oid = t.typnamespace
         WHERE n.nspname = :schema_name
           AND t.typname = :type_name
           AND t.typtype = 'e'
    )
    """
)

LIST_ENUMS_QUERY = sa.text(
    """
    SELECT t.typname AS type_name, e.enumlabel AS label
      FROM pg_catalog.pg_type t
      JOIN pg_catalog.pg_namespace n ON n.oid = t.typnamespace
      LEFT JOIN pg_catalog.pg_enum e ON e.enumtypid = t.oid
     WHERE n.nspname = :schema_name
       AND t.typtype = 'e'
     ORDER BY t.typname, e.enumsortorder
    """
)

# Views are left out: their columns follow the underlying table
COLUMNS_USING_TYPE_QUERY = sa.text(
    """
    SELECT c.table_name, c.column_name
      FROM information_schema.columns c
      JOIN information_schema.tables t
        ON t.table_schema = c.table_schema
       AND t.table_name = c.table_name
     WHERE c.table_schema = :schema_name
       AND c.udt_schema = :schema_name
       AND c.udt_name = :type_name
       AND t.table_type = 'BASE TABLE'
     ORDER BY c.table_name, c.column_name
    """
)


def translate_database_error(error: DBAPIError, action: str) -> EnumCatalogError:
    """Map a driver error onto the catalog exception hierarchy by SQLSTATE."""
    original = error.orig
    sqlstate = getattr(original, "sqlstate", None) or getattr(original, "pgcode", None)
    message = f"{action} failed: {original}".strip()

    if error.connection_invalidated or (sqlstate and sqlstate.startswith("08")):
        return CatalogConnectionError(message, cause=error)

    error_class = SQLSTATE_ERRORS.get(sqlstate or "", CatalogOperationError)
    return error_class(message, cause=error)


class PostgresCatalog(CatalogInterface):
    """Catalog of one PostgreSQL schema reached through a SQLAlchemy connection.

    The connection is owned by the caller (typically Alembic's migration
    connection), so statements run inside whatever transaction the caller
    has opened.
    """

    def __init__(self, connection: Connection, schema_name: str = "public"):
        """Initialize the catalog.

        Args:
            connection: Open SQLAlchemy connection to a PostgreSQL database
            schema_name: Schema holding the enum types and their tables
        """
        self.connection = connection
        self.schema_name = schema_name

    @contextmanager
    def _database_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except DBAPIError as e:
            error = translate_database_error(e, action)
            logger.debug(
                "Catalog statement failed",
                action=action,
                error_type=type(error).__name__,
                schema=self.schema_name,
            )
            raise error from e

    def _enum(self, name: str, labels: Sequence[str] = ()) -> postgresql.ENUM:
        return postgresql.ENUM(*labels, name=name, schema=self.schema_name)

    # Type DDL

    def create_enum(self, name: str, labels: Sequence[str]) -> None:
        """Create an enum type with CREATE TYPE ... AS ENUM."""
        with self._database_errors(f"Creating enum '{name}'"):
            self._enum(name, labels).create(self.connection, checkfirst=False)

    def drop_enum(self, name: str) -> None:
        """Drop an enum type with DROP TYPE (no CASCADE)."""
        with self._database_errors(f"Dropping enum '{name}'"):
            self._enum(name).drop(self.connection, checkfirst=False)

    # Introspection

    def enum_exists(self, name: str) -> bool:
        """Check pg_type for an enum type of this schema."""
        with self._database_errors(f"Looking up enum '{name}'"):
            result = self.connection.execute(
                ENUM_EXISTS_QUERY,
                {"schema_name": self.schema_name, "type_name": name},
            )
            return bool(result.scalar())

    def enum_labels(self, name: str) -> list[str]:
        """Read labels from pg_enum ordered by their sort order."""
        with self._database_errors(f"Listing labels of enum '{name}'"):
            result = self.connection.execute(
                ENUM_LABELS_QUERY,
                {"schema_name": self.schema_name, "type_name": name},
            )
            labels = list(result.scalars().all())

        # An enum may legitimately have no labels
        if not labels and not self.enum_exists(name):
            raise UndefinedTypeError(
                f"Enum type '{name}' does not exist in schema '{self.schema_name}'"
            )
        return labels

    def list_enums(self) -> list[EnumType]:
        """Read every enum type of the schema with its labels."""
        with self._database_errors("Listing enum types"):
            rows = self.connection.execute(
                LIST_ENUMS_QUERY, {"schema_name": self.schema_name}
            ).all()

        enums: dict[str, EnumType] = {}
        for row in rows:
            enum_type = enums.setdefault(row.type_name, EnumType(name=row.type_name))
            if row.label is not None:
                enum_type.labels.append(row.label)
        return list(enums.values())

    def columns_using_type(self, name: str) -> list[ColumnBinding]:
        """Find base-table columns whose declared type is ``name``."""
        with self._database_errors(f"Listing columns using '{name}'"):
            rows = self.connection.execute(
                COLUMNS_USING_TYPE_QUERY,
                {"schema_name": self.schema_name, "type_name": name},
            ).all()

        return [
            ColumnBinding(table_name=row.table_name, column_name=row.column_name)
            for row in rows
        ]

    # Column DDL

    def alter_column_statement(self, binding: ColumnBinding, type_name: str) -> str:
        """Build ALTER TABLE ... TYPE ... USING col::text::type for a binding."""
        preparer = self.connection.dialect.identifier_preparer
        table = (
            f"{preparer.quote_schema(self.schema_name)}."
            f"{preparer.quote(binding.table_name)}"
        )
        column = preparer.quote(binding.column_name)
        new_type = preparer.format_type(self._enum(type_name))

        return (
            f"ALTER TABLE {table} ALTER COLUMN {column} "
            f"TYPE {new_type} USING {column}::text::{new_type}"
        )

    def alter_column_type(self, binding: ColumnBinding, type_name: str) -> None:
        """Repoint a column to another enum type through a text cast."""
        statement = self.alter_column_statement(binding, type_name)

        with self._database_errors(f"Changing type of column {binding}"):
            self.connection.exec_driver_sql(statement)

    # Transactions

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Open a SAVEPOINT inside an ongoing transaction, else a transaction."""
        if self.connection.in_transaction():
            scope = self.connection.begin_nested()
        else:
            scope = self.connection.begin()

        with scope:
            yield
