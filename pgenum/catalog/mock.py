"""Mock catalog implementation for testing and development.

This module provides an in-memory catalog that implements the
CatalogInterface and refuses the same operations PostgreSQL refuses, raising
the same typed errors. It is useful for exercising the substitution protocol
without a database server.
"""

import copy
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from .exceptions import (
    CatalogOperationError,
    DependentObjectsExistError,
    DuplicateTypeError,
    InvalidEnumValueError,
    UndefinedTypeError,
)
from .interface import CatalogInterface
from .models import ColumnBinding, EnumType


class MockCatalog(CatalogInterface):
    """In-memory catalog for testing and development.

    State is kept in plain dictionaries:

    - ``enums``: type name -> ordered labels
    - ``columns``: (table, column) -> declared type name
    - ``rows``: (table, column) -> stored values (``None`` for NULL)

    Every executed action is appended to ``statements`` so tests can check
    the exact sequence the executor issued.
    """

    def __init__(self, schema_name: str = "public") -> None:
        """Initialize an empty catalog."""
        self.schema_name = schema_name
        self.enums: dict[str, list[str]] = {}
        self.columns: dict[tuple[str, str], str] = {}
        self.rows: dict[tuple[str, str], list[str | None]] = {}
        self.statements: list[tuple[Any, ...]] = []

    # Test setup helpers

    def add_column(self, table_name: str, column_name: str, type_name: str) -> None:
        """Declare a column of an existing enum type."""
        self._require_enum(type_name)
        self.columns[(table_name, column_name)] = type_name
        self.rows.setdefault((table_name, column_name), [])

    def insert(self, table_name: str, column_name: str, value: str | None) -> None:
        """Store a value in an enum column, validated against its type."""
        key = (table_name, column_name)
        if key not in self.columns:
            raise CatalogOperationError(f'column "{column_name}" of "{table_name}" does not exist')

        type_name = self.columns[key]
        if value is not None and value not in self.enums[type_name]:
            raise InvalidEnumValueError(
                f'invalid input value for enum {type_name}: "{value}"'
            )
        self.rows[key].append(value)

    def _require_enum(self, name: str) -> list[str]:
        if name not in self.enums:
            raise UndefinedTypeError(f'type "{name}" does not exist')
        return self.enums[name]

    # Type DDL

    def create_enum(self, name: str, labels: Sequence[str]) -> None:
        """Create an enum type unless the name is taken."""
        self.statements.append(("create_enum", name, tuple(labels)))
        if name in self.enums:
            raise DuplicateTypeError(f'type "{name}" already exists')
        if len(set(labels)) != len(labels):
            raise CatalogOperationError(f'enum labels of "{name}" must be unique')
        self.enums[name] = list(labels)

    def drop_enum(self, name: str) -> None:
        """Drop an enum type unless a column still uses it."""
        self.statements.append(("drop_enum", name))
        self._require_enum(name)

        dependents = [
            f"table {table} column {column}"
            for (table, column), type_name in self.columns.items()
            if type_name == name
        ]
        if dependents:
            raise DependentObjectsExistError(
                f"cannot drop type {name} because other objects depend on it "
                f"({', '.join(dependents)})"
            )
        del self.enums[name]

    # Introspection

    def enum_exists(self, name: str) -> bool:
        """Check whether the type is defined."""
        return name in self.enums

    def enum_labels(self, name: str) -> list[str]:
        """Return a copy of the type's labels."""
        return list(self._require_enum(name))

    def list_enums(self) -> list[EnumType]:
        """Return every type ordered by name."""
        return [
            EnumType(name=name, labels=list(labels))
            for name, labels in sorted(self.enums.items())
        ]

    def columns_using_type(self, name: str) -> list[ColumnBinding]:
        """Return the bindings of a type ordered by table, then column."""
        return [
            ColumnBinding(table_name=table, column_name=column)
            for (table, column), type_name in sorted(self.columns.items())
            if type_name == name
        ]

    # Column DDL

    def alter_column_type(self, binding: ColumnBinding, type_name: str) -> None:
        """Repoint a column, refusing stored values missing from the new type."""
        self.statements.append(
            ("alter_column_type", binding.table_name, binding.column_name, type_name)
        )
        key = (binding.table_name, binding.column_name)
        if key not in self.columns:
            raise CatalogOperationError(f"column {binding} does not exist")

        labels = self._require_enum(type_name)
        for value in self.rows.get(key, []):
            if value is not None and value not in labels:
                raise InvalidEnumValueError(
                    f'invalid input value for enum {type_name}: "{value}"'
                )
        self.columns[key] = type_name

    # Transactions

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Snapshot the state and restore it if the block raises."""
        snapshot = copy.deepcopy((self.enums, self.columns, self.rows))
        try:
            yield
        except Exception:
            self.enums, self.columns, self.rows = snapshot
            raise
