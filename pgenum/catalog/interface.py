"""Abstract catalog interface for enum type operations.

This module defines the contract the migration executor relies on. The
catalog is passed to every component explicitly, so the same executor runs
against a live PostgreSQL connection or the in-memory mock.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from contextlib import AbstractContextManager

from .models import ColumnBinding, EnumType


class CatalogInterface(ABC):
    """Abstract interface for the catalog of one database schema.

    All implementations must raise the typed errors from
    ``pgenum.catalog.exceptions`` so that callers see the same failures
    regardless of backend.
    """

    schema_name: str

    # Type DDL

    @abstractmethod
    def create_enum(self, name: str, labels: Sequence[str]) -> None:
        """Create an enum type with the given ordered labels.

        Raises:
            DuplicateTypeError: If a type with this name already exists
        """
        pass

    @abstractmethod
    def drop_enum(self, name: str) -> None:
        """Drop an enum type, without cascading.

        Raises:
            DependentObjectsExistError: If a column still uses the type
            UndefinedTypeError: If the type does not exist
        """
        pass

    # Introspection

    @abstractmethod
    def enum_exists(self, name: str) -> bool:
        """Check whether an enum type with this name exists."""
        pass

    @abstractmethod
    def enum_labels(self, name: str) -> list[str]:
        """Return the labels of an enum type in definition order.

        Raises:
            UndefinedTypeError: If the type does not exist
        """
        pass

    @abstractmethod
    def list_enums(self) -> list[EnumType]:
        """Return every enum type of the schema, ordered by name."""
        pass

    @abstractmethod
    def columns_using_type(self, name: str) -> list[ColumnBinding]:
        """Return the columns declared with the given type.

        Results are ordered by table name, then column name.
        """
        pass

    # Column DDL

    @abstractmethod
    def alter_column_type(self, binding: ColumnBinding, type_name: str) -> None:
        """Change a column's type, converting stored values through text.

        Raises:
            InvalidEnumValueError: If a stored value is not a label of the new type
        """
        pass

    # Transactions

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Return an all-or-nothing scope for a sequence of operations.

        Everything executed inside the block is undone if the block raises.
        """
        pass
