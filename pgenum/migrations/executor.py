"""Enum mutation executor.

This module holds the primitive actions that touch the catalog: creating
and dropping enum types, listing labels and bindings, and the
type-substitution protocol used whenever the labels or the name of an enum
change. PostgreSQL can append labels natively but cannot remove or rename
them, so every such change re-creates the type and repoints its columns.

Nothing here recovers from a failure: the first error propagates, and the
surrounding transaction is expected to undo the statements already issued.
"""

from collections.abc import Sequence

from ..catalog import CatalogInterface, ColumnBinding
from ..core import (
    CatalogOperationLogger,
    compute_target_labels,
    get_logger,
    normalize_labels,
    temporary_type_name,
)

logger = get_logger(__name__)

DEFAULT_TEMPORARY_PREFIX = "new_"


class EnumMutationExecutor:
    """Runs enum type changes against an injected catalog."""

    def __init__(
        self,
        catalog: CatalogInterface,
        temporary_prefix: str = DEFAULT_TEMPORARY_PREFIX,
    ):
        """Initialize executor with a catalog backend.

        Args:
            catalog: Catalog the statements are issued against
            temporary_prefix: Prefix of the placeholder type used during substitution
        """
        self.catalog = catalog
        self.temporary_prefix = temporary_prefix

    def create(self, name: str, labels: Sequence[str]) -> None:
        """Create enum ``name`` with ``labels`` in the given order."""
        logger.debug("Create enum", enum_name=name, labels=list(labels))
        self.catalog.create_enum(name, list(labels))

    def drop(self, name: str) -> None:
        """Drop enum ``name``; fails while any column still uses it."""
        logger.debug("Drop enum", enum_name=name)
        self.catalog.drop_enum(name)

    def list_labels(self, name: str) -> list[str]:
        """Current labels of ``name`` in definition order."""
        return self.catalog.enum_labels(name)

    def list_bindings(self, name: str) -> list[ColumnBinding]:
        """Columns currently declared with type ``name``."""
        return self.catalog.columns_using_type(name)

    def change_values(
        self,
        name: str,
        add: str | Sequence[str] | None = None,
        remove: str | Sequence[str] | None = None,
    ) -> list[str]:
        """Add and remove labels of ``name``.

        The target set is derived from the labels read now, not from what the
        migration author saw: retained labels keep their order and added
        labels are appended.

        Returns:
            The labels of the type after the change
        """
        add_labels = normalize_labels(add)
        remove_labels = normalize_labels(remove)
        logger.debug(
            "Change enum values",
            enum_name=name,
            add=add_labels,
            remove=remove_labels,
        )

        target = compute_target_labels(self.list_labels(name), add_labels, remove_labels)
        self.substitute(name, target)
        return target

    def substitute(self, name: str, labels: Sequence[str]) -> None:
        """Replace the labels of ``name`` by re-creating the type.

        Every column bound to ``name`` is moved to a placeholder copy of the
        type, the original is re-created with ``labels``, and the columns are
        moved back. Moving back fails with ``InvalidEnumValueError`` when a
        stored value is not among ``labels``.
        """
        temporary = temporary_type_name(name, self.temporary_prefix)

        with CatalogOperationLogger(
            logger, "substitute_enum", enum_name=name, temporary_name=temporary
        ) as op_logger:
            current = self.list_labels(name)
            self.create(temporary, current)

            bindings = self.list_bindings(name)
            op_logger.log_progress(
                "Repointing columns to temporary type",
                columns=[str(binding) for binding in bindings],
            )
            self._repoint(bindings, temporary)
            self.drop(name)

            self.create(name, labels)
            op_logger.log_progress("Repointing columns to new type", labels=list(labels))
            self._repoint(bindings, name)
            self.drop(temporary)

    def rename(self, old_name: str, new_name: str) -> None:
        """Rename an enum by copying it under ``new_name`` and repointing columns."""
        with CatalogOperationLogger(
            logger, "rename_enum", enum_name=old_name, new_name=new_name
        ):
            labels = self.list_labels(old_name)
            self.create(new_name, labels)
            self._repoint(self.list_bindings(old_name), new_name)
            self.drop(old_name)

    def _repoint(self, bindings: Sequence[ColumnBinding], type_name: str) -> None:
        for binding in bindings:
            logger.debug(
                "Change column enum type",
                table=binding.table_name,
                column=binding.column_name,
                type_name=type_name,
            )
            self.catalog.alter_column_type(binding, type_name)


def enum_values(catalog: CatalogInterface, name: str) -> list[str]:
    """Labels of enum ``name`` in definition order."""
    return EnumMutationExecutor(catalog).list_labels(name)


def columns_using_type(catalog: CatalogInterface, name: str) -> list[ColumnBinding]:
    """Columns whose declared type is ``name``."""
    return EnumMutationExecutor(catalog).list_bindings(name)
