"""Running ordered enum operations forward or backward.

``EnumMigration`` is the framework-neutral host: it takes a catalog, opens
its transaction and applies the declared operations. Reverting walks the
same list in reverse order, running each inverse.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from ..catalog import CatalogInterface
from ..core import bound_context, get_logger
from .exceptions import IrreversibleOperationError
from .executor import DEFAULT_TEMPORARY_PREFIX, EnumMutationExecutor
from .operations import EnumOperation
from .types import Direction

logger = get_logger(__name__)


@dataclass
class MigrationResult:
    """Result of migration execution."""

    success: bool
    direction: Direction
    applied_operations: list[str]


def ensure_reversible(operations: Sequence[EnumOperation]) -> None:
    """Raise before anything runs if one of ``operations`` has no inverse."""
    for operation in operations:
        if not operation.reversible:
            raise IrreversibleOperationError(
                f"Cannot revert migration: {operation.describe()} is irreversible"
            )


def run_operations(
    executor: EnumMutationExecutor,
    operations: Sequence[EnumOperation],
    direction: Direction,
) -> MigrationResult:
    """Apply ``operations`` in order, or their inverses in reverse order.

    The first failure propagates; undoing statements already issued is left
    to the caller's transaction.
    """
    if direction == Direction.BACKWARD:
        ensure_reversible(operations)
        ordered = [operation.inverse() for operation in reversed(operations)]
    else:
        ordered = list(operations)

    applied_operations = []
    with bound_context(direction=direction.value):
        for operation in ordered:
            description = operation.describe()
            logger.info("Applying enum operation", operation=description)
            operation.forward(executor)
            applied_operations.append(description)

    return MigrationResult(
        success=True,
        direction=direction,
        applied_operations=applied_operations,
    )


class EnumMigration:
    """A named, ordered list of enum operations with upgrade and downgrade."""

    def __init__(
        self,
        operations: Sequence[EnumOperation],
        name: str | None = None,
        temporary_prefix: str = DEFAULT_TEMPORARY_PREFIX,
    ):
        self.operations = list(operations)
        self.name = name
        self.temporary_prefix = temporary_prefix

    def upgrade(self, catalog: CatalogInterface) -> MigrationResult:
        """Apply every operation inside one catalog transaction."""
        return self._run(catalog, Direction.FORWARD)

    def downgrade(self, catalog: CatalogInterface) -> MigrationResult:
        """Revert every operation inside one catalog transaction.

        Raises:
            IrreversibleOperationError: If any operation has no inverse; no
                statement is issued in that case
        """
        return self._run(catalog, Direction.BACKWARD)

    def _run(self, catalog: CatalogInterface, direction: Direction) -> MigrationResult:
        if direction == Direction.BACKWARD:
            ensure_reversible(self.operations)

        executor = EnumMutationExecutor(catalog, temporary_prefix=self.temporary_prefix)
        with bound_context(migration=self.name or "anonymous"):
            with catalog.transaction():
                result = run_operations(executor, self.operations, direction)

        logger.info(
            "Enum migration finished",
            migration=self.name,
            direction=direction.value,
            operations=len(result.applied_operations),
        )
        return result
