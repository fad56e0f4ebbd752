"""Reversible enum operations.

Each operation knows how to run itself forward and which operation undoes
it. Operations are plain descriptors: label sets are read from the catalog
when an operation executes, so the inverse is computed against the state
found at rollback time rather than the state seen when the migration was
written.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from ..core import normalize_labels
from .exceptions import IrreversibleOperationError
from .executor import EnumMutationExecutor


class EnumOperation(ABC):
    """Base enum migration operation."""

    @property
    def reversible(self) -> bool:
        """Whether ``inverse()`` can be computed."""
        return True

    @abstractmethod
    def forward(self, executor: EnumMutationExecutor) -> None:
        """Apply the operation."""

    @abstractmethod
    def inverse(self) -> "EnumOperation":
        """Return the operation that undoes this one."""

    def backward(self, executor: EnumMutationExecutor) -> None:
        """Undo the operation by running its inverse forward."""
        self.inverse().forward(executor)

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable summary used in logs and results."""


@dataclass
class CreateEnum(EnumOperation):
    """Create an enum type."""

    enum_name: str
    values: list[str]

    def __post_init__(self) -> None:
        self.values = normalize_labels(self.values)

    def forward(self, executor: EnumMutationExecutor) -> None:
        executor.create(self.enum_name, self.values)

    def inverse(self) -> EnumOperation:
        return DropEnum(self.enum_name, list(self.values))

    def describe(self) -> str:
        return f"Create enum '{self.enum_name}' with values {self.values!r}"


@dataclass
class DropEnum(EnumOperation):
    """Drop an enum type.

    Without ``values`` the drop still applies, but it cannot be reverted.
    """

    enum_name: str
    values: list[str] | None = None

    def __post_init__(self) -> None:
        if self.values is not None:
            self.values = normalize_labels(self.values)

    @property
    def reversible(self) -> bool:
        return self.values is not None

    def forward(self, executor: EnumMutationExecutor) -> None:
        executor.drop(self.enum_name)

    def inverse(self) -> EnumOperation:
        if self.values is None:
            raise IrreversibleOperationError(
                f"Cannot reverse dropping enum '{self.enum_name}': "
                f"its values were not declared"
            )
        return CreateEnum(self.enum_name, list(self.values))

    def describe(self) -> str:
        return f"Drop enum '{self.enum_name}'"


@dataclass
class ChangeEnumValues(EnumOperation):
    """Add and remove labels of an enum type in one substitution."""

    enum_name: str
    add: list[str] = field(default_factory=list)
    remove: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.add = normalize_labels(self.add)
        self.remove = normalize_labels(self.remove)

    def forward(self, executor: EnumMutationExecutor) -> None:
        executor.change_values(self.enum_name, add=self.add, remove=self.remove)

    def inverse(self) -> EnumOperation:
        # Restored labels are appended after the retained ones
        return ChangeEnumValues(
            self.enum_name, add=list(self.remove), remove=list(self.add)
        )

    def describe(self) -> str:
        return (
            f"Change enum '{self.enum_name}' values: "
            f"add {self.add!r}, remove {self.remove!r}"
        )


@dataclass
class AddEnumValues(EnumOperation):
    """Append one or more labels to an enum type."""

    enum_name: str
    values: list[str]

    def __post_init__(self) -> None:
        self.values = normalize_labels(self.values)

    def forward(self, executor: EnumMutationExecutor) -> None:
        ChangeEnumValues(self.enum_name, add=self.values).forward(executor)

    def inverse(self) -> EnumOperation:
        return RemoveEnumValues(self.enum_name, list(self.values))

    def describe(self) -> str:
        return f"Add values {self.values!r} to enum '{self.enum_name}'"


@dataclass
class RemoveEnumValues(EnumOperation):
    """Remove one or more labels from an enum type."""

    enum_name: str
    values: list[str]

    def __post_init__(self) -> None:
        self.values = normalize_labels(self.values)

    def forward(self, executor: EnumMutationExecutor) -> None:
        ChangeEnumValues(self.enum_name, remove=self.values).forward(executor)

    def inverse(self) -> EnumOperation:
        return AddEnumValues(self.enum_name, list(self.values))

    def describe(self) -> str:
        return f"Remove values {self.values!r} from enum '{self.enum_name}'"


@dataclass
class RenameEnum(EnumOperation):
    """Rename an enum type, repointing every column that uses it."""

    from_name: str
    to_name: str

    def forward(self, executor: EnumMutationExecutor) -> None:
        executor.rename(self.from_name, self.to_name)

    def inverse(self) -> EnumOperation:
        return RenameEnum(self.to_name, self.from_name)

    def describe(self) -> str:
        return f"Rename enum '{self.from_name}' to '{self.to_name}'"
