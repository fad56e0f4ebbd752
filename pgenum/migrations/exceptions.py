"""Migration-level exceptions."""


class EnumMigrationError(Exception):
    """Base exception for failures of the operation layer itself."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class IrreversibleOperationError(EnumMigrationError):
    """An operation was asked for its inverse but cannot provide one.

    Raised when reverting ``DropEnum`` declared without its values: the
    labels of the dropped type are not guessed.
    """

    pass
