"""Catalog-specific exceptions for enum migrations."""


class EnumCatalogError(Exception):
    """Base exception for all catalog operations.

    This is the parent class for all catalog-related errors,
    allowing callers to catch all catalog issues with a single except clause.
    """

    def __init__(self, message: str, cause: Exception | None = None):
        """Initialize catalog error.

        Args:
            message: Human-readable error description
            cause: Optional underlying exception that caused this error
        """
        super().__init__(message)
        self.cause = cause


class CatalogConnectionError(EnumCatalogError):
    """Error connecting to or communicating with the database.

    Raised when:
    - The connection is lost during an operation
    - The server refuses the connection
    """

    pass


class CatalogConfigurationError(EnumCatalogError):
    """Error in catalog configuration.

    Raised when:
    - Unsupported backend type specified
    - Required configuration parameters are missing
    """

    pass


class CatalogOperationError(EnumCatalogError):
    """Error executing a statement against the catalog.

    Raised for any database failure without a more specific subclass.
    """

    pass


class DuplicateTypeError(CatalogOperationError):
    """A type with the requested name already exists."""

    pass


class DependentObjectsExistError(CatalogOperationError):
    """A type cannot be dropped because columns still use it."""

    pass


class InvalidEnumValueError(CatalogOperationError):
    """A stored value is not a label of the destination enum type."""

    pass


class UndefinedTypeError(CatalogOperationError):
    """The named enum type does not exist."""

    pass
