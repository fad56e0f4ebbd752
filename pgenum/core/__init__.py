"""Core functionality shared by the catalog and migration layers."""

from .labels import (
    MAX_IDENTIFIER_LENGTH,
    compute_target_labels,
    normalize_labels,
    temporary_type_name,
)
from .logging import (
    CatalogOperationLogger,
    bind_context,
    bound_context,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "MAX_IDENTIFIER_LENGTH",
    # Labels
    "compute_target_labels",
    "normalize_labels",
    "temporary_type_name",
    # Logging
    "CatalogOperationLogger",
    "bind_context",
    "bound_context",
    "clear_context",
    "configure_logging",
    "get_logger",
]
