"""Shared fixtures for pgenum tests."""

import pytest

from pgenum.catalog import MockCatalog
from pgenum.migrations import EnumMutationExecutor


@pytest.fixture
def catalog() -> MockCatalog:
    """Empty in-memory catalog."""
    return MockCatalog()


@pytest.fixture
def executor(catalog: MockCatalog) -> EnumMutationExecutor:
    """Executor bound to the in-memory catalog."""
    return EnumMutationExecutor(catalog)


@pytest.fixture
def user_role_catalog(catalog: MockCatalog) -> MockCatalog:
    """Catalog with enum user_role bound to users.role, holding two rows."""
    catalog.create_enum("user_role", ["admin", "member"])
    catalog.add_column("users", "role", "user_role")
    catalog.insert("users", "role", "admin")
    catalog.insert("users", "role", "member")
    catalog.statements.clear()
    return catalog
