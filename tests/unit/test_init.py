"""Test the main package initialization."""

from alembic.operations import Operations


def test_import_main_package() -> None:
    """Test that the main package can be imported without errors."""
    import pgenum

    assert pgenum.__version__ == "0.1.0"


def test_import_registers_alembic_operations() -> None:
    """Importing pgenum makes op.create_enum and friends available."""
    import pgenum  # noqa: F401

    assert hasattr(Operations, "create_enum")
    assert hasattr(Operations, "revert_enum_operations")


class TestPackageStructure:
    """Test the package structure and imports."""

    def test_core_module_import(self) -> None:
        """Test that core module can be imported."""
        from pgenum import core  # noqa: F401

    def test_catalog_module_import(self) -> None:
        """Test that catalog module can be imported."""
        from pgenum import catalog  # noqa: F401

    def test_migrations_module_import(self) -> None:
        """Test that migrations module can be imported."""
        from pgenum import migrations  # noqa: F401

    def test_cli_module_import(self) -> None:
        """Test that CLI module can be imported."""
        from pgenum import cli  # noqa: F401
