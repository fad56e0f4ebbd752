"""Pydantic models for catalog interface return types."""

from pydantic import BaseModel, ConfigDict, Field


class ColumnBinding(BaseModel):
    """A column whose declared type is an enum type."""

    model_config = ConfigDict(frozen=True)

    table_name: str = Field(description="Table holding the column")
    column_name: str = Field(description="Name of the enum-typed column")

    def __str__(self) -> str:
        return f"{self.table_name}.{self.column_name}"


class EnumType(BaseModel):
    """An enum type and its labels in definition order."""

    name: str = Field(description="Type name, unique within its schema")
    labels: list[str] = Field(default_factory=list, description="Ordered labels")


class CatalogConfig(BaseModel):
    """Configuration for creating a catalog backend."""

    backend_type: str = Field(
        default="postgres", description="Catalog backend (postgres or mock)"
    )
    database_url: str | None = Field(
        default=None, description="SQLAlchemy URL used when no connection is given"
    )
    schema_name: str = Field(
        default="public", description="Schema holding the enum types and tables"
    )
