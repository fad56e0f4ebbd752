"""CLI inspection commands.

This module implements `pgenum values`, `pgenum columns` and `pgenum list`,
read-only views of the enum types of one schema. Nothing here issues DDL.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
import json
import sys
import traceback
from typing import Any

from rich.console import Console
from rich.table import Table
import rich_click as click
import sqlalchemy as sa
from sqlalchemy.exc import ArgumentError, DBAPIError

from ..catalog import (
    CatalogConfig,
    CatalogConfigurationError,
    CatalogConnectionError,
    CatalogInterface,
    EnumCatalogError,
    UndefinedTypeError,
    create_catalog,
    validate_catalog_config,
)
from ..config import config
from ..core import bind_context, clear_context, configure_logging, get_logger

# Create console for rich formatting
console = Console()

logger = get_logger(__name__)

EXIT_NOT_FOUND = 2
EXIT_CONNECTION = 3
EXIT_INTERNAL = 4


def _should_use_rich_formatting() -> bool:
    """Determine if we should use rich formatting based on environment."""
    return console.is_terminal


@contextmanager
def open_catalog(database_url: str | None, schema: str) -> Iterator[CatalogInterface]:
    """Open a catalog for the configured backend.

    The postgres backend gets its own engine and connection, both closed
    when the block exits.
    """
    catalog_config = CatalogConfig(
        backend_type=config.catalog_backend,
        database_url=database_url,
        schema_name=schema,
    )
    validate_catalog_config(catalog_config)

    if catalog_config.backend_type.lower() != "postgres":
        yield create_catalog(catalog_config)
        return

    try:
        engine = sa.create_engine(catalog_config.database_url)
    except ArgumentError as e:
        raise CatalogConfigurationError(f"Invalid database URL: {e}", cause=e) from e

    try:
        try:
            connection = engine.connect()
        except DBAPIError as e:
            raise CatalogConnectionError(
                f"Cannot connect to database: {e.orig}", cause=e
            ) from e

        with connection:
            yield create_catalog(catalog_config, connection=connection)
    finally:
        engine.dispose()


def _emit_error(format: str, error_type: str, message: str, exit_code: int) -> None:
    if format == "json":
        error_output = {
            "status": "error",
            "error_type": error_type,
            "message": message,
        }
        click.echo(json.dumps(error_output, indent=2))
    else:
        click.echo(f"❌ {message}")
    sys.exit(exit_code)


def _run_inspection(
    command: str,
    format: str,
    verbose: bool,
    action: Callable[[], None],
) -> None:
    """Run one inspection command, mapping catalog errors to exit codes."""
    configure_logging(
        environment=config.environment,
        log_level="DEBUG" if verbose else "WARNING",
        json_logs=config.json_logs,
    )
    bind_context(command=command)

    try:
        action()
    except UndefinedTypeError as e:
        _emit_error(format, "enum_not_found", str(e), EXIT_NOT_FOUND)
    except CatalogConfigurationError as e:
        _emit_error(format, "configuration_error", str(e), EXIT_NOT_FOUND)
    except CatalogConnectionError as e:
        _emit_error(format, "connection_error", str(e), EXIT_CONNECTION)
    except EnumCatalogError as e:
        logger.error("Catalog query failed", error=str(e))
        _emit_error(format, "catalog_error", str(e), EXIT_INTERNAL)
    except Exception as e:
        # Handle unexpected errors
        if verbose and format != "json":
            click.echo(traceback.format_exc())
        _emit_error(format, "internal_error", f"Internal error: {e}", EXIT_INTERNAL)
    finally:
        clear_context()


def catalog_options(function: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every inspection command."""
    decorators = [
        click.option(
            "--database-url",
            envvar="PGENUM_DATABASE_URL",
            default=None,
            help="🔌 **SQLAlchemy database URL** (env: PGENUM_DATABASE_URL)",
            metavar="URL",
        ),
        click.option(
            "--schema",
            default=None,
            help="📂 **Schema** holding the enum types (default: public)",
        ),
        click.option(
            "--format",
            type=click.Choice(["table", "json"]),
            default="table",
            help="📋 **Output format**",
            show_default=True,
        ),
        click.option(
            "--verbose",
            "-v",
            is_flag=True,
            help="🔍 **Show debug logs** of the catalog queries",
        ),
    ]
    for decorator in reversed(decorators):
        function = decorator(function)
    return function


def _values_implementation(
    name: str, database_url: str | None, schema: str | None, format: str
) -> None:
    schema = schema or config.schema_name
    with open_catalog(database_url or config.database_url, schema) as catalog:
        labels = catalog.enum_labels(name)

    if format == "json":
        output = {"status": "ok", "enum": name, "schema": schema, "values": labels}
        click.echo(json.dumps(output, indent=2))
    elif _should_use_rich_formatting():
        table = Table(title=f"[bold]{schema}.{name}[/bold]")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Label", style="cyan")
        for position, label in enumerate(labels, 1):
            table.add_row(str(position), label)
        console.print(table)
    else:
        for label in labels:
            click.echo(label)


def _columns_implementation(
    name: str, database_url: str | None, schema: str | None, format: str
) -> None:
    schema = schema or config.schema_name
    with open_catalog(database_url or config.database_url, schema) as catalog:
        if not catalog.enum_exists(name):
            raise UndefinedTypeError(
                f"Enum type '{name}' does not exist in schema '{schema}'"
            )
        bindings = catalog.columns_using_type(name)

    if format == "json":
        output = {
            "status": "ok",
            "enum": name,
            "schema": schema,
            "columns": [
                {"table": binding.table_name, "column": binding.column_name}
                for binding in bindings
            ],
        }
        click.echo(json.dumps(output, indent=2))
    elif _should_use_rich_formatting():
        if not bindings:
            console.print(f"[dim]No columns use {schema}.{name}[/dim]")
            return
        table = Table(title=f"[bold]Columns using {schema}.{name}[/bold]")
        table.add_column("Table", style="yellow")
        table.add_column("Column", style="cyan")
        for binding in bindings:
            table.add_row(binding.table_name, binding.column_name)
        console.print(table)
    else:
        for binding in bindings:
            click.echo(str(binding))


def _list_implementation(
    database_url: str | None, schema: str | None, format: str
) -> None:
    schema = schema or config.schema_name
    with open_catalog(database_url or config.database_url, schema) as catalog:
        enums = catalog.list_enums()

    if format == "json":
        output = {
            "status": "ok",
            "schema": schema,
            "enums": [enum_type.model_dump() for enum_type in enums],
        }
        click.echo(json.dumps(output, indent=2))
    elif _should_use_rich_formatting():
        table = Table(title=f"[bold]Enum types in {schema}[/bold]")
        table.add_column("Type", style="bold green")
        table.add_column("Labels", style="cyan")
        for enum_type in enums:
            table.add_row(enum_type.name, ", ".join(enum_type.labels))
        console.print(table)
    else:
        for enum_type in enums:
            click.echo(f"{enum_type.name}: {', '.join(enum_type.labels)}")


@click.command("values")
@click.argument("name", help="**Name of the enum type**")
@catalog_options
def values_command(
    name: str,
    database_url: str | None,
    schema: str | None,
    format: str,
    verbose: bool,
) -> None:
    """🏷️ **Show the labels of an enum type** in definition order.

    **Examples:**

    ```bash
    pgenum values user_role
    pgenum values user_role --schema billing --format json
    ```

    **Exit Codes:**
    - `0`: Success ✅
    - `2`: Enum type not found, or invalid configuration 🔎
    - `3`: Cannot connect to the database 🔌
    - `4`: Internal error 💥
    """
    _run_inspection(
        "values",
        format,
        verbose,
        lambda: _values_implementation(name, database_url, schema, format),
    )


@click.command("columns")
@click.argument("name", help="**Name of the enum type**")
@catalog_options
def columns_command(
    name: str,
    database_url: str | None,
    schema: str | None,
    format: str,
    verbose: bool,
) -> None:
    """🧩 **Show the columns declared with an enum type.**

    These are the columns a label change or rename repoints.

    **Exit Codes:**
    - `0`: Success ✅
    - `2`: Enum type not found, or invalid configuration 🔎
    - `3`: Cannot connect to the database 🔌
    - `4`: Internal error 💥
    """
    _run_inspection(
        "columns",
        format,
        verbose,
        lambda: _columns_implementation(name, database_url, schema, format),
    )


@click.command("list")
@catalog_options
def list_command(
    database_url: str | None,
    schema: str | None,
    format: str,
    verbose: bool,
) -> None:
    """📚 **List every enum type of a schema** with its labels.

    **Exit Codes:**
    - `0`: Success ✅
    - `2`: Invalid configuration ⚠️
    - `3`: Cannot connect to the database 🔌
    - `4`: Internal error 💥
    """
    _run_inspection(
        "list",
        format,
        verbose,
        lambda: _list_implementation(database_url, schema, format),
    )
