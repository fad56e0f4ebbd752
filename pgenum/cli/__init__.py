"""Command-line interface for inspecting enum types."""

import rich_click as click

from .. import __version__
from .inspect import columns_command, list_command, values_command

# Configure rich-click styling
click.rich_click.TEXT_MARKUP = "rich"
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.STYLE_OPTION = "bold cyan"
click.rich_click.STYLE_ARGUMENT = "bold yellow"
click.rich_click.STYLE_COMMAND = "bold green"
click.rich_click.STYLE_SWITCH = "bold blue"


@click.group(name="pgenum")
@click.version_option(version=__version__, prog_name="pgenum")
def main() -> None:
    """🏷️ **pgenum** - Reversible PostgreSQL enum migrations.

    Read-only inspection of the enum types a migration history manages:
    their labels in order and the columns that use them.
    """
    pass


# Add commands to the group
main.add_command(values_command)
main.add_command(columns_command)
main.add_command(list_command)


if __name__ == "__main__":
    main()


__all__ = ["main"]
