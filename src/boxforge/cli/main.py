"""BoxForge CLI entry point."""

import click


@click.group()
def cli():
    """BoxForge — admin screens and meta boxes CLI."""
    pass


# Register subcommand groups
from boxforge.cli.metadata_cmd import metadata  # noqa: E402
from boxforge.cli.screens_cmd import screens  # noqa: E402

cli.add_command(metadata)
cli.add_command(screens)
