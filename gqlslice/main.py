"""CLI entry point for gqlslice."""

from __future__ import annotations

import click
from dotenv import load_dotenv

from gqlslice.commands.selection.cmd import selection
from gqlslice.commands.slice.cmd import field_command, query_command, source_command, type_command

load_dotenv()


@click.group()
@click.version_option(version="0.1.0", prog_name="gqlslice")
def cli() -> None:
    """Cut a large GraphQL schema down to what a query, field, or type needs."""


cli.add_command(source_command)
cli.add_command(query_command)
cli.add_command(field_command)
cli.add_command(type_command)
cli.add_command(selection)


if __name__ == "__main__":
    cli()
