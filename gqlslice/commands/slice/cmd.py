"""CLI commands that slice a schema: by source file, query, field, or type."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, NoReturn

import click
from rich.markup import escape

from gqlslice.closure.types import IgnoreSet, ProgressCallback
from gqlslice.helpers.console import console, err_console
from gqlslice.schema.errors import SliceError
from gqlslice.schema.types import SchemaIndex


def _apply(options: list[Callable[..., Any]], func: Callable[..., Any]) -> Callable[..., Any]:
    for option in reversed(options):
        func = option(func)
    return func


def common_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every slicing mode."""
    return _apply(
        [
            click.option(
                "--schema",
                "schema_path",
                required=True,
                envvar="GQLSLICE_SCHEMA",
                type=click.Path(exists=True, dir_okay=False),
                help="Input raw schema file (SDL)",
            ),
            click.option("-o", "--output", default=None, help="Write fragments to this file"),
            click.option("-q", "--quiet", is_flag=True, default=False, help="Only print fragments"),
            click.option(
                "-v", "--verbose", is_flag=True, default=False, help="Report skipped types and fields"
            ),
        ],
        func,
    )


def closure_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options of the depth-bounded modes (field and type)."""
    return _apply(
        [
            click.option(
                "-i",
                "--ignored",
                "ignored_path",
                default=None,
                envvar="GQLSLICE_IGNORED",
                type=click.Path(exists=True, dir_okay=False),
                help="File listing type names to ignore, one per line",
            ),
            click.option(
                "-d",
                "--depth",
                default=5,
                show_default=True,
                envvar="GQLSLICE_DEPTH",
                type=click.IntRange(min=1),
                help="Type recursion depth",
            ),
        ],
        func,
    )


@click.command("source")
@click.argument("source_path", type=click.Path(exists=True, dir_okay=False))
@common_options
def source_command(
    source_path: str,
    schema_path: str,
    output: str | None,
    quiet: bool,
    verbose: bool,
) -> None:
    """Slice the schema down to the first gql`...` literal of a JS/TS file."""
    from gqlslice.closure.query import slice_query_text
    from gqlslice.helpers.sources import extract_embedded_query
    from gqlslice.schema.errors import NoEmbeddedQueryError
    from gqlslice.schema.loader import load_schema

    if not quiet:
        _print_run_header(schema_path, source=source_path)
    try:
        schema = load_schema(schema_path)
        query = extract_embedded_query(Path(source_path).read_text())
        if not query:
            raise NoEmbeddedQueryError(source_path)
        fragments = slice_query_text(schema, query, on_progress=_progress(verbose))
    except SliceError as e:
        _fail(e)

    _emit(fragments, output)


@click.command("query")
@click.argument("query_path", type=click.Path(exists=True, dir_okay=False))
@common_options
def query_command(
    query_path: str,
    schema_path: str,
    output: str | None,
    quiet: bool,
    verbose: bool,
) -> None:
    """Slice the schema down to the fields a .graphql document selects."""
    from gqlslice.closure.query import slice_query_text
    from gqlslice.schema.loader import load_schema

    if not quiet:
        _print_run_header(schema_path, query=query_path)
    try:
        schema = load_schema(schema_path)
        fragments = slice_query_text(
            schema, Path(query_path).read_text(), on_progress=_progress(verbose)
        )
    except SliceError as e:
        _fail(e)

    _emit(fragments, output)


@click.command("field")
@click.argument("field_spec")
@common_options
@closure_options
def field_command(
    field_spec: str,
    schema_path: str,
    ignored_path: str | None,
    depth: int,
    output: str | None,
    quiet: bool,
    verbose: bool,
) -> None:
    """Describe a root field and print the types around it.

    \b
    Examples:
      gqlslice field "query job_job" --schema schema.graphql
      gqlslice field "mutation insert_job_job_one" -d 3 --schema schema.graphql
    """
    from gqlslice.closure.type_closure import slice_field, split_field_spec

    try:
        split_field_spec(field_spec)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="FIELD_SPEC") from e

    if not quiet:
        _print_run_header(schema_path, ignored_path, depth, field=field_spec)
    try:
        schema, ignored = _load_inputs(schema_path, ignored_path, quiet)
        report = slice_field(
            schema, field_spec, depth=depth, ignored=ignored, on_progress=_progress(verbose)
        )
    except SliceError as e:
        _fail(e)

    for warning in report.warnings:
        err_console.print(f"[yellow]Warning: {escape(warning)}[/yellow]")
    for line in report.signature_lines():
        click.echo(line)
    click.echo("\n-------\n")
    _emit(report.fragments, output)


@click.command("type")
@click.argument("type_name")
@common_options
@closure_options
def type_command(
    type_name: str,
    schema_path: str,
    ignored_path: str | None,
    depth: int,
    output: str | None,
    quiet: bool,
    verbose: bool,
) -> None:
    """Print a type and the types it references, up to --depth of them."""
    from gqlslice.closure.type_closure import slice_type

    if not quiet:
        _print_run_header(schema_path, ignored_path, depth, type=type_name)
    try:
        schema, ignored = _load_inputs(schema_path, ignored_path, quiet)
        fragments = slice_type(
            schema, type_name, depth=depth, ignored=ignored, on_progress=_progress(verbose)
        )
    except SliceError as e:
        _fail(e)

    _emit(fragments, output)


# -- Shared helpers ------------------------------------------------------------


def _print_run_header(
    schema_path: str,
    ignored_path: str | None = None,
    depth: int | None = None,
    **inputs: str,
) -> None:
    console.print(f"[bold]Schema file:[/bold] {escape(schema_path)}")
    for label, value in inputs.items():
        console.print(f"[bold]{label.capitalize()}:[/bold] {escape(value)}")
    if depth is not None:
        console.print(f"[bold]Depth:[/bold] {depth}")
    if ignored_path:
        console.print(f"[bold]Ignored file:[/bold] {escape(ignored_path)}")
    console.print("-------\n")


def _load_inputs(
    schema_path: str, ignored_path: str | None, quiet: bool
) -> tuple[SchemaIndex, IgnoreSet]:
    """Load the ignore list and the schema index."""
    from gqlslice.helpers.sources import read_ignore_list
    from gqlslice.schema.loader import load_schema

    ignored = IgnoreSet()
    if ignored_path:
        ignored = read_ignore_list(ignored_path)
        if not quiet:
            console.print(f"ignored: {ignored.line_count} types")
            console.print("-------\n")

    return load_schema(schema_path), ignored


def _progress(verbose: bool) -> ProgressCallback | None:
    if not verbose:
        return None

    def on_progress(msg: str) -> None:
        err_console.print(f"  [dim]{escape(msg)}[/dim]")

    return on_progress


def _emit(fragments: list[str], output: str | None) -> None:
    """Print fragments one after another, or write them to *output*."""
    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text("\n\n".join(fragments) + "\n" if fragments else "")
        console.print(f"[green]{len(fragments)} fragments written to {escape(output)}[/green]")
        return
    for fragment in fragments:
        click.echo(fragment)


def _fail(error: SliceError) -> NoReturn:
    err_console.print(f"[red]Error: {escape(str(error))}[/red]")
    sys.exit(1)
