"""
Renders CSV tables and JSON document descriptions as Markdown.
The output is written to stdout.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

import click
from .config import ConfigError, build_format
from .exceptions import MarkdownError
from .filesystem import get_max_file_size, open_input, resolve_input
from .formatting import CodeFenceStyle, EmphasisStyle, ListStyle, MarkdownFormat, WriterSettings
from .loader import LoadError, load_json
from .writer import MarkdownStringWriter

__all__ = ["cli"]


def _choices(enum_type) -> list[str]:
    return [member.value for member in enum_type]


def _prepare_input(raw_path: str, extensions: tuple[str, ...]) -> tuple[Path, int]:
    try:
        filepath = resolve_input(raw_path, extensions)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size()
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    return filepath, max_file_size


def _load_format(filepath: Path, **overrides) -> MarkdownFormat:
    try:
        return build_format(filepath.parent, **overrides)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error


def _render(markdown_format: MarkdownFormat, render) -> str:
    settings = WriterSettings.from_format(markdown_format)
    try:
        with MarkdownStringWriter(settings) as writer:
            render(writer)
            writer.write_line_if_necessary()
            return writer.getvalue()
    except MarkdownError as error:
        raise click.ClickException(str(error)) from error


@click.group()
@click.version_option()
@click.option("--verbose", "-v", is_flag=True, help="Log debug messages to stderr.")
def cli(verbose: bool = False):
    """
    Build Markdown documents from structured input.

    Examples:
        markdown-builder table people.csv
        markdown-builder render document.json --list-style asterisk
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@cli.command()
@click.option("--no-padding", is_flag=True, help="Do not pad cells with spaces")
@click.option("--no-outer-pipe", is_flag=True, help="Omit the leading and trailing pipes")
@click.option(
    "--no-format-content", is_flag=True, help="Do not align body cells to the column width"
)
@click.argument("csvfile", type=click.Path(exists=True, dir_okay=False))
def table(
    csvfile: str,
    no_padding: bool = False,
    no_outer_pipe: bool = False,
    no_format_content: bool = False,
):
    """
    Render a CSV file as a Markdown table. The first row is the header.

    Args:
        csvfile: Path to the CSV file.
        no_padding: Disable the space padding inside cells.
        no_outer_pipe: Disable the pipes at both ends of each row.
        no_format_content: Disable width alignment of body rows.

    Raises:
        click.BadParameter: If the path or configuration is invalid.
        click.ClickException: If the file is too large or not valid CSV.

    Examples:
        markdown-builder table people.csv --no-outer-pipe
    """
    filepath, max_file_size = _prepare_input(csvfile, (".csv",))
    markdown_format = _load_format(
        filepath,
        table_padding=False if no_padding else None,
        table_outer_delimiter=False if no_outer_pipe else None,
        format_table_content=False if no_format_content else None,
    )

    try:
        with open_input(filepath, max_file_size) as stream:
            rows = list(csv.reader(stream))
    except (IOError, UnicodeDecodeError, csv.Error) as error:
        raise click.ClickException(str(error)) from error

    output = _render(markdown_format, lambda writer: writer.write_table(rows))
    click.echo(output, nl=False)


@cli.command()
@click.option("--bold-style", type=click.Choice(_choices(EmphasisStyle)), help="Bold delimiter")
@click.option(
    "--italic-style", type=click.Choice(_choices(EmphasisStyle)), help="Italic delimiter"
)
@click.option("--list-style", type=click.Choice(_choices(ListStyle)), help="Bullet character")
@click.option(
    "--code-fence-style", type=click.Choice(_choices(CodeFenceStyle)), help="Code fence"
)
@click.argument("jsonfile", type=click.Path(exists=True, dir_okay=False))
def render(
    jsonfile: str,
    bold_style: str | None = None,
    italic_style: str | None = None,
    list_style: str | None = None,
    code_fence_style: str | None = None,
):
    """
    Render a JSON document description as Markdown.

    Args:
        jsonfile: Path to the JSON file.
        bold_style: Override for the bold delimiter style.
        italic_style: Override for the italic delimiter style.
        list_style: Override for the bullet list style.
        code_fence_style: Override for the code fence style.

    Raises:
        click.BadParameter: If the path or configuration is invalid.
        click.ClickException: If the file is too large, is not valid JSON, or
            does not describe a valid document.

    Examples:
        markdown-builder render document.json --bold-style underscore
    """
    filepath, max_file_size = _prepare_input(jsonfile, (".json",))
    markdown_format = _load_format(
        filepath,
        bold_style=bold_style,
        italic_style=italic_style,
        list_style=list_style,
        code_fence_style=code_fence_style,
    )

    try:
        with open_input(filepath, max_file_size) as stream:
            document = load_json(stream)
    except (IOError, UnicodeDecodeError, LoadError) as error:
        raise click.ClickException(str(error)) from error

    output = _render(markdown_format, document.write_to)
    click.echo(output, nl=False)


if __name__ == "__main__":
    cli()
