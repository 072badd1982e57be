"""CLI entry point for mtexport."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mtexport.config import (
    DEFAULT_ENCODING,
    DEFAULT_EXTRA_MULTILINE_KEYS,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_TIMEZONE,
    ConvertConfig,
    check_encoding,
)
from mtexport.convert import convert_file
from mtexport.errors import MTExportError
from mtexport.models import MultilineSectionStmt
from mtexport.parser.builder import parse_file

console = Console(force_terminal=True)


def _fail(message: str):
    console.print(f"[red]Error:[/red] {escape(message)}")
    sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """mtexport - Convert Movable Type exports into Hugo content files."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")


@cli.command()
@click.option(
    "--input",
    "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Export file to convert",
)
@click.option(
    "--output-dir",
    "-o",
    default=str(DEFAULT_OUTPUT_DIR),
    type=click.Path(file_okay=False),
    show_default=True,
    help="Directory for generated content files",
)
@click.option(
    "--timezone",
    "-t",
    default=DEFAULT_TIMEZONE,
    show_default=True,
    help="Time zone of DATE fields",
)
@click.option(
    "--extra-key",
    "-k",
    "extra_keys",
    multiple=True,
    default=DEFAULT_EXTRA_MULTILINE_KEYS,
    show_default=True,
    help="Additional multi-line section key (repeatable)",
)
@click.option(
    "--template",
    "template_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Jinja2 template replacing the built-in front matter layout",
)
@click.option("--encoding", default=DEFAULT_ENCODING, show_default=True, help="Export file encoding")
@click.option("--strict", is_flag=True, help="Exit non-zero if any entry was skipped")
def convert(input_path, output_dir, timezone, extra_keys, template_path, encoding, strict):
    """Convert an export file into one Markdown file per entry."""
    config = ConvertConfig(
        input_path=Path(input_path),
        output_dir=Path(output_dir),
        timezone=timezone,
        extra_multiline_keys=tuple(extra_keys),
        template_path=Path(template_path) if template_path else None,
        encoding=encoding,
    )

    try:
        report = convert_file(config)
    except (MTExportError, OSError, UnicodeDecodeError) as e:
        _fail(str(e))

    console.print()
    console.print(
        f"[green]Done![/green] Wrote [bold]{len(report.written)}[/bold] files "
        f"to {escape(str(config.output_dir))}."
    )

    if report.failed:
        table = Table(title="Skipped Entries")
        table.add_column("Entry", justify="right", style="cyan")
        table.add_column("Basename")
        table.add_column("Error", style="red")
        for result in report.failed:
            table.add_row(str(result.index), escape(result.basename or ""), escape(result.error))
        console.print(table)
        console.print(f"Skipped [yellow]{len(report.failed)}[/yellow] entries.")
        if strict:
            sys.exit(1)


@cli.command()
@click.option(
    "--input",
    "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Export file to inspect",
)
@click.option(
    "--extra-key",
    "-k",
    "extra_keys",
    multiple=True,
    default=DEFAULT_EXTRA_MULTILINE_KEYS,
    show_default=True,
    help="Additional multi-line section key (repeatable)",
)
@click.option("--encoding", default=DEFAULT_ENCODING, show_default=True, help="Export file encoding")
def inspect(input_path, extra_keys, encoding):
    """Parse an export file and list its entries without writing anything."""
    try:
        check_encoding(encoding)
        entries = parse_file(Path(input_path), extra_keys, encoding=encoding)
    except (MTExportError, OSError, UnicodeDecodeError) as e:
        _fail(str(e))

    table = Table(title=f"Entries in {Path(input_path).name}")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Basename")
    table.add_column("Title", style="bold")
    table.add_column("Fields", justify="right")
    table.add_column("Blocks")

    for index, entry in enumerate(entries, start=1):
        basenames = entry.values("BASENAME")
        titles = entry.values("TITLE")
        blocks = [s.key for s in entry.sections if isinstance(s, MultilineSectionStmt)]
        table.add_row(
            str(index),
            escape(basenames[-1].strip()) if basenames else "",
            escape(titles[-1].strip()) if titles else "",
            str(len(entry.fields())),
            ", ".join(blocks),
        )

    console.print(table)
    console.print(f"Found [bold]{len(entries)}[/bold] entries.")
