"""
Command-line interface for PDF Band Splitter.
"""

import logging
import os
import sys
from dataclasses import replace

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from band_splitter import __version__
from band_splitter.backends.pymupdf_renderer import PyMuPDFRenderer
from band_splitter.coordinates import ratio_to_pixel_y
from band_splitter.exceptions import BandSplitterException
from band_splitter.segments import segment_height_percent
from band_splitter.session import EditSession
from band_splitter.settings import SplitterSettings
from band_splitter.utils import format_file_size, format_percent, parse_positions, parse_segment_names

console = Console()


def _configure_logging(verbose):
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _apply_layout(session, parts, lines):
    if parts is not None and lines is not None:
        raise click.UsageError("Use either --parts or --lines, not both.")
    if parts is not None:
        session.apply_preset(parts)
    elif lines is not None:
        session.clear_lines()
        for position in parse_positions(lines):
            session.add_line(position)


def _segments_table(session, title="Segments"):
    geometry = session.geometry
    table = Table(title=title)
    table.add_column("#", style="cyan", width=4)
    table.add_column("Name", style="green")
    table.add_column("Range")
    table.add_column("Height", justify="right")
    table.add_column("Preview px", justify="right", style="dim")

    for segment in session.segments:
        top = ratio_to_pixel_y(segment.start_ratio, geometry.height_pixels)
        bottom = ratio_to_pixel_y(segment.end_ratio, geometry.height_pixels)
        table.add_row(
            str(segment.index),
            segment.name,
            f"{format_percent(segment.start_ratio)} - {format_percent(segment.end_ratio)}",
            f"{segment_height_percent(segment)}%",
            f"{top:.0f}-{bottom:.0f}",
        )
    return table


layout_options = [
    click.option(
        '--parts', '-n',
        type=click.IntRange(min=1),
        help='Split into N equal bands'
    ),
    click.option(
        '--lines', '-l',
        type=str,
        help="Split positions from the top (e.g., '0.25,0.6' or '30%,70%')"
    ),
    click.option(
        '--password',
        type=str,
        help='Password for encrypted PDFs'
    ),
]


def with_layout_options(func):
    for option in reversed(layout_options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging')
def cli(verbose):
    """
    PDF Band Splitter - Cut a page into horizontal bands, one output page per band.
    """
    _configure_logging(verbose)


@cli.command(name="info")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option('--password', type=str, help='Password for encrypted PDFs')
def show_info(input_pdf, password):
    """
    Display page geometry of a PDF file.

    Example:

        band-splitter info poster.pdf
    """
    try:
        session = EditSession(password=password)
        geometry = session.load_file(input_pdf)

        table = Table(title=f"PDF Information: {os.path.basename(input_pdf)}")
        table.add_column("Property", style="cyan", no_wrap=True)
        table.add_column("Value", style="green")

        table.add_row("File Path", os.path.abspath(input_pdf))
        table.add_row("File Size", format_file_size(os.path.getsize(input_pdf)))
        table.add_row("Number of Pages", str(session.num_pages))
        table.add_row("Page Width", f"{geometry.width_native:.1f} pt")
        table.add_row("Page Height", f"{geometry.height_native:.1f} pt")
        if geometry.origin_x or geometry.origin_y:
            table.add_row("Media Box Origin", f"({geometry.origin_x:.1f}, {geometry.origin_y:.1f})")
        if session.num_pages > 1:
            table.add_row("Note", "[yellow]Only the first page is split[/yellow]")

        console.print()
        console.print(table)
        console.print()

    except BandSplitterException as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


@cli.command(name="preview")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@with_layout_options
@click.option(
    '--output', '-o',
    type=click.Path(dir_okay=False),
    help='PNG file for the rendered page (default: <name>-preview.png)'
)
@click.option(
    '--scale', '-s',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Render scale (default: 1.5)'
)
def preview(input_pdf, parts, lines, password, output, scale):
    """
    Render the first page to PNG and list the bands.

    Examples:

        band-splitter preview poster.pdf

        band-splitter preview poster.pdf -l '30%,70%' -o poster.png
    """
    try:
        settings = SplitterSettings.from_env()
        if scale is not None:
            settings = replace(settings, preview_scale=scale)
        session = EditSession(renderer=PyMuPDFRenderer(), settings=settings, password=password)
        session.load_file(input_pdf)
        _apply_layout(session, parts, lines)

        output = output or f"{os.path.splitext(input_pdf)[0]}-preview.png"
        png = session.render_preview()
        with open(output, 'wb') as f:
            f.write(png)

        console.print()
        console.print(_segments_table(session))
        console.print(f"\n[bold green]✓ Preview written:[/bold green] {output}")
        console.print()

    except (BandSplitterException, ValueError) as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


@cli.command(name="split")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@with_layout_options
@click.option(
    '--name', 'names',
    multiple=True,
    help="Segment name as INDEX=NAME, used for bookmarks (repeatable)"
)
@click.option(
    '--output-dir', '-o',
    default='./output',
    help='Output directory',
    type=click.Path(file_okay=False)
)
def split(input_pdf, parts, lines, password, names, output_dir):
    """
    Split the first page into bands and write them as one multi-page PDF.

    Examples:

        band-splitter split poster.pdf

        band-splitter split poster.pdf -n 4 -o out

        band-splitter split poster.pdf -l '0.2,0.75' --name 1=Header --name 3=Footer
    """
    try:
        session = EditSession(password=password)
        geometry = session.load_file(input_pdf)
        _apply_layout(session, parts, lines)
        for index, name in parse_segment_names(names).items():
            session.rename_segment(index, name)

        info_table = Table(title="PDF Information", show_header=False)
        info_table.add_column("Property", style="cyan")
        info_table.add_column("Value", style="green")
        info_table.add_row("File", os.path.basename(input_pdf))
        info_table.add_row("Page Size", f"{geometry.width_native:.1f} x {geometry.height_native:.1f} pt")
        info_table.add_row("Segments", str(len(session.segments)))
        console.print(info_table)
        console.print(_segments_table(session))

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console
        ) as progress:
            task = progress.add_task("Splitting page...", total=None)
            result = session.export()
            progress.update(task, completed=True)

        os.makedirs(output_dir, exist_ok=True)
        destination = os.path.join(output_dir, result.filename)
        with open(destination, 'wb') as f:
            f.write(result.data)

        console.print(f"\n[bold green]✓ Successfully created:[/bold green] {destination}")
        console.print(f"[dim]Pages: {result.page_count}, size: {format_file_size(len(result.data))}[/dim]")
        console.print()

    except (BandSplitterException, ValueError, OSError) as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


if __name__ == '__main__':
    cli()
