"""Inspect the contents of Xcursor files without rendering them."""

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table


@click.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def info(files: tuple[Path, ...]) -> None:
    """Show TOC statistics and frame sizes of cursor FILES."""
    from ..meta import extract_cursor_metadata

    console = Console()
    invalid = 0

    for file_path in files:
        try:
            metadata = extract_cursor_metadata(file_path)
        except ValueError as e:
            click.echo(f"❌ {file_path}: {e}")
            invalid += 1
            continue

        table = Table(
            title=f"🖱️  {metadata.orig_filename}",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("Size", style="cyan", no_wrap=True)
        table.add_column("Frames", justify="right")
        table.add_column("Total delay (ms)", justify="right")
        table.add_column("Output", style="dim")

        for group in metadata.groups:
            output = "strip" if group.animated else "single"
            table.add_row(
                group.label, str(group.frames), str(group.total_delay_ms), output
            )

        console.print(table)
        console.print(
            f"   TOC entries: {metadata.ntoc} "
            f"(images {metadata.image_chunks}, comments {metadata.comment_chunks}, "
            f"other {metadata.other_chunks}) · frames decoded: {metadata.frames_decoded} "
            f"· issues: {metadata.issues} · {metadata.orig_bytes} bytes"
        )
        console.print(f"   sha256: {metadata.file_sha}", style="dim")

    if invalid:
        sys.exit(1)
