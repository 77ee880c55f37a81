"""CLI module for XcurLab commands."""

import click

from .. import __version__
from .info_cmd import info
from .render_cmd import render


@click.group()
@click.version_option(version=__version__, prog_name="xcurlab")
def main() -> None:
    """🖱️ XcurLab: Xcursor to PNG/GIF renderer."""
    pass


main.add_command(render)
main.add_command(info)

__all__ = [
    "info",
    "main",
    "render",
]
