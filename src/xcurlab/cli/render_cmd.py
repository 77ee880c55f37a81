"""Render Xcursor files into PNG images, sprite strips and animated GIFs."""

import sys
from pathlib import Path

import click

from ..config import DEFAULT_DISCOVERY_CONFIG, DEFAULT_PATH_CONFIG, DEFAULT_RENDER_CONFIG
from .utils import (
    display_common_header,
    display_path_info,
    display_results_summary,
    handle_generic_error,
    handle_keyboard_interrupt,
    validate_worker_count,
)


@click.command()
@click.argument("pattern", required=False, default=DEFAULT_DISCOVERY_CONFIG.SEARCH_PATTERN)
@click.option(
    "--root",
    "-r",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    default=Path("."),
    help="Directory the search pattern is evaluated against (default: .)",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for outputs (default: next to each input file)",
)
@click.option(
    "--max-frames",
    type=click.IntRange(min=1),
    default=DEFAULT_RENDER_CONFIG.TARGET_FRAME_COUNT,
    show_default=True,
    help="Maximum frames per strip; larger groups are sampled evenly",
)
@click.option(
    "--ignore",
    "-x",
    multiple=True,
    help="Glob to skip (repeatable, replaces the default ignore list)",
)
@click.option(
    "--strip/--no-strip",
    default=DEFAULT_RENDER_CONFIG.WRITE_STRIPS,
    help="Write a PNG strip for animated sizes",
)
@click.option(
    "--gif/--no-gif",
    default=DEFAULT_RENDER_CONFIG.WRITE_GIFS,
    help="Also write an animated GIF for animated sizes",
)
@click.option(
    "--default-delay",
    type=click.IntRange(min=1),
    default=DEFAULT_RENDER_CONFIG.DEFAULT_DELAY_MS,
    show_default=True,
    help="GIF delay (ms) for frames that declare a delay of 0",
)
@click.option(
    "--workers",
    "-j",
    type=int,
    default=1,
    help="Number of worker processes (0 = CPU count, default: 1)",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_PATH_CONFIG.LOGS_DIR,
    help="Directory for log files (default: logs)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Logging level (default: WARNING)",
)
@click.option("--verbose", "-v", is_flag=True, help="List every output and issue")
def render(
    pattern: str,
    root: Path,
    output_dir: Path | None,
    max_frames: int,
    ignore: tuple[str, ...],
    strip: bool,
    gif: bool,
    default_delay: int,
    workers: int,
    log_dir: Path,
    log_level: str,
    verbose: bool,
) -> None:
    """Render cursor files matching PATTERN into PNG images.

    Every distinct frame size in a cursor becomes one output. Static sizes are
    saved as NAME_WxH.png; animated sizes as a vertical strip NAME_WxH_strip.png
    (and NAME_WxH.gif with --gif).

    PATTERN: Recursive glob relative to --root (default: cursor/**/*)
    """
    try:
        from ..config import RenderConfig
        from ..io import discover_cursor_files, setup_logging
        from ..pipeline import CursorRenderer

        setup_logging(log_dir, log_level)
        validated_workers = validate_worker_count(workers)

        config = RenderConfig(
            TARGET_FRAME_COUNT=max_frames,
            DEFAULT_DELAY_MS=default_delay,
            WRITE_STRIPS=strip,
            WRITE_GIFS=gif,
            OUTPUT_DIR=output_dir,
        )

        display_common_header("XcurLab Cursor Renderer")
        display_path_info("Search root", root)
        click.echo(f"🔎 Pattern: {pattern}")
        if output_dir:
            display_path_info("Output directory", output_dir, "📤")
        click.echo(f"🎞️  Max frames per strip: {config.TARGET_FRAME_COUNT}")

        paths = discover_cursor_files(
            pattern, list(ignore) if ignore else None, root=root
        )
        if not paths:
            click.echo("🤷 No cursor files found")
            return
        click.echo(f"📄 Found {len(paths)} file(s)")

        renderer = CursorRenderer(config)
        batch = renderer.run(paths, workers=validated_workers, progress=len(paths) > 1)

        display_results_summary(batch, verbose=verbose)

    except KeyboardInterrupt:
        handle_keyboard_interrupt("Render")
    except click.ClickException:
        raise
    except Exception as e:
        handle_generic_error("Render", e)
    else:
        if not batch.all_ok:
            sys.exit(1)
