"""Shared utilities for CLI commands."""

import multiprocessing
import sys
from pathlib import Path

import click

from ..pipeline import BatchReport


def handle_generic_error(command_name: str, error: Exception) -> None:
    """Handle generic command errors with consistent formatting."""
    click.echo(f"❌ {command_name} failed: {error}", err=True)
    sys.exit(1)


def handle_keyboard_interrupt(command_name: str) -> None:
    """Handle keyboard interrupt with consistent formatting."""
    click.echo(f"\n⏹️  {command_name} interrupted by user", err=True)
    sys.exit(1)


def validate_worker_count(workers: int) -> int:
    """Resolve a worker count; 0 means one worker per CPU core."""
    if workers < 0:
        raise click.BadParameter(f"must be >= 0, got {workers}", param_hint="--workers")
    if workers == 0:
        return get_cpu_count()
    return workers


def get_cpu_count() -> int:
    """Get the number of available CPU cores."""
    return multiprocessing.cpu_count()


def display_common_header(title: str) -> None:
    """Display a common header for CLI commands."""
    click.echo(f"🖱️  {title}")


def display_path_info(label: str, path: Path, emoji: str = "📁") -> None:
    """Display path information with consistent formatting."""
    click.echo(f"{emoji} {label}: {path}")


def display_results_summary(batch: BatchReport, verbose: bool = False) -> None:
    """Display the summary of a render run."""
    status = "completed" if batch.all_ok else "completed with errors"

    click.echo("\n📊 Results:")
    click.echo(f"   • Status: {status}")
    click.echo(f"   • Processed: {batch.processed}")
    click.echo(f"   • Failed: {batch.failed}")
    click.echo(f"   • Outputs: {len(batch.outputs)}")
    click.echo(f"   • Issues: {batch.issue_count}")

    for report in batch.files:
        if report.failed:
            kind = report.error_kind.value if report.error_kind else "io_error"
            click.echo(f"   ❌ {report.path} [{kind}]: {report.error}")
        elif verbose or report.issues:
            for issue in report.issues:
                click.echo(f"   ⚠️  {report.path}: {issue}")
        if verbose:
            for output in report.outputs:
                click.echo(f"   ✅ {output}")
