"""I/O utilities for logging setup, atomic writes and cursor file discovery."""

import fnmatch
import glob
import logging
import tempfile
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from shutil import move

from .config import DEFAULT_DISCOVERY_CONFIG


def setup_logging(log_dir: Path, log_level: str = "INFO") -> logging.Logger:
    """Set up logging configuration for XcurLab.

    Args:
        log_dir: Directory to store log files
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured logger instance
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"xcurlab_{timestamp}.log"

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ],
        force=True,
    )

    return logging.getLogger("xcurlab")


@contextmanager
def atomic_write(target_path: Path, mode: str = "w"):
    """Context manager for atomic file writes using temporary files.

    Args:
        target_path: Final path where file should be written
        mode: File open mode

    Yields:
        File handle for writing

    Example:
        with atomic_write(Path("arrow_32x32.png"), "wb") as f:
            f.write(png_bytes)
    """
    target_path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode=mode,
        dir=target_path.parent,
        delete=False,
        suffix=f".tmp_{target_path.name}"
    ) as temp_file:
        try:
            yield temp_file
            temp_file.flush()
        except Exception:
            temp_file.close()
            Path(temp_file.name).unlink(missing_ok=True)
            raise
    # Move only after the handle is closed
    move(temp_file.name, target_path)


def _is_ignored(relative: str, ignore_patterns: list[str]) -> bool:
    name = relative.rsplit("/", 1)[-1]
    for pattern in ignore_patterns:
        if fnmatch.fnmatch(relative, pattern):
            return True
        # "**/*.png" should also match files directly under the root
        if pattern.startswith("**/") and fnmatch.fnmatch(name, pattern[3:]):
            return True
    return False


def discover_cursor_files(
    pattern: str | None = None,
    ignore_patterns: list[str] | None = None,
    root: Path = Path("."),
) -> list[Path]:
    """Find candidate cursor files under ``root``.

    Args:
        pattern: Recursive glob relative to ``root`` (default from DiscoveryConfig)
        ignore_patterns: Globs relative to ``root`` to exclude
        root: Directory the pattern is evaluated against

    Returns:
        Sorted list of matching regular files
    """
    if pattern is None:
        pattern = DEFAULT_DISCOVERY_CONFIG.SEARCH_PATTERN
    if ignore_patterns is None:
        ignore_patterns = DEFAULT_DISCOVERY_CONFIG.IGNORE_PATTERNS or []

    matches = []
    for match in glob.glob(pattern, root_dir=root, recursive=True):
        path = root / match
        if not path.is_file():
            continue
        if _is_ignored(Path(match).as_posix(), ignore_patterns):
            continue
        matches.append(path)

    return sorted(matches)
