"""Configuration settings for XcurLab."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .error_handling import ConfigurationError

logger = logging.getLogger(__name__)


def _env_int(env_var_name: str, default: int):
    """Default factory reading an integer override from the environment.

    Unset, non-integer or non-positive values fall back to ``default``. Values
    passed to the constructor never reach the factory, so they always win.
    """

    def factory() -> int:
        env_value = os.getenv(env_var_name)
        if not env_value:
            return default
        try:
            value = int(env_value)
        except ValueError:
            value = 0
        if value < 1:
            logger.warning(
                f"Ignoring {env_var_name}={env_value!r}: not a positive integer, using {default}"
            )
            return default
        return value

    return factory


@dataclass
class RenderConfig:
    """Configuration for turning decoded cursor frames into output images.

    Environment overrides (used only when the field is not passed explicitly):
        XCURLAB_TARGET_FRAME_COUNT, XCURLAB_DEFAULT_DELAY_MS
    """

    # Maximum number of frames kept in one strip (excess frames are sampled evenly)
    TARGET_FRAME_COUNT: int = field(
        default_factory=_env_int("XCURLAB_TARGET_FRAME_COUNT", 24)
    )

    # Delay used by the animated GIF writer for frames that declare delay 0
    DEFAULT_DELAY_MS: int = field(
        default_factory=_env_int("XCURLAB_DEFAULT_DELAY_MS", 100)
    )

    # Write a vertical PNG strip for every animated size group
    WRITE_STRIPS: bool = True

    # Additionally write an animated GIF for every animated size group
    WRITE_GIFS: bool = False

    # Where outputs go; None writes next to each input file
    OUTPUT_DIR: Path | None = None

    def __post_init__(self) -> None:
        if self.TARGET_FRAME_COUNT < 1:
            raise ConfigurationError(
                f"TARGET_FRAME_COUNT must be at least 1, got {self.TARGET_FRAME_COUNT}"
            )

        if self.DEFAULT_DELAY_MS <= 0:
            raise ConfigurationError(
                f"DEFAULT_DELAY_MS must be positive, got {self.DEFAULT_DELAY_MS}"
            )

        if self.OUTPUT_DIR is not None:
            self.OUTPUT_DIR = Path(self.OUTPUT_DIR)


@dataclass
class DiscoveryConfig:
    """Configuration for locating cursor files to process."""

    # Recursive glob, relative to the search root
    SEARCH_PATTERN: str = "cursor/**/*"

    # Globs (relative to the search root) that are never treated as cursors
    IGNORE_PATTERNS: list[str] | None = None

    def __post_init__(self) -> None:
        if self.IGNORE_PATTERNS is None:
            self.IGNORE_PATTERNS = [
                "node_modules/**",
                "**/*.tar.gz",
                "**/*.theme",
                "**/*.png",
                "**/*.gif",
            ]

        if not self.SEARCH_PATTERN:
            raise ConfigurationError("SEARCH_PATTERN must not be empty")


@dataclass
class PathConfig:
    """Configuration for file paths and directories."""

    LOGS_DIR: Path = Path("logs")


# Default configuration instances
DEFAULT_RENDER_CONFIG = RenderConfig()
DEFAULT_DISCOVERY_CONFIG = DiscoveryConfig()
DEFAULT_PATH_CONFIG = PathConfig()
