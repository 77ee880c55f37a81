"""Standardized Error Handling Utilities

Provides the XcurLab exception hierarchy and consistent logging helpers.

Failures are classified by how far they reach:

- ``FormatError``: the whole file is skipped (bad magic, truncated TOC).
- ``ChunkError``: one image chunk is skipped, the TOC walk continues.
- ``GroupError``: one size group is skipped, other groups are still rendered.
- ``SinkError``: one artifact failed to encode or write.
"""

from __future__ import annotations

import logging
import traceback
from contextlib import contextmanager
from enum import Enum
from typing import Any


class ErrorLevel(Enum):
    """Error severity levels for consistent logging."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class IssueKind(Enum):
    """Kinds of problems reported while processing a cursor file."""

    # Fatal for the file
    BAD_MAGIC = "bad_magic"
    TRUNCATED_TOC = "truncated_toc"

    # Recoverable for the TOC walk / one chunk
    TOC_ENTRY_TRUNCATED = "toc_entry_truncated"
    CHUNK_OUT_OF_BOUNDS = "chunk_out_of_bounds"
    INVALID_DIMENSIONS = "invalid_dimensions"
    PIXELS_OUT_OF_BOUNDS = "pixels_out_of_bounds"
    PIXEL_READ_FAILED = "pixel_read_failed"

    # Recoverable for one size group
    EMPTY_GROUP = "empty_group"
    INVALID_SIZE_KEY = "invalid_size_key"

    # Output side
    SINK_FAILED = "sink_failed"


class XcurLabError(Exception):
    """Base exception class for all XcurLab errors."""

    def __init__(
        self, message: str, cause: Exception | None = None, context: dict | None = None
    ):
        super().__init__(message)
        self.cause = cause
        self.context = context or {}

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.cause:
            return f"{base_msg} (caused by: {self.cause})"
        return base_msg


class OutOfBoundsError(XcurLabError):
    """Raised when a read would run past the end of a byte buffer."""

    def __init__(self, offset: int, size: int, length: int):
        super().__init__(
            f"read of {size} byte(s) at offset {offset} exceeds buffer length {length}",
            context={"offset": offset, "size": size, "length": length},
        )
        self.offset = offset
        self.size = size
        self.length = length


class FormatError(XcurLabError):
    """Raised when a container is not a readable Xcursor file."""

    def __init__(
        self,
        kind: IssueKind,
        message: str,
        cause: Exception | None = None,
        context: dict | None = None,
    ):
        super().__init__(message, cause=cause, context=context)
        self.kind = kind


class ChunkError(XcurLabError):
    """Raised when a single image chunk cannot be decoded."""

    def __init__(
        self,
        kind: IssueKind,
        message: str,
        offset: int,
        cause: Exception | None = None,
    ):
        super().__init__(message, cause=cause, context={"offset": offset})
        self.kind = kind
        self.offset = offset


class GroupError(XcurLabError):
    """Raised when a size group cannot be turned into an artifact."""

    def __init__(
        self,
        kind: IssueKind,
        message: str,
        size_key: Any = None,
        cause: Exception | None = None,
    ):
        super().__init__(message, cause=cause, context={"size_key": size_key})
        self.kind = kind
        self.size_key = size_key


class SinkError(XcurLabError):
    """Raised when encoding or writing an output artifact fails."""

    pass


class ConfigurationError(XcurLabError):
    """Raised when configuration is invalid or missing."""

    pass


def handle_error(
    error: Exception,
    operation: str,
    error_type: type[XcurLabError] = SinkError,
    level: ErrorLevel = ErrorLevel.ERROR,
    context: dict | None = None,
    logger: logging.Logger | None = None,
    reraise: bool = True,
) -> XcurLabError | None:
    """Standardized error handling with consistent logging and error transformation.

    Args:
        error: Original exception that occurred
        operation: Description of operation that failed
        error_type: Type of XcurLabError to raise
        level: Logging level for the error
        context: Additional context information
        logger: Logger to use (defaults to module logger)
        reraise: Whether to reraise the transformed exception

    Returns:
        The transformed error if reraise=False, otherwise None

    Raises:
        XcurLabError: Transformed error if reraise=True
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    message = f"Failed to {operation}: {error}"

    error_context = dict(context or {})
    error_context.update(
        {
            "operation": operation,
            "original_error_type": type(error).__name__,
        }
    )

    transformed_error = error_type(message, cause=error, context=error_context)

    log_message = f"{operation.capitalize()} failed: {error}"
    context_str = ", ".join(
        f"{k}={v}" for k, v in error_context.items() if k != "operation"
    )
    if context_str:
        log_message += f" (context: {context_str})"

    log_func = getattr(logger, level.value)
    log_func(log_message)

    if level in [ErrorLevel.ERROR, ErrorLevel.CRITICAL]:
        logger.debug(f"Traceback for {operation}: {traceback.format_exc()}")

    if reraise:
        raise transformed_error from error
    return transformed_error


@contextmanager
def error_context(
    operation: str,
    error_type: type[XcurLabError] = SinkError,
    level: ErrorLevel = ErrorLevel.ERROR,
    context: dict | None = None,
    logger: logging.Logger | None = None,
) -> Any:
    """Context manager for standardized error handling.

    Usage:
        with error_context("encode PNG", SinkError, context={"size": "32x32"}):
            risky_operation()

    XcurLab errors pass through unchanged; anything else is wrapped in
    ``error_type`` and logged.
    """
    try:
        yield
    except XcurLabError:
        raise
    except Exception as e:
        handle_error(e, operation, error_type, level, context, logger, reraise=True)
