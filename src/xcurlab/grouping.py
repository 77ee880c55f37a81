"""Grouping of decoded frames by pixel size."""

from collections.abc import Iterable

from .error_handling import GroupError, IssueKind
from .xcursor import Frame

SizeKey = tuple[int, int]


def group_frames(frames: Iterable[Frame]) -> dict[SizeKey, list[Frame]]:
    """Bucket frames by (width, height), keeping decode order within each bucket.

    Group membership depends only on the frame size; hotspot and delay are
    ignored. Groups appear in the order their first frame was seen.
    """
    groups: dict[SizeKey, list[Frame]] = {}
    for frame in frames:
        groups.setdefault((frame.width, frame.height), []).append(frame)
    return groups


def format_size_key(size_key: SizeKey) -> str:
    """Render a size key as ``"WxH"``."""
    width, height = size_key
    return f"{width}x{height}"


def parse_size_key(value: str | SizeKey) -> SizeKey:
    """Parse ``"WxH"`` (or validate a (width, height) tuple) into a size key.

    Raises:
        GroupError: If the key is malformed or either dimension is not positive
    """
    if isinstance(value, str):
        parts = value.lower().split("x")
        if len(parts) != 2:
            raise GroupError(
                IssueKind.INVALID_SIZE_KEY, f"Invalid size key: {value!r}", size_key=value
            )
        try:
            width, height = int(parts[0]), int(parts[1])
        except ValueError as e:
            raise GroupError(
                IssueKind.INVALID_SIZE_KEY,
                f"Invalid size key: {value!r}",
                size_key=value,
                cause=e,
            ) from e
    else:
        try:
            width, height = value
        except (TypeError, ValueError) as e:
            raise GroupError(
                IssueKind.INVALID_SIZE_KEY,
                f"Invalid size key: {value!r}",
                size_key=value,
                cause=e,
            ) from e
        if not isinstance(width, int) or not isinstance(height, int):
            raise GroupError(
                IssueKind.INVALID_SIZE_KEY, f"Invalid size key: {value!r}", size_key=value
            )

    if width <= 0 or height <= 0:
        raise GroupError(
            IssueKind.INVALID_SIZE_KEY,
            f"Invalid size key: {value!r} (dimensions must be positive)",
            size_key=value,
        )
    return (width, height)
