"""Frame reduction for animated size groups.

Strips are capped at a target frame count. When a group has more frames
than the cap, frames are picked with an even stride across the whole
animation instead of truncating to a prefix, so the strip still covers the
full cycle:

    index_k = floor(k * total / target)    for k in 0 .. target-1

Because ``total > target`` whenever sampling happens, the stride is greater
than one and consecutive indices always differ: the result is strictly
increasing, starts at 0 and never repeats a frame.

Delays are not redistributed over the dropped frames; each kept frame keeps
the delay it was decoded with.
"""

from collections.abc import Sequence
from typing import TypeVar

from .config import DEFAULT_RENDER_CONFIG

T = TypeVar("T")


def calculate_sample_indices(total_frames: int, target_frame_count: int) -> list[int]:
    """Calculate which frame indices to keep for a frame cap.

    Args:
        total_frames: Number of frames in the group
        target_frame_count: Maximum number of frames to keep

    Returns:
        Ascending list of frame indices to keep (0-based)

    Raises:
        ValueError: If either argument is not positive
    """
    if total_frames <= 0:
        raise ValueError(f"total_frames must be positive, got {total_frames}")

    if target_frame_count <= 0:
        raise ValueError(
            f"target_frame_count must be positive, got {target_frame_count}"
        )

    if total_frames <= target_frame_count:
        return list(range(total_frames))

    return [
        min((k * total_frames) // target_frame_count, total_frames - 1)
        for k in range(target_frame_count)
    ]


def calculate_target_frame_count(total_frames: int, target_frame_count: int) -> int:
    """Number of frames a group of ``total_frames`` ends up with after capping."""
    if total_frames <= 0:
        raise ValueError(f"total_frames must be positive, got {total_frames}")
    if target_frame_count <= 0:
        raise ValueError(
            f"target_frame_count must be positive, got {target_frame_count}"
        )
    return min(total_frames, target_frame_count)


def sample_frames(
    frames: Sequence[T], target_frame_count: int | None = None
) -> Sequence[T]:
    """Reduce ``frames`` to at most ``target_frame_count`` evenly spaced entries.

    The input is returned unchanged (same object) when it already fits;
    otherwise a new list is built and the input is left untouched.

    Args:
        frames: Frames of one size group, in animation order
        target_frame_count: Frame cap (defaults to RenderConfig.TARGET_FRAME_COUNT)

    Returns:
        The selected frames in ascending order
    """
    if target_frame_count is None:
        target_frame_count = DEFAULT_RENDER_CONFIG.TARGET_FRAME_COUNT

    if target_frame_count <= 0:
        raise ValueError(
            f"target_frame_count must be positive, got {target_frame_count}"
        )

    if len(frames) <= target_frame_count:
        return frames

    indices = calculate_sample_indices(len(frames), target_frame_count)
    return [frames[index] for index in indices]
