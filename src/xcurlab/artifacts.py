"""Building output artifacts from size groups."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from .error_handling import GroupError, IssueKind
from .grouping import SizeKey, format_size_key, parse_size_key
from .xcursor import BYTES_PER_PIXEL, Frame


class ArtifactKind(Enum):
    """Layout of an artifact's pixel payload."""

    SINGLE = "single"
    STRIP = "strip"


@dataclass(frozen=True)
class Artifact:
    """Raw RGBA image produced for one size group.

    For a strip, frames are stacked top to bottom in order with no gaps, so
    ``height == frame_height * frame_count``.
    """

    kind: ArtifactKind
    width: int
    height: int
    frame_count: int
    frame_height: int
    pixels: bytes = field(repr=False)

    @property
    def size_key(self) -> SizeKey:
        return (self.width, self.frame_height)

    def frame_at(self, index: int) -> bytes:
        """Return the RGBA bytes of the ``index``-th frame in the artifact."""
        if not 0 <= index < self.frame_count:
            raise IndexError(f"frame index {index} out of range ({self.frame_count})")
        frame_bytes = self.width * self.frame_height * BYTES_PER_PIXEL
        start = index * frame_bytes
        return self.pixels[start : start + frame_bytes]


def build_artifact(size_key: SizeKey | str, frames: Sequence[Frame]) -> Artifact:
    """Turn the (already sampled) frames of one size group into an artifact.

    One frame becomes a SINGLE image; two or more become a vertical STRIP.

    Raises:
        GroupError: If the group is empty, the key is invalid, or a frame does
            not match the group's size
    """
    width, height = parse_size_key(size_key)
    label = format_size_key((width, height))

    if not frames:
        raise GroupError(
            IssueKind.EMPTY_GROUP, f"No frames for size group {label}", size_key=label
        )

    for index, frame in enumerate(frames):
        if frame.size != (width, height):
            raise GroupError(
                IssueKind.INVALID_SIZE_KEY,
                f"Frame {index} is {format_size_key(frame.size)}, expected {label}",
                size_key=label,
            )

    if len(frames) == 1:
        return Artifact(
            kind=ArtifactKind.SINGLE,
            width=width,
            height=height,
            frame_count=1,
            frame_height=height,
            pixels=frames[0].pixels,
        )

    return Artifact(
        kind=ArtifactKind.STRIP,
        width=width,
        height=height * len(frames),
        frame_count=len(frames),
        frame_height=height,
        pixels=b"".join(frame.pixels for frame in frames),
    )
