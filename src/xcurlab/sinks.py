"""Encoding artifacts to PNG/GIF bytes and writing them to disk."""

import io
import logging
from collections.abc import Sequence
from pathlib import Path

from PIL import Image

from .artifacts import ArtifactKind
from .error_handling import SinkError, error_context
from .io import atomic_write
from .xcursor import Frame

logger = logging.getLogger(__name__)


def artifact_filename(
    source: Path, width: int, height: int, kind: ArtifactKind | str
) -> str:
    """Output file name for one size group of ``source``.

    ``width``/``height`` are the size of a single frame, not of the strip.
    ``kind`` is an ArtifactKind or ``"gif"`` for the animated output.
    """
    stem = Path(source).stem
    if kind == ArtifactKind.SINGLE:
        return f"{stem}_{width}x{height}.png"
    if kind == ArtifactKind.STRIP:
        return f"{stem}_{width}x{height}_strip.png"
    if kind == "gif":
        return f"{stem}_{width}x{height}.gif"
    raise ValueError(f"Unknown artifact kind: {kind!r}")


def encode_png(pixels: bytes, width: int, height: int) -> bytes:
    """Encode raw RGBA bytes as a PNG.

    Raises:
        SinkError: If the buffer does not match the dimensions or encoding fails
    """
    with error_context(
        "encode PNG", SinkError, context={"size": f"{width}x{height}"}, logger=logger
    ):
        image = Image.frombytes("RGBA", (width, height), pixels)
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()


def encode_animated_gif(frames: Sequence[Frame], default_delay_ms: int = 100) -> bytes:
    """Encode same-size RGBA frames as a looping animated GIF.

    Frames with delay 0 are shown for ``default_delay_ms``.

    Raises:
        SinkError: If fewer than two frames are given, sizes differ, or
            encoding fails
    """
    if len(frames) < 2:
        raise SinkError(f"Need more than 1 frame for an animated GIF, got {len(frames)}")

    width, height = frames[0].width, frames[0].height
    if any(frame.size != (width, height) for frame in frames):
        raise SinkError("All frames of an animated GIF must share one size")

    delays = [frame.delay or default_delay_ms for frame in frames]

    with error_context(
        "encode animated GIF",
        SinkError,
        context={"size": f"{width}x{height}", "frames": len(frames)},
        logger=logger,
    ):
        images = [
            Image.frombytes("RGBA", (width, height), frame.pixels) for frame in frames
        ]
        buffer = io.BytesIO()
        images[0].save(
            buffer,
            format="GIF",
            save_all=True,
            append_images=images[1:],
            duration=delays,
            loop=0,
            disposal=2,
        )
        return buffer.getvalue()


def write_output(path: Path, data: bytes) -> Path:
    """Atomically write encoded bytes to ``path``.

    Raises:
        SinkError: If the file cannot be written
    """
    with error_context("write output", SinkError, context={"path": str(path)}, logger=logger):
        with atomic_write(path, "wb") as f:
            f.write(data)
    logger.info(f"Saved {path}")
    return path
