"""Xcursor container decoding.

An Xcursor file is a 16 byte header followed by a table of contents (TOC)
of 12 byte entries, each pointing at a chunk somewhere in the file:

    offset  size  field
    0       4     magic "Xcur" (big-endian 0x58637572)
    4       4     header size
    8       4     file version
    12      4     ntoc (little-endian)
    16+12i  4     entry type      (little-endian)
    20+12i  4     entry subtype   (nominal size for images)
    24+12i  4     entry position  (little-endian byte offset of the chunk)

Image chunks have a 36 byte header (width, height, hotspot and delay at
+16..+32) followed by width*height pixels stored as B, G, R, A bytes in
row-major order. Decoding converts them to R, G, B, A.

Only the file header and TOC are fatal when malformed; a bad image chunk is
skipped and reported while the rest of the TOC is still walked.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass, field

import numpy as np

from .error_handling import (
    ChunkError,
    FormatError,
    IssueKind,
    OutOfBoundsError,
)

logger = logging.getLogger(__name__)

XCURSOR_MAGIC = 0x58637572
FILE_HEADER_SIZE = 16
NTOC_OFFSET = 12
TOC_ENTRY_SIZE = 12

CHUNK_TYPE_COMMENT = 0xFFFE0001
CHUNK_TYPE_IMAGE = 0xFFFD0002

IMAGE_HEADER_SIZE = 36
BYTES_PER_PIXEL = 4

# B, G, R, A -> R, G, B, A
_BGRA_TO_RGBA = [2, 1, 0, 3]


class ByteView:
    """Bounds-checked little/big-endian reads over an immutable byte buffer."""

    _U32_BE = struct.Struct(">I")
    _U32_LE = struct.Struct("<I")
    _I32_LE = struct.Struct("<i")

    def __init__(self, data: bytes | bytearray | memoryview):
        self._data = memoryview(data).cast("B")

    def __len__(self) -> int:
        return len(self._data)

    def check(self, offset: int, size: int) -> None:
        """Raise OutOfBoundsError unless ``size`` bytes are readable at ``offset``."""
        if offset < 0 or size < 0 or offset + size > len(self._data):
            raise OutOfBoundsError(offset, size, len(self._data))

    def u32_be(self, offset: int) -> int:
        self.check(offset, 4)
        return self._U32_BE.unpack_from(self._data, offset)[0]

    def u32_le(self, offset: int) -> int:
        self.check(offset, 4)
        return self._U32_LE.unpack_from(self._data, offset)[0]

    def i32_le(self, offset: int) -> int:
        self.check(offset, 4)
        return self._I32_LE.unpack_from(self._data, offset)[0]

    def slice(self, offset: int, size: int) -> memoryview:
        self.check(offset, size)
        return self._data[offset : offset + size]


@dataclass(frozen=True)
class TocEntry:
    """One table-of-contents entry."""

    chunk_type: int
    position: int

    @property
    def is_image(self) -> bool:
        return self.chunk_type == CHUNK_TYPE_IMAGE


@dataclass(frozen=True)
class Frame:
    """A single decoded cursor image.

    ``pixels`` holds exactly ``width * height * 4`` bytes of RGBA data in
    row-major order. ``delay`` is the raw value from the file in
    milliseconds; 0 means "use the default" and is left for output writers
    to interpret.
    """

    width: int
    height: int
    xhot: int
    yhot: int
    delay: int
    pixels: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Frame dimensions must be positive, got {self.width}x{self.height}")
        expected = self.width * self.height * BYTES_PER_PIXEL
        if len(self.pixels) != expected:
            raise ValueError(
                f"Frame pixel buffer must be {expected} bytes for "
                f"{self.width}x{self.height}, got {len(self.pixels)}"
            )

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)


@dataclass
class Diagnostic:
    """A non-fatal problem found while processing one file."""

    kind: IssueKind
    message: str
    offset: int | None = None
    size_key: str | None = None

    def __str__(self) -> str:
        location = ""
        if self.offset is not None:
            location = f" @ byte {self.offset}"
        elif self.size_key is not None:
            location = f" [{self.size_key}]"
        return f"{self.kind.value}{location}: {self.message}"


@dataclass
class DecodedCursor:
    """Everything recovered from one container."""

    ntoc: int
    entries: list[TocEntry]
    frames: list[Frame]
    issues: list[Diagnostic] = field(default_factory=list)

    @property
    def image_entries(self) -> list[TocEntry]:
        return [entry for entry in self.entries if entry.is_image]


def read_toc(
    buffer: bytes | bytearray | memoryview,
    issues: list[Diagnostic] | None = None,
) -> tuple[int, list[TocEntry]]:
    """Validate the file header and read the table of contents.

    Args:
        buffer: Complete contents of the cursor file
        issues: Optional list that receives recoverable TOC problems

    Returns:
        Tuple of (declared entry count, entries that could be read)

    Raises:
        FormatError: If the magic is wrong, the buffer is shorter than the
            file header, or the declared TOC does not fit in the buffer
    """
    view = buffer if isinstance(buffer, ByteView) else ByteView(buffer)

    if len(view) < FILE_HEADER_SIZE or view.u32_be(0) != XCURSOR_MAGIC:
        raise FormatError(
            IssueKind.BAD_MAGIC,
            f"Not an Xcursor file or too small ({len(view)} bytes)",
            context={"length": len(view)},
        )

    ntoc = view.u32_le(NTOC_OFFSET)
    expected_min_size = FILE_HEADER_SIZE + ntoc * TOC_ENTRY_SIZE
    if expected_min_size > len(view):
        raise FormatError(
            IssueKind.TRUNCATED_TOC,
            f"Buffer too small ({len(view)} bytes) for TOC: declared {ntoc} entries, "
            f"expected >= {expected_min_size} bytes",
            context={"ntoc": ntoc, "length": len(view)},
        )
    logger.debug(f"Header OK. TOC entries: {ntoc}")

    entries: list[TocEntry] = []
    for i in range(ntoc):
        toc_offset = FILE_HEADER_SIZE + i * TOC_ENTRY_SIZE
        # Guard only: the TRUNCATED_TOC check above already makes this unreachable.
        try:
            view.check(toc_offset, TOC_ENTRY_SIZE)
        except OutOfBoundsError as e:
            message = f"TOC entry {i} exceeds file length {len(view)}; stopping TOC read"
            logger.error(message)
            if issues is not None:
                issues.append(
                    Diagnostic(IssueKind.TOC_ENTRY_TRUNCATED, message, offset=e.offset)
                )
            break
        entries.append(
            TocEntry(
                chunk_type=view.u32_le(toc_offset),
                position=view.u32_le(toc_offset + 8),
            )
        )

    return ntoc, entries


def parse_frame(buffer: bytes | bytearray | memoryview, position: int) -> Frame:
    """Decode the image chunk at ``position``.

    Raises:
        ChunkError: If the chunk header or pixel payload is out of bounds, or
            the declared dimensions are not positive
    """
    view = buffer if isinstance(buffer, ByteView) else ByteView(buffer)

    try:
        view.check(position, IMAGE_HEADER_SIZE)
    except OutOfBoundsError as e:
        raise ChunkError(
            IssueKind.CHUNK_OUT_OF_BOUNDS,
            f"Invalid chunk position {position}: header would exceed file length {len(view)}",
            offset=position,
            cause=e,
        ) from e

    width = view.i32_le(position + 16)
    height = view.i32_le(position + 20)
    if width <= 0 or height <= 0:
        raise ChunkError(
            IssueKind.INVALID_DIMENSIONS,
            f"Invalid dimensions ({width}x{height})",
            offset=position,
        )

    xhot = view.i32_le(position + 24)
    yhot = view.i32_le(position + 28)
    delay = view.u32_le(position + 32)

    pixel_offset = position + IMAGE_HEADER_SIZE
    pixel_length = width * height * BYTES_PER_PIXEL
    if pixel_offset + pixel_length > len(view):
        raise ChunkError(
            IssueKind.PIXELS_OUT_OF_BOUNDS,
            f"Pixel data end ({pixel_offset + pixel_length}) exceeds file length ({len(view)})",
            offset=position,
        )

    # Guard only: the PIXELS_OUT_OF_BOUNDS check above already makes this unreachable.
    try:
        pixels = bgra_to_rgba(view.slice(pixel_offset, pixel_length), width, height)
    except (OutOfBoundsError, ValueError) as e:
        raise ChunkError(
            IssueKind.PIXEL_READ_FAILED,
            f"Failed to read {width}x{height} pixel data at {pixel_offset}",
            offset=position,
            cause=e,
        ) from e

    logger.debug(
        f"Found image {width}x{height}, delay {delay}, data @ {pixel_offset}"
    )
    return Frame(
        width=width, height=height, xhot=xhot, yhot=yhot, delay=delay, pixels=pixels
    )


def bgra_to_rgba(data: bytes | memoryview, width: int, height: int) -> bytes:
    """Reorder packed BGRA pixels into a new RGBA buffer.

    Channel values are copied verbatim (no premultiplication or gamma).

    Raises:
        ValueError: If ``data`` does not hold exactly width*height pixels
    """
    expected = width * height * BYTES_PER_PIXEL
    if len(data) != expected:
        raise ValueError(
            f"Expected {expected} bytes of BGRA data, got {len(data)}"
        )
    bgra = np.frombuffer(data, dtype=np.uint8).reshape(-1, BYTES_PER_PIXEL)
    return bgra[:, _BGRA_TO_RGBA].tobytes()


def decode_frame(buffer: bytes | bytearray | memoryview, position: int) -> Frame | None:
    """Decode one image chunk, returning None (and logging) if it is unusable."""
    try:
        return parse_frame(buffer, position)
    except ChunkError as e:
        logger.warning(f"Skipping chunk @ {position}: {e}")
        return None


def decode_cursor(buffer: bytes | bytearray | memoryview) -> DecodedCursor:
    """Read the TOC and decode every image chunk in TOC order.

    Chunk-level problems are collected as diagnostics; only header/TOC
    problems raise.

    Raises:
        FormatError: If the file header or TOC is unusable
    """
    view = ByteView(buffer)
    issues: list[Diagnostic] = []
    ntoc, entries = read_toc(view, issues)

    frames: list[Frame] = []
    for index, entry in enumerate(entries):
        if not entry.is_image:
            continue
        try:
            frame = parse_frame(view, entry.position)
        except ChunkError as e:
            logger.warning(f"Chunk {index}: {e}. Skipping chunk.")
            issues.append(Diagnostic(e.kind, str(e), offset=e.offset))
            continue
        frames.append(frame)

    logger.debug(f"Decoded {len(frames)} frame(s) from {len(entries)} TOC entries")
    return DecodedCursor(ntoc=ntoc, entries=entries, frames=frames, issues=issues)
