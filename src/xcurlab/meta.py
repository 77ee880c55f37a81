"""Metadata extraction and hashing for Xcursor files."""

import hashlib
from dataclasses import dataclass, field
from pathlib import Path

from .error_handling import FormatError
from .grouping import format_size_key, group_frames
from .xcursor import CHUNK_TYPE_COMMENT, CHUNK_TYPE_IMAGE, decode_cursor


@dataclass
class SizeGroupInfo:
    """Summary of one size group inside a cursor file."""

    width: int
    height: int
    frames: int
    total_delay_ms: int

    @property
    def label(self) -> str:
        return format_size_key((self.width, self.height))

    @property
    def animated(self) -> bool:
        return self.frames > 1


@dataclass
class CursorMetadata:
    """Metadata extracted from an Xcursor file."""

    file_sha: str
    orig_filename: str
    orig_bytes: int
    ntoc: int
    image_chunks: int
    comment_chunks: int
    other_chunks: int
    frames_decoded: int
    groups: list[SizeGroupInfo] = field(default_factory=list)
    issues: int = 0


def compute_file_sha256(file_path: Path) -> str:
    """Compute SHA256 hash of a file.

    Args:
        file_path: Path to the file to hash

    Returns:
        Hexadecimal SHA256 hash string
    """
    sha256_hash = hashlib.sha256()
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(4096), b""):
            sha256_hash.update(chunk)
    return sha256_hash.hexdigest()


def extract_cursor_metadata(file_path: Path) -> CursorMetadata:
    """Extract metadata from an Xcursor file.

    Args:
        file_path: Path to the cursor file

    Returns:
        CursorMetadata with TOC statistics and per-size frame counts

    Raises:
        ValueError: If the file is not a valid Xcursor container
        IOError: If the file cannot be read
    """
    if not file_path.exists():
        raise OSError(f"File not found: {file_path}")

    data = file_path.read_bytes()
    try:
        decoded = decode_cursor(data)
    except FormatError as e:
        raise ValueError(f"Error processing cursor {file_path}: {e}") from e

    image_chunks = sum(1 for e in decoded.entries if e.chunk_type == CHUNK_TYPE_IMAGE)
    comment_chunks = sum(1 for e in decoded.entries if e.chunk_type == CHUNK_TYPE_COMMENT)

    groups = [
        SizeGroupInfo(
            width=width,
            height=height,
            frames=len(frames),
            total_delay_ms=sum(frame.delay for frame in frames),
        )
        for (width, height), frames in group_frames(decoded.frames).items()
    ]

    return CursorMetadata(
        file_sha=compute_file_sha256(file_path),
        orig_filename=file_path.name,
        orig_bytes=len(data),
        ntoc=decoded.ntoc,
        image_chunks=image_chunks,
        comment_chunks=comment_chunks,
        other_chunks=len(decoded.entries) - image_chunks - comment_chunks,
        frames_decoded=len(decoded.frames),
        groups=groups,
        issues=len(decoded.issues),
    )
