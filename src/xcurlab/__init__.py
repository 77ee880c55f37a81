"""XcurLab - Xcursor decoding and rendering laboratory."""

__version__: str = "0.1.0"
__author__: str = "XcurLab Team"

# Public re-exports for convenience ---------------------------------------------------

from .artifacts import Artifact, ArtifactKind, build_artifact
from .error_handling import ChunkError, FormatError, GroupError, IssueKind, SinkError, XcurLabError
from .frame_keep import calculate_sample_indices, sample_frames
from .grouping import group_frames
from .pipeline import BatchReport, CursorRenderer, FileReport
from .xcursor import Frame, TocEntry, decode_cursor, decode_frame, read_toc

__all__ = [
    "Artifact",
    "ArtifactKind",
    "BatchReport",
    "ChunkError",
    "CursorRenderer",
    "FileReport",
    "FormatError",
    "Frame",
    "GroupError",
    "IssueKind",
    "SinkError",
    "TocEntry",
    "XcurLabError",
    "build_artifact",
    "calculate_sample_indices",
    "decode_cursor",
    "decode_frame",
    "group_frames",
    "read_toc",
    "sample_frames",
    "__version__",
]
