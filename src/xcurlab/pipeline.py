"""Batch pipeline that renders cursor files into PNG/GIF outputs.

Each file is processed independently: read, decode, group by size, sample
each group down to the frame cap, build an artifact and hand it to the
sinks. Failures are contained at the narrowest level possible:

- a bad header/TOC marks the file as failed and the batch moves on;
- a bad chunk or group is recorded as a diagnostic and skipped;
- an encode/write failure only loses that artifact.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from tqdm import tqdm

from .artifacts import ArtifactKind, build_artifact
from .config import DEFAULT_RENDER_CONFIG, RenderConfig
from .error_handling import FormatError, GroupError, IssueKind, SinkError
from .frame_keep import sample_frames
from .grouping import SizeKey, format_size_key, group_frames, parse_size_key
from .sinks import artifact_filename, encode_animated_gif, encode_png, write_output
from .xcursor import Diagnostic, Frame, decode_cursor

logger = logging.getLogger(__name__)


@dataclass
class FileReport:
    """Outcome of processing one cursor file."""

    path: Path
    status: str = "ok"  # "ok" or "failed"
    ntoc: int = 0
    frames_decoded: int = 0
    groups: dict[str, int] = field(default_factory=dict)
    outputs: list[Path] = field(default_factory=list)
    issues: list[Diagnostic] = field(default_factory=list)
    error: str | None = None
    error_kind: IssueKind | None = None

    @property
    def failed(self) -> bool:
        return self.status == "failed"


@dataclass
class BatchReport:
    """Aggregate of all file reports in one run, in input order."""

    files: list[FileReport] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return sum(1 for report in self.files if not report.failed)

    @property
    def failed(self) -> int:
        return sum(1 for report in self.files if report.failed)

    @property
    def outputs(self) -> list[Path]:
        return [path for report in self.files for path in report.outputs]

    @property
    def issue_count(self) -> int:
        return sum(len(report.issues) for report in self.files)

    @property
    def all_ok(self) -> bool:
        """True when no file hit a fatal (whole-file) error."""
        return self.failed == 0


class CursorRenderer:
    """Renders Xcursor files into standalone PNGs, strips and animated GIFs."""

    def __init__(self, config: RenderConfig | None = None):
        self.config = config or DEFAULT_RENDER_CONFIG

    def output_dir_for(self, source: Path) -> Path:
        return self.config.OUTPUT_DIR or source.parent

    def process_file(self, path: Path) -> FileReport:
        """Render every size group of one cursor file.

        Never raises for malformed input; the returned report says what
        happened.
        """
        path = Path(path)
        report = FileReport(path=path)
        logger.info(f"--- Processing file: {path} ---")

        try:
            data = path.read_bytes()
        except OSError as e:
            logger.error(f"Cannot read {path}: {e}")
            report.status = "failed"
            report.error = str(e)
            return report

        try:
            decoded = decode_cursor(data)
        except FormatError as e:
            logger.warning(f"Skipping {path}: {e}")
            report.status = "failed"
            report.error = str(e)
            report.error_kind = e.kind
            return report
        finally:
            del data

        report.ntoc = decoded.ntoc
        report.frames_decoded = len(decoded.frames)
        report.issues.extend(decoded.issues)

        groups = group_frames(decoded.frames)
        if not groups:
            logger.info(f"No valid image frames found in {path}. No output generated.")
            return report

        logger.debug(
            f"Found {len(groups)} size group(s): "
            + ", ".join(format_size_key(key) for key in groups)
        )
        for size_key, frames in groups.items():
            report.groups[format_size_key(size_key)] = len(frames)
            self._render_group(path, size_key, frames, report)

        return report

    def _render_group(
        self, source: Path, size_key: SizeKey, frames: list[Frame], report: FileReport
    ) -> None:
        label = format_size_key(size_key)
        try:
            width, height = parse_size_key(size_key)
            if not frames:
                raise GroupError(
                    IssueKind.EMPTY_GROUP, f"No frames for size group {label}", size_key=label
                )

            sampled = sample_frames(frames, self.config.TARGET_FRAME_COUNT)
            if len(sampled) < len(frames):
                logger.warning(
                    f"[{label}] Frame count ({len(frames)}) exceeds target "
                    f"({self.config.TARGET_FRAME_COUNT}). Sampled {len(sampled)} frames evenly."
                )
            artifact = build_artifact(size_key, sampled)
        except GroupError as e:
            logger.error(f"Skipping size group {label}: {e}")
            report.issues.append(Diagnostic(e.kind, str(e), size_key=label))
            return

        output_dir = self.output_dir_for(source)

        if artifact.kind == ArtifactKind.SINGLE or self.config.WRITE_STRIPS:
            target = output_dir / artifact_filename(source, width, height, artifact.kind)
            self._write(report, label, target, lambda: encode_png(
                artifact.pixels, artifact.width, artifact.height
            ))

        if artifact.kind == ArtifactKind.STRIP and self.config.WRITE_GIFS:
            target = output_dir / artifact_filename(source, width, height, "gif")
            self._write(report, label, target, lambda: encode_animated_gif(
                sampled, self.config.DEFAULT_DELAY_MS
            ))

    def _write(self, report: FileReport, label: str, target: Path, encode) -> None:
        try:
            write_output(target, encode())
        except SinkError as e:
            logger.error(f"[{label}] Failed to produce {target.name}: {e}")
            report.issues.append(Diagnostic(IssueKind.SINK_FAILED, str(e), size_key=label))
            return
        report.outputs.append(target)

    def run(
        self, paths: list[Path], workers: int = 1, progress: bool = False
    ) -> BatchReport:
        """Process ``paths`` and collect reports in input order.

        Args:
            paths: Cursor files to render
            workers: Number of worker processes (1 = run in this process)
            progress: Show a progress bar

        Returns:
            BatchReport with one FileReport per input path
        """
        paths = [Path(p) for p in paths]
        batch = BatchReport()

        if workers > 1 and len(paths) > 1:
            with ProcessPoolExecutor(max_workers=workers) as executor:
                results = executor.map(_process_file_worker, [self.config] * len(paths), paths)
                for report in tqdm(results, total=len(paths), desc="Rendering", disable=not progress):
                    batch.files.append(report)
        else:
            for path in tqdm(paths, desc="Rendering", disable=not progress):
                batch.files.append(self.process_file(path))

        logger.info(
            f"All files processed: {batch.processed} ok, {batch.failed} failed, "
            f"{len(batch.outputs)} output(s)"
        )
        return batch


def _process_file_worker(config: RenderConfig, path: Path) -> FileReport:
    """Top-level entry point for worker processes."""
    return CursorRenderer(config).process_file(path)
