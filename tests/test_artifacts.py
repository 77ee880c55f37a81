"""Tests for xcurlab.artifacts module."""

import pytest

from xcurlab.artifacts import ArtifactKind, build_artifact
from xcurlab.error_handling import GroupError, IssueKind
from xcurlab.xcursor import Frame


def make_frame(width: int, height: int, value: int) -> Frame:
    return Frame(
        width=width,
        height=height,
        xhot=0,
        yhot=0,
        delay=0,
        pixels=bytes([value]) * (width * height * 4),
    )


class TestBuildArtifact:
    """Tests for build_artifact function."""

    @pytest.mark.fast
    def test_single_frame(self):
        frame = make_frame(3, 2, 7)
        artifact = build_artifact((3, 2), [frame])

        assert artifact.kind == ArtifactKind.SINGLE
        assert (artifact.width, artifact.height) == (3, 2)
        assert artifact.frame_count == 1
        assert artifact.pixels is frame.pixels

    @pytest.mark.fast
    def test_strip_dimensions_and_layout(self):
        frames = [make_frame(4, 3, v) for v in (1, 2, 3)]
        artifact = build_artifact((4, 3), frames)

        assert artifact.kind == ArtifactKind.STRIP
        assert artifact.width == 4
        assert artifact.height == 9
        assert artifact.frame_count == 3
        assert artifact.size_key == (4, 3)
        assert len(artifact.pixels) == 4 * 9 * 4

        row_bytes = 4 * 4
        # Top row belongs to the first frame, bottom row to the last
        assert artifact.pixels[:row_bytes] == bytes([1]) * row_bytes
        assert artifact.pixels[-row_bytes:] == bytes([3]) * row_bytes

    @pytest.mark.fast
    def test_frame_at(self):
        frames = [make_frame(2, 2, v) for v in (10, 20)]
        artifact = build_artifact("2x2", frames)

        assert artifact.frame_at(0) == frames[0].pixels
        assert artifact.frame_at(1) == frames[1].pixels
        with pytest.raises(IndexError):
            artifact.frame_at(2)

    @pytest.mark.fast
    def test_two_frames_is_a_strip(self):
        artifact = build_artifact((1, 1), [make_frame(1, 1, 0), make_frame(1, 1, 1)])
        assert artifact.kind == ArtifactKind.STRIP
        assert artifact.height == 2

    @pytest.mark.fast
    def test_empty_group(self):
        with pytest.raises(GroupError) as exc_info:
            build_artifact((2, 2), [])
        assert exc_info.value.kind == IssueKind.EMPTY_GROUP
        assert exc_info.value.size_key == "2x2"

    @pytest.mark.fast
    def test_mismatched_frame_size(self):
        with pytest.raises(GroupError) as exc_info:
            build_artifact((2, 2), [make_frame(2, 2, 0), make_frame(3, 3, 0)])
        assert exc_info.value.kind == IssueKind.INVALID_SIZE_KEY

    @pytest.mark.fast
    def test_invalid_key(self):
        with pytest.raises(GroupError) as exc_info:
            build_artifact("big", [make_frame(1, 1, 0)])
        assert exc_info.value.kind == IssueKind.INVALID_SIZE_KEY
