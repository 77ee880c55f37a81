"""Tests for xcurlab.grouping module."""

import pytest

from xcurlab.error_handling import GroupError, IssueKind
from xcurlab.grouping import format_size_key, group_frames, parse_size_key
from xcurlab.xcursor import Frame


def make_frame(width: int, height: int, tag: int = 0, delay: int = 0, xhot: int = 0) -> Frame:
    return Frame(
        width=width,
        height=height,
        xhot=xhot,
        yhot=0,
        delay=delay,
        pixels=bytes([tag % 256]) * (width * height * 4),
    )


class TestGroupFrames:
    """Tests for group_frames function."""

    @pytest.mark.fast
    def test_interleaved_sizes_keep_order(self):
        frames = [
            make_frame(32, 32, tag=1),
            make_frame(48, 48, tag=2),
            make_frame(32, 32, tag=3),
            make_frame(24, 24, tag=4),
            make_frame(32, 32, tag=5),
        ]
        groups = group_frames(frames)

        assert list(groups) == [(32, 32), (48, 48), (24, 24)]
        assert [f.pixels[0] for f in groups[(32, 32)]] == [1, 3, 5]
        assert groups[(32, 32)][0] is frames[0]

    @pytest.mark.fast
    def test_hotspot_and_delay_do_not_split_groups(self):
        frames = [
            make_frame(16, 16, delay=10, xhot=0),
            make_frame(16, 16, delay=90, xhot=7),
        ]
        assert len(group_frames(frames)[(16, 16)]) == 2

    @pytest.mark.fast
    def test_width_and_height_both_matter(self):
        groups = group_frames([make_frame(2, 4), make_frame(4, 2)])
        assert set(groups) == {(2, 4), (4, 2)}

    @pytest.mark.fast
    def test_empty_input(self):
        assert group_frames([]) == {}

    @pytest.mark.fast
    def test_fresh_mapping_each_call(self):
        frames = [make_frame(1, 1)]
        first = group_frames(frames)
        second = group_frames(frames)
        first[(1, 1)].append(make_frame(1, 1))
        assert len(second[(1, 1)]) == 1


class TestSizeKeys:
    """Tests for size key formatting and parsing."""

    @pytest.mark.fast
    def test_format(self):
        assert format_size_key((32, 48)) == "32x48"

    @pytest.mark.fast
    def test_parse_string(self):
        assert parse_size_key("32x48") == (32, 48)

    @pytest.mark.fast
    def test_parse_tuple(self):
        assert parse_size_key((5, 6)) == (5, 6)

    @pytest.mark.fast
    @pytest.mark.parametrize("value", ["32", "axb", "0x4", "4x-1", "1x2x3", (0, 1), (1,), None])
    def test_invalid_keys(self, value):
        with pytest.raises(GroupError) as exc_info:
            parse_size_key(value)
        assert exc_info.value.kind == IssueKind.INVALID_SIZE_KEY
