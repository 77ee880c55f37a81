import struct
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Synthetic Xcursor containers
# ---------------------------------------------------------------------------
# Files are laid out as: 16 byte header, ntoc * 12 byte TOC, then every chunk
# back to back in the order given.
# ---------------------------------------------------------------------------

XCURSOR_MAGIC = b"Xcur"
IMAGE_TYPE = 0xFFFD0002
COMMENT_TYPE = 0xFFFE0001


def _image_chunk(
    width: int,
    height: int,
    bgra: bytes | None = None,
    xhot: int = 0,
    yhot: int = 0,
    delay: int = 0,
    nominal: int | None = None,
) -> bytes:
    if bgra is None:
        bgra = bytes(range(4)) * max(width * height, 0)
    header = struct.pack(
        "<IIIIiiiiI",
        36,
        IMAGE_TYPE,
        nominal if nominal is not None else max(width, 0),
        1,
        width,
        height,
        xhot,
        yhot,
        delay,
    )
    return header + bgra


def _comment_chunk(text: str = "made by tests") -> bytes:
    payload = text.encode("utf-8")
    return struct.pack("<IIIII", 20, COMMENT_TYPE, 1, 1, len(payload)) + payload


def build_cursor(chunks: list[tuple[int, bytes]], ntoc: int | None = None) -> bytes:
    """Assemble a container from (chunk_type, chunk_bytes) pairs."""
    count = len(chunks)
    declared = count if ntoc is None else ntoc
    header = XCURSOR_MAGIC + struct.pack("<III", 16, 0x10000, declared)

    toc = b""
    body = b""
    position = 16 + count * 12
    for chunk_type, data in chunks:
        toc += struct.pack("<III", chunk_type, 0, position)
        body += data
        position += len(data)
    return header + toc + body


def image(width: int, height: int, **kwargs) -> tuple[int, bytes]:
    return (IMAGE_TYPE, _image_chunk(width, height, **kwargs))


def comment(text: str = "made by tests") -> tuple[int, bytes]:
    return (COMMENT_TYPE, _comment_chunk(text))


def solid_bgra(width: int, height: int, b: int, g: int, r: int, a: int = 255) -> bytes:
    return bytes([b, g, r, a]) * (width * height)


@pytest.fixture
def cursor_factory():
    """Access to the synthetic container helpers."""

    class _Factory:
        build = staticmethod(build_cursor)
        image = staticmethod(image)
        comment = staticmethod(comment)
        solid_bgra = staticmethod(solid_bgra)

    return _Factory


@pytest.fixture
def end_to_end_bytes() -> bytes:
    """One 2x1 image at position 28 with known BGRA pixels."""
    return (
        XCURSOR_MAGIC
        + bytes(8)
        + struct.pack("<I", 1)
        + struct.pack("<III", IMAGE_TYPE, 0, 28)
        + struct.pack("<IIIIiiiiI", 36, IMAGE_TYPE, 2, 1, 2, 1, 0, 0, 0)
        + bytes([10, 20, 30, 255, 40, 50, 60, 255])
    )


@pytest.fixture
def cursor_dir(tmp_path: Path) -> Path:
    """A small theme tree with a static cursor, an animated cursor and noise."""
    cursors = tmp_path / "cursor"
    cursors.mkdir()

    (cursors / "left_ptr").write_bytes(
        build_cursor([
            image(2, 2, bgra=solid_bgra(2, 2, 0, 0, 255)),
            image(4, 4, bgra=solid_bgra(4, 4, 255, 0, 0)),
        ])
    )
    (cursors / "wait").write_bytes(
        build_cursor([
            image(2, 2, bgra=solid_bgra(2, 2, i, i, i), delay=50) for i in range(30)
        ])
    )
    (cursors / "index.theme").write_text("[Icon Theme]\nName=test\n")
    (cursors / "preview.png").write_bytes(b"not really a png")
    (cursors / "broken").write_bytes(b"this is not a cursor")
    return tmp_path
