import pytest
import struct
import sys
import zlib
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import cutout
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


@pytest.fixture
def make_image(tmp_path: Path):
    """Factory writing a solid RGB image into tmp_path."""
    def _make(name: str = "sample.png", size=(200, 100), color="white") -> Path:
        img_path = tmp_path / name
        Image.new("RGB", size, color=color).save(img_path)
        return img_path
    return _make


@pytest.fixture
def sample_image(make_image):
    """Create a simple 200x100 test image."""
    return make_image()


@pytest.fixture
def row_striped_image(tmp_path: Path):
    """10x10 PNG whose row r has red channel r * 10, for checking which rows were cropped."""
    img = Image.new("RGB", (10, 10))
    for y in range(10):
        for x in range(10):
            img.putpixel((x, y), (y * 10, x * 10, 0))
    img_path = tmp_path / "striped.png"
    img.save(img_path)
    return img_path


def _png_chunk(cid: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + cid + data + struct.pack(">I", zlib.crc32(cid + data))


@pytest.fixture
def make_corrupt_png(tmp_path: Path):
    """
    Factory writing a 64x64 PNG with a valid header whose pixel data breaks off.

    Only half of the compressed stream is kept and it is followed by a chunk
    with an invalid type, so Image.open() succeeds but load() fails.
    """
    def _make(name: str = "corrupt.png") -> Path:
        good = tmp_path / f".{name}.source.png"
        img = Image.new("RGB", (64, 64))
        for y in range(64):
            for x in range(64):
                img.putpixel((x, y), ((x * 7) % 256, (y * 13) % 256, (x * y) % 256))
        img.save(good)
        raw = good.read_bytes()
        good.unlink()

        ihdr = b""
        idat = b""
        pos = 8
        while pos < len(raw):
            length, cid = struct.unpack(">I4s", raw[pos:pos + 8])
            data = raw[pos + 8:pos + 8 + length]
            if cid == b"IHDR":
                ihdr = data
            elif cid == b"IDAT":
                idat += data
            pos += 12 + length

        broken = (
            raw[:8]
            + _png_chunk(b"IHDR", ihdr)
            + _png_chunk(b"IDAT", idat[:len(idat) // 2])
            + struct.pack(">I", 16) + b"\xc8END"
        )
        path = tmp_path / name
        path.write_bytes(broken)
        return path
    return _make
