"""Reading and run-length packing of 256-colour PCX images."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path

HEADER_SIZE = 128
PALETTE_COLORS = 256
PALETTE_BYTES = 3 * PALETTE_COLORS
MAX_WIDTH = 320
MAX_HEIGHT = 200
SUPPORTED_VERSION = 5
MAX_RUN = 127

_HEADER = struct.Struct("<4B6h48s2B2h58s")


class PcxError(Exception):
    """Raised when a PCX image cannot be read or is not supported."""


@dataclass(frozen=True)
class PcxHeader:
    """The fixed 128-byte header at the start of a PCX file."""

    manufacturer: int
    version: int
    encoding: int
    bits_per_pixel: int
    xmin: int
    ymin: int
    xmax: int
    ymax: int
    hres: int
    vres: int
    palette16: bytes
    reserved: int
    color_planes: int
    bytes_per_line: int
    palette_type: int
    filler: bytes

    @classmethod
    def from_bytes(cls, data):
        """Decode a header from the first 128 bytes of ``data``."""
        if len(data) < HEADER_SIZE:
            raise PcxError(
                f"PCX header needs {HEADER_SIZE} bytes, got {len(data)}"
            )
        return cls(*_HEADER.unpack_from(bytes(data[:HEADER_SIZE])))


def _dimensions(header):
    return header.xmax - header.xmin + 1, header.ymax - header.ymin + 1


@dataclass(frozen=True)
class PcxImage:
    """A decoded image: header, one byte per pixel and a 6-bit VGA palette."""

    header: PcxHeader
    pixels: bytes
    palette: bytes

    @property
    def width(self):
        return _dimensions(self.header)[0]

    @property
    def height(self):
        return _dimensions(self.header)[1]


def decode_rle(data, size):
    """Expand PCX run-length data into exactly ``size`` pixel bytes.

    A byte above 0xBF announces a run whose length is its low six bits
    (a length of zero stands for 256); the next byte is the repeated
    value. Missing data leaves the rest of the image zero.
    """
    out = bytearray()
    stream = iter(data)
    while len(out) < size:
        byte = next(stream, None)
        if byte is None:
            break
        if byte > 0xBF:
            count = (byte & 0x3F) or 256
            value = next(stream, None)
            if value is None:
                break
            out.extend(bytes((value,)) * min(count, size - len(out)))
        else:
            out.append(byte)
    out.extend(bytes(size - len(out)))
    return bytes(out)


def parse_pcx(data):
    """Decode a complete PCX file held in memory."""
    data = bytes(data)
    header = PcxHeader.from_bytes(data)
    width, height = _dimensions(header)
    if width > MAX_WIDTH:
        raise PcxError(f"image width {width} exceeds {MAX_WIDTH}")
    if height > MAX_HEIGHT:
        raise PcxError(f"image height {height} exceeds {MAX_HEIGHT}")
    if header.version != SUPPORTED_VERSION:
        raise PcxError(f"unsupported PCX version {header.version}")
    if width <= 0 or height <= 0:
        raise PcxError(f"invalid image size {width}x{height}")
    if len(data) < PALETTE_BYTES:
        raise PcxError("file too short to hold a 256-colour palette")
    pixels = decode_rle(data[HEADER_SIZE:], width * height)
    palette = bytes(component >> 2 for component in data[-PALETTE_BYTES:])
    return PcxImage(header=header, pixels=pixels, palette=palette)


def load_pcx(path):
    """Read and decode the PCX file at ``path``."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise PcxError(f"cannot open {path}: {exc}") from exc
    return parse_pcx(data)


def compress_image(pixels):
    """Pack pixels into runs of at most 127 bytes.

    A run of zeros becomes ``128 + length`` followed by a zero byte; a run
    of non-zero pixels becomes its length followed by the pixels themselves.
    """
    pixels = bytes(pixels)
    total = len(pixels)
    out = bytearray()
    pos = 0
    while pos < total:
        transparent = pixels[pos] == 0
        end = pos
        while (
            end < total
            and (pixels[end] == 0) == transparent
            and end - pos < MAX_RUN
        ):
            end += 1
        if transparent:
            out += bytes((end - pos + 128, 0))
        else:
            out.append(end - pos)
            out += pixels[pos:end]
        pos = end
    return bytes(out)