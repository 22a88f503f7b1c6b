import logging
import struct
from dataclasses import dataclass

from .constants import (
    QOI_DIMENSION_MAX,
    QOI_END_MARKER,
    QOI_HEADER_FORMAT,
    QOI_HEADER_SIZE,
    QOI_LINEAR,
    QOI_MAGIC,
    QOI_SRGB,
)
from .errors import (
    BadTrailerError,
    DimensionOverflowError,
    MalformedMagicError,
    TruncatedStreamError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Header:
    """
    The 14-byte QOI header.

    ``channels`` and ``colorspace`` are informational: decoding always yields
    four channels.
    """

    width: int
    height: int
    channels: int = 4
    colorspace: int = QOI_LINEAR

    color_model = "RGBA"

    @property
    def total_pixels(self) -> int:
        return self.width * self.height

    def pack(self) -> bytes:
        if not (0 <= self.width <= QOI_DIMENSION_MAX and 0 <= self.height <= QOI_DIMENSION_MAX):
            raise DimensionOverflowError(self.width, self.height)
        # > : Big Endian, 4s: magic, I: u32 width/height, B: channels/colorspace
        return struct.pack(
            QOI_HEADER_FORMAT,
            QOI_MAGIC,
            self.width,
            self.height,
            self.channels,
            self.colorspace,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "Header":
        # A wrong magic takes precedence over a short header
        magic = bytes(data[: len(QOI_MAGIC)])
        if len(magic) == len(QOI_MAGIC) and magic != QOI_MAGIC:
            raise MalformedMagicError(magic)
        if len(data) < QOI_HEADER_SIZE:
            raise TruncatedStreamError("header", QOI_HEADER_SIZE, len(data))

        _, width, height, channels, colorspace = struct.unpack(
            QOI_HEADER_FORMAT, data[:QOI_HEADER_SIZE]
        )

        if channels not in (3, 4):
            logger.warning("QOI header declares %d channels, decoding as 4", channels)
        if colorspace not in (QOI_LINEAR, QOI_SRGB):
            logger.warning("QOI header declares unknown colorspace %d", colorspace)

        return cls(width, height, channels, colorspace)


def read_full(stream, n: int) -> bytes:
    """Read up to ``n`` bytes, retrying short reads until EOF."""
    data = b""
    while len(data) < n:
        chunk = stream.read(n - len(data))
        if not chunk:
            break
        data += chunk
    return data


def read_exact(stream, n: int, what: str, x: int = None, y: int = None) -> bytes:
    """Read exactly ``n`` bytes or raise TruncatedStreamError."""
    data = read_full(stream, n)
    if len(data) < n:
        raise TruncatedStreamError(what, n, len(data), x, y)
    return data


def read_header(stream) -> Header:
    return Header.unpack(read_full(stream, QOI_HEADER_SIZE))


def check_end_marker(stream) -> None:
    trailer = read_exact(stream, len(QOI_END_MARKER), "end marker")
    if trailer != QOI_END_MARKER:
        raise BadTrailerError(trailer)
