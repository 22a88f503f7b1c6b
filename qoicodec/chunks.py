"""
The six QOI chunk encodings.

Every chunk class knows its applicability rule (``match``), its wire layout
(``to_bytes`` / ``from_bytes``) and how it rebuilds a pixel from the previous
pixel and the color cache (``apply``). The set is closed: ``select_chunk``
tries them in the fixed priority order and ``chunk_kind`` maps a tag byte back
to its class.
"""

from dataclasses import dataclass
from typing import Optional

from .cache import ColorCache
from .constants import (
    QOI_MASK_2,
    QOI_OP_DIFF,
    QOI_OP_INDEX,
    QOI_OP_LUMA,
    QOI_OP_RGB,
    QOI_OP_RGBA,
    QOI_OP_RUN,
    QOI_RUN_MAX,
)
from .cursor import PixelReader
from .raster import Pixel


def signed_delta(current: int, previous: int) -> int:
    """Byte-wrapped difference reinterpreted as a signed 8-bit value (-128..127)."""
    d = (current - previous) & 0xFF
    return d - 256 if d > 127 else d


@dataclass(frozen=True)
class OpRun:
    """Repeat the previous pixel ``length`` times (1..62)."""

    length: int

    SIZE = 1

    @property
    def pixels(self) -> int:
        return self.length

    @classmethod
    def match(cls, reader: PixelReader, previous: Pixel) -> Optional["OpRun"]:
        run = reader.run_length(previous, QOI_RUN_MAX)
        if run == 0:
            return None
        return cls(run)

    @classmethod
    def from_bytes(cls, buf: bytes) -> "OpRun":
        return cls((buf[0] & 0x3F) + 1)

    def to_bytes(self) -> bytes:
        return bytes((QOI_OP_RUN | (self.length - 1),))

    def apply(self, previous: Pixel, cache: ColorCache) -> Pixel:
        return previous


@dataclass(frozen=True)
class OpIndex:
    """Back-reference into the color cache."""

    index: int

    SIZE = 1
    pixels = 1

    @classmethod
    def match(cls, pixel: Pixel, cache: ColorCache) -> Optional["OpIndex"]:
        index = cache.lookup(pixel)
        if index is None:
            return None
        return cls(index)

    @classmethod
    def from_bytes(cls, buf: bytes) -> "OpIndex":
        return cls(buf[0] & 0x3F)

    def to_bytes(self) -> bytes:
        return bytes((QOI_OP_INDEX | self.index,))

    def apply(self, previous: Pixel, cache: ColorCache) -> Pixel:
        return cache[self.index]


@dataclass(frozen=True)
class OpDiff:
    """Small per-channel difference, each of dr, dg, db in -2..1."""

    dr: int
    dg: int
    db: int

    SIZE = 1
    pixels = 1

    @classmethod
    def match(cls, pixel: Pixel, previous: Pixel) -> Optional["OpDiff"]:
        if pixel.a != previous.a:
            return None
        dr = signed_delta(pixel.r, previous.r)
        dg = signed_delta(pixel.g, previous.g)
        db = signed_delta(pixel.b, previous.b)
        if -2 <= dr <= 1 and -2 <= dg <= 1 and -2 <= db <= 1:
            return cls(dr, dg, db)
        return None

    @classmethod
    def from_bytes(cls, buf: bytes) -> "OpDiff":
        b1 = buf[0]
        # Extract 2-bit differences and subtract bias of 2
        return cls(((b1 >> 4) & 0x03) - 2, ((b1 >> 2) & 0x03) - 2, (b1 & 0x03) - 2)

    def to_bytes(self) -> bytes:
        return bytes(
            (QOI_OP_DIFF | ((self.dr + 2) << 4) | ((self.dg + 2) << 2) | (self.db + 2),)
        )

    def apply(self, previous: Pixel, cache: ColorCache) -> Pixel:
        return Pixel(
            (previous.r + self.dr) & 0xFF,
            (previous.g + self.dg) & 0xFF,
            (previous.b + self.db) & 0xFF,
            previous.a,
        )


@dataclass(frozen=True)
class OpLuma:
    """Green difference in -32..31, red and blue relative to it in -8..7."""

    dg: int
    dr_dg: int
    db_dg: int

    SIZE = 2
    pixels = 1

    @classmethod
    def match(cls, pixel: Pixel, previous: Pixel) -> Optional["OpLuma"]:
        if pixel.a != previous.a:
            return None
        dg = signed_delta(pixel.g, previous.g)
        dr_dg = signed_delta(pixel.r, previous.r) - dg
        db_dg = signed_delta(pixel.b, previous.b) - dg
        if -32 <= dg <= 31 and -8 <= dr_dg <= 7 and -8 <= db_dg <= 7:
            return cls(dg, dr_dg, db_dg)
        return None

    @classmethod
    def from_bytes(cls, buf: bytes) -> "OpLuma":
        b1, b2 = buf[0], buf[1]
        return cls((b1 & 0x3F) - 32, ((b2 >> 4) & 0x0F) - 8, (b2 & 0x0F) - 8)

    def to_bytes(self) -> bytes:
        return bytes(
            (
                QOI_OP_LUMA | (self.dg + 32),
                ((self.dr_dg + 8) << 4) | (self.db_dg + 8),
            )
        )

    def apply(self, previous: Pixel, cache: ColorCache) -> Pixel:
        return Pixel(
            (previous.r + self.dg + self.dr_dg) & 0xFF,
            (previous.g + self.dg) & 0xFF,
            (previous.b + self.dg + self.db_dg) & 0xFF,
            previous.a,
        )


@dataclass(frozen=True)
class OpRGB:
    """Raw red, green and blue; alpha carried over from the previous pixel."""

    r: int
    g: int
    b: int

    SIZE = 4
    pixels = 1

    @classmethod
    def match(cls, pixel: Pixel, previous: Pixel) -> Optional["OpRGB"]:
        if pixel.a != previous.a:
            return None
        return cls(pixel.r, pixel.g, pixel.b)

    @classmethod
    def from_bytes(cls, buf: bytes) -> "OpRGB":
        return cls(buf[1], buf[2], buf[3])

    def to_bytes(self) -> bytes:
        return bytes((QOI_OP_RGB, self.r, self.g, self.b))

    def apply(self, previous: Pixel, cache: ColorCache) -> Pixel:
        return Pixel(self.r, self.g, self.b, previous.a)


@dataclass(frozen=True)
class OpRGBA:
    """Raw pixel, always applicable."""

    r: int
    g: int
    b: int
    a: int

    SIZE = 5
    pixels = 1

    @classmethod
    def match(cls, pixel: Pixel) -> "OpRGBA":
        return cls(*pixel)

    @classmethod
    def from_bytes(cls, buf: bytes) -> "OpRGBA":
        return cls(buf[1], buf[2], buf[3], buf[4])

    def to_bytes(self) -> bytes:
        return bytes((QOI_OP_RGBA, self.r, self.g, self.b, self.a))

    def apply(self, previous: Pixel, cache: ColorCache) -> Pixel:
        return Pixel(self.r, self.g, self.b, self.a)


def select_chunk(reader: PixelReader, cache: ColorCache, previous: Pixel):
    """Pick the first applicable chunk for the reader's current position."""
    pixel = reader.current
    chunk = OpRun.match(reader, previous)
    if chunk is None:
        chunk = OpIndex.match(pixel, cache)
    if chunk is None:
        chunk = OpDiff.match(pixel, previous)
    if chunk is None:
        chunk = OpLuma.match(pixel, previous)
    if chunk is None:
        chunk = OpRGB.match(pixel, previous)
    if chunk is None:
        chunk = OpRGBA.match(pixel)
    return chunk


def chunk_kind(b1: int):
    """Classify a chunk by its first byte."""
    # The 8-bit tags take precedence over the 2-bit QOI_OP_RUN tag
    if b1 == QOI_OP_RGB:
        return OpRGB
    if b1 == QOI_OP_RGBA:
        return OpRGBA

    op = b1 & QOI_MASK_2
    if op == QOI_OP_INDEX:
        return OpIndex
    if op == QOI_OP_DIFF:
        return OpDiff
    if op == QOI_OP_LUMA:
        return OpLuma
    return OpRun
