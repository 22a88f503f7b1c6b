import pytest

from qoicodec.cache import ColorCache
from qoicodec.chunks import (
    OpDiff,
    OpIndex,
    OpLuma,
    OpRGB,
    OpRGBA,
    OpRun,
    chunk_kind,
    select_chunk,
    signed_delta,
)
from qoicodec.cursor import PixelReader, PixelWriter
from qoicodec.raster import Pixel, Raster

OPAQUE_BLACK = Pixel(0, 0, 0, 255)


def raster_of(*pixels, width=None):
    width = len(pixels) if width is None else width
    data = bytes(c for p in pixels for c in p)
    return Raster.from_bytes(data, width, len(pixels) // width)


@pytest.mark.parametrize(
    "current, previous, expected",
    [
        (255, 0, -1),
        (0, 255, 1),
        (0, 2, -2),
        (127, 0, 127),
        (128, 0, -128),
        (100, 100, 0),
    ],
)
def test_signed_delta(current, previous, expected):
    assert signed_delta(current, previous) == expected


@pytest.mark.parametrize(
    "b1, kind",
    [
        (0xFE, OpRGB),
        (0xFF, OpRGBA),
        (0xC0, OpRun),
        (0xFD, OpRun),
        (0x00, OpIndex),
        (0x3F, OpIndex),
        (0x40, OpDiff),
        (0x7F, OpDiff),
        (0x80, OpLuma),
        (0xBF, OpLuma),
    ],
)
def test_chunk_kind(b1, kind):
    assert chunk_kind(b1) is kind


def test_wire_layouts():
    assert OpRun(1).to_bytes() == b"\xc0"
    assert OpRun(62).to_bytes() == b"\xfd"
    assert OpIndex(53).to_bytes() == b"\x35"
    assert OpDiff(-1, -1, -1).to_bytes() == b"\x55"
    assert OpDiff(-2, 1, -2).to_bytes() == b"\x4c"
    assert OpLuma(-32, 7, -8).to_bytes() == b"\x80\xf0"
    assert OpRGB(1, 2, 3).to_bytes() == b"\xfe\x01\x02\x03"
    assert OpRGBA(1, 2, 3, 4).to_bytes() == b"\xff\x01\x02\x03\x04"


def test_from_bytes_reads_wire_layouts():
    assert OpRun.from_bytes(b"\xfd") == OpRun(62)
    assert OpIndex.from_bytes(b"\x35") == OpIndex(53)
    assert OpDiff.from_bytes(b"\x77") == OpDiff(1, -1, 1)
    assert OpLuma.from_bytes(b"\xbf\x88") == OpLuma(31, 0, 0)
    assert OpRGB.from_bytes(b"\xfe\x0a\x14\x1e") == OpRGB(10, 20, 30)
    assert OpRGBA.from_bytes(b"\xff\x0a\x14\x1e\x80") == OpRGBA(10, 20, 30, 128)


def test_apply_wraps_around():
    cache = ColorCache()
    assert OpDiff(-1, -1, -1).apply(OPAQUE_BLACK, cache) == (255, 255, 255, 255)
    assert OpDiff(1, 1, 1).apply(Pixel(255, 255, 255, 7), cache) == (0, 0, 0, 7)
    assert OpLuma(-16, 0, 0).apply(OPAQUE_BLACK, cache) == (240, 240, 240, 255)
    assert OpLuma(31, 7, -8).apply(Pixel(250, 250, 250, 1), cache) == (32, 25, 17, 1)


def test_apply_keeps_previous_alpha():
    cache = ColorCache()
    previous = Pixel(1, 2, 3, 99)
    assert OpRGB(7, 8, 9).apply(previous, cache) == (7, 8, 9, 99)
    assert OpRun(5).apply(previous, cache) == previous
    assert OpRGBA(7, 8, 9, 10).apply(previous, cache) == (7, 8, 9, 10)


def test_index_reads_cache_slot():
    cache = ColorCache()
    cache.insert(OPAQUE_BLACK)
    assert OpIndex(53).apply(Pixel(1, 1, 1, 1), cache) == OPAQUE_BLACK


def test_select_chunk_prefers_run():
    reader = PixelReader(raster_of(OPAQUE_BLACK, OPAQUE_BLACK, Pixel(1, 1, 1, 255)))
    cache = ColorCache()
    cache.insert(OPAQUE_BLACK)
    assert select_chunk(reader, cache, OPAQUE_BLACK) == OpRun(2)
    # The reader does not move until the encoder advances it
    assert reader.position == 0


def test_select_chunk_prefers_index_over_diff():
    pixel = Pixel(1, 1, 1, 255)
    cache = ColorCache()
    cache.insert(pixel)
    reader = PixelReader(raster_of(pixel))
    assert select_chunk(reader, cache, OPAQUE_BLACK) == OpIndex(cache.lookup(pixel))


def test_select_chunk_falls_back_in_order():
    cache = ColorCache()
    previous = Pixel(100, 100, 100, 255)

    def pick(pixel):
        return select_chunk(PixelReader(raster_of(pixel)), cache, previous)

    assert pick(Pixel(98, 101, 98, 255)) == OpDiff(-2, 1, -2)
    assert pick(Pixel(97, 100, 100, 255)) == OpLuma(0, -3, 0)
    assert pick(Pixel(132, 132, 132, 255)) == OpRGB(132, 132, 132)
    assert pick(Pixel(100, 100, 100, 254)) == OpRGBA(100, 100, 100, 254)


def test_reader_run_length_is_capped():
    reader = PixelReader(raster_of(*[OPAQUE_BLACK] * 70))
    assert reader.run_length(OPAQUE_BLACK, 62) == 62
    reader.advance(62)
    assert reader.run_length(OPAQUE_BLACK, 62) == 8
    reader.advance(8)
    assert reader.done
    assert reader.current is None
    assert reader.run_length(OPAQUE_BLACK, 62) == 0


def test_reader_position_wraps_rows():
    reader = PixelReader(raster_of(*[OPAQUE_BLACK] * 6, width=3))
    reader.advance(4)
    assert (reader.x, reader.y) == (1, 1)


def test_writer_clips_at_end_of_raster():
    raster = Raster(2, 2)
    writer = PixelWriter(raster)
    assert writer.put(OPAQUE_BLACK, 3) == 3
    assert (writer.x, writer.y) == (1, 1)
    assert writer.put(Pixel(9, 9, 9, 9), 62) == 1
    assert writer.remaining == 0
    assert writer.put(Pixel(1, 1, 1, 1)) == 0
    assert raster.pixel(1, 1) == (9, 9, 9, 9)
    assert len(raster.pix) == 16
