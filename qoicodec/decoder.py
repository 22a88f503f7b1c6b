import io
import logging

from .cache import ColorCache
from .chunks import chunk_kind
from .constants import QOI_PIXELS_MAX
from .cursor import PixelWriter
from .errors import DimensionOverflowError
from .header import Header, check_end_marker, read_exact, read_header
from .raster import Pixel, Raster

logger = logging.getLogger(__name__)


def _as_stream(source):
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(source)
    return source


class QOIDecoder:
    """
    A class to decode QOI (Quite OK Image) files into raw pixel data.
    """

    @staticmethod
    def decode_config(source) -> Header:
        """
        Read only the header of a QOI file.

        :param source: Bytes containing the QOI file, or a binary file-like object.
        :return: Header with width, height, channels and colorspace.
        """
        return read_header(_as_stream(source))

    @staticmethod
    def decode(source, max_pixels: int = QOI_PIXELS_MAX) -> Raster:
        """
        Decode a QOI file.

        :param source: Bytes containing the QOI file, or a binary file-like object.
        :param max_pixels: Refuse images declaring more pixels than this.
        :return: Raster of the declared dimensions; ``channels`` echoes the header.
        """
        stream = _as_stream(source)

        # --- Header Parsing ---
        header = read_header(stream)
        if max_pixels is not None and header.total_pixels > max_pixels:
            raise DimensionOverflowError(
                header.width, header.height, f"exceeds the limit of {max_pixels} pixels"
            )
        logger.debug(
            "Decoding %dx%d image (channels=%d, colorspace=%d)",
            header.width,
            header.height,
            header.channels,
            header.colorspace,
        )

        # --- Initialization ---
        raster = Raster(header.width, header.height, channels=header.channels)
        writer = PixelWriter(raster)
        cache = ColorCache()
        previous = Pixel(0, 0, 0, 255)

        # --- Decoding Loop ---
        while writer.remaining > 0:
            x, y = writer.x, writer.y
            try:
                first = read_exact(stream, 1, "chunk", x, y)
                kind = chunk_kind(first[0])
                if kind.SIZE > 1:
                    first += read_exact(stream, kind.SIZE - 1, "chunk", x, y)
            except OSError:
                logger.error("I/O error decoding chunk starting at {x: %d, y: %d}", x, y)
                raise

            chunk = kind.from_bytes(first)
            previous = chunk.apply(previous, cache)
            written = writer.put(previous, chunk.pixels)
            if written < chunk.pixels:
                logger.debug(
                    "Run of %d clipped to %d pixels at the end of the image",
                    chunk.pixels,
                    written,
                )
            cache.insert(previous)

        # --- End Marker ---
        check_end_marker(stream)

        return raster
