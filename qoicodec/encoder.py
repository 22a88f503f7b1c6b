import io
import logging

from .cache import ColorCache
from .chunks import select_chunk
from .constants import QOI_END_MARKER, QOI_LINEAR, QOI_WRITE_BUFFER
from .cursor import PixelReader
from .header import Header
from .raster import Pixel
from .utils import to_raster

logger = logging.getLogger(__name__)


def write_all(sink, data) -> int:
    """Write all of ``data``, retrying partial writes from raw streams."""
    view = memoryview(data)
    while view:
        n = sink.write(view)
        # Buffered and text-like sinks may return None after a complete write
        if n is None:
            break
        view = view[n:]
    return len(data)


class QOIEncoder:
    @staticmethod
    def encode(source, description: dict = None) -> bytes:
        """
        Encode an image into the QOI format.

        :param source: Pixel source accepted by ``to_raster`` (Raster, Pillow image, numpy array,
                       or raw bytes with a description).
        :param description: Dictionary containing 'width', 'height', 'channels' when source is raw bytes.
        :return: bytes object containing the QOI file content.
        """
        buf = io.BytesIO()
        QOIEncoder.write(source, buf, description)
        return buf.getvalue()

    @staticmethod
    def write(source, sink, description: dict = None) -> int:
        """
        Encode an image and write it to a binary file-like object.

        :param source: Pixel source accepted by ``to_raster``.
        :param sink: Object with a ``write(bytes)`` method.
        :param description: Dictionary containing 'width', 'height', 'channels' when source is raw bytes.
        :return: Number of bytes written.
        """
        raster = to_raster(source, description)

        # --- Header ---
        # Raises DimensionOverflowError before anything reaches the sink
        header = Header(raster.width, raster.height, raster.channels, QOI_LINEAR)
        result = bytearray(header.pack())
        written = 0

        # --- Encoding State ---
        cache = ColorCache()
        previous = Pixel(0, 0, 0, 255)
        reader = PixelReader(raster)
        stats = {}

        # --- Pixel Loop ---
        while not reader.done:
            seen = reader.current
            chunk = select_chunk(reader, cache, previous)
            result.extend(chunk.to_bytes())
            reader.advance(chunk.pixels)

            # The last pixel a chunk covers becomes the new state
            cache.insert(seen)
            previous = seen

            name = type(chunk).__name__
            stats[name] = stats.get(name, 0) + 1

            if len(result) >= QOI_WRITE_BUFFER:
                write_all(sink, result)
                written += len(result)
                result = bytearray()

        # --- End Marker ---
        result.extend(QOI_END_MARKER)
        write_all(sink, result)
        written += len(result)

        logger.debug(
            "Encoded %dx%d image into %d bytes, chunks: %s",
            raster.width,
            raster.height,
            written,
            stats,
        )
        return written
