from .constants import QOI_PIXELS_MAX
from .decoder import QOIDecoder
from .encoder import QOIEncoder
from .header import Header
from .raster import Raster


class QOI:
    """Convenience entry points over QOIEncoder and QOIDecoder."""

    @staticmethod
    def encode(source, description: dict = None) -> bytes:
        return QOIEncoder.encode(source, description)

    @staticmethod
    def decode(data, max_pixels: int = QOI_PIXELS_MAX) -> Raster:
        return QOIDecoder.decode(data, max_pixels)

    @staticmethod
    def peek(data) -> Header:
        """Read width, height and channels without decoding any pixels."""
        return QOIDecoder.decode_config(data)

    @staticmethod
    def read(path, max_pixels: int = QOI_PIXELS_MAX) -> Raster:
        with open(path, "rb") as f:
            return QOIDecoder.decode(f, max_pixels)

    @staticmethod
    def write(path, source, description: dict = None) -> int:
        """
        Encode ``source`` into the file at ``path``.

        :return: Number of bytes written.
        """
        with open(path, "wb") as f:
            return QOIEncoder.write(source, f, description)
