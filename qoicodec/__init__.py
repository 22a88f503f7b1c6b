from .cache import ColorCache
from .decoder import QOIDecoder
from .encoder import QOIEncoder
from .errors import (
    BadTrailerError,
    DimensionOverflowError,
    MalformedMagicError,
    QOIError,
    TruncatedStreamError,
)
from .header import Header
from .qoi import QOI
from .raster import Pixel, Raster
from .utils import load_image, save_image

__all__ = [
    "QOIEncoder",
    "QOIDecoder",
    "QOI",
    "Header",
    "Pixel",
    "Raster",
    "ColorCache",
    "QOIError",
    "MalformedMagicError",
    "TruncatedStreamError",
    "BadTrailerError",
    "DimensionOverflowError",
    "load_image",
    "save_image",
]
