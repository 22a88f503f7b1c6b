from typing import Optional

from .constants import QOI_CACHE_SIZE
from .raster import Pixel


def color_hash(pixel) -> int:
    """Calculates the index position of a pixel in the color cache."""
    r, g, b, a = pixel
    return ((r * 3 + g * 5 + b * 7 + a * 11) & 0xFF) % QOI_CACHE_SIZE


class ColorCache:
    """
    The 64-slot array of recently seen pixels.

    Slots start as the zero pixel (0, 0, 0, 0). A lookup only succeeds when
    the slot holds exactly the queried pixel; a different pixel with the same
    hash is a miss.
    """

    def __init__(self):
        self._slots = [Pixel()] * QOI_CACHE_SIZE

    def __getitem__(self, index: int) -> Pixel:
        return self._slots[index]

    def insert(self, pixel: Pixel) -> None:
        self._slots[color_hash(pixel)] = pixel

    def lookup(self, pixel: Pixel) -> Optional[int]:
        index = color_hash(pixel)
        if self._slots[index] != pixel:
            return None
        return index
