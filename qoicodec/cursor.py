"""
Sequential traversal of a raster: reading pixels while encoding and writing
them while decoding. Both walk the pixels in row-major order.
"""

from typing import Optional

from .raster import Pixel, Raster


class PixelReader:
    """Encode-side cursor exposing the current pixel of a raster."""

    def __init__(self, raster: Raster):
        self.raster = raster
        self.position = 0
        self.total = len(raster)

    @property
    def done(self) -> bool:
        return self.position >= self.total

    @property
    def current(self) -> Optional[Pixel]:
        if self.done:
            return None
        i = self.position * 4
        return Pixel(*self.raster.pix[i : i + 4])

    @property
    def x(self) -> int:
        return self.position % self.raster.width if self.raster.width else 0

    @property
    def y(self) -> int:
        return self.position // self.raster.width if self.raster.width else 0

    def advance(self, n: int = 1) -> None:
        self.position = min(self.position + n, self.total)

    def run_length(self, pixel: Pixel, limit: int) -> int:
        """
        Count consecutive pixels equal to ``pixel``, starting at the current
        position, without moving the cursor. Stops at ``limit``.
        """
        pix = self.raster.pix
        target = bytes(pixel)
        i = self.position * 4
        end = self.total * 4
        run = 0
        while run < limit and i < end and pix[i : i + 4] == target:
            run += 1
            i += 4
        return run


class PixelWriter:
    """Decode-side cursor filling a raster as pixels are produced."""

    def __init__(self, raster: Raster):
        self.raster = raster
        self.position = 0
        self.total = len(raster)

    @property
    def remaining(self) -> int:
        return self.total - self.position

    @property
    def x(self) -> int:
        return self.position % self.raster.width if self.raster.width else 0

    @property
    def y(self) -> int:
        return self.position // self.raster.width if self.raster.width else 0

    def put(self, pixel: Pixel, count: int = 1) -> int:
        """
        Write ``pixel`` ``count`` times at the cursor and advance past it.

        Writes are clipped to the end of the pixel buffer; the number of
        pixels actually written is returned.
        """
        written = min(count, self.remaining)
        if written <= 0:
            return 0
        start = self.position * 4
        self.raster.pix[start : start + written * 4] = bytes(pixel) * written
        self.position += written
        return written
