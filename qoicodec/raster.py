from typing import NamedTuple

import numpy as np
from PIL import Image


class Pixel(NamedTuple):
    """Non-premultiplied 8-bit RGBA pixel."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0


class Raster:
    """
    Row-major RGBA pixel buffer.

    Pixels are always stored with four channels. ``channels`` only records
    whether the source had an alpha channel (3 or 4), which the encoder writes
    into the header and the decoder reads back from it.
    """

    def __init__(self, width: int, height: int, pix: bytearray = None, channels: int = 4):
        if width < 0 or height < 0:
            raise ValueError(f"Raster: invalid size {width}x{height}")
        if pix is None:
            pix = bytearray(width * height * 4)
        elif len(pix) != width * height * 4:
            raise ValueError("Raster: the length of pix does not match the dimensions")
        self.width = width
        self.height = height
        self.pix = pix
        self.channels = channels

    def __repr__(self) -> str:
        return f"Raster(width={self.width}, height={self.height}, channels={self.channels})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Raster):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.pix == other.pix
        )

    def __len__(self) -> int:
        return self.width * self.height

    def pix_offset(self, x: int, y: int) -> int:
        return (y * self.width + x) * 4

    def pixel(self, x: int, y: int) -> Pixel:
        i = self.pix_offset(x, y)
        return Pixel(*self.pix[i : i + 4])

    def pixels(self):
        """Iterate over all pixels in row-major order."""
        pix = self.pix
        for i in range(0, len(pix), 4):
            yield Pixel(*pix[i : i + 4])

    # --- Conversions ---

    @classmethod
    def from_bytes(cls, color_data, width: int, height: int, channels: int = 4) -> "Raster":
        """
        Build a raster from packed RGB or RGBA bytes.

        :param color_data: Bytes-like object (bytes, bytearray, list of ints) containing pixel data.
        :param channels: 3 (RGB, alpha is filled with 255) or 4 (RGBA).
        """
        if channels not in (3, 4):
            raise ValueError("Raster: Invalid channels, must be 3 or 4")
        if len(color_data) != width * height * channels:
            raise ValueError("Raster: The length of colorData is incorrect")

        if channels == 4:
            return cls(width, height, bytearray(color_data), channels)

        pix = bytearray(width * height * 4)
        pix[0::4] = bytes(color_data[0::3])
        pix[1::4] = bytes(color_data[1::3])
        pix[2::4] = bytes(color_data[2::3])
        pix[3::4] = b"\xff" * (width * height)
        return cls(width, height, pix, channels)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Raster":
        """Build a raster from a (height, width, 3|4) uint8 array."""
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValueError(
                f"Raster: expected an array of shape (height, width, 3|4), got {array.shape}"
            )
        if array.dtype != np.uint8:
            raise ValueError(f"Raster: expected dtype uint8, got {array.dtype}")

        height, width, channels = array.shape
        if channels == 3:
            alpha = np.full((height, width, 1), 255, dtype=np.uint8)
            array = np.concatenate((array, alpha), axis=2)
        return cls(width, height, bytearray(np.ascontiguousarray(array).tobytes()), channels)

    @classmethod
    def from_image(cls, img: Image.Image) -> "Raster":
        """Build a raster from a Pillow image, converting it to RGBA if needed."""
        channels = 4 if "A" in img.getbands() or "transparency" in img.info else 3
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        width, height = img.size
        return cls(width, height, bytearray(img.tobytes()), channels)

    def to_array(self) -> np.ndarray:
        """Return the pixels as a (height, width, 4) uint8 array."""
        return np.frombuffer(bytes(self.pix), dtype=np.uint8).reshape(
            self.height, self.width, 4
        )

    def to_image(self) -> Image.Image:
        """Return the pixels as a Pillow image, RGB when the source had no alpha."""
        img = Image.frombytes("RGBA", (self.width, self.height), bytes(self.pix))
        if self.channels == 3:
            return img.convert("RGB")
        return img
