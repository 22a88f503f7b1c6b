import logging

import numpy as np
from PIL import Image

from .raster import Raster

logger = logging.getLogger(__name__)

RAW_EXTENSIONS = ("dng", "cr2", "nef", "arw", "raw")


def load_image(filepath: str) -> tuple[np.ndarray, dict]:
    """Load an image and return pixel data as numpy array + description."""

    ext = str(filepath).lower().split(".")[-1]

    if ext in RAW_EXTENSIONS:
        # RAW formats - requires rawpy
        import rawpy

        with rawpy.imread(str(filepath)) as raw:
            rgb = raw.postprocess()
        img = Image.fromarray(rgb)
    else:
        # Standard formats (PNG, JPEG, etc.)
        img = Image.open(filepath)

    # Convert to RGB or RGBA
    if img.mode == "RGBA":
        channels = 4
    elif img.mode in ("LA", "PA") or "transparency" in img.info:
        img = img.convert("RGBA")
        channels = 4
    else:
        img = img.convert("RGB")
        channels = 3

    logger.debug(
        "Loaded %s: %dx%d, %d channels", filepath, img.size[0], img.size[1], channels
    )
    return np.array(img), {
        "width": img.size[0],
        "height": img.size[1],
        "channels": channels,
        "colorspace": 0,
    }


def save_image(filepath: str, raster: Raster) -> None:
    """Save a raster through Pillow; the format follows the file extension."""
    raster.to_image().save(filepath)
    logger.debug("Saved %s: %dx%d", filepath, raster.width, raster.height)


def to_raster(source, description: dict = None) -> Raster:
    """
    Convert any supported pixel source into a Raster.

    :param source: A Raster, a Pillow image, a (height, width, 3|4) uint8 numpy array,
                   or a bytes-like object of packed pixels together with ``description``.
    :param description: Dictionary containing 'width', 'height', 'channels' for raw bytes.
    :return: Raster holding the pixels in RGBA.
    """
    if isinstance(source, Raster):
        return source
    if isinstance(source, Image.Image):
        return Raster.from_image(source)
    if isinstance(source, np.ndarray):
        return Raster.from_array(source)

    if description is None:
        raise ValueError(
            "QOI.encode: a description is required to encode raw pixel bytes"
        )
    width = description.get("width")
    height = description.get("height")
    channels = description.get("channels", 4)
    if not isinstance(width, int) or width < 0:
        raise ValueError("QOI.encode: Invalid description.width")
    if not isinstance(height, int) or height < 0:
        raise ValueError("QOI.encode: Invalid description.height")
    return Raster.from_bytes(source, width, height, channels)
