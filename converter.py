import argparse
import logging
import os
import sys

from qoicodec import QOI, QOIDecoder, QOIEncoder, load_image, save_image

logger = logging.getLogger(__name__)

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def png_to_qoi(png_path, qoi_path) -> int:
    pixel_data, desc = load_image(png_path)
    with open(qoi_path, "wb") as f:
        size = QOIEncoder.write(pixel_data, f)
    logger.info(
        "Converted %s (%dx%d, %d channels) to %s (%d bytes)",
        png_path,
        desc["width"],
        desc["height"],
        desc["channels"],
        qoi_path,
        size,
    )
    return size


def qoi_to_png(qoi_path, png_path) -> None:
    with open(qoi_path, "rb") as f:
        decoded = QOIDecoder.decode(f)
    save_image(png_path, decoded)
    logger.info("Converted %s to %s", qoi_path, png_path)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Convert images to and from the QOI format."
    )
    parser.add_argument("input", help="source image (.qoi, or anything Pillow can open)")
    parser.add_argument("output", nargs="?", help="destination image")
    parser.add_argument(
        "--info", action="store_true", help="print the QOI header of input and exit"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stdout,
    )

    if args.info:
        with open(args.input, "rb") as f:
            header = QOI.peek(f)
        print(
            f"{args.input}: {header.width}x{header.height} "
            f"Channels: {header.channels} Colorspace: {header.colorspace}"
        )
        return 0

    if args.output is None:
        parser.error("output is required unless --info is given")

    if args.input.lower().endswith(".qoi"):
        qoi_to_png(args.input, args.output)
    else:
        png_to_qoi(args.input, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
