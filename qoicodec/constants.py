"""
QOI format constants shared by the encoder and decoder.
"""

# Op-code tags
QOI_OP_INDEX = 0x00  # 00xxxxxx
QOI_OP_DIFF = 0x40  # 01xxxxxx
QOI_OP_LUMA = 0x80  # 10xxxxxx
QOI_OP_RUN = 0xC0  # 11xxxxxx
QOI_OP_RGB = 0xFE  # 11111110
QOI_OP_RGBA = 0xFF  # 11111111

QOI_MASK_2 = 0xC0  # 11000000

QOI_MAGIC = b"qoif"
QOI_HEADER_SIZE = 14
QOI_HEADER_FORMAT = ">4sIIBB"
QOI_END_MARKER = b"\x00\x00\x00\x00\x00\x00\x00\x01"

# Colorspace byte
QOI_LINEAR = 0
QOI_SRGB = 1

QOI_CACHE_SIZE = 64
QOI_RUN_MAX = 62  # 63 and 64 would collide with the RGB/RGBA tags
QOI_DIMENSION_MAX = 0xFFFFFFFF
QOI_PIXELS_MAX = 400000000  # Safety limit (400MP)

# Encoder flushes to the sink once this many bytes are buffered
QOI_WRITE_BUFFER = 64 * 1024
