class QOIError(ValueError):
    """Base class for malformed or unencodable QOI data."""


class MalformedMagicError(QOIError):
    def __init__(self, magic: bytes):
        self.magic = magic
        super().__init__(f"QOI.decode: expected magic b'qoif', got instead {magic!r}")


class TruncatedStreamError(QOIError):
    """
    Fewer bytes were available than a header, chunk or end marker needs.

    ``x`` and ``y`` locate the pixel being decoded, or are ``None`` when the
    stream ended outside the raster (header or end marker).
    """

    def __init__(
        self,
        what: str,
        expected: int,
        received: int,
        x: int = None,
        y: int = None,
    ):
        self.what = what
        self.expected = expected
        self.received = received
        self.x = x
        self.y = y
        message = f"QOI.decode: truncated {what}, expected {expected} bytes, got {received}"
        if x is not None:
            message = f"decoding chunk starting at {{x: {x}, y: {y}}}: {message}"
        super().__init__(message)


class BadTrailerError(QOIError):
    def __init__(self, trailer: bytes):
        self.trailer = trailer
        super().__init__(f"QOI.decode: bad end marker {trailer.hex()}")


class DimensionOverflowError(QOIError):
    def __init__(self, width: int, height: int, reason: str = "does not fit in 32 bits"):
        self.width = width
        self.height = height
        super().__init__(f"QOI: image size {width}x{height} {reason}")
