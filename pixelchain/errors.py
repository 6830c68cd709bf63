"""Exception classes for pixelchain."""


class PixelChainError(Exception):
    """Base exception for pixelchain errors."""

    pass


class RasterDecodeError(PixelChainError):
    """Raised when an image file can not be read into a raster."""

    pass


class RasterEncodeError(PixelChainError):
    """Raised when a raster can not be written to disk."""

    pass


class FilterParseError(PixelChainError, ValueError):
    """Raised for malformed filter descriptions (unknown name, non-numeric tokens)."""

    pass


class ChainIndexError(PixelChainError, IndexError):
    """Raised when a chain index is out of range."""

    pass


class SessionStateError(PixelChainError):
    """Raised when a session operation is not valid in the current state."""

    pass


class NoImageLoadedError(SessionStateError):
    """Raised when an operation needs an open image but none is loaded."""

    pass


class ImageAlreadyOpenError(SessionStateError):
    """Raised when opening an image while another one is still open."""

    pass
