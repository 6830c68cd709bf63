"""
pixelchain - An interactive raster editor built on a chain of composable filters
"""

from .raster import Raster, PathTypes, RgbColor, SUPPORTED_IMAGE_FILETYPES
from .config import Settings, settings
from .errors import (
    PixelChainError,
    RasterDecodeError,
    RasterEncodeError,
    FilterParseError,
    ChainIndexError,
    SessionStateError,
    NoImageLoadedError,
    ImageAlreadyOpenError,
)
from .filters import (
    Filter,
    FilterChain,
    Threshold,
    Invert,
    Grayscale,
    Huerotate,
    Lighting,
    Sepia,
    Vignette,
    Blur,
    BlurMode,
    Bilateral,
    Sharpen,
    SharpenMode,
)
from .session import EditorSession

__version__ = "0.1.0"

__all__ = [
    # Raster
    "Raster",
    "PathTypes",
    "RgbColor",
    "SUPPORTED_IMAGE_FILETYPES",
    # Configuration
    "Settings",
    "settings",
    # Errors
    "PixelChainError",
    "RasterDecodeError",
    "RasterEncodeError",
    "FilterParseError",
    "ChainIndexError",
    "SessionStateError",
    "NoImageLoadedError",
    "ImageAlreadyOpenError",
    # Filters
    "Filter",
    "FilterChain",
    "Threshold",
    "Invert",
    "Grayscale",
    "Huerotate",
    "Lighting",
    "Sepia",
    "Vignette",
    "Blur",
    "BlurMode",
    "Bilateral",
    "Sharpen",
    "SharpenMode",
    # Session
    "EditorSession",
]
