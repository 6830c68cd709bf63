# pixelchain Filters Module
"""
Dataclass-based filter system for RGB rasters.

Filters are immutable, clamp their parameters on construction and can be
composed into a FilterChain.
"""

from .base import (
    Filter,
    FILTER_REGISTRY,
    FILTER_ALIASES,
    register_filter,
    register_alias,
)

from .color import (
    Threshold,
    Invert,
    Grayscale,
    Huerotate,
    Lighting,
    Sepia,
)

from .vignette import Vignette, vignette_mask

from .blur import (
    Blur,
    BlurMode,
    convolve_channel,
    median_channel,
    pad_edge,
)

from .bilateral import Bilateral, bilateral_channel

from .sharpen import Sharpen, SharpenMode

from .pipeline import FilterChain, NO_FILTERS_MESSAGE

__all__ = [
    # Base
    'Filter',
    'FILTER_REGISTRY',
    'FILTER_ALIASES',
    'register_filter',
    'register_alias',
    # Chain
    'FilterChain',
    'NO_FILTERS_MESSAGE',
    # Color & tone
    'Threshold',
    'Invert',
    'Grayscale',
    'Huerotate',
    'Lighting',
    'Sepia',
    'Vignette',
    'vignette_mask',
    # Neighborhood
    'Blur',
    'BlurMode',
    'Bilateral',
    'Sharpen',
    'SharpenMode',
    'convolve_channel',
    'median_channel',
    'bilateral_channel',
    'pad_edge',
]
