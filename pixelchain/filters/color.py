# pixelchain Filters - Color & Tone
"""
Per-pixel color and tone filters: Threshold, Invert, Grayscale, Huerotate,
Lighting and Sepia.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import ClassVar

import numpy as np

from .base import Filter, register_filter, register_alias
from ..color_space import (
    CONTRAST_LIMIT,
    SEPIA_MATRIX,
    adjust_lighting,
    apply_color_matrix,
    hue_rotation_matrix,
    luma,
    to_u8,
)
from ..kernels import clamp
from ..raster import Raster


@register_filter
@dataclass(frozen=True)
class Threshold(Filter):
    """Binarize by luma.

    Pixels whose BT.709 luma is strictly above ``level`` become white, all
    others black.

    Parameters:
        level: Threshold in [0, 255]

    Example:
        'threshold 100'
    """

    _label: ClassVar[str] = 'Threshold'
    _primary_param: ClassVar[str] = 'level'

    level: int = 128

    def __post_init__(self):
        self._assign('level', int(clamp(self.level, 0, 255)))

    def apply(self, raster: Raster) -> Raster:
        mask = luma(raster.pixels) > self.level
        plane = np.where(mask, 255, 0).astype(np.uint8)
        return Raster(np.stack([plane, plane, plane], axis=2))


@register_filter
@dataclass(frozen=True)
class Invert(Filter):
    """Photographic negative, ``255 - x`` for every sample."""

    _label: ClassVar[str] = 'Invert'

    def apply(self, raster: Raster) -> Raster:
        return Raster(255 - raster.pixels)


@register_filter
@dataclass(frozen=True)
class Grayscale(Filter):
    """Convert to gray using ITU-R BT.709 luma.

    Y = 0.2126*R + 0.7152*G + 0.0722*B is rounded and written to all three
    channels.
    """

    _label: ClassVar[str] = 'Grayscale'

    def apply(self, raster: Raster) -> Raster:
        plane = to_u8(luma(raster.pixels))
        return Raster(np.stack([plane, plane, plane], axis=2))


@register_filter
@dataclass(frozen=True)
class Huerotate(Filter):
    """Rotate the hue of every pixel.

    Uses a fixed 3x3 RGB transform built from the sine and cosine of the
    angle, so every output channel mixes all three input channels.

    Parameters:
        degrees: Rotation angle, normalized into [0, 360). Non-finite angles become 0

    Example:
        'huerotate 90'
    """

    _label: ClassVar[str] = 'Huerotate'
    _primary_param: ClassVar[str] = 'degrees'

    degrees: float = 0.0

    def __post_init__(self):
        degrees = float(self.degrees)
        self._assign('degrees', degrees % 360.0 if math.isfinite(degrees) else 0.0)

    def apply(self, raster: Raster) -> Raster:
        rotated = apply_color_matrix(raster.pixels, hue_rotation_matrix(self.degrees))
        return Raster.from_float(rotated)


@register_filter
@dataclass(frozen=True)
class Lighting(Filter):
    """Brightness and contrast adjustment.

    Each sample becomes ``f * (x - 128) + 128 + brightness`` with the contrast
    factor ``f = 259 * (contrast + 255) / (255 * (259 - contrast))``.

    Parameters:
        brightness: Additive offset in [-255, 255]
        contrast: Contrast in [-255, 255], 0 = no change

    Example:
        'lighting 20 40'
        'brightness 30'
    """

    _label: ClassVar[str] = 'Lighting'
    _primary_param: ClassVar[str] = 'brightness'

    brightness: float = 0.0
    contrast: float = 0.0

    def __post_init__(self):
        self._assign('brightness', clamp(self.brightness, -CONTRAST_LIMIT, CONTRAST_LIMIT))
        self._assign('contrast', clamp(self.contrast, -CONTRAST_LIMIT, CONTRAST_LIMIT))

    def apply(self, raster: Raster) -> Raster:
        return Raster.from_float(adjust_lighting(raster.pixels, self.brightness, self.contrast))


@register_filter
@dataclass(frozen=True)
class Sepia(Filter):
    """Warm brown tone using the classic sepia matrix."""

    _label: ClassVar[str] = 'Sepia'

    def apply(self, raster: Raster) -> Raster:
        return Raster.from_float(apply_color_matrix(raster.pixels, SEPIA_MATRIX))


register_alias('gray', Grayscale)
register_alias('grey', Grayscale)
register_alias('negative', Invert)
register_alias('hue', Huerotate)
register_alias('brightness', Lighting)
register_alias('contrast', Lighting, brightness=0.0)
