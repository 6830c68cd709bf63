# pixelchain Filters - Vignette
"""
Radial darkening towards the image borders.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from .base import Filter, register_filter
from ..kernels import MIN_SIGMA, clamp, gaussian_kernel_1d, outer_product
from ..raster import Raster


def vignette_mask(width: int, height: int, radius: float, opacity: float) -> np.ndarray:
    """Brightness mask of shape (height, width) with values in [0, 1].

    A Gaussian surface whose sigma along each axis is that axis' length times
    ``radius``, scaled so its brightest point is 1.0, then lifted by
    ``1 - opacity`` and clamped.

    Args:
        width: Mask width in pixels
        height: Mask height in pixels
        radius: Bright center size as a fraction of the image, [0, 1]
        opacity: Darkening strength, [0, 1]

    Returns:
        float64 array (height, width)
    """
    rows = gaussian_kernel_1d(height, max(height * radius, MIN_SIGMA))
    cols = gaussian_kernel_1d(width, max(width * radius, MIN_SIGMA))
    surface = outer_product(rows, cols)
    surface = surface / surface.max()
    return np.clip(surface + 1.0 - opacity, 0.0, 1.0)


@register_filter
@dataclass(frozen=True)
class Vignette(Filter):
    """Darken the corners with a Gaussian brightness mask.

    Parameters:
        radius: Size of the bright center as a fraction of the image, [0, 1].
            Larger values widen the center.
        opacity: Strength of the darkening, [0, 1]. Larger values darken the
            corners more.

    Example:
        'vignette 0.5 0.8'
    """

    _label: ClassVar[str] = 'Vignette'
    _primary_param: ClassVar[str] = 'radius'

    radius: float = 0.5
    opacity: float = 0.5

    def __post_init__(self):
        self._assign('radius', clamp(self.radius, 0.0, 1.0))
        self._assign('opacity', clamp(self.opacity, 0.0, 1.0))

    def apply(self, raster: Raster) -> Raster:
        mask = vignette_mask(raster.width, raster.height, self.radius, self.opacity)
        return Raster.from_float(raster.pixels * mask[:, :, np.newaxis])
