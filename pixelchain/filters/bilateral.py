# pixelchain Filters - Bilateral
"""
Edge-preserving smoothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from .base import Filter, register_filter
from .blur import pad_edge
from ..kernels import clamp_radius, clamp_sigma, gaussian_kernel_2d
from ..raster import Raster


def bilateral_channel(
    channel: np.ndarray,
    radius: int,
    spatial_sigma: float,
    intensity_sigma: float,
) -> np.ndarray:
    """Bilateral filter of a single plane.

    Every neighbor is weighted by the spatial Gaussian kernel times
    ``exp(-(neighbor - center)^2 / (2 * intensity_sigma^2))``. The result is
    the weighted mean divided by the per-pixel weight total.

    Args:
        channel: float64 plane (H, W), intensities in [0, 1]
        radius: Window radius
        spatial_sigma: Sigma of the spatial kernel
        intensity_sigma: Sigma of the intensity weight, same scale as the plane

    Returns:
        float64 plane (H, W)
    """
    diameter = 2 * radius + 1
    height, width = channel.shape
    spatial = gaussian_kernel_2d(radius, spatial_sigma)
    padded = pad_edge(channel, radius)
    two_sigma_sq = 2.0 * intensity_sigma * intensity_sigma

    weighted_sum = np.zeros((height, width), dtype=np.float64)
    weight_total = np.zeros((height, width), dtype=np.float64)
    for dy in range(diameter):
        for dx in range(diameter):
            neighbor = padded[dy:dy + height, dx:dx + width]
            weight = spatial[dy, dx] * np.exp(-((neighbor - channel) ** 2) / two_sigma_sq)
            weighted_sum += weight * neighbor
            weight_total += weight
    # the center tap has intensity weight 1, so weight_total > 0
    return weighted_sum / weight_total


@register_filter
@dataclass(frozen=True)
class Bilateral(Filter):
    """Bilateral filter for edge-preserving smoothing.

    Smooths flat regions while keeping edges: across a strong intensity edge
    the intensity weight collapses towards zero. Intensities are scaled to
    [0, 1] before weighting, ``intensity_sigma`` uses that scale.

    Parameters:
        radius: Window radius in pixels, [0, 50]
        spatial_sigma: Spatial Gaussian sigma, [0.1, 50]
        intensity_sigma: Intensity Gaussian sigma, [0.1, 50]

    Example:
        'bilateral 3 2.0 0.1'
    """

    _label: ClassVar[str] = 'Bilateral'
    _primary_param: ClassVar[str] = 'radius'

    radius: int = 2
    spatial_sigma: float = 2.0
    intensity_sigma: float = 0.1

    def __post_init__(self):
        self._assign('radius', clamp_radius(self.radius))
        self._assign('spatial_sigma', clamp_sigma(self.spatial_sigma))
        self._assign('intensity_sigma', clamp_sigma(self.intensity_sigma))

    def apply(self, raster: Raster) -> Raster:
        planes = [
            bilateral_channel(
                channel / 255.0, self.radius, self.spatial_sigma, self.intensity_sigma
            ) * 255.0
            for channel in raster.channels()
        ]
        return Raster.from_channels(*planes)
