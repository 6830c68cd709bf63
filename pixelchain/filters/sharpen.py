# pixelchain Filters - Sharpen
"""
Unsharp masking.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

import numpy as np

from .base import Filter, register_filter, register_alias
from .bilateral import Bilateral
from .blur import Blur, BlurMode
from ..kernels import clamp_radius
from ..raster import Raster

# Intensity sigma of the bilateral coarse pass, in [0, 1] intensity units
BILATERAL_COARSE_INTENSITY_SIGMA = 0.05


class SharpenMode(Enum):
    """Filter used to derive the coarse image."""
    GAUSSIAN = 'gaussian'
    BOX = 'box'
    MEDIAN = 'median'
    BILATERAL = 'bilateral'


@register_filter
@dataclass(frozen=True)
class Sharpen(Filter):
    """Unsharp mask sharpening.

    Blurs the image into a coarse version and takes the residual
    ``fine = original - coarse`` in signed integers. The result is
    ``original + fine / 2``, or just ``fine`` when ``render_mask_only`` is set
    (useful to inspect the detail layer). Both are clamped to [0, 255].

    Parameters:
        mode: Coarse filter, 'gaussian', 'box', 'median' or 'bilateral'
        coarse_radius: Radius of the coarse filter, [0, 50]
        render_mask_only: Output the detail layer instead of the sharpened image

    Example:
        'sharpen gaussian 3'
        'sharpen box 2 true'
    """

    _label: ClassVar[str] = 'Sharpen'
    _primary_param: ClassVar[str] = 'mode'

    mode: SharpenMode = SharpenMode.GAUSSIAN
    coarse_radius: int = 2
    render_mask_only: bool = False

    def __post_init__(self):
        self._assign('mode', SharpenMode(self.mode))
        self._assign('coarse_radius', clamp_radius(self.coarse_radius))
        self._assign('render_mask_only', bool(self.render_mask_only))

    def coarse_filter(self) -> Filter:
        """The filter producing the coarse image."""
        if self.mode == SharpenMode.BILATERAL:
            return Bilateral(
                radius=self.coarse_radius,
                spatial_sigma=self.coarse_radius,
                intensity_sigma=BILATERAL_COARSE_INTENSITY_SIGMA,
            )
        return Blur(radius=self.coarse_radius, mode=BlurMode(self.mode.value))

    def apply(self, raster: Raster) -> Raster:
        coarse = self.coarse_filter().apply(raster)
        original = raster.pixels.astype(np.int32)
        fine = original - coarse.pixels.astype(np.int32)
        if self.render_mask_only:
            result = fine
        else:
            # fine / 2 rounds toward zero
            result = original + np.fix(fine / 2).astype(np.int32)
        return Raster(np.clip(result, 0, 255).astype(np.uint8))


register_alias('unsharp', Sharpen)
