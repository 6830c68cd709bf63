"""
Tests for the vignette mask and filter.
"""

import math

import numpy as np
import pytest

from pixelchain import Raster, Vignette
from pixelchain.filters import vignette_mask


class TestVignetteMask:
    """Test the Gaussian brightness mask."""

    def test_shape_and_range(self):
        """The mask has the image's shape and values in [0, 1]."""
        mask = vignette_mask(7, 5, 0.5, 0.7)
        assert mask.shape == (5, 7)
        assert mask.min() >= 0.0
        assert mask.max() == pytest.approx(1.0)

    def test_full_opacity_peaks_at_one(self):
        """At full opacity only the center reaches 1.0."""
        mask = vignette_mask(9, 9, 0.3, 1.0)
        assert mask.max() == pytest.approx(1.0)
        assert mask[4, 4] == pytest.approx(1.0)
        assert mask[0, 0] < mask[4, 4]

    def test_zero_opacity_is_flat(self):
        """Opacity 0 lifts the whole mask to 1.0."""
        np.testing.assert_allclose(vignette_mask(6, 4, 0.5, 0.0), np.ones((4, 6)))

    def test_symmetric(self):
        """The mask mirrors along both axes."""
        mask = vignette_mask(8, 6, 0.4, 1.0)
        np.testing.assert_allclose(mask, mask[::-1, :])
        np.testing.assert_allclose(mask, mask[:, ::-1])

    def test_radius_widens_center(self):
        """A larger radius keeps the corners brighter."""
        narrow = vignette_mask(10, 10, 0.2, 1.0)
        wide = vignette_mask(10, 10, 0.8, 1.0)
        assert wide[0, 0] > narrow[0, 0]


class TestVignetteFilter:
    """Test the vignette filter on rasters."""

    def test_parameters_clamped(self):
        """Radius and opacity are clamped into [0, 1]."""
        vignette = Vignette(radius=50, opacity=50)
        assert vignette.radius == 1.0
        assert vignette.opacity == 1.0
        assert Vignette(radius=-1, opacity=-1).opacity == 0.0

    def test_nan_parameters_clamped(self, gray_raster):
        """NaN radius becomes 0 and still renders a bright center."""
        vignette = Vignette(math.nan, 0.5)
        assert vignette.radius == 0.0
        assert Vignette(0.5, math.nan).opacity == 0.0
        result = vignette.apply(gray_raster).pixels
        assert result.max() == 128

    def test_center_brighter_than_corners(self, gray_raster):
        """Constant gray stays brightest in the center."""
        result = Vignette(radius=50, opacity=50).apply(gray_raster).pixels
        center = result[1:3, 1:3].min()
        corners = [result[0, 0], result[0, 3], result[3, 0], result[3, 3]]
        for corner in corners:
            assert center >= corner.max()

    def test_zero_opacity_is_identity(self, noisy_raster):
        """Opacity 0 leaves the raster unchanged."""
        assert Vignette(0.5, 0.0).apply(noisy_raster) == noisy_raster

    def test_opacity_darkens_corners(self):
        """Higher opacity darkens the corners more."""
        raster = Raster.new(12, 12, (200, 200, 200))
        light = Vignette(0.4, 0.3).apply(raster).pixels
        strong = Vignette(0.4, 0.9).apply(raster).pixels
        assert strong[0, 0, 0] < light[0, 0, 0] < 200

    def test_never_brightens(self, noisy_raster):
        """No sample gets brighter."""
        result = Vignette(0.3, 0.8).apply(noisy_raster).pixels
        assert np.all(result <= noisy_raster.pixels)
