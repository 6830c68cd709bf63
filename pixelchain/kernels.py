"""Convolution kernels and window statistics.

Pure numpy helpers shared by the blur, bilateral, sharpen and vignette
filters:

- 1-D Gaussian kernels and their 2-D outer product
- Box kernels
- Median of a window (scalar or vectorized along an axis)

## Radius and sigma limits

Radii are clamped to [0, 50] before a kernel is built, so the largest kernel
is 101 x 101. Sigmas below 0.1 are raised to 0.1 by the callers.

Usage:
    from pixelchain.kernels import gaussian_kernel_1d, outer_product

    g = gaussian_kernel_1d(7, 1.5)
    kernel = outer_product(g, g)  # 7x7, sums to 1
"""
from __future__ import annotations

import math

import numpy as np

MAX_RADIUS = 50
"Largest kernel radius any filter accepts"

MIN_SIGMA = 0.1
"Smallest Gaussian sigma any filter accepts"


def clamp(value: int | float, lower: float, upper: float) -> float:
    """Clamp ``value`` into [lower, upper].

    NaN maps to ``lower``, infinities to the nearer bound.
    """
    value = float(value)
    if math.isnan(value):
        return float(lower)
    return float(min(max(value, lower), upper))


def clamp_radius(radius: int | float) -> int:
    """Clamp a kernel radius into [0, MAX_RADIUS]."""
    return int(clamp(radius, 0, MAX_RADIUS))


def clamp_sigma(sigma: float, upper: float = 50.0) -> float:
    """Clamp a Gaussian sigma into [MIN_SIGMA, upper]."""
    return clamp(sigma, MIN_SIGMA, upper)


# ============================================================================
# Gaussian
# ============================================================================

def gaussian_weight(x, mu: float, sigma: float):
    """Evaluate the normal density with mean ``mu`` and deviation ``sigma``.

    Works on scalars and numpy arrays alike.

    Args:
        x: Sample position(s)
        mu: Center of the curve
        sigma: Standard deviation, must be positive

    Returns:
        ``(1 / (sigma * sqrt(2 pi))) * exp(-(x - mu)^2 / (2 sigma^2))``
    """
    scale = 1.0 / (sigma * math.sqrt(2.0 * math.pi))
    return scale * np.exp(-((np.asarray(x, dtype=np.float64) - mu) ** 2) / (2.0 * sigma * sigma))


def gaussian_kernel_1d(size: int, sigma: float) -> np.ndarray:
    """Build a normalized 1-D Gaussian kernel.

    Samples ``size`` equally spaced points over ``[0, size]`` and centers the
    curve at ``size / 2``, so the kernel is symmetric.

    Args:
        size: Number of taps (> 0)
        sigma: Standard deviation (> 0)

    Returns:
        float64 array of length ``size`` summing to 1
    """
    if size <= 0:
        raise ValueError(f"Kernel size must be positive, got {size}")
    if sigma <= 0:
        raise ValueError(f"Sigma must be positive, got {sigma}")

    positions = np.linspace(0.0, float(size), size)
    kernel = gaussian_weight(positions, size / 2.0, sigma)
    return kernel / kernel.sum()


def outer_product(u: np.ndarray, v: np.ndarray) -> np.ndarray:
    """Build the 2-D matrix ``K[i, j] = u[i] * v[j]``.

    With ``u == v`` this is a separable 2-D Gaussian surface.
    """
    u = np.asarray(u, dtype=np.float64).reshape(-1)
    v = np.asarray(v, dtype=np.float64).reshape(-1)
    return u[:, np.newaxis] * v[np.newaxis, :]


def gaussian_kernel_2d(radius: int, sigma: float) -> np.ndarray:
    """Square Gaussian kernel of side ``2 * radius + 1`` summing to 1."""
    diameter = 2 * clamp_radius(radius) + 1
    taps = gaussian_kernel_1d(diameter, sigma)
    return outer_product(taps, taps)


def box_kernel(radius: int) -> np.ndarray:
    """Uniform square kernel of side ``2 * radius + 1`` summing to 1."""
    diameter = 2 * clamp_radius(radius) + 1
    return np.full((diameter, diameter), 1.0 / (diameter * diameter), dtype=np.float64)


# ============================================================================
# Median
# ============================================================================

def median(values, axis: int = -1):
    """Median of a window.

    Sorts in place, then returns the middle element for an odd count or the
    mean of the two middle elements for an even count.

    Args:
        values: A list of numbers, or a writable numpy array whose windows lie
            along ``axis``. Either is sorted in place.
        axis: Window axis for numpy input

    Returns:
        A float for list input, otherwise a float64 array with ``axis`` removed
    """
    if isinstance(values, list):
        if not values:
            raise ValueError("median of an empty window")
        values.sort()
        mid = len(values) // 2
        if len(values) % 2 == 1:
            return float(values[mid])
        return (values[mid - 1] + values[mid]) / 2.0

    count = values.shape[axis]
    if count == 0:
        raise ValueError("median of an empty window")
    values.sort(axis=axis)
    mid = count // 2
    upper = np.take(values, mid, axis=axis).astype(np.float64)
    if count % 2 == 1:
        return upper
    lower = np.take(values, mid - 1, axis=axis)
    return (lower + upper) / 2.0


__all__ = [
    'MAX_RADIUS', 'MIN_SIGMA',
    'clamp', 'clamp_radius', 'clamp_sigma',
    'gaussian_weight', 'gaussian_kernel_1d', 'gaussian_kernel_2d',
    'outer_product', 'box_kernel', 'median',
]
