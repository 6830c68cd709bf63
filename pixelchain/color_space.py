"""Linear color-space helpers for RGB rasters.

This module provides the per-pixel color math the tone filters share:
- ITU-R BT.709 luma
- 3x3 linear color transforms (sepia, YIQ-derived hue rotation)
- The brightness/contrast curve factor
- Float to byte conversion

All functions work on numpy arrays of shape (H, W, 3) or on single planes
and never modify their input.

Usage:
    from pixelchain.color_space import luma, apply_color_matrix, SEPIA_MATRIX

    gray = luma(pixels)                           # (H, W) float64
    toned = apply_color_matrix(pixels, SEPIA_MATRIX)  # (H, W, 3) float64
"""
from __future__ import annotations

import math

import numpy as np

LUMA_COEFFICIENTS = (0.2126, 0.7152, 0.0722)
"ITU-R BT.709 perceptual luminance weights for R, G and B"

SEPIA_MATRIX = np.array([
    [0.393, 0.769, 0.189],
    [0.349, 0.686, 0.168],
    [0.272, 0.534, 0.131],
], dtype=np.float64)
"Classic sepia tone matrix, rows produce R, G and B"

CONTRAST_LIMIT = 255.0
"Brightness and contrast are clamped into [-CONTRAST_LIMIT, CONTRAST_LIMIT]"


def to_u8(values) -> np.ndarray:
    """Clamp samples to [0, 255] and round them to unsigned bytes.

    Args:
        values: Any numeric array

    Returns:
        uint8 array of the same shape
    """
    return np.rint(np.clip(np.asarray(values, dtype=np.float64), 0.0, 255.0)).astype(np.uint8)


# ============================================================================
# Luma
# ============================================================================

def luma(pixels: np.ndarray) -> np.ndarray:
    """Perceptual luminance of an RGB array.

    Uses ITU-R BT.709 coefficients:
    Y = 0.2126*R + 0.7152*G + 0.0722*B

    Args:
        pixels: (H, W, 3) array, any numeric dtype

    Returns:
        float64 array (H, W), unclamped and unrounded
    """
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"Expected RGB array (H, W, 3), got shape {pixels.shape}")

    r = pixels[:, :, 0].astype(np.float64)
    g = pixels[:, :, 1].astype(np.float64)
    b = pixels[:, :, 2].astype(np.float64)
    return LUMA_COEFFICIENTS[0] * r + LUMA_COEFFICIENTS[1] * g + LUMA_COEFFICIENTS[2] * b


# ============================================================================
# Linear transforms
# ============================================================================

def apply_color_matrix(pixels: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Multiply every pixel by a 3x3 matrix.

    Output channel ``k`` is ``matrix[k, 0]*R + matrix[k, 1]*G + matrix[k, 2]*B``.

    Args:
        pixels: (H, W, 3) array, any numeric dtype
        matrix: (3, 3) transform

    Returns:
        float64 array (H, W, 3), unclamped
    """
    matrix = np.asarray(matrix, dtype=np.float64)
    if matrix.shape != (3, 3):
        raise ValueError(f"Expected 3x3 color matrix, got shape {matrix.shape}")
    return pixels.astype(np.float64) @ matrix.T


def hue_rotation_matrix(degrees: float) -> np.ndarray:
    """RGB-space hue rotation by ``degrees``.

    Rotates the chroma plane of YIQ around the luma axis and folds the
    conversion to and from YIQ into a single 3x3 matrix.

    Args:
        degrees: Rotation angle, 0 is the identity (up to coefficient rounding)

    Returns:
        (3, 3) float64 matrix, rows produce R, G and B
    """
    angle = math.radians(degrees)
    s = math.sin(angle)
    c = math.cos(angle)
    return np.array([
        [0.299 + 0.701 * c + 0.168 * s, 0.587 - 0.587 * c + 0.330 * s, 0.114 - 0.114 * c - 0.497 * s],
        [0.299 - 0.299 * c - 0.328 * s, 0.587 + 0.413 * c + 0.035 * s, 0.114 - 0.114 * c + 0.292 * s],
        [0.299 - 0.300 * c + 1.250 * s, 0.587 - 0.588 * c - 1.050 * s, 0.114 + 0.886 * c - 0.203 * s],
    ], dtype=np.float64)


# ============================================================================
# Tone curves
# ============================================================================

def contrast_factor(contrast: float) -> float:
    """Multiplicative contrast factor.

    ``f = 259 * (contrast + 255) / (255 * (259 - contrast))``; 0 maps to 1.0.
    ``contrast`` must lie in [-255, 255], which keeps the pole at 259 out of
    reach.
    """
    if not -CONTRAST_LIMIT <= contrast <= CONTRAST_LIMIT:
        raise ValueError(f"Contrast must be in [-255, 255], got {contrast}")
    return 259.0 * (contrast + 255.0) / (255.0 * (259.0 - contrast))


def adjust_lighting(pixels: np.ndarray, brightness: float, contrast: float) -> np.ndarray:
    """Apply ``f * (x - 128) + 128 + brightness`` to every sample.

    Args:
        pixels: Array of samples, any numeric dtype
        brightness: Additive offset in [-255, 255]
        contrast: Contrast in [-255, 255]

    Returns:
        float64 array of the same shape, unclamped
    """
    factor = contrast_factor(contrast)
    return factor * (pixels.astype(np.float64) - 128.0) + 128.0 + brightness


__all__ = [
    'LUMA_COEFFICIENTS', 'SEPIA_MATRIX', 'CONTRAST_LIMIT',
    'to_u8', 'luma',
    'apply_color_matrix', 'hue_rotation_matrix',
    'contrast_factor', 'adjust_lighting',
]
