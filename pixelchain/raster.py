"""
Implements the class :class:`.Raster` which is pixelchain's in-memory RGB
pixel buffer. Every filter reads one and produces a new one.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Union

import PIL.Image
import numpy as np

from .color_space import to_u8
from .errors import RasterDecodeError, RasterEncodeError

logger = logging.getLogger(__name__)

SUPPORTED_IMAGE_FILETYPES = ["png", "bmp", "jpg", "jpeg", "gif", "tif", "tiff", "webp"]
"List of image file types which can be written"

SUPPORTED_IMAGE_FILETYPE_SET = set(SUPPORTED_IMAGE_FILETYPES)
"Set of image file types which can be written"

_PIL_FORMATS = {"jpg": "jpeg", "tif": "tiff"}

PathTypes = Union[str, os.PathLike]
"Anything accepted as a file location"

RgbColor = tuple[int, int, int]


class Raster:
    """
    A width x height RGB bitmap with one unsigned byte per channel.

    The pixel data is stored as numpy array of shape (height, width, 3) in
    R, G, B order. The array is copied on construction and flagged read-only,
    so a raster can be handed to any number of filters without one of them
    modifying the data another one reads.
    """

    def __init__(self, pixels: np.ndarray):
        """
        :param pixels: uint8 array of shape (height, width, 3). The data is
            copied, later modifications of the source array do not affect the
            raster.

        Raises a ValueError if the array has the wrong shape or type.
        """
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Expected RGB raster (H, W, 3), got shape {pixels.shape}")
        if pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 dtype, got {pixels.dtype}")
        if pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError(f"Raster must not be empty, got shape {pixels.shape}")
        data = np.array(pixels, dtype=np.uint8, copy=True)
        data.flags.writeable = False
        self._pixels = data
        "The read-only pixel data"

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def empty(cls) -> Raster:
        """
        Returns the canonical "no image" sentinel, a single black pixel.
        """
        return cls(np.zeros((1, 1, 3), dtype=np.uint8))

    @classmethod
    def new(cls, width: int, height: int, color: RgbColor = (0, 0, 0)) -> Raster:
        """
        Creates a raster filled with a single color.

        :param width: The width in pixels
        :param height: The height in pixels
        :param color: The fill color as (r, g, b)
        :return: The new raster
        """
        pixels = np.empty((height, width, 3), dtype=np.uint8)
        pixels[:, :] = color
        return cls(pixels)

    @classmethod
    def from_channels(cls, red: np.ndarray, green: np.ndarray, blue: np.ndarray) -> Raster:
        """
        Combines three equally sized planes into a raster.

        Float planes are clamped to [0, 255] and rounded, integer planes are
        clamped.

        :param red: The red plane (height, width)
        :param green: The green plane (height, width)
        :param blue: The blue plane (height, width)
        :return: The combined raster
        """
        if not (red.shape == green.shape == blue.shape):
            raise ValueError(
                f"Channel shapes differ: {red.shape}, {green.shape}, {blue.shape}"
            )
        return cls.from_float(np.stack([red, green, blue], axis=2))

    @classmethod
    def from_float(cls, values: np.ndarray) -> Raster:
        """
        Creates a raster from an arbitrary numeric (height, width, 3) array by
        clamping every sample to [0, 255] and rounding it.
        """
        return cls(to_u8(values))

    @classmethod
    def from_pil(cls, image: PIL.Image.Image) -> Raster:
        """
        Creates a raster from a PIL image, converting it to RGB first.
        """
        if image.mode != "RGB":
            image = image.convert("RGB")
        return cls(np.asarray(image, dtype=np.uint8))

    # ------------------------------------------------------------------
    # Raster I/O
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: PathTypes) -> Raster:
        """
        Reads an image file from disk. Alpha channels are dropped and
        palette or grayscale images are expanded to RGB.

        :param path: The file to read
        :return: The decoded raster

        Raises a RasterDecodeError if the file is missing or not an image.
        """
        try:
            with PIL.Image.open(path) as image:
                image.load()
                return cls.from_pil(image)
        except (OSError, ValueError, PIL.Image.DecompressionBombError) as e:
            logger.warning(f"Failed to read image from {path}: {e}")
            raise RasterDecodeError(f"Could not read image {path}: {e}") from e

    def save(self, target: PathTypes, quality: int = 90) -> None:
        """
        Saves the raster to disk. The format is derived from the extension.

        :param target: The target file name
        :param quality: The image quality between (0 = worst quality) and
            (95 = best quality), only used for JPEG

        Raises a RasterEncodeError if the format is not supported or the file
        can not be written.
        """
        extension = Path(target).suffix.lstrip(".").lower()
        if extension not in SUPPORTED_IMAGE_FILETYPE_SET:
            raise RasterEncodeError(
                f"Unsupported file type '{extension}', use one of "
                f"{', '.join(SUPPORTED_IMAGE_FILETYPES)}"
            )
        pil_format = _PIL_FORMATS.get(extension, extension)
        parameters = {}
        if pil_format == "jpeg":
            if not 0 <= quality <= 100:
                raise RasterEncodeError(f"JPEG quality must be in [0, 100], got {quality}")
            parameters["quality"] = quality
        try:
            self.to_pil().save(target, format=pil_format, **parameters)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to write image to {target}: {e}")
            raise RasterEncodeError(f"Could not write image {target}: {e}") from e
        logger.info(f"Saved {self} to {target}")

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    @property
    def pixels(self) -> np.ndarray:
        """
        Returns the read-only (height, width, 3) uint8 pixel array
        """
        return self._pixels

    @property
    def width(self) -> int:
        """The raster's width in pixels"""
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        """The raster's height in pixels"""
        return self._pixels.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        """
        Returns the raster's size as (width, height)
        """
        return self.width, self.height

    @property
    def is_empty(self) -> bool:
        """
        True if this is the 1x1 black "no image" sentinel
        """
        return self.size == (1, 1) and not self._pixels.any()

    def channels(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Returns the red, green and blue planes as float64 arrays of shape
        (height, width). The planes are new arrays and may be modified.
        """
        data = self._pixels.astype(np.float64)
        return data[:, :, 0], data[:, :, 1], data[:, :, 2]

    def split_channels(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Returns the red, green and blue planes as read-only uint8 views.
        """
        return self._pixels[:, :, 0], self._pixels[:, :, 1], self._pixels[:, :, 2]

    def to_pil(self) -> PIL.Image.Image:
        """
        Returns a new PIL image with this raster's pixels
        """
        return PIL.Image.fromarray(np.ascontiguousarray(self._pixels))

    def copy(self) -> Raster:
        """
        Creates an independent copy of this raster.
        """
        return Raster(self._pixels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Raster):
            return NotImplemented
        return self._pixels.shape == other._pixels.shape and bool(
            np.all(self._pixels == other._pixels)
        )

    __hash__ = None

    def __str__(self):
        return f"Raster ({self.width}x{self.height} RGB)"

    def __repr__(self):
        return f"Raster(width={self.width}, height={self.height})"


__all__ = ["Raster", "PathTypes", "RgbColor", "SUPPORTED_IMAGE_FILETYPES"]
