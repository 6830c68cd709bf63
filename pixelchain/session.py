"""Editing session owning one open raster and one filter chain."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from .config import settings
from .errors import ImageAlreadyOpenError, NoImageLoadedError
from .filters import Filter, FilterChain
from .raster import PathTypes, Raster

logger = logging.getLogger(__name__)

PreviewCallback = Callable[[Raster], None]


class EditorSession:
    """Holds the open image, its filter chain and the last rendered result.

    Commands arrive strictly one after another, so the session is not
    thread-safe and does not need to be.
    """

    def __init__(self, preview: PreviewCallback | None = None):
        """
        :param preview: Called with the rendered raster on ``render(show=True)``.
            None disables previews.
        """
        self.preview = preview
        self.path: Path | None = None
        "Location the current image was loaded from, None for in-memory images"
        self.base = Raster.empty()
        "The unmodified image"
        self.result = Raster.empty()
        "The last rendered image"
        self.chain = FilterChain()
        self.is_open = False

    def _require_open(self) -> None:
        if not self.is_open:
            raise NoImageLoadedError("No image loaded.")

    def open(self, path: PathTypes) -> Raster:
        """
        Loads an image file and starts a new chain.

        :param path: The file to load
        :return: The loaded raster

        Raises ImageAlreadyOpenError if another image is open and
        RasterDecodeError if the file can not be read.
        """
        if self.is_open:
            raise ImageAlreadyOpenError("Image already loaded. Close it first.")
        raster = Raster.load(path)
        self.open_raster(raster)
        self.path = Path(path)
        logger.info(f"Opened {raster} from {path}")
        return raster

    def open_raster(self, raster: Raster) -> None:
        """
        Starts editing an in-memory raster.
        """
        if self.is_open:
            raise ImageAlreadyOpenError("Image already loaded. Close it first.")
        self.path = None
        self.base = raster
        self.result = raster
        self.chain = FilterChain()
        self.is_open = True

    def add(self, filter: Filter | str) -> Filter:
        """
        Appends a filter to the chain.

        :param filter: A filter or its textual form, e.g. ``'blur 3 box'``
        :return: The appended filter

        Raises FilterParseError for malformed textual filters.
        """
        self._require_open()
        if isinstance(filter, str):
            filter = Filter.parse(filter)
        self.chain.add(filter)
        return filter

    def remove(self, index: int) -> Filter:
        """
        Removes the filter at ``index`` and returns it.

        Raises ChainIndexError if the index is out of range.
        """
        self._require_open()
        return self.chain.remove(index)

    def list(self) -> str:
        """
        Returns the index-prefixed filter listing.
        """
        self._require_open()
        return self.chain.describe()

    def render(self, show: bool = False) -> Raster:
        """
        Brings the result up to date with the chain.

        Only filters added since the last render are applied unless an
        already applied filter was removed in between.

        :param show: Hand the result to the preview callback
        :return: The rendered raster
        """
        self._require_open()
        self.result = self.chain.render(self.base, self.result)
        if show and self.preview is not None:
            self.preview(self.result)
        return self.result

    def save(self, path: PathTypes, quality: int | None = None) -> Raster:
        """
        Renders pending filters and writes the result.

        :param path: The target file, the format follows the extension
        :param quality: JPEG quality, ``settings.JPEG_QUALITY`` by default
        :return: The saved raster

        Raises RasterEncodeError if the file can not be written.
        """
        result = self.render()
        result.save(path, quality=settings.JPEG_QUALITY if quality is None else quality)
        return result

    def close(self) -> None:
        """
        Discards the image and the chain.
        """
        self._require_open()
        self.base = Raster.empty()
        self.result = Raster.empty()
        self.chain = FilterChain()
        self.path = None
        self.is_open = False
        logger.info("Image closed")
