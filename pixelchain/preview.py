"""Preview window for rendered rasters."""

from __future__ import annotations

import logging

from .config import settings
from .raster import Raster

logger = logging.getLogger(__name__)


def show_raster(raster: Raster, title: str | None = None) -> None:
    """
    Displays a raster using Pillow's platform image viewer.

    :param raster: The raster to display
    :param title: The window title, ``settings.PREVIEW_TITLE`` by default
    """
    title = title or settings.PREVIEW_TITLE
    logger.debug(f"Showing {raster} as '{title}'")
    raster.to_pil().show(title=title)


__all__ = ["show_raster"]
