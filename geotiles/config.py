from __future__ import annotations

import logging
import os

from geotiles.grid import TileGrid


logger = logging.getLogger(__name__)

DEFAULT_TILE_EXTENT = 4096
DEFAULT_ZOOM = 14
MAX_ZOOM = 30


def _env_int(name: str, default: int, *, lo: int, hi: int | None = None) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        v = int(raw)
    except ValueError:
        logger.warning("ignoring %s=%r: not an integer", name, raw)
        return default
    if v < lo or (hi is not None and v > hi):
        logger.warning("ignoring %s=%r: out of range", name, raw)
        return default
    return v


def tile_extent() -> int:
    return _env_int("GEOTILES_TILE_EXTENT", DEFAULT_TILE_EXTENT, lo=1)


def zoom() -> int:
    return _env_int("GEOTILES_ZOOM", DEFAULT_ZOOM, lo=0, hi=MAX_ZOOM)


def default_grid() -> TileGrid:
    """
    Grid built from GEOTILES_ZOOM / GEOTILES_TILE_EXTENT (read on every call).
    """
    return TileGrid(z=zoom(), tile_extent=tile_extent())
