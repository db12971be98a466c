"""
Web-Mercator tile math over validated WGS84 coordinates.

Coordinates and rectangles are immutable values; the antimeridian and the poles
are handled by GeoCoord equality and GeoRect predicates.
"""
from .coord import CompactGeoCoord, GeoCoord, TileCoord
from .errors import InvalidGeoCoord, InvalidGeoRect, InvalidTileId
from .grid import TileGrid, TileRange
from .rect import Edge, GeoRect
from .tile_id import TileId, TmsTileId

__all__ = [
    "CompactGeoCoord",
    "Edge",
    "GeoCoord",
    "GeoRect",
    "InvalidGeoCoord",
    "InvalidGeoRect",
    "InvalidTileId",
    "TileCoord",
    "TileGrid",
    "TileId",
    "TileRange",
    "TmsTileId",
]
