from __future__ import annotations

from functools import lru_cache

from pyproj import Transformer
from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry import box as shapely_box

from geotiles.coord import GeoCoord
from geotiles.grid import TileGrid
from geotiles.rect import GeoRect
from geotiles.tile_id import TileId


@lru_cache(maxsize=1)
def transformer_4326_to_3857() -> Transformer:
    return Transformer.from_crs("EPSG:4326", "EPSG:3857", always_xy=True)


def to_web_mercator(coord: GeoCoord) -> tuple[float, float]:
    """
    EPSG:3857 (x, y) in meters.
    """
    x, y = transformer_4326_to_3857().transform(coord.lon, coord.lat)
    return float(x), float(y)


def rect_to_polygon(rect: GeoRect) -> Polygon | MultiPolygon:
    """
    Shapely geometry of a GeoRect in lon/lat degrees.

    A dateline-crossing rect is split at +-180 into two boxes, so shapely's planar
    predicates see the same area the rect describes.
    """
    tl = rect.top_left
    br = rect.bottom_right
    if not rect.crosses_dateline():
        return shapely_box(tl.lon, br.lat, br.lon, tl.lat)
    return MultiPolygon(
        [
            shapely_box(tl.lon, br.lat, 180.0, tl.lat),
            shapely_box(-180.0, br.lat, br.lon, tl.lat),
        ]
    )


def tile_polygon(grid: TileGrid, tile_id: TileId, buf: float = 0.0) -> Polygon | MultiPolygon:
    bbox = grid.tile_bbox_with_buf(tile_id, buf) if buf else grid.tile_bbox(tile_id)
    return rect_to_polygon(bbox)
