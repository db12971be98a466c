from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterator

from geotiles.coord import GeoCoord, TileCoord
from geotiles.rect import Edge, GeoRect
from geotiles.tile_id import TileId


logger = logging.getLogger(__name__)

# Southern edge used for the last tile row.
_BOTTOM_ROW_LAT = -85.05113


def _tile_y_to_lat(y: float, n: float) -> float:
    # https://wiki.openstreetmap.org/wiki/Slippy_map_tilenames
    return math.atan(math.sinh(math.pi * (1.0 - 2.0 * y / n))) * 180.0 / math.pi


def _as_int(name: str, v: object) -> int:
    try:
        i = int(v)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {v!r}") from None
    if i != v:
        raise ValueError(f"{name} must be an integer, got {v!r}")
    return i


@dataclass(frozen=True)
class TileRange:
    """
    Inclusive rectangular range of tiles at one zoom, from `start` (top-left) to `end`
    (bottom-right).

    Iterates x-major, then y. A range whose start lies east of or below its end is
    empty, which is what a dateline-crossing bbox usually produces.
    """

    start: TileId
    end: TileId

    def is_empty(self) -> bool:
        return self.start.x > self.end.x or self.start.y > self.end.y

    def __iter__(self) -> Iterator[TileId]:
        z = self.start.z
        for x in range(self.start.x, self.end.x + 1):
            for y in range(self.start.y, self.end.y + 1):
                yield TileId(x=x, y=y, z=z)

    def __len__(self) -> int:
        w = max(0, self.end.x - self.start.x + 1)
        h = max(0, self.end.y - self.start.y + 1)
        return w * h

    def __contains__(self, tile_id: object) -> bool:
        if not isinstance(tile_id, TileId) or tile_id.z != self.start.z:
            return False
        return (
            self.start.x <= tile_id.x <= self.end.x
            and self.start.y <= tile_id.y <= self.end.y
        )


@dataclass(frozen=True)
class TileGrid:
    """
    Spherical Web-Mercator tile grid at a fixed zoom.

    `tile_extent` is the pixel size of one tile edge; intra-tile offsets are
    reported in that unit. The grid holds no state beyond its configuration.
    """

    z: int
    tile_extent: int

    def __post_init__(self) -> None:
        z = _as_int("zoom", self.z)
        tile_extent = _as_int("tile_extent", self.tile_extent)
        if z < 0:
            raise ValueError(f"zoom must be >= 0, got {z}")
        if tile_extent <= 0:
            raise ValueError(f"tile_extent must be > 0, got {tile_extent}")
        object.__setattr__(self, "z", z)
        object.__setattr__(self, "tile_extent", tile_extent)
        logger.debug("tile grid z=%d extent=%d", self.z, self.tile_extent)

    def _count(self) -> int:
        return 2**self.z

    def _project(self, coord: GeoCoord) -> tuple[float, float]:
        """
        Absolute position in tile units (0..2**z on both axes inside the Mercator limit).

        Not clamped: past +-85.0511 degrees y leaves [0, 2**z). asinh(tan) stays finite
        at the poles where log(tan + sec) would hit log(0).
        """
        n = float(self._count())
        x = (coord.lon + 180.0) / 360.0 * n
        lat_rad = coord.lat * math.pi / 180.0
        y = n * (1.0 - math.asinh(math.tan(lat_rad)) / math.pi) / 2.0
        return x, y

    def tile_id(self, coord: GeoCoord) -> tuple[TileId, TileCoord]:
        """
        Tile containing `coord`, and the pixel offset of `coord` inside it.

        Tile indices are clamped to the grid; the offset is not. lon == 180 maps into
        the last column with an x offset of `tile_extent`, and latitudes past the
        Mercator limit land in the first or last row with an offset outside the tile.
        """
        x, y = self._project(coord)
        last = self._count() - 1
        tx = max(0, min(last, math.floor(x)))
        ty = max(0, min(last, math.floor(y)))
        if (tx, ty) != (math.floor(x), math.floor(y)):
            logger.warning("tile index for %s clamped to the grid", coord)

        tile_coord = TileCoord(
            x=math.floor((x - tx) * self.tile_extent),
            y=math.floor((y - ty) * self.tile_extent),
        )
        return TileId(x=tx, y=ty, z=self.z), tile_coord

    def tile_coord(self, coord: GeoCoord, tile_id: TileId) -> TileCoord:
        """
        Pixel offset of `coord` relative to the origin of `tile_id`.

        The tile need not contain the coordinate; the offset is then outside
        [0, tile_extent).
        """
        x, y = self._project(coord)
        abs_x = math.floor(x * self.tile_extent)
        abs_y = math.floor(y * self.tile_extent)
        return TileCoord(
            x=abs_x - tile_id.x * self.tile_extent,
            y=abs_y - tile_id.y * self.tile_extent,
        )

    def neighbours(self, tile_id: TileId) -> list[tuple[Edge, TileId]]:
        """
        Up to 8 surrounding tiles keyed by the edge they touch.

        Columns wrap around the antimeridian; rows stop at the top and bottom of
        the grid.
        """
        count = self._count()
        z = tile_id.z
        out: list[tuple[Edge, TileId]] = []

        left_x = tile_id.x - 1 if tile_id.x > 0 else count - 1
        right_x = tile_id.x + 1 if tile_id.x < count - 1 else 0
        out.append((Edge.LEFT, TileId(x=left_x, y=tile_id.y, z=z)))
        out.append((Edge.RIGHT, TileId(x=right_x, y=tile_id.y, z=z)))

        if tile_id.y > 0:
            top_y = tile_id.y - 1
            out.append((Edge.TOP, TileId(x=tile_id.x, y=top_y, z=z)))
            out.append((Edge.TOP | Edge.LEFT, TileId(x=left_x, y=top_y, z=z)))
            out.append((Edge.TOP | Edge.RIGHT, TileId(x=right_x, y=top_y, z=z)))

        if tile_id.y < count - 1:
            bottom_y = tile_id.y + 1
            out.append((Edge.BOTTOM, TileId(x=tile_id.x, y=bottom_y, z=z)))
            out.append((Edge.BOTTOM | Edge.LEFT, TileId(x=left_x, y=bottom_y, z=z)))
            out.append((Edge.BOTTOM | Edge.RIGHT, TileId(x=right_x, y=bottom_y, z=z)))

        return out

    def tile_bbox(self, tile_id: TileId) -> GeoRect:
        n = float(self._count())

        left = tile_id.x * 360.0 / n - 180.0
        right = left + 360.0 / n
        top = _tile_y_to_lat(tile_id.y, n)

        # TODO: y never reaches 2**z for a valid TileId; the last row (2**z - 1) is
        # probably what this guard was meant for.
        if tile_id.y == self._count():
            bottom = _BOTTOM_ROW_LAT
        else:
            bottom = _tile_y_to_lat(tile_id.y + 1, n)

        return GeoRect(
            top_left=GeoCoord.from_degrees(left, top),
            bottom_right=GeoCoord.from_degrees(right, bottom),
        )

    def tile_bbox_with_buf(self, tile_id: TileId, buf: float) -> GeoRect:
        """
        Tile bbox grown by `buf * tile_extent` pixels on every side.

        No dateline or pole handling: a buffer pushing past the first or last
        column raises InvalidGeoCoord.
        """
        abs_count = float(self.tile_extent * self._count())
        actual_buf = max(0, int(buf * self.tile_extent))

        tl_abs_x = tile_id.x * self.tile_extent - actual_buf
        tl_abs_y = tile_id.y * self.tile_extent - actual_buf
        br_abs_x = (tile_id.x + 1) * self.tile_extent + actual_buf
        br_abs_y = (tile_id.y + 1) * self.tile_extent + actual_buf

        left = 360.0 * (tl_abs_x / abs_count) - 180.0
        right = 360.0 * (br_abs_x / abs_count) - 180.0
        top = _tile_y_to_lat(tl_abs_y / abs_count, 1.0)
        bottom = _tile_y_to_lat(br_abs_y / abs_count, 1.0)

        return GeoRect(
            top_left=GeoCoord.from_degrees(left, top),
            bottom_right=GeoCoord.from_degrees(right, bottom),
        )

    def region(self, bbox: GeoRect) -> TileRange:
        """
        Inclusive tile range covering `bbox`.

        A dateline-crossing bbox is not split, so its range is inverted (empty) unless
        both corners fall in the same column.
        """
        start, _ = self.tile_id(bbox.top_left)
        end, _ = self.tile_id(bbox.bottom_right)
        if bbox.crosses_dateline():
            logger.warning("region bbox crosses the dateline; tile range is not wrapped")
        else:
            logger.debug("region %s .. %s", start, end)
        return TileRange(start=start, end=end)
