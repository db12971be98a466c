from __future__ import annotations

from dataclasses import dataclass
from enum import Flag

from geotiles.coord import GeoCoord
from geotiles.errors import InvalidGeoRect


class Edge(Flag):
    """
    Compass side of a tile; diagonals combine two members (e.g. TOP | LEFT).
    """

    LEFT = 0b0001
    RIGHT = 0b0010
    BOTTOM = 0b0100
    TOP = 0b1000


@dataclass(frozen=True)
class GeoRect:
    """
    Axis-aligned lon/lat rectangle given by its top-left and bottom-right corners.

    Convention used throughout this package:
    - top_left.lat >= bottom_right.lat (enforced)
    - top_left.lon > bottom_right.lon means the rectangle crosses the antimeridian,
      i.e. it spans [top_left.lon, 180] + [-180, bottom_right.lon]
    """

    top_left: GeoCoord
    bottom_right: GeoCoord

    def __post_init__(self) -> None:
        if self.top_left.lat < self.bottom_right.lat:
            raise InvalidGeoRect()

    @classmethod
    def new(cls, top_left: GeoCoord, bottom_right: GeoCoord) -> "GeoRect":
        return cls(top_left=top_left, bottom_right=bottom_right)

    def crosses_dateline(self) -> bool:
        return self.top_left.lon > self.bottom_right.lon

    def center(self) -> GeoCoord:
        lat = (self.top_left.lat + self.bottom_right.lat) / 2.0

        if self.crosses_dateline():
            # Distances from each corner to the antimeridian, halved and measured eastward.
            a = 180.0 - self.top_left.lon
            b = abs(-180.0 - self.bottom_right.lon)
            lon = (a + b) / 2.0 + self.top_left.lon
            if lon > 180.0:
                lon -= 360.0
        else:
            lon = (self.top_left.lon + self.bottom_right.lon) / 2.0

        return GeoCoord.from_degrees(lon, lat)

    def contains_lon(self, lon: float) -> bool:
        if not self.crosses_dateline():
            return self.top_left.lon <= lon <= self.bottom_right.lon
        return lon >= self.top_left.lon or lon <= self.bottom_right.lon

    def contains_coord(self, coord: GeoCoord) -> bool:
        if self.bottom_right.lat <= coord.lat <= self.top_left.lat:
            return self.contains_lon(coord.lon)
        return False

    def contains_rect(self, rect: "GeoRect") -> bool:
        """
        Corner containment of both corners of `rect`.

        A non-crossing rectangle can only hold a crossing one when it spans the
        whole longitude range.
        """
        if not self.crosses_dateline() and rect.crosses_dateline():
            if self.top_left.lon > -180.0 or self.bottom_right.lon < 180.0:
                return False

        return self.contains_coord(rect.top_left) and self.contains_coord(rect.bottom_right)

    def intersects(self, rect: "GeoRect") -> bool:
        """
        Latitude bands must overlap; rectangles sharing a pole always intersect.

        Longitude overlap only checks whether one of `rect`'s corner longitudes
        lies in this rectangle's span. That is not symmetric: a wide `rect` that
        fully covers a narrow `self` is reported as disjoint.
        """
        tl_lat = self.top_left.lat
        br_lat = self.bottom_right.lat

        if rect.top_left.lat < br_lat or rect.bottom_right.lat > tl_lat:
            return False
        if (abs(tl_lat) == 90.0 and tl_lat == rect.top_left.lat) or (
            abs(br_lat) == 90.0 and br_lat == rect.bottom_right.lat
        ):
            return True
        return self.contains_lon(rect.top_left.lon) or self.contains_lon(rect.bottom_right.lon)
