from __future__ import annotations

import math
from dataclasses import dataclass

from geotiles.errors import InvalidGeoCoord


_NANO = 1_000_000_000.0

# Fixed-point scales: longitude spans the full int32 range, latitude half of it.
_LON_SCALE = float(1 << 31)
_LAT_SCALE = float(1 << 30)

_I32_MIN = -(1 << 31)
_I32_MAX = (1 << 31) - 1


@dataclass(frozen=True, eq=False)
class GeoCoord:
    """
    WGS84 longitude/latitude pair in degrees.

    Construction validates the range, so every live instance satisfies
    lon in [-180, 180] and lat in [-90, 90] (NaN and infinities are rejected).

    Equality is not field-wise: all points on the antimeridian compare equal,
    and any two points at the same pole compare equal. See `same_point`.
    """

    lon: float
    lat: float

    def __post_init__(self) -> None:
        try:
            lon = float(self.lon)
            lat = float(self.lat)
        except (TypeError, ValueError):
            raise InvalidGeoCoord() from None
        # Comparisons against NaN are false, so NaN falls through to the error.
        if not (-180.0 <= lon <= 180.0 and -90.0 <= lat <= 90.0):
            raise InvalidGeoCoord()
        object.__setattr__(self, "lon", lon)
        object.__setattr__(self, "lat", lat)

    @classmethod
    def from_degrees(cls, lon: float, lat: float) -> "GeoCoord":
        return cls(lon=lon, lat=lat)

    @classmethod
    def from_nanodegrees(cls, lon: int, lat: int) -> "GeoCoord":
        return cls.from_degrees(float(int(lon)) / _NANO, float(int(lat)) / _NANO)

    def to_nanodegrees(self) -> tuple[int, int]:
        """
        Integer nanodegrees, truncated toward negative infinity (lossy).
        """
        return math.floor(self.lon * _NANO), math.floor(self.lat * _NANO)

    def same_point(self, other: "GeoCoord") -> bool:
        """
        Degeneracy-aware point identity.

        - both longitudes on the antimeridian (|lon| == 180): equal, latitude is not compared
        - same latitude and that latitude is a pole (|lat| == 90): equal for any longitude
        - otherwise exact float comparison of both fields
        """
        if abs(self.lon) == 180.0 and abs(other.lon) == 180.0:
            return True
        if self.lat == other.lat and abs(self.lat) == 90.0:
            return True
        return self.lon == other.lon and self.lat == other.lat

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GeoCoord):
            return NotImplemented
        return self.same_point(other)

    def __hash__(self) -> int:
        # Antimeridian and pole points are equal across otherwise different fields.
        if abs(self.lon) == 180.0 or abs(self.lat) == 90.0:
            return hash((180.0, 90.0))
        return hash((self.lon, self.lat))


def _saturate_i32(v: int) -> int:
    return max(_I32_MIN, min(_I32_MAX, v))


def _interleave(x: int, y: int) -> int:
    # x bits land on even positions, y bits on odd ones; bit 63 is the sign bit.
    morton = 0
    for i in range(32):
        morton |= (x & (1 << i)) << i | (y & (1 << i)) << (i + 1)
    if morton >= 1 << 63:
        morton -= 1 << 64
    return morton


@dataclass(frozen=True)
class CompactGeoCoord:
    """
    A WGS84 coordinate encoded into two signed 32-bit integers.

    lon is scaled by 2**31 / 180 and lat by 2**30 / 90, both floored. Encoding is
    lossy; decoding a stored pair is exact.

    The float-to-int cast saturates: lon == 180 encodes to 2**31 - 1 rather than
    wrapping, so it decodes to a point just west of the antimeridian.
    """

    lon: int
    lat: int

    def __post_init__(self) -> None:
        for v in (self.lon, self.lat):
            if not _I32_MIN <= int(v) <= _I32_MAX:
                raise ValueError(f"compact coordinate field out of int32 range: {v}")
        object.__setattr__(self, "lon", int(self.lon))
        object.__setattr__(self, "lat", int(self.lat))

    @classmethod
    def from_geo(cls, coord: GeoCoord) -> "CompactGeoCoord":
        return cls(
            lon=_saturate_i32(math.floor(coord.lon / 180.0 * _LON_SCALE)),
            lat=_saturate_i32(math.floor(coord.lat / 90.0 * _LAT_SCALE)),
        )

    def to_geo(self) -> GeoCoord:
        # Raw pairs not produced by from_geo may decode past +-90 latitude.
        return GeoCoord.from_degrees(
            self.lon * 180.0 / _LON_SCALE,
            self.lat * 90.0 / _LAT_SCALE,
        )

    def morton_code(self) -> int:
        """
        Z-order key: lon bit 0, lat bit 0, lon bit 1, lat bit 1, ...

        Fields are sign-extended before interleaving; the result is a signed int64.
        Useful as a spatial sort key.
        """
        return _interleave(self.lon, self.lat)


@dataclass(frozen=True)
class TileCoord:
    """
    Pixel offset relative to a tile's top-left corner.

    Not range-checked: buffered or mismatched-tile queries can land outside the tile.
    """

    x: int
    y: int

    @classmethod
    def from_pair(cls, pair: tuple[int, int]) -> "TileCoord":
        x, y = pair
        return cls(x=int(x), y=int(y))

    def as_pair(self) -> tuple[int, int]:
        return self.x, self.y

    def diff_to(self, to: "TileCoord") -> "TileCoord":
        return TileCoord(x=to.x - self.x, y=to.y - self.y)
