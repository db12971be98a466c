from __future__ import annotations

from dataclasses import dataclass

from geotiles.errors import InvalidTileId


@dataclass(frozen=True)
class _TileTriple:
    x: int
    y: int
    z: int

    def __post_init__(self) -> None:
        try:
            x, y, z = int(self.x), int(self.y), int(self.z)
        except (TypeError, ValueError):
            raise InvalidTileId() from None
        # Non-integral indices would otherwise truncate to a different tile.
        if (x, y, z) != (self.x, self.y, self.z) or z < 0:
            raise InvalidTileId()
        n = 2**z
        if not (0 <= x < n and 0 <= y < n):
            raise InvalidTileId()
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)
        object.__setattr__(self, "z", z)

    def _flipped_y(self) -> int:
        return 2**self.z - 1 - self.y

    def __str__(self) -> str:
        return f"{self.z}/{self.x}/{self.y}"


@dataclass(frozen=True)
class TileId(_TileTriple):
    """
    XYZ ("slippy") tile address: y grows southward from the top row.
    """

    @classmethod
    def new(cls, x: int, y: int, z: int) -> "TileId":
        return cls(x=x, y=y, z=z)

    def to_tms(self) -> "TmsTileId":
        return TmsTileId(x=self.x, y=self._flipped_y(), z=self.z)


@dataclass(frozen=True)
class TmsTileId(_TileTriple):
    """
    TMS tile address: same grid as TileId with y growing northward from the bottom row.
    """

    @classmethod
    def new(cls, x: int, y: int, z: int) -> "TmsTileId":
        return cls(x=x, y=y, z=z)

    def to_xyz(self) -> TileId:
        return TileId(x=self.x, y=self._flipped_y(), z=self.z)
