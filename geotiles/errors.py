from __future__ import annotations


class InvalidGeoCoord(ValueError):
    """
    Longitude/latitude out of range or not finite.
    """

    def __init__(self, msg: str = "invalid coordinate given") -> None:
        super().__init__(msg)


class InvalidGeoRect(ValueError):
    """
    Top-left latitude below the bottom-right latitude.
    """

    def __init__(self, msg: str = "invalid rectangle given") -> None:
        super().__init__(msg)


class InvalidTileId(ValueError):
    """
    Tile x or y index outside the 2**z grid.
    """

    def __init__(self, msg: str = "invalid tile ID given") -> None:
        super().__init__(msg)
