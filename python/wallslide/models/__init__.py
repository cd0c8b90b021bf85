from wallslide.models.gamemap import (
    Cell,
    Direction,
    GameMap,
    MalformedMapError,
    ObstacleKind,
)
from wallslide.models.mapstore import MapStore

__all__ = [
    "Cell",
    "Direction",
    "GameMap",
    "MalformedMapError",
    "MapStore",
    "ObstacleKind",
]
