"""Map file persistence."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from wallslide.models.gamemap import GameMap, MalformedMapError

logger = logging.getLogger(__name__)


class MapStore:
    """Saves, lists and loads generated maps as JSON files in a directory."""

    def __init__(self, directory: Path, prefix: str = "Map_") -> None:
        self.directory = directory
        self.prefix = prefix

    # -- persistence ----------------------------------------------------------

    def save(self, game_map: GameMap, name: str | None = None) -> Path:
        """Write *game_map* and return the file path.

        Without *name* the file is called ``<prefix><N>moves_<timestamp>.json``.
        """
        self.directory.mkdir(parents=True, exist_ok=True)
        if name is None:
            moves = game_map.min_moves or 0
            stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            name = f"{self.prefix}{moves}moves_{stamp}.json"
        path = self.directory / name
        path.write_text(json.dumps(game_map.to_dict(), indent=2) + "\n")
        logger.info(f"Saved map to {path} (seed: {game_map.seed})")
        return path

    @staticmethod
    def load(path: Path) -> GameMap:
        try:
            data = json.loads(Path(path).read_text())
        except json.JSONDecodeError as e:
            raise MalformedMapError(f"{path} is not valid JSON: {e}") from e
        return GameMap.from_dict(data)

    # -- queries --------------------------------------------------------------

    def list_maps(self) -> list[Path]:
        if not self.directory.exists():
            return []
        return sorted(self.directory.glob("*.json"))

    def load_all(self) -> list[tuple[Path, GameMap]]:
        """Load every map in the directory, skipping unreadable files."""
        maps: list[tuple[Path, GameMap]] = []
        for path in self.list_maps():
            try:
                maps.append((path, self.load(path)))
            except (OSError, MalformedMapError) as e:
                logger.warning(f"Skipping {path.name}: {e}")
        return maps
