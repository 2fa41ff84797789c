"""LevelStore - JSON file persistence for game progress.

Keeps the current level number and the last generated level record so a
restarted game shows the same board. The store is the only place that
touches the file system; the model and generator never do.

File format:
    {"level": 3, "saved_level": {<Level record>} | null}
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pathpuzzle.constants import LevelConfig, StorageConfig
from pathpuzzle.model.level import Level, level_from_record, level_to_record

logger = logging.getLogger(__name__)


class LevelStore:
    """File-backed store for the level number and the saved level.

    Example:
        store = LevelStore(path=tmp_dir / "save.json")
        store.save_level(level)
        store.load_saved_level()  # equivalent Level, no regeneration
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        """Initialize store.

        Args:
            path: Save file location. Defaults to output/pathpuzzle/save.json.
        """
        self.path = Path(path) if path is not None else StorageConfig.SAVE_DIR / StorageConfig.SAVE_FILENAME

    # =========================================================================
    # Level Number
    # =========================================================================

    def load_level_number(self) -> int:
        """Stored level number, or the first level if nothing valid is stored."""
        level = self._read().get("level")
        if isinstance(level, int) and not isinstance(level, bool) and level >= LevelConfig.FIRST_LEVEL:
            return level
        return LevelConfig.FIRST_LEVEL

    def save_level_number(self, level: int) -> None:
        data = self._read()
        data["level"] = level
        self._write(data=data)

    # =========================================================================
    # Saved Level
    # =========================================================================

    def load_saved_level(self) -> Optional[Level]:
        """Saved level, or None if absent or unreadable."""
        record = self._read().get("saved_level")
        if record is None:
            return None
        try:
            return level_from_record(data=record)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring invalid saved level in {self.path}: {e}")
            return None

    def save_level(self, level: Level) -> None:
        data = self._read()
        data["saved_level"] = level_to_record(level=level)
        self._write(data=data)
        logger.info(f"Saved level {level.number} to {self.path.name}")

    def clear_saved_level(self) -> None:
        data = self._read()
        if data.pop("saved_level", None) is not None:
            self._write(data=data)

    def reset(self) -> None:
        """Delete all stored progress."""
        self.path.unlink(missing_ok=True)
        logger.info(f"Reset game progress ({self.path.name} removed)")

    # =========================================================================
    # File Access
    # =========================================================================

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read save file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Save file {self.path} does not contain an object, ignoring it")
            return {}
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
