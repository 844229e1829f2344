"""Best completion time per (game type, difficulty)."""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from .timer import format_time

logger = logging.getLogger(__name__)

NO_BEST_TIME = "--:--"


def best_time_key(game_type: str, difficulty: int) -> str:
    """Storage key for a game type and difficulty, e.g. 'slide-4'."""
    return f"{game_type}-{difficulty}"


class BestTimeStore(ABC):
    """Abstract durable key-value backend for best times."""

    @abstractmethod
    def read(self, game_type: str, difficulty: int) -> Optional[int]:
        """
        Read the best time for a game.

        Returns:
            Best time in seconds, or None if there is no record
        """
        pass

    @abstractmethod
    def write(self, game_type: str, difficulty: int, seconds: int) -> None:
        """Store a best time unconditionally."""
        pass


class MemoryBestTimeStore(BestTimeStore):
    """Best times kept in memory for the lifetime of the process."""

    def __init__(self, times: Optional[dict[str, int]] = None):
        self._times: dict[str, int] = dict(times or {})

    def read(self, game_type: str, difficulty: int) -> Optional[int]:
        return self._times.get(best_time_key(game_type, difficulty))

    def write(self, game_type: str, difficulty: int, seconds: int) -> None:
        self._times[best_time_key(game_type, difficulty)] = seconds


class JsonBestTimeStore(BestTimeStore):
    """
    Best times persisted as a single JSON object.

    The file maps keys such as "jigsaw-4" to a number of seconds. It is
    re-read on every access so several sessions can share it.
    """

    def __init__(self, path: str | Path):
        """
        Initialize the store.

        Args:
            path: JSON file holding the best times (created on first write)
        """
        self.path = Path(path)

    def _load(self) -> dict[str, int]:
        if not self.path.exists():
            return {}

        with open(self.path) as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Best times file {self.path} does not contain an object")
        return data

    def read(self, game_type: str, difficulty: int) -> Optional[int]:
        return self._load().get(best_time_key(game_type, difficulty))

    def write(self, game_type: str, difficulty: int, seconds: int) -> None:
        data = self._load()
        data[best_time_key(game_type, difficulty)] = seconds

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(data, f, indent=2)


class BestTimeCache:
    """
    Conditional-write front for a best-time store.

    A write is accepted only when no record exists or the new time is
    strictly smaller. A missing or failing store degrades to "no best time".
    """

    def __init__(self, store: Optional[BestTimeStore] = None):
        self.store = store

    def read(self, game_type: str, difficulty: int) -> Optional[int]:
        if self.store is None:
            return None

        key = best_time_key(game_type, difficulty)
        try:
            seconds = self.store.read(game_type, difficulty)
        except Exception as e:
            logger.warning(f"Could not read best time for {key}: {e}")
            return None

        if seconds is not None and (isinstance(seconds, bool) or not isinstance(seconds, (int, float))):
            logger.warning(f"Ignoring invalid best time for {key}: {seconds!r}")
            return None
        return seconds

    def write(self, game_type: str, difficulty: int, seconds: int) -> bool:
        """
        Record a completion time if it beats the current best.

        Returns:
            True if the store was updated
        """
        if self.store is None:
            return False

        current = self.read(game_type, difficulty)
        if current is not None and seconds >= current:
            return False

        try:
            self.store.write(game_type, difficulty, seconds)
        except Exception as e:
            logger.warning(f"Could not save best time for {best_time_key(game_type, difficulty)}: {e}")
            return False

        logger.info(f"New best time for {best_time_key(game_type, difficulty)}: {format_time(seconds)}")
        return True

    def formatted(self, game_type: str, difficulty: int) -> str:
        """Best time as MM:SS, or '--:--' when there is none."""
        seconds = self.read(game_type, difficulty)
        if seconds is None:
            return NO_BEST_TIME
        return format_time(seconds)
