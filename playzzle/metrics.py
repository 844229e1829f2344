"""Stats snapshots and completion events for puzzle sessions."""

from dataclasses import dataclass
from typing import Optional
import json
from pathlib import Path

from .timer import format_time


@dataclass(frozen=True)
class SessionStats:
    """What the host displays while a game is running."""

    moves: int
    elapsed_seconds: int
    state: str

    @property
    def time(self) -> str:
        """Elapsed time as MM:SS."""
        return format_time(self.elapsed_seconds)

    def to_dict(self) -> dict:
        return {
            "moves": self.moves,
            "elapsed_seconds": self.elapsed_seconds,
            "time": self.time,
            "state": self.state,
        }


def category_from_puzzle_id(puzzle_id: str) -> str:
    """The category is the first segment of a puzzle id like 'animals/cat-1'."""
    return puzzle_id.split("/")[0]


@dataclass
class CompletionEvent:
    """A solved puzzle, as forwarded to the completion recorder."""

    puzzle_id: str
    category: str
    game_type: str
    difficulty: int
    time_in_seconds: int
    moves: int
    completed_at: Optional[str] = None  # Filled in by recorders that store events

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        data = {
            "puzzle_id": self.puzzle_id,
            "category": self.category,
            "game_type": self.game_type,
            "difficulty": self.difficulty,
            "time_in_seconds": self.time_in_seconds,
            "moves": self.moves,
        }
        if self.completed_at is not None:
            data["completed_at"] = self.completed_at
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CompletionEvent":
        """Load from dictionary."""
        return cls(
            puzzle_id=data["puzzle_id"],
            category=data.get("category") or category_from_puzzle_id(data["puzzle_id"]),
            game_type=data["game_type"],
            difficulty=data["difficulty"],
            time_in_seconds=data["time_in_seconds"],
            moves=data["moves"],
            completed_at=data.get("completed_at"),
        )

    def save(self, path: str | Path) -> None:
        """Save the event to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str | Path) -> "CompletionEvent":
        """Load from JSON file."""
        with open(path) as f:
            data = json.load(f)
        return cls.from_dict(data)
