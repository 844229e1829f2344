"""Configuration for puzzle game sessions."""

from dataclasses import dataclass
from typing import Literal, Optional
import os

GameType = Literal["slide", "jigsaw"]

SLIDE_DIFFICULTY_LEVELS = list(range(3, 11))
JIGSAW_DIFFICULTY_LEVELS = list(range(2, 13))

DEFAULT_DIFFICULTY = {
    "slide": 3,
    "jigsaw": 4,
}

DIFFICULTY_LEVELS = {
    "slide": SLIDE_DIFFICULTY_LEVELS,
    "jigsaw": JIGSAW_DIFFICULTY_LEVELS,
}

BEST_TIMES_ENV_VAR = "PLAYZZLE_BEST_TIMES"
HISTORY_ENV_VAR = "PLAYZZLE_HISTORY"


def validate_game(game_type: str, difficulty: int) -> None:
    """
    Check a game type / difficulty pair.

    Raises:
        ValueError: If the game type is unknown or the difficulty is out of range
    """
    if game_type not in DIFFICULTY_LEVELS:
        raise ValueError(
            f"Invalid game type: {game_type}. Must be one of: {', '.join(DIFFICULTY_LEVELS)}"
        )

    levels = DIFFICULTY_LEVELS[game_type]
    if difficulty not in levels:
        raise ValueError(
            f"Invalid difficulty {difficulty} for {game_type}. "
            f"Must be between {levels[0]} and {levels[-1]}"
        )


@dataclass
class GameConfig:
    """Configuration for a puzzle game session."""

    game_type: GameType = "jigsaw"
    difficulty: Optional[int] = None  # None picks the default for the game type
    shuffle_seed: Optional[int] = None

    # Jigsaw settings
    snap_tolerance: float = 0.3  # Fraction of a cell width
    jigsaw_width_ratio: float = 0.6
    jigsaw_height_ratio: float = 0.9

    # Slide settings
    slide_width_ratio: float = 0.9
    slide_height_ratio: float = 0.9

    # Keep in-progress boards across container resizes
    reshuffle_on_resize: bool = False

    # Storage
    best_times_path: Optional[str] = None
    history_path: Optional[str] = None

    def __post_init__(self):
        if self.difficulty is None:
            self.difficulty = DEFAULT_DIFFICULTY.get(self.game_type, 4)
        if self.best_times_path is None:
            self.best_times_path = os.environ.get(BEST_TIMES_ENV_VAR) or None
        if self.history_path is None:
            self.history_path = os.environ.get(HISTORY_ENV_VAR) or None

    def validate(self) -> None:
        """Raise ValueError if the configuration cannot produce a playable game."""
        validate_game(self.game_type, self.difficulty)

        if not 0 < self.snap_tolerance < 1:
            raise ValueError(f"Snap tolerance must be between 0 and 1. Got: {self.snap_tolerance}")

        for name in (
            "jigsaw_width_ratio",
            "jigsaw_height_ratio",
            "slide_width_ratio",
            "slide_height_ratio",
        ):
            value = getattr(self, name)
            if not 0 < value <= 1:
                raise ValueError(f"{name} must be in (0, 1]. Got: {value}")

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "game_type": self.game_type,
            "difficulty": self.difficulty,
            "shuffle_seed": self.shuffle_seed,
            "snap_tolerance": self.snap_tolerance,
            "jigsaw_width_ratio": self.jigsaw_width_ratio,
            "jigsaw_height_ratio": self.jigsaw_height_ratio,
            "slide_width_ratio": self.slide_width_ratio,
            "slide_height_ratio": self.slide_height_ratio,
            "reshuffle_on_resize": self.reshuffle_on_resize,
            "best_times_path": self.best_times_path,
            "history_path": self.history_path,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GameConfig":
        """Create from dictionary."""
        return cls(
            game_type=data.get("game_type", "jigsaw"),
            difficulty=data.get("difficulty"),
            shuffle_seed=data.get("shuffle_seed"),
            snap_tolerance=data.get("snap_tolerance", 0.3),
            jigsaw_width_ratio=data.get("jigsaw_width_ratio", 0.6),
            jigsaw_height_ratio=data.get("jigsaw_height_ratio", 0.9),
            slide_width_ratio=data.get("slide_width_ratio", 0.9),
            slide_height_ratio=data.get("slide_height_ratio", 0.9),
            reshuffle_on_resize=data.get("reshuffle_on_resize", False),
            best_times_path=data.get("best_times_path"),
            history_path=data.get("history_path"),
        )
