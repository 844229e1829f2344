"""Playzzle - sliding-tile and jigsaw puzzle engines built from a single image."""

from .config import GameConfig
from .best_time import BestTimeCache, JsonBestTimeStore, MemoryBestTimeStore
from .geometry import BoardGeometry, Point, Rect, Size
from .jigsaw import JigsawBoard, JigsawPiece
from .metrics import CompletionEvent, SessionStats
from .recorder import CallbackRecorder, CompletionRecorder, JsonHistoryRecorder
from .renderer import PuzzleImage
from .session import GameSession, GameState
from .slide import SlideBoard, is_solvable
from .timer import GameTimer, MoveCounter, format_time

__version__ = "0.1.0"

__all__ = [
    "GameConfig",
    "BestTimeCache",
    "JsonBestTimeStore",
    "MemoryBestTimeStore",
    "BoardGeometry",
    "Point",
    "Rect",
    "Size",
    "JigsawBoard",
    "JigsawPiece",
    "CompletionEvent",
    "SessionStats",
    "CallbackRecorder",
    "CompletionRecorder",
    "JsonHistoryRecorder",
    "PuzzleImage",
    "GameSession",
    "GameState",
    "SlideBoard",
    "is_solvable",
    "GameTimer",
    "MoveCounter",
    "format_time",
]
