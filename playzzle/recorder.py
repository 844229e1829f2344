"""Completion recorders: where solved puzzles are reported."""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from .metrics import CompletionEvent

logger = logging.getLogger(__name__)


class CompletionRecorder(ABC):
    """Abstract base class for completion history backends."""

    @abstractmethod
    def record(self, event: CompletionEvent) -> dict:
        """
        Record a solved puzzle.

        Args:
            event: The completion to record

        Returns:
            Dict with a boolean "success" key
        """
        pass


class CallbackRecorder(CompletionRecorder):
    """Forwards completions to a host-supplied callable."""

    def __init__(self, callback: Callable[[CompletionEvent], Any]):
        self.callback = callback

    def record(self, event: CompletionEvent) -> dict:
        result = self.callback(event)
        if isinstance(result, dict):
            return result
        return {"success": result is not False}


class JsonHistoryRecorder(CompletionRecorder):
    """
    Appends completions to a JSON history file.

    The file holds {"events": [...]} with one entry per solved puzzle,
    each stamped with its completion time.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load_events(self) -> list[CompletionEvent]:
        """Read every recorded completion."""
        if not self.path.exists():
            return []

        with open(self.path) as f:
            data = json.load(f)

        return [CompletionEvent.from_dict(e) for e in data.get("events", [])]

    def record(self, event: CompletionEvent) -> dict:
        try:
            events = self.load_events()
        except (OSError, ValueError, KeyError) as e:
            logger.warning(f"Could not read completion history {self.path}: {e}")
            return {"success": False}

        event.completed_at = datetime.now().isoformat()
        events.append(event)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump({"events": [e.to_dict() for e in events]}, f, indent=2)
        except OSError as e:
            logger.warning(f"Could not write completion history {self.path}: {e}")
            return {"success": False}

        logger.debug(f"Recorded completion of {event.puzzle_id} to {self.path}")
        return {"success": True}
