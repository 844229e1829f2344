"""Game session controller shared by the slide and jigsaw puzzles."""

import dataclasses
import logging
import random
from enum import Enum
from typing import Callable, Optional

from .best_time import BestTimeCache, JsonBestTimeStore, MemoryBestTimeStore
from .config import DEFAULT_DIFFICULTY, GameConfig, validate_game
from .geometry import BoardGeometry, Point, Rect, Size
from .jigsaw import DropResult, JigsawBoard, JigsawPiece
from .metrics import CompletionEvent, SessionStats, category_from_puzzle_id
from .recorder import CompletionRecorder, JsonHistoryRecorder
from .slide import SlideBoard
from .timer import GameTimer, MoveCounter

logger = logging.getLogger(__name__)


class GameState(str, Enum):
    INITIAL = "initial"
    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"
    SOLVED = "solved"


# States in which the board is still in its home layout
HOME_STATES = (GameState.INITIAL, GameState.READY)


class GameSession:
    """
    Orchestrates one puzzle from image load to completion.

    The session owns the timer, the move counter and the active board
    (a SlideBoard or a JigsawBoard depending on the game type), gates
    player interaction by state, and reports each completion exactly once
    to the best-time cache and the completion recorder.
    """

    def __init__(
        self,
        config: GameConfig,
        container: Size,
        best_times: Optional[BestTimeCache] = None,
        recorder: Optional[CompletionRecorder] = None,
        puzzle_id: Optional[str] = None,
        category: Optional[str] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Initialize the session in the initial state.

        Args:
            config: Game configuration (copied, never mutated)
            container: Space available to the puzzle, in pixels
            best_times: Best-time cache (defaults to one built from config)
            recorder: Completion recorder (defaults to one built from config)
            puzzle_id: Identifier such as "animals/cat-1"; completions are
                only recorded when it is set
            category: Puzzle category (defaults to the first segment of puzzle_id)
            clock: Monotonic clock for the timer
        """
        config = dataclasses.replace(config)
        config.validate()
        container.validate("Container size")

        self.config = config
        self.container = container
        self.puzzle_id = puzzle_id
        self.category = category or (category_from_puzzle_id(puzzle_id) if puzzle_id else None)

        if best_times is None:
            if config.best_times_path:
                best_times = BestTimeCache(JsonBestTimeStore(config.best_times_path))
            else:
                best_times = BestTimeCache(MemoryBestTimeStore())
        self.best_times = best_times

        if recorder is None and config.history_path:
            recorder = JsonHistoryRecorder(config.history_path)
        self.recorder = recorder

        self.rng = random.Random(config.shuffle_seed)
        self.timer = GameTimer(clock)
        self.counter = MoveCounter()

        self.image: Optional[Size] = None
        self.geometry: Optional[BoardGeometry] = None
        self.slide_board: Optional[SlideBoard] = None
        self.jigsaw_board: Optional[JigsawBoard] = None

        self.state = GameState.INITIAL
        self.final_stats: Optional[SessionStats] = None
        self._completion_recorded = False

        self.on_state_change: Optional[Callable[[GameState], None]] = None
        self.on_stats_change: Optional[Callable[[SessionStats], None]] = None

    # --- Read-only views ---

    @property
    def game_type(self) -> str:
        return self.config.game_type

    @property
    def difficulty(self) -> int:
        return self.config.difficulty

    @property
    def moves(self) -> int:
        return self.counter.count

    @property
    def elapsed_seconds(self) -> int:
        return self.timer.seconds

    @property
    def board_bounds(self) -> Optional[Size]:
        """Size of the logical board inside the container."""
        if self.geometry is None:
            return None
        return self.geometry.board

    @property
    def best_time(self) -> Optional[int]:
        return self.best_times.read(self.game_type, self.difficulty)

    def stats(self) -> SessionStats:
        return SessionStats(
            moves=self.moves,
            elapsed_seconds=self.elapsed_seconds,
            state=self.state.value,
        )

    def tile_layout(self) -> list[tuple[int, Rect]]:
        """Tile values and rectangles for a slide puzzle."""
        if self.slide_board is None or self.geometry is None:
            return []
        return self.slide_board.tile_rects(
            self.geometry, hide_blank=self.state == GameState.PLAYING
        )

    def piece_layout(self) -> list[JigsawPiece]:
        """Jigsaw pieces from the bottom of the stack to the top."""
        if self.jigsaw_board is None:
            return []
        return self.jigsaw_board.pieces_in_stacking_order()

    # --- Notifications ---

    def _set_state(self, state: GameState) -> None:
        if state != self.state:
            logger.info(f"{self.game_type} {self.difficulty}x{self.difficulty}: {self.state.value} -> {state.value}")
        self.state = state

        if self.on_state_change is not None:
            try:
                self.on_state_change(state)
            except Exception as e:
                logger.warning(f"State change observer failed: {e}")

        self._emit_stats()

    def _emit_stats(self) -> None:
        if self.on_stats_change is None:
            return
        try:
            self.on_stats_change(self.stats())
        except Exception as e:
            logger.warning(f"Stats observer failed: {e}")

    def _ignore(self, event: str) -> bool:
        logger.debug(f"Ignoring {event} while {self.state.value}")
        return False

    # --- Board construction ---

    def _compute_geometry(self) -> BoardGeometry:
        if self.game_type == "slide":
            width_ratio = self.config.slide_width_ratio
            height_ratio = self.config.slide_height_ratio
        else:
            width_ratio = self.config.jigsaw_width_ratio
            height_ratio = self.config.jigsaw_height_ratio

        return BoardGeometry.centered(
            container=self.container,
            image=self.image,
            grid_size=self.difficulty,
            width_ratio=width_ratio,
            height_ratio=height_ratio,
        )

    def _build(self, shuffle: bool) -> None:
        """Lay out a fresh board, shuffled into play or at home and ready."""
        self.geometry = self._compute_geometry()

        if self.game_type == "slide":
            self.jigsaw_board = None
            self.slide_board = SlideBoard(self.difficulty, rng=self.rng)
            if shuffle:
                self.slide_board.shuffle()
                logger.debug(f"Slide shuffle accepted after {self.slide_board.last_shuffle_attempts} attempt(s)")
        else:
            self.slide_board = None
            self.jigsaw_board = JigsawBoard(
                self.geometry,
                rng=self.rng,
                snap_tolerance=self.config.snap_tolerance,
            )
            if shuffle:
                self.jigsaw_board.shuffle()

        self.counter.reset()
        self.timer.reset()
        self._completion_recorded = False
        self.final_stats = None

        if shuffle:
            self.timer.start()
            self._set_state(GameState.PLAYING)
        else:
            self._set_state(GameState.READY)

    # --- Lifecycle events ---

    def load_image(self, image: Size) -> None:
        """
        Supply the dimensions of a loaded image and lay out the board.

        Raises:
            ValueError: If the image has no area
        """
        image.validate("Image size")
        self.image = image
        self._build(shuffle=False)

    def start(self) -> bool:
        if self.state != GameState.READY:
            return self._ignore("start")
        self._build(shuffle=True)
        return True

    def restart(self) -> bool:
        """Reshuffle and play again from scratch."""
        if self.state == GameState.INITIAL:
            return self._ignore("restart")
        self._build(shuffle=True)
        return True

    def pause(self) -> bool:
        if self.state != GameState.PLAYING:
            return self._ignore("pause")
        self.timer.pause()
        if self.jigsaw_board is not None:
            self.jigsaw_board.abandon_drag()
        self._set_state(GameState.PAUSED)
        return True

    def resume(self) -> bool:
        if self.state != GameState.PAUSED:
            return self._ignore("resume")
        self.timer.start()
        self._set_state(GameState.PLAYING)
        return True

    def toggle_pause(self) -> bool:
        if self.state == GameState.PLAYING:
            return self.pause()
        return self.resume()

    def stop(self) -> bool:
        if self.state not in (GameState.PLAYING, GameState.PAUSED):
            return self._ignore("stop")
        self.timer.stop()
        self._build(shuffle=False)
        return True

    def play_again(self) -> bool:
        """Leave the solved screen and go back to a ready board."""
        if self.state != GameState.SOLVED:
            return self._ignore("play_again")
        self._build(shuffle=False)
        return True

    close = play_again

    def resize(self, container: Size) -> None:
        """
        Recompute board geometry for a new container size.

        Ready boards are laid out again at home. Boards in play keep their
        progress unless reshuffle_on_resize is set, in which case they are
        shuffled again from scratch.
        """
        container.validate("Container size")
        self.container = container

        if self.image is None:
            return

        if self.state in HOME_STATES:
            self._build(shuffle=False)
            return

        if self.config.reshuffle_on_resize:
            self._build(shuffle=True)
            return

        self.geometry = self._compute_geometry()
        if self.jigsaw_board is not None:
            self.jigsaw_board.relayout(self.geometry)
        self._emit_stats()

    def change_difficulty(self, difficulty: int) -> None:
        """Switch to another grid size, rebuilding the board."""
        self.change_game(self.game_type, difficulty)

    def change_game(self, game_type: str, difficulty: Optional[int] = None) -> None:
        """
        Switch game type and/or difficulty.

        A game in progress is reshuffled at the new setting; otherwise the
        new board is laid out at home.

        Raises:
            ValueError: If the combination is not playable
        """
        if difficulty is None:
            difficulty = DEFAULT_DIFFICULTY.get(game_type, 0)
        validate_game(game_type, difficulty)

        self.config.game_type = game_type
        self.config.difficulty = difficulty

        if self.image is None:
            return

        self._build(shuffle=self.state not in HOME_STATES)

    # --- Player interaction ---

    def move_tile(self, index: int) -> bool:
        """
        Slide the tile at a board position into the blank.

        Returns:
            True if the move was legal and counted
        """
        if self.state != GameState.PLAYING or self.slide_board is None:
            return self._ignore("tile move")

        if not self.slide_board.move(index):
            return False

        self.counter.increment()
        self._emit_stats()
        self.check_completion()
        return True

    def drag_start(self, piece_id: int, pointer: Point) -> bool:
        if self.state != GameState.PLAYING or self.jigsaw_board is None:
            return self._ignore("drag start")
        return self.jigsaw_board.drag_start(piece_id, pointer)

    def drag_move(self, pointer: Point) -> Optional[Point]:
        if self.state != GameState.PLAYING or self.jigsaw_board is None:
            return None
        return self.jigsaw_board.drag_move(pointer)

    def drag_end(self, pointer: Point) -> Optional[DropResult]:
        """Release the dragged piece. Every drop counts as a move."""
        if self.state != GameState.PLAYING or self.jigsaw_board is None:
            self._ignore("drag end")
            return None

        result = self.jigsaw_board.drag_end(pointer)
        if result is None:
            return None

        self.counter.increment()
        self._emit_stats()
        self.check_completion()
        return result

    def drop_piece(self, piece_id: int, position: Point) -> Optional[DropResult]:
        """Pick up a piece by its top-left corner and release it at a position."""
        piece = self.jigsaw_board.piece(piece_id) if self.jigsaw_board is not None else None
        if piece is None or not self.drag_start(piece_id, piece.position):
            return None
        return self.drag_end(position)

    def tick(self) -> SessionStats:
        """Periodic timer tick from the host. Notifies observers while playing."""
        stats = self.stats()
        if self.state == GameState.PLAYING:
            self._emit_stats()
        return stats

    # --- Completion ---

    def _board_solved(self) -> bool:
        if self.slide_board is not None:
            return self.slide_board.is_solved()
        if self.jigsaw_board is not None:
            return self.jigsaw_board.is_solved()
        return False

    def check_completion(self) -> bool:
        """
        Evaluate the win condition, completing the game at most once.

        Returns:
            True if the session is solved
        """
        if self.state == GameState.PLAYING and not self._completion_recorded and self._board_solved():
            self._complete()
        return self.state == GameState.SOLVED

    def _complete(self) -> None:
        self._completion_recorded = True
        self.timer.stop()
        self.final_stats = SessionStats(
            moves=self.moves,
            elapsed_seconds=self.elapsed_seconds,
            state=GameState.SOLVED.value,
        )
        self._set_state(GameState.SOLVED)

        seconds = self.final_stats.elapsed_seconds
        logger.info(f"Puzzle solved in {self.final_stats.moves} moves and {self.final_stats.time}")

        try:
            self.best_times.write(self.game_type, self.difficulty, seconds)
        except Exception as e:
            logger.warning(f"Failed to save best time: {e}")

        if self.puzzle_id is None:
            return

        event = CompletionEvent(
            puzzle_id=self.puzzle_id,
            category=self.category,
            game_type=self.game_type,
            difficulty=self.difficulty,
            time_in_seconds=seconds,
            moves=self.final_stats.moves,
        )
        if self.recorder is None:
            return

        try:
            success = bool(self.recorder.record(event).get("success"))
        except Exception as e:
            logger.warning(f"Failed to record completion of {self.puzzle_id}: {e}")
            return

        if success:
            logger.info(f"Recorded completion of {self.puzzle_id}")
        else:
            logger.warning(f"Completion of {self.puzzle_id} was not recorded")
