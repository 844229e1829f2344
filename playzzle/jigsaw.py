"""Free-drag jigsaw board: placement, drag sessions and snapping."""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from .geometry import BoardGeometry, Point, Rect

logger = logging.getLogger(__name__)

DEFAULT_SNAP_TOLERANCE = 0.3


@dataclass
class JigsawPiece:
    """A single jigsaw piece. Its id encodes its home cell."""

    id: int
    row: int
    col: int
    position: Point
    placed: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "row": self.row,
            "col": self.col,
            "position": self.position.to_dict(),
            "placed": self.placed,
        }


@dataclass(frozen=True)
class DragSession:
    """The piece being dragged and where the pointer grabbed it."""

    piece_id: int
    offset_x: float
    offset_y: float

    def piece_position(self, pointer: Point) -> Point:
        return Point(pointer.x - self.offset_x, pointer.y - self.offset_y)


@dataclass(frozen=True)
class DropResult:
    """Outcome of releasing a dragged piece."""

    piece_id: int
    position: Point
    placed: bool


def scatter_position(geometry: BoardGeometry, rng: random.Random) -> Point:
    """
    Pick a random starting position for a piece, avoiding the board.

    Candidates are drawn over the whole container. An overlapping candidate
    has its x coordinate moved into the strip left or right of the board,
    chosen with equal probability among strips at least one piece wide.
    When neither strip is wide enough the overlap is unavoidable and kept.
    """
    container = geometry.container
    bounds = geometry.bounds
    piece_w = geometry.cell_width
    piece_h = geometry.cell_height

    max_x = max(0.0, container.width - piece_w)
    max_y = max(0.0, container.height - piece_h)

    strips = []
    if bounds.x >= piece_w:
        strips.append((0.0, bounds.x - piece_w))
    if container.width - bounds.right >= piece_w:
        strips.append((bounds.right, container.width - piece_w))

    while True:
        x = rng.uniform(0, max_x)
        y = rng.uniform(0, max_y)
        if not Rect(x, y, piece_w, piece_h).overlaps(bounds):
            return Point(x, y)

        if not strips:
            return Point(x, y)

        low, high = rng.choice(strips)
        x = rng.uniform(low, high)
        if not Rect(x, y, piece_w, piece_h).overlaps(bounds):
            return Point(x, y)


class JigsawBoard:
    """Jigsaw pieces laid out around an N×N board."""

    def __init__(
        self,
        geometry: BoardGeometry,
        rng: Optional[random.Random] = None,
        snap_tolerance: float = DEFAULT_SNAP_TOLERANCE,
    ):
        """
        Initialize the board with every piece at home.

        Args:
            geometry: Board and container geometry
            rng: Random source for placement and stacking order
            snap_tolerance: Snap distance as a fraction of the cell width
        """
        self.geometry = geometry
        self.rng = rng or random.Random()
        self.snap_tolerance = snap_tolerance

        self.pieces: list[JigsawPiece] = []
        self.stacking_order: list[int] = []
        self.drag: Optional[DragSession] = None

        self.layout_home()

    @property
    def grid_size(self) -> int:
        return self.geometry.grid_size

    @property
    def total_pieces(self) -> int:
        return self.grid_size * self.grid_size

    @property
    def snap_distance(self) -> float:
        return self.geometry.cell_width * self.snap_tolerance

    def home(self, piece_id: int) -> Point:
        """Home coordinate of a piece in container coordinates."""
        rect = self.geometry.cell_rect(piece_id)
        return Point(rect.x, rect.y)

    def piece(self, piece_id: int) -> Optional[JigsawPiece]:
        if 0 <= piece_id < len(self.pieces):
            return self.pieces[piece_id]
        return None

    def _build(self, positions: list[Point], placed: bool) -> None:
        self.pieces = [
            JigsawPiece(
                id=i,
                row=i // self.grid_size,
                col=i % self.grid_size,
                position=positions[i],
                placed=placed,
            )
            for i in range(self.total_pieces)
        ]
        self.stacking_order = list(range(self.total_pieces))
        self.drag = None

    def layout_home(self) -> None:
        """Place every piece on its home coordinate."""
        self._build([self.home(i) for i in range(self.total_pieces)], placed=True)

    def shuffle(self) -> None:
        """Scatter every piece around the board and randomize stacking order."""
        positions = [scatter_position(self.geometry, self.rng) for _ in range(self.total_pieces)]
        self._build(positions, placed=False)
        self.rng.shuffle(self.stacking_order)

    def relayout(self, geometry: BoardGeometry) -> None:
        """
        Move to a new geometry keeping progress.

        Placed pieces follow their home; loose pieces scale with the container.
        Any drag in progress is abandoned.
        """
        old = self.geometry.container
        scale_x = geometry.container.width / old.width
        scale_y = geometry.container.height / old.height

        self.abandon_drag()
        self.geometry = geometry

        for piece in self.pieces:
            if piece.placed:
                piece.position = self.home(piece.id)
            else:
                piece.position = Point(piece.position.x * scale_x, piece.position.y * scale_y)

    def drag_start(self, piece_id: int, pointer: Point) -> bool:
        """
        Grab a loose piece.

        Args:
            piece_id: Piece to grab
            pointer: Pointer position in container coordinates

        Returns:
            True if a drag session was opened
        """
        if self.drag is not None:
            logger.debug(f"Piece {self.drag.piece_id} is already being dragged")
            return False

        piece = self.piece(piece_id)
        if piece is None or piece.placed:
            return False

        self.drag = DragSession(
            piece_id=piece_id,
            offset_x=pointer.x - piece.position.x,
            offset_y=pointer.y - piece.position.y,
        )
        self.stacking_order.remove(piece_id)
        self.stacking_order.append(piece_id)
        return True

    def drag_move(self, pointer: Point) -> Optional[Point]:
        """Follow the pointer with the dragged piece. Returns its new position."""
        if self.drag is None:
            return None

        piece = self.pieces[self.drag.piece_id]
        piece.position = self.drag.piece_position(pointer)
        return piece.position

    def drag_end(self, pointer: Point) -> Optional[DropResult]:
        """
        Release the dragged piece, snapping it home when close enough.

        Returns:
            The drop outcome, or None if nothing was being dragged
        """
        if self.drag is None:
            return None

        drag = self.drag
        self.drag = None

        piece = self.pieces[drag.piece_id]
        drop = drag.piece_position(pointer)
        origin = self.geometry.origin
        home = self.geometry.cell_offset(piece.id)

        dx = (drop.x - origin.x) - home.x
        dy = (drop.y - origin.y) - home.y
        snap = self.snap_distance

        if abs(dx) < snap and abs(dy) < snap:
            piece.position = self.home(piece.id)
            piece.placed = True
        else:
            piece.position = drop
            piece.placed = False

        return DropResult(piece_id=piece.id, position=piece.position, placed=piece.placed)

    def abandon_drag(self) -> None:
        """Drop the drag session without resolving it. The piece stays where it is."""
        if self.drag is not None:
            logger.debug(f"Abandoned drag of piece {self.drag.piece_id}")
        self.drag = None

    def count_placed(self) -> int:
        return sum(1 for p in self.pieces if p.placed)

    def is_solved(self) -> bool:
        return len(self.pieces) > 0 and all(p.placed for p in self.pieces)

    def pieces_in_stacking_order(self) -> list[JigsawPiece]:
        """Pieces from bottom to top."""
        return [self.pieces[i] for i in self.stacking_order]
