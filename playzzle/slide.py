"""Sliding-tile board: the generalized N×N-1 "15-puzzle"."""

import random
from typing import Optional

from .geometry import BoardGeometry, Rect


def solved_tiles(grid_size: int) -> list[int]:
    """The canonical arrangement 1..N² with the blank (N²) last."""
    return list(range(1, grid_size * grid_size + 1))


def count_inversions(tiles: list[int], blank: int) -> int:
    """Count out-of-order pairs among the non-blank tiles."""
    values = [t for t in tiles if t != blank]
    inversions = 0
    for i in range(len(values) - 1):
        for j in range(i + 1, len(values)):
            if values[i] > values[j]:
                inversions += 1
    return inversions


def is_solvable(tiles: list[int], grid_size: int) -> bool:
    """
    Check whether an arrangement can be slid back to the solved state.

    For odd N the inversion count must be even. For even N the inversion
    count plus the blank's row (zero-based from the top) must be odd.
    """
    blank = grid_size * grid_size
    inversions = count_inversions(tiles, blank)

    if grid_size % 2 == 1:
        return inversions % 2 == 0

    blank_row = tiles.index(blank) // grid_size
    return (inversions + blank_row) % 2 == 1


def random_solvable_tiles(grid_size: int, rng: random.Random) -> tuple[list[int], int]:
    """
    Draw uniformly random permutations until one is solvable.

    Returns:
        Tuple of (tiles, attempts taken)
    """
    tiles = solved_tiles(grid_size)
    attempts = 0
    while True:
        attempts += 1
        rng.shuffle(tiles)
        if is_solvable(tiles, grid_size):
            return tiles, attempts


class SlideBoard:
    """Sliding-tile board state for an N×N grid."""

    def __init__(self, grid_size: int, rng: Optional[random.Random] = None):
        """
        Initialize the board in its solved configuration.

        Args:
            grid_size: N, the number of rows and columns
            rng: Random source for shuffling
        """
        if grid_size < 2:
            raise ValueError(f"Grid size must be at least 2. Got: {grid_size}")

        self.grid_size = grid_size
        self.rng = rng or random.Random()
        self.tiles = solved_tiles(grid_size)
        self.last_shuffle_attempts = 0

    @property
    def blank(self) -> int:
        """The blank token value."""
        return self.grid_size * self.grid_size

    @property
    def blank_index(self) -> int:
        return self.tiles.index(self.blank)

    @property
    def total_tiles(self) -> int:
        return self.grid_size * self.grid_size

    def reset(self) -> None:
        """Put every tile back in its home position."""
        self.tiles = solved_tiles(self.grid_size)

    def shuffle(self) -> None:
        """Replace the board with a random solvable arrangement."""
        self.tiles, self.last_shuffle_attempts = random_solvable_tiles(self.grid_size, self.rng)

    def is_solvable(self) -> bool:
        return is_solvable(self.tiles, self.grid_size)

    def can_move(self, index: int) -> bool:
        """Whether the tile at a position is Manhattan-adjacent to the blank."""
        if not 0 <= index < self.total_tiles:
            return False

        row, col = divmod(index, self.grid_size)
        blank_row, blank_col = divmod(self.blank_index, self.grid_size)
        return abs(row - blank_row) + abs(col - blank_col) == 1

    def move(self, index: int) -> bool:
        """
        Slide the tile at a position into the blank.

        Args:
            index: Board position (row * N + col)

        Returns:
            True if the move was legal and applied
        """
        if not self.can_move(index):
            return False

        blank_index = self.blank_index
        self.tiles[index], self.tiles[blank_index] = self.tiles[blank_index], self.tiles[index]
        return True

    def count_correct_tiles(self) -> int:
        """Count tiles sitting in their home position."""
        return sum(1 for i, tile in enumerate(self.tiles) if tile == i + 1)

    def is_solved(self) -> bool:
        return self.tiles == solved_tiles(self.grid_size)

    def source_cell(self, tile: int) -> tuple[int, int]:
        """Row and column of the image cell a tile shows."""
        return divmod(tile - 1, self.grid_size)

    def tile_rects(self, geometry: BoardGeometry, hide_blank: bool = False) -> list[tuple[int, Rect]]:
        """
        Layout of every tile in container coordinates.

        Args:
            geometry: Board geometry to lay the tiles out in
            hide_blank: Leave the blank tile out (it is hidden while playing)

        Returns:
            List of (tile value, rectangle) in board order
        """
        layout = []
        for index, tile in enumerate(self.tiles):
            if hide_blank and tile == self.blank:
                continue
            layout.append((tile, geometry.cell_rect(index)))
        return layout
