"""Image loading and board snapshots for puzzle hosts."""

import numpy as np
from PIL import Image
from pathlib import Path
from typing import Optional

from .geometry import Size
from .jigsaw import JigsawBoard
from .slide import SlideBoard

BACKGROUND_COLOR = (40, 40, 40)
BOARD_COLOR = (70, 70, 70)


def _cell_edges(length: int, grid_size: int) -> list[int]:
    """Pixel boundaries of grid_size cells spread over length pixels."""
    return [round(i * length / grid_size) for i in range(grid_size + 1)]


def _paste(canvas: np.ndarray, piece: np.ndarray, x: int, y: int) -> None:
    """Copy a piece onto the canvas at (x, y), clipping at the canvas edges."""
    canvas_h, canvas_w = canvas.shape[:2]
    piece_h, piece_w = piece.shape[:2]

    x1, y1 = max(x, 0), max(y, 0)
    x2, y2 = min(x + piece_w, canvas_w), min(y + piece_h, canvas_h)
    if x1 >= x2 or y1 >= y2:
        return

    canvas[y1:y2, x1:x2] = piece[y1 - y:y2 - y, x1 - x:x2 - x]


class PuzzleImage:
    """An RGB image that can be cut into puzzle cells and drawn as a board."""

    def __init__(self, image: Image.Image, resize_to: Optional[int] = None):
        """
        Initialize from a PIL image.

        Args:
            image: Source image
            resize_to: Optional size for the shorter side (keeps aspect ratio)
        """
        image = image.convert("RGB")
        if resize_to is not None:
            image = self._resize_image(image, resize_to)
        self._image = image

    @classmethod
    def open(cls, image_path: str | Path, resize_to: Optional[int] = None) -> "PuzzleImage":
        """
        Load an image from disk.

        Raises:
            OSError: If the file is missing or not an image Pillow can read
        """
        with Image.open(image_path) as img:
            img.load()
            return cls(img, resize_to=resize_to)

    @staticmethod
    def _resize_image(img: Image.Image, resize_to: int) -> Image.Image:
        """Resize so the shorter side equals resize_to."""
        w, h = img.size
        if w < h:
            new_w = resize_to
            new_h = int(h * (resize_to / w))
        else:
            new_h = resize_to
            new_w = int(w * (resize_to / h))
        return img.resize((new_w, new_h), Image.Resampling.LANCZOS)

    @property
    def size(self) -> Size:
        """Image dimensions, as needed to lay out a puzzle board."""
        width, height = self._image.size
        return Size(width, height)

    def get_original_image(self) -> np.ndarray:
        """The full image as an array (the reference picture)."""
        return np.array(self._image)

    def slice(self, width: int, height: int, grid_size: int) -> list[np.ndarray]:
        """
        Scale the image to a board size and cut it into N×N cells.

        Returns:
            Cells in row-major order; cell i is the home of piece/tile i
        """
        scaled = np.array(self._image.resize((width, height), Image.Resampling.LANCZOS))
        xs = _cell_edges(width, grid_size)
        ys = _cell_edges(height, grid_size)
        return [
            scaled[ys[row]:ys[row + 1], xs[col]:xs[col + 1]].copy()
            for row in range(grid_size)
            for col in range(grid_size)
        ]

    def render_slide(self, board: SlideBoard, board_size: Size, hide_blank: bool = False) -> np.ndarray:
        """
        Draw the current arrangement of a slide board.

        Args:
            board: Board to draw
            board_size: Size of the board in pixels
            hide_blank: Draw the blank tile as an empty slot

        Returns:
            Numpy array (H, W, 3) of the board
        """
        n = board.grid_size
        width = max(n, round(board_size.width))
        height = max(n, round(board_size.height))

        cells = self.slice(width, height, n)
        xs = _cell_edges(width, n)
        ys = _cell_edges(height, n)

        result = np.zeros((height, width, 3), dtype=np.uint8)
        for index, tile in enumerate(board.tiles):
            if hide_blank and tile == board.blank:
                continue
            row, col = divmod(index, n)
            src_row, src_col = board.source_cell(tile)
            slot = result[ys[row]:ys[row + 1], xs[col]:xs[col + 1]]
            _paste(slot, cells[src_row * n + src_col], 0, 0)

        return result

    def render_jigsaw(self, board: JigsawBoard) -> np.ndarray:
        """
        Draw the whole jigsaw container: board outline plus every piece.

        Placed pieces are drawn beneath loose ones; loose pieces follow the
        board's stacking order.

        Returns:
            Numpy array (H, W, 3) of the container
        """
        geometry = board.geometry
        n = board.grid_size
        width = round(geometry.container.width)
        height = round(geometry.container.height)

        canvas = np.empty((height, width, 3), dtype=np.uint8)
        canvas[:] = BACKGROUND_COLOR

        bounds = geometry.bounds
        board_x, board_y = round(bounds.x), round(bounds.y)
        board_w = max(n, round(bounds.width))
        board_h = max(n, round(bounds.height))
        canvas[board_y:board_y + board_h, board_x:board_x + board_w] = BOARD_COLOR

        cells = self.slice(board_w, board_h, n)
        for piece in sorted(board.pieces_in_stacking_order(), key=lambda p: not p.placed):
            _paste(canvas, cells[piece.id], round(piece.position.x), round(piece.position.y))

        return canvas
