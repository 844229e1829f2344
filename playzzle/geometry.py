"""Board geometry shared by the slide and jigsaw engines."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Size:
    """Width and height in container pixels."""

    width: float
    height: float

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def validate(self, name: str = "size") -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"{name} must be positive. Got: {self.width}x{self.height}")

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle anchored at its top-left corner."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def overlaps(self, other: "Rect") -> bool:
        """True if the interiors of the two rectangles intersect."""
        return (
            self.x < other.right
            and self.right > other.x
            and self.y < other.bottom
            and self.bottom > other.y
        )

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


def fit_board(
    container: Size,
    aspect_ratio: float,
    width_ratio: float,
    height_ratio: float,
) -> Size:
    """
    Compute the largest board with the given aspect ratio inside a container.

    The board starts at width_ratio of the container width and is shrunk
    proportionally if its height would exceed height_ratio of the container
    height.

    Args:
        container: Available space
        aspect_ratio: Image width / height
        width_ratio: Maximum fraction of the container width to use
        height_ratio: Maximum fraction of the container height to use

    Returns:
        Board size
    """
    width = container.width * width_ratio
    height = width / aspect_ratio

    max_height = container.height * height_ratio
    if height > max_height:
        height = max_height
        width = height * aspect_ratio

    return Size(width, height)


@dataclass(frozen=True)
class BoardGeometry:
    """An N×N board centered in its container."""

    container: Size
    board: Size
    grid_size: int

    @classmethod
    def centered(
        cls,
        container: Size,
        image: Size,
        grid_size: int,
        width_ratio: float,
        height_ratio: float,
    ) -> "BoardGeometry":
        """Fit an image-shaped board into a container and center it."""
        container.validate("Container size")
        image.validate("Image size")
        board = fit_board(container, image.aspect_ratio, width_ratio, height_ratio)
        return cls(container=container, board=board, grid_size=grid_size)

    @property
    def origin(self) -> Point:
        """Top-left corner of the board in container coordinates."""
        return Point(
            (self.container.width - self.board.width) / 2,
            (self.container.height - self.board.height) / 2,
        )

    @property
    def bounds(self) -> Rect:
        origin = self.origin
        return Rect(origin.x, origin.y, self.board.width, self.board.height)

    @property
    def cell_width(self) -> float:
        return self.board.width / self.grid_size

    @property
    def cell_height(self) -> float:
        return self.board.height / self.grid_size

    def cell_offset(self, index: int) -> Point:
        """Top-left of a cell relative to the board origin."""
        row, col = divmod(index, self.grid_size)
        return Point(col * self.cell_width, row * self.cell_height)

    def cell_rect(self, index: int) -> Rect:
        """Cell rectangle in container coordinates."""
        offset = self.cell_offset(index)
        origin = self.origin
        return Rect(
            origin.x + offset.x,
            origin.y + offset.y,
            self.cell_width,
            self.cell_height,
        )
