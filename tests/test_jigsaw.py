"""Tests for the jigsaw board: scattering, dragging and snapping."""

import random

import pytest

from playzzle.geometry import BoardGeometry, Point, Rect, Size
from playzzle.jigsaw import JigsawBoard, scatter_position


def make_geometry(grid_size: int = 4, container: Size = Size(1000, 800)) -> BoardGeometry:
    return BoardGeometry.centered(
        container=container,
        image=Size(400, 300),
        grid_size=grid_size,
        width_ratio=0.6,
        height_ratio=0.9,
    )


@pytest.fixture
def board():
    """A shuffled 4×4 board in a 1000×800 container."""
    board = JigsawBoard(make_geometry(), rng=random.Random(42))
    board.shuffle()
    return board


def drop_at(board: JigsawBoard, piece_id: int, position: Point):
    """Grab a piece by its corner and release it with its corner at position."""
    piece = board.pieces[piece_id]
    assert board.drag_start(piece_id, piece.position)
    return board.drag_end(position)


class TestLayout:
    """Tests for home layout and shuffle placement."""

    def test_home_layout(self):
        board = JigsawBoard(make_geometry())

        assert board.total_pieces == 16
        assert board.is_solved()
        for piece in board.pieces:
            assert piece.position == board.home(piece.id)
            assert piece.row == piece.id // 4
            assert piece.col == piece.id % 4

    def test_home_coordinate(self):
        board = JigsawBoard(make_geometry())
        home = board.home(5)

        assert home.x == pytest.approx(200 + 150)
        assert home.y == pytest.approx(175 + 112.5)

    def test_shuffle_unplaces_everything(self, board):
        assert board.count_placed() == 0
        assert not board.is_solved()

    def test_shuffle_avoids_board_when_margins_allow(self, board):
        """Test that pieces land beside the board when each margin fits a piece."""
        geometry = board.geometry
        for piece in board.pieces:
            rect = Rect(piece.position.x, piece.position.y, geometry.cell_width, geometry.cell_height)
            assert not rect.overlaps(geometry.bounds)

    def test_shuffle_stays_inside_container(self, board):
        geometry = board.geometry
        for piece in board.pieces:
            assert 0 <= piece.position.x <= geometry.container.width - geometry.cell_width
            assert 0 <= piece.position.y <= geometry.container.height - geometry.cell_height

    def test_overlap_accepted_when_margins_too_narrow(self):
        """Test that a 2×2 board, whose pieces are wider than the margins, still scatters."""
        geometry = make_geometry(grid_size=2)
        assert geometry.cell_width > geometry.origin.x

        rng = random.Random(3)
        for _ in range(200):
            position = scatter_position(geometry, rng)
            assert 0 <= position.x <= geometry.container.width - geometry.cell_width

    def test_stacking_order_is_a_permutation(self, board):
        assert sorted(board.stacking_order) == list(range(16))
        assert [p.id for p in board.pieces_in_stacking_order()] == board.stacking_order


class TestDrag:
    """Tests for the single-drag session."""

    def test_drag_moves_piece_with_offset(self, board):
        piece = board.pieces[3]
        start = piece.position
        grab = Point(start.x + 10, start.y + 20)

        assert board.drag_start(3, grab)
        assert board.drag.piece_id == 3

        moved = board.drag_move(Point(grab.x + 50, grab.y - 30))

        assert moved.x == pytest.approx(start.x + 50)
        assert moved.y == pytest.approx(start.y - 30)
        assert board.pieces[3].position == moved

    def test_dragged_piece_is_raised_to_top(self, board):
        board.drag_start(7, board.pieces[7].position)

        assert board.stacking_order[-1] == 7

    def test_only_one_drag_at_a_time(self, board):
        assert board.drag_start(0, board.pieces[0].position)
        assert not board.drag_start(1, board.pieces[1].position)
        assert board.drag.piece_id == 0

    def test_placed_and_unknown_pieces_are_not_draggable(self):
        board = JigsawBoard(make_geometry())

        assert not board.drag_start(0, board.pieces[0].position)
        assert not board.drag_start(99, Point(0, 0))
        assert board.drag is None

    def test_move_and_end_without_drag(self, board):
        assert board.drag_move(Point(1, 1)) is None
        assert board.drag_end(Point(1, 1)) is None

    def test_drag_end_clears_session(self, board):
        drop_at(board, 2, Point(10, 10))

        assert board.drag is None
        assert board.drag_start(2, board.pieces[2].position)

    def test_abandon_leaves_piece_where_it_is(self, board):
        board.drag_start(4, board.pieces[4].position)
        board.drag_move(Point(123, 45))
        board.abandon_drag()

        assert board.drag is None
        assert board.pieces[4].position == Point(123, 45)
        assert not board.pieces[4].placed


class TestSnap:
    """Tests for drop resolution."""

    def test_drop_within_tolerance_snaps_home(self, board):
        home = board.home(5)
        offset = 0.29 * board.geometry.cell_width

        result = drop_at(board, 5, Point(home.x + offset, home.y + offset))

        assert result.placed
        assert board.pieces[5].placed
        assert board.pieces[5].position == home

    def test_drop_outside_tolerance_stays_put(self, board):
        home = board.home(5)
        offset = 0.31 * board.geometry.cell_width
        drop = Point(home.x + offset, home.y + offset)

        result = drop_at(board, 5, drop)

        assert not result.placed
        assert board.pieces[5].position.x == pytest.approx(drop.x)
        assert board.pieces[5].position.y == pytest.approx(drop.y)

    def test_tolerance_uses_cell_width_on_both_axes(self, board):
        """Test that the y tolerance is also measured in cell widths."""
        home = board.home(0)
        # Cell height is 112.5, so 40px is within 0.3 of a 150px cell width
        result = drop_at(board, 0, Point(home.x - 40, home.y + 40))

        assert result.placed

    def test_one_axis_out_of_tolerance(self, board):
        home = board.home(0)
        result = drop_at(board, 0, Point(home.x, home.y + 60))

        assert not result.placed

    def test_drop_accounts_for_grab_offset(self, board):
        piece = board.pieces[9]
        home = board.home(9)
        grab = Point(piece.position.x + 30, piece.position.y + 30)

        board.drag_start(9, grab)
        result = board.drag_end(Point(home.x + 30, home.y + 30))

        assert result.placed

    def test_placed_piece_stays_placed(self, board):
        home = board.home(1)
        drop_at(board, 1, home)

        assert not board.drag_start(1, home)
        assert board.pieces[1].placed

    def test_solved_when_all_pieces_home(self, board):
        for piece_id in range(board.total_pieces):
            assert not board.is_solved()
            drop_at(board, piece_id, board.home(piece_id))

        assert board.is_solved()


class TestRelayout:
    """Tests for geometry changes that keep progress."""

    def test_relayout_keeps_progress(self, board):
        drop_at(board, 0, board.home(0))
        loose = board.pieces[1].position

        new_geometry = make_geometry(container=Size(500, 400))
        board.relayout(new_geometry)

        assert board.geometry is new_geometry
        assert board.pieces[0].placed
        assert board.pieces[0].position == board.home(0)
        assert board.pieces[1].position.x == pytest.approx(loose.x / 2)
        assert board.pieces[1].position.y == pytest.approx(loose.y / 2)
        assert not board.pieces[1].placed

    def test_relayout_abandons_drag(self, board):
        board.drag_start(3, board.pieces[3].position)
        board.relayout(make_geometry(container=Size(1200, 900)))

        assert board.drag is None
