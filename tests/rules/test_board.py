"""Unit tests for /src/rules/board.py"""

from typing import Callable

import pytest

from src.core.exceptions import GameStateError, InvalidRequestError, OutOfBoundsError
from src.core.shared_types import PieceKind, Side
from src.rules.board import BACK_ROW, STARTING_DIAGRAM, Board
from src.rules.geometry import Coordinate
from src.rules.pieces import EMPTY_GLYPH, Piece

BoardFactory = Callable[[dict[int, str]], Board]


# -- CREATION LOGIC ---
def test_creating_board_in_starting_position() -> None:
    """Row 0: First side's pieces, row 1: its pawns, rows 6 and 7 mirror that for the Second side"""
    board = Board.starting_position()

    for col, kind in enumerate(BACK_ROW):
        assert board.get(Coordinate(0, col)) == Piece(kind, Side.FIRST)
        assert board.get(Coordinate(1, col)) == Piece(PieceKind.PAWN, Side.FIRST)
        assert board.get(Coordinate(6, col)) == Piece(PieceKind.PAWN, Side.SECOND)
        assert board.get(Coordinate(7, col)) == Piece(kind, Side.SECOND)

    # rows 2 through 5 are empty
    for row in range(2, 6):
        for col in range(8):
            assert board.get(Coordinate(row, col)) is None

    assert board.get(Coordinate(0, 3)).kind == PieceKind.QUEEN
    assert board.get(Coordinate(0, 4)).kind == PieceKind.KING


def test_starting_diagram_matches_starting_position() -> None:
    assert Board.from_diagram(STARTING_DIAGRAM) == Board.starting_position()


def test_to_rows_uses_empty_glyph() -> None:
    rows = Board.starting_position().to_rows()
    assert rows[0] == "RNBQKBNR"
    assert rows[1] == "PPPPPPPP"
    assert rows[4] == EMPTY_GLYPH * 8
    assert rows[7] == "rnbqkbnr"


def test_diagram_accepts_spaces_and_dots() -> None:
    dots = Board.from_diagram(["....K..."] + ["........"] * 6 + ["....k..."])
    spaces = Board.from_diagram(["    K   "] + ["        "] * 6 + ["    k   "])
    assert dots == spaces


def test_diagram_pawns_off_their_starting_row_have_moved(board_from: BoardFactory) -> None:
    board = board_from({1: "P.......", 3: ".P......", 6: "..p.....", 4: "...p...."})
    assert not board.get(Coordinate(1, 0)).has_moved
    assert board.get(Coordinate(3, 1)).has_moved
    assert not board.get(Coordinate(6, 2)).has_moved
    assert board.get(Coordinate(4, 3)).has_moved


@pytest.mark.parametrize(
    "diagram",
    [
        ["........"] * 7,  # missing a row
        ["........"] * 7 + ["......."],  # short row
        ["........"] * 7 + ["...x...."],  # unknown piece
    ],
)
def test_invalid_diagram(diagram: list[str]) -> None:
    with pytest.raises(InvalidRequestError):
        Board.from_diagram(diagram)


# -- SQUARE ACCESS --
@pytest.mark.parametrize("square", [Coordinate(-1, 0), Coordinate(0, 8), Coordinate(8, 8)])
def test_off_board_access_raises(square: Coordinate) -> None:
    board = Board.starting_position()
    with pytest.raises(OutOfBoundsError):
        board.get(square)
    with pytest.raises(OutOfBoundsError):
        board.place(square, Piece(PieceKind.PAWN, Side.FIRST))
    with pytest.raises(OutOfBoundsError):
        board.remove(square)


def test_place_and_remove() -> None:
    board = Board()
    square = Coordinate(4, 4)
    knight = Piece(PieceKind.KNIGHT, Side.SECOND)

    board.place(square, knight)
    assert board.get(square) is knight
    assert not board.is_empty(square)

    assert board.remove(square) is knight
    assert board.is_empty(square)
    # removing from an empty square is not an error
    assert board.remove(square) is None


def test_move_piece_returns_captured() -> None:
    board = Board.starting_position()
    captured = board.move_piece(Coordinate(0, 3), Coordinate(6, 3))
    assert captured == Piece(PieceKind.PAWN, Side.SECOND)
    assert board.get(Coordinate(0, 3)) is None
    assert board.get(Coordinate(6, 3)) == Piece(PieceKind.QUEEN, Side.FIRST)


def test_move_piece_from_empty_square() -> None:
    with pytest.raises(GameStateError):
        Board().move_piece(Coordinate(3, 3), Coordinate(4, 4))


# -- QUERIES --
def test_path_clear(board_from: BoardFactory) -> None:
    board = board_from({0: "R..n...R", 3: "...P...."})
    # rank: blocked at column 3
    assert not board.is_path_clear(Coordinate(0, 0), Coordinate(0, 7))
    assert board.is_path_clear(Coordinate(0, 0), Coordinate(0, 3))
    # endpoints do not count
    assert board.is_path_clear(Coordinate(0, 3), Coordinate(0, 7))
    # diagonal through (3,3)
    assert not board.is_path_clear(Coordinate(0, 0), Coordinate(5, 5))
    assert board.is_path_clear(Coordinate(0, 0), Coordinate(3, 3))
    # neighbours: nothing in between
    assert board.is_path_clear(Coordinate(0, 0), Coordinate(1, 1))


def test_rook_path_through_own_pawn_at_start() -> None:
    board = Board.starting_position()
    assert not board.is_path_clear(Coordinate(0, 0), Coordinate(0, 4))
    assert not board.is_path_clear(Coordinate(0, 0), Coordinate(3, 0))


def test_find_king() -> None:
    board = Board.starting_position()
    assert board.find_king(Side.FIRST) == Coordinate(0, 4)
    assert board.find_king(Side.SECOND) == Coordinate(7, 4)


def test_find_missing_king(board_from: BoardFactory) -> None:
    board = board_from({0: "....K..."})
    with pytest.raises(GameStateError):
        board.find_king(Side.SECOND)


def test_pieces_of_a_side() -> None:
    board = Board.starting_position()
    first = board.pieces(Side.FIRST)
    assert len(first) == 16
    assert all(piece.side == Side.FIRST for _, piece in first)
    assert first[0] == (Coordinate(0, 0), Piece(PieceKind.ROOK, Side.FIRST))


def test_count_material(board_from: BoardFactory) -> None:
    assert Board.starting_position().material() == {Side.FIRST: 39, Side.SECOND: 39}
    board = board_from({0: "....K..Q", 7: "r...k..."})
    assert board.material() == {Side.FIRST: 9, Side.SECOND: 5}


def test_copy_is_independent() -> None:
    board = Board.starting_position()
    scratch = board.copy()
    scratch.move_piece(Coordinate(1, 4), Coordinate(3, 4))
    scratch.get(Coordinate(3, 4)).has_moved = True

    assert board.get(Coordinate(1, 4)) == Piece(PieceKind.PAWN, Side.FIRST)
    assert board.get(Coordinate(3, 4)) is None
    assert board != scratch


def test_placement_key_ignores_has_moved() -> None:
    board = Board.starting_position()
    other = Board.starting_position()
    other.get(Coordinate(0, 1)).has_moved = True
    assert board.placement_key() == other.placement_key()
