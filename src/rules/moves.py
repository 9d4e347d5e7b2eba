"""
Geometry/Base movement rules

Key idea: every piece kind has a pure shape rule. `shape_legal()` matches on the (closed) PieceKind enum,
so there is exactly one rule per kind and no function references are stored on the pieces themselves.

Whether the move is allowed in the game (turn, friendly fire, king safety) is decided later by the validator.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Protocol

from src.core.shared_types import PieceKind
from src.rules.geometry import Coordinate, Vector
from src.rules.pieces import Piece


class Board(Protocol):
    """Just the parts the movement rules need"""

    def get(self, c: Coordinate) -> Optional[Piece]: ...
    def is_path_clear(self, a: Coordinate, b: Coordinate) -> bool: ...


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    source: Coordinate
    destination: Coordinate

    @property
    def delta(self) -> Vector:
        return (
            self.destination.row - self.source.row,
            self.destination.col - self.source.col,
        )

    def __str__(self) -> str:
        return f"{self.source}->{self.destination}"


KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
KING_DELTAS: list[Vector] = STRAIGHTS + DIAGONALS


# --- SHAPE RULES ---
def is_rook_shape(dr: int, dc: int) -> bool:
    """Rooks move either along a row or along a column"""
    return (dr == 0) != (dc == 0)


def is_bishop_shape(dr: int, dc: int) -> bool:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return abs(dr) == abs(dc) != 0


def is_knight_shape(dr: int, dc: int) -> bool:
    """Knights always move such that {|delta_row|, |delta_col|} = {1, 2}"""
    return sorted((abs(dr), abs(dc))) == [1, 2]


def is_king_shape(dr: int, dc: int) -> bool:
    """The king can move by a single square at the time."""
    return max(abs(dr), abs(dc)) == 1


def pawn_shape_legal(board: Board, pawn: Piece, move: Move) -> bool:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - can move by two in its first move, if both squares are empty
    - takes diagonally (one square forward), and ONLY when taking an opposing piece

    NOTE: En passant and promotion are not part of these rules.
    """
    dr, dc = move.delta
    forward = pawn.side.forward
    target = board.get(move.destination)

    if dc == 0:
        if target is not None:
            return False
        if dr == forward:
            return True
        if dr == 2 * forward and not pawn.has_moved:
            return board.is_path_clear(move.source, move.destination)
        return False

    if abs(dc) == 1 and dr == forward:
        return target is not None and target.side != pawn.side

    return False


def shape_legal(board: Board, piece: Piece, move: Move) -> bool:
    """
    Does the move match the movement pattern of the piece (including path obstruction for sliding pieces)?

    Fails closed: off-board destinations and the zero move are never legal.
    """
    if not move.destination.in_bounds() or move.source == move.destination:
        return False

    dr, dc = move.delta
    match piece.kind:
        case PieceKind.PAWN:
            return pawn_shape_legal(board, piece, move)
        case PieceKind.KNIGHT:
            # knights jump: no obstruction check
            return is_knight_shape(dr, dc)
        case PieceKind.BISHOP:
            return is_bishop_shape(dr, dc) and board.is_path_clear(
                move.source, move.destination
            )
        case PieceKind.ROOK:
            return is_rook_shape(dr, dc) and board.is_path_clear(
                move.source, move.destination
            )
        case PieceKind.QUEEN:
            return (
                is_rook_shape(dr, dc) or is_bishop_shape(dr, dc)
            ) and board.is_path_clear(move.source, move.destination)
        case PieceKind.KING:
            # NOTE: castling is not part of these rules
            return is_king_shape(dr, dc)
    return False


# --- CANDIDATE DESTINATIONS ---
def raycast(square: Coordinate, directions: list[Vector]) -> Iterator[Coordinate]:
    """
    Move along each direction until we hit the edge of the board.

    Occupancy is ignored here: the shape rules decide which of these squares can be reached.
    """
    for dr, dc in directions:
        target = square.offset(dr, dc)
        while target.in_bounds():
            yield target
            target = target.offset(dr, dc)


def single_steps(square: Coordinate, deltas: list[Vector]) -> Iterator[Coordinate]:
    """Raycasting is for sliding pieces. This is the equivalent for pawns, kings, and knights"""
    for dr, dc in deltas:
        target = square.offset(dr, dc)
        if target.in_bounds():
            yield target


def candidate_destinations(piece: Piece, square: Coordinate) -> Iterator[Coordinate]:
    """Every on-board square the piece could reach on an empty board (plus pawn captures)."""
    match piece.kind:
        case PieceKind.PAWN:
            forward = piece.side.forward
            pawn_deltas: list[Vector] = [
                (forward, 0),
                (2 * forward, 0),
                (forward, 1),
                (forward, -1),
            ]
            yield from single_steps(square, pawn_deltas)
        case PieceKind.KNIGHT:
            yield from single_steps(square, KNIGHT_DELTAS)
        case PieceKind.BISHOP:
            yield from raycast(square, DIAGONALS)
        case PieceKind.ROOK:
            yield from raycast(square, STRAIGHTS)
        case PieceKind.QUEEN:
            yield from raycast(square, STRAIGHTS + DIAGONALS)
        case PieceKind.KING:
            yield from single_steps(square, KING_DELTAS)
