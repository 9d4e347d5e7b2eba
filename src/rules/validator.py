"""
Move legality
----

`validate()` answers "may this side make this move on this board?" without touching the board.
The checks run in a fixed order and the first one that fails decides the IllegalMoveReason.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.exceptions import IllegalMoveError, IllegalMoveReason
from src.core.shared_types import PieceKind, Side
from src.rules.board import Board
from src.rules.geometry import Coordinate
from src.rules.moves import Move, candidate_destinations, shape_legal


@dataclass(frozen=True)
class LegalMove:
    """A move that passed validation, plus what it would capture"""

    move: Move
    piece: PieceKind
    captured: Optional[PieceKind] = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None


# -- ATTACKS ---
def is_attacked(board: Board, square: Coordinate, by_side: Side) -> bool:
    """
    Is there a piece of `by_side` whose shape rule (incl. path obstruction) reaches `square`?

    NOTE: the square is expected to hold a piece of the other side (the king we are worried about).
    Pawns only reach a diagonal square when there is something to take there.
    """
    return any(
        shape_legal(board, piece, Move(source, square))
        for source, piece in board.pieces(by_side)
        if source != square
    )


def is_in_check(board: Board, side: Side) -> bool:
    return is_attacked(board, board.find_king(side), side.opponent)


def _leaves_king_in_check(board: Board, side: Side, move: Move) -> bool:
    """
    plan:
    1. Copy the board
    2. make the candidate move
    3. determine if king is in check on the new board
    """
    scratch = board.copy()
    scratch.move_piece(move.source, move.destination)
    return is_in_check(scratch, side)


# -- VALIDATION ---
def validate(board: Board, mover_side: Side, move: Move) -> LegalMove:
    """
    Check a move, in order:

    1. there is a piece of the mover on the source square
    2. the destination is on the board
    3. the piece actually moves
    4. the piece can move like that (shape + path obstruction)
    5. no capturing your own piece
    6. no capturing the king (the game ends by checkmate instead)
    7. your own king is not attacked after the move

    Raises IllegalMoveError with the reason of the first failing check.
    """
    piece = board.get(move.source) if move.source.in_bounds() else None
    if piece is None or piece.side != mover_side:
        raise IllegalMoveError(IllegalMoveReason.NO_PIECE_OR_WRONG_SIDE, move)

    if not move.destination.in_bounds():
        raise IllegalMoveError(IllegalMoveReason.OUT_OF_BOUNDS, move)

    if move.source == move.destination:
        raise IllegalMoveError(IllegalMoveReason.NULL_MOVE, move)

    if not shape_legal(board, piece, move):
        raise IllegalMoveError(IllegalMoveReason.SHAPE_INVALID, move)

    target = board.get(move.destination)
    if target is not None and target.side == mover_side:
        raise IllegalMoveError(IllegalMoveReason.FRIENDLY_FIRE, move)

    if target is not None and target.kind == PieceKind.KING:
        raise IllegalMoveError(IllegalMoveReason.KING_CAPTURE, move)

    if _leaves_king_in_check(board, mover_side, move):
        raise IllegalMoveError(IllegalMoveReason.LEAVES_KING_IN_CHECK, move)

    return LegalMove(move, piece.kind, target.kind if target else None)


def is_legal(board: Board, mover_side: Side, move: Move) -> bool:
    try:
        validate(board, mover_side, move)
    except IllegalMoveError:
        return False
    return True


# -- ENUMERATION ---
def legal_destinations(board: Board, square: Coordinate) -> list[Coordinate]:
    """All destinations that pass validation for the piece on `square` (empty if there is none)"""
    piece = board.get(square) if square.in_bounds() else None
    if piece is None:
        return []
    return [
        destination
        for destination in candidate_destinations(piece, square)
        if is_legal(board, piece.side, Move(square, destination))
    ]


def has_legal_move(board: Board, side: Side) -> bool:
    return any(legal_destinations(board, square) for square, _ in board.pieces(side))
