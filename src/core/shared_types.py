"""
Type definitions used across layers
"""

from enum import StrEnum
from typing import Self


class Status(StrEnum):
    TO_MOVE = "to move"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW_REPETITION = "draw by repetition"

    @property
    def is_terminal(self) -> bool:
        return self in (Status.CHECKMATE, Status.STALEMATE, Status.DRAW_REPETITION)


# NOTE: there is deliberately no "empty" member in Side or PieceKind. An empty square is a square without a Piece.
class Side(StrEnum):
    FIRST = "first"
    SECOND = "second"

    @property
    def opponent(self) -> Self:
        return Side.SECOND if self == Side.FIRST else Side.FIRST

    @property
    def forward(self) -> int:
        """Row direction in which this side's pawns advance"""
        return 1 if self == Side.FIRST else -1


class PieceKind(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"
