"""
Errors raised by the rules engine and the layers around it.

All of them are recoverable: a rejected request leaves the game untouched and the caller decides how to report it.
"""

from enum import StrEnum
from typing import Any, Optional


class IllegalMoveReason(StrEnum):
    """Why the validator turned a move down. Checked in this order."""

    NO_PIECE_OR_WRONG_SIDE = "no piece of the moving side on the source square"
    OUT_OF_BOUNDS = "destination is off the board"
    NULL_MOVE = "source and destination are the same square"
    SHAPE_INVALID = "piece cannot move that way"
    FRIENDLY_FIRE = "destination holds a piece of the moving side"
    KING_CAPTURE = "kings cannot be captured"
    LEAVES_KING_IN_CHECK = "move leaves the king in check"


class GameError(Exception):
    """Base class for everything the engine raises on purpose"""


class OutOfBoundsError(GameError):
    """A coordinate outside of the board was used to look up a square."""


class IllegalMoveError(GameError):
    def __init__(
        self, reason: IllegalMoveReason, move: Any = None, message: Optional[str] = None
    ) -> None:
        self.reason = reason
        self.move = move
        super().__init__(message or f"Move not allowed ({reason.value}): {move}")


class GameOverError(GameError):
    """The game already ended (checkmate, stalemate or draw). No more moves can be applied."""


class GameStateError(GameError):
    """Operation does not make sense in the current state of the game (ex. undo without history)."""


class InvalidRequestError(GameError):
    """Request could not be interpreted by the boundary layer."""


class RepositoryError(GameError):
    """Game could not be found / stored."""


class ParseError(GameError):
    """Raised by move parsers (notation is decoded outside of the engine)."""
