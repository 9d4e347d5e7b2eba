"""
The GameState is the entrypoint into the domain layer for the service layer.
It owns the Board and the turn marker, applies validated moves, and decides what state the game is in afterwards.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Hashable, Optional, Self

from src.core.exceptions import GameOverError, GameStateError, InvalidRequestError
from src.core.models import GameModel
from src.core.shared_types import PieceKind, Side, Status
from src.rules.board import Board
from src.rules.geometry import Coordinate
from src.rules.moves import Move
from src.rules.pieces import Piece
from src.rules.validator import (
    LegalMove,
    has_legal_move,
    is_in_check,
    legal_destinations,
    validate,
)

logger = logging.getLogger(__name__)

# Same position (placement + side to move) this many times --> draw
REPETITION_LIMIT = 3


@dataclass(frozen=True)
class AppliedMove:
    """Snapshot of everything needed to take a move back."""

    move: Move
    piece: PieceKind
    captured: Optional[Piece]
    first_move: bool
    status_before: Status


@dataclass
class GameState:
    board: Board
    turn: Side = Side.FIRST
    status: Status = Status.TO_MOVE
    history: list[AppliedMove] = field(default_factory=list)
    repetition_limit: int = REPETITION_LIMIT
    _seen: Counter[Hashable] = field(default_factory=Counter, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self._seen:
            self._seen[self._position_key()] += 1

    @classmethod
    def new_game(cls, repetition_limit: int = REPETITION_LIMIT) -> Self:
        """Standard starting position, First side to move."""
        return cls(Board.starting_position(), repetition_limit=repetition_limit)

    @classmethod
    def from_board(
        cls, board: Board, turn: Side = Side.FIRST, repetition_limit: int = REPETITION_LIMIT
    ) -> Self:
        """
        Start from a custom position. The status is computed for the side to move.

        Raises InvalidRequestError unless each side has exactly one king and the side that just moved is not in check.
        """
        kings = Counter(piece.side for piece in board.position.values() if piece.kind == PieceKind.KING)
        if kings != {Side.FIRST: 1, Side.SECOND: 1}:
            raise InvalidRequestError(f"Each side needs exactly one king. Got: {dict(kings)}")
        if is_in_check(board, turn.opponent):
            raise InvalidRequestError(f"{turn.opponent} is in check, but it is {turn} to move.")

        state = cls(board, turn=turn, repetition_limit=repetition_limit)
        state.status = state._evaluate_status()
        return state

    # --- DOMAIN LAYER API CALLED BY SERVICE---
    @property
    def is_over(self) -> bool:
        return self.status.is_terminal

    @property
    def loser(self) -> Optional[Side]:
        """Only defined for checkmate: the side that got mated is the one to move."""
        return self.turn if self.status == Status.CHECKMATE else None

    @property
    def winner(self) -> Optional[Side]:
        loser = self.loser
        return loser.opponent if loser else None

    @property
    def moves(self) -> list[Move]:
        return [applied.move for applied in self.history]

    def validate(self, move: Move) -> LegalMove:
        """Validation under the current turn. Pure query: never changes the game."""
        return validate(self.board, self.turn, move)

    def legal_moves_for(self, square: Coordinate) -> list[Coordinate]:
        """
        Destinations the piece on `square` can legally move to.

        Empty if the square is empty/off the board, holds a piece of the side that is not to move, or the game is over.
        """
        if self.is_over or not square.in_bounds():
            return []
        piece = self.board.get(square)
        if piece is None or piece.side != self.turn:
            return []
        return legal_destinations(self.board, square)

    def apply(self, move: Move) -> Self:
        """
        Attempt to make a move
        -----

        1. refuse if the game already ended
        2. validate the move for the side to move (raises IllegalMoveError, nothing changes)
        3. update the board (captured piece leaves the board)
        4. update the history of moves
        5. pass the turn and update game status (if needed)
        """
        if self.is_over:
            raise GameOverError(f"Game is over. status: {self.status}")

        legal_move = self.validate(move)
        piece = self.board.get(move.source)
        # for the typechecker: validation guarantees there is a piece
        assert piece is not None

        applied = AppliedMove(
            move=move,
            piece=legal_move.piece,
            captured=self.board.get(move.destination),
            first_move=not piece.has_moved,
            status_before=self.status,
        )
        self.board.move_piece(move.source, move.destination)
        piece.has_moved = True
        self.history.append(applied)
        logger.debug(
            "%s %s %s%s",
            self.turn,
            legal_move.piece,
            move,
            f" takes {legal_move.captured}" if legal_move.is_capture else "",
        )

        self.turn = self.turn.opponent
        self._seen[self._position_key()] += 1
        self._change_status(self._evaluate_status())
        return self

    def undo(self) -> Self:
        """Take back the last move: restore captured piece, first-move flag, turn and status."""
        if not self.history:
            raise GameStateError("No move to take back.")

        self._seen[self._position_key()] -= 1
        applied = self.history.pop()
        move = applied.move
        self.board.move_piece(move.destination, move.source)
        piece = self.board.get(move.source)
        assert piece is not None
        if applied.first_move:
            piece.has_moved = False
        if applied.captured is not None:
            self.board.place(move.destination, applied.captured)

        self.turn = self.turn.opponent
        self.status = applied.status_before
        logger.debug("took back %s", move)
        return self

    def render(self) -> list[list[str]]:
        """One glyph per square (row 0 first). Drawing it is up to the presentation layer."""
        return [list(row) for row in self.board.to_rows()]

    def to_model(self) -> GameModel:
        """Encode into a format the Service layer uses"""
        return GameModel(
            rows=self.board.to_rows(),
            turn=self.turn.value,
            status=self.status.value,
            moves=[
                (
                    (m.source.row, m.source.col),
                    (m.destination.row, m.destination.col),
                )
                for m in self.moves
            ],
            material={side.value: points for side, points in self.board.material().items()},
        )

    # -- PRIVATE HELPERS ---
    def _position_key(self) -> Hashable:
        return self.board.placement_key(), self.turn

    def _evaluate_status(self) -> Status:
        """
        The side to move is either:
        - in check and cannot move: checkmate
        - not in check and cannot move: stalemate
        - in the same position for the n-th time: draw
        - in check / free to move otherwise
        """
        in_check = is_in_check(self.board, self.turn)
        can_move = has_legal_move(self.board, self.turn)

        if in_check and not can_move:
            return Status.CHECKMATE
        if not can_move:
            return Status.STALEMATE
        if self._seen[self._position_key()] >= self.repetition_limit:
            return Status.DRAW_REPETITION
        return Status.CHECK if in_check else Status.TO_MOVE

    def _change_status(self, new_status: Status) -> None:
        """Called after the turn flipped, so any status but TO_MOVE is news (a check answered by a check included)"""
        if new_status != Status.TO_MOVE:
            logger.info("%s: %s", self.turn, new_status)
        self.status = new_status


# --- MODULE LEVEL API ---
def new_game() -> GameState:
    return GameState.new_game()


def legal_moves_for(state: GameState, square: Coordinate) -> list[Coordinate]:
    return state.legal_moves_for(square)


def apply(state: GameState, move: Move) -> GameState:
    return state.apply(move)


def render(state: GameState) -> list[list[str]]:
    return state.render()
