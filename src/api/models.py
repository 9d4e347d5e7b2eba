"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Side, Status
from src.rules.geometry import BOARD_SIZE

SquarePair = tuple[int, int]
GlyphRow = str


def _validate_square(value: SquarePair) -> SquarePair:
    row, col = value
    if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
        raise InvalidRequestError(
            f"Square {value!r} is not on the board (row and column must be in 0..{BOARD_SIZE - 1})."
        )
    return value


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    """Without a diagram, the game starts from the standard position."""

    diagram: Optional[list[GlyphRow]] = None
    turn: Side = Side.FIRST

    @field_validator("diagram")
    @classmethod
    def validate_diagram(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        if value is None:
            return value

        if len(value) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in value):
            raise InvalidRequestError(
                f"Diagram must contain {BOARD_SIZE} rows of {BOARD_SIZE} characters."
            )
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID
    square: SquarePair

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: SquarePair) -> SquarePair:
        return _validate_square(value)


class MoveRequest(BaseModel):
    """
    A move as produced by whatever decoded the player's input.

    NOTE: Only the source must be on the board here. An off-board destination is for the rules engine to reject.
    """

    game_id: UUID
    source: SquarePair
    destination: SquarePair

    @field_validator("source")
    @classmethod
    def validate_source(cls, value: SquarePair) -> SquarePair:
        return _validate_square(value)


class UndoRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    rows: list[GlyphRow]
    turn: Side
    status: Status
    move_history: list[tuple[SquarePair, SquarePair]]
    material: dict[Side, int]


class LegalMovesResponse(BaseModel):
    game_id: UUID
    square: SquarePair
    destinations: list[SquarePair]
