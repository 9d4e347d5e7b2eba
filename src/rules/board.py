"""The Game board holds the position (in chess: the configuration of pieces on the board)"""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Iterable, Optional, Self

from src.core.exceptions import GameStateError, InvalidRequestError, OutOfBoundsError
from src.core.shared_types import PieceKind, Side
from src.rules.geometry import BOARD_SIZE, Coordinate, all_coordinates, squares_between
from src.rules.pieces import EMPTY_GLYPH, Piece

# Back row, from column 0 to column 7. Row 0 holds the First side, row 7 the Second side.
BACK_ROW: list[PieceKind] = [
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
]

STARTING_DIAGRAM: list[str] = [
    "RNBQKBNR",
    "PPPPPPPP",
    "........",
    "........",
    "........",
    "........",
    "pppppppp",
    "rnbqkbnr",
]

# characters accepted as an empty square in a diagram
EMPTY_MARKERS = {".", EMPTY_GLYPH}


@dataclass
class Board:
    """
    Squares without a piece are simply not in `position`.
    """

    position: dict[Coordinate, Piece] = field(default_factory=dict)

    @classmethod
    def starting_position(cls) -> Self:
        position: dict[Coordinate, Piece] = {}
        for col, kind in enumerate(BACK_ROW):
            position[Coordinate(0, col)] = Piece(kind, Side.FIRST)
            position[Coordinate(1, col)] = Piece(PieceKind.PAWN, Side.FIRST)
            position[Coordinate(BOARD_SIZE - 2, col)] = Piece(
                PieceKind.PAWN, Side.SECOND
            )
            position[Coordinate(BOARD_SIZE - 1, col)] = Piece(kind, Side.SECOND)
        return cls(position)

    @classmethod
    def from_diagram(cls, rows: Iterable[str]) -> Self:
        """Construct a board from one string of glyphs per row.

        The first string is row 0 (the First side's back row), the first character of each string is column 0.
        Upper case letters are pieces of the First side, lower case letters of the Second side, "." (or a space) is empty.
        ex. standard starting position: see STARTING_DIAGRAM

        NOTE: pawns that are not on their starting row are marked as having moved already.
        """
        rows = list(rows)
        if len(rows) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in rows):
            raise InvalidRequestError(
                f"Diagram must have {BOARD_SIZE} rows of {BOARD_SIZE} characters. Got: {rows}"
            )

        position: dict[Coordinate, Piece] = {}
        for row_idx, row in enumerate(rows):
            for col_idx, character in enumerate(row):
                if character in EMPTY_MARKERS:
                    continue
                try:
                    piece = Piece.from_glyph(character)
                except KeyError:
                    raise InvalidRequestError(
                        f"Unknown piece {character!r} in diagram row {row_idx}"
                    ) from None
                if piece.kind == PieceKind.PAWN:
                    starting_row = 1 if piece.side == Side.FIRST else BOARD_SIZE - 2
                    piece.has_moved = row_idx != starting_row
                position[Coordinate(row_idx, col_idx)] = piece
        return cls(position)

    def to_rows(self) -> list[str]:
        """One string of glyphs per row (the reverse of `from_diagram`, using EMPTY_GLYPH for empty squares)"""
        return [
            "".join(
                self._glyph(Coordinate(row, col)) for col in range(BOARD_SIZE)
            )
            for row in range(BOARD_SIZE)
        ]

    def _glyph(self, c: Coordinate) -> str:
        piece = self.position.get(c)
        return piece.glyph if piece else EMPTY_GLYPH

    # --- SQUARE ACCESS ---
    def get(self, c: Coordinate) -> Optional[Piece]:
        if not c.in_bounds():
            raise OutOfBoundsError(f"Square {c} is not on the board.")
        return self.position.get(c)

    def is_empty(self, c: Coordinate) -> bool:
        return self.get(c) is None

    def place(self, c: Coordinate, piece: Piece) -> None:
        if not c.in_bounds():
            raise OutOfBoundsError(f"Cannot place {piece} on {c}: not on the board.")
        self.position[c] = piece

    def remove(self, c: Coordinate) -> Optional[Piece]:
        if not c.in_bounds():
            raise OutOfBoundsError(f"Square {c} is not on the board.")
        return self.position.pop(c, None)

    def move_piece(self, source: Coordinate, destination: Coordinate) -> Optional[Piece]:
        """Update the position on the board. Returns whatever was standing on the destination (if anything)."""
        piece = self.remove(source)
        if piece is None:
            raise GameStateError(f"No piece on {source} to move.")
        captured = self.remove(destination)
        self.place(destination, piece)
        return captured

    # --- QUERIES ---
    def is_path_clear(self, a: Coordinate, b: Coordinate) -> bool:
        """
        Walk from a to b (both excluded) and stop at the first occupied square.

        NOTE: only meaningful if a and b are on a straight line. The shape rules establish that before calling this.
        """
        return all(self.position.get(square) is None for square in squares_between(a, b))

    def find_king(self, side: Side) -> Coordinate:
        for square, piece in self.position.items():
            if piece.kind == PieceKind.KING and piece.side == side:
                return square
        raise GameStateError(f"No king of side {side} on the board.")

    def pieces(self, side: Side) -> list[tuple[Coordinate, Piece]]:
        """All (square, piece) pairs of a side, in board order"""
        return [
            (square, self.position[square])
            for square in all_coordinates()
            if square in self.position and self.position[square].side == side
        ]

    def material(self) -> dict[Side, int]:
        """Tally the points of material each player has on the board"""
        return {
            side: sum(piece.points for _, piece in self.pieces(side)) for side in Side
        }

    def placement_key(self) -> frozenset[tuple[Coordinate, PieceKind, Side]]:
        """What counts as 'the same position' for repetitions (ignores has_moved)"""
        return frozenset(
            (square, piece.kind, piece.side) for square, piece in self.position.items()
        )

    def copy(self) -> Self:
        return deepcopy(self)
