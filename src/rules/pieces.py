"""Defines the types of chess pieces"""

from dataclasses import dataclass, field
from typing import Self

from src.core.shared_types import PieceKind, Side

GLYPH_TO_KIND: dict[str, PieceKind] = {
    "p": PieceKind.PAWN,
    "n": PieceKind.KNIGHT,
    "b": PieceKind.BISHOP,
    "r": PieceKind.ROOK,
    "q": PieceKind.QUEEN,
    "k": PieceKind.KING,
}

KIND_TO_GLYPH: dict[PieceKind, str] = {value: key for key, value in GLYPH_TO_KIND.items()}

EMPTY_GLYPH = " "

PIECE_POINTS: dict[PieceKind, int] = {
    PieceKind.PAWN: 1,
    PieceKind.KNIGHT: 3,
    PieceKind.BISHOP: 3,
    PieceKind.ROOK: 5,
    PieceKind.QUEEN: 9,
}


@dataclass
class Piece:
    kind: PieceKind
    side: Side
    has_moved: bool = False
    points: int = field(init=False, compare=False)

    def __post_init__(self):
        # NOTE: The King's worth is undefined (does not count towards total points)
        self.points = PIECE_POINTS.get(self.kind, 0)

    @classmethod
    def from_glyph(cls, character: str) -> Self:
        # upper case: First side, lower case: Second side
        side = Side.FIRST if character.isupper() else Side.SECOND
        kind = GLYPH_TO_KIND[character.lower()]
        return cls(kind, side)

    @property
    def glyph(self) -> str:
        return (
            KIND_TO_GLYPH[self.kind].upper()
            if self.side == Side.FIRST
            else KIND_TO_GLYPH[self.kind]
        )

    def __str__(self) -> str:
        return f"{self.side} {self.kind}"
