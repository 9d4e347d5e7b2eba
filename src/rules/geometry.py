"""
A coordinate on the board + the vector arithmetic the movement rules need

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

# Chess board is always 8x8.
BOARD_SIZE = 8

Vector = tuple[int, int]


@dataclass(frozen=True)
class Coordinate:
    """
    (row, col), both 0-based.

    Row 0 is the back row of the First side; pawns advance along the row axis.
    Off-board coordinates can be constructed (ex. while walking a ray), they are simply not `in_bounds()`.
    """

    row: int
    col: int

    def in_bounds(self) -> bool:
        return (0 <= self.row < BOARD_SIZE) and (0 <= self.col < BOARD_SIZE)

    def offset(self, dr: int, dc: int) -> Coordinate:
        return Coordinate(self.row + dr, self.col + dc)

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


def offset(a: Coordinate, dr: int, dc: int) -> Coordinate:
    """Arithmetic only. No bounds check"""
    return a.offset(dr, dc)


def in_bounds(c: Coordinate) -> bool:
    return c.in_bounds()


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def direction_vector(a: Coordinate, b: Coordinate) -> Vector:
    """Unit step to walk from a towards b. Only meaningful for straight lines (rank, file, diagonal)."""
    return _sign(b.row - a.row), _sign(b.col - a.col)


def squares_between(a: Coordinate, b: Coordinate) -> Iterator[Coordinate]:
    """
    The squares strictly between a and b, walking unit steps along the direction vector.

    NOTE: Callers only use this once they know a and b lie on a straight line. For any other pair
    the walk stops as soon as it would step past b.
    """
    dr, dc = direction_vector(a, b)
    if (dr, dc) == (0, 0):
        return
    steps = max(abs(b.row - a.row), abs(b.col - a.col))
    square = a
    for _ in range(steps - 1):
        square = square.offset(dr, dc)
        yield square


def all_coordinates() -> Iterator[Coordinate]:
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            yield Coordinate(row, col)
