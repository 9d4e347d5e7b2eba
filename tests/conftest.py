"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.core.shared_types import Side
from src.rules.board import Board
from src.rules.game import GameState

EMPTY_ROW = "........"


@pytest.fixture
def board_from() -> Callable[[dict[int, str]], Board]:
    """
    Call the inner function with only the rows that are not empty: {row index: glyphs}.
    Saves writing out all 8 rows for every position in the tests.
    """

    def _create_board(rows: dict[int, str]) -> Board:
        diagram = [rows.get(row_idx, EMPTY_ROW) for row_idx in range(8)]
        return Board.from_diagram(diagram)

    return _create_board


@pytest.fixture
def kings_only_board(board_from: Callable[[dict[int, str]], Board]) -> Board:
    """
    Create a board with only kings on their canonical starting squares.
    Because making a move involves inferring if a king is under attack, moves cannot be played on a board without one of the kings.
    """
    return board_from({0: "....K...", 7: "....k..."})


@pytest.fixture
def game_from(
    board_from: Callable[[dict[int, str]], Board],
) -> Callable[[dict[int, str], Side], GameState]:
    """Same as board_from, but wrapped into a game with the given side to move"""

    def _create_game(rows: dict[int, str], turn: Side = Side.FIRST) -> GameState:
        return GameState.from_board(board_from(rows), turn=turn)

    return _create_game
