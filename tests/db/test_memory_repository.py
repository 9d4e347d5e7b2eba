"""Unit tests for src/db/memory_repository.py"""

from uuid import uuid4

from src.db.memory_repository import InMemoryGameRepository
from src.rules.game import GameState
from src.rules.geometry import Coordinate
from src.rules.moves import Move


def test_create_game() -> None:
    repo = InMemoryGameRepository()
    game = GameState.new_game()
    game_id = repo.create_game(game)
    assert repo.get_game(game_id) is game
    assert len(repo) == 1


def test_ids_are_unique() -> None:
    repo = InMemoryGameRepository()
    ids = {repo.create_game(GameState.new_game()) for _ in range(5)}
    assert len(ids) == 5


def test_get_unknown_game() -> None:
    """Should return None if ID does not match anything. NOTE with an empty repository, any id is a valid test case."""
    repo = InMemoryGameRepository()
    assert repo.get_game(uuid4()) is None

    repo.create_game(GameState.new_game())
    assert repo.get_game(uuid4()) is None


def test_update_game() -> None:
    repo = InMemoryGameRepository()
    game_id = repo.create_game(GameState.new_game())

    updated = GameState.new_game().apply(Move(Coordinate(1, 4), Coordinate(3, 4)))
    assert repo.update_game(game_id, updated) is updated
    assert repo.get_game(game_id) is updated


def test_update_unknown_game() -> None:
    repo = InMemoryGameRepository()
    assert repo.update_game(uuid4(), GameState.new_game()) is None
    assert len(repo) == 0


def test_delete_game() -> None:
    repo = InMemoryGameRepository()
    game = GameState.new_game()
    game_id = repo.create_game(game)

    assert repo.delete_game(game_id) is game
    assert repo.get_game(game_id) is None
    # deleting twice is not an error
    assert repo.delete_game(game_id) is None
