"""Implementation of (Game)Repository keeping live GameState objects in a dictionary"""

from uuid import UUID, uuid4

from src.rules.game import GameState


class InMemoryGameRepository:
    """Games only live as long as the process. There is no file format involved."""

    def __init__(self) -> None:
        self._games: dict[UUID, GameState] = {}

    def get_game(self, game_id: UUID) -> GameState | None:
        """Get game by ID, if record exists."""
        return self._games.get(game_id)

    def create_game(self, game: GameState) -> UUID:
        """Store new game and return the newly created game ID."""
        new_id = uuid4()
        self._games[new_id] = game
        return new_id

    def update_game(self, game_id: UUID, game: GameState) -> GameState | None:
        """Replace the stored game."""
        if game_id not in self._games:
            return None
        self._games[game_id] = game
        return game

    def delete_game(self, game_id: UUID) -> GameState | None:
        """Remove a game's record."""
        return self._games.pop(game_id, None)

    def __len__(self) -> int:
        return len(self._games)
