"""Protocol repository (the service does not care where the games live)"""

from typing import Protocol
from uuid import UUID

from src.rules.game import GameState


class GameRepository(Protocol):
    """Storage orchestration"""

    def get_game(self, game_id: UUID) -> GameState | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameState) -> UUID:
        """Store new game and return the newly created game ID."""
        ...

    def update_game(self, game_id: UUID, game: GameState) -> GameState | None:
        """Replace the stored game."""
        ...

    def delete_game(self, game_id: UUID) -> GameState | None:
        """Remove a game's record."""
        ...
