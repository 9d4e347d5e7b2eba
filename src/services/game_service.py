"""Orchestration of communication from API models to the rules engine and the game store (and the reverse direction)."""

import logging
from threading import Lock
from typing import Self
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    UndoRequest,
)
from src.core.config import EngineSettings, configure_logging
from src.core.exceptions import GameError, RepositoryError
from src.db.repository import GameRepository
from src.rules.board import Board
from src.rules.game import GameState
from src.rules.geometry import Coordinate
from src.rules.moves import Move

logger = logging.getLogger(__name__)


class GameService:
    """
    Orchestration of layers for the rules engine.

    Every game gets its own lock: moves on one game are applied one at a time, different games do not wait for each other.
    """

    def __init__(
        self, repository: GameRepository, settings: EngineSettings | None = None
    ) -> None:
        self.repo = repository
        self.settings = settings or EngineSettings()
        self._locks: dict[UUID, Lock] = {}
        self._locks_guard = Lock()

    @classmethod
    def from_env(cls, repository: GameRepository) -> Self:
        """Entry point for a hosting process: settings from the environment, logging configured from them."""
        settings = EngineSettings.from_env()
        configure_logging(settings)
        return cls(repository, settings)

    # -- API logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Create a game in the standard starting position, or in the position drawn in the request."""
        if request.diagram is None:
            game = GameState.new_game(repetition_limit=self.settings.repetition_limit)
        else:
            game = GameState.from_board(
                Board.from_diagram(request.diagram),
                turn=request.turn,
                repetition_limit=self.settings.repetition_limit,
            )
        game_id = self.repo.create_game(game)
        logger.info("created game %s", game_id)
        return self._create_game_response(game_id, game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """Retrieve current game state."""
        game = self._fetch_game(request.game_id)
        with self._lock_for(request.game_id):
            return self._create_game_response(request.game_id, game)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve the squares the piece on the requested square can move to."""
        game = self._fetch_game(request.game_id)
        with self._lock_for(request.game_id):
            destinations = game.legal_moves_for(Coordinate(*request.square))
        return LegalMovesResponse(
            game_id=request.game_id,
            square=request.square,
            destinations=[(d.row, d.col) for d in destinations],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt. A rejected move leaves the stored game as it was."""
        game = self._fetch_game(request.game_id)
        move = Move(Coordinate(*request.source), Coordinate(*request.destination))

        with self._lock_for(request.game_id):
            try:
                game.apply(move)
            except GameError as error:
                logger.info("game %s rejected %s: %s", request.game_id, move, error)
                raise
            self.repo.update_game(request.game_id, game)
            return self._create_game_response(request.game_id, game)

    def undo_move(self, request: UndoRequest) -> GameResponse:
        """Take back the last move."""
        game = self._fetch_game(request.game_id)
        with self._lock_for(request.game_id):
            game.undo()
            self.repo.update_game(request.game_id, game)
            return self._create_game_response(request.game_id, game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)
        with self._locks_guard:
            self._locks.pop(request.game_id, None)

    # -- Internal helpers --
    def _lock_for(self, game_id: UUID) -> Lock:
        with self._locks_guard:
            return self._locks.setdefault(game_id, Lock())

    def _create_game_response(self, game_id: UUID, game: GameState) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        model = game.to_model()
        return GameResponse(
            game_id=game_id,
            rows=model.rows,
            turn=model.turn,
            status=model.status,
            move_history=model.moves,
            material=model.material,
        )

    def _fetch_game(self, game_id: UUID) -> GameState:
        """Attempt to find the game in the repository and raise error if it fails."""
        game = self.repo.get_game(game_id)
        if game is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game
