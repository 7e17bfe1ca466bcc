"""Orchestration of communication from the chat extension to the game logic (and the reverse direction).

There is no persistence: the game travels inside the messages. Every call rebuilds a GameState from the compact form
it is handed, works on it, and returns a response carrying the new compact form and the URL for the outgoing message.
"""

import logging
from typing import Optional

from src.api.models import (
    GameResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    OpenGameRequest,
    ResignRequest,
)
from src.chess.game import GameState, status_text
from src.chess.square import Square
from src.chess.transport import (
    message_caption,
    message_subcaption,
    model_to_url,
    url_to_model,
)
from src.core.config import Settings, get_settings
from src.core.exceptions import GameStateError, IllegalMoveError, InvalidCompactFormError
from src.core.models import GameModel

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for a chess game played over messages."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

    # -- Extension entry points ---
    def new_game(self) -> GameResponse:
        """Player tapped 'New Game'."""
        return self._create_game_response(GameState.new_game(), move_count=0)

    def open_game(self, request: OpenGameRequest) -> GameResponse:
        """
        A chat message got selected.
        ----
        If the message cannot be decoded, start from the initial position instead of working with a partial board.
        """
        model = url_to_model(request.url, self.settings)
        if model is None:
            logger.warning("Falling back to a new game for message: %s", request.url)
            return self.new_game()

        game = self._load_game(model.state)
        return self._create_game_response(game, model.move_count)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves for the piece on the requested square."""
        game = self._load_game(request.state)
        self._assert_in_progress(game)

        legal_moves = game.legal_moves(Square.from_algebraic(request.square))
        return LegalMovesResponse(
            state=request.state,
            square=request.square,
            legal_moves=sorted(square.to_algebraic() for square in legal_moves),
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt."""
        game = self._load_game(request.state)
        self._assert_in_progress(game)

        from_square = Square.from_algebraic(request.from_square)
        to_square = Square.from_algebraic(request.to_square)

        # The engine silently ignores illegal moves. At this boundary the caller should hear about it.
        if to_square not in game.legal_moves(from_square):
            raise IllegalMoveError(
                f"Move not allowed: {request.from_square}{request.to_square}"
            )

        game.execute_move(from_square, to_square)
        return self._create_game_response(game, request.move_count + 1)

    def resign(self, request: ResignRequest) -> GameResponse:
        """The side to move gives up."""
        game = self._load_game(request.state)
        self._assert_in_progress(game)

        game.resign()
        return self._create_game_response(game, request.move_count)

    # -- Internal helpers --
    def _load_game(self, state: str) -> GameState:
        game = GameState.from_compact_form(state)
        if game is None:
            raise InvalidCompactFormError(f"Cannot load game from state: {state!r}")
        return game

    def _assert_in_progress(self, game: GameState) -> None:
        if game.is_over:
            raise GameStateError(f"Game is not in progress. status: {game.status}")

    def _create_game_response(self, game: GameState, move_count: int) -> GameResponse:
        """Convert a GameState into a GameResponse. The move count is carried along since the history itself is not transmitted."""
        model = GameModel(state=game.to_compact_form(), move_count=move_count)
        last_move = game.last_move
        return GameResponse(
            state=model.state,
            move_count=model.move_count,
            url=model_to_url(model, self.settings),
            turn=game.current_turn,
            status=game.status,
            status_text=status_text(game),
            caption=message_caption(game),
            subcaption=message_subcaption(game),
            last_move=last_move.describe() if last_move else None,
            winner=game.winner,
        )

