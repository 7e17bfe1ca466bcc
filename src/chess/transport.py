"""
Carrying a game inside a chat message.

The game travels as a URL whose query string holds the compact form and the number of moves played so far:

wolfwhalechess://game?state=rnbqkbnr%2Fpppppppp%2F8%2F8%2F4P3%2F8%2FPPPP1PPP%2FRNBQKBNR+b&moves=1

Scheme, host and parameter names come from the Settings.
"""

import logging
from typing import Optional
from urllib.parse import parse_qs, urlencode, urlsplit

from src.chess.fen import CompactState
from src.chess.game import GameState, status_text
from src.core.config import Settings, get_settings
from src.core.exceptions import InvalidCompactFormError
from src.core.models import GameModel

logger = logging.getLogger(__name__)


def game_to_model(state: GameState) -> GameModel:
    return GameModel(state=state.to_compact_form(), move_count=len(state.move_history))


def model_to_url(model: GameModel, settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    query = urlencode(
        {settings.state_param: model.state, settings.moves_param: model.move_count}
    )
    return f"{settings.url_scheme}://{settings.url_host}?{query}"


def url_to_model(url: str, settings: Optional[Settings] = None) -> Optional[GameModel]:
    """
    Decode the query string of a message URL.
    ---

    Returns None if the state parameter is missing, the move count is not a non-negative integer,
    or the state is not a valid compact form. A missing move count is read as 0.
    """
    settings = settings or get_settings()
    query = parse_qs(urlsplit(url).query)

    states = query.get(settings.state_param)
    if not states:
        logger.warning("Message URL carries no %r parameter: %s", settings.state_param, url)
        return None
    state = states[0]

    try:
        CompactState.from_fen(state)
    except InvalidCompactFormError as exc:
        logger.warning("Message URL carries an undecodable state: %s", exc)
        return None

    move_count_str = query.get(settings.moves_param, ["0"])[0]
    if not (move_count_str.isascii() and move_count_str.isdecimal()):
        logger.warning("Message URL carries an invalid move count: %r", move_count_str)
        return None

    return GameModel(state=state, move_count=int(move_count_str))


def game_to_url(state: GameState, settings: Optional[Settings] = None) -> str:
    return model_to_url(game_to_model(state), settings)


def url_to_game(url: str, settings: Optional[Settings] = None) -> Optional[GameState]:
    """Only the position and whose turn it is survive the trip. History and selection start out empty."""
    model = url_to_model(url, settings)
    if model is None:
        return None
    return GameState.from_compact_form(model.state)


def message_caption(state: GameState) -> str:
    """Caption of the message bubble sent after a move. The side that just moved is the one NOT to move now."""
    return f"{state.current_turn.opposite.value.capitalize()} just moved"


def message_subcaption(state: GameState) -> str:
    return status_text(state) if state.is_over else "Your turn!"
