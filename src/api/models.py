"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.chess.fen import CompactState
from src.chess.pieces import Color
from src.chess.square import BOARD_DIMENSIONS, FILE_NAMES
from src.core.exceptions import InvalidCompactFormError, InvalidRequestError
from src.core.shared_types import Status


def _validate_compact_form(value: str) -> str:
    try:
        CompactState.from_fen(value)
    except InvalidCompactFormError as exc:
        raise InvalidRequestError(f"Cannot interpret state: {value!r}. {exc}") from exc
    return value


def _is_algebraic_notation(value: str) -> bool:
    if len(value) != 2:
        return False

    file_character, rank_character = value[0], value[1]
    if file_character not in FILE_NAMES[: BOARD_DIMENSIONS[1]]:
        return False
    if not (rank_character.isdigit() and 1 <= int(rank_character) <= BOARD_DIMENSIONS[0]):
        return False
    return True


def _validate_square(value: str) -> str:
    if not _is_algebraic_notation(value):
        raise InvalidRequestError(
            f"Cannot interpret {value!r} as a valid square name."
        )
    return value


def _validate_move_count(value: int) -> int:
    if value < 0:
        raise InvalidRequestError(f"Move count cannot be negative: {value}")
    return value


# --- REQUEST MODELS ---
class OpenGameRequest(BaseModel):
    """The URL of an incoming chat message"""

    url: str


class LegalMovesRequest(BaseModel):
    state: str
    square: str

    @field_validator("state")
    @classmethod
    def validate_state(cls, value: str) -> str:
        return _validate_compact_form(value)

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)


class MoveRequest(BaseModel):
    state: str
    move_count: int = 0
    from_square: str
    to_square: str

    @field_validator("state")
    @classmethod
    def validate_state(cls, value: str) -> str:
        return _validate_compact_form(value)

    @field_validator("move_count")
    @classmethod
    def validate_move_count(cls, value: int) -> int:
        return _validate_move_count(value)

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)


class ResignRequest(BaseModel):
    state: str
    move_count: int = 0

    @field_validator("state")
    @classmethod
    def validate_state(cls, value: str) -> str:
        return _validate_compact_form(value)

    @field_validator("move_count")
    @classmethod
    def validate_move_count(cls, value: int) -> int:
        return _validate_move_count(value)


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    state: str
    move_count: int
    url: str
    turn: Color
    status: Status
    status_text: str
    caption: str
    subcaption: str
    last_move: Optional[str] = None
    winner: Optional[Color] = None


class LegalMovesResponse(BaseModel):
    state: str
    square: str
    legal_moves: list[str]
