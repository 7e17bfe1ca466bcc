"""Exceptions raised across the layers. Everything derives from GameError so callers can catch the whole family at once."""


class GameError(Exception):
    """Base class for all errors raised by this package."""


class InvalidCompactFormError(GameError):
    """Text cannot be interpreted as a compact board encoding."""


class InvalidRequestError(GameError):
    """Incoming request data does not have the expected shape."""


class IllegalMoveError(GameError):
    """The requested move is not in the legal move set of the side to move."""


class GameStateError(GameError):
    """The game is in a state that does not allow the requested action (ex. it already ended)."""
