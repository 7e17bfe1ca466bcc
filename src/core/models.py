"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Both the API layer (higher) and the transport/domain layers (lower) use the model defined here to send to/receive from the Service
(Decouples the message URL format and the request models from the GameState the engine works with)
"""

from dataclasses import dataclass


@dataclass
class GameModel:
    """Transport-safe representation of a chess game, as carried inside a chat message."""

    state: str
    move_count: int = 0
