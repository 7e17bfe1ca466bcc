"""
Application configuration.

Settings are read from environment variables prefixed with MESSAGE_CHESS_ (or a .env.chess file),
ex. MESSAGE_CHESS_URL_SCHEME=mychess
"""

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MESSAGE_CHESS_",
        env_file=".env.chess",
        env_file_encoding="utf-8",
    )

    # Message URL layout: <scheme>://<host>?<state_param>=...&<moves_param>=...
    url_scheme: str = "wolfwhalechess"
    url_host: str = "game"
    state_param: str = "state"
    moves_param: str = "moves"

    log_level: str = "WARNING"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Hosts call this once at startup. The library itself never configures handlers on import."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
