"""
TwitchClient module wiring the connection engine to the resource queries
"""

import logging
from typing import Optional

import requests

from .accumulator import Accumulator
from .config_loader import APIConfig, ConfigLoader
from .http_client import HTTPClient
from .pagination_strategy import Paginator
from .resources import Channels, Streams, Users, Games, Teams, Videos

# The teams endpoint returns at most 25 items per page
TEAMS_MAX_PAGE_SIZE = 25


class TwitchClient:
    """
    Entry point for querying the Twitch API

    Several clients with separate configurations can live in one process.
    """

    def __init__(self, config: Optional[APIConfig] = None,
                 session: Optional[requests.Session] = None):
        self.config = config or ConfigLoader.default_config()

        level = self.config.logging.get('level')
        if level:
            logging.getLogger('twitch_adapter').setLevel(level)

        self.connection = HTTPClient(self.config, session=session)
        self.paginator = Paginator(self.connection)
        self.accumulator = Accumulator(self.paginator)
        self.team_accumulator = Accumulator(
            self.paginator, max_page_size=min(TEAMS_MAX_PAGE_SIZE, self.config.max_page_size)
        )

        self.channels = Channels(self)
        self.streams = Streams(self)
        self.users = Users(self)
        self.games = Games(self)
        self.teams = Teams(self)
        self.videos = Videos(self)

    def close(self) -> None:
        self.connection.close_connection()

    def __enter__(self) -> 'TwitchClient':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


# Process-wide default client, created on first use; no teardown is required
_default_client: Optional[TwitchClient] = None


def configure(config: APIConfig) -> TwitchClient:
    """Replace the process-wide default client with one using config"""
    global _default_client
    _default_client = TwitchClient(config)
    return _default_client


def default_client() -> TwitchClient:
    """Return the process-wide default client, creating it with default settings if needed"""
    global _default_client
    if _default_client is None:
        _default_client = TwitchClient()
    return _default_client
