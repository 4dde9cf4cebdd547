"""
Query objects for each Twitch resource, built on the connection engine
"""

from typing import Any, Callable, Dict, List, Optional

from .errors import InvalidArgumentError
from .models import Channel, Stream, User, Game, GameSuggestion, Team, Video
from .status_mapper import StatusMapper


class Resource:
    """Base class giving access to the client's connection and accumulator"""

    def __init__(self, client: Any):
        self.client = client

    @property
    def connection(self):
        return self.client.connection

    @property
    def accumulator(self):
        return self.client.accumulator

    def _get_or_none(self, path: str, build: Callable[[Dict[str, Any]], Any]) -> Any:
        """Fetch a single resource, mapping a 404 response to None"""
        return StatusMapper.map({404: None}, lambda: build(self.connection.get(path)))


class Channels(Resource):

    def get(self, name: str) -> Optional[Channel]:
        """Get a channel by name, or None if it does not exist"""
        return self._get_or_none(f"channels/{name}",
                                 lambda json: Channel.from_json(json, self.client))


class Streams(Resource):

    def get(self, name: str) -> Optional[Stream]:
        """Get the live stream for a channel, or None when offline or unknown"""
        def build(json: Dict[str, Any]) -> Optional[Stream]:
            stream_json = json.get('stream')
            return Stream.from_json(stream_json, self.client) if stream_json else None

        return self._get_or_none(f"streams/{name}", build)

    def all(self, limit: Optional[int] = None, offset: int = 0, on_item=None) -> Optional[List[Stream]]:
        """All live streams, most viewers first"""
        return self._accumulate_streams({}, limit, offset, on_item)

    def find(self, game: Optional[str] = None, channel: Optional[List[str]] = None,
             embeddable: Optional[bool] = None, hls: Optional[bool] = None,
             limit: Optional[int] = None, offset: int = 0, on_item=None) -> Optional[List[Stream]]:
        """
        Live streams matching the given criteria

        Raises:
            InvalidArgumentError: If no criteria other than limit/offset is given
        """
        params: Dict[str, Any] = {}
        if game:
            params['game'] = game
        if channel:
            params['channel'] = ','.join(channel)
        if embeddable is not None:
            params['embeddable'] = str(embeddable).lower()
        if hls is not None:
            params['hls'] = str(hls).lower()

        if not params:
            raise InvalidArgumentError('find requires at least one of game, channel, embeddable, hls')

        return self._accumulate_streams(params, limit, offset, on_item)

    def featured(self, limit: Optional[int] = None, offset: int = 0, on_item=None) -> Optional[List[Stream]]:
        """Streams featured on the Twitch front page"""
        return self.accumulator.accumulate(
            path='streams/featured',
            json_key='featured',
            sub_json='stream',
            create=lambda json: Stream.from_json(json, self.client),
            limit=limit,
            offset=offset,
            on_item=on_item,
        )

    def _accumulate_streams(self, params, limit, offset, on_item):
        return self.accumulator.accumulate(
            path='streams',
            params=params,
            json_key='streams',
            create=lambda json: Stream.from_json(json, self.client),
            limit=limit,
            offset=offset,
            on_item=on_item,
        )


class Users(Resource):

    def get(self, name: str) -> Optional[User]:
        """Get a user by name, or None if it does not exist"""
        return self._get_or_none(f"users/{name}",
                                 lambda json: User.from_json(json, self.client))


class Games(Resource):

    def top(self, hls: Optional[bool] = None, limit: Optional[int] = None, offset: int = 0,
            on_item=None) -> Optional[List[Game]]:
        """Games with the most current viewers, most popular first"""
        params: Dict[str, Any] = {}
        if hls is not None:
            params['hls'] = str(hls).lower()

        return self.accumulator.accumulate(
            path='games/top',
            params=params,
            json_key='top',
            create=Game.from_json,
            limit=limit,
            offset=offset,
            on_item=on_item,
        )

    def find(self, name: str, live: bool = False) -> List[GameSuggestion]:
        """
        Games with names similar to the search term

        Raises:
            InvalidArgumentError: If name is empty
        """
        if not name:
            raise InvalidArgumentError('name')

        json = self.connection.get('search/games', {
            'query': name,
            'type': 'suggest',
            'live': str(live).lower(),
        })

        games: List[GameSuggestion] = []
        seen = set()
        for game_json in json.get('games') or []:
            game = GameSuggestion.from_json(game_json)
            if game.id not in seen:
                seen.add(game.id)
                games.append(game)

        return games


class Teams(Resource):

    def get(self, name: str) -> Optional[Team]:
        """Get a team by name, or None if it does not exist"""
        return self._get_or_none(f"teams/{name}",
                                 lambda json: Team.from_json(json, self.client))

    def all(self, limit: Optional[int] = None, offset: int = 0, on_item=None) -> Optional[List[Team]]:
        """All active teams"""
        return self.client.team_accumulator.accumulate(
            path='teams',
            json_key='teams',
            create=lambda json: Team.from_json(json, self.client),
            limit=limit,
            offset=offset,
            on_item=on_item,
        )


class Videos(Resource):

    PERIODS = ('week', 'month', 'all')

    def get(self, video_id: str) -> Optional[Video]:
        """Get a video by id, or None if it does not exist"""
        return self._get_or_none(f"videos/{video_id}",
                                 lambda json: Video.from_json(json, self.client))

    def top(self, game: Optional[str] = None, period: str = 'week', limit: Optional[int] = None,
            offset: int = 0, on_item=None) -> Optional[List[Video]]:
        """
        Most viewed videos, optionally for a single game

        Raises:
            InvalidArgumentError: If period is not one of week, month, all
        """
        if period not in self.PERIODS:
            raise InvalidArgumentError(f"period must be one of {', '.join(self.PERIODS)}")

        params: Dict[str, Any] = {'period': period}
        if game:
            params['game'] = game

        return self.accumulator.accumulate(
            path='videos/top',
            params=params,
            json_key='videos',
            create=lambda json: Video.from_json(json, self.client),
            limit=limit,
            offset=offset,
            on_item=on_item,
        )
