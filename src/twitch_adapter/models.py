"""
Domain objects mapped from Twitch API JSON documents
"""

from datetime import datetime
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .identity import IdEquality
from .proxy import LazyReference
from .status_mapper import StatusMapper


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp such as '2013-06-05T22:58:47Z'"""
    if not value:
        return None
    return datetime.fromisoformat(value.replace('Z', '+00:00'))


@dataclass
class Images:
    """Set of image URLs for one piece of artwork"""
    large_url: Optional[str] = None
    medium_url: Optional[str] = None
    small_url: Optional[str] = None
    template_url: Optional[str] = None

    @classmethod
    def from_json(cls, data: Optional[Dict[str, Any]]) -> 'Images':
        data = data or {}
        return cls(
            large_url=data.get('large'),
            medium_url=data.get('medium'),
            small_url=data.get('small'),
            template_url=data.get('template'),
        )

    def url(self, width: int, height: int) -> Optional[str]:
        """Image URL for a custom size, built from the template"""
        if self.template_url is None:
            return None
        return self.template_url.replace('{width}', str(width)).replace('{height}', str(height))


@dataclass(eq=False)
class Channel(IdEquality):
    """A channel: the page and settings a user broadcasts through"""
    id: int
    name: str
    display_name: Optional[str] = None
    status: Optional[str] = None
    game_name: Optional[str] = None
    url: Optional[str] = None
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None
    background_url: Optional[str] = None
    video_banner_url: Optional[str] = None
    mature: bool = False
    stream_delay_sec: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    client: Any = field(default=None, repr=False)

    @classmethod
    def from_json(cls, data: Dict[str, Any], client: Any = None) -> 'Channel':
        return cls(
            id=data['_id'],
            name=data['name'],
            display_name=data.get('display_name'),
            status=data.get('status'),
            game_name=data.get('game'),
            url=data.get('url'),
            logo_url=data.get('logo'),
            banner_url=data.get('banner'),
            background_url=data.get('background'),
            video_banner_url=data.get('video_banner'),
            mature=bool(data.get('mature') or False),
            stream_delay_sec=data.get('delay'),
            created_at=parse_timestamp(data.get('created_at')),
            updated_at=parse_timestamp(data.get('updated_at')),
            client=client,
        )

    def stream(self) -> Optional['Stream']:
        """The live stream on this channel, or None when offline"""
        return self.client.streams.get(self.name)

    def is_streaming(self) -> bool:
        return self.stream() is not None

    def followers(self, limit: Optional[int] = None, offset: int = 0, on_item=None) -> Optional[List['User']]:
        """Users following this channel; this set can be very large, so consider a limit"""
        return self.client.accumulator.accumulate(
            path=f"channels/{self.name}/follows",
            json_key='follows',
            sub_json='user',
            create=lambda data: User.from_json(data, self.client),
            limit=limit,
            offset=offset,
            on_item=on_item,
        )

    def videos(self, limit: Optional[int] = None, offset: int = 0, broadcasts: bool = False,
               on_item=None) -> Optional[List['Video']]:
        """Highlights (default) or past broadcasts recorded on this channel"""
        return self.client.accumulator.accumulate(
            path=f"channels/{self.name}/videos",
            params={'broadcasts': str(broadcasts).lower()},
            json_key='videos',
            create=lambda data: Video.from_json(data, self.client),
            limit=limit,
            offset=offset,
            on_item=on_item,
        )

    def teams(self) -> List['Team']:
        json = self.client.connection.get(f"channels/{self.name}/teams")
        return [Team.from_json(team_json, self.client) for team_json in json.get('teams', [])]


@dataclass(eq=False)
class Stream(IdEquality):
    """A live broadcast on a channel"""
    id: int
    name: Optional[str] = None
    broadcaster: Optional[str] = None
    game_name: Optional[str] = None
    viewer_count: Optional[int] = None
    preview_url: Optional[str] = None
    channel: Optional[Channel] = None
    client: Any = field(default=None, repr=False)

    @classmethod
    def from_json(cls, data: Dict[str, Any], client: Any = None) -> 'Stream':
        channel_json = data.get('channel')
        return cls(
            id=data['_id'],
            name=data.get('name'),
            broadcaster=data.get('broadcaster'),
            game_name=data.get('game'),
            viewer_count=data.get('viewers'),
            preview_url=data.get('preview'),
            channel=Channel.from_json(channel_json, client) if channel_json else None,
            client=client,
        )


@dataclass(eq=False)
class User(IdEquality):
    """A Twitch account"""
    id: int
    name: str
    display_name: Optional[str] = None
    logo_url: Optional[str] = None
    staff: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    client: Any = field(default=None, repr=False)

    @classmethod
    def from_json(cls, data: Dict[str, Any], client: Any = None) -> 'User':
        return cls(
            id=data['_id'],
            name=data['name'],
            display_name=data.get('display_name'),
            logo_url=data.get('logo'),
            staff=bool(data.get('staff') or False),
            created_at=parse_timestamp(data.get('created_at')),
            updated_at=parse_timestamp(data.get('updated_at')),
            client=client,
        )

    def channel(self) -> LazyReference:
        """This user's channel; the channel is only fetched when a non-name field is read"""
        return LazyReference(
            {'name': self.name, 'display_name': self.display_name},
            lambda: self.client.channels.get(self.name),
            target_type=Channel,
        )

    def following(self, limit: Optional[int] = None, offset: int = 0, on_item=None) -> Optional[List[Channel]]:
        """Channels this user follows"""
        return self.client.accumulator.accumulate(
            path=f"users/{self.name}/follows/channels",
            json_key='follows',
            sub_json='channel',
            create=lambda data: Channel.from_json(data, self.client),
            limit=limit,
            offset=offset,
            on_item=on_item,
        )

    def is_following(self, channel_name: str) -> bool:
        def check() -> bool:
            self.client.connection.get(f"users/{self.name}/follows/channels/{channel_name}")
            return True

        return StatusMapper.map({404: False}, check)


@dataclass(eq=False)
class Game(IdEquality):
    """A game category, as listed among the top games"""
    id: int
    name: str
    giantbomb_id: Optional[int] = None
    box_images: Images = field(default_factory=Images)
    logo_images: Images = field(default_factory=Images)
    channel_count: Optional[int] = None
    viewer_count: Optional[int] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> 'Game':
        game = data['game']
        return cls(
            id=game['_id'],
            name=game['name'],
            giantbomb_id=game.get('giantbomb_id'),
            box_images=Images.from_json(game.get('box')),
            logo_images=Images.from_json(game.get('logo')),
            channel_count=data.get('channels'),
            viewer_count=data.get('viewers'),
        )


@dataclass(eq=False)
class GameSuggestion(IdEquality):
    """A game returned by a name search"""
    id: int
    name: str
    giantbomb_id: Optional[int] = None
    popularity: Optional[int] = None
    box_images: Images = field(default_factory=Images)
    logo_images: Images = field(default_factory=Images)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> 'GameSuggestion':
        return cls(
            id=data['_id'],
            name=data['name'],
            giantbomb_id=data.get('giantbomb_id'),
            popularity=data.get('popularity'),
            box_images=Images.from_json(data.get('box')),
            logo_images=Images.from_json(data.get('logo')),
        )


@dataclass(eq=False)
class Team(IdEquality):
    """A group of channels"""
    id: int
    name: str
    display_name: Optional[str] = None
    info: Optional[str] = None
    background_url: Optional[str] = None
    banner_url: Optional[str] = None
    logo_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    client: Any = field(default=None, repr=False)

    @classmethod
    def from_json(cls, data: Dict[str, Any], client: Any = None) -> 'Team':
        return cls(
            id=data['_id'],
            name=data['name'],
            display_name=data.get('display_name'),
            info=data.get('info'),
            background_url=data.get('background'),
            banner_url=data.get('banner'),
            logo_url=data.get('logo'),
            created_at=parse_timestamp(data.get('created_at')),
            updated_at=parse_timestamp(data.get('updated_at')),
            client=client,
        )


@dataclass(eq=False)
class Video(IdEquality):
    """A past broadcast or highlight owned by a channel"""
    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    recorded_at: Optional[datetime] = None
    url: Optional[str] = None
    view_count: Optional[int] = None
    length_sec: Optional[int] = None
    game_name: Optional[str] = None
    preview_url: Optional[str] = None
    # Only name and display_name are known without another request
    channel: Optional[LazyReference] = None
    client: Any = field(default=None, repr=False)

    @classmethod
    def from_json(cls, data: Dict[str, Any], client: Any = None) -> 'Video':
        channel_json = data.get('channel') or {}
        channel_name = channel_json.get('name')
        channel = None
        if channel_name:
            channel = LazyReference(
                {'name': channel_name, 'display_name': channel_json.get('display_name')},
                lambda: client.channels.get(channel_name),
                target_type=Channel,
            )

        return cls(
            id=data['_id'] if '_id' in data else data['id'],
            title=data.get('title'),
            description=data.get('description'),
            recorded_at=parse_timestamp(data.get('recorded_at')),
            url=data.get('url'),
            view_count=data.get('views'),
            length_sec=data.get('length'),
            game_name=data.get('game'),
            preview_url=data.get('preview'),
            channel=channel,
            client=client,
        )
